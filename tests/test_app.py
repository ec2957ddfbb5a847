from __future__ import annotations

import pytest

from src.hr_portal.hr_portal.core.exceptions import StoreError
from src.hr_portal.hr_portal.main import create_app

LEAVE = {
    "employee_id": 1,
    "leave_type": "Annual Leave",
    "start_date": "2026-03-02",
    "end_date": "2026-03-06",
    "days_requested": 5,
    "reason": "Family trip",
}


@pytest.fixture
def client(test_settings):
    app = create_app(test_settings)
    yield app.test_client()
    app.extensions["hr_portal"].close()


def test_health(client):
    r = client.get("/api/health")

    assert r.status_code == 200
    assert r.get_json()["health"] == "healthy"


def test_collections(client):
    r = client.get("/api/collections")

    assert "leave_requests" in r.get_json()["collections"]


def test_record_lifecycle(client):
    created = client.post("/api/leave_requests", json=LEAVE)
    assert created.status_code == 201
    record_id = created.get_json()["data"]["id"]

    assert client.get(f"/api/leave_requests/{record_id}").get_json()["data"]["reason"] == "Family trip"
    assert client.get("/api/leave_requests?employee_id=1").get_json()["data"][0]["id"] == record_id

    patched = client.patch(f"/api/leave_requests/{record_id}", json={"status": "approved"})
    assert patched.get_json()["data"]["status"] == "approved"

    assert client.delete(f"/api/leave_requests/{record_id}").status_code == 200
    assert client.get(f"/api/leave_requests/{record_id}").status_code == 404


def test_validation_error_is_400(client):
    r = client.post("/api/leave_requests", json={**LEAVE, "days_requested": -1})

    assert r.status_code == 400
    assert r.get_json()["success"] is False


def test_non_object_body_is_400(client):
    assert client.post("/api/assets", json=[1, 2]).status_code == 400


def test_unknown_collection_is_404(client):
    assert client.get("/api/salaries").status_code == 404


def test_degraded_list_is_still_served(test_settings, monkeypatch):
    app = create_app(test_settings)
    store = app.extensions["hr_portal"].store

    def down(*args, **kwargs):
        raise StoreError("connection refused")

    monkeypatch.setattr(store, "select", down)
    r = app.test_client().get("/api/job_postings")

    body = r.get_json()
    assert r.status_code == 200
    assert body["degraded"] is True
    assert body["data"]


def test_only_id_columns_are_converted_in_filters(client):
    client.post("/api/assets", json={"name": "Laptop", "category": "laptop", "serial_number": "SN-1", "paid": "1"})

    r = client.get("/api/assets?paid=1")

    assert [row["paid"] for row in r.get_json()["data"]] == ["1"]


def test_patch_without_fields_is_400(client):
    record_id = client.post("/api/assets", json={"name": "Laptop", "category": "laptop", "serial_number": "SN-2"}).get_json()["data"]["id"]

    r = client.patch(f"/api/assets/{record_id}", json={"id": record_id})

    assert r.status_code == 400
    assert r.get_json()["error"] == "No fields to update"
