from __future__ import annotations

import json

import httpx
import pytest

from src.hr_portal.hr_portal.core.exceptions import StoreError
from src.hr_portal.hr_portal.discovery.service import SchemaProber
from src.hr_portal.hr_portal.store.rest_store import RestCollectionStore


def _store(handler):
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return RestCollectionStore("https://db.example.test/", "service-key", client=client), client


def test_select_sends_auth_headers_and_filters():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["request"] = request
        return httpx.Response(200, json=[{"id": 1, "email": "a@b.c"}])

    store, _ = _store(handler)
    rows = store.select("profiles", filters={"email": "a@b.c", "active": True}, limit=1)

    request = seen["request"]
    assert rows == [{"id": 1, "email": "a@b.c"}]
    assert request.url.path == "/rest/v1/profiles"
    assert request.headers["apikey"] == "service-key"
    assert request.headers["Authorization"] == "Bearer service-key"
    assert request.url.params["email"] == "eq.a@b.c"
    assert request.url.params["active"] == "eq.true"
    assert request.url.params["limit"] == "1"
    assert request.url.params["select"] == "*"


def test_insert_asks_for_representation_and_returns_row():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "POST"
        assert request.headers["Prefer"] == "return=representation"
        body = json.loads(request.content)
        return httpx.Response(201, json=[{**body[0], "id": 7}])

    store, _ = _store(handler)

    assert store.insert("departments", {"name": "IT"}) == {"name": "IT", "id": 7}


def test_error_body_becomes_store_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            400,
            json={
                "code": "PGRST204",
                "message": "Could not find the 'user_id' column of 'equipment_bookings' in the schema cache",
                "details": None,
                "hint": None,
            },
        )

    store, _ = _store(handler)

    with pytest.raises(StoreError) as exc:
        store.insert("equipment_bookings", {"user_id": 1})

    assert exc.value.status_code == 400
    assert exc.value.code == "PGRST204"
    assert "user_id" in exc.value.message
    assert exc.value.details is None


def test_non_json_error_body():
    store, _ = _store(lambda request: httpx.Response(502, text="Bad Gateway"))

    with pytest.raises(StoreError) as exc:
        store.select("profiles")

    assert exc.value.message == "Bad Gateway"
    assert exc.value.status_code == 502


def test_transport_error_becomes_store_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    store, _ = _store(handler)

    with pytest.raises(StoreError) as exc:
        store.select("profiles")

    assert exc.value.status_code is None
    assert "connection refused" in exc.value.message


def test_update_and_delete_use_filters():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append((request.method, dict(request.url.params)))
        return httpx.Response(200, json=[{"id": 3, "status": "approved"}])

    store, _ = _store(handler)

    assert store.update("leave_requests", {"status": "approved"}, filters={"id": 3}) == [{"id": 3, "status": "approved"}]
    assert store.delete("leave_requests", filters={"id": 3}) == 1
    assert calls == [("PATCH", {"id": "eq.3"}), ("DELETE", {"id": "eq.3"})]


def test_unfiltered_delete_never_reaches_the_wire():
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request expected")

    store, _ = _store(handler)

    with pytest.raises(StoreError):
        store.delete("profiles", filters={})


def test_close_leaves_injected_client_open():
    store, client = _store(lambda request: httpx.Response(200, json=[]))

    store.close()

    assert client.is_closed is False


def test_success_body_that_is_not_json_becomes_store_error():
    store, _ = _store(lambda request: httpx.Response(200, text="<html>proxy</html>"))

    with pytest.raises(StoreError) as exc:
        store.select("profiles")

    assert exc.value.message == "Invalid JSON from profiles"
    assert exc.value.status_code == 200


def test_discovery_survives_a_non_json_answer():
    store, _ = _store(lambda request: httpx.Response(201, text="<html>proxy</html>"))

    result = SchemaProber(store).discover("equipment_bookings", [{"equipment_id": 1}, {"item_id": 1}])

    assert result.matched is False
    assert [a.error for a in result.attempts] == ["Invalid JSON from equipment_bookings"] * 2
