from __future__ import annotations

import json

import httpx
import pytest
from werkzeug.security import check_password_hash

from src.hr_portal.hr_portal.core.enums import Role
from src.hr_portal.hr_portal.core.exceptions import StoreError
from src.hr_portal.hr_portal.seed.accounts import GoTrueAccountRegistry, StoreAccountRegistry
from src.hr_portal.hr_portal.seed.fixtures import DEMO_FIXTURES, DemoDepartment, DemoUser, SeedFixtures
from src.hr_portal.hr_portal.seed.service import SeedLoader
from src.hr_portal.hr_portal.store.memory_store import InMemoryCollectionStore, TableSchema

SEED_TABLES = ("departments", "profiles", "accounts", "teams", "team_members")


@pytest.fixture
def memory_store():
    return _store()


def _store(**schemas):
    return InMemoryCollectionStore({**{t: TableSchema() for t in SEED_TABLES}, **schemas})


def _loader(store, password="demo-pass"):
    return SeedLoader(store, StoreAccountRegistry(store), password=password)


def test_demo_fixtures_are_loaded(memory_store):
    report = _loader(memory_store).load()

    assert report.ok
    assert report.departments == len(DEMO_FIXTURES.departments)
    assert report.profiles == len(DEMO_FIXTURES.users)
    assert report.accounts == len(DEMO_FIXTURES.users)
    assert report.teams == len(DEMO_FIXTURES.teams)
    assert report.managers == sum(1 for u in DEMO_FIXTURES.users if u.manager_email)
    assert len(memory_store.rows("team_members")) == report.memberships


def test_second_run_creates_no_duplicates(memory_store):
    loader = _loader(memory_store)
    loader.load()
    counts = {t: len(memory_store.rows(t)) for t in ("departments", "profiles", "accounts", "teams", "team_members")}

    report = loader.load()

    assert report.ok
    assert counts == {t: len(memory_store.rows(t)) for t in counts}


def test_manager_links_point_at_profile_ids(memory_store):
    _loader(memory_store).load()

    profiles = {p["email"]: p for p in memory_store.rows("profiles")}
    manager = profiles["it.manager@hrportal.com"]
    assert profiles["developer1@hrportal.com"]["manager_id"] == manager["id"]
    assert "manager_id" not in manager


def test_accounts_store_hashes_not_passwords(memory_store):
    _loader(memory_store, password="demo-pass").load()

    account = memory_store.rows("accounts")[0]
    assert account["password_hash"] != "demo-pass"
    assert check_password_hash(account["password_hash"], "demo-pass")
    profile_ids = {str(p["id"]) for p in memory_store.rows("profiles")}
    assert str(account["profile_id"]) in profile_ids


def test_passwords_are_generated_per_user_when_not_configured(memory_store):
    report = _loader(memory_store, password=None).load()

    assert set(report.generated_passwords) == {u.email for u in DEMO_FIXTURES.users}
    assert len(set(report.generated_passwords.values())) == len(DEMO_FIXTURES.users)


def test_configured_password_is_not_reported(memory_store):
    report = _loader(memory_store, password="demo-pass").load()

    assert report.generated_passwords == {}


def test_failures_are_collected_and_loading_continues():
    store = _store(teams=TableSchema.of("name"))

    report = SeedLoader(store, password="x").load()

    assert not report.ok
    assert report.teams == 0
    assert len(report.errors) == len(DEMO_FIXTURES.teams)
    assert report.profiles == len(DEMO_FIXTURES.users)


def test_unreachable_store_reports_every_step():
    class _Down:
        def __getattr__(self, name):
            def fail(*args, **kwargs):
                raise StoreError("connection refused")

            return fail

    fixtures = SeedFixtures(
        departments=(DemoDepartment("IT", "Engineering"),),
        users=(DemoUser("a@hrportal.com", "A", "B", Role.EMPLOYEE, "IT", "Dev", "+1-555-0100", "2024-01-01"),),
    )

    report = SeedLoader(_Down(), password="x").load(fixtures)

    assert report.departments == 0
    assert report.profiles == 0
    assert report.errors == ["department IT: connection refused", "profile a@hrportal.com: connection refused"]


def _gotrue(handler):
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return GoTrueAccountRegistry("https://auth.example.test", "service-key", client=client)


def test_gotrue_account_id_becomes_profile_id(memory_store):
    issued = iter(f"uuid-{n}" for n in range(100))

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/auth/v1/admin/users"
        assert request.headers["Authorization"] == "Bearer service-key"
        payload = json.loads(request.content)
        assert payload["email_confirm"] is True
        return httpx.Response(200, json={"id": next(issued), "email": payload["email"]})

    fixtures = SeedFixtures(users=DEMO_FIXTURES.users[:2])
    report = SeedLoader(memory_store, _gotrue(handler), password="demo-pass").load(fixtures)

    assert report.ok
    assert sorted(p["id"] for p in memory_store.rows("profiles")) == ["uuid-0", "uuid-1"]


def test_gotrue_existing_account_is_not_an_error():
    registry = _gotrue(lambda request: httpx.Response(422, json={"msg": "A user with this email address has already been registered"}))

    assert registry.ensure_account(DEMO_FIXTURES.users[0], "pw") is None


def test_gotrue_rejection_raises_store_error():
    registry = _gotrue(lambda request: httpx.Response(401, json={"msg": "Invalid API key"}))

    with pytest.raises(StoreError) as exc:
        registry.ensure_account(DEMO_FIXTURES.users[0], "pw")

    assert exc.value.status_code == 401
    assert exc.value.message == "Invalid API key"


def test_existing_gotrue_account_reports_no_generated_password(memory_store):
    registry = _gotrue(lambda request: httpx.Response(422, json={"msg": "A user with this email address has already been registered"}))

    report = SeedLoader(memory_store, registry, password=None).load(SeedFixtures(users=DEMO_FIXTURES.users[:1]))

    assert report.ok
    assert report.profiles == 1
    assert report.accounts == 0
    assert report.generated_passwords == {}


def test_failed_account_creation_reports_no_generated_password(memory_store):
    registry = _gotrue(lambda request: httpx.Response(500, json={"msg": "Database error creating new user"}))

    report = SeedLoader(memory_store, registry, password=None).load(SeedFixtures(users=DEMO_FIXTURES.users[:1]))

    assert report.accounts == 0
    assert report.generated_passwords == {}
    assert report.errors == ["account admin@hrportal.com: Database error creating new user"]


def test_gotrue_success_body_that_is_not_json():
    registry = _gotrue(lambda request: httpx.Response(200, text="<html>proxy</html>"))

    with pytest.raises(StoreError) as exc:
        registry.ensure_account(DEMO_FIXTURES.users[0], "pw")

    assert exc.value.status_code == 200


def test_gotrue_close_leaves_injected_client_open():
    client = httpx.Client(transport=httpx.MockTransport(lambda request: httpx.Response(200, json={})))
    registry = GoTrueAccountRegistry("https://auth.example.test", "service-key", client=client)

    registry.close()

    assert client.is_closed is False
