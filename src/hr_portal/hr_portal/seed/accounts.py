from __future__ import annotations

import logging
from typing import Any, Optional, Protocol

import httpx
from werkzeug.security import generate_password_hash

from ..core.constants import DEFAULT_REQUEST_TIMEOUT
from ..core.exceptions import StoreError
from ..store.repository import CollectionStore
from .fixtures import DemoUser

logger = logging.getLogger(__name__)


class AccountRegistry(Protocol):
    """Creates login accounts for seeded users.

    ``provides_profile_id``: the returned account id doubles as the profile id,
    so the account must exist before the profile row is written.
    ``ensure_account`` returns ``None`` when an existing account was left as is
    (its password unchanged).
    """

    provides_profile_id: bool

    def ensure_account(self, user: DemoUser, password: str, *, profile_id: Any = None) -> Optional[str]:
        raise NotImplementedError

    def close(self) -> None:
        raise NotImplementedError


class GoTrueAccountRegistry:
    """Auth accounts through the hosted backend's admin user endpoint."""

    provides_profile_id = True

    def __init__(
        self,
        base_url: str,
        service_key: str,
        *,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._service_key = service_key
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=timeout)

    def _headers(self) -> dict[str, str]:
        return {
            "apikey": self._service_key,
            "Authorization": f"Bearer {self._service_key}",
            "Content-Type": "application/json",
        }

    def ensure_account(self, user: DemoUser, password: str, *, profile_id: Any = None) -> Optional[str]:
        payload = {
            "email": user.email,
            "password": password,
            "email_confirm": True,
            "user_metadata": {"name": user.name, "role": user.role.value, "department": user.department},
        }
        try:
            r = self._client.post(f"{self.base_url}/auth/v1/admin/users", json=payload, headers=self._headers())
        except httpx.HTTPError as e:
            raise StoreError(f"Account creation for {user.email} failed: {e}") from e

        if r.status_code == 422 and "already" in r.text:
            # Existing account: the profile upsert (by email) keeps its id.
            logger.info("Account %s already registered", user.email)
            return None
        if not r.is_success:
            try:
                message = r.json().get("msg") or r.json().get("message") or r.text
            except ValueError:
                message = r.text
            raise StoreError(message, status_code=r.status_code)

        try:
            body = r.json()
        except ValueError as e:
            raise StoreError(f"Invalid JSON from the auth service for {user.email}", status_code=r.status_code) from e
        user_id = body.get("id") or (body.get("user") or {}).get("id")
        return str(user_id) if user_id else None

    def close(self) -> None:
        if self._owns_client:
            self._client.close()


class StoreAccountRegistry:
    """Accounts kept as rows with a werkzeug password hash (MySQL / in-memory backends)."""

    provides_profile_id = False

    def __init__(self, store: CollectionStore, *, table: str = "accounts"):
        self._store = store
        self._table = table

    def ensure_account(self, user: DemoUser, password: str, *, profile_id: Any = None) -> Optional[str]:
        values = {
            "email": user.email,
            "password_hash": generate_password_hash(password),
            "role": user.role.value,
            "profile_id": profile_id,
            "is_active": True,
        }
        existing = self._store.select(self._table, filters={"email": user.email}, limit=1)
        if existing:
            rows = self._store.update(self._table, values, filters={"email": user.email})
            row = rows[0] if rows else existing[0]
        else:
            row = self._store.insert(self._table, values)
        return str(row["id"]) if row.get("id") is not None else None

    def close(self) -> None:
        # The store is owned by the container.
        return None
