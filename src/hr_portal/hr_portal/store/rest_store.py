"""REST collection store.

Thin HTTP client for a PostgREST-compatible table API (the hosted Postgres
service the portal runs on exposes one under ``/rest/v1``). Only the four
table verbs with equality filters are covered; anything richer belongs in the
portal itself.

Errors
------
Every non-2xx response and every transport failure is raised as
``StoreError``. The backend's JSON error body (``message``, ``code``,
``details``, ``hint``) is kept so callers can parse column names out of it.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Mapping, Optional, Sequence

import httpx

from ..core.constants import DEFAULT_REQUEST_TIMEOUT
from ..core.exceptions import StoreError
from .repository import Filters, Record


def _encode_value(value: Any) -> str:
    if value is None:
        return "is.null"
    if isinstance(value, bool):
        return f"eq.{str(value).lower()}"
    return f"eq.{value}"


class RestCollectionStore:
    """Collection store over HTTPS.

    Args:
        base_url: Project URL, e.g. ``https://<project>.example.co``.
        api_key: Service key sent as ``apikey`` and as the Bearer token.
        timeout: Default HTTP timeout for the internal client.
        client: Optional preconfigured ``httpx.Client`` (tests pass one built on
            ``httpx.MockTransport``). A client passed in is not closed by ``close()``.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        *,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=timeout, follow_redirects=True)
        self._logger = logging.getLogger(__name__)

    def _headers(self, *, representation: bool = False) -> dict[str, str]:
        headers = {
            "apikey": self._api_key,
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }
        if representation:
            headers["Prefer"] = "return=representation"
        return headers

    def _url(self, table: str) -> str:
        return f"{self.base_url}/rest/v1/{table}"

    @staticmethod
    def _params(filters: Optional[Filters]) -> dict[str, str]:
        return {column: _encode_value(value) for column, value in (filters or {}).items()}

    def _send(self, method: str, table: str, **kwargs: Any) -> httpx.Response:
        try:
            r = self._client.request(method, self._url(table), **kwargs)
        except httpx.HTTPError as e:
            raise StoreError(f"{method} {table} failed: {e}") from e

        if r.is_success:
            return r

        try:
            body = r.json()
        except ValueError:
            body = {"message": r.text}
        if not isinstance(body, dict):
            body = {"message": json.dumps(body)}

        message = body.get("message") or f"HTTP {r.status_code}"
        self._logger.debug("%s %s -> %s: %s", method, table, r.status_code, message)
        raise StoreError(
            message,
            status_code=r.status_code,
            code=body.get("code"),
            details={k: body.get(k) for k in ("details", "hint") if body.get(k)} or None,
        )

    @staticmethod
    def _rows(r: httpx.Response, table: str) -> list[Record]:
        if not r.content:
            return []
        try:
            data = r.json()
        except ValueError as e:
            raise StoreError(f"Invalid JSON from {table}", status_code=r.status_code) from e
        if isinstance(data, dict):
            return [data]
        return list(data or [])

    def select(
        self,
        table: str,
        *,
        filters: Optional[Filters] = None,
        columns: str = "*",
        limit: Optional[int] = None,
    ) -> Sequence[Record]:
        params = self._params(filters)
        params["select"] = columns
        if limit is not None:
            params["limit"] = str(int(limit))
        return self._rows(self._send("GET", table, params=params, headers=self._headers()), table)

    def insert(self, table: str, record: Mapping[str, Any]) -> Record:
        r = self._send("POST", table, json=[dict(record)], headers=self._headers(representation=True))
        rows = self._rows(r, table)
        if not rows:
            raise StoreError(f"Insert into {table} returned no row", status_code=r.status_code)
        return rows[0]

    def update(self, table: str, values: Mapping[str, Any], *, filters: Filters) -> Sequence[Record]:
        if not filters:
            raise StoreError(f"Refusing unfiltered update on {table}")
        r = self._send(
            "PATCH",
            table,
            params=self._params(filters),
            json=dict(values),
            headers=self._headers(representation=True),
        )
        return self._rows(r, table)

    def delete(self, table: str, *, filters: Filters) -> int:
        if not filters:
            raise StoreError(f"Refusing unfiltered delete on {table}")
        r = self._send("DELETE", table, params=self._params(filters), headers=self._headers(representation=True))
        return len(self._rows(r, table))

    def close(self) -> None:
        if self._owns_client:
            self._client.close()
