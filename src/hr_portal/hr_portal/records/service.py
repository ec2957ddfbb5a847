from __future__ import annotations

import copy
import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from ..core.constants import DEFAULT_LIST_LIMIT, PRIMARY_KEY
from ..core.exceptions import NotFoundError, StoreError, ValidationError
from ..store.repository import CollectionStore, Filters
from .fallbacks import FALLBACK_ROWS
from .forms import FORMS, FormSpec, validate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ServiceResponse:
    data: Any
    success: bool = True
    error: Optional[str] = None
    # True when ``data`` is placeholder content substituted for a failed read.
    degraded: bool = False

    def as_dict(self) -> dict[str, Any]:
        return {"data": self.data, "success": self.success, "error": self.error, "degraded": self.degraded}


class RecordService:
    """CRUD for the form-backed collections.

    Reads degrade softly: a store failure is logged and replaced by the
    collection's placeholder rows. Writes validate first (``ValidationError``
    propagates) and report store failures in the response.
    """

    def __init__(
        self,
        store: CollectionStore,
        *,
        forms: Mapping[str, FormSpec] = FORMS,
        fallbacks: Mapping[str, list[dict[str, Any]]] = FALLBACK_ROWS,
    ):
        self._store = store
        self._forms = dict(forms)
        self._fallbacks = dict(fallbacks)

    @property
    def collections(self) -> list[str]:
        return sorted(self._forms)

    def _form(self, collection: str) -> FormSpec:
        form = self._forms.get(collection)
        if form is None:
            raise NotFoundError(f"Unknown collection: {collection}")
        return form

    def fallback_rows(self, collection: str) -> list[dict[str, Any]]:
        rows = self._fallbacks.get(collection) or [{"id": f"fallback-{collection}-1"}]
        return copy.deepcopy(rows)

    def list(
        self,
        collection: str,
        *,
        filters: Optional[Filters] = None,
        limit: Optional[int] = DEFAULT_LIST_LIMIT,
    ) -> ServiceResponse:
        self._form(collection)
        try:
            rows = self._store.select(collection, filters=filters, limit=limit)
        except StoreError as e:
            logger.warning("Listing %s failed, serving placeholder rows: %s", collection, e.message)
            return ServiceResponse(data=self.fallback_rows(collection), success=False, error=e.message, degraded=True)
        return ServiceResponse(data=list(rows))

    def get(self, collection: str, record_id: Any) -> ServiceResponse:
        self._form(collection)
        try:
            rows = self._store.select(collection, filters={PRIMARY_KEY: record_id}, limit=1)
        except StoreError as e:
            logger.warning("Reading %s/%s failed: %s", collection, record_id, e.message)
            return ServiceResponse(data=None, success=False, error=e.message)
        if not rows:
            raise NotFoundError(f"{collection}/{record_id} not found")
        return ServiceResponse(data=rows[0])

    def create(self, collection: str, payload: Mapping[str, Any]) -> ServiceResponse:
        cleaned = validate(self._form(collection), payload)
        try:
            row = self._store.insert(collection, cleaned)
        except StoreError as e:
            logger.warning("Creating %s failed: %s", collection, e.message)
            return ServiceResponse(data=None, success=False, error=e.message)
        return ServiceResponse(data=row)

    def update(self, collection: str, record_id: Any, payload: Mapping[str, Any]) -> ServiceResponse:
        cleaned = validate(self._form(collection), payload, partial=True)
        cleaned.pop(PRIMARY_KEY, None)
        if not cleaned:
            raise ValidationError("No fields to update")
        try:
            rows = self._store.update(collection, cleaned, filters={PRIMARY_KEY: record_id})
        except StoreError as e:
            logger.warning("Updating %s/%s failed: %s", collection, record_id, e.message)
            return ServiceResponse(data=None, success=False, error=e.message)
        if not rows:
            raise NotFoundError(f"{collection}/{record_id} not found")
        return ServiceResponse(data=rows[0])

    def delete(self, collection: str, record_id: Any) -> ServiceResponse:
        self._form(collection)
        try:
            removed = self._store.delete(collection, filters={PRIMARY_KEY: record_id})
        except StoreError as e:
            logger.warning("Deleting %s/%s failed: %s", collection, record_id, e.message)
            return ServiceResponse(data=None, success=False, error=e.message)
        if not removed:
            raise NotFoundError(f"{collection}/{record_id} not found")
        return ServiceResponse(data={"deleted": removed})
