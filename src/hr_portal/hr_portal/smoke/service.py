from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Optional

from ..core.constants import PRIMARY_KEY
from ..core.enums import CrudStage
from ..core.exceptions import StoreError
from ..store.repository import CollectionStore
from .model import SmokeCase, SmokeReport, StageResult, SuiteReport

logger = logging.getLogger(__name__)


class CrudSmokeTester:
    """Create -> read -> update -> delete against one table, counting successes.

    A failed create skips the other stages: they are reported as failed but
    not attempted, so one root cause is never counted as four.
    """

    def __init__(self, store: CollectionStore):
        self._store = store

    def run(
        self,
        table: str,
        record: Mapping[str, Any],
        update: Mapping[str, Any],
        *,
        module: Optional[str] = None,
    ) -> SmokeReport:
        try:
            created = self._store.insert(table, record)
        except StoreError as e:
            logger.info("%s create failed: %s", table, e.message)
            return SmokeReport(
                table=table,
                module=module,
                stages=(
                    StageResult(CrudStage.CREATE, ok=False, error=e.message),
                    StageResult(CrudStage.READ, ok=False, attempted=False),
                    StageResult(CrudStage.UPDATE, ok=False, attempted=False),
                    StageResult(CrudStage.DELETE, ok=False, attempted=False),
                ),
            )

        row_id = created.get(PRIMARY_KEY)
        stages = [StageResult(CrudStage.CREATE, ok=True)]
        deleted = False
        try:
            stages.append(self._read(table, row_id))
            stages.append(self._update(table, row_id, update))
            result = self._delete(table, row_id)
            deleted = result.ok
            stages.append(result)
        finally:
            if not deleted:
                self._cleanup(table, row_id)

        report = SmokeReport(table=table, module=module, stages=tuple(stages))
        logger.info("%s smoke: %d/%d", table, report.passed, report.total)
        return report

    def _read(self, table: str, row_id: Any) -> StageResult:
        try:
            rows = self._store.select(table, filters={PRIMARY_KEY: row_id})
        except StoreError as e:
            return StageResult(CrudStage.READ, ok=False, error=e.message)
        if len(rows) != 1:
            return StageResult(CrudStage.READ, ok=False, error=f"expected 1 row with id={row_id}, got {len(rows)}")
        return StageResult(CrudStage.READ, ok=True)

    def _update(self, table: str, row_id: Any, values: Mapping[str, Any]) -> StageResult:
        try:
            rows = self._store.update(table, values, filters={PRIMARY_KEY: row_id})
        except StoreError as e:
            return StageResult(CrudStage.UPDATE, ok=False, error=e.message)
        if not rows:
            return StageResult(CrudStage.UPDATE, ok=False, error=f"no row updated for id={row_id}")
        return StageResult(CrudStage.UPDATE, ok=True)

    def _delete(self, table: str, row_id: Any) -> StageResult:
        try:
            removed = self._store.delete(table, filters={PRIMARY_KEY: row_id})
        except StoreError as e:
            return StageResult(CrudStage.DELETE, ok=False, error=e.message)
        if not removed:
            return StageResult(CrudStage.DELETE, ok=False, error=f"no row deleted for id={row_id}")
        return StageResult(CrudStage.DELETE, ok=True)

    def _cleanup(self, table: str, row_id: Any) -> None:
        if row_id is None:
            logger.error("%s: created row has no id, cannot clean it up", table)
            return
        try:
            self._store.delete(table, filters={PRIMARY_KEY: row_id})
        except StoreError as e:
            logger.error("%s: cleanup of id=%s failed: %s", table, row_id, e.message)

    def run_suite(self, cases: Iterable[SmokeCase]) -> SuiteReport:
        reports = [self.run(c.table, c.record, c.update, module=c.module) for c in cases]
        return SuiteReport(reports=tuple(reports))
