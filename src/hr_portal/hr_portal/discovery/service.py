"""Schema discovery against a store whose columns are not documented.

The prober sends candidate records in order until the store accepts one.
Rejections are the signal being collected, so they are recorded and never
raised. Every accepted probe row is deleted before the prober returns.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Iterable, Iterator, Mapping, Sequence

from ..core.constants import PRIMARY_KEY
from ..core.exceptions import StoreError
from ..store.errors import missing_columns
from ..store.repository import CollectionStore, Record
from .model import DiscoveryResult, ProbeAttempt, ValueProbeResult

logger = logging.getLogger(__name__)


class SchemaProber:
    def __init__(self, store: CollectionStore):
        self._store = store

    @contextmanager
    def probe_row(self, table: str, record: Mapping[str, Any]) -> Iterator[Record]:
        """Insert ``record`` and yield the stored row; the row is deleted on exit.

        Insert failures propagate as ``StoreError`` (nothing to clean up). A
        failing delete is logged so it cannot hide an error raised in the body.
        """

        row = self._store.insert(table, record)
        try:
            yield row
        finally:
            self._cleanup(table, row, record)

    def _cleanup(self, table: str, row: Mapping[str, Any], record: Mapping[str, Any]) -> None:
        filters = {PRIMARY_KEY: row[PRIMARY_KEY]} if row.get(PRIMARY_KEY) is not None else dict(record)
        try:
            removed = self._store.delete(table, filters=filters)
        except StoreError as e:
            logger.error("Probe row cleanup failed on %s (%s): %s", table, filters, e)
            return
        if not removed:
            logger.warning("Probe row cleanup on %s removed nothing (%s)", table, filters)

    def inspect_columns(self, table: str) -> tuple[str, ...]:
        """Column names of one existing row, or () when the table is empty or unreadable."""
        try:
            rows = self._store.select(table, limit=1)
        except StoreError as e:
            logger.info("Cannot read sample row from %s: %s", table, e)
            return ()
        return tuple(rows[0]) if rows else ()

    def discover(self, table: str, candidates: Iterable[Mapping[str, Any]]) -> DiscoveryResult:
        sample_columns = self.inspect_columns(table)
        attempts: list[ProbeAttempt] = []
        absent: list[str] = []

        for index, shape in enumerate(candidates):
            try:
                with self.probe_row(table, shape):
                    pass
            except StoreError as e:
                names = missing_columns(e.message)
                absent.extend(n for n in names if n not in absent)
                attempts.append(
                    ProbeAttempt(index=index, shape=dict(shape), accepted=False, error=e.message, absent_fields=tuple(names))
                )
                logger.debug("%s candidate %d rejected: %s", table, index + 1, e.message)
                continue

            attempts.append(ProbeAttempt(index=index, shape=dict(shape), accepted=True))
            logger.info("%s candidate %d accepted: %s", table, index + 1, list(shape))
            return DiscoveryResult(
                table=table,
                attempts=tuple(attempts),
                matched_index=index,
                matched_shape=dict(shape),
                absent_fields=tuple(sorted(absent)),
                sample_columns=sample_columns,
            )

        logger.warning("%s: none of %d candidate shapes accepted", table, len(attempts))
        return DiscoveryResult(
            table=table,
            attempts=tuple(attempts),
            absent_fields=tuple(sorted(absent)),
            sample_columns=sample_columns,
        )

    def discover_values(
        self,
        table: str,
        base_record: Mapping[str, Any],
        field: str,
        values: Sequence[Any],
    ) -> ValueProbeResult:
        """Report which values of ``field`` the store accepts on top of ``base_record``."""
        accepted: list[Any] = []
        rejected: dict[Any, str] = {}
        for value in values:
            try:
                with self.probe_row(table, {**base_record, field: value}):
                    pass
            except StoreError as e:
                rejected[value] = e.message
                continue
            accepted.append(value)

        logger.info("%s.%s: %d of %d values accepted", table, field, len(accepted), len(values))
        return ValueProbeResult(table=table, field=field, accepted=tuple(accepted), rejected=rejected)
