from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Sequence

Record = dict[str, Any]
Filters = Mapping[str, Any]


class CollectionStore(Protocol):
    """Table-style access to the remote data store.

    Note: services depend on this interface, never on a concrete backend.
    Every backend rejection is raised as ``StoreError``.
    """

    def select(
        self,
        table: str,
        *,
        filters: Optional[Filters] = None,
        columns: str = "*",
        limit: Optional[int] = None,
    ) -> Sequence[Record]:
        raise NotImplementedError

    def insert(self, table: str, record: Mapping[str, Any]) -> Record:
        """Insert one row and return it as stored (including generated ``id``)."""

        raise NotImplementedError

    def update(self, table: str, values: Mapping[str, Any], *, filters: Filters) -> Sequence[Record]:
        raise NotImplementedError

    def delete(self, table: str, *, filters: Filters) -> int:
        raise NotImplementedError

    def close(self) -> None:
        raise NotImplementedError
