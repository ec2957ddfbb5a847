from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional


@dataclass(frozen=True)
class ProbeAttempt:
    """One candidate shape sent to the store, and what the store said."""

    index: int
    shape: Mapping[str, Any]
    accepted: bool
    error: Optional[str] = None
    absent_fields: tuple[str, ...] = ()


@dataclass(frozen=True)
class DiscoveryResult:
    table: str
    attempts: tuple[ProbeAttempt, ...]
    matched_index: Optional[int] = None
    matched_shape: Optional[Mapping[str, Any]] = None
    absent_fields: tuple[str, ...] = ()
    sample_columns: tuple[str, ...] = ()

    @property
    def matched(self) -> bool:
        return self.matched_shape is not None

    @property
    def matched_fields(self) -> tuple[str, ...]:
        return tuple(self.matched_shape or ())

    def summary(self) -> str:
        if self.matched:
            return (
                f"{self.table}: candidate {self.matched_index + 1}/{len(self.attempts)} accepted "
                f"-> [{', '.join(self.matched_fields)}]"
            )
        return f"{self.table}: no shape matched ({len(self.attempts)} tried)"


@dataclass(frozen=True)
class ValueProbeResult:
    table: str
    field: str
    accepted: tuple[Any, ...] = ()
    rejected: dict[Any, str] = field(default_factory=dict)
