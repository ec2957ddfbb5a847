from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from ..core.constants import PARTIAL_PASS_RATE, SUCCESS_PASS_RATE
from ..core.enums import CrudStage, SuiteVerdict


@dataclass(frozen=True)
class StageResult:
    stage: CrudStage
    ok: bool
    attempted: bool = True
    error: Optional[str] = None


@dataclass(frozen=True)
class SmokeReport:
    table: str
    stages: tuple[StageResult, ...]
    module: Optional[str] = None

    @property
    def passed(self) -> int:
        return sum(1 for s in self.stages if s.ok)

    @property
    def total(self) -> int:
        return len(CrudStage)

    @property
    def pass_rate(self) -> int:
        return round(self.passed * 100 / self.total)

    def stage(self, stage: CrudStage) -> StageResult:
        for s in self.stages:
            if s.stage == stage:
                return s
        raise KeyError(stage)

    def first_error(self, stage: CrudStage) -> Optional[str]:
        return self.stage(stage).error


@dataclass(frozen=True)
class SmokeCase:
    module: str
    table: str
    record: Mapping[str, Any]
    update: Mapping[str, Any]


def _rate(passed: int, total: int) -> int:
    return round(passed * 100 / total) if total else 0


def verdict_for(rate: int) -> SuiteVerdict:
    if rate >= SUCCESS_PASS_RATE:
        return SuiteVerdict.SUCCESS
    if rate >= PARTIAL_PASS_RATE:
        return SuiteVerdict.PARTIAL
    return SuiteVerdict.FAILING


@dataclass(frozen=True)
class SuiteReport:
    reports: tuple[SmokeReport, ...]

    @property
    def passed(self) -> int:
        return sum(r.passed for r in self.reports)

    @property
    def total(self) -> int:
        return sum(r.total for r in self.reports)

    @property
    def pass_rate(self) -> int:
        return _rate(self.passed, self.total)

    @property
    def verdict(self) -> SuiteVerdict:
        return verdict_for(self.pass_rate)
