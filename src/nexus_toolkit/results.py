from __future__ import annotations

import json
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable

from pydantic import BaseModel


class ResultStatus(str, Enum):
    PASS = "pass"
    FAIL = "fail"
    SKIP = "skip"


class Timer:
    def __init__(self) -> None:
        self._start = time.monotonic()

    def elapsed_ms(self) -> int:
        return int((time.monotonic() - self._start) * 1000)


def _omit_none(values: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in values.items() if value is not None}


def _dump_response(response: Any) -> Any:
    if isinstance(response, BaseModel):
        return response.model_dump(mode="json", by_alias=True, exclude_unset=True)
    return response


@dataclass(frozen=True, slots=True)
class ToolTestResult:
    tool: str
    status: ResultStatus
    duration_ms: int
    response: Any | None = None
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return _omit_none(
            {
                "tool": self.tool,
                "status": self.status.value,
                "response": _dump_response(self.response),
                "error": self.error,
                "durationMs": self.duration_ms,
            }
        )

    @staticmethod
    def from_dict(data: dict[str, Any]) -> "ToolTestResult":
        return ToolTestResult(
            tool=data["tool"],
            status=ResultStatus(data["status"]),
            response=data.get("response"),
            error=data.get("error"),
            duration_ms=int(data["durationMs"]),
        )


@dataclass(frozen=True, slots=True)
class ToolkitAudit:
    """Ordered results of one audit run.

    The pass/fail/skip counts are derived from ``results`` so they always add
    up to ``len(results)``.
    """

    results: tuple[ToolTestResult, ...]

    @classmethod
    def from_results(cls, results: Iterable[ToolTestResult]) -> "ToolkitAudit":
        return cls(results=tuple(results))

    def _count(self, status: ResultStatus) -> int:
        return sum(1 for r in self.results if r.status is status)

    @property
    def passed(self) -> int:
        return self._count(ResultStatus.PASS)

    @property
    def failed(self) -> int:
        return self._count(ResultStatus.FAIL)

    @property
    def skipped(self) -> int:
        return self._count(ResultStatus.SKIP)

    @property
    def ok(self) -> bool:
        return self.failed == 0

    def counts(self) -> dict[str, int]:
        return {"passed": self.passed, "failed": self.failed, "skipped": self.skipped}

    def to_dict(self) -> dict[str, Any]:
        return {"results": [r.to_dict() for r in self.results], **self.counts()}

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)

    @staticmethod
    def from_dict(data: dict[str, Any]) -> "ToolkitAudit":
        return ToolkitAudit.from_results(ToolTestResult.from_dict(x) for x in data["results"])
