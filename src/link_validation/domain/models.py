from dataclasses import dataclass, field
from typing import Any, Mapping


@dataclass(frozen=True)
class GalaxyRecord:
    id: Any
    name: str


@dataclass(frozen=True)
class ProbeOutcome:
    ok: bool
    status_code: int | None = None
    headers: Mapping[str, str] = field(default_factory=dict)
    error: str | None = None

    @classmethod
    def success(cls, status_code: int, headers: Mapping[str, str]) -> "ProbeOutcome":
        return cls(ok=True, status_code=status_code, headers=headers)

    @classmethod
    def failure(cls, error: str) -> "ProbeOutcome":
        return cls(ok=False, error=error)


@dataclass(frozen=True)
class ProbeResult:
    url: str
    valid: bool
    reason: str | None = None
    status_code: int | None = None
    redirects_taken: int = 0


@dataclass(frozen=True)
class LinkCheckResult:
    record_id: Any
    name: str
    result: ProbeResult

    @property
    def url(self) -> str:
        return self.result.url

    @property
    def valid(self) -> bool:
        return self.result.valid

    @property
    def reason(self) -> str | None:
        return self.result.reason

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.record_id,
            "name": self.name,
            "url": self.result.url,
            "valid": self.result.valid,
            "reason": self.result.reason,
            "status_code": self.result.status_code,
            "redirects_taken": self.result.redirects_taken,
        }


@dataclass
class RunSummary:
    total: int
    completed: int = 0
    valid_count: int = 0
    invalid: list[LinkCheckResult] = field(default_factory=list)

    @property
    def invalid_count(self) -> int:
        return len(self.invalid)

    @property
    def is_success(self) -> bool:
        return self.completed == self.total and not self.invalid
