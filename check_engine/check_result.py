from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional


class CheckStatus(str, Enum):
    PASS = "pass"
    WARN = "warn"
    FAIL = "fail"

    @property
    def glyph(self) -> str:
        return STATUS_GLYPHS[self]


STATUS_GLYPHS: Dict[CheckStatus, str] = {
    CheckStatus.PASS: "✅ ",
    CheckStatus.WARN: "⚠️  ",
    CheckStatus.FAIL: "❌ ",
}


class FailureCategory(str, Enum):
    """What kind of topology problem a warn/fail result reports."""

    RESOURCE_NOT_FOUND = "resource_not_found"
    MISCONFIGURED_ROUTE = "misconfigured_route"
    UNHEALTHY_TARGET = "unhealthy_target"
    PLACEMENT_VIOLATION = "placement_violation"
    PERMISSION_OR_NETWORK = "permission_or_network"


@dataclass(frozen=True)
class CheckResult:
    status: CheckStatus
    message: str
    section: str = ""
    category: Optional[FailureCategory] = None

    def render(self) -> str:
        return f"{self.status.glyph} {self.message}"


@dataclass
class CheckReport:
    """Every result recorded during a run, in the order they were produced."""

    results: List[CheckResult] = field(default_factory=list)

    def add(self, result: CheckResult) -> CheckResult:
        self.results.append(result)
        return result

    def extend(self, other: "CheckReport") -> None:
        self.results.extend(other.results)

    @property
    def failed(self) -> bool:
        return any(r.status is CheckStatus.FAIL for r in self.results)

    @property
    def exit_code(self) -> int:
        return 1 if self.failed else 0

    def by_status(self, status: CheckStatus) -> List[CheckResult]:
        return [r for r in self.results if r.status is status]

    def counts(self) -> Dict[str, int]:
        counts = {status.value: 0 for status in CheckStatus}
        for result in self.results:
            counts[result.status.value] += 1
        return counts
