"""Result containers for checklist runs."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Literal

Verdict = Literal["ready", "incomplete"]


@dataclass(frozen=True, slots=True)
class FileCheckSpec:
    """Ordered expected paths for one named category."""

    name: str
    paths: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class PathCheck:
    """Existence of a single expected path at check time."""

    path: str
    exists: bool


@dataclass(frozen=True, slots=True)
class CheckResult:
    """Per-path outcomes for one group plus derived counts."""

    group: str
    checks: tuple[PathCheck, ...] = ()

    @property
    def existing(self) -> int:
        return sum(1 for check in self.checks if check.exists)

    @property
    def total(self) -> int:
        return len(self.checks)

    @property
    def is_complete(self) -> bool:
        return self.existing == self.total

    @property
    def missing(self) -> list[str]:
        return [check.path for check in self.checks if not check.exists]

    def as_dict(self) -> dict[str, Any]:
        return {
            "group": self.group,
            "existing": self.existing,
            "total": self.total,
            "checks": [{"path": check.path, "exists": check.exists} for check in self.checks],
        }


@dataclass(frozen=True, slots=True)
class PropertyLabel:
    """Descriptive property-test label and where its assertion text should live."""

    label: str
    file: str | None = None
    markers: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class PropertyStatus:
    """Reported status of one property label."""

    label: str
    implemented: bool
    verified: bool
    detail: str | None = None


def verdict_for(test_result: CheckResult, source_result: CheckResult) -> Verdict:
    """Return ``ready`` only when both groups have every expected path."""

    if test_result.is_complete and source_result.is_complete:
        return "ready"
    return "incomplete"


@dataclass(frozen=True, slots=True)
class HealthReport:
    """Everything a single checklist run observed."""

    test_result: CheckResult
    source_result: CheckResult
    build_result: CheckResult
    environment_result: CheckResult
    properties: tuple[PropertyStatus, ...]
    verdict: Verdict
    generated_at: datetime
    root: str
    locale: str
    property_mode: str

    @property
    def has_build_wrapper(self) -> bool:
        return self.environment_result.existing > 0

    def as_dict(self) -> dict[str, Any]:
        """Return the report as a JSON-compatible nested dictionary."""

        return {
            "root": self.root,
            "generated_at": self.generated_at.isoformat(),
            "locale": self.locale,
            "property_mode": self.property_mode,
            "groups": {
                "test_files": self.test_result.as_dict(),
                "source_files": self.source_result.as_dict(),
                "build_files": self.build_result.as_dict(),
                "environment": self.environment_result.as_dict(),
            },
            "properties": [
                {
                    "label": status.label,
                    "implemented": status.implemented,
                    "verified": status.verified,
                    "detail": status.detail,
                }
                for status in self.properties
            ],
            "has_build_wrapper": self.has_build_wrapper,
            "verdict": self.verdict,
        }
