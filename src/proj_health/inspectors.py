"""Property-test inspectors used by the summary block."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from proj_health.models import PropertyLabel, PropertyStatus
from proj_health.utils.paths import read_text_best_effort

LOGGER = logging.getLogger(__name__)


class PropertyInspector(Protocol):
    """Decides whether a property label should be reported as implemented."""

    mode: str

    def inspect(self, prop: PropertyLabel, root: Path) -> PropertyStatus:
        ...


@dataclass(frozen=True, slots=True)
class StaticPropertyInspector:
    """Legacy behavior: every label is reported implemented without looking at any file."""

    mode: str = "static"

    def inspect(self, prop: PropertyLabel, root: Path) -> PropertyStatus:
        return PropertyStatus(label=prop.label, implemented=True, verified=False)


@dataclass(frozen=True, slots=True)
class MarkerPropertyInspector:
    """Reports a label implemented only when its test file contains every marker."""

    mode: str = "inspect"
    logger: logging.Logger | None = None

    def inspect(self, prop: PropertyLabel, root: Path) -> PropertyStatus:
        effective_logger = self.logger or LOGGER
        if prop.file is None:
            return PropertyStatus(label=prop.label, implemented=False, verified=True, detail="no test file configured")

        markers = prop.markers or (prop.label,)
        content = read_text_best_effort(root / prop.file, logger=effective_logger)
        if content is None:
            effective_logger.info("inspect.file_unreadable label=%s file=%s", prop.label, prop.file)
            return PropertyStatus(label=prop.label, implemented=False, verified=True, detail=f"cannot read {prop.file}")

        missing = [marker for marker in markers if marker not in content]
        if missing:
            effective_logger.info(
                "inspect.markers_missing label=%s file=%s missing=%s", prop.label, prop.file, missing
            )
            rendered = ", ".join(repr(marker) for marker in missing)
            return PropertyStatus(
                label=prop.label,
                implemented=False,
                verified=True,
                detail=f"missing {rendered} in {prop.file}",
            )
        return PropertyStatus(label=prop.label, implemented=True, verified=True, detail=prop.file)


def build_inspector(mode: str, logger: logging.Logger | None = None) -> PropertyInspector:
    """Return the inspector registered for mode."""

    normalized = mode.strip().lower()
    if normalized == "static":
        return StaticPropertyInspector()
    if normalized == "inspect":
        return MarkerPropertyInspector(logger=logger)
    raise ValueError(f"Unsupported property mode {mode!r}; expected one of: inspect,static")
