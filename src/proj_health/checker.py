"""Checklist engine: existence probes plus the line-oriented text report."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Sequence

from proj_health.inspectors import PropertyInspector, StaticPropertyInspector
from proj_health.messages import MessageCatalog, get_catalog
from proj_health.models import CheckResult, PathCheck, PropertyLabel, PropertyStatus, Verdict, verdict_for
from proj_health.utils.paths import path_exists, resolve_root

LOGGER = logging.getLogger(__name__)

Echo = Callable[[str], None]


def _discard(_: str) -> None:
    return None


def evaluate_group(
    paths: Sequence[str],
    group: str,
    root: Path,
    logger: logging.Logger | None = None,
) -> CheckResult:
    """Probe every path once, in input order, without printing anything."""

    checks = tuple(PathCheck(path=path, exists=path_exists(root, path, logger=logger)) for path in paths)
    return CheckResult(group=group, checks=checks)


class ProjectHealthChecker:
    """Writes the checklist report for one project tree.

    Every path is probed relative to ``root`` (the working directory when
    omitted). Output goes through ``echo`` one line at a time, in input order.
    """

    def __init__(
        self,
        root: Path | None = None,
        catalog: MessageCatalog | None = None,
        inspector: PropertyInspector | None = None,
        echo: Echo | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.root = resolve_root(root)
        self.catalog = catalog or get_catalog("en")
        self.inspector = inspector or StaticPropertyInspector()
        self.echo = echo or _discard
        self.logger = logger or LOGGER

    def _group_done(self, result: CheckResult) -> None:
        self.logger.info(
            "health_check.group_done group=%s existing=%s total=%s",
            result.group,
            result.existing,
            result.total,
        )
        if result.missing:
            self.logger.debug("health_check.group_missing group=%s paths=%s", result.group, result.missing)

    def check_file_group(self, paths: Sequence[str], label: str) -> CheckResult:
        """Print one marked line per path, then the subtotal line for label.

        ``label`` names the group (``test_files``, ``source_files``) and picks
        the section heading and subtotal wording from the catalog. Labels the
        catalog does not know are printed as-is.
        """

        heading_key = f"section_{label}"
        self.echo("")
        self.echo(self.catalog.text(heading_key) if heading_key in self.catalog.templates else f"{label}:")
        result = evaluate_group(paths, label, self.root, logger=self.logger)
        for check in result.checks:
            self.echo(self.catalog.marked(check.exists, "path_line", path=check.path))
        self.echo("")
        if f"subtotal_{label}" in self.catalog.templates:
            self.echo(self.catalog.text(f"subtotal_{label}", existing=result.existing, total=result.total))
        else:
            self.echo(f"{label}: {result.existing}/{result.total}")
        self._group_done(result)
        return result

    def check_properties(self, properties: Sequence[PropertyLabel]) -> tuple[PropertyStatus, ...]:
        """Print the property-test block using the configured inspector."""

        self.echo("")
        self.echo(self.catalog.text("section_properties"))
        statuses = tuple(self.inspector.inspect(prop, self.root) for prop in properties)
        for status in statuses:
            key = "property_implemented" if status.implemented else "property_missing"
            self.echo(self.catalog.marked(status.implemented, key, label=status.label))
        self.logger.info(
            "health_check.properties mode=%s implemented=%s total=%s",
            self.inspector.mode,
            sum(1 for status in statuses if status.implemented),
            len(statuses),
        )
        return statuses

    def print_summary(
        self,
        test_result: CheckResult,
        source_result: CheckResult,
        properties: Sequence[PropertyStatus] = (),
        has_build_wrapper: bool = False,
    ) -> Verdict:
        """Print the verdict block; the verdict depends only on the two groups' counts."""

        verdict = verdict_for(test_result, source_result)
        self.echo("")
        self.echo(self.catalog.text("summary_header"))
        if verdict == "ready":
            all_properties = all(status.implemented for status in properties)
            self.echo(self.catalog.marked(True, "all_files_exist"))
            self.echo(self.catalog.marked(True, "framework_ready"))
            if all_properties:
                self.echo(self.catalog.marked(True, "properties_ready"))
            else:
                self.echo(self.catalog.marked(False, "properties_incomplete"))
            self.echo(self.catalog.marked(True, "integration_ready"))
            self.echo("")
            self.echo(self.catalog.text("ready_banner"))
            self.echo("")
            if has_build_wrapper:
                self.echo(self.catalog.text("wrapper_present_hint"))
            else:
                self.echo(self.catalog.text("wrapper_missing_note"))
                self.echo(self.catalog.text("ide_recommendation"))
        else:
            self.echo(self.catalog.marked(False, "files_missing"))
        self.logger.info("health_check.verdict verdict=%s", verdict)
        return verdict

    def check_build_files(self, paths: Sequence[str]) -> CheckResult:
        """Print the build-configuration block after the summary."""

        self.echo("")
        self.echo(self.catalog.text("section_build_files"))
        result = evaluate_group(paths, "build_files", self.root, logger=self.logger)
        for check in result.checks:
            key = "build_present" if check.exists else "build_missing"
            self.echo(self.catalog.marked(check.exists, key, path=check.path))
        self._group_done(result)
        return result

    def check_environment(self, wrapper_paths: Sequence[str]) -> CheckResult:
        """Probe for build-tool wrappers without printing; callers decide where the block goes."""

        result = evaluate_group(wrapper_paths, "environment", self.root, logger=self.logger)
        self._group_done(result)
        return result

    def print_environment(self, result: CheckResult) -> None:
        self.echo("")
        self.echo(self.catalog.text("section_environment"))
        for check in result.checks:
            key = "wrapper_present" if check.exists else "wrapper_missing"
            self.echo(self.catalog.marked(check.exists, key, path=check.path))
