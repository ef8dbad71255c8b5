"""Straight-line checklist run: gather specs, probe, print, decide."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from proj_health.checker import Echo, ProjectHealthChecker
from proj_health.config import AppSettings
from proj_health.inspectors import PropertyInspector, build_inspector
from proj_health.messages import get_catalog
from proj_health.models import HealthReport
from proj_health.utils.time_utils import now_utc

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class HealthCheckRunOptions:
    """Per-invocation overrides; None keeps the configured value."""

    root: Path | None = None
    locale: str | None = None
    property_mode: str | None = None
    strict: bool | None = None
    output_format: Literal["text", "json"] | None = None


@dataclass(frozen=True, slots=True)
class HealthCheckRunResult:
    """Return object for a checklist run."""

    report: HealthReport
    exit_code: int


def render_json(report: HealthReport) -> str:
    """Serialize a report for machine consumers."""

    return json.dumps(report.as_dict(), indent=2, ensure_ascii=False, default=str)


def run_health_check(
    settings: AppSettings,
    options: HealthCheckRunOptions | None = None,
    echo: Echo | None = None,
    inspector: PropertyInspector | None = None,
    logger: logging.Logger | None = None,
) -> HealthCheckRunResult:
    """Run the full checklist and write the report through echo.

    The exit code is 0 unless strict mode is on and the verdict is incomplete.
    """

    effective_logger = logger or LOGGER
    run_options = options or HealthCheckRunOptions()
    report_config = settings.report

    root = run_options.root or settings.paths.project_root
    locale = run_options.locale or report_config.locale
    property_mode = run_options.property_mode or report_config.property_mode
    strict = report_config.strict if run_options.strict is None else run_options.strict
    output_format = run_options.output_format or report_config.output_format

    catalog = get_catalog(locale)
    effective_inspector = inspector or build_inspector(property_mode, logger=effective_logger)
    write = echo or (lambda _: None)
    text_echo = write if output_format == "text" else None

    checker = ProjectHealthChecker(
        root=root,
        catalog=catalog,
        inspector=effective_inspector,
        echo=text_echo,
        logger=effective_logger,
    )
    checklist = settings.checklist
    effective_logger.info(
        "health_check.start root=%s locale=%s property_mode=%s format=%s",
        checker.root,
        catalog.locale,
        effective_inspector.mode,
        output_format,
    )

    if text_echo is not None:
        text_echo(catalog.text("title", name=settings.project.name_for(catalog.locale)))
    test_spec = checklist.spec_for("test_files")
    source_spec = checklist.spec_for("source_files")
    test_result = checker.check_file_group(test_spec.paths, test_spec.name)
    source_result = checker.check_file_group(source_spec.paths, source_spec.name)
    properties = checker.check_properties(checklist.property_labels(catalog.locale))
    environment_result = checker.check_environment(checklist.spec_for("wrapper_files").paths)
    verdict = checker.print_summary(
        test_result,
        source_result,
        properties=properties,
        has_build_wrapper=environment_result.existing > 0,
    )
    build_result = checker.check_build_files(checklist.spec_for("build_files").paths)
    checker.print_environment(environment_result)

    report = HealthReport(
        test_result=test_result,
        source_result=source_result,
        build_result=build_result,
        environment_result=environment_result,
        properties=properties,
        verdict=verdict,
        generated_at=now_utc(),
        root=str(checker.root),
        locale=catalog.locale,
        property_mode=effective_inspector.mode,
    )
    if output_format == "json":
        write(render_json(report))

    exit_code = 1 if strict and verdict != "ready" else 0
    effective_logger.info("health_check.done verdict=%s exit_code=%s", verdict, exit_code)
    return HealthCheckRunResult(report=report, exit_code=exit_code)
