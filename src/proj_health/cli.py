"""Typer CLI entrypoint for proj_health."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Literal, cast

import typer
import yaml

from proj_health.config import AppSettings, load_settings
from proj_health.logging_utils import configure_logging, parse_log_level
from proj_health.messages import SUPPORTED_LOCALES
from proj_health.pipeline import HealthCheckRunOptions, run_health_check

app = typer.Typer(
    add_completion=False,
    help="Project health checklist: expected files, property tests and build setup.",
    invoke_without_command=True,
)


def _load_and_optionally_configure_logger(
    config_file: Path | None,
    configure: bool,
    log_level: str = "warning",
    log_file: Path | None = None,
) -> tuple[AppSettings, logging.Logger]:
    if configure:
        try:
            level = parse_log_level(log_level)
        except ValueError as exc:
            raise typer.BadParameter(str(exc)) from exc
        logger = configure_logging(level=level, log_file=log_file)
    else:
        logger = logging.getLogger("proj_health")
    settings = load_settings(config_file=config_file)
    return settings, logger


def _normalize_choice(value: str | None, *, allowed: set[str], option_name: str) -> str | None:
    if value is None:
        return None
    normalized = value.strip().lower()
    if normalized not in allowed:
        allowed_rendered = ",".join(sorted(allowed))
        raise typer.BadParameter(f"{option_name} must be one of: {allowed_rendered}")
    return normalized


def _run_check(
    *,
    root: Path | None = None,
    locale: str | None = None,
    property_mode: str | None = None,
    strict: bool | None = None,
    output_format: str | None = None,
    config_file: Path | None = None,
    log_level: str = "warning",
    log_file: Path | None = None,
) -> None:
    options = HealthCheckRunOptions(
        root=root,
        locale=_normalize_choice(locale, allowed=set(SUPPORTED_LOCALES), option_name="locale"),
        property_mode=_normalize_choice(property_mode, allowed={"static", "inspect"}, option_name="property-mode"),
        strict=strict,
        output_format=cast(
            Literal["text", "json"] | None,
            _normalize_choice(output_format, allowed={"text", "json"}, option_name="format"),
        ),
    )
    settings, logger = _load_and_optionally_configure_logger(
        config_file,
        configure=True,
        log_level=log_level,
        log_file=log_file,
    )
    result = run_health_check(settings, options=options, echo=typer.echo, logger=logger)
    if result.exit_code != 0:
        raise typer.Exit(code=result.exit_code)


@app.callback()
def main_callback(ctx: typer.Context) -> None:
    """Run the full checklist when no subcommand is given."""

    if ctx.invoked_subcommand is None:
        _run_check()


@app.command("check")
def check(
    root: Path | None = typer.Option(
        None,
        "--root",
        help="Project tree to check. Defaults to the current working directory.",
        file_okay=False,
        dir_okay=True,
    ),
    locale: str | None = typer.Option(
        None,
        "--locale",
        help="Report language: en or zh.",
    ),
    property_mode: str | None = typer.Option(
        None,
        "--property-mode",
        help="static reports every property implemented; inspect looks for marker text in test files.",
    ),
    strict: bool = typer.Option(
        False,
        "--strict",
        help="Exit with status 1 when the verdict is incomplete.",
    ),
    output_format: str | None = typer.Option(
        None,
        "--format",
        help="Output format: text or json.",
    ),
    log_level: str = typer.Option(
        "warning",
        "--log-level",
        help="Diagnostic log level written to stderr.",
    ),
    log_file: Path | None = typer.Option(
        None,
        "--log-file",
        help="Optional file that also receives diagnostic logs.",
        dir_okay=False,
    ),
    config_file: Path | None = typer.Option(
        None,
        "--config-file",
        help="Optional settings YAML path.",
        exists=False,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
) -> None:
    """Check expected files, print property-test status and the overall verdict."""

    _run_check(
        root=root,
        locale=locale,
        property_mode=property_mode,
        strict=True if strict else None,
        output_format=output_format,
        config_file=config_file,
        log_level=log_level,
        log_file=log_file,
    )


@app.command("show-config")
def show_config(
    config_file: Path | None = typer.Option(
        None,
        "--config-file",
        help="Optional settings YAML path.",
        exists=False,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
) -> None:
    """Print the effective configuration after env overrides."""

    settings, _ = _load_and_optionally_configure_logger(config_file, configure=False)
    rendered = yaml.safe_dump(settings.as_dict(), sort_keys=False, allow_unicode=True)
    typer.echo(rendered)


def main() -> None:
    """CLI script entrypoint."""

    app()


if __name__ == "__main__":
    main()
