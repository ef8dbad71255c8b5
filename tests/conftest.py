from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable, Iterator

import pytest

from proj_health.config import ChecklistConfig


def write_files(root: Path, paths: Iterable[str], content: str = "") -> None:
    for relative in paths:
        target = root / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")


@pytest.fixture
def checklist() -> ChecklistConfig:
    return ChecklistConfig()


@pytest.fixture
def isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run from an empty directory with no settings file or env overrides in play."""

    for name in list(os.environ):
        if name.startswith("PROJ_HEALTH_"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def complete_project(isolated_cwd: Path, checklist: ChecklistConfig) -> Path:
    """A tree holding every expected test, source and build file."""

    write_files(isolated_cwd, checklist.test_files)
    write_files(isolated_cwd, checklist.source_files)
    write_files(isolated_cwd, checklist.build_files)
    return isolated_cwd


@pytest.fixture(autouse=True)
def restore_logging() -> Iterator[None]:
    """Undo handler changes made by configure_logging during CLI runs."""

    root_logger = logging.getLogger()
    package_logger = logging.getLogger("proj_health")
    handlers = list(root_logger.handlers)
    levels = (root_logger.level, package_logger.level)
    yield
    for handler in list(root_logger.handlers):
        if handler not in handlers:
            root_logger.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root_logger.handlers:
            root_logger.addHandler(handler)
    root_logger.setLevel(levels[0])
    package_logger.setLevel(levels[1])
