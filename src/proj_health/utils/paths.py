"""Path and filesystem helper functions."""

from __future__ import annotations

import logging
from pathlib import Path

LOGGER = logging.getLogger(__name__)


def resolve_root(root: Path | None = None) -> Path:
    """Return the directory checks are resolved against, defaulting to the working directory."""

    return (root or Path.cwd()).resolve()


def path_exists(root: Path, relative: str, logger: logging.Logger | None = None) -> bool:
    """Best-effort probe for a file or directory below root.

    Blank paths and any filesystem error during the probe count as missing.
    """

    effective_logger = logger or LOGGER
    if not relative.strip():
        effective_logger.debug("paths.blank_path root=%s", root)
        return False
    try:
        return (root / relative).exists()
    except OSError as exc:
        effective_logger.debug("paths.probe_failed path=%s error=%s", relative, exc)
        return False


def read_text_best_effort(path: Path, logger: logging.Logger | None = None) -> str | None:
    """Read UTF-8 text, returning None when the file cannot be read."""

    effective_logger = logger or LOGGER
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        effective_logger.debug("paths.read_failed path=%s error=%s", path, exc)
        return None
