"""Shared utility helpers."""

from proj_health.utils.paths import path_exists, read_text_best_effort, resolve_root
from proj_health.utils.time_utils import now_utc

__all__ = [
    "path_exists",
    "read_text_best_effort",
    "resolve_root",
    "now_utc",
]
