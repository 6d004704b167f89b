"""Shared helpers: colored logging, formatting and progress display."""

from clue.common.utils import (
    color_text,
    configure_windows_stdio,
    format_quantity,
    log_analysis,
    log_data,
    log_debug,
    log_error,
    log_success,
    log_warn,
)
from clue.common.ProgressBar import ProgressBar

__all__ = [
    "color_text",
    "configure_windows_stdio",
    "format_quantity",
    "log_analysis",
    "log_data",
    "log_debug",
    "log_error",
    "log_success",
    "log_warn",
    "ProgressBar",
]
