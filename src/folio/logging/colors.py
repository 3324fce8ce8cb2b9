"""Level colors for Folio console logs."""

from __future__ import annotations

ANSI_VIOLET = "\033[38;2;167;139;250m"
ANSI_TEAL = "\033[38;2;45;212;191m"
ANSI_AMBER = "\033[38;2;251;191;36m"
ANSI_RED = "\033[38;2;248;113;113m"
ANSI_DIM = "\033[38;2;100;100;115m"

# Keyed by structlog level name, passed to ConsoleRenderer(level_styles=...)
LEVEL_STYLES: dict[str, str] = {
    "debug": ANSI_DIM,
    "info": ANSI_TEAL,
    "warning": ANSI_AMBER,
    "warn": ANSI_AMBER,
    "error": ANSI_RED,
    "exception": ANSI_RED,
    "critical": ANSI_VIOLET,
}
