"""ANSI color codes and the level to color mapping."""

import os
from typing import IO, Any

ANSI = {
    "RESET": "\033[0m",
    "RED": "\033[31m",
    "GREEN": "\033[32m",
    "YELLOW": "\033[33m",
    "BLUE": "\033[34m",
    "WHITE": "\033[37m",
}

# keyed by lower-cased level text so foreign streams ("warn", "Info") match
LEVEL_COLORS = {
    "debug": ANSI["BLUE"],
    "info": ANSI["GREEN"],
    "warn": ANSI["YELLOW"],
    "error": ANSI["RED"],
}

DEFAULT_COLOR = ANSI["WHITE"]


def level_color(level: str) -> str:
    """Return the color for a level name, white when the level is unknown."""
    return LEVEL_COLORS.get(level.lower(), DEFAULT_COLOR)


def colorize(text: str, color: str) -> str:
    return f"{color}{text}{ANSI['RESET']}"


def supports_color(stream: IO[Any]) -> bool:
    """Return True when colored output suits ``stream``.

    Color is off when the ``NO_COLOR`` environment variable is set or the
    stream is not a terminal (a pipe, a file or a closed stream).
    """
    if "NO_COLOR" in os.environ:
        return False
    try:
        return bool(stream.isatty())
    except (AttributeError, OSError, ValueError):
        return False
