"""ANSI SGR color codes used by the text handler."""

from enum import Enum

from tintlog.core.models import Level


class Color(str, Enum):
    """Select Graphic Rendition escape sequences."""

    RESET = "\x1b[0m"
    BOLD = "\x1b[1m"
    DIM = "\x1b[2m"

    RED = "\x1b[31m"
    GREEN = "\x1b[32m"
    YELLOW = "\x1b[33m"
    BLUE = "\x1b[34m"

    BRIGHT_BLACK = "\x1b[90m"


# Keyed by the named level at or below a record's level.
LEVEL_COLORS: dict[Level, Color] = {
    Level.DEBUG: Color.GREEN,
    Level.INFO: Color.BLUE,
    Level.WARN: Color.YELLOW,
    Level.ERROR: Color.RED,
}

MUTED = Color.BRIGHT_BLACK
ALERT = Color.RED
