"""Construction-time configuration for the text handler."""

import os
from dataclasses import dataclass
from typing import Any

from tintlog.core.models import Level
from tintlog.core.ports import ReplaceAttr

DEFAULT_SOURCE_WIDTH = 24


@dataclass(frozen=True)
class HandlerOptions:
    """Options shared by a handler and every handler derived from it.

    Attributes:
        level: Minimum level to handle. Defaults to INFO.
        add_source: Render the ``dir/file.py:line`` call site when the
            record carries one.
        replace_attr: Hook applied to every attribute before rendering.
            Its return value is rendered as-is.
        source_width: Minimum width the call site is padded to.
    """

    level: int = Level.INFO
    add_source: bool = False
    replace_attr: ReplaceAttr | None = None
    source_width: int = DEFAULT_SOURCE_WIDTH


def colors_supported(stream: Any) -> bool:
    """Decide whether ANSI colors should be written to ``stream``.

    Colors are used when the stream is a terminal and the ``NO_COLOR``
    environment variable is unset or empty.
    """
    if os.environ.get("NO_COLOR"):
        return False
    isatty = getattr(stream, "isatty", None)
    if isatty is None:
        return False
    try:
        return bool(isatty())
    except ValueError:
        # Closed streams raise ValueError from isatty().
        return False
