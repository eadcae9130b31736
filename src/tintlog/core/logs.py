"""Logger front-end that builds Record objects and hands them to a handler."""

import sys
from datetime import datetime
from typing import Any

from tintlog.core.handler import TextHandler
from tintlog.core.models import Level, Record, Source, args_to_attrs, attr
from tintlog.core.options import DEFAULT_SOURCE_WIDTH, HandlerOptions, colors_supported
from tintlog.core.ports import HandlerPort, ReplaceAttr, WriterPort


class Logger:
    """Structured logger bound to a handler.

    Attributes are passed as alternating ``"key", value`` arguments, as
    Attr objects, or as keyword arguments (appended after the positional
    ones).

    Example:
        ```python
        logger = new_logger(level=Level.DEBUG, add_source=True)
        logger.info("user authenticated", "user_id", 12345)
        logger.with_group("request").info("received", method="GET")
        ```
    """

    def __init__(self, handler: HandlerPort) -> None:
        self._handler = handler

    @property
    def handler(self) -> HandlerPort:
        return self._handler

    def with_(self, *args: Any, **attributes: Any) -> "Logger":
        """Return a logger whose handler includes the given attributes."""
        attrs = args_to_attrs(args) + [attr(k, v) for k, v in attributes.items()]
        if not attrs:
            return self
        return Logger(self._handler.with_attrs(attrs))

    def with_group(self, name: str) -> "Logger":
        """Return a logger whose attributes are nested under ``name``."""
        if not name:
            return self
        return Logger(self._handler.with_group(name))

    def enabled(self, level: int) -> bool:
        return self._handler.enabled(level)

    def log(self, level: int, message: str, /, *args: Any, **attributes: Any) -> None:
        """Emit a record at an arbitrary level."""
        self._log(level, message, args, attributes)

    def debug(self, message: str, /, *args: Any, **attributes: Any) -> None:
        self._log(Level.DEBUG, message, args, attributes)

    def info(self, message: str, /, *args: Any, **attributes: Any) -> None:
        self._log(Level.INFO, message, args, attributes)

    def warn(self, message: str, /, *args: Any, **attributes: Any) -> None:
        self._log(Level.WARN, message, args, attributes)

    def error(self, message: str, /, *args: Any, **attributes: Any) -> None:
        self._log(Level.ERROR, message, args, attributes)

    def _log(
        self,
        level: int,
        message: str,
        args: tuple[Any, ...],
        attributes: dict[str, Any],
    ) -> None:
        if not self._handler.enabled(level):
            return
        # Frame 0 is _log, frame 1 the public method, frame 2 its caller.
        frame = sys._getframe(2)
        source = Source(
            file=frame.f_code.co_filename,
            line=frame.f_lineno,
            function=frame.f_code.co_name,
        )
        attrs = args_to_attrs(args) + [attr(k, v) for k, v in attributes.items()]
        record = Record(
            time=datetime.now().astimezone(),
            level=level,
            message=message,
            source=source,
            attrs=tuple(attrs),
        )
        self._handler.handle(record)


def new_logger(
    writer: WriterPort | None = None,
    colors: bool | None = None,
    *,
    level: int = Level.INFO,
    add_source: bool = False,
    replace_attr: ReplaceAttr | None = None,
    source_width: int = DEFAULT_SOURCE_WIDTH,
) -> Logger:
    """Create a Logger over a new TextHandler.

    Args:
        writer: Byte sink. Defaults to ``sys.stderr.buffer``.
        colors: Emit ANSI colors. None detects a color-capable terminal.
        level: Minimum level to emit.
        add_source: Render the call site of each record.
        replace_attr: Hook applied to every attribute before rendering.
        source_width: Minimum width of the call-site column.

    Returns:
        A Logger writing to ``writer``.
    """
    if writer is None:
        writer = sys.stderr.buffer
    if colors is None:
        colors = colors_supported(writer)
    options = HandlerOptions(
        level=level,
        add_source=add_source,
        replace_attr=replace_attr,
        source_width=source_width,
    )
    return Logger(TextHandler(writer, colors, options))
