"""Human-readable text handler.

Formats each record into one line::

    2024-05-01 12:00:00.000  INFO handler/main.py:42         message {key="value"}

and writes it to a byte sink. Handlers are never mutated after creation;
``with_attrs`` and ``with_group`` return new handlers that share the sink,
its lock and the options with their parent.
"""

import os
import threading
from collections.abc import Sequence

from tintlog.core.buffer import Buffer, borrow
from tintlog.core.color import LEVEL_COLORS, MUTED
from tintlog.core.encoding.text import format_timestamp
from tintlog.core.models import Attr, Record, Source, level_band, level_label
from tintlog.core.options import HandlerOptions
from tintlog.core.ports import WriterPort
from tintlog.core.render import AttrRenderer

LEVEL_WIDTH = 5


def short_source_path(path: str) -> str:
    """Reduce ``path`` to its last two segments (``pkg/module.py``)."""
    normalized = path.replace(os.sep, "/") if os.sep != "/" else path
    idx = normalized.rfind("/")
    if idx == -1:
        return normalized
    idx = normalized.rfind("/", 0, idx)
    if idx == -1:
        return normalized
    return normalized[idx + 1 :]


class TextHandler:
    """Handler that renders records as colored, human-readable lines.

    Example:
        ```python
        import sys
        from tintlog import Logger, TextHandler

        logger = Logger(TextHandler(sys.stderr.buffer, colors=True))
        logger.info("server started", "port", 8080)
        ```
    """

    def __init__(
        self,
        writer: WriterPort,
        colors: bool = False,
        options: HandlerOptions | None = None,
    ) -> None:
        """Initialize a root handler.

        Args:
            writer: Byte sink every line is written to.
            colors: Emit ANSI color codes.
            options: Level, source and replace-hook configuration.
        """
        self._writer = writer
        self._colors = colors
        self._options = options or HandlerOptions()
        self._lock = threading.Lock()
        self._groups: tuple[str, ...] = ()
        self._attrs: tuple[Attr, ...] = ()
        self._renderer = AttrRenderer(colors, self._options.replace_attr)

    @property
    def options(self) -> HandlerOptions:
        return self._options

    @property
    def groups(self) -> tuple[str, ...]:
        return self._groups

    @property
    def attrs(self) -> tuple[Attr, ...]:
        return self._attrs

    def _derive(
        self, groups: tuple[str, ...], attrs: tuple[Attr, ...]
    ) -> "TextHandler":
        h2 = object.__new__(TextHandler)
        h2._writer = self._writer
        h2._colors = self._colors
        h2._options = self._options
        h2._lock = self._lock
        h2._groups = groups
        h2._attrs = attrs
        h2._renderer = AttrRenderer(self._colors, self._options.replace_attr, groups)
        return h2

    def enabled(self, level: int) -> bool:
        """Report whether ``level`` is at or above the configured minimum."""
        return level >= self._options.level

    def with_attrs(self, attrs: Sequence[Attr]) -> "TextHandler":
        """Return a handler that renders ``attrs`` before each record's own."""
        attrs = tuple(attrs)
        if not attrs:
            return self
        for a in attrs:
            if not isinstance(a, Attr):
                raise TypeError(f"expected Attr, got {type(a).__name__}")
        return self._derive(self._groups, self._attrs + attrs)

    def with_group(self, name: str) -> "TextHandler":
        """Return a handler that nests the attribute block under ``name``."""
        if not name:
            return self
        return self._derive(self._groups + (name,), self._attrs)

    def handle(self, record: Record) -> None:
        """Render ``record`` as one line and write it to the sink.

        Raises:
            Whatever the sink's ``write`` raises, unchanged.
        """
        with borrow() as buf:
            self._append_header(buf, record)
            buf.write_string(record.message)
            self._append_attrs(buf, record.attrs)
            buf.write_string("\n")

            with self._lock:
                self._writer.write(bytes(buf))

    def _append_header(self, buf: Buffer, record: Record) -> None:
        colors = self._colors

        if colors:
            buf.write_color(MUTED)
        buf.write_string(format_timestamp(record.time))
        if colors:
            buf.reset_color()
        buf.write_string(" ")

        if colors:
            buf.write_color(LEVEL_COLORS[level_band(record.level)])
        label = level_label(record.level)
        buf.write_string(" " * (LEVEL_WIDTH - len(label)))
        buf.write_string(label)
        if colors:
            buf.reset_color()
        buf.write_string(" ")

        if self._options.add_source and record.source is not None:
            self._append_source(buf, record.source)

    def _append_source(self, buf: Buffer, source: Source) -> None:
        if not source.file:
            return
        text = f"{short_source_path(source.file)}:{source.line}"
        if self._colors:
            buf.write_color(MUTED)
        buf.write_string(text.ljust(self._options.source_width))
        if self._colors:
            buf.reset_color()
        buf.write_string(" ")

    def _append_attrs(self, buf: Buffer, record_attrs: Sequence[Attr]) -> None:
        if not self._attrs and not record_attrs:
            return
        buf.write_string(" {")

        for name in self._groups:
            self._renderer.append_key(buf, name)
            buf.write_string("={")

        for i, a in enumerate(self._attrs):
            if i > 0:
                buf.write_string(", ")
            self._renderer.append_attr(buf, a)

        if self._attrs and record_attrs:
            buf.write_string(", ")

        for i, a in enumerate(record_attrs):
            if i > 0:
                buf.write_string(", ")
            self._renderer.append_attr(buf, a)

        buf.write_string("}" * len(self._groups))
        buf.write_string("}")
