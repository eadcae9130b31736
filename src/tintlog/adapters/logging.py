"""Python logging handler adapter for tintlog.

This adapter bridges Python's standard library logging module to a
HandlerPort, so records logged through ``logging`` are rendered as
tintlog lines.
"""

import logging
from collections.abc import Callable, Mapping
from datetime import datetime
from typing import Any

from tintlog.core.models import Attr, Record, Source, Value, attr
from tintlog.core.ports import HandlerPort

# Standard LogRecord attributes that should not be treated as extra fields
_STANDARD_LOGRECORD_ATTRS = frozenset(
    {
        "args",
        "asctime",
        "created",
        "exc_info",
        "exc_text",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "message",
        "module",
        "msecs",
        "msg",
        "name",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "taskName",
        "thread",
        "threadName",
    }
)


def level_from_stdlib(levelno: int) -> int:
    """Map a ``logging`` level number onto the tintlog level scale.

    DEBUG, INFO, WARNING and ERROR map to the named levels; levels in
    between keep their relative position (CRITICAL becomes ``ERROR+4``).
    """
    return (levelno - logging.INFO) * 4 // 10


class TintLoggingHandler(logging.Handler):
    """Logging handler that renders log records through a tintlog handler.

    Example:
        ```python
        import logging, sys
        from tintlog import TextHandler, TintLoggingHandler

        handler = TintLoggingHandler(TextHandler(sys.stderr.buffer, colors=True))
        logging.getLogger().addHandler(handler)
        ```
    """

    def __init__(
        self,
        handler: HandlerPort,
        include_attrs: list[str] | None = None,
        context_provider: Callable[[], Mapping[str, Any]] | None = None,
        level: int = logging.NOTSET,
    ) -> None:
        """Initialize the bridge.

        Args:
            handler: The tintlog handler records are forwarded to.
            include_attrs: LogRecord attributes to add as attributes, from
                "logger", "module", "funcName", "process", "thread" and
                "threadName". Defaults to none.
            context_provider: Optional callable returning attributes merged
                into every record, e.g. request-scoped context. Extra fields
                passed to the logging call override them.
            level: Standard ``logging`` level threshold of this handler.
        """
        super().__init__(level)
        self._handler = handler
        self._include_attrs = include_attrs or []
        self._context_provider = context_provider

    def emit(self, record: logging.LogRecord) -> None:
        """Convert a log record and hand it to the tintlog handler.

        Failures, including sink write errors, go through
        ``logging.Handler.handleError``.

        Args:
            record: The log record to emit.
        """
        try:
            level = level_from_stdlib(record.levelno)
            if not self._handler.enabled(level):
                return
            self._handler.handle(self._convert(record, level))
        except Exception:
            self.handleError(record)

    def _convert(self, record: logging.LogRecord, level: int) -> Record:
        # Map of attribute names to their values from LogRecord
        attr_mapping = {
            "logger": record.name,
            "module": record.module,
            "funcName": record.funcName or "",
            "process": record.process,
            "thread": record.thread,
            "threadName": record.threadName,
        }

        # Build attributes based on include_attrs configuration
        attrs: list[Attr] = [
            attr(key, attr_mapping[key])
            for key in self._include_attrs
            if key in attr_mapping
        ]

        # Context first, then extra attributes passed via logging call
        fields: dict[str, Any] = {}
        if self._context_provider is not None:
            fields.update(self._context_provider())
        for key, value in record.__dict__.items():
            if key not in _STANDARD_LOGRECORD_ATTRS:
                fields[key] = value
        attrs.extend(attr(key, value) for key, value in fields.items())

        # Exceptions render as their message, like any error value
        if record.exc_info and record.exc_info[1] is not None:
            attrs.append(Attr("exc", Value.any(record.exc_info[1])))

        source = None
        if record.pathname:
            source = Source(record.pathname, record.lineno, record.funcName or "")

        return Record(
            time=datetime.fromtimestamp(record.created).astimezone(),
            level=level,
            message=record.getMessage(),
            source=source,
            attrs=tuple(attrs),
        )
