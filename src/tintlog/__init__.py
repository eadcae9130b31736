"""Human-readable, colorized structured log lines."""

from tintlog.adapters.logging import TintLoggingHandler
from tintlog.core.buffer import Buffer, BufferPool
from tintlog.core.handler import TextHandler
from tintlog.core.logs import Logger, new_logger
from tintlog.core.models import (
    Attr,
    Kind,
    Level,
    Record,
    Source,
    Value,
    attr,
    group,
)
from tintlog.core.options import HandlerOptions, colors_supported
from tintlog.core.ports import HandlerPort, LogValuer, ReplaceAttr, WriterPort

__all__ = [
    "Attr",
    "Buffer",
    "BufferPool",
    "HandlerOptions",
    "HandlerPort",
    "Kind",
    "Level",
    "LogValuer",
    "Logger",
    "Record",
    "ReplaceAttr",
    "Source",
    "TextHandler",
    "TintLoggingHandler",
    "Value",
    "WriterPort",
    "attr",
    "colors_supported",
    "group",
    "new_logger",
]
