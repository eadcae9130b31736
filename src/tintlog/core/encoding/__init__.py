"""Encoders for the text line format."""

from tintlog.core.encoding.text import (
    format_duration,
    format_float,
    format_time,
    format_timestamp,
    needs_quoting,
    quote,
)

__all__ = [
    "format_duration",
    "format_float",
    "format_time",
    "format_timestamp",
    "needs_quoting",
    "quote",
]
