"""Shared test fixtures for all test modules."""

import io
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any

import pytest

from tintlog.core.handler import TextHandler
from tintlog.core.models import Level, Record, args_to_attrs
from tintlog.core.options import HandlerOptions


@pytest.fixture
def sink() -> io.BytesIO:
    """Provide an in-memory byte sink for handler output."""
    return io.BytesIO()


@pytest.fixture
def fixed_time() -> datetime:
    """A timezone-aware timestamp with a non-zero millisecond part."""
    return datetime(2024, 5, 1, 12, 30, 45, 123456, tzinfo=timezone.utc)


@pytest.fixture
def make_record(fixed_time: datetime) -> Callable[..., Record]:
    """Factory fixture for records built from ``"key", value`` arguments.

    Usage:
        def test_something(make_record):
            record = make_record("message", "key", 1, level=Level.WARN)
    """

    def _make(
        message: str, *args: Any, level: int = Level.INFO, **kwargs: Any
    ) -> Record:
        return Record(
            time=fixed_time,
            level=level,
            message=message,
            attrs=tuple(args_to_attrs(args)),
            **kwargs,
        )

    return _make


@pytest.fixture
def plain_handler(sink: io.BytesIO) -> TextHandler:
    """Handler without colors writing to ``sink``."""
    return TextHandler(sink, colors=False)


@pytest.fixture
def make_handler(sink: io.BytesIO) -> Callable[..., TextHandler]:
    """Factory fixture for handlers writing to ``sink`` with custom options."""

    def _make(colors: bool = False, **options: Any) -> TextHandler:
        return TextHandler(sink, colors=colors, options=HandlerOptions(**options))

    return _make

