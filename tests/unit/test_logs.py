"""Tests for the Logger front-end."""

import io
from collections.abc import Sequence

import pytest

from tintlog.core.handler import TextHandler
from tintlog.core.logs import Logger, new_logger
from tintlog.core.models import Attr, Level, Record, attr


class RecordingHandler:
    """HandlerPort implementation that keeps every handled record."""

    def __init__(self, level: int = Level.INFO) -> None:
        self.level = level
        self.records: list[Record] = []
        self.bound: list[Attr] = []
        self.groups: list[str] = []

    def enabled(self, level: int) -> bool:
        return level >= self.level

    def handle(self, record: Record) -> None:
        self.records.append(record)

    def with_attrs(self, attrs: Sequence[Attr]) -> "RecordingHandler":
        self.bound.extend(attrs)
        return self

    def with_group(self, name: str) -> "RecordingHandler":
        self.groups.append(name)
        return self


class TestLogger:
    """Tests for Logger level methods."""

    @pytest.mark.core
    @pytest.mark.parametrize(
        ("method", "level"),
        [
            ("debug", Level.DEBUG),
            ("info", Level.INFO),
            ("warn", Level.WARN),
            ("error", Level.ERROR),
        ],
    )
    def test_level_methods(self, method: str, level: Level) -> None:
        handler = RecordingHandler(level=Level.DEBUG)
        getattr(Logger(handler), method)("hello")
        assert handler.records[0].level == level
        assert handler.records[0].message == "hello"

    @pytest.mark.core
    def test_pairs_and_keyword_attributes(self) -> None:
        """Positional pairs come first, keyword attributes after them."""
        handler = RecordingHandler()
        Logger(handler).info("m", "key1", "value1", attr("a", True), port=8080)
        assert handler.records[0].attrs == (
            attr("key1", "value1"),
            attr("a", True),
            attr("port", 8080),
        )

    @pytest.mark.core
    def test_keyword_named_message_is_allowed(self) -> None:
        handler = RecordingHandler()
        Logger(handler).info("m", message="payload")
        assert handler.records[0].attrs == (attr("message", "payload"),)

    @pytest.mark.core
    def test_disabled_level_builds_no_record(self) -> None:
        handler = RecordingHandler(level=Level.WARN)
        logger = Logger(handler)
        logger.info("skipped")
        logger.debug("skipped")
        assert handler.records == []
        assert not logger.enabled(Level.INFO)

    @pytest.mark.core
    def test_log_with_custom_level(self) -> None:
        handler = RecordingHandler()
        Logger(handler).log(Level.INFO + 2, "notice")
        assert handler.records[0].level == 2

    @pytest.mark.core
    def test_captures_call_site(self) -> None:
        """The source points at the line calling the logger, not the logger."""
        handler = RecordingHandler()
        Logger(handler).info("here")
        source = handler.records[0].source
        assert source is not None
        assert source.file.endswith("test_logs.py")
        assert source.function == "test_captures_call_site"

    @pytest.mark.core
    def test_log_method_captures_call_site(self) -> None:
        handler = RecordingHandler()
        Logger(handler).log(Level.ERROR, "here")
        assert handler.records[0].source.function == "test_log_method_captures_call_site"

    @pytest.mark.core
    def test_timestamp_is_timezone_aware(self) -> None:
        handler = RecordingHandler()
        Logger(handler).info("m")
        assert handler.records[0].time.tzinfo is not None


class TestDerivedLoggers:
    """Tests for with_() and with_group()."""

    @pytest.mark.core
    def test_with_binds_attributes(self) -> None:
        handler = RecordingHandler()
        Logger(handler).with_("service", "auth", version="v1.2.3")
        assert handler.bound == [attr("service", "auth"), attr("version", "v1.2.3")]

    @pytest.mark.core
    def test_with_nothing_returns_same_logger(self) -> None:
        logger = Logger(RecordingHandler())
        assert logger.with_() is logger
        assert logger.with_group("") is logger

    @pytest.mark.core
    def test_with_group(self) -> None:
        handler = RecordingHandler()
        Logger(handler).with_group("request")
        assert handler.groups == ["request"]

    @pytest.mark.core
    def test_derived_logger_output(self) -> None:
        sink = io.BytesIO()
        logger = Logger(TextHandler(sink))
        logger.with_("service", "auth").with_group("request").info(
            "Request received", "method", "GET", "path", "/api/users"
        )
        assert sink.getvalue().decode().endswith(
            '  INFO Request received {request={service="auth", '
            'method="GET", path="/api/users"}}\n'
        )


class TestNewLogger:
    """Tests for new_logger()."""

    @pytest.mark.core
    def test_writes_to_given_sink_without_colors(self) -> None:
        """A BytesIO is not a terminal, so colors are off by default."""
        sink = io.BytesIO()
        new_logger(sink).warn("careful", "retries", 3)
        text = sink.getvalue().decode()
        assert "\x1b" not in text
        assert text.endswith("  WARN careful {retries=3}\n")

    @pytest.mark.core
    def test_options_are_applied(self) -> None:
        sink = io.BytesIO()
        logger = new_logger(sink, colors=True, level=Level.DEBUG, add_source=True)
        logger.debug("trace")
        text = sink.getvalue().decode()
        assert "unit/test_logs.py:" in text
        assert "\x1b[32mDEBUG\x1b[0m" in text

    @pytest.mark.core
    def test_defaults_to_stderr(self, monkeypatch: pytest.MonkeyPatch) -> None:
        class FakeStderr:
            def __init__(self) -> None:
                self.buffer = io.BytesIO()

        fake = FakeStderr()
        monkeypatch.setattr("sys.stderr", fake)
        new_logger().info("to stderr")
        assert fake.buffer.getvalue().endswith(b" INFO to stderr\n")
