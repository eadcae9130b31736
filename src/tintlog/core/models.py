"""Core domain models for structured log records."""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum, IntEnum
from typing import Any

BAD_KEY = "!BADKEY"


class Level(IntEnum):
    """Named severity levels.

    Any integer is a valid level; the names mark the start of each band.
    """

    DEBUG = -4
    INFO = 0
    WARN = 4
    ERROR = 8


def level_band(level: int) -> Level:
    """Return the named level at or below ``level``."""
    if level < Level.INFO:
        return Level.DEBUG
    if level < Level.WARN:
        return Level.INFO
    if level < Level.ERROR:
        return Level.WARN
    return Level.ERROR


def level_label(level: int) -> str:
    """Return the display label of ``level``.

    Exact named levels render as their name (``INFO``); others as the
    band name plus the signed offset (``INFO+2``, ``DEBUG-1``).
    """
    band = level_band(level)
    offset = int(level) - band.value
    if offset == 0:
        return band.name
    return f"{band.name}{offset:+d}"


class Kind(Enum):
    """Tag of a ``Value``."""

    ANY = "any"
    BOOL = "bool"
    DURATION = "duration"
    FLOAT64 = "float64"
    INT64 = "int64"
    STRING = "string"
    TIME = "time"
    UINT64 = "uint64"
    GROUP = "group"


@dataclass(frozen=True)
class Value:
    """A tagged attribute value.

    Attributes:
        kind: The tag selecting how ``payload`` is rendered.
        payload: The underlying Python object. For GROUP it is a tuple of Attr.
    """

    kind: Kind
    payload: Any = None

    @classmethod
    def string(cls, value: str) -> "Value":
        return cls(Kind.STRING, value)

    @classmethod
    def int64(cls, value: int) -> "Value":
        return cls(Kind.INT64, int(value))

    @classmethod
    def uint64(cls, value: int) -> "Value":
        if value < 0:
            raise ValueError(f"uint64 value must not be negative: {value}")
        return cls(Kind.UINT64, int(value))

    @classmethod
    def float64(cls, value: float) -> "Value":
        return cls(Kind.FLOAT64, float(value))

    @classmethod
    def boolean(cls, value: bool) -> "Value":
        return cls(Kind.BOOL, bool(value))

    @classmethod
    def duration(cls, value: timedelta) -> "Value":
        return cls(Kind.DURATION, value)

    @classmethod
    def time(cls, value: datetime) -> "Value":
        return cls(Kind.TIME, value)

    @classmethod
    def group(cls, attrs: Iterable["Attr"]) -> "Value":
        return cls(Kind.GROUP, tuple(attrs))

    @classmethod
    def any(cls, value: Any) -> "Value":
        return cls(Kind.ANY, value)

    @classmethod
    def of(cls, value: Any) -> "Value":
        """Infer the kind of a plain Python object.

        ``bool`` is checked before ``int`` since it is a subclass of it.
        Objects with no dedicated kind become ANY.
        """
        if isinstance(value, Value):
            return value
        if isinstance(value, bool):
            return cls.boolean(value)
        if isinstance(value, int):
            return cls.int64(value)
        if isinstance(value, float):
            return cls.float64(value)
        if isinstance(value, str):
            return cls.string(value)
        if isinstance(value, timedelta):
            return cls.duration(value)
        if isinstance(value, datetime):
            return cls.time(value)
        return cls.any(value)


@dataclass(frozen=True)
class Attr:
    """A key/value pair attached to a record or bound to a handler."""

    key: str
    value: Value


def attr(key: str, value: Any) -> Attr:
    """Create an Attr, inferring the value kind."""
    return Attr(key, Value.of(value))


def group(key: str, *args: Any) -> Attr:
    """Create a group Attr from Attr objects and ``"key", value`` pairs."""
    return Attr(key, Value.group(args_to_attrs(args)))


def args_to_attrs(args: Sequence[Any]) -> list[Attr]:
    """Convert loosely typed logging arguments into Attr objects.

    An Attr is used as-is. A string followed by another argument forms a
    pair. A trailing lone string, or any other argument, is recorded under
    the ``!BADKEY`` key so it is still visible in the output.

    Args:
        args: Mixed Attr objects, keys and values.

    Returns:
        List of Attr objects in argument order.
    """
    attrs: list[Attr] = []
    i = 0
    while i < len(args):
        current = args[i]
        if isinstance(current, Attr):
            attrs.append(current)
            i += 1
        elif isinstance(current, str) and i + 1 < len(args):
            attrs.append(attr(current, args[i + 1]))
            i += 2
        else:
            attrs.append(attr(BAD_KEY, current))
            i += 1
    return attrs


@dataclass(frozen=True)
class Source:
    """Call site of a log statement.

    Attributes:
        file: Path of the source file.
        line: Line number in ``file``.
        function: Qualified name of the calling function.
    """

    file: str
    line: int
    function: str = ""


@dataclass(frozen=True)
class Record:
    """A structured log event.

    Attributes:
        time: When the event happened.
        level: Severity level.
        message: The log message, rendered verbatim.
        source: Call site, if captured.
        attrs: Attributes supplied with the event.
    """

    time: datetime
    level: int
    message: str
    source: Source | None = None
    attrs: tuple[Attr, ...] = field(default_factory=tuple)
