"""Attribute and value rendering.

Turns Attr and Value objects of any shape into the quoted, comma-delimited
text used inside the attribute block of a log line. Rendering is total:
every value produces some text, and unknown shapes fall back to ``str()``.
"""

import dataclasses
import weakref
from collections.abc import Iterable, Mapping, Sequence, Set
from datetime import datetime, timedelta
from typing import Any

from tintlog.core.buffer import Buffer
from tintlog.core.color import ALERT, MUTED
from tintlog.core.encoding.text import (
    format_duration,
    format_float,
    format_time,
    needs_quoting,
    quote,
)
from tintlog.core.models import Attr, Kind, Value
from tintlog.core.ports import LogValuer, ReplaceAttr

_SCALARS = (str, bool, int, float, timedelta, datetime)
_ZERO_SCALARS = (str, bool, int, float, timedelta)
_BYTES_LIKE = (str, bytes, bytearray, memoryview)

# Nesting deeper than this renders as "..." instead of recursing further.
MAX_DEPTH = 100
# log_value() calls allowed when resolving one value.
MAX_LOG_VALUES = 100


def _error_text(e: BaseException) -> str:
    return f"!ERROR:{type(e).__name__}"


def _safe_str(obj: Any) -> str:
    """Return ``str(obj)``, or a marker naming the error if ``__str__`` raises."""
    try:
        return str(obj)
    except Exception as e:
        return _error_text(e)


def _is_named_tuple(obj: Any) -> bool:
    return isinstance(obj, tuple) and hasattr(type(obj), "_fields")


def _is_record(obj: Any) -> bool:
    return (
        dataclasses.is_dataclass(obj) and not isinstance(obj, type)
    ) or _is_named_tuple(obj)


def _is_container(obj: Any) -> bool:
    return isinstance(obj, (Mapping, Set, bytes, bytearray)) or (
        isinstance(obj, Sequence) and not isinstance(obj, str)
    )


def _is_shallow_zero(obj: Any) -> bool:
    if obj is None:
        return True
    if isinstance(obj, _ZERO_SCALARS):
        return not obj
    if _is_container(obj) and not _is_named_tuple(obj):
        return len(obj) == 0
    return False


def is_zero(obj: Any) -> bool:
    """Report whether ``obj`` is the zero value of its shape.

    ``None``, ``0``, ``0.0``, ``False``, ``""``, a zero ``timedelta`` and
    empty containers are zero. A record (dataclass or named tuple) is zero
    when each of its fields is; nested records count as set, so the check
    never follows references.
    """
    if _is_record(obj):
        if _is_named_tuple(obj):
            return all(_is_shallow_zero(item) for item in obj)
        return all(
            _is_shallow_zero(getattr(obj, f.name, None))
            for f in dataclasses.fields(obj)
        )
    return _is_shallow_zero(obj)


class AttrRenderer:
    """Renders attributes for one handler configuration.

    Args:
        colors: Wrap keys in the muted color and error values in the
            alert color.
        replace_attr: Optional hook applied to each top-level and
            group-member attribute before it is rendered.
        groups: Open group names passed to ``replace_attr``.
    """

    def __init__(
        self,
        colors: bool = False,
        replace_attr: ReplaceAttr | None = None,
        groups: Sequence[str] = (),
    ) -> None:
        self._colors = colors
        self._replace_attr = replace_attr
        self._groups = tuple(groups)

    def append_attr(self, buf: Buffer, a: Attr) -> None:
        """Append ``key=value``, after running the replace hook if any."""
        self._append_attr(buf, a, set(), 0)

    def append_key(self, buf: Buffer, key: str) -> None:
        if self._colors:
            buf.write_color(MUTED)
        buf.write_string(quote(key) if needs_quoting(key) else key)
        if self._colors:
            buf.reset_color()

    def append_value(self, buf: Buffer, value: Value) -> None:
        """Append the textual form of ``value``.

        Exception payloads are colored with the alert color when colors
        are enabled.
        """
        self._append_value(buf, value, set(), 0)

    def _append_attr(self, buf: Buffer, a: Attr, seen: set[int], depth: int) -> None:
        if self._replace_attr is not None:
            a = self._replace_attr(list(self._groups), a)
        self.append_key(buf, a.key)
        buf.write_string("=")
        self._append_value(buf, a.value, seen, depth)

    def _append_value(
        self, buf: Buffer, value: Value, seen: set[int], depth: int
    ) -> None:
        alert = (
            self._colors
            and value.kind is Kind.ANY
            and isinstance(value.payload, BaseException)
        )
        if alert:
            buf.write_color(ALERT)
        self._render(buf, value, seen, depth)
        if alert:
            buf.reset_color()

    def _render(self, buf: Buffer, value: Value, seen: set[int], depth: int) -> None:
        kind = value.kind
        payload = value.payload

        # Exceptions are also plain objects; their message wins.
        if kind is Kind.ANY and isinstance(payload, BaseException):
            buf.write_string(quote(_safe_str(payload)))
            return

        if kind is Kind.STRING:
            buf.write_string(quote(payload))
        elif kind is Kind.INT64 or kind is Kind.UINT64:
            buf.write_string(str(payload))
        elif kind is Kind.FLOAT64:
            buf.write_string(format_float(payload))
        elif kind is Kind.BOOL:
            buf.write_string("true" if payload else "false")
        elif kind is Kind.DURATION:
            buf.write_string(format_duration(payload))
        elif kind is Kind.TIME:
            buf.write_string(format_time(payload))
        elif kind is Kind.GROUP:
            if depth >= MAX_DEPTH:
                buf.write_string("...")
                return
            buf.write_string("{")
            for i, a in enumerate(payload):
                if i > 0:
                    buf.write_string(", ")
                self._append_attr(buf, a, seen, depth + 1)
            buf.write_string("}")
        else:
            self._append_any(buf, payload, seen, depth)

    def _append_any(self, buf: Buffer, obj: Any, seen: set[int], depth: int) -> None:
        """Render an arbitrary object by inspecting its runtime shape."""
        # Indirections resolve one level and recurse.
        if isinstance(obj, Value):
            self._render(buf, obj, seen, depth)
            return
        if isinstance(obj, weakref.ReferenceType):
            target = obj()
            if target is None:
                buf.write_string("nil")
            else:
                self._append_any(buf, target, seen, depth)
            return

        if isinstance(obj, BaseException):
            self._render(buf, Value.any(obj), seen, depth)
            return
        if not isinstance(obj, LogValuer) and is_zero(obj):
            buf.write_string("nil")
            return

        if isinstance(obj, _SCALARS):
            self._render(buf, Value.of(obj), seen, depth)
            return

        if id(obj) in seen or depth >= MAX_DEPTH:
            buf.write_string("...")
            return
        seen.add(id(obj))
        try:
            if isinstance(obj, LogValuer):
                self._append_log_valuer(buf, obj, seen, depth + 1)
            elif isinstance(obj, Mapping):
                self._append_mapping(buf, obj, seen, depth + 1)
            elif dataclasses.is_dataclass(obj) and not isinstance(obj, type):
                fields = [
                    (f.name, getattr(obj, f.name, None))
                    for f in dataclasses.fields(obj)
                ]
                self._append_fields(buf, fields, seen, depth + 1)
            elif _is_named_tuple(obj):
                self._append_fields(buf, zip(type(obj)._fields, obj), seen, depth + 1)
            elif isinstance(obj, (set, frozenset)):
                self._append_set(buf, obj, seen, depth + 1)
            elif isinstance(obj, Sequence) and not isinstance(obj, _BYTES_LIKE):
                buf.write_string("[")
                for i, item in enumerate(obj):
                    if i > 0:
                        buf.write_string(", ")
                    self._append_any(buf, item, seen, depth + 1)
                buf.write_string("]")
            else:
                buf.write_string(_safe_str(obj))
        finally:
            seen.discard(id(obj))

    def _append_log_valuer(
        self, buf: Buffer, valuer: LogValuer, seen: set[int], depth: int
    ) -> None:
        """Resolve ``valuer`` until the result is no longer a LogValuer."""
        for _ in range(MAX_LOG_VALUES):
            try:
                value = Value.of(valuer.log_value())
            except Exception as e:
                buf.write_string(_error_text(e))
                return
            if value.kind is Kind.ANY and isinstance(value.payload, LogValuer):
                valuer = value.payload
                continue
            self._render(buf, value, seen, depth)
            return
        buf.write_string(_error_text(RecursionError()))

    def _append_mapping(
        self, buf: Buffer, mapping: Mapping[Any, Any], seen: set[int], depth: int
    ) -> None:
        # Sorted by key text so dict ordering never leaks into output.
        items = sorted(
            ((_safe_str(k), v) for k, v in mapping.items()), key=lambda kv: kv[0]
        )
        buf.write_string("{")
        for i, (key, item) in enumerate(items):
            if i > 0:
                buf.write_string(", ")
            self.append_key(buf, key)
            buf.write_string("=")
            self._append_any(buf, item, seen, depth)
        buf.write_string("}")

    def _append_fields(
        self,
        buf: Buffer,
        fields: Iterable[tuple[str, Any]],
        seen: set[int],
        depth: int,
    ) -> None:
        buf.write_string("{")
        count = 0
        for name, item in fields:
            if name.startswith("_"):
                continue
            if count > 0:
                buf.write_string(", ")
            self.append_key(buf, name)
            buf.write_string("=")
            self._append_any(buf, item, seen, depth)
            count += 1
        buf.write_string("}")

    def _append_set(
        self, buf: Buffer, items: Set[Any], seen: set[int], depth: int
    ) -> None:
        rendered = []
        for item in items:
            scratch = Buffer()
            self._append_any(scratch, item, seen, depth)
            rendered.append(bytes(scratch))
        buf.write_string("[")
        for i, text in enumerate(sorted(rendered)):
            if i > 0:
                buf.write_string(", ")
            buf.write(text)
        buf.write_string("]")
