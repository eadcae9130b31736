"""Port interfaces the formatter depends on or provides.

The core depends only on these protocols: a byte sink to write rendered
lines to, and optionally objects that know how to present themselves as a
log value.
"""

from collections.abc import Callable, Sequence
from typing import Protocol, runtime_checkable

from tintlog.core.models import Attr, Record, Value

ReplaceAttr = Callable[[Sequence[str], Attr], Attr]
"""Hook called with the open group names and an attribute before rendering."""


@runtime_checkable
class WriterPort(Protocol):
    """Port for the byte sink rendered lines are written to.

    Examples: ``sys.stderr.buffer``, an open binary file, ``io.BytesIO``.
    """

    def write(self, data: bytes, /) -> object:
        """Write one complete line."""
        ...


@runtime_checkable
class HandlerPort(Protocol):
    """Port for record handlers driven by the Logger front-end."""

    def enabled(self, level: int) -> bool:
        """Report whether records at ``level`` are handled."""
        ...

    def handle(self, record: Record) -> None:
        """Render and emit one record."""
        ...

    def with_attrs(self, attrs: Sequence[Attr]) -> "HandlerPort":
        """Return a handler that includes ``attrs`` in every record."""
        ...

    def with_group(self, name: str) -> "HandlerPort":
        """Return a handler that nests every attribute under ``name``."""
        ...


@runtime_checkable
class LogValuer(Protocol):
    """Objects that substitute a Value for themselves when logged."""

    def log_value(self) -> Value:
        """Return the Value to render in place of this object."""
        ...
