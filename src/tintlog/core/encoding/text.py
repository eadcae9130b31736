"""Text encoding primitives for the human-readable line format."""

import math
from datetime import datetime, timedelta
from decimal import Decimal

_ESCAPES = {
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
    "\\": "\\\\",
    '"': '\\"',
}


def needs_quoting(text: str) -> bool:
    """Return True if ``text`` must be quoted to stay unambiguous as a key.

    A string needs quoting when it contains a non-printable character,
    a space, a double quote or an equals sign.
    """
    for ch in text:
        if ch in ' "=' or not ch.isprintable():
            return True
    return False


def quote(text: str) -> str:
    """Double-quote ``text``, escaping quotes, backslashes and non-printables.

    Printable non-ASCII characters are kept as they are. Other characters
    use ``\\xNN``, ``\\uNNNN`` or ``\\UNNNNNNNN`` escapes.

    Args:
        text: The string to quote.

    Returns:
        The quoted string, including the surrounding quotes.
    """
    out = ['"']
    for ch in text:
        escaped = _ESCAPES.get(ch)
        if escaped is not None:
            out.append(escaped)
        elif ch == " " or ch.isprintable():
            out.append(ch)
        else:
            code = ord(ch)
            if code < 0x80:
                out.append(f"\\x{code:02x}")
            elif code < 0x10000:
                out.append(f"\\u{code:04x}")
            else:
                out.append(f"\\U{code:08x}")
    out.append('"')
    return "".join(out)


def format_float(value: float) -> str:
    """Format a float as the shortest round-trip decimal, never in exponent form.

    Integral values drop the fractional part (``3.0`` becomes ``3``).
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    text = format(Decimal(repr(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def _fraction(value: int, precision: int) -> tuple[str, int]:
    """Split ``value`` into its low ``precision`` digits and the rest.

    The low digits are rendered as ``.ddd`` with trailing zeros trimmed,
    or as an empty string when they are all zero.
    """
    whole, frac = divmod(value, 10**precision)
    digits = f"{frac:0{precision}d}".rstrip("0")
    return (f".{digits}" if digits else ""), whole


def format_duration(delta: timedelta) -> str:
    """Format a duration in its canonical short form.

    Examples: ``0s``, ``1µs``, ``1.5ms``, ``2.25s``, ``1m30s``, ``1h0m0s``.
    Durations under one second use the largest unit that keeps the integer
    part non-zero; longer ones are written as hours, minutes and seconds
    with leading zero units omitted.
    """
    nanos = (
        (delta.days * 86400 + delta.seconds) * 1_000_000_000
        + delta.microseconds * 1000
    )
    if nanos == 0:
        return "0s"
    sign = "-" if nanos < 0 else ""
    nanos = abs(nanos)

    if nanos < 1000:
        return f"{sign}{nanos}ns"
    if nanos < 1_000_000:
        frac, whole = _fraction(nanos, 3)
        return f"{sign}{whole}{frac}µs"
    if nanos < 1_000_000_000:
        frac, whole = _fraction(nanos, 6)
        return f"{sign}{whole}{frac}ms"

    frac, seconds = _fraction(nanos, 9)
    text = f"{seconds % 60}{frac}s"
    minutes = seconds // 60
    if minutes:
        text = f"{minutes % 60}m{text}"
        hours = minutes // 60
        if hours:
            text = f"{hours}h{text}"
    return sign + text


def format_time(moment: datetime) -> str:
    """Format an absolute time as RFC 3339 with at most millisecond precision.

    Milliseconds are trimmed of trailing zeros (and dropped when zero).
    A zero UTC offset is written as ``Z``. Naive datetimes are taken as
    local time.
    """
    if moment.tzinfo is None or moment.utcoffset() is None:
        moment = moment.astimezone()
    text = moment.strftime("%Y-%m-%dT%H:%M:%S")
    millis = f"{moment.microsecond // 1000:03d}".rstrip("0")
    if millis:
        text += "." + millis
    offset = moment.utcoffset()
    if not offset:
        return text + "Z"
    minutes = int(offset.total_seconds()) // 60
    sign = "+" if minutes >= 0 else "-"
    hours, minutes = divmod(abs(minutes), 60)
    return f"{text}{sign}{hours:02d}:{minutes:02d}"


def format_timestamp(moment: datetime) -> str:
    """Format the leading line timestamp as ``YYYY-MM-DD HH:MM:SS.mmm``."""
    return f"{moment:%Y-%m-%d %H:%M:%S}.{moment.microsecond // 1000:03d}"
