"""Duration values and the unit-suffixed duration grammar.

Durations are signed 64-bit nanosecond counts. The accepted text form is an
optional sign followed by one or more ``<magnitude><unit>`` pairs, for example
``"300ms"``, ``"-1.5h"`` or ``"2h45m"``. Valid units are ``ns``, ``us``
(or ``µs``), ``ms``, ``s``, ``m`` and ``h``; hours are the largest unit.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple

NANOSECOND = 1
MICROSECOND = 1000 * NANOSECOND
MILLISECOND = 1000 * MICROSECOND
SECOND = 1000 * MILLISECOND
MINUTE = 60 * SECOND
HOUR = 60 * MINUTE

_MAX_INT64 = (1 << 63) - 1
_MIN_INT64 = -(1 << 63)

_UNITS: Dict[str, int] = {
    "ns": NANOSECOND,
    "us": MICROSECOND,
    "µs": MICROSECOND,  # U+00B5 micro sign
    "μs": MICROSECOND,  # U+03BC Greek letter mu
    "ms": MILLISECOND,
    "s": SECOND,
    "m": MINUTE,
    "h": HOUR,
}

_DIGITS = "0123456789"
_HEX = "0123456789abcdef"


class DurationError(ValueError):
    """Raised when a string is not a valid duration expression."""


class _LeadingIntOverflow(Exception):
    pass


def _quote(value: str) -> str:
    """Quote ``value`` with control and non-ASCII characters as ``\\x`` bytes."""
    out = ['"']
    for char in value:
        if char < " " or ord(char) >= 0x80:
            for byte in char.encode("utf-8", errors="surrogatepass"):
                out.append("\\x" + _HEX[byte >> 4] + _HEX[byte & 0xF])
        else:
            if char in ('"', "\\"):
                out.append("\\")
            out.append(char)
    out.append('"')
    return "".join(out)


def _leading_int(text: str) -> Tuple[int, str]:
    value = 0
    index = 0
    for index, char in enumerate(text):
        if char not in _DIGITS:
            break
        if value > (1 << 63) // 10:
            raise _LeadingIntOverflow
        value = value * 10 + ord(char) - ord("0")
        if value > 1 << 63:
            raise _LeadingIntOverflow
    else:
        index = len(text)
    return value, text[index:]


def _leading_fraction(text: str) -> Tuple[int, float, str]:
    # Digits past int64 precision are consumed but ignored.
    value = 0
    scale = 1.0
    overflow = False
    index = 0
    for index, char in enumerate(text):
        if char not in _DIGITS:
            break
        if overflow:
            continue
        if value > _MAX_INT64 // 10:
            overflow = True
            continue
        candidate = value * 10 + ord(char) - ord("0")
        if candidate > 1 << 63:
            overflow = True
            continue
        value = candidate
        scale *= 10
    else:
        index = len(text)
    return value, scale, text[index:]


def parse_duration(text: str) -> int:
    """Parse ``text`` and return the duration in nanoseconds.

    Raises
    ------
    DurationError
        If ``text`` is empty, lacks a unit, uses an unknown unit or overflows
        a signed 64-bit nanosecond count.
    """

    orig = text
    invalid = f"time: invalid duration {_quote(orig)}"
    negative = False
    if text and text[0] in "+-":
        negative = text[0] == "-"
        text = text[1:]
    if text == "0":
        return 0
    if not text:
        raise DurationError(invalid)

    total = 0
    while text:
        if not (text[0] == "." or text[0] in _DIGITS):
            raise DurationError(invalid)

        before = len(text)
        try:
            whole, text = _leading_int(text)
        except _LeadingIntOverflow:
            raise DurationError(invalid) from None
        pre = before != len(text)

        fraction, scale, post = 0, 1.0, False
        if text and text[0] == ".":
            text = text[1:]
            before = len(text)
            fraction, scale, text = _leading_fraction(text)
            post = before != len(text)
        if not pre and not post:
            raise DurationError(invalid)

        index = 0
        while index < len(text) and not (text[index] == "." or text[index] in _DIGITS):
            index += 1
        if index == 0:
            raise DurationError(f"time: missing unit in duration {_quote(orig)}")
        unit_name, text = text[:index], text[index:]
        unit = _UNITS.get(unit_name)
        if unit is None:
            raise DurationError(
                f"time: unknown unit {_quote(unit_name)} in duration {_quote(orig)}"
            )

        if whole > (1 << 63) // unit:
            raise DurationError(invalid)
        whole *= unit
        if fraction > 0:
            whole += int(float(fraction) * (float(unit) / scale))
            if whole > 1 << 63:
                raise DurationError(invalid)
        total += whole
        if total > 1 << 63:
            raise DurationError(invalid)

    if negative:
        return -total
    if total > _MAX_INT64:
        raise DurationError(invalid)
    return total


def _fmt_frac(value: int, precision: int) -> Tuple[str, int]:
    digits = []
    printed = False
    for _ in range(precision):
        digit = value % 10
        printed = printed or digit != 0
        if printed:
            digits.append(_DIGITS[digit])
        value //= 10
    if not printed:
        return "", value
    return "." + "".join(reversed(digits)), value


def format_duration(nanoseconds: int) -> str:
    """Render ``nanoseconds`` in canonical form, e.g. ``1h30m0s`` or ``1.5ms``."""
    if nanoseconds == 0:
        return "0s"
    sign = "-" if nanoseconds < 0 else ""
    value = abs(nanoseconds)

    if value < SECOND:
        if value < MICROSECOND:
            precision, unit = 0, "ns"
        elif value < MILLISECOND:
            precision, unit = 3, "µs"
        else:
            precision, unit = 6, "ms"
        frac, value = _fmt_frac(value, precision)
        return f"{sign}{value}{frac}{unit}"

    frac, value = _fmt_frac(value, 9)
    out = f"{value % 60}{frac}s"
    value //= 60
    if value > 0:
        out = f"{value % 60}m{out}"
        value //= 60
        if value > 0:
            out = f"{value}h{out}"
    return sign + out


@dataclass(frozen=True, slots=True, order=True)
class Duration:
    """Immutable signed nanosecond span."""

    nanoseconds: int = 0

    def __post_init__(self) -> None:
        if isinstance(self.nanoseconds, bool) or not isinstance(self.nanoseconds, int):
            raise TypeError("Duration requires an integer nanosecond count")
        if not _MIN_INT64 <= self.nanoseconds <= _MAX_INT64:
            raise DurationError("Duration exceeds the signed 64-bit nanosecond range")

    @classmethod
    def parse(cls, text: str) -> "Duration":
        return cls(parse_duration(text))

    def is_positive(self) -> bool:
        return self.nanoseconds > 0

    def __str__(self) -> str:
        return format_duration(self.nanoseconds)


__all__ = [
    "Duration",
    "DurationError",
    "HOUR",
    "MICROSECOND",
    "MILLISECOND",
    "MINUTE",
    "NANOSECOND",
    "SECOND",
    "format_duration",
    "parse_duration",
]
