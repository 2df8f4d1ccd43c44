"""String helpers: integer parsing and printing, splitting, trimming and a small printf."""

from __future__ import annotations

import string
from itertools import takewhile
from typing import Any, Callable

_WHITESPACE = " \t\n\v\f\r"
_INT_MIN = -(1 << 31)
_INT_MAX = (1 << 31) - 1
_UINT_MASK = (1 << 32) - 1
_ULONG_MASK = (1 << 64) - 1


def _wrap_int32(value: int) -> int:
    value &= _UINT_MASK
    return value - (1 << 32) if value > _INT_MAX else value


def atoi(text: str) -> int:
    """Parse a leading decimal integer the way C's atoi does, wrapping to 32 bits.

    Leading whitespace is skipped, one optional sign is accepted, and
    parsing stops at the first non-digit.  No digits gives 0.
    """
    rest = text.lstrip(_WHITESPACE)
    sign = 1
    if rest[:1] in ("-", "+"):
        if rest[0] == "-":
            sign = -1
        rest = rest[1:]
    digits = "".join(takewhile(lambda char: char in string.digits, rest))
    return _wrap_int32(sign * int(digits or "0"))


def itoa(n: int) -> str:
    """Render a 32-bit signed integer in decimal."""
    if not _INT_MIN <= n <= _INT_MAX:
        raise OverflowError(f"{n} does not fit in a 32-bit int")
    return str(n)


def split(text: str, sep: str) -> list[str]:
    """Split *text* on the single character *sep*, dropping empty words."""
    if len(sep) != 1:
        raise ValueError("separator must be a single character")
    return [word for word in text.split(sep) if word]


def strtrim(text: str, chars: str) -> str:
    """Remove any of *chars* from both ends of *text*."""
    return text.strip(chars)


def substr(text: str, start: int, length: int) -> str:
    """Return at most *length* characters of *text* starting at *start*."""
    if start < 0 or length < 0:
        raise ValueError("start and length must not be negative")
    return text[start:start + length]


def strnstr(haystack: str, needle: str, length: int) -> int | None:
    """Index of *needle* lying wholly within the first *length* characters, or None.

    An empty needle is found at index 0.
    """
    if length < 0:
        raise ValueError("length must not be negative")
    index = haystack.find(needle, 0, length)
    return None if index < 0 else index


def _char(value: Any) -> str:
    if isinstance(value, str):
        if len(value) != 1:
            raise ValueError("%c needs a single character")
        return value
    return chr(value & 0xFF)


def _string(value: Any) -> str:
    return "(null)" if value is None else str(value)


def _pointer(value: Any) -> str:
    if not value:
        return "(nil)"
    return "0x" + format(value & _ULONG_MASK, "x")


def _signed(value: Any) -> str:
    return str(_wrap_int32(value))


def _unsigned(value: Any) -> str:
    return str(value & _UINT_MASK)


def _hex_lower(value: Any) -> str:
    return format(value & _UINT_MASK, "x")


def _hex_upper(value: Any) -> str:
    return format(value & _UINT_MASK, "X")


_CONVERSIONS: dict[str, Callable[[Any], str]] = {
    "c": _char,
    "s": _string,
    "p": _pointer,
    "d": _signed,
    "i": _signed,
    "u": _unsigned,
    "x": _hex_lower,
    "X": _hex_upper,
}


def format_printf(fmt: str, *args: Any) -> str:
    """Format *args* with the conversions %c %s %p %d %i %u %x %X and %%.

    An unknown conversion produces no output and consumes no argument.
    Raises ValueError when the format asks for more arguments than given.
    """
    pieces: list[str] = []
    values = iter(args)
    chars = iter(fmt)
    for char in chars:
        if char != "%":
            pieces.append(char)
            continue
        conversion = next(chars, "")
        if conversion == "%":
            pieces.append("%")
        elif conversion in _CONVERSIONS:
            try:
                value = next(values)
            except StopIteration:
                raise ValueError(f"no argument for %{conversion}") from None
            pieces.append(_CONVERSIONS[conversion](value))
    return "".join(pieces)