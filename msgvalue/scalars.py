"""Scalar building blocks of MessagePack values: integers, UTF-8 strings and text formatting."""

from __future__ import annotations

import math
import struct
from decimal import Decimal

I64_MIN = -(2**63)
I64_MAX = 2**63 - 1
U64_MAX = 2**64 - 1


class Integer:
    """A MessagePack integer, limited to the range -(2**63) .. 2**64 - 1."""

    __slots__ = ("_n",)

    def __init__(self, n):
        if isinstance(n, bool) or not isinstance(n, int):
            raise TypeError(f"Integer expects an int, got {type(n).__name__}")
        if not I64_MIN <= n <= U64_MAX:
            raise OverflowError(f"{n} is out of the MessagePack integer range")
        self._n = n

    def is_i64(self):
        """Return True if the integer fits a signed 64-bit integer."""
        return self._n <= I64_MAX

    def is_u64(self):
        """Return True if the integer fits an unsigned 64-bit integer."""
        return self._n >= 0

    def as_i64(self):
        """Return the integer if it fits a signed 64-bit integer, else None."""
        return self._n if self.is_i64() else None

    def as_u64(self):
        """Return the integer if it fits an unsigned 64-bit integer, else None."""
        return self._n if self.is_u64() else None

    def as_f64(self):
        """Return the integer converted to a float."""
        return float(self._n)

    def __int__(self):
        return self._n

    def __index__(self):
        return self._n

    def __str__(self):
        return str(self._n)

    def __repr__(self):
        return f"Integer({self._n})"

    def __eq__(self, other):
        if isinstance(other, Integer):
            return self._n == other._n
        return NotImplemented

    def __hash__(self):
        return hash(self._n)


def _debug_quote(text):
    parts = ['"']
    for ch in text:
        if ch == '"':
            parts.append('\\"')
        elif ch == "\\":
            parts.append("\\\\")
        elif ch == "\n":
            parts.append("\\n")
        elif ch == "\r":
            parts.append("\\r")
        elif ch == "\t":
            parts.append("\\t")
        elif ch == "\0":
            parts.append("\\0")
        elif not ch.isprintable() and ch != " ":
            parts.append(f"\\u{{{ord(ch):x}}}")
        else:
            parts.append(ch)
    parts.append('"')
    return "".join(parts)


def format_bytes(data):
    """Format a byte sequence as a bracketed list of decimal byte values."""
    return "[" + ", ".join(str(b) for b in bytes(data)) + "]"


def _to_f32(value):
    try:
        return struct.unpack("<f", struct.pack("<f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def _shortest_f32(value):
    for precision in range(1, 10):
        text = f"{value:.{precision}g}"
        if _to_f32(float(text)) == value:
            return text
    return repr(value)


def format_float(value, single):
    """Format a float in plain decimal notation using the shortest round-trip digits.

    With ``single`` set, the value is treated as a 32-bit float.
    """
    value = float(value)
    if single:
        value = _to_f32(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    digits = _shortest_f32(value) if single else repr(value)
    text = format(Decimal(digits), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


class Utf8String:
    """A MessagePack string that may hold bytes which are not valid UTF-8."""

    __slots__ = ("_text", "_raw", "_error")

    def __init__(self, data):
        if not isinstance(data, str):
            raise TypeError(f"Utf8String expects a str, got {type(data).__name__}")
        self._raw = data.encode("utf-8")
        self._text = data
        self._error = None

    @classmethod
    def from_bytes(cls, data):
        """Build from raw bytes, keeping them even when they are not valid UTF-8."""
        raw = bytes(data)
        try:
            return cls(raw.decode("utf-8"))
        except UnicodeDecodeError as exc:
            obj = cls.__new__(cls)
            obj._raw = raw
            obj._text = None
            obj._error = exc
            return obj

    def is_str(self):
        """Return True if the contents are valid UTF-8."""
        return self._text is not None

    def is_err(self):
        """Return True if the contents are not valid UTF-8."""
        return self._text is None

    def as_str(self):
        """Return the text if valid, else None."""
        return self._text

    def as_err(self):
        """Return the decoding error if the contents are invalid, else None."""
        return self._error

    def as_bytes(self):
        """Return the raw bytes, valid or not."""
        return self._raw

    def __str__(self):
        if self._text is not None:
            return _debug_quote(self._text)
        return format_bytes(self._raw)

    def __repr__(self):
        if self._text is not None:
            return f"Utf8String({self._text!r})"
        return f"Utf8String.from_bytes({self._raw!r})"

    def __eq__(self, other):
        if isinstance(other, Utf8String):
            return self.is_str() == other.is_str() and self._raw == other._raw
        return NotImplemented

    def __hash__(self):
        return hash((self.is_str(), self._raw))