"""The MessagePack value tree: construction, inspection, conversion and display."""

from __future__ import annotations

import enum
import math
import struct
from collections.abc import Iterable, Mapping

from msgvalue.scalars import Integer, Utf8String, format_bytes, format_float

EXT_TAG_MIN = -128
EXT_TAG_MAX = 127


class ValueKind(enum.Enum):
    """The kinds of value MessagePack can represent."""

    NIL = "nil"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    F32 = "f32"
    F64 = "f64"
    STRING = "string"
    BINARY = "binary"
    ARRAY = "array"
    MAP = "map"
    EXT = "ext"


class ValueConversionError(ValueError):
    """Raised when a value cannot be converted to the requested type.

    The offending value is kept in the ``value`` attribute.
    """

    def __init__(self, value, target):
        super().__init__(f"cannot convert {value!r} to {target}")
        self.value = value
        self.target = target


def _round_f32(x):
    try:
        return struct.unpack("<f", struct.pack("<f", x))[0]
    except OverflowError:
        return math.copysign(math.inf, x)


def _as_float(x):
    if isinstance(x, bool) or not isinstance(x, (int, float)):
        raise TypeError(f"expected a number, got {type(x).__name__}")
    return float(x)


def _as_bytes(data):
    if isinstance(data, str):
        raise TypeError("expected bytes, got str")
    return bytes(data)


def _normalize(kind, payload):
    if kind is ValueKind.NIL:
        if payload is not None:
            raise TypeError("nil carries no payload")
        return None
    if kind is ValueKind.BOOLEAN:
        if not isinstance(payload, bool):
            raise TypeError(f"expected a bool, got {type(payload).__name__}")
        return payload
    if kind is ValueKind.INTEGER:
        return payload if isinstance(payload, Integer) else Integer(payload)
    if kind is ValueKind.F32:
        return _round_f32(_as_float(payload))
    if kind is ValueKind.F64:
        return _as_float(payload)
    if kind is ValueKind.STRING:
        if isinstance(payload, Utf8String):
            return payload
        if isinstance(payload, str):
            return Utf8String(payload)
        return Utf8String.from_bytes(_as_bytes(payload))
    if kind is ValueKind.BINARY:
        return _as_bytes(payload)
    if kind is ValueKind.ARRAY:
        return [Value.of(item) for item in payload]
    if kind is ValueKind.MAP:
        if isinstance(payload, Mapping):
            payload = payload.items()
        return [(Value.of(k), Value.of(v)) for k, v in payload]
    if kind is ValueKind.EXT:
        tag, data = payload
        if isinstance(tag, bool) or not isinstance(tag, int):
            raise TypeError(f"ext tag must be an int, got {type(tag).__name__}")
        if not EXT_TAG_MIN <= tag <= EXT_TAG_MAX:
            raise OverflowError(f"ext tag {tag} does not fit a signed byte")
        return (tag, _as_bytes(data))
    raise TypeError(f"unknown value kind {kind!r}")


class Value:
    """Any MessagePack value."""

    __slots__ = ("kind", "payload")

    def __init__(self, kind, payload):
        kind = ValueKind(kind)
        self.kind = kind
        self.payload = _normalize(kind, payload)

    # --- construction -------------------------------------------------

    @classmethod
    def nil(cls):
        return cls(ValueKind.NIL, None)

    @classmethod
    def boolean(cls, flag):
        return cls(ValueKind.BOOLEAN, flag)

    @classmethod
    def integer(cls, n):
        return cls(ValueKind.INTEGER, n)

    @classmethod
    def f32(cls, x):
        return cls(ValueKind.F32, x)

    @classmethod
    def f64(cls, x):
        return cls(ValueKind.F64, x)

    @classmethod
    def string(cls, text):
        return cls(ValueKind.STRING, text)

    @classmethod
    def binary(cls, data):
        return cls(ValueKind.BINARY, data)

    @classmethod
    def array(cls, items):
        return cls(ValueKind.ARRAY, items)

    @classmethod
    def map(cls, pairs):
        return cls(ValueKind.MAP, pairs)

    @classmethod
    def ext(cls, tag, data):
        return cls(ValueKind.EXT, (tag, data))

    @classmethod
    def of(cls, obj):
        """Build a value from a plain Python object."""
        if isinstance(obj, Value):
            return obj
        if obj is None:
            return cls.nil()
        if isinstance(obj, bool):
            return cls.boolean(obj)
        if isinstance(obj, (int, Integer)):
            return cls.integer(obj)
        if isinstance(obj, float):
            return cls.f64(obj)
        if isinstance(obj, (str, Utf8String)):
            return cls.string(obj)
        if isinstance(obj, (bytes, bytearray, memoryview)):
            return cls.binary(obj)
        if isinstance(obj, Mapping):
            return cls.map(obj)
        if isinstance(obj, (list, tuple)):
            return cls.array(obj)
        raise TypeError(f"cannot build a value from {type(obj).__name__}")

    @classmethod
    def from_iterable(cls, items):
        """Collect any iterable into an array; bytes become an array of integers."""
        if not isinstance(items, Iterable):
            raise TypeError(f"{type(items).__name__} is not iterable")
        return cls.array(list(items))

    # --- inspection ---------------------------------------------------

    def is_nil(self):
        return self.kind is ValueKind.NIL

    def is_bool(self):
        return self.kind is ValueKind.BOOLEAN

    def is_i64(self):
        return self.kind is ValueKind.INTEGER and self.payload.is_i64()

    def is_u64(self):
        return self.kind is ValueKind.INTEGER and self.payload.is_u64()

    def is_f32(self):
        return self.kind is ValueKind.F32

    def is_f64(self):
        return self.kind is ValueKind.F64

    def is_number(self):
        return self.kind in (ValueKind.INTEGER, ValueKind.F32, ValueKind.F64)

    def is_str(self):
        return self.as_str() is not None

    def is_bin(self):
        return self.as_slice() is not None

    def is_array(self):
        return self.kind is ValueKind.ARRAY

    def is_map(self):
        return self.kind is ValueKind.MAP

    def is_ext(self):
        return self.kind is ValueKind.EXT

    def as_bool(self):
        return self.payload if self.kind is ValueKind.BOOLEAN else None

    def as_i64(self):
        return self.payload.as_i64() if self.kind is ValueKind.INTEGER else None

    def as_u64(self):
        return self.payload.as_u64() if self.kind is ValueKind.INTEGER else None

    def as_f64(self):
        if self.kind is ValueKind.INTEGER:
            return self.payload.as_f64()
        if self.kind in (ValueKind.F32, ValueKind.F64):
            return self.payload
        return None

    def as_str(self):
        return self.payload.as_str() if self.kind is ValueKind.STRING else None

    def as_slice(self):
        """Return the bytes of a binary or string value, else None."""
        if self.kind is ValueKind.BINARY:
            return self.payload
        if self.kind is ValueKind.STRING:
            return self.payload.as_bytes()
        return None

    def as_array(self):
        return self.payload if self.kind is ValueKind.ARRAY else None

    def as_map(self):
        return self.payload if self.kind is ValueKind.MAP else None

    def as_ext(self):
        return self.payload if self.kind is ValueKind.EXT else None

    # --- checked conversion -------------------------------------------

    def _require(self, kind, target):
        if self.kind is not kind:
            raise ValueConversionError(self, target)
        return self.payload

    def to_bool(self):
        return self._require(ValueKind.BOOLEAN, "bool")

    def to_u64(self):
        result = self.as_u64()
        if result is None:
            raise ValueConversionError(self, "u64")
        return result

    def to_i64(self):
        result = self.as_i64()
        if result is None:
            raise ValueConversionError(self, "i64")
        return result

    def to_f64(self):
        result = self.as_f64()
        if result is None:
            raise ValueConversionError(self, "f64")
        return result

    def to_f32(self):
        return self._require(ValueKind.F32, "f32")

    def to_str(self):
        result = self.as_str()
        if result is None:
            raise ValueConversionError(self, "str")
        return result

    def to_utf8_string(self):
        return self._require(ValueKind.STRING, "Utf8String")

    def to_bytes(self):
        return self._require(ValueKind.BINARY, "bytes")

    def to_list(self):
        return self._require(ValueKind.ARRAY, "list")

    def to_pairs(self):
        return self._require(ValueKind.MAP, "map")

    # --- protocols ----------------------------------------------------

    def __getitem__(self, key):
        """Index an array by position or a map by string key; misses give nil."""
        if isinstance(key, bool):
            raise TypeError("value index must be an int or a str")
        if isinstance(key, int):
            if self.kind is ValueKind.ARRAY and 0 <= key < len(self.payload):
                return self.payload[key]
            return _NIL
        if isinstance(key, str):
            if self.kind is ValueKind.MAP:
                for k, v in self.payload:
                    if k.kind is ValueKind.STRING and k.payload.as_str() == key:
                        return v
            return _NIL
        raise TypeError("value index must be an int or a str")

    def __eq__(self, other):
        if not isinstance(other, Value):
            return NotImplemented
        return self.kind is other.kind and self.payload == other.payload

    __hash__ = None

    def __str__(self):
        kind = self.kind
        if kind is ValueKind.NIL:
            return "nil"
        if kind is ValueKind.BOOLEAN:
            return "true" if self.payload else "false"
        if kind is ValueKind.INTEGER:
            return str(self.payload)
        if kind is ValueKind.F32:
            return format_float(self.payload, True)
        if kind is ValueKind.F64:
            return format_float(self.payload, False)
        if kind is ValueKind.STRING:
            return str(self.payload)
        if kind is ValueKind.BINARY:
            return format_bytes(self.payload)
        if kind is ValueKind.ARRAY:
            return "[" + ", ".join(str(v) for v in self.payload) + "]"
        if kind is ValueKind.MAP:
            return "{" + ", ".join(f"{k}: {v}" for k, v in self.payload) + "}"
        tag, data = self.payload
        return f"[{tag}, {format_bytes(data)}]"

    def __repr__(self):
        kind = self.kind
        if kind is ValueKind.NIL:
            return "Value.nil()"
        if kind is ValueKind.INTEGER:
            return f"Value.integer({int(self.payload)})"
        if kind is ValueKind.EXT:
            tag, data = self.payload
            return f"Value.ext({tag}, {data!r})"
        factory = {
            ValueKind.BOOLEAN: "boolean",
            ValueKind.F32: "f32",
            ValueKind.F64: "f64",
            ValueKind.STRING: "string",
            ValueKind.BINARY: "binary",
            ValueKind.ARRAY: "array",
            ValueKind.MAP: "map",
        }[kind]
        return f"Value.{factory}({self.payload!r})"


_NIL = Value.nil()