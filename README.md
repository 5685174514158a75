# msgvalue

A small model of MessagePack values for Python. It has no dependencies.

The package has two modules:

- `msgvalue.scalars` provides `Integer`, `Utf8String`, `format_float` and
  `format_bytes`.
- `msgvalue.value` provides `Value`, `ValueKind` and `ValueConversionError`.

## What it does not do

This package only models values in memory. It does not encode values to
MessagePack bytes, and it does not decode bytes into values. It has no
command-line tool.

## Installation

```
pip install msgvalue
```

## Building values

A `Value` has a `kind`, which is a `ValueKind` member: `NIL`, `BOOLEAN`,
`INTEGER`, `F32`, `F64`, `STRING`, `BINARY`, `ARRAY`, `MAP` or `EXT`. It also
has a `payload`. Each kind has its own constructor:

```python
from msgvalue.value import Value

v = Value.array([
    Value.nil(),
    Value.of(42),
    Value.map([(Value.string("key"), Value.string("value"))]),
])

print(v)          # [nil, 42, {"key": "value"}]
```

The constructors are:

- `Value.nil()`
- `Value.boolean(flag)`
- `Value.integer(n)`
- `Value.f32(x)`. The number is rounded to 32-bit precision.
- `Value.f64(x)`
- `Value.string(text)`. It takes a `str`, a `Utf8String` or raw bytes.
- `Value.binary(data)`
- `Value.array(items)`
- `Value.map(pairs)`. It takes a sequence of key/value pairs or a mapping. Order is kept.
- `Value.ext(tag, data)`. The tag must be between -128 and 127. Otherwise it raises `OverflowError`.

Items of arrays and maps go through `Value.of`. That method picks the kind from
an ordinary Python object:

| Python object | Kind |
|---|---|
| `None` | nil |
| `bool` | boolean |
| `int` or `Integer` | integer |
| `float` | f64 |
| `str` or `Utf8String` | string |
| `bytes`, `bytearray` or `memoryview` | binary |
| mappings | map |
| lists and tuples | array |

Any other type raises `TypeError`.

`Value.from_iterable` collects any iterable into an array. Bytes passed to it
become an array of integers, not a binary.

## Inspecting values

Kind tests:

- `is_nil`, `is_bool`, `is_i64`, `is_u64`, `is_f32`, `is_f64`
- `is_number`, `is_str`, `is_bin`, `is_array`, `is_map`, `is_ext`

The `as_*` methods return the contents, or `None` when the value does not fit:

```python
Value.of(42).as_i64()        # 42
Value.of(-42).as_u64()       # None
Value.f32(42.0).as_f64()     # 42.0
Value.string("hi").as_str()  # "hi"
Value.binary(b"ab").as_slice()  # b"ab"
Value.ext(1, b"\x02").as_ext()  # (1, b"\x02")
```

`as_slice` returns the bytes of both binaries and strings. `as_str` returns
`None` for a string that is not valid UTF-8.

You can index an array with an integer or a map with a string key. Nil is
returned when nothing matches, including when the value is not an array or a
map. Any other kind of key, including `bool`, raises `TypeError`.

```python
val = Value.map([(Value.string("b"), Value.array([Value.of(3), Value.of(4)]))])
val["b"][1].as_i64()   # 4
val["b"][9].is_nil()   # True
```

Values compare equal when their kind and contents are equal. `Value.of(42)`
does not equal `Value.f64(42.0)`. Values are not hashable.

## Strict conversions

These methods return the contents directly:

- `to_bool`, `to_i64`, `to_u64`, `to_f64`, `to_f32`
- `to_str`, `to_utf8_string`, `to_bytes`, `to_list`, `to_pairs`

They raise `ValueConversionError` when the value has the wrong kind or is out
of range. `ValueConversionError` is a subclass of `ValueError`. The offending
value is kept in its `value` attribute, and the requested type is kept in
`target`.

## Display

`str(value)` gives a compact text form:

| Kind | Text form |
|---|---|
| nil | `nil` |
| booleans | `true` or `false` |
| integers | decimal |
| floats | the shortest decimal that round-trips, e.g. `3.1415`; specials are `NaN`, `inf` and `-inf` |
| valid strings | quoted with escapes |
| binaries and invalid strings | lists of byte values, e.g. `[108, 101]` |
| arrays | `[a, b]` |
| maps | `{k: v}` |
| ext values | `[tag, [bytes]]` |

The helpers `format_float(value, single)` and `format_bytes(data)` in
`msgvalue.scalars` are available on their own.

## Integer and Utf8String

`Integer(n)` accepts an `int` from `-(2**63)` to `2**64 - 1`. It raises
`OverflowError` outside that range and `TypeError` for non-integers, bools
included. It provides:

- `is_i64` and `is_u64`
- `as_i64` and `as_u64`, which return `None` when the number does not fit
- `as_f64`
- `int()` conversion

`Utf8String(text)` wraps a `str`. `Utf8String.from_bytes(data)` keeps the
original bytes even when they are not valid UTF-8. In that case:

- `is_err()` is true.
- `as_str()` is `None`.
- `as_err()` returns the `UnicodeDecodeError`.

`as_bytes()` always returns the raw bytes.

## Running the tests

```
pip install -e .[test]
pytest
```