import math

import pytest

from msgvalue.scalars import Integer, Utf8String
from msgvalue.value import Value, ValueConversionError, ValueKind


def test_display_nil():
    assert str(Value.nil()) == "nil"


def test_display_bool():
    assert str(Value.boolean(True)) == "true"
    assert str(Value.boolean(False)) == "false"


def test_display_int():
    assert str(Value.of(42)) == "42"
    assert str(Value.integer(-7)) == "-7"


def test_display_float():
    assert str(Value.f32(3.1415)) == "3.1415"
    assert str(Value.f64(3.1415)) == "3.1415"


def test_display_string():
    assert str(Value.string("le string")) == '"le string"'


def test_display_binary():
    assert str(Value.binary(b"le string")) == "[108, 101, 32, 115, 116, 114, 105, 110, 103]"


def test_display_array():
    assert str(Value.array([])) == "[]"
    assert str(Value.array([Value.nil()])) == "[nil]"
    assert str(Value.array([Value.nil(), Value.nil()])) == "[nil, nil]"


def test_display_map():
    assert str(Value.map([])) == "{}"
    assert str(Value.map([(Value.nil(), Value.nil())])) == "{nil: nil}"
    pairs = [(Value.nil(), Value.nil()), (Value.boolean(True), Value.boolean(False))]
    assert str(Value.map(pairs)) == "{nil: nil, true: false}"


def test_display_ext():
    assert str(Value.ext(1, b"")) == "[1, []]"
    assert str(Value.ext(1, bytes([100]))) == "[1, [100]]"
    assert str(Value.ext(1, bytes([100, 42]))) == "[1, [100, 42]]"


def test_from_bool():
    assert Value.of(True) == Value.boolean(True)
    assert Value.of(False) == Value.boolean(False)


@pytest.mark.parametrize("n", [42, -42])
def test_from_int(n):
    assert Value.of(n) == Value.integer(n)
    assert Value.of(Integer(n)) == Value.integer(n)


def test_from_f32():
    assert Value.f32(3.1415) == Value(ValueKind.F32, 3.1415)


def test_from_f64():
    assert Value.of(3.1415) == Value.f64(3.1415)


def test_from_iterator():
    w = Value.from_iterable(bytes([0, 1, 2]))
    assert w == Value.array([Value.of(0), Value.of(1), Value.of(2)])
    assert w != Value.binary(bytes([0, 1, 2]))


def test_is_nil():
    assert Value.nil().is_nil()
    assert not Value.boolean(True).is_nil()


def test_monadic_index():
    val = Value.array([
        Value.array([Value.string("value"), Value.boolean(True)]),
        Value.boolean(False),
    ])
    assert val[0][0].as_str() == "value"
    assert val[0][1].as_bool() is True
    assert val[1].as_bool() is False
    assert val[0][0][0].is_nil()
    assert val[2].is_nil()
    assert val[1][2][3][4][5].is_nil()


def test_index_into_map():
    val = Value.map([
        (Value.string("a"), Value.of(1)),
        (Value.string("b"), Value.array([Value.of(3), Value.of(4), Value.of(5)])),
        (Value.string("c"), Value.map([
            (Value.string("d"), Value.of(8)),
            (Value.string("e"), Value.of(9)),
        ])),
    ])
    assert val["a"].as_i64() == 1
    assert val["b"][2].as_i64() == 5
    assert val["c"]["e"].as_i64() == 9
    assert val["b"][3].is_nil()
    assert val["d"][4].is_nil()


def test_index_with_bad_key_type():
    with pytest.raises(TypeError):
        Value.array([])[1.5]


def test_try_from_val():
    assert Value.boolean(False).to_bool() is False
    assert Value.of("spook").to_utf8_string() == Utf8String("spook")
    assert Value.of("spook").to_str() == "spook"
    assert Value.binary(bytes([0])).to_bytes() == b"\x00"


def test_conversion_errors_keep_value():
    val = Value.nil()
    with pytest.raises(ValueConversionError) as info:
        val.to_bool()
    assert info.value.value == val


def test_to_u64_rejects_negative():
    with pytest.raises(ValueConversionError):
        Value.of(-1).to_u64()


def test_to_i64_rejects_large():
    with pytest.raises(ValueConversionError):
        Value.of(2**64 - 1).to_i64()
    assert Value.of(2**64 - 1).to_u64() == 2**64 - 1


def test_to_f64_accepts_numbers():
    assert Value.of(42).to_f64() == 42.0
    assert Value.f32(42.0).to_f64() == 42.0
    with pytest.raises(ValueConversionError):
        Value.string("x").to_f64()


def test_to_f32_only_f32():
    assert Value.f32(1.5).to_f32() == 1.5
    with pytest.raises(ValueConversionError):
        Value.f64(1.5).to_f32()


def test_to_str_rejects_invalid_utf8():
    val = Value.string(Utf8String.from_bytes(b"\xc3\x28"))
    with pytest.raises(ValueConversionError):
        val.to_str()
    assert val.as_slice() == b"\xc3\x28"


def test_to_list_and_pairs():
    assert Value.array([1, 2]).to_list() == [Value.of(1), Value.of(2)]
    assert Value.map({"k": 1}).to_pairs() == [(Value.string("k"), Value.of(1))]
    with pytest.raises(ValueConversionError):
        Value.nil().to_list()


def test_kind_predicates():
    assert Value.of(42).is_i64()
    assert not Value.of(42.0).is_i64()
    assert Value.of(42).is_u64()
    assert not Value.f32(42.0).is_u64()
    assert Value.f32(42.0).is_f32()
    assert not Value.f64(42.0).is_f32()
    assert Value.f64(42.0).is_f64()
    assert Value.of(42).is_number()
    assert not Value.nil().is_number()
    assert Value.string("value").is_str()
    assert Value.string("value").is_bin()
    assert Value.binary(b"x").is_bin()
    assert Value.array([]).is_array()
    assert Value.map([]).is_map()
    assert Value.ext(1, b"").is_ext()


def test_as_accessors():
    assert Value.of(42).as_u64() == 42
    assert Value.of(-42).as_u64() is None
    assert Value.f64(42.0).as_i64() is None
    assert Value.of(2147483647).as_f64() == 2147483647.0
    assert Value.nil().as_f64() is None
    assert Value.boolean(True).as_str() is None
    assert Value.binary(bytes([1, 2, 3, 4, 5])).as_slice() == bytes([1, 2, 3, 4, 5])
    assert Value.boolean(True).as_slice() is None
    assert Value.ext(42, bytes([1, 2, 3])).as_ext() == (42, bytes([1, 2, 3]))
    assert Value.boolean(True).as_ext() is None
    assert Value.nil().as_array() is None
    assert Value.map([(None, True)]).as_map() == [(Value.nil(), Value.boolean(True))]


def test_nan_is_not_equal_to_itself():
    val = Value.f64(math.nan)
    assert (val == Value.f64(math.nan)) is False
    assert math.isnan(val.as_f64())


def test_f32_is_rounded():
    assert Value.f32(0.1).as_f64() != 0.1
    assert Value.f32(1e300).as_f64() == math.inf


def test_ext_tag_range():
    with pytest.raises(OverflowError):
        Value.ext(128, b"")
    assert Value.ext(-128, b"").as_ext() == (-128, b"")


def test_integer_range():
    with pytest.raises(OverflowError):
        Value.integer(2**64)


def test_of_rejects_unknown_type():
    with pytest.raises(TypeError):
        Value.of(object())


def test_repr_roundtrip_shape():
    assert repr(Value.integer(5)) == "Value.integer(5)"
    assert repr(Value.nil()) == "Value.nil()"