import base64

import pytest

from siojson.codec import (
    JsonDecodeError,
    JsonType,
    as_binary,
    is_binary,
    json_string_to_array,
    json_string_to_value,
    json_type,
    to_json_object,
    to_json_string,
)


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, JsonType.NULL),
        (True, JsonType.BOOLEAN),
        (3, JsonType.NUMBER),
        (2.5, JsonType.NUMBER),
        ("text", JsonType.STRING),
        (b"\x00\x01", JsonType.BINARY),
        ([1, 2], JsonType.ARRAY),
        ({"a": 1}, JsonType.OBJECT),
        (object(), JsonType.NONE),
    ],
)
def test_json_type(value, expected):
    assert json_type(value) is expected


def test_is_binary():
    assert is_binary(b"abc") is True
    assert is_binary("abc") is False
    assert is_binary(None) is False


def test_as_binary_passes_bytes_through():
    data = bytes(range(10))
    assert as_binary(data) == data


def test_as_binary_decodes_base64_strings():
    data = b"hello binary"
    assert as_binary(base64.b64encode(data).decode("ascii")) == data


def test_as_binary_invalid_base64_is_empty():
    assert as_binary("not base64 !!") == b""


def test_as_binary_other_kinds_are_empty():
    assert as_binary(12.0) == b""
    assert as_binary([1, 2]) == b""


def test_to_json_string_scalars():
    assert to_json_string(None) == ""
    assert to_json_string("plain") == "plain"
    assert to_json_string(True) == "1"
    assert to_json_string(False) == "0"
    assert to_json_string(1.5) == "1.500000"


def test_to_json_string_containers_round_trip():
    value = {"name": "x", "items": [1.0, 2.5, True, None], "nested": {"k": "v"}}
    text = to_json_string(value)
    assert " " not in text
    assert to_json_object(text) == value


def test_to_json_string_array_round_trip():
    value = ["a", 2.0, False, {"b": None}]
    assert json_string_to_array(to_json_string(value)) == value


def test_to_json_string_binary_inside_container_is_base64():
    data = b"\xff\x00payload"
    text = to_json_string({"blob": data})
    assert as_binary(to_json_object(text)["blob"]) == data


def test_to_json_string_rejects_foreign_objects_in_containers():
    with pytest.raises(TypeError):
        to_json_string([object()])


def test_json_string_to_value_empty_is_null():
    assert json_string_to_value("") is None


@pytest.mark.parametrize("text", ["42", "-3.25", "+7", "0.5"])
def test_json_string_to_value_numbers(text):
    assert json_string_to_value(text) == float(text)


def test_json_string_to_value_exponent_is_not_numeric():
    assert json_string_to_value("1e5") == "1e5"


def test_json_string_to_value_object():
    assert json_string_to_value('{"a":"b"}') == {"a": "b"}


def test_json_string_to_value_array():
    assert json_string_to_value('[1,"two"]') == [1.0, "two"]


def test_json_string_to_value_bad_array_falls_back_to_string():
    assert json_string_to_value("[oops") == "[oops"


def test_json_string_to_value_booleans():
    assert json_string_to_value("true") is True
    assert json_string_to_value("false") is False


def test_json_string_to_value_other_text_is_string():
    assert json_string_to_value("hello world") == "hello world"


def test_json_string_to_value_bad_object_raises():
    with pytest.raises(JsonDecodeError):
        json_string_to_value("{broken")


def test_to_json_object_requires_object():
    with pytest.raises(JsonDecodeError):
        to_json_object("[1,2]")


def test_json_string_to_array_requires_array():
    with pytest.raises(JsonDecodeError):
        json_string_to_array('{"a":1}')


def test_parse_rejects_nan():
    with pytest.raises(JsonDecodeError):
        json_string_to_array("[NaN]")


def test_numbers_parse_as_floats():
    result = to_json_object('{"n":3}')
    assert isinstance(result["n"], float)
    assert result["n"] == 3


def test_decode_error_is_value_error():
    with pytest.raises(ValueError):
        to_json_object("not json")