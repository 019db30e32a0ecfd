"""JSON value model and string codec.

JSON values are plain Python objects: ``None`` (null), ``bool``, ``int`` or
``float`` (number), ``str``, ``list``, ``dict`` and ``bytes`` (binary, carried
as a base64 string when written out as text).
"""

from __future__ import annotations

import base64
import binascii
import enum
import json
import math
import re
from typing import Any

__all__ = [
    "JsonType",
    "JsonDecodeError",
    "json_type",
    "is_binary",
    "as_binary",
    "to_json_string",
    "json_string_to_value",
    "json_string_to_array",
    "to_json_object",
]

_NUMERIC = re.compile(r"[+-]?[0-9]*\.?[0-9]*")
_LEADING_FLOAT = re.compile(r"\s*[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


class JsonType(enum.Enum):
    """Kind of a JSON value."""

    NONE = "None"
    NULL = "Null"
    STRING = "String"
    NUMBER = "Number"
    BOOLEAN = "Boolean"
    ARRAY = "Array"
    OBJECT = "Object"
    BINARY = "Binary"


class JsonDecodeError(ValueError):
    """Raised when text cannot be read as the JSON shape asked for."""


def json_type(value: Any) -> JsonType:
    """Return the JSON kind of a Python value; unknown objects are NONE."""
    if value is None:
        return JsonType.NULL
    if isinstance(value, bool):
        return JsonType.BOOLEAN
    if isinstance(value, (int, float)):
        return JsonType.NUMBER
    if isinstance(value, str):
        return JsonType.STRING
    if isinstance(value, (bytes, bytearray, memoryview)):
        return JsonType.BINARY
    if isinstance(value, (list, tuple)):
        return JsonType.ARRAY
    if isinstance(value, dict):
        return JsonType.OBJECT
    return JsonType.NONE


def is_binary(value: Any) -> bool:
    """Tell whether a value is raw binary data."""
    return json_type(value) is JsonType.BINARY


def _decode_base64(text: str) -> bytes:
    return base64.b64decode(text.encode("ascii"), validate=True)


def as_binary(value: Any) -> bytes:
    """Return a value's bytes; strings are read as base64.

    A string that is not valid base64, or any other kind of value, gives
    empty bytes.
    """
    if is_binary(value):
        return bytes(value)
    if isinstance(value, str):
        try:
            return _decode_base64(value)
        except (binascii.Error, ValueError):
            return b""
    return b""


def _prepare(value: Any) -> Any:
    """Turn a value tree into one the standard encoder writes condensed."""
    kind = json_type(value)
    if kind is JsonType.BINARY:
        return base64.b64encode(bytes(value)).decode("ascii")
    if kind is JsonType.NUMBER and not isinstance(value, bool):
        if isinstance(value, float) and math.isfinite(value) and value.is_integer():
            return int(value)
        return value
    if kind is JsonType.ARRAY:
        return [_prepare(item) for item in value]
    if kind is JsonType.OBJECT:
        return {str(key): _prepare(item) for key, item in value.items()}
    if kind is JsonType.NONE:
        raise TypeError(f"not a JSON value: {type(value).__name__}")
    return value


def _dumps(value: Any) -> str:
    return json.dumps(_prepare(value), separators=(",", ":"), ensure_ascii=False, allow_nan=False)


def to_json_string(value: Any) -> str:
    """Render a value as text.

    Null gives an empty string, strings come back as they are, numbers use
    six decimal places, booleans give ``1`` or ``0`` and arrays and objects
    are written as condensed JSON.
    """
    kind = json_type(value)
    if kind in (JsonType.NONE, JsonType.NULL):
        return ""
    if kind is JsonType.STRING:
        return value
    if kind is JsonType.BINARY:
        return _prepare(value)
    if kind is JsonType.BOOLEAN:
        return "1" if value else "0"
    if kind is JsonType.NUMBER:
        return f"{float(value):f}"
    return _dumps(value)


def _reject_constant(name: str) -> Any:
    raise JsonDecodeError(f"invalid JSON constant {name!r}")


def _loads(text: str) -> Any:
    try:
        return json.loads(text, parse_int=float, parse_constant=_reject_constant)
    except json.JSONDecodeError as exc:
        raise JsonDecodeError(str(exc)) from exc


def _atod(text: str) -> float:
    match = _LEADING_FLOAT.match(text)
    return float(match.group()) if match else 0.0


def json_string_to_value(text: str) -> Any:
    """Guess the value a piece of text stands for.

    Empty text is null, plain decimal text is a number, text starting with
    ``{`` is an object, text that parses as an array is an array, ``true``
    and ``false`` are booleans and anything else stays a string.
    """
    if not text:
        return None
    if _NUMERIC.fullmatch(text):
        return _atod(text)
    if text.startswith("{"):
        return to_json_object(text)
    if text.startswith("["):
        try:
            return json_string_to_array(text)
        except JsonDecodeError:
            pass
    if text in ("true", "false"):
        return text == "true"
    return text


def json_string_to_array(text: str) -> list:
    """Parse text that holds a JSON array."""
    result = _loads(text)
    if not isinstance(result, list):
        raise JsonDecodeError("JSON text is not an array")
    return result


def to_json_object(text: str) -> dict:
    """Parse text that holds a JSON object."""
    result = _loads(text)
    if not isinstance(result, dict):
        raise JsonDecodeError("JSON text is not an object")
    return result