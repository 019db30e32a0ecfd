"""Wrapper classes around JSON values and JSON objects.

A :class:`JsonValue` holds one JSON value (or nothing at all). A
:class:`JsonObject` holds a ``dict`` and offers typed field access. Values
handed out by either class share their containers with the source they
came from, so changes made through one are seen through the other.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Iterable

from .codec import (
    JsonDecodeError,
    JsonType,
    as_binary,
    json_string_to_value,
    json_type,
    to_json_object,
    to_json_string,
)

__all__ = ["JsonValue", "JsonObject"]

_HEX = re.compile(r"(?:[0-9a-fA-F]{2})*")


class _Unset:
    """Marker for a value wrapper that holds nothing."""

    _instance: "_Unset | None" = None

    def __new__(cls) -> "_Unset":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "<unset>"


_UNSET = _Unset()


@dataclass
class JsonValue:
    """A single JSON value; ``root`` is the plain Python value it holds."""

    root: Any = _UNSET

    # Construction

    @classmethod
    def from_number(cls, number: float) -> "JsonValue":
        return cls(float(number))

    @classmethod
    def from_string(cls, text: str) -> "JsonValue":
        return cls(str(text))

    @classmethod
    def from_bool(cls, flag: bool) -> "JsonValue":
        return cls(bool(flag))

    @classmethod
    def from_array(cls, values: Iterable["JsonValue"]) -> "JsonValue":
        return cls([value.root for value in values])

    @classmethod
    def from_object(cls, json_object: "JsonObject") -> "JsonValue":
        return cls(json_object.root)

    @classmethod
    def from_binary(cls, data: bytes) -> "JsonValue":
        return cls(bytes(data))

    @classmethod
    def from_json_string(cls, text: str) -> "JsonValue":
        """Build a value by guessing what the text stands for."""
        return cls(json_string_to_value(text))

    # Inspection

    @property
    def _is_set(self) -> bool:
        return self.root is not _UNSET

    def type(self) -> JsonType:
        if not self._is_set:
            return JsonType.NONE
        return json_type(self.root)

    def type_string(self) -> str:
        """Name of the value's kind; binary data is reported as ``String``."""
        kind = self.type()
        if kind is JsonType.BINARY:
            return JsonType.STRING.value
        return kind.value

    def is_null(self) -> bool:
        return not self._is_set or self.root is None

    def _wrong_type(self, wanted: str) -> TypeError:
        return TypeError(f"JSON value of type {self.type_string()!r} used as a {wanted!r}")

    # Conversion

    def as_number(self) -> float:
        if self.type() is not JsonType.NUMBER:
            raise self._wrong_type("Number")
        return float(self.root)

    def as_string(self) -> str:
        """Return the string; other kinds are rendered as text."""
        if not self._is_set:
            raise self._wrong_type("String")
        if isinstance(self.root, str):
            return self.root
        return self.encode_json()

    def as_bool(self) -> bool:
        if self.type() is not JsonType.BOOLEAN:
            raise self._wrong_type("Boolean")
        return self.root

    def as_array(self) -> list["JsonValue"]:
        if self.type() is not JsonType.ARRAY:
            raise self._wrong_type("Array")
        return [JsonValue(item) for item in self.root]

    def as_object(self) -> "JsonObject":
        if self.type() is not JsonType.OBJECT:
            raise self._wrong_type("Object")
        return JsonObject(self.root)

    def as_binary(self) -> bytes:
        """Return binary data; strings are read as hex, anything else is empty."""
        if not self._is_set:
            raise self._wrong_type("Binary")
        kind = self.type()
        if kind is JsonType.BINARY:
            return as_binary(self.root)
        if kind is JsonType.STRING:
            if _HEX.fullmatch(self.root):
                return bytes.fromhex(self.root)
            return b""
        return b""

    def encode_json(self) -> str:
        if not self._is_set:
            return ""
        return to_json_string(self.root)


@dataclass
class JsonObject:
    """A JSON object with typed field access; ``root`` is its ``dict``."""

    root: dict = field(default_factory=dict)

    def reset(self) -> None:
        """Drop all fields by starting over with a fresh dict."""
        self.root = {}

    # Serialization

    def encode_json(self) -> str:
        return to_json_string(self.root)

    def encode_json_to_single_string(self) -> str:
        return self.encode_json().replace("\r\n", "").replace("\n", "").replace("\t", "")

    def decode_json(self, text: str) -> None:
        """Replace the contents with the object parsed from text.

        On failure the object is left empty and :class:`JsonDecodeError`
        is raised.
        """
        try:
            self.root = to_json_object(text)
        except JsonDecodeError:
            self.reset()
            raise

    # Generic field access

    def field_names(self) -> list[str]:
        return list(self.root)

    def has_field(self, name: str) -> bool:
        return bool(name) and name in self.root

    def remove_field(self, name: str) -> None:
        if name:
            self.root.pop(name, None)

    def get_field(self, name: str) -> JsonValue | None:
        """Return the field wrapped as a value, or ``None`` if it is absent."""
        if not name or name not in self.root:
            return None
        return JsonValue(self.root[name])

    def set_field(self, name: str, value: JsonValue) -> None:
        if not name:
            return
        if value.type() is JsonType.NONE:
            raise TypeError(f"cannot store an empty value in field {name!r}")
        self.root[name] = value.root

    def _typed(self, name: str, *kinds: JsonType) -> Any:
        if name in self.root and json_type(self.root[name]) in kinds:
            return self.root[name]
        wanted = kinds[0].value
        raise KeyError(f"no field with name {name} of type {wanted}")

    # Scalar fields

    def get_number_field(self, name: str) -> float:
        return float(self._typed(name, JsonType.NUMBER))

    def set_number_field(self, name: str, number: float) -> None:
        if name:
            self.root[name] = float(number)

    def get_string_field(self, name: str) -> str:
        return to_json_string(self._typed(name, JsonType.STRING, JsonType.BINARY))

    def set_string_field(self, name: str, text: str) -> None:
        if name:
            self.root[name] = str(text)

    def get_bool_field(self, name: str) -> bool:
        return self._typed(name, JsonType.BOOLEAN)

    def set_bool_field(self, name: str, flag: bool) -> None:
        if name:
            self.root[name] = bool(flag)

    # Compound fields

    def get_array_field(self, name: str) -> list[JsonValue]:
        return [JsonValue(item) for item in self._typed(name, JsonType.ARRAY)]

    def set_array_field(self, name: str, values: Iterable[JsonValue]) -> None:
        """Store copies of the values; binary and empty values are left out."""
        if not name:
            return
        items = []
        for value in values:
            kind = value.type()
            if kind is JsonType.ARRAY:
                items.append(list(value.root))
            elif kind in (
                JsonType.NULL,
                JsonType.STRING,
                JsonType.NUMBER,
                JsonType.BOOLEAN,
                JsonType.OBJECT,
            ):
                items.append(value.root)
        self.root[name] = items

    def merge_json_object(self, other: "JsonObject", overwrite: bool) -> None:
        """Copy the other object's fields in, keeping ours unless overwriting."""
        for key in other.field_names():
            if not overwrite and self.has_field(key):
                continue
            value = other.get_field(key)
            if value is not None:
                self.set_field(key, value)

    def get_object_field(self, name: str) -> "JsonObject":
        return JsonObject(self._typed(name, JsonType.OBJECT))

    def set_object_field(self, name: str, json_object: "JsonObject") -> None:
        if name:
            self.root[name] = json_object.root

    def get_binary_field(self, name: str) -> bytes:
        """Return binary data; strings are read as base64 (empty if invalid)."""
        if name not in self.root:
            raise KeyError(f"no field with name {name}")
        return as_binary(self.root[name])

    def set_binary_field(self, name: str, data: bytes) -> None:
        if name:
            self.root[name] = bytes(data)

    # Uniform array fields

    def get_number_array_field(self, name: str) -> list[float]:
        return [value.as_number() for value in self.get_array_field(name)]

    def set_number_array_field(self, name: str, numbers: Iterable[float]) -> None:
        if name:
            self.root[name] = [float(number) for number in numbers]

    def get_string_array_field(self, name: str) -> list[str]:
        result = []
        for value in self.get_array_field(name):
            if value.type() not in (JsonType.STRING, JsonType.BINARY):
                raise TypeError(f"not a String element in array with field name {name}")
            result.append(value.as_string())
        return result

    def set_string_array_field(self, name: str, strings: Iterable[str]) -> None:
        if name:
            self.root[name] = [str(text) for text in strings]

    def get_bool_array_field(self, name: str) -> list[bool]:
        return [value.as_bool() for value in self.get_array_field(name)]

    def set_bool_array_field(self, name: str, flags: Iterable[bool]) -> None:
        if name:
            self.root[name] = [bool(flag) for flag in flags]

    def get_object_array_field(self, name: str) -> list["JsonObject"]:
        return [value.as_object() for value in self.get_array_field(name)]

    def set_object_array_field(self, name: str, objects: Iterable["JsonObject"]) -> None:
        if name:
            self.root[name] = [json_object.root for json_object in objects]