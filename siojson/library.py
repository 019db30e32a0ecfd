"""Convenience helpers: encoding, parsing and one-call HTTP requests."""

from __future__ import annotations

import base64
from typing import Callable, Optional

from .codec import json_string_to_array
from .model import JsonObject, JsonValue
from .request import (
    JsonRequest,
    RequestContentType,
    RequestStatus,
    RequestVerb,
    Transport,
    _percent_encode,
)

__all__ = [
    "percent_encode",
    "base64_encode",
    "base64_encode_bytes",
    "base64_decode",
    "base64_decode_bytes",
    "string_to_json_value_array",
    "call_url",
    "get_url_binary",
]


def percent_encode(text: str) -> str:
    """Percent-encode the reserved URL characters and the space."""
    return _percent_encode(text)


def base64_encode(text: str) -> str:
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def base64_encode_bytes(data: bytes) -> str:
    return base64.b64encode(bytes(data)).decode("ascii")


def base64_decode_bytes(text: str) -> bytes:
    """Decode base64 text; raises ``ValueError`` if it is not valid."""
    return base64.b64decode(text.encode("ascii"), validate=True)


def base64_decode(text: str) -> str:
    """Decode base64 text to a string; raises ``ValueError`` if it is not valid."""
    return base64_decode_bytes(text).decode("utf-8")


def string_to_json_value_array(text: str) -> list[JsonValue]:
    """Parse a JSON array into wrapped values."""
    return [JsonValue(item) for item in json_string_to_array(text)]


def call_url(
    url: str,
    verb: RequestVerb = RequestVerb.GET,
    content_type: RequestContentType = RequestContentType.X_WWW_FORM_URLENCODED_URL,
    json_object: Optional[JsonObject] = None,
    callback: Optional[Callable[[JsonRequest], None]] = None,
    transport: Optional[Transport] = None,
) -> JsonRequest:
    """Send ``json_object`` to ``url`` and call ``callback`` once when done or failed."""
    request = JsonRequest(verb, content_type, transport)
    request.request_object = json_object if json_object is not None else JsonObject()

    def finished(done: JsonRequest) -> None:
        request.on_complete.remove(finished)
        request.on_fail.remove(finished)
        if callback is not None:
            callback(done)

    request.on_complete.append(finished)
    request.on_fail.append(finished)
    request.reset_response_data()
    request.process_url(url)
    return request


def get_url_binary(
    url: str,
    verb: RequestVerb = RequestVerb.GET,
    content_type: RequestContentType = RequestContentType.X_WWW_FORM_URLENCODED_URL,
    transport: Optional[Transport] = None,
) -> bytes:
    """Fetch ``url`` and return the raw response body.

    Raises ``ConnectionError`` if the request fails.
    """
    request = JsonRequest(verb, content_type, transport)
    request.should_have_binary_response = True
    request.process_url(url)
    if request.status is not RequestStatus.SUCCEEDED:
        raise ConnectionError(f"request to {request.url} failed ({request.response_code})")
    return request.result_binary_data