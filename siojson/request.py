"""HTTP requests that carry a JSON object out and read a JSON object back.

A :class:`JsonRequest` turns its request object into URL parameters, a
form body, a JSON body or raw bytes, sends it through a transport and
stores the response. A transport is any callable that takes a
:class:`PreparedRequest` and returns an :class:`HttpResponse`, raising
``OSError`` when no response could be had; by default ``urllib`` is used.
"""

from __future__ import annotations

import enum
import logging
import urllib.error
import urllib.request
from dataclasses import dataclass, field
from typing import Callable, Optional

from .codec import JsonDecodeError
from .model import JsonObject, JsonValue

__all__ = [
    "RequestVerb",
    "RequestContentType",
    "RequestStatus",
    "PreparedRequest",
    "HttpResponse",
    "JsonRequest",
]

_log = logging.getLogger(__name__)

_PERCENT_TABLE = str.maketrans(
    {
        " ": "%20",
        "!": "%21",
        '"': "%22",
        "#": "%23",
        "$": "%24",
        "&": "%26",
        "'": "%27",
        "(": "%28",
        ")": "%29",
        "*": "%2A",
        "+": "%2B",
        ",": "%2C",
        "/": "%2F",
        ":": "%3A",
        ";": "%3B",
        "=": "%3D",
        "?": "%3F",
        "@": "%40",
        "[": "%5B",
        "]": "%5D",
        "{": "%7B",
        "}": "%7D",
    }
)

_FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


def _percent_encode(text: str) -> str:
    return text.translate(_PERCENT_TABLE)


class RequestVerb(enum.Enum):
    """HTTP method of a request."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DEL = "DELETE"
    CUSTOM = "CUSTOM"


class RequestContentType(enum.Enum):
    """How the request object is sent."""

    X_WWW_FORM_URLENCODED_URL = "x_www_form_urlencoded_url"
    X_WWW_FORM_URLENCODED_BODY = "x_www_form_urlencoded_body"
    JSON = "json"
    BINARY = "binary"


class RequestStatus(enum.Enum):
    """Progress of a request."""

    NOT_STARTED = 0
    PROCESSING = 1
    FAILED = 2
    FAILED_CONNECTION_ERROR = 3
    SUCCEEDED = 4


@dataclass
class PreparedRequest:
    """Everything a transport needs to send a request."""

    url: str
    verb: str
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes = b""


@dataclass
class HttpResponse:
    """A response as a transport hands it back; headers are ``"Name: value"`` lines."""

    code: int = 200
    headers: list[str] = field(default_factory=list)
    content: bytes = b""


Listener = Callable[["JsonRequest"], None]
Transport = Callable[[PreparedRequest], HttpResponse]


def _header_lines(headers) -> list[str]:
    if headers is None:
        return []
    return [f"{name}: {value}" for name, value in headers.items()]


def _urllib_transport(prepared: PreparedRequest) -> HttpResponse:
    request = urllib.request.Request(
        prepared.url,
        data=prepared.body or None,
        headers=prepared.headers,
        method=prepared.verb,
    )
    try:
        with urllib.request.urlopen(request) as reply:
            return HttpResponse(reply.status, _header_lines(reply.headers), reply.read())
    except urllib.error.HTTPError as error:
        return HttpResponse(error.code, _header_lines(error.headers), error.read())


class JsonRequest:
    """One HTTP request with a JSON request object and a JSON response object."""

    def __init__(
        self,
        verb: RequestVerb = RequestVerb.GET,
        content_type: RequestContentType = RequestContentType.X_WWW_FORM_URLENCODED_URL,
        transport: Optional[Transport] = None,
    ) -> None:
        self.verb = verb
        self.custom_verb = ""
        self.content_type = content_type
        self.binary_content_type = "application/octet-stream"
        self.request_bytes = b""
        self.request_headers: dict[str, str] = {}
        self.should_have_binary_response = False
        self.transport: Transport = transport or _urllib_transport
        self.on_complete: list[Listener] = []
        self.on_fail: list[Listener] = []
        self.on_binary_complete: Optional[Callable[[bytes], None]] = None
        self.continuation: Optional[Callable[[JsonObject], None]] = None
        self.tags: list[str] = []
        self.request_object = JsonObject()
        self.response_object = JsonObject()
        self.response_content = ""
        self.result_binary_data = b""
        self.reset_data()

    def set_header(self, name: str, value: str) -> None:
        """Add a header sent with the request; it overrides generated ones."""
        self.request_headers[name] = value

    # Reset

    def reset_data(self) -> None:
        self.reset_request_data()
        self.reset_response_data()

    def reset_request_data(self) -> None:
        self.request_object.reset()
        self.url = ""
        self.status = RequestStatus.NOT_STARTED

    def reset_response_data(self) -> None:
        self.response_object.reset()
        self.response_headers: dict[str, str] = {}
        self.response_code = -1
        self.is_valid_json_response = False

    def cancel(self) -> None:
        """Drop the pending continuation and any response data."""
        self.continuation = None
        self.reset_response_data()

    # Response access

    def response_header(self, name: str) -> str:
        """Return a response header, or an empty string if it was not sent."""
        return self.response_headers.get(name, "")

    def all_response_headers(self) -> list[str]:
        return [f"{name}: {value}" for name, value in self.response_headers.items()]

    # Processing

    def _form_params(self, first_prefix: str) -> str:
        parts = []
        for index, (key, value) in enumerate(self.request_object.root.items()):
            text = JsonValue(value).as_string()
            if key and text:
                prefix = "&" if index else first_prefix
                parts.append(f"{prefix}{_percent_encode(key)}={_percent_encode(text)}")
        return "".join(parts)

    def build_request(self, url: str) -> PreparedRequest:
        """Assemble the method, URL, headers and body to send to ``url``."""
        verb = self.custom_verb if self.verb is RequestVerb.CUSTOM else self.verb.value
        prepared = PreparedRequest(url=url, verb=verb)
        kind = self.content_type
        if kind is RequestContentType.X_WWW_FORM_URLENCODED_URL:
            prepared.headers["Content-Type"] = _FORM_CONTENT_TYPE
            prepared.url = url + self._form_params("?")
        elif kind is RequestContentType.X_WWW_FORM_URLENCODED_BODY:
            prepared.headers["Content-Type"] = _FORM_CONTENT_TYPE
            prepared.body = self._form_params("").encode("utf-8")
        elif kind is RequestContentType.BINARY:
            prepared.headers["Content-Type"] = self.binary_content_type
            prepared.body = bytes(self.request_bytes)
        elif kind is RequestContentType.JSON:
            prepared.headers["Content-Type"] = "application/json"
            prepared.body = self.request_object.encode_json().encode("utf-8")
        prepared.headers.update(self.request_headers)
        return prepared

    def process_url(self, url: str) -> None:
        """Send the request to ``url`` and handle the response."""
        prepared = self.build_request(url)
        self.url = prepared.url
        self.status = RequestStatus.PROCESSING
        _log.info("Request: %s %s", prepared.verb, prepared.url)
        try:
            response = self.transport(prepared)
        except OSError as exc:
            _log.error("Request to %s failed: %s", prepared.url, exc)
            self.complete(None, False)
        else:
            self.complete(response, True)

    def _broadcast(self, listeners: list[Listener]) -> None:
        for listener in list(listeners):
            listener(self)

    def complete(self, response: Optional[HttpResponse], succeeded: bool) -> None:
        """Store a response and notify listeners."""
        self.reset_response_data()
        if response is not None:
            self.response_code = response.code

        if not succeeded or response is None:
            self.status = (
                RequestStatus.FAILED_CONNECTION_ERROR if response is None else RequestStatus.FAILED
            )
            _log.error("Request failed (%d): %s", self.response_code, self.url)
            self._broadcast(self.on_fail)
            return

        self.status = RequestStatus.SUCCEEDED

        if self.should_have_binary_response:
            self.result_binary_data = bytes(response.content)
            self._broadcast(self.on_complete)
            if self.on_binary_complete is not None:
                self.on_binary_complete(self.result_binary_data)
            return

        self.response_content = bytes(response.content).decode("utf-8", errors="replace")
        for header in response.headers:
            name, separator, value = header.partition(": ")
            if separator:
                self.response_headers[name] = value

        try:
            self.response_object.decode_json(self.response_content)
            self.is_valid_json_response = True
        except JsonDecodeError:
            _log.warning("JSON could not be decoded!")

        self._broadcast(self.on_complete)

        continuation, self.continuation = self.continuation, None
        if continuation is not None:
            continuation(self.response_object)

    # Tags

    def add_tag(self, tag: str) -> None:
        if tag and not self.has_tag(tag):
            self.tags.append(tag)

    def remove_tag(self, tag: str) -> int:
        """Remove a tag, ignoring case; returns how many were removed."""
        before = len(self.tags)
        wanted = tag.casefold()
        self.tags = [existing for existing in self.tags if existing.casefold() != wanted]
        return before - len(self.tags)

    def has_tag(self, tag: str) -> bool:
        if not tag:
            return False
        wanted = tag.casefold()
        return any(existing.casefold() == wanted for existing in self.tags)