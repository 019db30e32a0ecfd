# siojson

A small toolkit for JSON data that may carry raw binary payloads, plus
simple HTTP requests that send and receive JSON objects. It has no
dependencies beyond the standard library.

## Modules

### `siojson.codec`

JSON values are plain Python objects: `None`, `bool`, `int`/`float`,
`str`, `list`, `dict` and `bytes` (binary, written out as base64).

- `JsonType` names the kinds; `json_type(value)` reports a value's kind
  and `is_binary(value)` tells whether it is raw bytes.
- `as_binary(value)` returns bytes; strings are read as base64, and
  anything that cannot be read gives `b""`.
- `to_json_string(value)` renders a value as text: null gives `""`,
  strings come back unchanged, numbers use six decimals (`"3.000000"`),
  booleans give `"1"`/`"0"`, and arrays and objects are condensed JSON.
- `json_string_to_value(text)` guesses what text stands for (empty text
  is null, decimal text a number, `{...}` an object, `[...]` an array,
  `true`/`false` a boolean, anything else a string).
- `json_string_to_array(text)` and `to_json_object(text)` parse strictly
  and raise `JsonDecodeError` (a `ValueError`) on bad input.

### `siojson.model`

- `JsonValue` wraps one value. Build it with `from_number`, `from_string`,
  `from_bool`, `from_array`, `from_object`, `from_binary` or
  `from_json_string`. Inspect it with `type`, `type_string`
  and `is_null`, and read it with `as_number`, `as_string`, `as_bool`,
  `as_array`, `as_object`, `as_binary` (strings are read as hex) and
  `encode_json`. Asking for the wrong kind raises `TypeError`.
- `JsonObject` wraps a `dict`. It has `encode_json`,
  `encode_json_to_single_string`, `decode_json`, `reset`, `field_names`,
  `has_field`, `remove_field`, `get_field`, `set_field` and
  `merge_json_object`. Its typed getters and setters cover numbers,
  strings, booleans, arrays, objects and binary data, and arrays of
  numbers, strings, booleans and objects. Typed getters raise `KeyError`
  when the field is missing or has another kind.

Wrappers share their containers with the data they came from, so a
change made through one is seen through the other.

### `siojson.request`

`JsonRequest` sends its `request_object` in the way its
`RequestContentType` says: as URL parameters, a form body, a JSON body,
or raw `request_bytes`. It uses the method set by its `RequestVerb`.
`build_request(url)` returns the `PreparedRequest` without sending it.
`process_url(url)` sends it through a transport: any callable that takes
a `PreparedRequest`, returns an `HttpResponse` and raises `OSError` on
failure. The default transport uses `urllib`. The response code, the
headers (`response_header`, `all_response_headers`) and the decoded
`response_object` are stored, and the `on_complete` or `on_fail`
listeners are called. A request can also carry tags (`add_tag`,
`remove_tag`, `has_tag`; matching ignores case). `RequestStatus` tracks
its progress.

### `siojson.library`

`percent_encode`, `base64_encode`, `base64_encode_bytes`,
`base64_decode`, `base64_decode_bytes` and `string_to_json_value_array`.
`call_url(url, verb, content_type, json_object, callback, transport)`
sends a request and calls `callback` once. `get_url_binary(...)` returns
the raw response body, or raises `ConnectionError` if the request failed.

## Example

```python
from siojson.model import JsonObject, JsonValue

obj = JsonObject()
obj.set_string_field("name", "example")
obj.set_number_field("count", 3)
obj.set_binary_field("payload", b"\x00\x01")

print(obj.field_names())                 # ['name', 'count', 'payload']
print(obj.get_binary_field("payload"))   # b'\x00\x01'

value = JsonValue.from_json_string("[1, 2, 3]")
print([item.as_number() for item in value.as_array()])  # [1.0, 2.0, 3.0]
```

Requests can be tried without a network by passing a transport:

```python
from siojson.library import call_url
from siojson.model import JsonObject
from siojson.request import HttpResponse, RequestContentType, RequestVerb

def transport(prepared):
    return HttpResponse(200, ["Content-Type: application/json"], b'{"ok":true}')

body = JsonObject()
body.set_string_field("q", "hello")
request = call_url("http://localhost/api", RequestVerb.POST,
                   RequestContentType.JSON, body, None, transport)
print(request.response_object.get_bool_field("ok"))  # True
```

## What it does not do

The package does not map JSON objects onto typed records or classes. It
does not save such records to JSON files or load them back, and it does
not shorten long generated field names. It works only with plain JSON
values and the wrappers above.

## Installing

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```