"""HTTP plumbing for the Kong Admin API: requests, responses, errors and paging."""

from __future__ import annotations

import dataclasses
import json
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any
from urllib.parse import parse_qs, urlsplit

import requests

from .models import Entity

DEFAULT_BASE_URL = "http://localhost:8001"
PAGE_SIZE = 1000


class APIError(Exception):
    """An error status returned by the Admin API."""

    def __init__(self, code: int, message: str) -> None:
        super().__init__(code, message)
        self.code = code
        self.message = message

    def __str__(self) -> str:
        return f"HTTP status {self.code} (message: {self.message!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, APIError):
            return NotImplemented
        return (self.code, self.message) == (other.code, other.message)

    def __hash__(self) -> int:
        return hash((self.code, self.message))


@dataclass
class ListOpt:
    """Paging and tag filtering for list endpoints."""

    size: int = 0
    offset: str = ""
    tags: list[str] | None = None
    match_all_tags: bool = False

    def _query(self) -> dict[str, str]:
        query: dict[str, str] = {}
        if self.size:
            query["size"] = str(self.size)
        if self.offset:
            query["offset"] = self.offset
        if self.tags:
            query["tags"] = ("," if self.match_all_tags else "/").join(self.tags)
        return query


class _ConstantError(ValueError):
    pass


def _reject_constant(name: str) -> Any:
    raise _ConstantError(name)


def _quote_char(char: str) -> str:
    if char == "'":
        return "'\\''"
    if char == '"':
        return "'\"'"
    if char.isprintable():
        return f"'{char}'"
    return repr(char)


_JSON_CONTEXTS = {
    "Expecting value": "looking for beginning of value",
    "Expecting property name enclosed in double quotes": "looking for beginning of object key string",
    "Expecting ':' delimiter": "after object key",
    "Expecting ',' delimiter": "after value",
    "Extra data": "after top-level value",
    "Invalid control character at": "in string literal",
}


def _describe_json_error(text: str, err: json.JSONDecodeError) -> str:
    if err.pos >= len(text) or err.msg.startswith("Unterminated string"):
        return "unexpected end of JSON input"
    context = _JSON_CONTEXTS.get(err.msg, err.msg.lower())
    return f"invalid character {_quote_char(text[err.pos])} {context}"


def _json_kind(value: Any) -> str:
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    return "object"


def _parse_failure(reason: str) -> str:
    return f"<failed to parse response body: {reason}>"


def message_from_body(body: bytes | str) -> str:
    """Extract the ``message`` field of an error body, or describe why it failed."""
    text = body.decode("utf-8", "replace") if isinstance(body, (bytes, bytearray)) else body
    try:
        payload = json.loads(text, parse_constant=_reject_constant)
    except json.JSONDecodeError as err:
        return _parse_failure(_describe_json_error(text, err))
    except _ConstantError as err:
        name = str(err)
        if name.startswith("-"):
            return _parse_failure(f"invalid character {_quote_char(name[1])} in numeric literal")
        return _parse_failure(f"invalid character {_quote_char(name[0])} looking for beginning of value")

    if payload is None:
        return ""
    if not isinstance(payload, dict):
        return _parse_failure(f"cannot decode {_json_kind(payload)} as an object")
    message: Any = None
    for key, value in payload.items():
        if key.lower() == "message":
            message = value
    if message is None:
        return ""
    if not isinstance(message, str):
        return _parse_failure(f"cannot decode {_json_kind(message)} into message of type string")
    return message


def has_error(response: requests.Response) -> APIError | None:
    """Return the APIError carried by *response*, or None for 2xx and 3xx."""
    if 200 <= response.status_code <= 399:
        return None
    return APIError(response.status_code, message_from_body(response.content))


def _json_default(value: Any) -> Any:
    if isinstance(value, Entity):
        return value.to_dict()
    raise TypeError(f"cannot encode {type(value).__name__} as JSON")


def _query_value(value: Any) -> Any:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return [_query_value(item) for item in value]
    return str(value)


def _query_values(qs: Any) -> dict[str, Any]:
    if isinstance(qs, ListOpt):
        return qs._query()
    if dataclasses.is_dataclass(qs) and not isinstance(qs, type):
        qs = dataclasses.asdict(qs)
    if not isinstance(qs, Mapping):
        raise TypeError(f"cannot encode {type(qs).__name__} as a query string")
    return {key: _query_value(value) for key, value in qs.items() if value is not None}


def _offset_from(next_url: str | None) -> str:
    if not next_url:
        return ""
    values = parse_qs(urlsplit(next_url).query).get("offset")
    return values[0] if values else ""


class KongClient:
    """Sends requests to a Kong Admin API and decodes its answers."""

    def __init__(self, base_url: str | None = None, session: requests.Session | None = None) -> None:
        self.base_url = (base_url or DEFAULT_BASE_URL).rstrip("/")
        self.session = session if session is not None else requests.Session()

    def new_request(
        self, method: str, endpoint: str, qs: Any = None, body: Any = None
    ) -> requests.PreparedRequest:
        """Build a request for *endpoint*, relative to the base URL.

        *body*, when given, is sent as JSON; *qs* becomes the query string.
        """
        if not endpoint:
            raise ValueError("endpoint can't be empty")
        headers: dict[str, str] = {}
        data: bytes | None = None
        if body is not None:
            data = json.dumps(body, default=_json_default, separators=(",", ":")).encode("utf-8")
            headers["Content-Type"] = "application/json"
        params = _query_values(qs) if qs is not None else None
        request = requests.Request(
            method, self.base_url + endpoint, headers=headers, data=data, params=params
        )
        return self.session.prepare_request(request)

    def do(self, request: requests.PreparedRequest) -> Any:
        """Send *request*; return the decoded JSON body, or None if it is empty.

        Raises APIError when the API answers with an error status.
        """
        response = self.session.send(request)
        error = has_error(response)
        if error is not None:
            raise error
        if not response.content.strip():
            return None
        return response.json()

    def list(self, endpoint: str, opt: ListOpt | None = None) -> tuple[list[Any], ListOpt | None]:
        """Fetch one page of *endpoint*; return its items and the next page's options."""
        payload = self.do(self.new_request("GET", endpoint, opt, None)) or {}
        data = payload.get("data") or []
        next_url = payload.get("next")
        if not next_url:
            return data, None
        offset = payload.get("offset") or _offset_from(next_url)
        if not offset:
            return data, None
        return data, dataclasses.replace(opt or ListOpt(), offset=offset)