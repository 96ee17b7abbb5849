"""Small helpers shared across the Admin API client."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence

import requests

_SESSION_ATTRIBUTES = (
    "auth",
    "proxies",
    "params",
    "stream",
    "verify",
    "cert",
    "max_redirects",
    "trust_env",
)


def is_empty_string(value: str | None) -> bool:
    """Return True when *value* is None or holds only whitespace."""
    return value is None or value.strip() == ""


def string_array_to_string(items: Sequence[str] | None) -> str:
    """Render a list of strings as ``[ a, b ]``, or ``nil`` for None."""
    if items is None:
        return "nil"
    return "[ " + ", ".join(items) + " ]"


class _HeaderInjectingSession(requests.Session):
    """A session that forces a fixed set of headers onto every request sent."""

    def __init__(self, injected: Mapping[str, str]) -> None:
        super().__init__()
        self.injected_headers = dict(injected)

    def send(self, request, **kwargs):
        for name, value in self.injected_headers.items():
            request.headers[name] = value
        return super().send(request, **kwargs)


def _header_value(value: str | Iterable[str]) -> str:
    if isinstance(value, str):
        return value
    return ", ".join(value)


def http_client_with_headers(
    session: requests.Session | None,
    headers: Mapping[str, str | Iterable[str]],
) -> requests.Session:
    """Return a new session that injects *headers* into every request.

    The settings of *session* (adapters, auth, TLS options, cookies and
    default headers) are carried over; *session* itself is left untouched.
    Injected headers take precedence over headers set on the request.
    """
    injected = {name: _header_value(value) for name, value in headers.items()}
    result = _HeaderInjectingSession(injected)
    if session is not None:
        for attribute in _SESSION_ATTRIBUTES:
            setattr(result, attribute, getattr(session, attribute))
        result.headers = requests.structures.CaseInsensitiveDict(session.headers)
        result.hooks = {event: list(hooks) for event, hooks in session.hooks.items()}
        result.cookies = session.cookies
        result.adapters.clear()
        for prefix, adapter in session.adapters.items():
            result.mount(prefix, adapter)
    return result