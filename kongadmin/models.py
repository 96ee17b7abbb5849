"""Entities of the Kong Admin API and their JSON mapping."""

from __future__ import annotations

import json
import types
from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from typing import Any, Union, get_args, get_origin


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    return isinstance(value, (list, tuple, dict)) and len(value) == 0


def _encode(value: Any) -> Any:
    if isinstance(value, Entity):
        return value.to_dict()
    if isinstance(value, (list, tuple)):
        return [_encode(item) for item in value]
    if isinstance(value, dict):
        return {key: _encode(item) for key, item in value.items()}
    return value


def _check_scalar(tp: type, value: Any) -> Any:
    if tp is bool:
        if not isinstance(value, bool):
            raise TypeError(f"expected a boolean, got {value!r}")
        return value
    if tp is int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"expected an integer, got {value!r}")
        return value
    if tp is float:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise TypeError(f"expected a number, got {value!r}")
        return float(value)
    if tp is str:
        if not isinstance(value, str):
            raise TypeError(f"expected a string, got {value!r}")
        return value
    return value


def _decode(tp: Any, value: Any) -> Any:
    if value is None:
        return None
    origin = get_origin(tp)
    if origin in (Union, types.UnionType):
        (inner,) = [arg for arg in get_args(tp) if arg is not type(None)]
        return _decode(inner, value)
    if origin is list:
        if not isinstance(value, list):
            raise TypeError(f"expected a list, got {value!r}")
        (item_type,) = get_args(tp)
        return [_decode(item_type, item) for item in value]
    if origin is dict:
        if not isinstance(value, Mapping):
            raise TypeError(f"expected an object, got {value!r}")
        _, value_type = get_args(tp)
        return {key: _decode(value_type, item) for key, item in value.items()}
    if isinstance(tp, type):
        if issubclass(tp, Entity):
            return tp.from_dict(value)
        if issubclass(tp, dict):
            if not isinstance(value, Mapping):
                raise TypeError(f"expected an object, got {value!r}")
            return tp(value)
        return _check_scalar(tp, value)
    return value


class Entity:
    """Base of all Admin API entities: JSON conversion with omitted empties."""

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON form, leaving out unset fields and empty collections."""
        result: dict[str, Any] = {}
        for item in fields(self):
            value = getattr(self, item.name)
            if _is_empty(value):
                continue
            result[item.metadata.get("json", item.name)] = _encode(value)
        return result

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]):
        """Build an entity from its JSON form; unknown keys are ignored."""
        if not isinstance(data, Mapping):
            raise TypeError(f"cannot build {cls.__name__} from {data!r}")
        kwargs = {}
        for item in fields(cls):
            key = item.metadata.get("json", item.name)
            if key in data:
                kwargs[item.name] = _decode(item.type, data[key])
        return cls(**kwargs)


class Configuration(dict):
    """Free-form plugin configuration."""

    def deep_copy(self) -> "Configuration":
        """Return an independent copy made through a JSON round trip."""
        return Configuration(json.loads(json.dumps(self)))


@dataclass(kw_only=True)
class Certificate(Entity):
    """A TLS certificate."""

    id: str | None = None
    cert: str | None = None
    key: str | None = None
    created_at: int | None = None
    snis: list[str] | None = None
    tags: list[str] | None = None


@dataclass(kw_only=True)
class Service(Entity):
    """An upstream service that routes point to."""

    client_certificate: Certificate | None = None
    connect_timeout: int | None = None
    created_at: int | None = None
    host: str | None = None
    id: str | None = None
    name: str | None = None
    path: str | None = None
    port: int | None = None
    protocol: str | None = None
    read_timeout: int | None = None
    retries: int | None = None
    updated_at: int | None = None
    url: str | None = None
    write_timeout: int | None = None
    tags: list[str] | None = None
    tls_verify: bool | None = None
    tls_verify_depth: int | None = None
    ca_certificates: list[str] | None = None


@dataclass(kw_only=True)
class CIDRPort(Entity):
    """A CIDR range together with a port."""

    ip: str | None = None
    port: int | None = None


@dataclass(kw_only=True)
class Route(Entity):
    """Rules matching client requests to a service."""

    created_at: int | None = None
    hosts: list[str] | None = None
    headers: dict[str, list[str]] | None = None
    id: str | None = None
    name: str | None = None
    methods: list[str] | None = None
    paths: list[str] | None = None
    path_handling: str | None = None
    preserve_host: bool | None = None
    protocols: list[str] | None = None
    regex_priority: int | None = None
    service: Service | None = None
    strip_path: bool | None = None
    updated_at: int | None = None
    snis: list[str] | None = None
    sources: list[CIDRPort] | None = None
    destinations: list[CIDRPort] | None = None
    tags: list[str] | None = None
    https_redirect_status_code: int | None = None
    request_buffering: bool | None = None
    response_buffering: bool | None = None


@dataclass(kw_only=True)
class Consumer(Entity):
    """A consumer of proxied services."""

    id: str | None = None
    custom_id: str | None = None
    username: str | None = None
    created_at: int | None = None
    tags: list[str] | None = None


@dataclass(kw_only=True)
class SNI(Entity):
    """A server name bound to a certificate."""

    id: str | None = None
    name: str | None = None
    created_at: int | None = None
    certificate: Certificate | None = None
    tags: list[str] | None = None


@dataclass(kw_only=True)
class Healthy(Entity):
    """Thresholds and status codes that mark a target healthy."""

    http_statuses: list[int] | None = None
    interval: int | None = None
    successes: int | None = None


@dataclass(kw_only=True)
class Unhealthy(Entity):
    """Thresholds and status codes that mark a target unhealthy."""

    http_failures: int | None = None
    http_statuses: list[int] | None = None
    tcp_failures: int | None = None
    timeouts: int | None = None
    interval: int | None = None


@dataclass(kw_only=True)
class ActiveHealthcheck(Entity):
    """Active health probing settings."""

    concurrency: int | None = None
    healthy: Healthy | None = None
    http_path: str | None = None
    https_sni: str | None = None
    https_verify_certificate: bool | None = None
    type: str | None = None
    timeout: int | None = None
    unhealthy: Unhealthy | None = None


@dataclass(kw_only=True)
class PassiveHealthcheck(Entity):
    """Passive health check settings."""

    healthy: Healthy | None = None
    type: str | None = None
    unhealthy: Unhealthy | None = None


@dataclass(kw_only=True)
class Healthcheck(Entity):
    """Health check configuration of an upstream."""

    active: ActiveHealthcheck | None = None
    passive: PassiveHealthcheck | None = None
    threshold: float | None = None


@dataclass(kw_only=True)
class HealthDataAddress(Entity):
    """Health of one resolved address of a target."""

    port: int | None = None
    ip: str | None = None
    health: str | None = None
    weight: int | None = None


@dataclass(kw_only=True)
class HealthDataWeight(Entity):
    """Weight totals of a target."""

    total: int | None = None
    available: int | None = None
    unavailable: int | None = None


@dataclass(kw_only=True)
class HealthData(Entity):
    """Health details of a target."""

    host: str | None = None
    port: int | None = None
    node_weight: int | None = field(default=None, metadata={"json": "nodeWeight"})
    weight: HealthDataWeight | None = None
    addresses: list[HealthDataAddress] | None = None
    dns: str | None = None


@dataclass(kw_only=True)
class Upstream(Entity):
    """A virtual hostname load-balanced over targets."""

    id: str | None = None
    name: str | None = None
    host_header: str | None = None
    client_certificate: Certificate | None = None
    algorithm: str | None = None
    slots: int | None = None
    healthchecks: Healthcheck | None = None
    created_at: int | None = None
    hash_on: str | None = None
    hash_fallback: str | None = None
    hash_on_header: str | None = None
    hash_fallback_header: str | None = None
    hash_on_cookie: str | None = None
    hash_on_cookie_path: str | None = None
    tags: list[str] | None = None


@dataclass(kw_only=True)
class UpstreamNodeHealth(Entity):
    """Health of one node of an upstream."""

    id: str | None = None
    created_at: float | None = None
    data: HealthData | None = None
    health: str | None = None
    target: str | None = None
    upstream: Upstream | None = None
    weight: int | None = None
    tags: list[str] | None = None


@dataclass(kw_only=True)
class Target(Entity):
    """A backend address of an upstream."""

    created_at: float | None = None
    id: str | None = None
    target: str | None = None
    upstream: Upstream | None = None
    weight: int | None = None
    tags: list[str] | None = None


@dataclass(kw_only=True)
class Plugin(Entity):
    """A plugin bound globally or to a route, service or consumer."""

    created_at: int | None = None
    id: str | None = None
    name: str | None = None
    route: Route | None = None
    service: Service | None = None
    consumer: Consumer | None = None
    config: Configuration | None = None
    enabled: bool | None = None
    run_on: str | None = None
    protocols: list[str] | None = None
    tags: list[str] | None = None