"""Targets of upstreams in the Kong Admin API."""

from __future__ import annotations

from .client import PAGE_SIZE, KongClient, ListOpt
from .models import Target
from .utils import is_empty_string


class TargetService:
    """Creates, deletes and lists targets, and sets their health."""

    def __init__(self, client: KongClient) -> None:
        self.client = client

    def create(self, upstream_name_or_id: str | None, target: Target | None) -> Target:
        """Create *target* under the given upstream."""
        if is_empty_string(upstream_name_or_id):
            raise ValueError("upstreamNameOrID can not be nil")
        endpoint = f"/upstreams/{upstream_name_or_id}/targets"
        payload = self.client.do(self.client.new_request("POST", endpoint, None, target))
        return Target.from_dict(payload or {})

    def delete(self, upstream_name_or_id: str | None, target_or_id: str | None) -> None:
        """Delete a target of an upstream."""
        if is_empty_string(upstream_name_or_id):
            raise ValueError("upstreamNameOrID cannot be nil for Get operation")
        if is_empty_string(target_or_id):
            raise ValueError("targetOrID cannot be nil for Delete operation")
        endpoint = f"/upstreams/{upstream_name_or_id}/targets/{target_or_id}"
        self.client.do(self.client.new_request("DELETE", endpoint, None, None))

    def list(
        self, upstream_name_or_id: str | None, opt: ListOpt | None = None
    ) -> tuple[list[Target], ListOpt | None]:
        """Fetch one page of the targets of an upstream."""
        if is_empty_string(upstream_name_or_id):
            raise ValueError("upstreamNameOrID cannot be nil for Get operation")
        data, next_opt = self.client.list(f"/upstreams/{upstream_name_or_id}/targets", opt)
        return [Target.from_dict(item) for item in data], next_opt

    def list_all(self, upstream_name_or_id: str | None) -> list[Target]:
        """Fetch every target of an upstream, page by page."""
        targets: list[Target] = []
        opt: ListOpt | None = ListOpt(size=PAGE_SIZE)
        while opt is not None:
            page, opt = self.list(upstream_name_or_id, opt)
            targets.extend(page)
        return targets

    def _set_health(self, upstream_name_or_id: str | None, target: Target | None, state: str) -> None:
        if target is None:
            raise ValueError("cannot set health status for a nil target")
        if is_empty_string(target.id) and is_empty_string(target.target):
            raise ValueError("need at least one of target or ID to set health status")
        if is_empty_string(upstream_name_or_id):
            raise ValueError("upstreamNameOrID cannot be nil for updating health check")
        target_key = target.id if target.id is not None else target.target
        endpoint = f"/upstreams/{upstream_name_or_id}/targets/{target_key}/{state}"
        self.client.do(self.client.new_request("POST", endpoint, None, None))

    def mark_healthy(self, upstream_name_or_id: str | None, target: Target | None) -> None:
        """Mark a target healthy in the load balancer."""
        self._set_health(upstream_name_or_id, target, "healthy")

    def mark_unhealthy(self, upstream_name_or_id: str | None, target: Target | None) -> None:
        """Mark a target unhealthy in the load balancer."""
        self._set_health(upstream_name_or_id, target, "unhealthy")