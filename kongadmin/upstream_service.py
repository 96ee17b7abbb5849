"""Upstreams of the Kong Admin API."""

from __future__ import annotations

from typing import Any

from .client import PAGE_SIZE, KongClient, ListOpt
from .models import Upstream
from .utils import is_empty_string


class UpstreamService:
    """Creates, fetches, updates, deletes and lists upstreams."""

    def __init__(self, client: KongClient) -> None:
        self.client = client

    def _call(self, method: str, endpoint: str, body: Any = None) -> Any:
        return self.client.do(self.client.new_request(method, endpoint, None, body))

    def create(self, upstream: Upstream | None) -> Upstream:
        """Create *upstream*; an upstream with an ID is created under that ID."""
        if upstream is None:
            raise ValueError("cannot create a nil upstream")
        endpoint, method = "/upstreams", "POST"
        if upstream.id is not None:
            endpoint, method = f"{endpoint}/{upstream.id}", "PUT"
        return Upstream.from_dict(self._call(method, endpoint, upstream) or {})

    def get(self, name_or_id: str | None) -> Upstream:
        """Fetch an upstream by name or ID."""
        if is_empty_string(name_or_id):
            raise ValueError("upstreamNameOrID cannot be nil for Get operation")
        return Upstream.from_dict(self._call("GET", f"/upstreams/{name_or_id}") or {})

    def update(self, upstream: Upstream | None) -> Upstream:
        """Patch an upstream, addressed by its ID."""
        if upstream is None:
            raise ValueError("cannot update a nil upstream")
        if is_empty_string(upstream.id):
            raise ValueError("ID cannot be nil for Update operation")
        return Upstream.from_dict(self._call("PATCH", f"/upstreams/{upstream.id}", upstream) or {})

    def delete(self, name_or_id: str | None) -> None:
        """Delete an upstream by name or ID."""
        if is_empty_string(name_or_id):
            raise ValueError("upstreamNameOrID cannot be nil for Delete operation")
        self._call("DELETE", f"/upstreams/{name_or_id}")

    def list(self, opt: ListOpt | None = None) -> tuple[list[Upstream], ListOpt | None]:
        """Fetch one page of upstreams and the options for the next page."""
        data, next_opt = self.client.list("/upstreams", opt)
        return [Upstream.from_dict(item) for item in data], next_opt

    def list_all(self) -> list[Upstream]:
        """Fetch every upstream, page by page."""
        upstreams: list[Upstream] = []
        opt: ListOpt | None = ListOpt(size=PAGE_SIZE)
        while opt is not None:
            page, opt = self.list(opt)
            upstreams.extend(page)
        return upstreams