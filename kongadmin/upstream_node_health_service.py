"""Health of upstream nodes in the Kong Admin API."""

from __future__ import annotations

from .client import PAGE_SIZE, KongClient, ListOpt
from .models import UpstreamNodeHealth


class UpstreamNodeHealthService:
    """Lists the health of the nodes of an upstream."""

    def __init__(self, client: KongClient) -> None:
        self.client = client

    def list(
        self, upstream_name_or_id: str | None, opt: ListOpt | None = None
    ) -> tuple[list[UpstreamNodeHealth], ListOpt | None]:
        """Fetch one page of node health records of an upstream."""
        if upstream_name_or_id is None:
            raise ValueError("upstreamNameOrID cannot be nil")
        data, next_opt = self.client.list(f"/upstreams/{upstream_name_or_id}/health", opt)
        return [UpstreamNodeHealth.from_dict(item) for item in data], next_opt

    def list_all(self, upstream_name_or_id: str | None) -> list[UpstreamNodeHealth]:
        """Fetch every node health record of an upstream, page by page."""
        healths: list[UpstreamNodeHealth] = []
        opt: ListOpt | None = ListOpt(size=PAGE_SIZE)
        while opt is not None:
            page, opt = self.list(upstream_name_or_id, opt)
            healths.extend(page)
        return healths