"""Services of the Kong Admin API."""

from __future__ import annotations

from dataclasses import fields
from typing import Any

from .client import PAGE_SIZE, KongClient, ListOpt
from .models import Service
from .utils import is_empty_string


class ServiceService:
    """Creates, fetches, updates, deletes and lists services."""

    def __init__(self, client: KongClient) -> None:
        self.client = client

    def _call(self, method: str, endpoint: str, body: Any = None) -> Any:
        return self.client.do(self.client.new_request(method, endpoint, None, body))

    def create(self, service: Service | None) -> Service:
        """Create *service*; a service with an ID is created under that ID."""
        if service is None:
            raise ValueError("cannot create a nil service")
        endpoint, method = "/services", "POST"
        if service.id is not None:
            endpoint, method = f"{endpoint}/{service.id}", "PUT"
        return Service.from_dict(self._call(method, endpoint, service) or {})

    def get(self, name_or_id: str | None) -> Service:
        """Fetch a service by name or ID."""
        if is_empty_string(name_or_id):
            raise ValueError("nameOrID cannot be nil for Get operation")
        return Service.from_dict(self._call("GET", f"/services/{name_or_id}") or {})

    def get_for_route(self, route_id: str | None) -> Service:
        """Fetch the service a route points to."""
        if is_empty_string(route_id):
            raise ValueError("routeID cannot be nil for Get operation")
        return Service.from_dict(self._call("GET", f"/routes/{route_id}/service") or {})

    def update(self, service: Service | None) -> Service:
        """Replace a service and refresh *service* in place from the answer."""
        if service is None:
            raise ValueError("cannot update a nil service")
        key = service.name if is_empty_string(service.id) else service.id
        if key is None:
            raise ValueError("ID and Name cannot both be nil for Update operation")
        payload = self._call("PUT", f"/services/{key}", service) or {}
        decoded = Service.from_dict(payload)
        for item in fields(Service):
            if item.metadata.get("json", item.name) in payload:
                setattr(service, item.name, getattr(decoded, item.name))
        return service

    def delete(self, name_or_id: str | None) -> None:
        """Delete a service by name or ID."""
        if is_empty_string(name_or_id):
            raise ValueError("nameOrID cannot be nil for Delete operation")
        self._call("DELETE", f"/services/{name_or_id}")

    def list(self, opt: ListOpt | None = None) -> tuple[list[Service], ListOpt | None]:
        """Fetch one page of services and the options for the next page."""
        data, next_opt = self.client.list("/services", opt)
        return [Service.from_dict(item) for item in data], next_opt

    def list_all(self) -> list[Service]:
        """Fetch every service, page by page."""
        services: list[Service] = []
        opt: ListOpt | None = ListOpt(size=PAGE_SIZE)
        while opt is not None:
            page, opt = self.list(opt)
            services.extend(page)
        return services