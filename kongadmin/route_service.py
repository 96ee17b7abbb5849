"""Routes of the Kong Admin API."""

from __future__ import annotations

import dataclasses
from typing import Any

from .client import PAGE_SIZE, KongClient, ListOpt
from .models import Route, Service
from .utils import is_empty_string


class RouteService:
    """Creates, fetches, updates, deletes and lists routes."""

    def __init__(self, client: KongClient) -> None:
        self.client = client

    def _send(self, method: str, endpoint: str, body: Any = None) -> Route:
        payload = self.client.do(self.client.new_request(method, endpoint, None, body))
        return Route.from_dict(payload or {})

    def create(self, route: Route | None) -> Route:
        """Create *route*; a route with an ID is created under that ID."""
        if route is None:
            raise ValueError("cannot create a nil route")
        endpoint, method = "/routes", "POST"
        if route.id is not None:
            endpoint, method = f"{endpoint}/{route.id}", "PUT"
        return self._send(method, endpoint, route)

    def create_in_service(self, service_id: str | None, route: Route | None) -> Route:
        """Create a copy of *route* attached to the service with *service_id*."""
        if is_empty_string(service_id):
            raise ValueError("serviceID cannot be nil for creating a route")
        if route is None:
            raise ValueError("cannot create a nil route")
        return self.create(dataclasses.replace(route, service=Service(id=service_id)))

    def get(self, name_or_id: str | None) -> Route:
        """Fetch a route by name or ID."""
        if is_empty_string(name_or_id):
            raise ValueError("nameOrID cannot be nil for Get operation")
        return self._send("GET", f"/routes/{name_or_id}")

    def update(self, route: Route | None) -> Route:
        """Replace a route, addressed by its ID or, lacking one, its name."""
        if route is None:
            raise ValueError("cannot update a nil route")
        key = route.name if is_empty_string(route.id) else route.id
        if key is None:
            raise ValueError("ID and Name cannot both be nil for Update operation")
        if route.service is not None:
            if route.service.id is None:
                raise ValueError("service ID cannot be nil for Update operation")
            endpoint = f"/services/{route.service.id}/routes/{key}"
        else:
            endpoint = f"/routes/{key}"
        return self._send("PUT", endpoint, route)

    def delete(self, name_or_id: str | None) -> None:
        """Delete a route by name or ID."""
        if is_empty_string(name_or_id):
            raise ValueError("nameOrID cannot be nil for Delete operation")
        self.client.do(self.client.new_request("DELETE", f"/routes/{name_or_id}", None, None))

    def _page(self, endpoint: str, opt: ListOpt | None) -> tuple[list[Route], ListOpt | None]:
        data, next_opt = self.client.list(endpoint, opt)
        return [Route.from_dict(item) for item in data], next_opt

    def list(self, opt: ListOpt | None = None) -> tuple[list[Route], ListOpt | None]:
        """Fetch one page of routes and the options for the next page."""
        return self._page("/routes", opt)

    def list_all(self) -> list[Route]:
        """Fetch every route, page by page."""
        routes: list[Route] = []
        opt: ListOpt | None = ListOpt(size=PAGE_SIZE)
        while opt is not None:
            page, opt = self.list(opt)
            routes.extend(page)
        return routes

    def list_for_service(
        self, service_name_or_id: str, opt: ListOpt | None = None
    ) -> tuple[list[Route], ListOpt | None]:
        """Fetch one page of the routes of a service."""
        return self._page(f"/services/{service_name_or_id}/routes", opt)