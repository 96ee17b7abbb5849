"""RBAC users of the Kong Enterprise Admin API."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

import requests

from .client import PAGE_SIZE, APIError, KongClient, ListOpt
from .enterprise import RBACPermissionsList, RBACRole, RBACUser
from .utils import is_empty_string

_FAILURES = (APIError, requests.RequestException)


def _roles_body(name_or_id: str, roles: Iterable[RBACRole]) -> dict[str, str]:
    names = []
    for role in roles:
        if role.name is None:
            raise ValueError("role name cannot be nil")
        names.append(role.name)
    return {"name_or_id": name_or_id, "roles": ",".join(names)}


def _require_key(name_or_id: str | None) -> str:
    if name_or_id is None:
        raise ValueError("nameOrID cannot be nil")
    return name_or_id


def _roles_from(payload: Any) -> list[RBACRole]:
    return [RBACRole.from_dict(item) for item in (payload or {}).get("roles") or []]


class RBACUserService:
    """Manages RBAC users and the roles bound to them."""

    def __init__(self, client: KongClient) -> None:
        self.client = client

    def _call(self, method: str, endpoint: str, body: Any = None) -> Any:
        return self.client.do(self.client.new_request(method, endpoint, None, body))

    def create(self, user: RBACUser | None) -> RBACUser:
        """Create *user*; a user with an ID is created under that ID."""
        if user is None:
            raise ValueError("cannot create a nil user")
        endpoint, method = "/rbac/users", "POST"
        if user.id is not None:
            endpoint, method = f"{endpoint}/{user.id}", "PUT"
        return RBACUser.from_dict(self._call(method, endpoint, user) or {})

    def get(self, name_or_id: str | None) -> RBACUser:
        """Fetch a user by name or ID."""
        if is_empty_string(name_or_id):
            raise ValueError("nameOrID cannot be nil for Get operation")
        return RBACUser.from_dict(self._call("GET", f"/rbac/users/{name_or_id}") or {})

    def update(self, user: RBACUser | None) -> RBACUser:
        """Patch a user, addressed by its ID or, lacking one, its name."""
        if user is None:
            raise ValueError("cannot update a nil User")
        if is_empty_string(user.id) and is_empty_string(user.name):
            raise ValueError("ID and Name cannot both be nil for Update operation")
        key = user.name if is_empty_string(user.id) else user.id
        return RBACUser.from_dict(self._call("PATCH", f"/rbac/users/{key}", user) or {})

    def delete(self, name_or_id: str | None) -> None:
        """Delete a user by name or ID."""
        if is_empty_string(name_or_id):
            raise ValueError("UserOrID cannot be nil for Delete operation")
        self._call("DELETE", f"/rbac/users/{name_or_id}")

    def list(self, opt: ListOpt | None = None) -> tuple[list[RBACUser], ListOpt | None]:
        """Fetch one page of users and the options for the next page."""
        data, next_opt = self.client.list("/rbac/users/", opt)
        return [RBACUser.from_dict(item) for item in data], next_opt

    def list_all(self) -> list[RBACUser]:
        """Fetch every user, page by page."""
        users: list[RBACUser] = []
        opt: ListOpt | None = ListOpt(size=PAGE_SIZE)
        while opt is not None:
            page, opt = self.list(opt)
            users.extend(page)
        return users

    def add_roles(self, name_or_id: str | None, roles: Iterable[RBACRole]) -> list[RBACRole]:
        """Bind *roles* to a user; return the roles the user now holds."""
        key = _require_key(name_or_id)
        body = _roles_body(key, roles)
        try:
            payload = self._call("POST", f"/rbac/users/{key}/roles", body)
        except _FAILURES as err:
            raise RuntimeError(f"error updating roles: {err}") from err
        return _roles_from(payload)

    def delete_roles(self, name_or_id: str | None, roles: Iterable[RBACRole]) -> None:
        """Unbind *roles* from a user."""
        key = _require_key(name_or_id)
        body = _roles_body(key, roles)
        try:
            self._call("DELETE", f"/rbac/users/{key}/roles", body)
        except _FAILURES as err:
            raise RuntimeError(f"error deleting roles: {err}") from err

    def list_roles(self, name_or_id: str | None) -> list[RBACRole]:
        """Return the roles bound to a user."""
        key = _require_key(name_or_id)
        try:
            payload = self._call("GET", f"/rbac/users/{key}/roles")
        except _FAILURES as err:
            raise RuntimeError(f"error retrieving list of roles: {err}") from err
        return _roles_from(payload)

    def list_permissions(self, name_or_id: str | None) -> RBACPermissionsList:
        """Return the endpoint and entity permissions granted to a user."""
        key = _require_key(name_or_id)
        try:
            payload = self._call("GET", f"/rbac/users/{key}/permissions")
        except _FAILURES as err:
            raise RuntimeError(
                f"error retrieving list of permissions for role: {err}"
            ) from err
        return RBACPermissionsList.from_dict(payload or {})