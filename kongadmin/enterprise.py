"""Kong Enterprise entities: workspaces, admins, RBAC and developer portal."""

from dataclasses import dataclass
from typing import Any

from .models import Entity


def _without_unset(wire: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in wire.items() if value is not None}


@dataclass(kw_only=True)
class Workspace(Entity):
    """A workspace isolating a set of entities."""

    created_at: int | None = None
    id: str | None = None
    name: str | None = None
    comment: str | None = None
    config: dict[str, Any] | None = None
    meta: dict[str, Any] | None = None


@dataclass(kw_only=True)
class Admin(Entity):
    """An administrator of Kong Manager."""

    created_at: int | None = None
    id: str | None = None
    email: str | None = None
    username: str | None = None
    password: str | None = None
    custom_id: str | None = None
    rbac_token_enabled: bool | None = None
    status: int | None = None
    token: str | None = None


@dataclass(kw_only=True)
class RBACUser(Entity):
    """A user of role-based access control."""

    created_at: int | None = None
    comment: str | None = None
    id: str | None = None
    name: str | None = None
    enabled: bool | None = None
    user_token: str | None = None
    user_token_ident: str | None = None


@dataclass(kw_only=True)
class WorkspaceEntity(Entity):
    """A record tying an entity to a workspace."""

    entity_id: str | None = None
    entity_type: str | None = None
    unique_field_name: str | None = None
    unique_field_value: str | None = None
    workspace_id: str | None = None
    workspace_name: str | None = None


@dataclass(kw_only=True)
class RBACRole(Entity):
    """A role of role-based access control."""

    created_at: int | None = None
    id: str | None = None
    name: str | None = None
    comment: str | None = None
    is_default: bool | None = None


@dataclass(kw_only=True)
class RBACEndpointPermission(Entity):
    """Permission of a role on an Admin API endpoint."""

    created_at: int | None = None
    workspace: str | None = None
    endpoint: str | None = None
    actions: list[str] | None = None
    negative: bool | None = None
    role: RBACRole | None = None
    comment: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return the wire form: actions comma-joined, the role left out."""
        return _without_unset(
            {
                "created_at": self.created_at,
                "workspace": self.workspace,
                "endpoint": self.endpoint,
                "actions": ",".join(self.actions or ()),
                "negative": self.negative,
                "comment": self.comment,
            }
        )


@dataclass(kw_only=True)
class RBACEntityPermission(Entity):
    """Permission of a role on a single entity."""

    created_at: int | None = None
    entity_id: str | None = None
    entity_type: str | None = None
    actions: list[str] | None = None
    negative: bool | None = None
    role: RBACRole | None = None
    comment: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return the wire form: actions comma-joined, the role left out."""
        return _without_unset(
            {
                "created_at": self.created_at,
                "entity_id": self.entity_id,
                "entity_type": self.entity_type,
                "actions": ",".join(self.actions or ()),
                "negative": self.negative,
                "comment": self.comment,
            }
        )


@dataclass(kw_only=True)
class RBACPermissionsList(Entity):
    """Endpoint and entity permissions granted to a user or role."""

    endpoints: dict[str, Any] | None = None
    entities: dict[str, Any] | None = None


@dataclass(kw_only=True)
class Developer(Entity):
    """A developer registered on the portal."""

    created_at: int | None = None
    id: str | None = None
    status: int | None = None
    email: str | None = None
    custom_id: str | None = None
    updated_at: int | None = None
    roles: list[str] | None = None
    rbac_user: RBACUser | None = None
    meta: str | None = None
    password: str | None = None


@dataclass(kw_only=True)
class DeveloperRole(Entity):
    """A role given to portal developers."""

    comment: str | None = None
    created_at: int | None = None
    id: str | None = None
    name: str | None = None