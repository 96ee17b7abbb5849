"""Workspaces of the Kong Enterprise Admin API."""

from __future__ import annotations

from typing import Any

from .client import PAGE_SIZE, KongClient, ListOpt
from .enterprise import Workspace, WorkspaceEntity
from .utils import is_empty_string


def _require_workspace(workspace_name_or_id: str | None) -> str:
    if workspace_name_or_id is None:
        raise ValueError("workspaceNameOrID cannot be nil")
    return workspace_name_or_id


class WorkspaceService:
    """Creates, fetches, updates, deletes and lists workspaces."""

    def __init__(self, client: KongClient) -> None:
        self.client = client

    def _call(self, method: str, endpoint: str, body: Any = None) -> Any:
        return self.client.do(self.client.new_request(method, endpoint, None, body))

    def create(self, workspace: Workspace | None) -> Workspace:
        """Create *workspace*; a workspace with an ID is created under that ID."""
        if workspace is None:
            raise ValueError("cannot create a nil workspace")
        endpoint, method = "/workspaces", "POST"
        if workspace.id is not None:
            endpoint, method = f"{endpoint}/{workspace.id}", "PUT"
        return Workspace.from_dict(self._call(method, endpoint, workspace) or {})

    def get(self, name_or_id: str | None) -> Workspace:
        """Fetch a workspace by name or ID."""
        if is_empty_string(name_or_id):
            raise ValueError("nameOrID cannot be nil for Get operation")
        return Workspace.from_dict(self._call("GET", f"/workspaces/{name_or_id}") or {})

    def update(self, workspace: Workspace | None) -> Workspace:
        """Patch a workspace by ID; only the comment can be changed this way."""
        if workspace is None:
            raise ValueError("cannot update a nil Workspace")
        if is_empty_string(workspace.id):
            raise ValueError("ID cannot be nil for Update operation")
        payload = self._call("PATCH", f"/workspaces/{workspace.id}", workspace)
        return Workspace.from_dict(payload or {})

    def delete(self, name_or_id: str | None) -> None:
        """Delete a workspace by name or ID."""
        if is_empty_string(name_or_id):
            raise ValueError("WorkspaceOrID cannot be nil for Delete operation")
        self._call("DELETE", f"/workspaces/{name_or_id}")

    def list(self, opt: ListOpt | None = None) -> tuple[list[Workspace], ListOpt | None]:
        """Fetch one page of workspaces and the options for the next page."""
        data, next_opt = self.client.list("/workspaces/", opt)
        return [Workspace.from_dict(item) for item in data], next_opt

    def list_all(self) -> list[Workspace]:
        """Fetch every workspace, page by page."""
        workspaces: list[Workspace] = []
        opt: ListOpt | None = ListOpt(size=PAGE_SIZE)
        while opt is not None:
            page, opt = self.list(opt)
            workspaces.extend(page)
        return workspaces

    def add_entities(
        self, workspace_name_or_id: str | None, entity_ids: str | None
    ) -> list[dict[str, Any]]:
        """Add comma-separated entity IDs to a workspace; return the added records.

        Kong 2.x no longer offers this endpoint.
        """
        if entity_ids is None:
            raise ValueError("entityIds cannot be nil")
        key = _require_workspace(workspace_name_or_id)
        payload = self._call("POST", f"/workspaces/{key}/entities", {"entities": entity_ids})
        return list(payload or [])

    def delete_entities(self, workspace_name_or_id: str | None, entity_ids: str | None) -> None:
        """Remove comma-separated entity IDs from a workspace.

        Kong 2.x no longer offers this endpoint.
        """
        if entity_ids is None:
            raise ValueError("entityIds cannot be nil")
        key = _require_workspace(workspace_name_or_id)
        self._call("DELETE", f"/workspaces/{key}/entities", {"entities": entity_ids})

    def list_entities(self, workspace_name_or_id: str | None) -> list[WorkspaceEntity]:
        """Return the entity records of a workspace.

        Kong 2.x no longer offers this endpoint.
        """
        key = _require_workspace(workspace_name_or_id)
        data, _ = self.client.list(f"/workspaces/{key}/entities", None)
        return [WorkspaceEntity.from_dict(item) for item in data]