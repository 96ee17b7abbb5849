import json

import pytest
import responses
from responses import matchers

from kongadmin.client import KongClient, ListOpt
from kongadmin.enterprise import RBACRole, RBACUser
from kongadmin.rbac_user_service import RBACUserService

BASE = "http://kong.test"


@pytest.fixture
def rsps():
    with responses.RequestsMock(assert_all_requests_are_fired=False) as mock:
        yield mock


@pytest.fixture
def users():
    return RBACUserService(KongClient(BASE))


def _body(call):
    return json.loads(call.request.body)


def _new_user():
    return RBACUser(name="newUser", enabled=True, comment="testing", user_token="token")


def test_user_lifecycle(rsps, users):
    rsps.add(
        responses.POST,
        f"{BASE}/rbac/users",
        json={"id": "u1", "name": "newUser", "enabled": True, "comment": "testing"},
    )
    rsps.add(
        responses.GET,
        f"{BASE}/rbac/users/u1",
        json={"id": "u1", "name": "newUser", "enabled": True, "comment": "testing"},
    )
    rsps.add(
        responses.PATCH,
        f"{BASE}/rbac/users/u1",
        json={"id": "u1", "name": "newUser", "comment": "new comment"},
    )
    rsps.add(responses.DELETE, f"{BASE}/rbac/users/u1", status=204)

    created = users.create(_new_user())
    assert created.id == "u1"
    assert _body(rsps.calls[0]) == {
        "name": "newUser",
        "enabled": True,
        "comment": "testing",
        "user_token": "token",
    }

    user = users.get(created.id)
    assert user.name == "newUser"

    user.comment = "new comment"
    updated = users.update(user)
    assert updated.comment == "new comment"
    assert _body(rsps.calls[2])["comment"] == "new comment"

    users.delete(created.id)
    assert rsps.calls[3].request.method == "DELETE"
    assert len(rsps.calls) == 4


def test_workspace_aware_client(rsps):
    service = RBACUserService(KongClient(BASE + "/test-workspace"))
    rsps.add(
        responses.POST,
        f"{BASE}/test-workspace/rbac/users",
        json={"id": "u9", "name": "newUser"},
    )
    created = service.create(_new_user())
    assert created.id == "u9"
    assert rsps.calls[0].request.url == f"{BASE}/test-workspace/rbac/users"


def test_create_with_id_uses_put(rsps, users):
    rsps.add(responses.PUT, f"{BASE}/rbac/users/fixed", json={"id": "fixed"})
    created = users.create(RBACUser(id="fixed", name="n"))
    assert created.id == "fixed"
    assert rsps.calls[0].request.method == "PUT"


def test_update_by_name_when_id_missing(rsps, users):
    rsps.add(responses.PATCH, f"{BASE}/rbac/users/alice", json={"name": "alice"})
    updated = users.update(RBACUser(name="alice", comment="c"))
    assert updated.name == "alice"


@pytest.mark.parametrize(
    ("call", "message"),
    [
        (lambda s: s.create(None), "cannot create a nil user"),
        (lambda s: s.get(None), "nameOrID cannot be nil for Get operation"),
        (lambda s: s.get("  "), "nameOrID cannot be nil for Get operation"),
        (lambda s: s.update(None), "cannot update a nil User"),
        (lambda s: s.update(RBACUser()), "ID and Name cannot both be nil"),
        (lambda s: s.delete(""), "UserOrID cannot be nil for Delete operation"),
        (lambda s: s.list_roles(None), "nameOrID cannot be nil"),
    ],
)
def test_argument_errors(users, call, message):
    with pytest.raises(ValueError, match=message):
        call(users)


def test_user_roles(rsps, users):
    rsps.add(
        responses.POST,
        f"{BASE}/rbac/users/u1/roles",
        json={
            "roles": [{"id": "r1", "name": "roleA"}, {"id": "r2", "name": "roleB"}],
            "user": {"id": "u1"},
        },
    )
    rsps.add(
        responses.GET,
        f"{BASE}/rbac/users/u1/roles",
        json={"roles": [{"id": "r1", "name": "roleA"}, {"id": "r2", "name": "roleB"}]},
    )
    rsps.add(
        responses.GET,
        f"{BASE}/rbac/users/u1/permissions",
        json={"endpoints": {"default": {"/rbac": {"actions": ["create", "read"]}}}, "entities": {}},
    )
    roles = [RBACRole(id="r1", name="roleA"), RBACRole(id="r2", name="roleB")]

    added = users.add_roles("u1", roles)
    assert [role.name for role in added] == ["roleA", "roleB"]
    assert _body(rsps.calls[0]) == {"name_or_id": "u1", "roles": "roleA,roleB"}

    listed = users.list_roles("u1")
    assert len(listed) == 2

    permissions = users.list_permissions("u1")
    assert len(permissions.endpoints) == 1


def test_delete_roles_sends_body(rsps, users):
    rsps.add(responses.DELETE, f"{BASE}/rbac/users/u1/roles", status=204)
    result = users.delete_roles("u1", [RBACRole(name="roleA")])
    assert result is None
    assert rsps.calls[0].request.method == "DELETE"
    assert _body(rsps.calls[0]) == {"name_or_id": "u1", "roles": "roleA"}


def test_role_errors_are_wrapped(rsps, users):
    rsps.add(responses.POST, f"{BASE}/rbac/users/u1/roles", status=404, json={"message": "Not found"})
    rsps.add(responses.DELETE, f"{BASE}/rbac/users/u1/roles", status=404, json={"message": "Not found"})
    rsps.add(responses.GET, f"{BASE}/rbac/users/u1/roles", status=500, json={"message": "boom"})
    rsps.add(responses.GET, f"{BASE}/rbac/users/u1/permissions", status=500, json={"message": "boom"})
    with pytest.raises(RuntimeError, match="^error updating roles:"):
        users.add_roles("u1", [RBACRole(name="a")])
    with pytest.raises(RuntimeError, match="^error deleting roles:"):
        users.delete_roles("u1", [RBACRole(name="a")])
    with pytest.raises(RuntimeError, match="^error retrieving list of roles:"):
        users.list_roles("u1")
    with pytest.raises(RuntimeError, match="^error retrieving list of permissions for role:"):
        users.list_permissions("u1")


def test_list_pages_and_list_all(rsps, users):
    rsps.add(
        responses.GET,
        f"{BASE}/rbac/users/",
        json={"data": [{"name": "a"}], "next": "/rbac/users/?offset=off1", "offset": "off1"},
        match=[matchers.query_param_matcher({"size": "1"})],
    )
    rsps.add(
        responses.GET,
        f"{BASE}/rbac/users/",
        json={"data": [{"name": "a"}], "next": "/rbac/users/?offset=off1", "offset": "off1"},
        match=[matchers.query_param_matcher({"size": "1000"})],
    )
    rsps.add(
        responses.GET,
        f"{BASE}/rbac/users/",
        json={"data": [{"name": "b"}, {"name": "c"}], "next": None},
        match=[matchers.query_param_matcher({"size": "1000", "offset": "off1"})],
    )

    page, next_opt = users.list(ListOpt(size=1))
    assert [user.name for user in page] == ["a"]
    assert next_opt == ListOpt(size=1, offset="off1")

    everything = users.list_all()
    assert [user.name for user in everything] == ["a", "b", "c"]