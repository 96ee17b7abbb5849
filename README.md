# kongadmin

A small, synchronous client for the Kong Admin API, built on `requests`.

It covers the core gateway entities: services, routes, SNIs, upstreams,
targets and upstream node health. It also covers two enterprise entities,
RBAC users and workspaces. Entities are keyword-only dataclasses. Each one
converts to its JSON form with `to_dict()` and back with `from_dict()`.
`to_dict()` leaves out unset fields and empty lists and maps.

## Installation

```
pip install kongadmin
```

## Usage

```python
from kongadmin.client import KongClient, ListOpt
from kongadmin.models import Service, Route
from kongadmin.service_service import ServiceService
from kongadmin.route_service import RouteService

client = KongClient("http://localhost:8001", None)
services = ServiceService(client)
routes = RouteService(client)

svc = services.create(Service(name="foo", host="upstream", port=42, path="/path"))
route = routes.create_in_service(svc.id, Route(paths=["/foo"]))

# One page at a time
page, next_opt = routes.list(ListOpt(size=1))
while next_opt is not None:
    more, next_opt = routes.list(next_opt)
    page.extend(more)

# Or everything in one call
all_routes = routes.list_all()

routes.delete(route.id)
services.delete(svc.id)
```

`KongClient` defaults to `http://localhost:8001` when no base URL is given,
and it creates its own `requests.Session` when none is passed. `ListOpt`
holds the paging and tag-filter options:

- `size`
- `offset`
- `tags`
- `match_all_tags`

Each `list` call returns a page of entities together with the `ListOpt` for
the next page. That second value is `None` once the last page has been read.

When an entity has an `id`, `create` sends it with `PUT` to that ID. Without
an `id`, `create` uses `POST`. `ServiceService.update` sends a `PUT`, then
updates the given `Service` in place from the response and returns it.

### Errors

Invalid arguments raise `ValueError` before any request is sent. Examples are
a missing identifier or a `None` entity. A response with a status outside
200–399 raises `kongadmin.client.APIError`. The error carries the HTTP status
code in `code` and the `message` field of the response body in `message`.

```python
from kongadmin.client import APIError

try:
    services.get("missing")
except APIError as err:
    print(err.code, err.message)
```

Some `RBACUserService` methods handle failures differently. These are
`add_roles`, `delete_roles`, `list_roles` and `list_permissions`. They wrap
API and transport failures in a `RuntimeError`, such as
`error updating roles: ...`, and the original exception is kept as its cause.

### Targets and health

```python
from kongadmin.models import Upstream, Target
from kongadmin.upstream_service import UpstreamService
from kongadmin.target_service import TargetService
from kongadmin.upstream_node_health_service import UpstreamNodeHealthService

upstreams = UpstreamService(client)
targets = TargetService(client)
health = UpstreamNodeHealthService(client)

up = upstreams.create(Upstream(name="vhost.com"))
t = targets.create(up.id, Target(target="10.0.0.1:80"))
targets.mark_unhealthy(up.id, t)
targets.mark_healthy(up.id, t)
print(health.list_all(up.id))
```

### Enterprise

```python
from kongadmin.enterprise import RBACUser, RBACRole, Workspace
from kongadmin.rbac_user_service import RBACUserService
from kongadmin.workspace_service import WorkspaceService

users = RBACUserService(client)
user = users.create(RBACUser(name="newUser", enabled=True, user_token="token"))
users.add_roles(user.id, [RBACRole(name="roleA")])
print(users.list_roles(user.id))
print(users.list_permissions(user.id))

workspaces = WorkspaceService(client)
ws = workspaces.create(Workspace(name="teamA"))
```

The workspace methods below call endpoints that Kong 2.x no longer offers:

- `add_entities`
- `delete_entities`
- `list_entities`

### Extra headers

Use `kongadmin.utils.http_client_with_headers(session, headers)` to send
extra headers with every request, such as an admin token. It returns a new
session that copies the settings of `session`; `session` may be `None`.
Headers injected this way override headers of the same name on a request.
Pass the result to `KongClient`:

```python
from kongadmin.utils import http_client_with_headers

session = http_client_with_headers(None, {"Kong-Admin-Token": "token"})
client = KongClient("http://localhost:8001", session)
```

### Plugin configuration

`kongadmin.models.Configuration` is a `dict` that holds a plugin's free-form
`config`. `deep_copy()` returns an independent copy made through a JSON
round trip.

## What it does not do

The package has entity classes for several objects that have no service
class to send them to the Admin API:

- certificates
- consumers
- plugins
- admins
- RBAC roles
- endpoint and entity permissions
- developers
- developer roles

You can build these objects and convert them to and from JSON, but you must
send them yourself, using `KongClient.new_request` and `KongClient.do`. The
package is a library only: it has no command-line tool.

## Running the tests

```
pip install -e ".[test]"
pytest
```