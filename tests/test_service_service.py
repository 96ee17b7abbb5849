import json
import uuid

import pytest
import responses
from responses import matchers

from kongadmin.client import APIError, KongClient, ListOpt
from kongadmin.models import Certificate, Service
from kongadmin.service_service import ServiceService

BASE = "http://kong.test:8001"


@pytest.fixture
def mock():
    with responses.RequestsMock() as rsps:
        yield rsps


@pytest.fixture
def services():
    return ServiceService(KongClient(BASE))


def _names(items):
    return sorted(service.name for service in items)


def test_create_nil_service_raises(services):
    with pytest.raises(ValueError, match="nil service"):
        services.create(None)


def test_update_nil_service_raises(services):
    with pytest.raises(ValueError, match="nil service"):
        services.update(None)


def test_create_posts(mock, services):
    mock.add(
        responses.POST,
        f"{BASE}/services",
        json={"id": "s1", "name": "foo", "host": "upstream", "port": 42, "path": "/path"},
        status=201,
    )
    created = services.create(Service(name="foo", host="upstream", port=42, path="/path"))
    assert created.id == "s1"
    assert created.port == 42
    assert json.loads(mock.calls[0].request.body) == {
        "name": "foo",
        "host": "upstream",
        "port": 42,
        "path": "/path",
    }


def test_create_with_id_uses_put(mock, services):
    service_id = str(uuid.uuid4())
    mock.add(
        responses.PUT,
        f"{BASE}/services/{service_id}",
        json={"id": service_id, "name": "fizz", "host": "buzz"},
    )
    created = services.create(Service(name="fizz", id=service_id, host="buzz"))
    assert created.id == service_id
    assert created.host == "buzz"


def test_get(mock, services):
    mock.add(responses.GET, f"{BASE}/services/s1", json={"id": "s1", "name": "foo"})
    assert services.get("s1").name == "foo"


def test_get_empty_id_raises(services):
    with pytest.raises(ValueError, match="nameOrID"):
        services.get("")


def test_update_refreshes_in_place(mock, services):
    mock.add(
        responses.PUT,
        f"{BASE}/services/s1",
        json={"id": "s1", "name": "bar", "host": "newUpstream", "port": 42},
    )
    service = Service(id="s1", name="bar", host="newUpstream", port=42, path="/path")
    updated = services.update(service)
    assert updated is service
    assert updated.name == "bar"
    assert updated.host == "newUpstream"
    assert updated.port == 42
    assert updated.path == "/path"


def test_update_by_name(mock, services):
    mock.add(responses.PUT, f"{BASE}/services/foo", json={"id": "s7", "name": "foo"})
    updated = services.update(Service(name="foo", host="h"))
    assert updated.id == "s7"


def test_get_for_route(mock, services):
    mock.add(responses.GET, f"{BASE}/routes/r1/service", json={"id": "s1", "name": "bar"})
    assert services.get_for_route("r1").id == "s1"


def test_get_for_route_empty_raises(services):
    with pytest.raises(ValueError, match="routeID"):
        services.get_for_route(None)


def test_delete(mock, services):
    mock.add(responses.DELETE, f"{BASE}/services/s1", status=204)
    assert services.delete("s1") is None
    assert len(mock.calls) == 1


def test_delete_not_found(mock, services):
    mock.add(responses.DELETE, f"{BASE}/services/zzz", json={"message": "Not found"}, status=404)
    with pytest.raises(APIError) as info:
        services.delete("zzz")
    assert info.value == APIError(404, "Not found")


def test_service_with_tags(mock, services):
    mock.add(
        responses.POST,
        f"{BASE}/services",
        json={"id": "s1", "name": "key-auth", "host": "example.com", "tags": ["tag1", "tag2"]},
        status=201,
    )
    created = services.create(Service(name="key-auth", host="example.com", tags=["tag1", "tag2"]))
    assert created.tags == ["tag1", "tag2"]


def test_service_with_client_cert(mock, services):
    mock.add(
        responses.POST,
        f"{BASE}/services",
        json={"id": "s1", "name": "foo", "protocol": "https", "client_certificate": {"id": "c1"}},
        status=201,
    )
    created = services.create(
        Service(name="foo", host="example.com", protocol="https",
                client_certificate=Certificate(id="c1"))
    )
    assert created.client_certificate.id == "c1"
    assert json.loads(mock.calls[0].request.body)["client_certificate"] == {"id": "c1"}


def test_list_and_pagination(mock, services):
    items = [{"id": f"s{n}", "name": f"foo{n}", "host": f"upstream{n}.com"} for n in (1, 2, 3)]
    mock.add(responses.GET, f"{BASE}/services", json={"data": items, "next": None},
             match=[matchers.query_param_matcher({})])
    mock.add(
        responses.GET,
        f"{BASE}/services",
        json={"data": items[:1], "next": "/services?offset=xyz", "offset": "xyz"},
        match=[matchers.query_param_matcher({"size": "1"})],
    )
    mock.add(
        responses.GET,
        f"{BASE}/services",
        json={"data": items[1:], "next": None},
        match=[matchers.query_param_matcher({"size": "2", "offset": "xyz"})],
    )

    everything, next_opt = services.list(None)
    assert next_opt is None
    assert _names(everything) == ["foo1", "foo2", "foo3"]

    page1, next_opt = services.list(ListOpt(size=1))
    assert len(page1) == 1
    next_opt.size = 2
    page2, last = services.list(next_opt)
    assert last is None
    assert len(page2) == 2
    assert _names(page1 + page2) == ["foo1", "foo2", "foo3"]


def test_list_all(mock, services):
    items = [{"id": f"s{n}", "name": f"foo{n}"} for n in (1, 2, 3)]
    mock.add(
        responses.GET,
        f"{BASE}/services",
        json={"data": items, "next": None},
        match=[matchers.query_param_matcher({"size": "1000"})],
    )
    everything = services.list_all()
    assert _names(everything) == ["foo1", "foo2", "foo3"]