import httpx
import pytest

from models.graph import Node
from osint.providers import dns_records


class FakeProviders:
    """
    httpx transport handler routing by hostname.

    A route value may be a JSON-able object (served with 200), an
    httpx.Response, an exception instance (raised) or a callable taking
    the request. Unrouted hosts answer 503.
    """

    def __init__(self, routes: dict | None = None):
        self.routes = dict(routes or {})
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        action = self.routes.get(request.url.host)
        if action is None:
            return httpx.Response(503, json={"error": "offline"})
        if isinstance(action, Exception):
            raise action
        if isinstance(action, httpx.Response):
            return action
        if callable(action):
            return action(request)
        return httpx.Response(200, json=action)

    def route(self, host: str, action) -> None:
        self.routes[host] = action

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self))

    @property
    def hosts(self) -> list[str]:
        return [r.url.host for r in self.requests]


@pytest.fixture
def providers():
    return FakeProviders()


@pytest.fixture
def offline_dns(monkeypatch):
    """Every DNS lookup answers with no records."""
    async def nothing(domain):
        return []

    for name in ("resolve_a", "resolve_mx", "resolve_ns", "resolve_txt"):
        monkeypatch.setattr(dns_records, name, nothing)


def _make_node(type: str, **data) -> Node:
    return Node(id=f"{type}-1", type=type, data=data, x=100, y=200)


@pytest.fixture
def make_node():
    return _make_node


@pytest.fixture
def ip_node():
    return _make_node("ip", ip="8.8.8.8")


@pytest.fixture
def domain_node():
    return _make_node("domain", domain="example.com")
