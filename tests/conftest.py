import httpx
import pytest

from parking_radar.config import Settings

ORIGIN = "https://itaipeiparking.pma.gov.taipei"


class FakeTarget:
    """Scriptable stand-in for the upstream site, served via httpx.MockTransport.

    Routes are keyed by (method, path). A route is either a response spec
    ``(status, text, headers)``, an exception to raise, or a callable taking
    the request and returning an ``httpx.Response``. Unknown routes get 404.
    """

    def __init__(self):
        self.routes: dict[tuple[str, str], object] = {}
        self.requests: list[httpx.Request] = []

    def add(self, method, path, status=200, text="", headers=None):
        self.routes[(method, path)] = (status, text, headers or [])

    def fail(self, method, path, exc=None):
        self.routes[(method, path)] = exc or httpx.ConnectError("connection refused")

    def handle(self, method, path, func):
        self.routes[(method, path)] = func

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, text="not found")
        if isinstance(route, Exception):
            raise route
        if callable(route):
            return route(request)
        status, text, headers = route
        return httpx.Response(status, text=text, headers=headers)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def paths(self, method: str | None = None) -> list[str]:
        return [
            r.url.path for r in self.requests if method is None or r.method == method
        ]

    def last(self, path: str) -> httpx.Request:
        return [r for r in self.requests if r.url.path == path][-1]


@pytest.fixture
def target():
    return FakeTarget()


@pytest.fixture
def test_settings(monkeypatch):
    monkeypatch.delenv("TARGET_ORIGIN", raising=False)
    monkeypatch.delenv("PARKS_PATH", raising=False)
    return Settings()
