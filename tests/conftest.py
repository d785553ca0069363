import json
from typing import Any, Callable, Dict, List, Tuple

import httpx
import pytest

from atomicwork_mcp.client import AtomicworkClient
from atomicwork_mcp.config import Settings
from atomicwork_mcp.mcp_server import ToolAdapter

BASE_URL = "https://acme.atomicwork.com/api/v1"
API_PREFIX = "/api/v1"


class FakeAtomicwork:
    """In-memory stand-in for the Atomicwork API, served via MockTransport."""

    def __init__(self) -> None:
        self.requests: List[httpx.Request] = []
        self._routes: Dict[Tuple[str, str], Callable[[httpx.Request], httpx.Response]] = {}

    def add(
        self,
        method: str,
        path: str,
        json: Any = None,
        status_code: int = 200,
        text: str | None = None,
        exc: Exception | None = None,
    ) -> None:
        def respond(request: httpx.Request) -> httpx.Response:
            if exc is not None:
                raise exc
            if text is not None:
                return httpx.Response(status_code, text=text)
            return httpx.Response(status_code, json=json)

        self._routes[(method, path)] = respond

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.removeprefix(API_PREFIX)
        route = self._routes.get((request.method, path))
        if route is None:
            return httpx.Response(404, text=f"no route for {request.method} {path}")
        return route(request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def body(self, index: int = -1) -> Any:
        return json.loads(self.requests[index].content)


@pytest.fixture
def settings():
    return Settings(
        ATOMICWORK_API_KEY="test-key",
        ATOMICWORK_BASE_URL=BASE_URL,
        ATOMICWORK_USER_ID="42",
        ATOMICWORK_WORKSPACE_ID="7",
        _env_file=None,
    )


@pytest.fixture
def fake_api():
    return FakeAtomicwork()


@pytest.fixture
def client(settings, fake_api):
    return AtomicworkClient(settings, transport=fake_api.transport)


@pytest.fixture
def adapter(settings, client):
    return ToolAdapter(settings, client)
