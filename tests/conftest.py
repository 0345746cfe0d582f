import asyncio
import httpx
import pytest
from fastapi.testclient import TestClient
from app.api.routes import get_http_client
from app.core import config
from app.main import app

class FakeUpstream:
    """In-process stand-in for the servers behind the target URLs"""

    def __init__(self):
        self.routes = {}
        self.requests = []
        self.completed = []

    def add(self, url, body="", status_code=200, delay=0.0, error=None):
        self.routes[url] = {"body": body, "status_code": status_code, "delay": delay, "error": error}

    async def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get(str(request.url))
        if route is None:
            raise httpx.ConnectError("[Errno 111] Connection refused", request=request)
        if route["delay"]:
            await asyncio.sleep(route["delay"])
        self.completed.append(str(request.url))
        if route["error"] is not None:
            raise route["error"]("upstream error", request=request)
        return httpx.Response(route["status_code"], text=route["body"])

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handle))

@pytest.fixture(autouse=True)
def setup_test_environment():
    """Restore settings tests may override"""
    original_batch_timeout = config.settings.BATCH_TIMEOUT
    original_user_agent = config.settings.USER_AGENT

    yield

    config.settings.BATCH_TIMEOUT = original_batch_timeout
    config.settings.USER_AGENT = original_user_agent

@pytest.fixture
def upstream():
    return FakeUpstream()

@pytest.fixture
def api_client(upstream):
    """TestClient whose outbound requests go to the fake upstream"""
    http_client = upstream.client()
    app.dependency_overrides[get_http_client] = lambda: http_client

    yield TestClient(app)

    app.dependency_overrides.clear()
