"""Shared fixtures for upload client tests."""

from typing import Any

import httpx
import pytest
import pytest_asyncio

from memory_client.backend_client import BackendClient
from memory_client.interfaces.base import DialogHost
from memory_client.tagging_client import TagServiceClient


class MockTransport(httpx.AsyncBaseTransport):
    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.responses: dict[str, tuple[int, object]] = {}
        self.errors: dict[str, Exception] = {}

    def set_response(self, method_path: str, status: int, json_data: object) -> None:
        self.responses[method_path] = (status, json_data)

    def set_error(self, method_path: str, error: Exception) -> None:
        self.errors[method_path] = error

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        await request.aread()
        self.requests.append(request)
        key = f"{request.method} {request.url.path}"
        if key in self.errors:
            raise self.errors[key]
        if key not in self.responses:
            return httpx.Response(404, json={"detail": "not found"}, request=request)
        status, data = self.responses[key]
        if isinstance(data, (bytes, str)):
            return httpx.Response(status, content=data, request=request)
        return httpx.Response(status, json=data, request=request)


class RecordingHost(DialogHost):
    """Dialog host that records every interaction."""

    def __init__(self):
        self.alerts: list[str] = []
        self.records: list[dict[str, Any]] = []
        self.close_count = 0

    async def alert(self, message: str) -> None:
        self.alerts.append(message)

    async def on_success(self, record: dict[str, Any]) -> None:
        self.records.append(record)

    async def on_close(self) -> None:
        self.close_count += 1


@pytest_asyncio.fixture
async def mock_transport() -> MockTransport:
    return MockTransport()


@pytest_asyncio.fixture
async def tagger(mock_transport: MockTransport):
    http = httpx.AsyncClient(transport=mock_transport, base_url="http://tagger")
    c = TagServiceClient.__new__(TagServiceClient)
    c._client = http
    yield c
    await http.aclose()


@pytest_asyncio.fixture
async def backend(mock_transport: MockTransport):
    http = httpx.AsyncClient(transport=mock_transport, base_url="http://backend")
    c = BackendClient.__new__(BackendClient)
    c._client = http
    yield c
    await http.aclose()


@pytest.fixture
def host() -> RecordingHost:
    return RecordingHost()
