"""Pytest 配置文件"""

import asyncio
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager

import httpx
import pytest

from libs.http_client import HttpClient
from schemas.batch import RequestSpec

Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture
def make_client():
    """Build an ``HttpClient`` whose requests are answered by ``handler``."""

    def _make(handler: Handler, timeout: float = 5.0, **kwargs) -> HttpClient:
        return HttpClient(
            default_timeout=timeout,
            transport=httpx.MockTransport(handler),
            **kwargs,
        )

    return _make


@pytest.fixture
def recorded_requests() -> list[httpx.Request]:
    return []


@pytest.fixture
def json_ok_handler(recorded_requests):
    """Mock endpoint answering every request with 200 and ``{"ok": true}``."""

    def handler(request: httpx.Request) -> httpx.Response:
        recorded_requests.append(request)
        return httpx.Response(200, json={"ok": True})

    return handler


@pytest.fixture
def make_spec():
    def _make(**fields) -> RequestSpec:
        fields.setdefault("url", "https://api.example.com/items")
        fields.setdefault("method", "GET")
        return RequestSpec(**fields)

    return _make


@pytest.fixture
def trickle_server(monkeypatch):
    """
    Real local HTTP endpoint that announces an 8-byte body and sends it
    one byte every ``interval`` seconds.

    Usage:
        async with trickle_server(interval=0.5) as url:
            ...
    """
    for name in ("HTTP_PROXY", "http_proxy", "HTTPS_PROXY", "https_proxy", "ALL_PROXY", "all_proxy"):
        monkeypatch.delenv(name, raising=False)

    @asynccontextmanager
    async def _serve(interval: float = 0.5) -> AsyncIterator[str]:
        handlers: set[asyncio.Task] = set()

        async def handle(reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
            handlers.add(asyncio.current_task())
            try:
                await reader.readuntil(b"\r\n\r\n")
                writer.write(b"HTTP/1.1 200 OK\r\nContent-Length: 8\r\n\r\n")
                await writer.drain()
                for _ in range(8):
                    await asyncio.sleep(interval)
                    writer.write(b"x")
                    await writer.drain()
            except (ConnectionError, asyncio.IncompleteReadError):
                pass
            finally:
                writer.close()

        server = await asyncio.start_server(handle, "127.0.0.1", 0)
        port = server.sockets[0].getsockname()[1]
        try:
            yield f"http://127.0.0.1:{port}/slow"
        finally:
            for task in handlers:
                task.cancel()
            await asyncio.gather(*handlers, return_exceptions=True)
            server.close()
            await server.wait_closed()

    return _serve
