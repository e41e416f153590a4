import asyncio
import time
from typing import Any

import httpx

from exceptions import ClientInitError

from .models import Request, Response
from .pool import PoolLimits
from .types import Middleware


class HttpClient:
    """
    Pooled async HTTP client shared by every request of a run.

    One ``httpx.AsyncClient`` is created lazily and reused until ``close``.
    Requests pass through the middleware chain in order before being sent.
    """

    def __init__(
        self,
        middlewares: list[Middleware] | None = None,
        pool_limits: PoolLimits | None = None,
        default_timeout: float = 30.0,
        follow_redirects: bool = True,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._middlewares = middlewares or []
        self._pool_limits = pool_limits or PoolLimits()
        self._default_timeout = default_timeout
        self._follow_redirects = follow_redirects
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def default_timeout(self) -> float:
        return self._default_timeout

    async def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None:
            try:
                self._client = httpx.AsyncClient(
                    limits=self._pool_limits.to_httpx_limits(),
                    timeout=self._default_timeout,
                    follow_redirects=self._follow_redirects,
                    transport=self._transport,
                )
            except (httpx.HTTPError, TypeError, ValueError) as e:
                raise ClientInitError(f"Unable to construct HTTP client: {e}") from e
        return self._client

    async def close(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "HttpClient":
        await self._ensure_client()
        return self

    async def __aexit__(self, *_args: Any) -> None:
        await self.close()

    async def send(self, request: Request) -> Response:
        if self._middlewares:
            return await self._execute_with_middleware(request, 0)
        return await self._do_request(request)

    async def _execute_with_middleware(self, request: Request, index: int) -> Response:
        if index >= len(self._middlewares):
            return await self._do_request(request)

        middleware = self._middlewares[index]

        async def next_fn(req: Request) -> Response:
            return await self._execute_with_middleware(req, index + 1)

        return await middleware(request, next_fn)

    async def _do_request(self, request: Request) -> Response:
        client = await self._ensure_client()
        start_time = time.perf_counter()

        kwargs: dict[str, Any] = {}
        if request.json_body is not None:
            kwargs["json"] = request.json_body
        elif request.form is not None:
            kwargs["data"] = request.form

        # httpx applies the timeout per phase; the deadline bounds the whole exchange
        try:
            async with asyncio.timeout(request.timeout):
                http_response = await client.request(
                    method=request.method,
                    url=request.url,
                    headers=request.headers,
                    params=request.params or None,
                    timeout=request.timeout,
                    **kwargs,
                )
        except TimeoutError as e:
            raise httpx.TimeoutException(
                f"Request did not complete within {request.timeout:g}s"
            ) from e

        latency_ms = (time.perf_counter() - start_time) * 1000

        return Response(
            status_code=http_response.status_code,
            reason_phrase=httpx.codes.get_reason_phrase(http_response.status_code),
            headers=dict(http_response.headers),
            text=http_response.text,
            latency_ms=latency_ms,
            request=request,
        )
