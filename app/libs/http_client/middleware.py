import logging

from .models import Request, Response
from .types import Middleware, NextFn


def logging_middleware(logger: logging.Logger | None = None) -> Middleware:
    log = logger or logging.getLogger(__name__)

    async def middleware(request: Request, next: NextFn) -> Response:
        log.debug(f"-> {request.method} {request.url}")
        response = await next(request)
        log.debug(f"<- {response.status_code} ({response.latency_ms:.0f}ms)")
        return response

    return middleware


def headers_middleware(**headers: str) -> Middleware:
    """Add default headers, leaving headers the request already sets untouched."""

    async def middleware(request: Request, next: NextFn) -> Response:
        return await next(request.with_defaults(headers))

    return middleware
