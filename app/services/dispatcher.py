import logging
import time

from extensions.ext_logging import request_name_var
from libs.http_client import TRANSPORT_ERRORS, HttpClient, Request, describe_error, sanitize_headers
from schemas.batch import RequestResult, RequestSpec

logger = logging.getLogger(__name__)

SUPPORTED_METHODS = frozenset({"GET", "POST", "PUT", "DELETE", "PATCH"})

BODY_FORM_CONFLICT = "Cannot use 'body' and 'form' fields simultaneously."


class Dispatcher:
    """
    Sends one request per spec and records its outcome.

    Every failure a request can meet on its own (bad method, body/form
    conflict, transport errors) ends up in ``RequestResult.error``.
    """

    def __init__(self, client: HttpClient, timeout: float):
        self._client = client
        self._timeout = timeout

    async def dispatch(self, spec: RequestSpec) -> RequestResult:
        token = request_name_var.set(spec.display_name)
        try:
            return await self._dispatch(spec)
        finally:
            request_name_var.reset(token)

    def _failure(self, spec: RequestSpec, error: str, response_time_ms: float = 0.0) -> RequestResult:
        return RequestResult(
            name=spec.display_name,
            url=spec.url,
            method=spec.method,
            success=False,
            response_time_ms=response_time_ms,
            error=error,
        )

    def _build_request(self, spec: RequestSpec) -> Request | str:
        """Return the outgoing request, or the validation error that prevents sending it."""
        method = spec.method.upper()
        if method not in SUPPORTED_METHODS:
            return f"Unsupported method: {spec.method}"

        if spec.body is not None and spec.form is not None:
            return BODY_FORM_CONFLICT

        return Request(
            method=method,
            url=spec.url,
            headers=sanitize_headers(spec.headers),
            params=dict(spec.params or {}),
            json_body=spec.body,
            form=dict(spec.form) if spec.form is not None else None,
            timeout=self._timeout,
        )

    async def _dispatch(self, spec: RequestSpec) -> RequestResult:
        request = self._build_request(spec)
        if isinstance(request, str):
            logger.warning(f"Rejected {spec.display_name}: {request}")
            return self._failure(spec, request)

        start_time = time.perf_counter()
        try:
            response = await self._client.send(request)
        except TRANSPORT_ERRORS as e:
            elapsed_ms = (time.perf_counter() - start_time) * 1000
            error = describe_error(e, self._timeout)
            logger.warning(f"{request.method} {request.url} failed: {error}")
            return self._failure(spec, error, elapsed_ms)
        elapsed_ms = (time.perf_counter() - start_time) * 1000

        return RequestResult(
            name=spec.display_name,
            url=spec.url,
            method=spec.method,
            status_code=response.status_code,
            status_text=response.reason_phrase,
            success=response.ok,
            response_time_ms=elapsed_ms,
            response_body=response.json_or_none(),
        )
