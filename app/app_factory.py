import logging

import httpx

from configs import AppConfig
from libs.http_client import HttpClient, PoolLimits, headers_middleware, logging_middleware, sanitize_headers
from libs.http_client.types import Middleware
from services.batch_runner import BatchRunner
from services.dispatcher import Dispatcher

logger = logging.getLogger(__name__)


def initialize_extensions(config: AppConfig, verbose: bool = False):
    from extensions import ext_logging

    ext_logging.init_app(config, level="DEBUG" if verbose else None)
    logger.debug("Initialized extension: ext_logging")


def create_client(
    config: AppConfig,
    timeout: float,
    transport: httpx.AsyncBaseTransport | None = None,
) -> HttpClient:
    """
    Build the HTTP client shared by every request of a run.

    The pool does not cap simultaneous connections; ``BatchRunner`` owns
    any concurrency ceiling.
    """
    middlewares: list[Middleware] = []
    default_headers = sanitize_headers(config.DEFAULT_HEADERS)
    if default_headers:
        middlewares.append(headers_middleware(**default_headers))
    middlewares.append(logging_middleware())

    return HttpClient(
        middlewares=middlewares,
        pool_limits=PoolLimits(
            max_connections=None,
            max_keepalive=config.POOL_MAX_KEEPALIVE,
            keepalive_expiry=config.POOL_KEEPALIVE_EXPIRY,
        ),
        default_timeout=timeout,
        follow_redirects=config.FOLLOW_REDIRECTS,
        transport=transport,
    )


def create_runner(client: HttpClient, max_concurrency: int | None = None) -> BatchRunner:
    return BatchRunner(
        Dispatcher(client, timeout=client.default_timeout),
        max_concurrency=max_concurrency,
    )
