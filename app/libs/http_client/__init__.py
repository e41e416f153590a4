"""HTTP Client module."""

from .client import HttpClient
from .errors import TRANSPORT_ERRORS, classify_error, describe_error
from .headers import is_valid_header_name, is_valid_header_value, sanitize_headers
from .middleware import headers_middleware, logging_middleware
from .models import Request, Response
from .pool import PoolLimits
from .types import Middleware, NextFn

__all__ = [
    "HttpClient",
    "Request",
    "Response",
    "PoolLimits",
    "Middleware",
    "NextFn",
    "TRANSPORT_ERRORS",
    "classify_error",
    "describe_error",
    "is_valid_header_name",
    "is_valid_header_value",
    "sanitize_headers",
    "logging_middleware",
    "headers_middleware",
]
