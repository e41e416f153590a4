"""
Transport failure classification.

Every exception raised while sending a request maps onto one of six stable
categories, checked in priority order with the first match winning.
"""

import httpx

TIMEOUT = "Request timeout ({timeout}s)"
CONNECT = "Unable to connect to server"
INVALID_REQUEST = "Invalid request"
BODY = "Body processing failed"
DECODE = "Response decoding failed"
UNKNOWN = "Unknown error"

# Exceptions a dispatcher converts into a per-request error. Anything else
# is a bug and propagates.
TRANSPORT_ERRORS: tuple[type[Exception], ...] = (
    httpx.HTTPError,
    httpx.InvalidURL,
    httpx.StreamError,
    TypeError,
    ValueError,
)

_CATEGORIES: list[tuple[tuple[type[Exception], ...], str]] = [
    ((httpx.TimeoutException,), TIMEOUT),
    ((httpx.ConnectError, httpx.ProxyError), CONNECT),
    (
        (
            httpx.InvalidURL,
            httpx.UnsupportedProtocol,
            httpx.LocalProtocolError,
            httpx.TooManyRedirects,
        ),
        INVALID_REQUEST,
    ),
    ((httpx.WriteError, httpx.ReadError, httpx.StreamError, TypeError, ValueError), BODY),
    ((httpx.DecodingError, httpx.RemoteProtocolError), DECODE),
]


def format_timeout(timeout: float) -> str:
    return f"{timeout:g}"


def classify_error(exc: BaseException, timeout: float) -> str:
    """Return the category text for a transport failure."""
    for exc_types, category in _CATEGORIES:
        if isinstance(exc, exc_types):
            return category.format(timeout=format_timeout(timeout))
    return UNKNOWN


def describe_error(exc: BaseException, timeout: float) -> str:
    """Return ``"<category>: <message>"`` for a transport failure."""
    message = str(exc) or type(exc).__name__
    return f"{classify_error(exc, timeout)}: {message}"
