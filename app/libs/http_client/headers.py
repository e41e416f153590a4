"""
Header validation for outgoing requests.

Header names must be RFC 7230 tokens and values may only contain visible
ASCII characters, spaces and horizontal tabs. Pairs that fail either check
are dropped instead of failing the request.
"""

import logging
import re

logger = logging.getLogger(__name__)

_TOKEN_RE = re.compile(r"^[!#$%&'*+\-.^_`|~0-9A-Za-z]+$")
_VALUE_RE = re.compile(r"^[\t\x20-\x7e]*$")


def is_valid_header_name(name: str) -> bool:
    return bool(_TOKEN_RE.match(name))


def is_valid_header_value(value: str) -> bool:
    return bool(_VALUE_RE.match(value))


def sanitize_headers(headers: dict[str, str] | None) -> dict[str, str]:
    """
    Keep only the header pairs that are valid on the wire.

    Args:
        headers: Header name to value mapping as declared by the user

    Returns:
        A new dict without the invalid pairs
    """
    if not headers:
        return {}

    valid: dict[str, str] = {}
    for name, value in headers.items():
        if is_valid_header_name(name) and is_valid_header_value(value):
            valid[name] = value
        else:
            logger.debug(f"Dropping invalid header {name!r}")
    return valid
