"""
Input Validators and Sanitizers

This module checks the raw inputs that reach the API layer before any
service work is done. Reachability of a URL is not checked here; that is
the job of the ReachabilityValidator service.
"""

from typing import Optional

from app.core.exceptions import MalformedRequestError


def validate_url_length(url: str, max_length: int = 2048) -> bool:
    """
    Validate URL length to prevent DoS attacks.

    Args:
        url: The URL to validate
        max_length: Maximum allowed length (default: 2048 per RFC 7230)

    Returns:
        True if URL length is valid, False otherwise
    """
    return bool(url) and len(url) <= max_length


def parse_url_body(body: bytes, max_length: int = 2048) -> str:
    """
    Turn a raw text/plain request body into a candidate URL.

    Args:
        body: Request body as received
        max_length: Maximum allowed URL length

    Returns:
        The URL with surrounding whitespace removed

    Raises:
        MalformedRequestError: If the body is empty, not UTF-8 or too long
    """
    try:
        url = body.decode("utf-8").strip()
    except UnicodeDecodeError as e:
        raise MalformedRequestError(f"request body is not valid UTF-8 text: {e}")

    return sanitize_lookup_key(url, max_length=max_length, field="request body")


def sanitize_lookup_key(
    key: Optional[str],
    max_length: int = 2048,
    field: str = "url query parameter",
) -> str:
    """
    Check a short code or URL passed to the resolve endpoint.

    Either form is accepted, so only presence and length are checked.
    """
    if key is None or not key.strip():
        raise MalformedRequestError(f"{field} is missing or empty")

    key = key.strip()
    if not validate_url_length(key, max_length):
        raise MalformedRequestError(f"{field} is longer than {max_length} characters")

    return key
