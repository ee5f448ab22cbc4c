"""
Custom Exceptions

This module defines custom exceptions for better error handling
and more specific error messages.

Error classes map onto HTTP outcomes at the API layer:
- UnreachableURLError: client error (400)
- MalformedRequestError: client error (400)
- PersistenceError: server error (500), scoped to the failing request
"""

from pathlib import Path
from typing import Optional


class URLShortenerException(Exception):
    """Base exception for URL shortener service."""
    pass


class UnreachableURLError(URLShortenerException):
    """Raised when a URL is invalid or does not answer with HTTP 200."""

    def __init__(self, url: str, reason: str = "url returned a non 200 status"):
        self.url = url
        self.reason = reason
        super().__init__(f"{reason}: {url}")


class MalformedRequestError(URLShortenerException):
    """Raised when a request body or query parameter is missing or unusable."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(reason)


class PersistenceError(URLShortenerException):
    """Raised when the mapping file cannot be read, parsed or written."""

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        self.original_error = original_error
        super().__init__(f"Persistence error: {message}")


class MappingFileMissingError(PersistenceError):
    """Raised when the mapping file does not exist."""

    def __init__(self, path: Path, original_error: Optional[Exception] = None):
        self.path = path
        super().__init__(f"mapping file '{path}' does not exist", original_error)
