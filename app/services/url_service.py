"""
URL Shortening Service

This service handles the core business logic for URL shortening:
- Validating that the URL is reachable (HTTP 200 within the timeout)
- Deriving the short code from the URL bytes
- Persisting the mapping with a full read-modify-write of the store

Design Decisions:
- Validate first: an unreachable URL never touches the store
- Deterministic codes: shortening the same URL twice gives the same code
- Last write wins: a colliding code is overwritten, not disambiguated
"""

import logging

from app.db.mapping_store import MappingStore
from app.services.encoder import encode_short_code, SHORT_CODE_LENGTH
from app.services.reachability import ReachabilityValidator

logger = logging.getLogger(__name__)


class URLShorteningService:
    """
    Core business logic for URL shortening.

    Handles URL validation, code derivation and persistence.
    Separated from API layer for testability and maintainability.
    """

    def __init__(
        self,
        store: MappingStore,
        validator: ReachabilityValidator,
        code_length: int = SHORT_CODE_LENGTH,
    ):
        """
        Initialize the URL shortening service.

        Args:
            store: Mapping store the new mapping is written to
            validator: Reachability validator for the submitted URL
            code_length: Number of characters kept for the short code
        """
        self.store = store
        self.validator = validator
        self.code_length = code_length

    async def create_short_url(self, original_url: str) -> str:
        """
        Shorten a URL and persist the mapping.

        Args:
            original_url: The long URL to shorten

        Returns:
            The short code now mapped to original_url

        Raises:
            UnreachableURLError: If the URL is invalid or not reachable
            PersistenceError: If the mapping file cannot be read or written
        """
        await self.validator.validate(original_url)

        short_code = encode_short_code(original_url.encode("utf-8"), self.code_length)
        await self.store.update(short_code, original_url)

        logger.info(f"Shortened {original_url} to {short_code}")
        return short_code
