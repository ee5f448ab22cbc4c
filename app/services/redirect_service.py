"""
Redirect Service

This service handles URL redirection logic.
Separated from URL service to enable microservice architecture.

Resolution is dual-mode:
- A stored short code redirects to the URL it maps to
- Any other key is treated as a URL and redirected to as-is,
  provided it passes the reachability check

The passthrough mode means the redirect endpoint works for any live URL,
not only for shortened ones.
"""

import logging

from app.db.mapping_store import MappingStore
from app.services.reachability import ReachabilityValidator

logger = logging.getLogger(__name__)


class RedirectService:
    """
    Service for handling URL redirections.

    This service encapsulates redirect logic, making it easy to
    move to a separate microservice if needed.
    """

    def __init__(self, store: MappingStore, validator: ReachabilityValidator):
        self.store = store
        self.validator = validator

    async def get_redirect_url(self, key: str) -> str:
        """
        Get the redirect target for a short code or URL.

        Args:
            key: A previously issued short code or any URL

        Returns:
            The stored URL for a known short code, otherwise key itself

        Raises:
            UnreachableURLError: If key is not stored and is not a reachable URL
            PersistenceError: If the mapping file cannot be read
        """
        mapping = await self.store.load()

        original_url = mapping.get(key)
        if original_url is not None:
            logger.info(f"Resolved short code {key} to {original_url}")
            return original_url

        await self.validator.validate(key)
        logger.info(f"Passing through unshortened url {key}")
        return key
