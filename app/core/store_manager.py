"""
Store and Validator Manager

This module manages the process-wide MappingStore and ReachabilityValidator.
Both are created once per application instance and shared across requests.

Design:
- Singleton pattern: one store (and so one write lock) per process
- Initialized on application startup, released on shutdown
- Exposed to endpoints as FastAPI dependencies, which tests can override
"""

import logging
from typing import Optional

from app.core.exceptions import PersistenceError
from app.core.setting import settings
from app.db.mapping_store import MappingStore
from app.services.reachability import ReachabilityValidator

logger = logging.getLogger(__name__)

# Global instances (initialized on startup)
_store: Optional[MappingStore] = None
_validator: Optional[ReachabilityValidator] = None


def get_mapping_store() -> MappingStore:
    """
    Get the global mapping store.

    Falls back to a store on the configured file if startup has not run,
    so every caller still shares one instance.
    """
    global _store
    if _store is None:
        _store = MappingStore(settings.MAPPING_FILE)
    return _store


def get_reachability_validator() -> ReachabilityValidator:
    """Get the global reachability validator."""
    global _validator
    if _validator is None:
        _validator = ReachabilityValidator(timeout=settings.VALIDATION_TIMEOUT)
    return _validator


async def initialize_store() -> None:
    """
    Set up the mapping store and validator.

    A missing or unreadable mapping file is only logged: requests that
    need it fail with a server error until the file is fixed.
    """
    store = get_mapping_store()
    get_reachability_validator()

    if settings.CREATE_MAPPING_FILE:
        await store.ensure_exists()

    try:
        mapping = await store.load()
    except PersistenceError as e:
        logger.error(f"Mapping store unavailable: {e}")
        return

    logger.info(f"Mapping store ready: file={store.path}, mappings={len(mapping)}")


async def shutdown_store() -> None:
    """Close the validator's HTTP client and drop the singletons."""
    global _store, _validator

    if _validator is not None:
        logger.info("Closing reachability validator")
        await _validator.aclose()

    _store = None
    _validator = None
