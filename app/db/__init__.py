"""
Persistence module.

This module provides:
- UrlMappingRecord: Schema of the JSON mapping file
- MappingStore: Whole-file load/save of the short code mapping
"""

from app.db.models import UrlMappingRecord
from app.db.mapping_store import MappingStore

__all__ = [
    "UrlMappingRecord",
    "MappingStore",
]
