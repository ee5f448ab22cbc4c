"""
Persisted Models for URL Shortener Service

This module defines the schema of the mapping file:

    {"urlMap": {"aHR0cHM6Ly": "https://example.com"}}

Design Decisions:
- One record holds every mapping; it is read and written as a whole
- Keys are short codes, values are the original URLs
- No timestamps, counters or expiry are stored
"""

from pydantic import BaseModel, ConfigDict, Field


class UrlMappingRecord(BaseModel):
    """
    Full content of the mapping file.

    Fields:
    - mapping: short code -> original URL, serialized under the "urlMap" key
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    mapping: dict[str, str] = Field(default_factory=dict, alias="urlMap")
