"""
API Request and Response Schemas

This module defines the Pydantic models for API responses.
The shorten endpoint reads its URL from a raw text/plain body, so there
is no request model.
"""

from pydantic import BaseModel, Field


class ShortenResponse(BaseModel):
    """Response model for URL shortening endpoint."""
    short_code: str = Field(..., description="The derived short code")
    short_url: str = Field(..., description="The complete short URL")
    original_url: str = Field(..., description="The original long URL")


class ErrorResponse(BaseModel):
    """Error body returned with 4xx/5xx responses."""
    detail: str
