"""
FastAPI Endpoints for URL Shortener Service

This module defines all REST API endpoints with minimal logic.
Endpoints only handle:
- Request parsing (raw text body, query parameter)
- Error handling and HTTP responses
- Delegating to service layer

Error mapping:
- MalformedRequestError -> 400
- UnreachableURLError -> 400
- PersistenceError -> 500 for the failing request only
"""

import logging
from typing import Optional
from urllib.parse import quote

from fastapi import APIRouter, Request, Depends, HTTPException, Query, status
from fastapi.responses import RedirectResponse

from app.api.schemas import ShortenResponse, ErrorResponse
from app.core.exceptions import (
    MalformedRequestError,
    PersistenceError,
    UnreachableURLError,
)
from app.core.setting import settings
from app.core.store_manager import get_mapping_store, get_reachability_validator
from app.core.validators import parse_url_body, sanitize_lookup_key
from app.db.mapping_store import MappingStore
from app.services.reachability import ReachabilityValidator
from app.services.redirect_service import RedirectService
from app.services.url_service import URLShorteningService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1")

ERROR_RESPONSES = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
}


def unreachable_detail(error: UnreachableURLError) -> str:
    """Human-readable message for a URL that failed the reachability check."""
    return f"url is either invalid or not reachable \n Error: {error.reason}"


def build_short_url(short_code: str) -> str:
    """Complete resolve URL for a short code (codes may contain '+' and '/')."""
    return f"{settings.BASE_URL}{router.prefix}/url?url={quote(short_code, safe='')}"


@router.post(
    "/new",
    response_model=ShortenResponse,
    status_code=status.HTTP_201_CREATED,
    responses=ERROR_RESPONSES,
    summary="Create a short URL",
    description="Takes a long URL as a raw text body and returns its short code",
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"text/plain": {"schema": {"type": "string"}}},
        }
    },
)
async def create_short_url(
    request: Request,
    store: MappingStore = Depends(get_mapping_store),
    validator: ReachabilityValidator = Depends(get_reachability_validator),
) -> ShortenResponse:
    """
    Create a new short URL from a long URL.

    Example:
        curl -X POST http://localhost:8080/api/v1/new \\
            -H 'Content-Type: text/plain; charset=utf-8' \\
            -d "https://www.wikipedia.org"

    Returns:
        ShortenResponse with short_code, short_url, and original_url
    """
    try:
        original_url = parse_url_body(
            await request.body(), max_length=settings.MAX_URL_LENGTH
        )

        url_service = URLShorteningService(
            store, validator, code_length=settings.SHORT_CODE_LENGTH
        )
        short_code = await url_service.create_short_url(original_url)

        return ShortenResponse(
            short_code=short_code,
            short_url=build_short_url(short_code),
            original_url=original_url,
        )

    except MalformedRequestError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
    except UnreachableURLError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=unreachable_detail(e)
        )
    except PersistenceError as e:
        logger.error(f"Failed to persist short URL: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e)
        )


@router.get(
    "/url",
    status_code=status.HTTP_302_FOUND,
    responses=ERROR_RESPONSES,
    summary="Redirect to a stored or live URL",
    description=(
        "Redirects to the URL stored for a short code. Keys that are not "
        "stored short codes are treated as URLs and redirected to directly "
        "when they are reachable."
    ),
)
async def redirect_to_url(
    url: Optional[str] = Query(default=None, description="Short code or URL"),
    store: MappingStore = Depends(get_mapping_store),
    validator: ReachabilityValidator = Depends(get_reachability_validator),
) -> RedirectResponse:
    """
    Redirect to the original URL for a short code, or to a live URL as-is.

    Examples:
        /api/v1/url?url=aHR0cHM6Ly
        /api/v1/url?url=https%3A%2F%2Fwww.wikipedia.org

    Returns:
        RedirectResponse (HTTP 302) to the resolved target

    Raises:
        HTTPException 400: If the key is missing, or neither stored nor reachable
        HTTPException 500: If the mapping file cannot be read
    """
    try:
        key = sanitize_lookup_key(url, max_length=settings.MAX_URL_LENGTH)
        logger.info(f"Got parameter url:{key}")

        redirect_service = RedirectService(store, validator)
        target = await redirect_service.get_redirect_url(key)

    except MalformedRequestError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
    except UnreachableURLError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=unreachable_detail(e)
        )
    except PersistenceError as e:
        logger.error(f"Failed to read mappings: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e)
        )

    return RedirectResponse(
        url=target,
        status_code=status.HTTP_302_FOUND
    )
