"""
FastAPI Application Entry Point

This module initializes the FastAPI application and configures:
- API routes (shorten and redirect)
- Middleware (logging, CORS)
- Mapping store and reachability validator lifecycle

Run with:
    uvicorn app.main:app --port 8080
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api import endpoints
from app.middleware.logging import add_logging_middleware, configure_logging
from app.core.store_manager import initialize_store, shutdown_store

configure_logging()

app = FastAPI(
    title="URL Shortener Service",
    description=(
        "Shortens reachable URLs and redirects either stored short codes "
        "or live URLs"
    ),
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

add_logging_middleware(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/", tags=["Health"])
async def root():
    """
    Root endpoint for health checks.

    Returns:
        Simple JSON response indicating service is running
    """
    return {
        "message": "URL Shortener Service",
        "version": "1.0.0",
        "docs": "/docs"
    }


@app.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint for monitoring."""
    return {"status": "healthy"}


app.include_router(endpoints.router, tags=["URL Shortener"])


@app.on_event("startup")
async def startup_event():
    """Initialize the mapping store on startup."""
    await initialize_store()


@app.on_event("shutdown")
async def shutdown_event():
    """Cleanup on shutdown."""
    await shutdown_store()
