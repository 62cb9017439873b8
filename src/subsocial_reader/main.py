# src/subsocial_reader/main.py
"""Main entry point for the Subsocial reader API."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from subsocial_reader import __version__
from subsocial_reader.api.v1 import posts_router, profiles_router, spaces_router
from subsocial_reader.core.errors import SubsocialReaderError
from subsocial_reader.core.log_config import configure_logging
from subsocial_reader.core.settings import settings
from subsocial_reader.services.api import close_subsocial_api

logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="Subsocial Reader API",
    description="Read-only aggregation of Subsocial chain structs and IPFS content",
    version=__version__,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)

# Include API routers
app.include_router(spaces_router, prefix="/api/v1")
app.include_router(posts_router, prefix="/api/v1")
app.include_router(profiles_router, prefix="/api/v1")


@app.exception_handler(SubsocialReaderError)
async def handle_reader_error(request: Request, exc: SubsocialReaderError) -> JSONResponse:
    """Report collaborator failures as a bad gateway."""
    logger.error("Upstream failure on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={"detail": str(exc)},
    )


@app.on_event("startup")
async def on_startup() -> None:
    configure_logging()
    logger.info(
        "Reading structs from %s, content from %s",
        settings.chain_gateway_url,
        settings.offchain_url or settings.ipfs_gateway_url,
    )


@app.on_event("shutdown")
async def on_shutdown() -> None:
    await close_subsocial_api()


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": settings.app_name,
        "version": __version__,
        "description": "Read-only aggregation of Subsocial chain structs and IPFS content",
        "docs": "/docs",
        "redoc": "/redoc",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("subsocial_reader.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
