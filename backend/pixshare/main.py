"""
Main FastAPI application entry point.
"""
import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from pixshare import __version__
from pixshare.api import albums, auth, images
from pixshare.core.config import settings
from pixshare.core.database import Database
from pixshare.core.exceptions import register_exception_handlers
from pixshare.core.logging import configure_logging, log_requests
from pixshare.services.google_oauth import GoogleOAuthClient
from pixshare.services.storage_factory import create_storage_service

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build shared clients at startup and release them at shutdown."""
    logger.info(f"Starting {settings.APP_NAME} ({settings.APP_ENV})")

    database = Database(
        settings.DATABASE_URL,
        pool_size=settings.DATABASE_POOL_SIZE,
        max_overflow=settings.DATABASE_MAX_OVERFLOW,
        echo=settings.DEBUG,
    )
    await database.create_all()
    http_client = httpx.AsyncClient()

    app.state.database = database
    app.state.storage = create_storage_service(settings)
    app.state.identity_provider = GoogleOAuthClient(http_client, settings)

    try:
        yield
    finally:
        logger.info(f"Shutting down {settings.APP_NAME}")
        await http_client.aclose()
        await database.dispose()


# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    version=__version__,
    description="Photo albums shared by email, with tags, favorites and comments",
    lifespan=lifespan,
)

register_exception_handlers(app)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins_list,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
    expose_headers=["Set-Cookie"],
)


@app.middleware("http")
async def logging_middleware(request: Request, call_next):
    return await log_requests(request, call_next)


# Include routers
app.include_router(auth.router, tags=["auth"])
app.include_router(albums.router, prefix="/albums", tags=["albums"])
app.include_router(images.router, prefix="/albums", tags=["images"])


@app.get("/")
async def root():
    """API root endpoint."""
    return {
        "message": f"Welcome to {settings.APP_NAME} API Server.",
        "version": __version__,
    }


@app.get("/healthz")
async def health_check():
    """Health check endpoint for monitoring."""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("pixshare.main:app", host="0.0.0.0", port=settings.PORT)
