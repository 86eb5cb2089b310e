"""
Main entry point for FastAPI application.
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.routes import share
from app.services.content_store import ContentStoreClient, ContentStoreConfig
from app.services.share_preview.errors import ConfigurationError
from app.services.share_preview.renderer import PreviewRenderer

from app.logging_config import setup_logging
from app.config import settings

import logging
logger = logging.getLogger(__name__)

setup_logging(level=settings.log_level, access_log=settings.access_log)

@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.share_renderer = PreviewRenderer.from_settings(settings)
    app.state.content_store = None
    app.state.content_store_error = None

    # Credentials are checked once here; share routes answer 500 until fixed
    try:
        config = ContentStoreConfig.from_settings(settings)
    except ConfigurationError as exc:
        logger.error(f"Share previews disabled: {exc}")
        app.state.content_store_error = exc
    else:
        app.state.content_store = ContentStoreClient(config)
        logger.info(f"Content store: {config.base_url}")

    logger.info(f"Share redirect strategy: {settings.share_redirect_strategy}")

    # Hand control to the application
    yield

    if app.state.content_store is not None:
        try:
            logger.info("Closing content store client…")
            await app.state.content_store.aclose()
        except Exception:
            logger.exception("Failed to close content store client")

# load in app details
app = FastAPI(title = "Fundación Evolución Antoniana Share Previews", lifespan=lifespan)
app.include_router(share.router)

@app.get("/health")
async def health_check():
    """Health Check Endpoint"""
    return {"status": "ok"}

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8080)
