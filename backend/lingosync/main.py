"""
LingoSync Backend - Main Application

This is the entry point for the FastAPI application.
It handles:
- REST API endpoints (languages, translate, speech, history)
- WebSocket connections for live, debounced streaming translation
- Startup loading of the persisted translation history
"""
from contextlib import asynccontextmanager
import logging
from datetime import datetime, UTC

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from lingosync import __version__
from lingosync.api import router as api_router
from lingosync.api.websocket import router as ws_router
from lingosync.config.redis import close_redis
from lingosync.config.settings import settings
from lingosync.services.history import get_history_cache
from lingosync.services.metrics import start_metrics_server

# Configure logging
logging.basicConfig(level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Handles startup and shutdown events using the modern FastAPI pattern.
    """
    # === STARTUP ===
    logger.info("🚀 Starting LingoSync Backend...")

    if not settings.API_KEY:
        logger.warning("⚠️ API_KEY is not set - translation and speech calls will fail")

    history = await get_history_cache()
    logger.info(f"✅ History loaded ({len(history.items)} entries)")

    if settings.METRICS_ENABLED:
        start_metrics_server(port=settings.METRICS_PORT)

    yield  # Application runs here

    # === SHUTDOWN ===
    logger.info("🛑 Shutting down...")
    await close_redis()


app = FastAPI(
    title="LingoSync Backend",
    description="Live AI translation with streaming output and speech playback",
    version=__version__,
    lifespan=lifespan
)

# CORS configuration
app.add_middleware(
    CORSMiddleware,
    allow_origin_regex=r"http://(localhost|127\.0\.0\.1)(:\d+)?",
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include REST API routes
app.include_router(api_router, prefix="/api")

# Include WebSocket routes
app.include_router(ws_router)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "name": "LingoSync",
        "version": __version__,
        "status": "running"
    }


@app.get("/health")
async def health():
    """Liveness plus whether the Gemini key is configured."""
    return {
        "status": "ok",
        "gemini_configured": bool(settings.API_KEY),
        "timestamp": datetime.now(UTC).isoformat(),
    }


def run():
    """Console entry point."""
    uvicorn.run(
        "lingosync.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.DEBUG,
    )


if __name__ == "__main__":
    run()
