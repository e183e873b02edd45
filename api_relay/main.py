"""
API Relay - Main Application
Issues Agora RTC tokens and proxies browser calls to Google Maps and PayDunya
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .config import Settings, get_settings
from .routes import agora, google, health, paydunya
from .utils.logger import setup_logging

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None
) -> FastAPI:
    """
    Build the relay application

    Args:
        settings: Immutable configuration; read from the environment when omitted
        transport: Transport for the upstream HTTP client (tests inject a mock)

    Returns:
        Configured FastAPI app
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager"""
        logger.info("🚀 API Relay starting up...")
        settings.log_config()

        # No timeout unless configured: a hung upstream holds the inbound request
        app.state.http_client = httpx.AsyncClient(
            timeout=settings.upstream_timeout_seconds,
            follow_redirects=True,
            transport=transport
        )
        logger.info(f"Backend proxy listening on http://localhost:{settings.port}")

        yield

        await app.state.http_client.aclose()
        logger.info("API Relay shutting down...")

    app = FastAPI(
        title="API Relay",
        description="Agora token issuance and browser-facing proxy for Google Maps and PayDunya",
        version=__version__,
        lifespan=lifespan
    )
    app.state.settings = settings

    # Permissive by default; restrict CORS_ALLOWED_ORIGINS per environment
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_cors_origins(),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router, tags=["Health"])
    app.include_router(agora.router, prefix="/api/agora", tags=["Agora"])
    app.include_router(google.router, prefix="/api/google", tags=["Google Maps"])
    app.include_router(paydunya.router, prefix=paydunya.PAYDUNYA_PREFIX, tags=["PayDunya"])

    return app


def run():
    """Console entry point"""
    import uvicorn

    settings = get_settings()
    setup_logging(settings.logging_config_path, settings.log_level, settings.log_format)
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_config=None
    )


if __name__ == "__main__":
    run()
