"""
StockWatch Backend - FastAPI Application

Main entry point for the backend API.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from stockwatch.api.errors import register_error_handlers
from stockwatch.api.v1 import router as api_v1_router
from stockwatch.core.config import Settings, get_settings
from stockwatch.db import Database, WatchlistRepository
from stockwatch.services.quotes import QuoteSource, YahooQuoteSource
from stockwatch.services.watchlist import WatchlistStore

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    database: Optional[Database] = None,
    quote_source: Optional[QuoteSource] = None,
) -> FastAPI:
    """
    Build the application.

    The database handle and quote source are created once at startup (unless
    injected), shared by all requests and closed at shutdown.
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan handler."""
        # Startup
        logging.basicConfig(
            level=settings.log_level.upper(),
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
        logger.info(f"Starting {settings.app_name} v{settings.app_version}")
        logger.info(f"Environment: {settings.environment}")

        db = database or Database.from_path(settings.sqlite_path, echo=settings.debug)
        await db.init()

        source = quote_source or YahooQuoteSource(timeout_seconds=settings.quote_timeout_seconds)
        logger.info(f"Quote source: {source.name}")

        if not settings.serialize_mutations:
            logger.warning("Per-user mutation locking disabled - concurrent updates are last-writer-wins")

        app.state.settings = settings
        app.state.db = db
        app.state.quote_source = source
        app.state.watchlist_store = WatchlistStore(
            WatchlistRepository(db),
            serialize_mutations=settings.serialize_mutations,
        )

        yield

        # Shutdown
        logger.info("Shutting down...")
        await source.close()
        await db.close()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="""
    StockWatch Watchlist API

    ## Architecture
    - **Quote Source**: Daily history and quote summary from Yahoo Finance
    - **Indicator Engine**: RSI, MACD, Bollinger Bands, SMA (pure NumPy)
    - **Snapshot Builder**: Freezes metadata + indicators per ticker
    - **Watchlist Store**: Per-user ordered snapshot lists in SQLite
    """,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # CORS middleware
    cors_origins = [settings.frontend_url]
    if settings.allowed_origins:
        cors_origins.extend([o for o in settings.allowed_origins if o not in cors_origins])

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    # Include API routes
    app.include_router(api_v1_router, prefix="/api/v1")

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "app": settings.app_name,
            "version": settings.app_version,
            "environment": settings.environment,
        }

    @app.get("/")
    async def root():
        """Root endpoint."""
        return {
            "message": "StockWatch Backend API",
            "docs": "/docs",
            "health": "/health",
        }

    return app


app = create_app()
