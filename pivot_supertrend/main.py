"""
Pivot SuperTrend Signals - FastAPI Application

Main entry point for the signal API.
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pivot_supertrend.core.config import settings
from pivot_supertrend.api.v1 import router as api_v1_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Data source: {settings.data_source}")
    if not settings.email_relay_url:
        logger.info("Email relay not configured - alerts with a target will fail")

    yield

    # Shutdown
    logger.info("Shutting down...")
    from pivot_supertrend.services.notification import get_notifier
    await get_notifier().close()


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
    Pivot-Point SuperTrend Signal API

    ## Architecture
    - **Ticker Lookup**: Fetches OHLCV candles (Yahoo Finance or mock data)
    - **Indicator Engine**: ATR, EMA, pivots, SuperTrend bands (pure Python/NumPy)
    - **Signal Decider**: SuperTrend + EMA alignment + volume confirmation
    - **Notifier**: Email alerts for LONG / SHORT signals

    ## Core Principles
    - Stateless: every call recomputes from the full candle history
    - Strict confirmation: partial agreement is always HOLD
    - Signals only, no order execution
    """,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

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
        "message": "Pivot SuperTrend Signal API",
        "docs": "/docs",
        "health": "/health",
    }
