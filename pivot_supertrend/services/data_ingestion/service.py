"""
Ticker Provider Selection

Builds the configured ticker lookup capability.
Primary: Yahoo Finance (real data)
Development: Mock data (data_source = "mock")
"""

import logging
from typing import Optional

from pivot_supertrend.core.config import settings
from pivot_supertrend.schemas.market import Timeframe
from pivot_supertrend.services.data_ingestion.interface import TickerProvider
from pivot_supertrend.services.data_ingestion.mock_data import MockTickerProvider
from pivot_supertrend.services.data_ingestion.yahoo_adapter import YahooTickerProvider

logger = logging.getLogger(__name__)


def create_ticker_provider(
    data_source: str,
    timeframe: Timeframe = Timeframe.D1,
    lookback: int = 300,
) -> TickerProvider:
    """Create a ticker provider for the named data source."""
    source = data_source.lower().strip()
    if source == "yahoo":
        return YahooTickerProvider(timeframe=timeframe, lookback=lookback)
    if source == "mock":
        return MockTickerProvider(count=lookback, timeframe=timeframe)
    raise ValueError(f"Unknown data source: {data_source}")


# Singleton instance
_provider_instance: Optional[TickerProvider] = None


def get_ticker_provider() -> TickerProvider:
    """Get or create the configured ticker provider."""
    global _provider_instance
    if _provider_instance is None:
        _provider_instance = create_ticker_provider(
            settings.data_source,
            timeframe=Timeframe(settings.default_timeframe),
            lookback=(
                settings.mock_candle_count
                if settings.data_source == "mock"
                else settings.default_lookback
            ),
        )
        logger.info(f"Ticker provider: {_provider_instance.name}")
    return _provider_instance
