"""
Ticker Data Ingestion

CONTRACT:
    Input:  ticker name
    Output: TickerData

RESPONSIBILITIES:
    - Fetch OHLCV candle history from Yahoo Finance
    - Synthesize deterministic candles for development
    - Raise DataUnavailableError for missing or empty series

NO INDICATOR LOGIC - Pure data fetching and normalization.
"""

from pivot_supertrend.services.data_ingestion.interface import TickerProvider
from pivot_supertrend.services.data_ingestion.mock_data import (
    InMemoryTickerProvider,
    MockTickerProvider,
    generate_mock_candles,
)
from pivot_supertrend.services.data_ingestion.yahoo_adapter import YahooTickerProvider
from pivot_supertrend.services.data_ingestion.service import (
    create_ticker_provider,
    get_ticker_provider,
)

__all__ = [
    "TickerProvider",
    "InMemoryTickerProvider",
    "MockTickerProvider",
    "YahooTickerProvider",
    "generate_mock_candles",
    "create_ticker_provider",
    "get_ticker_provider",
]
