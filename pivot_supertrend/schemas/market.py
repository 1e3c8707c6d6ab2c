"""
CONTRACT 1: Ticker Data

Input: ticker name
Output: TickerData

Candle history consumed by the signal engine. Values are taken as supplied:
the engine does not re-validate OHLC consistency, so garbage in propagates.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


# =============================================================================
# ENUMS
# =============================================================================


class Timeframe(str, Enum):
    M1 = "1m"
    M5 = "5m"
    M15 = "15m"
    M30 = "30m"
    H1 = "1h"
    H4 = "4h"
    D1 = "1d"
    W1 = "1w"


# =============================================================================
# MODELS
# =============================================================================


class Candle(BaseModel):
    """Single candlestick data point."""

    timestamp: Optional[datetime] = None
    open: float
    high: float
    low: float
    close: float
    volume: float = Field(default=0.0)


class TickerData(BaseModel):
    """
    Named candle series.
    Returned by: TickerProvider
    Consumed by: Signal Service
    """

    symbol: str
    candles: list[Candle] = Field(
        default_factory=list,
        description="Chronological candles, oldest first",
    )
    timeframe: Optional[Timeframe] = None

    class Config:
        json_schema_extra = {
            "example": {
                "symbol": "BTC-USD",
                "timeframe": "1d",
                "candles": [
                    {
                        "timestamp": "2024-02-04T00:00:00+00:00",
                        "open": 42000.0,
                        "high": 42850.0,
                        "low": 41720.0,
                        "close": 42580.0,
                        "volume": 18250.0,
                    }
                ],
            }
        }
