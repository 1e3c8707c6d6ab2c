"""
CONTRACT 2: Pivot SuperTrend Signal Engine

Input: SignalRequest (ticker name + SignalParams)
Output: SignalOutput

This module performs ALL mathematical calculations.
Pure Python/NumPy - every call is recomputed from the supplied candles.
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


# =============================================================================
# ENUMS
# =============================================================================


class TrendDirection(str, Enum):
    BULLISH = "BULLISH"
    BEARISH = "BEARISH"
    NEUTRAL = "NEUTRAL"


class SignalType(str, Enum):
    LONG = "LONG"
    SHORT = "SHORT"
    HOLD = "HOLD"


class BandMode(str, Enum):
    """How the SuperTrend band state is carried into the last bar."""

    TWO_BAR = "two_bar"
    FULL_FOLD = "full_fold"


# =============================================================================
# INPUT: SignalParams / SignalRequest
# =============================================================================


class SignalParams(BaseModel):
    """Tunable parameters of the signal engine (named call arguments)."""

    atr_period: int = Field(default=14, ge=1)
    multiplier: float = Field(default=2.0, gt=0)
    pivot_lookback: int = Field(default=5, ge=1)
    volume_period: int = Field(default=20, ge=1)
    volume_threshold: float = Field(default=1.5, ge=0)
    swing_lookback: int = Field(default=20, ge=1)
    max_pivots: int = Field(default=5, ge=1)
    band_mode: BandMode = BandMode.TWO_BAR
    email: str = Field(default="", description="Notification target; empty disables alerts")

    @property
    def min_history(self) -> int:
        """Candles required before any indicator is surfaced."""
        return max(self.atr_period, 200, self.pivot_lookback * 2)


class SignalRequest(BaseModel):
    """
    Request for a signal evaluation.
    Sent by: API
    Received by: Signal Service
    """

    ticker: str = Field(..., min_length=1, description="Name of the candle series")
    params: SignalParams = Field(default_factory=SignalParams)


# =============================================================================
# OUTPUT
# =============================================================================


class PivotLevel(BaseModel):
    """Confirmed pivot."""

    index: int = Field(..., ge=0)
    price: float


class PivotSummary(BaseModel):
    """Pivot structure behind the dynamic centreline."""

    ticker: str
    pivot_highs: list[PivotLevel]
    pivot_lows: list[PivotLevel]
    centerline: Optional[float] = None
    dynamic_center: float


class SignalOutput(BaseModel):
    """
    Complete decision for the most recent candle.
    Returned by: Signal Service
    Consumed by: API, Notifier
    """

    ticker: str
    signal: SignalType = SignalType.HOLD
    trend: TrendDirection = TrendDirection.NEUTRAL
    supertrend_value: float = 0.0
    upper_band: float = 0.0
    lower_band: float = 0.0
    atr: float = 0.0
    ema_50: float = 0.0
    ema_200: float = 0.0
    current_price: float = 0.0
    stop_loss: float = 0.0
    volume_confirmed: bool = False
    email_sent: bool = False

    class Config:
        json_schema_extra = {
            "example": {
                "ticker": "BTC-USD",
                "signal": "LONG",
                "trend": "BULLISH",
                "supertrend_value": 41230.5,
                "upper_band": 44310.2,
                "lower_band": 41230.5,
                "atr": 770.1,
                "ema_50": 40110.4,
                "ema_200": 36544.9,
                "current_price": 42580.0,
                "stop_loss": 40950.0,
                "volume_confirmed": True,
                "email_sent": False,
            }
        }
