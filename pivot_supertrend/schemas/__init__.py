"""
Pivot SuperTrend Schema Contracts

This module defines all JSON contracts between system components.
These are the authoritative interfaces - all modules must conform to these schemas.
"""

from pivot_supertrend.schemas.market import (
    Candle,
    TickerData,
    Timeframe,
)
from pivot_supertrend.schemas.signals import (
    BandMode,
    PivotLevel,
    PivotSummary,
    SignalOutput,
    SignalParams,
    SignalRequest,
    SignalType,
    TrendDirection,
)

__all__ = [
    # Market
    "Candle",
    "TickerData",
    "Timeframe",
    # Signals
    "BandMode",
    "PivotLevel",
    "PivotSummary",
    "SignalOutput",
    "SignalParams",
    "SignalRequest",
    "SignalType",
    "TrendDirection",
]
