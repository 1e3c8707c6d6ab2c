"""
Indicator Engine

RESPONSIBILITIES:
    - True Range / ATR (Wilder smoothing)
    - EMA trend filters
    - Pivot detection and the dynamic centreline
    - SuperTrend band resolution with ratcheting
    - Volume confirmation and swing extremes

PURE PYTHON - No I/O.
Uses NumPy for calculations.
All math is deterministic and reproducible.
"""

from pivot_supertrend.services.indicators.calculations import (
    OHLCVData,
    Pivot,
    SuperTrendResult,
    atr,
    dynamic_center,
    ema,
    find_pivot_high,
    find_pivot_low,
    find_pivots,
    last_value,
    pivot_centerline,
    supertrend_bands,
    supertrend_fold,
    supertrend_series,
    swing_high,
    swing_low,
    true_range,
    true_range_series,
    volume_confirmed,
)

__all__ = [
    "OHLCVData",
    "Pivot",
    "SuperTrendResult",
    "atr",
    "dynamic_center",
    "ema",
    "find_pivot_high",
    "find_pivot_low",
    "find_pivots",
    "last_value",
    "pivot_centerline",
    "supertrend_bands",
    "supertrend_fold",
    "supertrend_series",
    "swing_high",
    "swing_low",
    "true_range",
    "true_range_series",
    "volume_confirmed",
]
