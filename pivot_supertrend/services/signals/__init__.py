"""
Pivot SuperTrend Signal Service

CONTRACT:
    Input:  SignalRequest (ticker name + parameters)
    Output: SignalOutput

RESPONSIBILITIES:
    - Calculate ATR, EMA-50 and EMA-200 over the full candle history
    - Build the pivot-based dynamic centreline
    - Resolve SuperTrend direction with band ratcheting
    - Confirm with EMA alignment and volume
    - Place the swing stop loss
    - Dispatch an alert for LONG / SHORT signals

PURE PYTHON - Uses NumPy for calculations.
All math is deterministic and reproducible.
"""

from pivot_supertrend.services.signals.interface import SignalServiceInterface
from pivot_supertrend.services.signals.service import (
    SignalService,
    decide_signal,
    get_signal_service,
    stop_loss_for,
)

__all__ = [
    "SignalServiceInterface",
    "SignalService",
    "decide_signal",
    "get_signal_service",
    "stop_loss_for",
]
