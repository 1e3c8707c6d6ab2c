"""
Signal API Endpoints

Endpoints for Pivot SuperTrend signal evaluation.
"""

import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field

from pivot_supertrend.schemas.market import Candle
from pivot_supertrend.schemas.signals import PivotSummary, SignalOutput, SignalRequest
from pivot_supertrend.services.arguments import CallArguments
from pivot_supertrend.services.base import (
    DataUnavailableError,
    NotificationDispatchError,
    ServiceError,
    ValidationError,
)
from pivot_supertrend.services.signals import SignalService, get_signal_service

logger = logging.getLogger(__name__)

router = APIRouter()


class EvaluateRequest(BaseModel):
    """Candle history supplied directly by the caller."""

    symbol: str = Field(..., min_length=1)
    candles: list[Candle] = Field(default_factory=list)
    arguments: dict[str, Any] = Field(
        default_factory=dict,
        description="Named call arguments (atr_period, multiplier, ..., email)",
    )


def _call_arguments(
    atr_period: Optional[str] = Query(default=None, description="ATR period (default 14)"),
    multiplier: Optional[str] = Query(default=None, description="ATR band multiplier (default 2.0)"),
    pivot_lookback: Optional[str] = Query(default=None, description="Pivot lookback (default 5)"),
    volume_period: Optional[str] = Query(default=None, description="Volume average period (default 20)"),
    volume_threshold: Optional[str] = Query(default=None, description="Volume confirmation factor (default 1.5)"),
    swing_lookback: Optional[str] = Query(default=None, description="Stop-loss swing window (default 20)"),
    max_pivots: Optional[str] = Query(default=None, description="Recent pivots per side (default 5)"),
    band_mode: Optional[str] = Query(default=None, description="two_bar or full_fold"),
    email: Optional[str] = Query(default=None, description="Alert target; empty disables alerts"),
) -> CallArguments:
    # Raw strings: parsing happens in CallArguments so malformed values map to 400
    return CallArguments(
        {
            "atr_period": atr_period,
            "multiplier": multiplier,
            "pivot_lookback": pivot_lookback,
            "volume_period": volume_period,
            "volume_threshold": volume_threshold,
            "swing_lookback": swing_lookback,
            "max_pivots": max_pivots,
            "band_mode": band_mode,
            "email": email,
        }
    )


def _to_http_error(e: ServiceError) -> HTTPException:
    if isinstance(e, DataUnavailableError):
        return HTTPException(status_code=404, detail=e.message)
    if isinstance(e, ValidationError):
        return HTTPException(status_code=400, detail=e.message)
    if isinstance(e, NotificationDispatchError):
        return HTTPException(status_code=502, detail=f"Notification failed: {e.message}")
    return HTTPException(status_code=500, detail=e.message)


@router.post("/evaluate", response_model=SignalOutput)
async def evaluate_candles(
    body: EvaluateRequest,
    service: SignalService = Depends(get_signal_service),
):
    """
    Evaluate a caller-supplied candle history.

    Alerts are dispatched when `arguments.email` is set and the signal is
    LONG or SHORT.
    """
    try:
        params = CallArguments(body.arguments).to_params()
        return await service.evaluate_and_notify(body.symbol.upper(), body.candles, params)
    except ServiceError as e:
        raise _to_http_error(e)


@router.get("/{symbol}", response_model=SignalOutput)
async def get_signal(
    symbol: str,
    arguments: CallArguments = Depends(_call_arguments),
    service: SignalService = Depends(get_signal_service),
):
    """
    Get the Pivot SuperTrend decision for a symbol.

    Returns:
        - Signal (LONG / SHORT / HOLD) and SuperTrend trend
        - SuperTrend value and bands
        - ATR, EMA 50, EMA 200
        - Swing stop loss
        - Volume confirmation and alert status
    """
    try:
        request = SignalRequest(ticker=symbol.upper(), params=arguments.to_params())
        return await service.execute(request)
    except ServiceError as e:
        raise _to_http_error(e)


@router.get("/{symbol}/pivots", response_model=PivotSummary)
async def get_pivots(
    symbol: str,
    arguments: CallArguments = Depends(_call_arguments),
    service: SignalService = Depends(get_signal_service),
):
    """
    Get confirmed pivot highs/lows and the centreline built from them.
    """
    try:
        params = arguments.to_params()
        ticker = await service.ticker_provider.get_ticker(symbol.upper())
    except ServiceError as e:
        raise _to_http_error(e)

    return service.pivot_summary(ticker.symbol, ticker.candles, params)
