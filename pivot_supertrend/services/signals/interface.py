"""
Signal Service Interface

Defines the contract for the Pivot SuperTrend signal engine.
"""

from abc import abstractmethod
from typing import Sequence

from pivot_supertrend.services.base import BaseService
from pivot_supertrend.schemas.market import Candle
from pivot_supertrend.schemas.signals import (
    PivotSummary,
    SignalOutput,
    SignalParams,
    SignalRequest,
)


class SignalServiceInterface(BaseService[SignalRequest, SignalOutput]):
    """
    Signal Service Contract.

    INPUT: SignalRequest
        - ticker: Name of the candle series
        - params: ATR / pivot / volume / swing parameters, notification target

    OUTPUT: SignalOutput
        - signal: LONG / SHORT / HOLD
        - trend: SuperTrend direction of the last candle
        - indicator snapshot, stop loss, email_sent

    PIPELINE:
        ticker lookup → ATR, EMA-50, EMA-200 → dynamic centre
        → SuperTrend bands → EMA alignment + volume check → signal
        → swing stop loss → optional alert
    """

    @property
    def name(self) -> str:
        return "SignalService"

    @abstractmethod
    async def execute(self, input_data: SignalRequest) -> SignalOutput:
        """Fetch the ticker, evaluate it and dispatch an alert if needed."""
        pass

    @abstractmethod
    async def evaluate_and_notify(
        self, symbol: str, candles: Sequence[Candle], params: SignalParams
    ) -> SignalOutput:
        """Evaluate supplied candles and dispatch an alert if needed."""
        pass

    @abstractmethod
    def evaluate(
        self, symbol: str, candles: Sequence[Candle], params: SignalParams
    ) -> SignalOutput:
        """Pure evaluation of supplied candles; never notifies."""
        pass

    @abstractmethod
    def pivot_summary(
        self, symbol: str, candles: Sequence[Candle], params: SignalParams
    ) -> PivotSummary:
        """Confirmed pivots and the centreline derived from them."""
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Signal service is always healthy (pure computation)."""
        pass
