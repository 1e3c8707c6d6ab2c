"""
Signal Service Implementation

Combines SuperTrend direction, EMA trend alignment and volume confirmation
into a discrete LONG / SHORT / HOLD decision with a swing stop loss.
NO STATE BETWEEN CALLS - every result is recomputed from the supplied candles.
"""

import logging
from typing import Optional, Sequence

from pivot_supertrend.schemas.market import Candle
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
from pivot_supertrend.services.base import NotificationDispatchError
from pivot_supertrend.services.data_ingestion import TickerProvider, get_ticker_provider
from pivot_supertrend.services.notification import Notifier, format_alert, get_notifier
from pivot_supertrend.services.signals.interface import SignalServiceInterface
from pivot_supertrend.services.indicators.calculations import (
    OHLCVData,
    atr,
    ema,
    dynamic_center,
    find_pivots,
    pivot_centerline,
    supertrend_bands,
    supertrend_fold,
    volume_confirmed,
    swing_high,
    swing_low,
    last_value,
)

logger = logging.getLogger(__name__)

FAST_EMA_PERIOD = 50
SLOW_EMA_PERIOD = 200


def decide_signal(
    trend: TrendDirection,
    bullish_aligned: bool,
    bearish_aligned: bool,
    volume_ok: bool,
) -> SignalType:
    """LONG / SHORT only when trend, EMA alignment and volume all agree."""
    if trend == TrendDirection.BULLISH and bullish_aligned and volume_ok:
        return SignalType.LONG
    if trend == TrendDirection.BEARISH and bearish_aligned and volume_ok:
        return SignalType.SHORT
    return SignalType.HOLD


def stop_loss_for(signal: SignalType, data: OHLCVData, lookback: int) -> float:
    """Swing low for longs, swing high for shorts, 0.0 otherwise."""
    if signal == SignalType.LONG:
        return swing_low(data.lows, lookback)
    if signal == SignalType.SHORT:
        return swing_high(data.highs, lookback)
    return 0.0


class SignalService(SignalServiceInterface):
    """
    Pivot SuperTrend Signal Service.

    Ticker lookup and notification are injected so the engine runs against
    deterministic fakes in tests.
    """

    def __init__(
        self,
        ticker_provider: Optional[TickerProvider] = None,
        notifier: Optional[Notifier] = None,
    ):
        self._ticker_provider = ticker_provider
        self._notifier = notifier

    @property
    def ticker_provider(self) -> TickerProvider:
        """Lazy load ticker provider."""
        if self._ticker_provider is None:
            self._ticker_provider = get_ticker_provider()
        return self._ticker_provider

    @property
    def notifier(self) -> Notifier:
        """Lazy load notifier."""
        if self._notifier is None:
            self._notifier = get_notifier()
        return self._notifier

    async def execute(self, input_data: SignalRequest) -> SignalOutput:
        """Fetch the ticker, evaluate it and dispatch an alert if needed."""
        ticker = await self.ticker_provider.get_ticker(input_data.ticker)
        return await self.evaluate_and_notify(ticker.symbol, ticker.candles, input_data.params)

    async def evaluate_and_notify(
        self, symbol: str, candles: Sequence[Candle], params: SignalParams
    ) -> SignalOutput:
        output = self.evaluate(symbol, candles, params)
        if output.signal == SignalType.HOLD or not params.email:
            return output

        await self._dispatch(params.email, output)
        return output.model_copy(update={"email_sent": True})

    def evaluate(
        self, symbol: str, candles: Sequence[Candle], params: SignalParams
    ) -> SignalOutput:
        """Evaluate the most recent candle of the supplied history."""
        if len(candles) < params.min_history:
            logger.warning(
                f"Insufficient history for {symbol}: {len(candles)} candles, "
                f"need {params.min_history}"
            )
            return self._neutral_output(symbol, candles)

        data = OHLCVData.from_candles(candles)
        atr_values = atr(data.highs, data.lows, data.closes, params.atr_period)
        if len(atr_values) == 0:
            logger.warning(f"ATR({params.atr_period}) undefined for {symbol}")
            return self._neutral_output(symbol, candles)

        ema_50 = last_value(ema(data.closes, FAST_EMA_PERIOD))
        ema_200 = last_value(ema(data.closes, SLOW_EMA_PERIOD))

        center = dynamic_center(
            data.highs, data.lows, data.closes, params.pivot_lookback, params.max_pivots
        )
        if params.band_mode == BandMode.FULL_FOLD:
            st = supertrend_fold(
                data.highs,
                data.lows,
                data.closes,
                atr_values,
                center,
                params.multiplier,
                start=params.atr_period,
            )
        else:
            st = supertrend_bands(
                data.highs,
                data.lows,
                data.closes,
                atr_values,
                center,
                params.multiplier,
                period=params.atr_period,
            )

        price = float(data.closes[-1])
        bullish_aligned = ema_50 > ema_200 and price > ema_50
        bearish_aligned = ema_50 < ema_200 and price < ema_50
        volume_ok = volume_confirmed(data.volumes, params.volume_period, params.volume_threshold)

        signal = decide_signal(st.trend, bullish_aligned, bearish_aligned, volume_ok)
        stop_loss = stop_loss_for(signal, data, params.swing_lookback)

        if signal != SignalType.HOLD:
            logger.info(
                f"{symbol}: {signal.value} at {price:.4f} "
                f"(supertrend {st.supertrend_value:.4f}, stop {stop_loss:.4f})"
            )

        return SignalOutput(
            ticker=symbol,
            signal=signal,
            trend=st.trend,
            supertrend_value=float(st.supertrend_value),
            upper_band=float(st.upper_band),
            lower_band=float(st.lower_band),
            atr=last_value(atr_values),
            ema_50=ema_50,
            ema_200=ema_200,
            current_price=price,
            stop_loss=stop_loss,
            volume_confirmed=volume_ok,
            email_sent=False,
        )

    def pivot_summary(
        self, symbol: str, candles: Sequence[Candle], params: SignalParams
    ) -> PivotSummary:
        data = OHLCVData.from_candles(candles)
        pivot_highs, pivot_lows = find_pivots(data.highs, data.lows, params.pivot_lookback)
        centerline = pivot_centerline(
            data.highs, data.lows, data.closes, params.pivot_lookback, params.max_pivots
        )
        center = (
            dynamic_center(
                data.highs, data.lows, data.closes, params.pivot_lookback, params.max_pivots
            )
            if len(data) > 0
            else 0.0
        )
        return PivotSummary(
            ticker=symbol,
            pivot_highs=[PivotLevel(index=p.index, price=p.price) for p in pivot_highs],
            pivot_lows=[PivotLevel(index=p.index, price=p.price) for p in pivot_lows],
            centerline=centerline,
            dynamic_center=center,
        )

    async def _dispatch(self, target: str, output: SignalOutput) -> None:
        message = format_alert(output)
        try:
            await self.notifier.notify(target, message)
        except NotificationDispatchError as e:
            logger.error(f"Alert for {output.ticker} not delivered: {e}")
            raise
        except Exception as e:
            logger.error(f"Alert for {output.ticker} not delivered: {e}")
            raise NotificationDispatchError(target, str(e)) from e

    @staticmethod
    def _neutral_output(symbol: str, candles: Sequence[Candle]) -> SignalOutput:
        return SignalOutput(
            ticker=symbol,
            current_price=candles[-1].close if candles else 0.0,
        )

    async def health_check(self) -> bool:
        """Signal service is always healthy (pure computation)."""
        return True


# Singleton instance
_service_instance: Optional[SignalService] = None


def get_signal_service() -> SignalService:
    """Get or create signal service instance."""
    global _service_instance
    if _service_instance is None:
        _service_instance = SignalService()
    return _service_instance
