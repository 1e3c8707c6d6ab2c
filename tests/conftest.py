"""Shared fixtures: candle builders and fakes for the external capabilities."""

from typing import Optional

import pytest

from pivot_supertrend.schemas.market import Candle, TickerData
from pivot_supertrend.services.base import NotificationDispatchError
from pivot_supertrend.services.data_ingestion import InMemoryTickerProvider
from pivot_supertrend.services.notification import AlertMessage, Notifier
from pivot_supertrend.services.signals import SignalService


def rising_candles(count: int = 250, start: float = 100.0, spike_last: bool = True) -> list[Candle]:
    """Close +1 per bar, high = close + 1, low = close - 1, flat volume."""
    candles = []
    for i in range(count):
        close = start + i
        candles.append(
            Candle(open=close - 0.5, high=close + 1, low=close - 1, close=close, volume=1000.0)
        )
    if spike_last:
        candles[-1] = candles[-1].model_copy(update={"volume": 2000.0})
    return candles


def falling_candles(count: int = 250, start: float = 400.0, spike_last: bool = True) -> list[Candle]:
    """Close -1 per bar, each candle closing on its low (high = close + 2)."""
    candles = []
    for i in range(count):
        close = start - i
        candles.append(
            Candle(open=close + 1.5, high=close + 2, low=close, close=close, volume=1000.0)
        )
    if spike_last:
        candles[-1] = candles[-1].model_copy(update={"volume": 2000.0})
    return candles


class RecordingNotifier(Notifier):
    """Notifier that records every dispatch."""

    def __init__(self):
        self.sent: list[tuple[str, AlertMessage]] = []

    async def notify(self, target: str, message: AlertMessage) -> None:
        self.sent.append((target, message))


class FailingNotifier(Notifier):
    """Notifier whose target is always unreachable."""

    def __init__(self, error: Optional[Exception] = None):
        self.error = error

    async def notify(self, target: str, message: AlertMessage) -> None:
        if self.error is not None:
            raise self.error
        raise NotificationDispatchError(target, "relay unreachable")


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def provider() -> InMemoryTickerProvider:
    return InMemoryTickerProvider(
        {
            "RISE": TickerData(symbol="RISE", candles=rising_candles()),
            "FALL": TickerData(symbol="FALL", candles=falling_candles()),
            "FLAT": TickerData(symbol="FLAT", candles=rising_candles(spike_last=False)),
            "SHORTHIST": TickerData(symbol="SHORTHIST", candles=rising_candles(50)),
            "EMPTY": TickerData(symbol="EMPTY", candles=[]),
        }
    )


@pytest.fixture
def service(provider, notifier) -> SignalService:
    return SignalService(ticker_provider=provider, notifier=notifier)
