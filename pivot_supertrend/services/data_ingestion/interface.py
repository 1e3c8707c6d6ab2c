"""
Ticker Provider Interface

Defines the contract for the ticker lookup capability.
"""

from abc import ABC, abstractmethod

from pivot_supertrend.schemas.market import TickerData


class TickerProvider(ABC):
    """
    Ticker Lookup Contract.

    INPUT: ticker name

    OUTPUT: TickerData
        - symbol: Display symbol
        - candles: Chronological OHLCV candles, oldest first

    RAISES: DataUnavailableError when the series is absent or empty.
    """

    @property
    def name(self) -> str:
        return self.__class__.__name__

    @abstractmethod
    async def get_ticker(self, name: str) -> TickerData:
        """Fetch the named candle series."""
        pass

    async def health_check(self) -> bool:
        return True
