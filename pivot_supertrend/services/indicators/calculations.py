"""
Technical Indicator Calculations

Pure Python/NumPy implementations of the Pivot-Point SuperTrend building blocks.
All math is deterministic: every array is allocated per call, nothing is cached.

Warm-up positions hold the sentinel 0.0 (never NaN). Callers gate on series
length, not on the value.
"""

import numpy as np
from typing import Optional, Sequence
from dataclasses import dataclass

from pivot_supertrend.schemas.market import Candle
from pivot_supertrend.schemas.signals import TrendDirection


@dataclass
class OHLCVData:
    """OHLCV data arrays for calculations."""

    opens: np.ndarray
    highs: np.ndarray
    lows: np.ndarray
    closes: np.ndarray
    volumes: np.ndarray

    @classmethod
    def from_candles(cls, candles: Sequence[Candle]) -> "OHLCVData":
        return cls(
            opens=np.array([c.open for c in candles], dtype=np.float64),
            highs=np.array([c.high for c in candles], dtype=np.float64),
            lows=np.array([c.low for c in candles], dtype=np.float64),
            closes=np.array([c.close for c in candles], dtype=np.float64),
            volumes=np.array([c.volume for c in candles], dtype=np.float64),
        )

    def __len__(self) -> int:
        return len(self.closes)


@dataclass(frozen=True)
class Pivot:
    """Confirmed local extremum."""

    index: int
    price: float


@dataclass(frozen=True)
class SuperTrendResult:
    """Band state of the most recent candle."""

    supertrend_value: float
    upper_band: float
    lower_band: float
    trend: TrendDirection


NEUTRAL_SUPERTREND = SuperTrendResult(0.0, 0.0, 0.0, TrendDirection.NEUTRAL)


# =============================================================================
# MOVING AVERAGES
# =============================================================================


def ema(data: np.ndarray, period: int) -> np.ndarray:
    """
    Exponential Moving Average.

    Seeded with the simple average of the first ``period`` values at index
    ``period - 1``. Returns an all-zero series when fewer than ``period``
    values exist.
    """
    result = np.zeros(len(data))
    if len(data) < period:
        return result

    multiplier = 2 / (period + 1)

    # Start with SMA
    result[period - 1] = np.mean(data[:period])

    for i in range(period, len(data)):
        result[i] = (data[i] - result[i - 1]) * multiplier + result[i - 1]

    return result


# =============================================================================
# VOLATILITY INDICATORS
# =============================================================================


def true_range(high: float, low: float, prev_close: float) -> float:
    """True Range of one candle against the previous close."""
    return max(high - low, abs(high - prev_close), abs(low - prev_close))


def true_range_series(
    highs: np.ndarray, lows: np.ndarray, closes: np.ndarray
) -> np.ndarray:
    """True Range per candle; the first candle has no prior close."""
    tr = np.zeros(len(closes))
    if len(closes) == 0:
        return tr

    tr[0] = highs[0] - lows[0]
    for i in range(1, len(closes)):
        tr[i] = true_range(highs[i], lows[i], closes[i - 1])
    return tr


def atr(
    highs: np.ndarray, lows: np.ndarray, closes: np.ndarray, period: int = 14
) -> np.ndarray:
    """
    Average True Range (Wilder smoothing).

    atr[0] is the first candle's range, atr[1:period] are 0.0 placeholders,
    atr[period] is the mean of TR[1..period] and later values follow
    ``(prev * (period - 1) + tr) / period``. Returns an empty array when
    fewer than ``period + 1`` candles exist.
    """
    if len(closes) < period + 1:
        return np.array([], dtype=np.float64)

    tr = true_range_series(highs, lows, closes)
    result = np.zeros(len(closes))
    result[0] = tr[0]
    result[period] = np.mean(tr[1 : period + 1])

    for i in range(period + 1, len(closes)):
        result[i] = (result[i - 1] * (period - 1) + tr[i]) / period

    return result


# =============================================================================
# PIVOTS / CENTRELINE
# =============================================================================


def find_pivot_high(highs: np.ndarray, i: int, lookback: int) -> Optional[Pivot]:
    """
    Pivot high at ``i`` if ``highs[i]`` is strictly above every high within
    ``lookback`` candles on both sides. Equal highs on either side reject
    the candidate; candles within ``lookback`` of either edge never qualify.
    """
    if i < lookback or i + lookback >= len(highs):
        return None

    price = highs[i]
    for j in range(i - lookback, i):
        if highs[j] >= price:
            return None
    for j in range(i + 1, i + lookback + 1):
        if highs[j] >= price:
            return None
    return Pivot(index=i, price=float(price))


def find_pivot_low(lows: np.ndarray, i: int, lookback: int) -> Optional[Pivot]:
    """Mirror of find_pivot_high on lows."""
    if i < lookback or i + lookback >= len(lows):
        return None

    price = lows[i]
    for j in range(i - lookback, i):
        if lows[j] <= price:
            return None
    for j in range(i + 1, i + lookback + 1):
        if lows[j] <= price:
            return None
    return Pivot(index=i, price=float(price))


def find_pivots(
    highs: np.ndarray, lows: np.ndarray, lookback: int
) -> tuple[list[Pivot], list[Pivot]]:
    """
    All confirmed pivots in chronological order.

    Returns: (pivot_highs, pivot_lows)
    """
    pivot_highs: list[Pivot] = []
    pivot_lows: list[Pivot] = []

    for i in range(lookback, len(highs) - lookback):
        high = find_pivot_high(highs, i, lookback)
        if high is not None:
            pivot_highs.append(high)
        low = find_pivot_low(lows, i, lookback)
        if low is not None:
            pivot_lows.append(low)

    return pivot_highs, pivot_lows


def pivot_centerline(
    highs: np.ndarray,
    lows: np.ndarray,
    closes: np.ndarray,
    lookback: int,
    max_pivots: int = 5,
) -> Optional[float]:
    """
    Reference price from the most recent ``max_pivots`` pivot highs and lows.

    Midpoint of both averages when both kinds exist, the single average when
    only one does, otherwise the typical price of the last candle. None only
    for an empty series.
    """
    if len(closes) == 0:
        return None

    pivot_highs, pivot_lows = find_pivots(highs, lows, lookback)
    recent_highs = pivot_highs[-max_pivots:]
    recent_lows = pivot_lows[-max_pivots:]

    if recent_highs and recent_lows:
        avg_high = float(np.mean([p.price for p in recent_highs]))
        avg_low = float(np.mean([p.price for p in recent_lows]))
        return (avg_high + avg_low) / 2
    if recent_highs:
        return float(np.mean([p.price for p in recent_highs]))
    if recent_lows:
        return float(np.mean([p.price for p in recent_lows]))

    return float((highs[-1] + lows[-1] + closes[-1]) / 3)


def dynamic_center(
    highs: np.ndarray,
    lows: np.ndarray,
    closes: np.ndarray,
    lookback: int,
    max_pivots: int = 5,
) -> float:
    """Pivot centreline blended with the last candle's HL2."""
    hl2 = float((highs[-1] + lows[-1]) / 2)
    center = pivot_centerline(highs, lows, closes, lookback, max_pivots)
    if center is None:
        return hl2
    return (center + hl2) / 2


# =============================================================================
# SUPERTREND
# =============================================================================


def supertrend_bands(
    highs: np.ndarray,
    lows: np.ndarray,
    closes: np.ndarray,
    atr_values: np.ndarray,
    center: float,
    multiplier: float = 2.0,
    period: int = 0,
) -> SuperTrendResult:
    """
    SuperTrend state of the last candle from the last two bars only.

    The previous bar's bands are rebuilt from its own HL2 and ATR instead of
    folding the whole history, so long sideways stretches can differ from a
    full fold (see supertrend_fold). Bands only ratchet toward price.

    When the previous bar's ATR is still a warm-up placeholder (its index is
    below ``period``) only the breakout cases resolve; a close inside the basic
    bands is NEUTRAL.
    """
    if len(closes) == 0 or len(atr_values) == 0:
        return NEUTRAL_SUPERTREND

    current_atr = atr_values[-1]
    basic_upper = center + multiplier * current_atr
    basic_lower = center - multiplier * current_atr

    if len(closes) < 2:
        return SuperTrendResult(0.0, basic_upper, basic_lower, TrendDirection.NEUTRAL)

    close = closes[-1]
    if close > basic_upper:
        return SuperTrendResult(basic_lower, basic_upper, basic_lower, TrendDirection.BULLISH)
    if close < basic_lower:
        return SuperTrendResult(basic_upper, basic_upper, basic_lower, TrendDirection.BEARISH)

    if len(atr_values) - 2 < period:
        return SuperTrendResult(0.0, basic_upper, basic_lower, TrendDirection.NEUTRAL)

    prev_hl2 = (highs[-2] + lows[-2]) / 2
    prev_atr = atr_values[-2]
    prev_upper = prev_hl2 + multiplier * prev_atr
    prev_lower = prev_hl2 - multiplier * prev_atr

    if closes[-2] > prev_lower:
        final_lower = max(basic_lower, prev_lower)
        if close > final_lower:
            return SuperTrendResult(final_lower, basic_upper, final_lower, TrendDirection.BULLISH)
        return SuperTrendResult(basic_upper, basic_upper, final_lower, TrendDirection.BEARISH)

    final_upper = min(basic_upper, prev_upper)
    if close < final_upper:
        return SuperTrendResult(final_upper, final_upper, basic_lower, TrendDirection.BEARISH)
    return SuperTrendResult(basic_lower, final_upper, basic_lower, TrendDirection.BULLISH)


def supertrend_series(
    highs: np.ndarray,
    lows: np.ndarray,
    closes: np.ndarray,
    atr_values: np.ndarray,
    center: float,
    multiplier: float = 2.0,
    start: int = 0,
) -> tuple[np.ndarray, np.ndarray, list[TrendDirection]]:
    """
    Classic SuperTrend fold from ``start`` to the last candle.

    Each bar is centred on its own HL2 except the last, which uses
    ``center``. The first folded bar opens Bullish when it closes at or above
    its HL2. Positions before ``start`` hold 0.0 / NEUTRAL.

    Returns: (final_upper, final_lower, trends)
    """
    n = len(closes)
    final_upper = np.zeros(n)
    final_lower = np.zeros(n)
    trends = [TrendDirection.NEUTRAL] * n
    if n == 0 or len(atr_values) != n or start >= n:
        return final_upper, final_lower, trends

    hl2 = (highs + lows) / 2
    for i in range(start, n):
        mid = center if i == n - 1 else hl2[i]
        basic_upper = mid + multiplier * atr_values[i]
        basic_lower = mid - multiplier * atr_values[i]

        if i == start:
            final_upper[i] = basic_upper
            final_lower[i] = basic_lower
            trends[i] = (
                TrendDirection.BULLISH if closes[i] >= hl2[i] else TrendDirection.BEARISH
            )
            continue

        if basic_upper < final_upper[i - 1] or closes[i - 1] > final_upper[i - 1]:
            final_upper[i] = basic_upper
        else:
            final_upper[i] = final_upper[i - 1]

        if basic_lower > final_lower[i - 1] or closes[i - 1] < final_lower[i - 1]:
            final_lower[i] = basic_lower
        else:
            final_lower[i] = final_lower[i - 1]

        trend = trends[i - 1]
        if trend == TrendDirection.BULLISH and closes[i] < final_lower[i]:
            trend = TrendDirection.BEARISH
        elif trend == TrendDirection.BEARISH and closes[i] > final_upper[i]:
            trend = TrendDirection.BULLISH
        trends[i] = trend

    return final_upper, final_lower, trends


def supertrend_fold(
    highs: np.ndarray,
    lows: np.ndarray,
    closes: np.ndarray,
    atr_values: np.ndarray,
    center: float,
    multiplier: float = 2.0,
    start: int = 0,
) -> SuperTrendResult:
    """SuperTrend state of the last candle from a full-history fold."""
    final_upper, final_lower, trends = supertrend_series(
        highs, lows, closes, atr_values, center, multiplier, start
    )
    if not trends or trends[-1] == TrendDirection.NEUTRAL:
        return NEUTRAL_SUPERTREND

    upper = float(final_upper[-1])
    lower = float(final_lower[-1])
    if trends[-1] == TrendDirection.BULLISH:
        return SuperTrendResult(lower, upper, lower, TrendDirection.BULLISH)
    return SuperTrendResult(upper, upper, lower, TrendDirection.BEARISH)


# =============================================================================
# VOLUME / SWING LEVELS
# =============================================================================


def volume_confirmed(
    volumes: np.ndarray, period: int = 20, threshold: float = 1.5
) -> bool:
    """Last volume above ``threshold`` times the trailing ``period`` average."""
    if period <= 0 or len(volumes) < period:
        return False
    avg_volume = np.mean(volumes[-period:])
    return bool(volumes[-1] > avg_volume * threshold)


def swing_high(highs: np.ndarray, lookback: int = 20) -> float:
    """Highest high over the trailing window (short stop loss)."""
    if len(highs) == 0:
        return 0.0
    window = min(lookback, len(highs))
    return float(np.max(highs[-window:]))


def swing_low(lows: np.ndarray, lookback: int = 20) -> float:
    """Lowest low over the trailing window (long stop loss)."""
    if len(lows) == 0:
        return 0.0
    window = min(lookback, len(lows))
    return float(np.min(lows[-window:]))


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================


def last_value(arr: np.ndarray) -> float:
    """Last element as float, 0.0 for an empty series."""
    return float(arr[-1]) if len(arr) > 0 else 0.0
