import numpy as np
import pytest

from pivot_supertrend.schemas.signals import TrendDirection
from pivot_supertrend.services.data_ingestion import generate_mock_candles
from pivot_supertrend.services.indicators.calculations import (
    OHLCVData,
    Pivot,
    atr,
    dynamic_center,
    ema,
    find_pivot_high,
    find_pivot_low,
    find_pivots,
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


def _flat_bars(ranges, close=100.0):
    ranges = np.array(ranges, dtype=float)
    closes = np.full(len(ranges), close)
    return closes + ranges / 2, closes - ranges / 2, closes


# =============================================================================
# TRUE RANGE / ATR
# =============================================================================


def test_true_range_uses_gap_from_previous_close():
    assert true_range(105.0, 101.0, 100.0) == 5.0
    assert true_range(99.0, 95.0, 100.0) == 5.0
    assert true_range(102.0, 98.0, 100.0) == 4.0


def test_true_range_series_first_bar_is_plain_range():
    tr = true_range_series(np.array([10.0, 12.0]), np.array([8.0, 11.0]), np.array([9.0, 11.5]))
    assert tr[0] == 2.0
    assert tr[1] == 3.0


def test_atr_undefined_without_period_plus_one_candles():
    highs, lows, closes = _flat_bars([2.0] * 14)
    assert len(atr(highs, lows, closes, 14)) == 0

    highs, lows, closes = _flat_bars([2.0] * 15)
    assert len(atr(highs, lows, closes, 14)) == 15


def test_atr_seed_and_placeholders():
    ranges = [4.0, 1.0, 2.0, 3.0, 4.0, 5.0, 6.0]
    highs, lows, closes = _flat_bars(ranges)
    values = atr(highs, lows, closes, 3)

    assert values[0] == 4.0
    assert values[1] == 0.0
    assert values[2] == 0.0
    assert values[3] == pytest.approx((1.0 + 2.0 + 3.0) / 3)
    assert values[4] == pytest.approx((values[3] * 2 + 4.0) / 3)
    assert values[6] == pytest.approx((values[5] * 2 + 6.0) / 3)


def test_atr_wilder_smoothing_converges_monotonically():
    period = 14
    highs, lows, closes = _flat_bars([10.0] * (period + 1) + [2.0] * 200)
    values = atr(highs, lows, closes, period)

    tail = values[period:]
    assert np.all(np.diff(tail) <= 0)
    assert tail[-1] == pytest.approx(2.0, abs=1e-4)
    assert np.all(tail >= 2.0)


# =============================================================================
# EMA
# =============================================================================


def test_ema_short_series_is_all_zero():
    result = ema(np.array([1.0, 2.0]), 3)
    assert result.tolist() == [0.0, 0.0]


def test_ema_seed_is_simple_average():
    closes = np.array([10.0, 12.0, 11.0, 15.0, 9.0])
    result = ema(closes, 3)
    assert result[0] == 0.0
    assert result[1] == 0.0
    assert result[2] == pytest.approx(11.0)
    assert result[3] == pytest.approx((15.0 - 11.0) * 0.5 + 11.0)


def test_ema_never_overshoots_close():
    closes = np.array([10.0, 12.0, 11.0, 15.0, 9.0, 14.0, 13.0, 8.0, 16.0, 16.5, 3.0])
    period = 3
    result = ema(closes, period)

    for i in range(period, len(closes)):
        prev, close = result[i - 1], closes[i]
        if prev == close:
            continue
        assert min(prev, close) < result[i] < max(prev, close)


# =============================================================================
# PIVOTS
# =============================================================================


def test_pivot_high_confirmed_with_strict_neighbours():
    highs = np.array([1.0, 2.0, 3.0, 10.0, 3.0, 2.0, 1.0])
    assert find_pivot_high(highs, 3, 2) == Pivot(index=3, price=10.0)


def test_pivot_high_forward_tie_disqualifies():
    highs = np.array([1.0, 2.0, 3.0, 10.0, 10.0, 2.0, 1.0])
    assert find_pivot_high(highs, 3, 2) is None


def test_pivot_high_backward_tie_disqualifies():
    highs = np.array([1.0, 2.0, 10.0, 10.0, 3.0, 2.0, 1.0])
    assert find_pivot_high(highs, 3, 2) is None


def test_pivot_near_edges_never_confirmed():
    highs = np.array([9.0, 1.0, 2.0, 3.0, 1.0, 0.5, 9.0])
    lows = -highs
    assert find_pivot_high(highs, 0, 2) is None
    assert find_pivot_high(highs, 5, 2) is None
    assert find_pivot_low(lows, 6, 2) is None


def test_pivot_low_is_mirror_image():
    lows = np.array([5.0, 4.0, 3.0, 1.0, 3.0, 4.0, 5.0])
    assert find_pivot_low(lows, 3, 2) == Pivot(index=3, price=1.0)

    lows[4] = 1.0
    assert find_pivot_low(lows, 3, 2) is None


def _zigzag():
    highs = np.array([1.0, 5.0, 1.0, 6.0, 1.0, 7.0, 1.0])
    lows = highs - 0.5
    closes = highs - 0.25
    return highs, lows, closes


def test_find_pivots_chronological():
    highs, lows, _ = _zigzag()
    pivot_highs, pivot_lows = find_pivots(highs, lows, 1)

    assert [p.index for p in pivot_highs] == [1, 3, 5]
    assert [p.price for p in pivot_highs] == [5.0, 6.0, 7.0]
    assert [p.index for p in pivot_lows] == [2, 4]


def test_centerline_midpoint_of_recent_pivots():
    highs, lows, closes = _zigzag()
    assert pivot_centerline(highs, lows, closes, 1, max_pivots=5) == pytest.approx((6.0 + 0.5) / 2)
    assert pivot_centerline(highs, lows, closes, 1, max_pivots=2) == pytest.approx((6.5 + 0.5) / 2)


def test_centerline_with_only_pivot_highs():
    highs, _, closes = _zigzag()
    lows = np.array([0.0, 0.1, 0.2, 0.3, 0.4, 0.5, 0.6])
    assert pivot_centerline(highs, lows, closes, 1) == pytest.approx(6.0)


def test_centerline_falls_back_to_typical_price():
    highs = np.array([2.0, 3.0, 4.0, 5.0, 6.0])
    lows = highs - 2
    closes = highs - 0.5
    assert pivot_centerline(highs, lows, closes, 1) == pytest.approx((6.0 + 4.0 + 5.5) / 3)
    assert pivot_centerline(np.array([]), np.array([]), np.array([]), 1) is None


def test_dynamic_center_blends_with_hl2():
    highs, lows, closes = _zigzag()
    hl2 = (highs[-1] + lows[-1]) / 2
    expected = ((6.0 + 0.5) / 2 + hl2) / 2
    assert dynamic_center(highs, lows, closes, 1) == pytest.approx(expected)


# =============================================================================
# SUPERTREND
# =============================================================================


def _two_bars(prev_hl2, prev_close, close):
    highs = np.array([prev_hl2 + 0.5, close + 0.5])
    lows = np.array([prev_hl2 - 0.5, close - 0.5])
    closes = np.array([prev_close, close])
    return highs, lows, closes, np.array([1.0, 1.0])


def test_breakout_above_upper_band_is_bullish():
    highs, lows, closes, atrs = _two_bars(10.0, 10.0, 13.0)
    result = supertrend_bands(highs, lows, closes, atrs, center=10.0, multiplier=2.0)
    assert result.trend == TrendDirection.BULLISH
    assert result.supertrend_value == 8.0
    assert (result.upper_band, result.lower_band) == (12.0, 8.0)


def test_breakdown_below_lower_band_is_bearish():
    highs, lows, closes, atrs = _two_bars(10.0, 10.0, 7.0)
    result = supertrend_bands(highs, lows, closes, atrs, center=10.0, multiplier=2.0)
    assert result.trend == TrendDirection.BEARISH
    assert result.supertrend_value == 12.0


def test_bullish_regime_ratchets_lower_band():
    highs, lows, closes, atrs = _two_bars(11.0, 11.0, 10.0)
    result = supertrend_bands(highs, lows, closes, atrs, center=10.0, multiplier=2.0)
    assert result.trend == TrendDirection.BULLISH
    assert result.supertrend_value == 9.0
    assert result.lower_band == 9.0


def test_bullish_regime_flips_when_close_loses_lower_band():
    highs, lows, closes, atrs = _two_bars(12.0, 11.0, 9.5)
    result = supertrend_bands(highs, lows, closes, atrs, center=10.0, multiplier=2.0)
    assert result.trend == TrendDirection.BEARISH
    assert result.supertrend_value == 12.0


def test_bearish_regime_ratchets_upper_band():
    highs, lows, closes, atrs = _two_bars(9.0, 6.5, 10.5)
    result = supertrend_bands(highs, lows, closes, atrs, center=10.0, multiplier=2.0)
    assert result.trend == TrendDirection.BEARISH
    assert result.supertrend_value == 11.0
    assert result.upper_band == 11.0


def test_bearish_regime_flips_when_close_clears_upper_band():
    highs, lows, closes, atrs = _two_bars(9.0, 6.5, 11.5)
    result = supertrend_bands(highs, lows, closes, atrs, center=10.0, multiplier=2.0)
    assert result.trend == TrendDirection.BULLISH
    assert result.supertrend_value == 8.0


def test_single_candle_is_neutral():
    result = supertrend_bands(
        np.array([11.0]), np.array([9.0]), np.array([10.0]), np.array([2.0]), 10.0, 2.0
    )
    assert result.trend == TrendDirection.NEUTRAL
    assert result.supertrend_value == 0.0


def test_warm_up_previous_atr_only_resolves_breakouts():
    highs, lows, closes, atrs = _two_bars(10.0, 10.0, 11.0)
    result = supertrend_bands(highs, lows, closes, atrs, center=10.0, multiplier=2.0, period=1)
    assert result.trend == TrendDirection.NEUTRAL
    assert result.supertrend_value == 0.0
    assert (result.upper_band, result.lower_band) == (12.0, 8.0)

    highs, lows, closes, atrs = _two_bars(10.0, 10.0, 13.0)
    result = supertrend_bands(highs, lows, closes, atrs, center=10.0, multiplier=2.0, period=1)
    assert result.trend == TrendDirection.BULLISH
    assert result.supertrend_value == 8.0


def test_fold_bands_ratchet_while_regime_persists():
    data = OHLCVData.from_candles(generate_mock_candles("RATCHET", 400, seed=7))
    period = 14
    atr_values = atr(data.highs, data.lows, data.closes, period)
    center = float((data.highs[-1] + data.lows[-1]) / 2)

    final_upper, final_lower, trends = supertrend_series(
        data.highs, data.lows, data.closes, atr_values, center, 2.0, start=period
    )

    assert TrendDirection.BULLISH in trends and TrendDirection.BEARISH in trends
    for i in range(period + 1, len(trends)):
        if trends[i - 1] == trends[i] == TrendDirection.BULLISH:
            assert final_lower[i] >= final_lower[i - 1]
        if trends[i - 1] == trends[i] == TrendDirection.BEARISH:
            assert final_upper[i] <= final_upper[i - 1]


def test_fold_result_matches_last_series_entry():
    data = OHLCVData.from_candles(generate_mock_candles("FOLD", 300, seed=3))
    atr_values = atr(data.highs, data.lows, data.closes, 14)
    center = dynamic_center(data.highs, data.lows, data.closes, 5)

    result = supertrend_fold(data.highs, data.lows, data.closes, atr_values, center, 2.0, start=14)
    final_upper, final_lower, trends = supertrend_series(
        data.highs, data.lows, data.closes, atr_values, center, 2.0, start=14
    )

    assert result.trend == trends[-1]
    assert result.upper_band == final_upper[-1]
    assert result.lower_band == final_lower[-1]
    expected = final_lower[-1] if trends[-1] == TrendDirection.BULLISH else final_upper[-1]
    assert result.supertrend_value == expected


# =============================================================================
# VOLUME / SWING
# =============================================================================


def test_volume_confirmation():
    flat = np.full(20, 1000.0)
    assert volume_confirmed(flat, 20, 1.5) is False

    spike = flat.copy()
    spike[-1] = 2000.0
    assert volume_confirmed(spike, 20, 1.5) is True
    assert volume_confirmed(spike[-10:], 20, 1.5) is False


def test_volume_confirmation_is_strict():
    volumes = np.array([1.0, 1.0, 4.0])
    assert volume_confirmed(volumes, 3, 2.0) is False
    assert volume_confirmed(volumes, 3, 1.99) is True


def test_swing_extremes():
    highs = np.array([5.0, 9.0, 7.0, 6.0])
    lows = np.array([1.0, 3.0, 2.0, 4.0])
    assert swing_high(highs, 2) == 7.0
    assert swing_low(lows, 2) == 2.0
    assert swing_high(highs, 50) == 9.0
    assert swing_low(lows, 50) == 1.0
    assert swing_high(np.array([]), 20) == 0.0
    assert swing_low(np.array([]), 20) == 0.0
