"""
Unit tests for the pandas adapter.

Run with:
    python -m pytest tests/test_frame.py -v
"""

import logging

import numpy as np
import pandas as pd
import pytest

from streaming_indicators.analytics import bars_from_dataframe, run_indicator
from streaming_indicators.indicators import (
    BollingerBands,
    RelativeStrengthIndex,
    SimpleMovingAverage,
)


@pytest.fixture
def ohlcv():
    return pd.DataFrame({
        'timestamp': pd.date_range("2024-01-02 09:30", periods=4, freq="min"),
        'open': [10.0, 11.0, 12.0, 11.0],
        'high': [11.0, 12.0, 13.0, 12.0],
        'low': [9.0, 10.0, 11.0, 10.0],
        'close': [11.0, 12.0, 11.5, 11.0],
        'volume': [100, 200, 150, 120],
    })


class TestBarsFromDataFrame:
    """DataFrame to Bar conversion."""

    def test_conversion(self, ohlcv):
        bars = bars_from_dataframe(ohlcv, symbol="BTC/USD")
        assert len(bars) == 4
        assert bars[0].close == 11.0
        assert bars[1].volume == 200.0
        assert bars[0].symbol == "BTC/USD"
        assert bars[0].timestamp == pd.Timestamp("2024-01-02 09:30")

    def test_volume_optional(self, ohlcv):
        bars = bars_from_dataframe(ohlcv.drop(columns=['volume', 'timestamp']))
        assert bars[0].volume == 0.0
        assert bars[0].timestamp is None

    def test_datetime_index(self, ohlcv):
        bars = bars_from_dataframe(ohlcv.set_index('timestamp'))
        assert bars[3].timestamp == pd.Timestamp("2024-01-02 09:33")

    def test_missing_column(self, ohlcv):
        with pytest.raises(ValueError, match="low"):
            bars_from_dataframe(ohlcv.drop(columns=['low']))


class TestRunIndicator:
    """Replaying data through indicators."""

    def test_series_input(self):
        prices = pd.Series([5.0, 4.0, 3.0, 6.0], index=list("abcd"))
        result = run_indicator(SimpleMovingAverage(3), prices)
        assert isinstance(result, pd.Series)
        assert list(result.index) == list("abcd")
        assert np.isnan(result['a']) and np.isnan(result['b'])
        assert result['c'] == pytest.approx(4.0)
        assert result['d'] == pytest.approx(13.0 / 3.0)

    def test_price_indicator_on_frame_uses_close(self, ohlcv):
        result = run_indicator(SimpleMovingAverage(2), ohlcv)
        assert result.iloc[1] == pytest.approx(11.5)

    def test_bar_indicator_on_frame(self, ohlcv):
        result = run_indicator(RelativeStrengthIndex(2), ohlcv)
        assert np.isnan(result.iloc[0])
        assert result.iloc[1] == pytest.approx(100.0)

    def test_bar_indicator_rejects_series(self):
        with pytest.raises(ValueError):
            run_indicator(RelativeStrengthIndex(2), pd.Series([1.0, 2.0]))

    def test_multi_value_output(self):
        prices = pd.Series([2.0, 4.0, 4.0, 4.0, 5.0, 5.0, 7.0, 9.0])
        result = run_indicator(BollingerBands(8), prices)
        assert isinstance(result, pd.DataFrame)
        assert list(result.columns) == ['upper', 'middle', 'lower']
        assert result['middle'].isna().sum() == 7
        assert result['upper'].iloc[-1] == pytest.approx(9.0)

    def test_reset_before_replay(self):
        sma = SimpleMovingAverage(2)
        prices = pd.Series([1.0, 3.0])
        first = run_indicator(sma, prices)
        second = run_indicator(sma, prices)
        pd.testing.assert_series_equal(first, second)

    def test_replay_logs_at_debug_only(self, caplog):
        with caplog.at_level(logging.INFO, logger="streaming_indicators"):
            run_indicator(SimpleMovingAverage(2), pd.Series([1.0, 2.0, 3.0]))
        assert caplog.records == []

    def test_all_warmup(self):
        result = run_indicator(SimpleMovingAverage(5), pd.Series([1.0, 2.0]))
        assert result.isna().all()
