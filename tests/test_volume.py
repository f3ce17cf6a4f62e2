"""
Unit tests for the volume indicators.

Run with:
    python -m pytest tests/test_volume.py -v
"""

import pytest

from streaming_indicators.core.models import Bar
from streaming_indicators.indicators import (
    AccumulationDistribution,
    MoneyFlowIndex,
    OnBalanceVolume,
)


class TestAccumulationDistribution:
    """Tests for the A/D line."""

    def test_close_at_high_and_low(self):
        ad = AccumulationDistribution()
        assert ad.update(Bar(open=5.0, high=10.0, low=0.0, close=10.0, volume=100.0)) == pytest.approx(100.0)
        assert ad.update(Bar(open=5.0, high=10.0, low=0.0, close=0.0, volume=50.0)) == pytest.approx(50.0)

    def test_zero_range_bar_keeps_value(self, flat_bar):
        """A bar with high == low adds nothing."""
        ad = AccumulationDistribution()
        ad.update(Bar(open=5.0, high=10.0, low=0.0, close=10.0, volume=100.0))
        assert ad.update(flat_bar(7.0, volume=1000.0)) == pytest.approx(100.0)

    def test_first_bar_zero_range(self, flat_bar):
        ad = AccumulationDistribution()
        assert ad.update(flat_bar(7.0)) == 0.0


class TestOnBalanceVolume:
    """Tests for OBV."""

    def test_obv_sequence(self, flat_bar):
        obv = OnBalanceVolume()
        results = [
            obv.update(flat_bar(10.0, volume=100.0)),
            obv.update(flat_bar(11.0, volume=50.0)),
            obv.update(flat_bar(10.5, volume=30.0)),
            obv.update(flat_bar(10.5, volume=999.0)),
        ]
        assert results == [100.0, 150.0, 120.0, 120.0]


class TestMoneyFlowIndex:
    """Tests for MFI."""

    def test_only_positive_flow(self, flat_bar):
        mfi = MoneyFlowIndex(2)
        assert mfi.update(flat_bar(10.0, volume=1.0)) is None
        assert mfi.update(flat_bar(11.0, volume=1.0)) == 100.0

    def test_no_flow(self, flat_bar):
        mfi = MoneyFlowIndex(2)
        for _ in range(3):
            mfi.update(flat_bar(10.0))
        assert mfi.value == 50.0

    def test_mixed_flow(self, flat_bar):
        """Positive flow 11, negative 10.5 -> 100 * 11 / 21.5."""
        mfi = MoneyFlowIndex(3)
        for p in (10.0, 11.0, 10.5):
            mfi.update(flat_bar(p, volume=1.0))
        assert mfi.value == pytest.approx(100.0 * 11.0 / 21.5)
