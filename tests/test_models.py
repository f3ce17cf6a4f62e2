"""
Unit tests for the Bar model.

Run with:
    python -m pytest tests/test_models.py -v
"""

from datetime import datetime

import pytest

from streaming_indicators import Bar


class TestBar:
    """Derived prices and serialization."""

    BAR = Bar(open=10.0, high=14.0, low=8.0, close=12.0, volume=500.0, symbol="ETH/USD")

    def test_derived_prices(self):
        assert self.BAR.typical_price == pytest.approx(34.0 / 3.0)
        assert self.BAR.median_price == pytest.approx(11.0)
        assert self.BAR.weighted_close == pytest.approx(11.5)
        assert self.BAR.mid_price == pytest.approx(11.0)
        assert self.BAR.range == pytest.approx(6.0)
        assert self.BAR.body == pytest.approx(2.0)

    def test_direction(self):
        assert self.BAR.is_bullish
        assert not self.BAR.is_bearish
        down = Bar(open=12.0, high=13.0, low=9.0, close=10.0)
        assert down.is_bearish

    def test_defaults(self):
        bar = Bar(open=1.0, high=1.0, low=1.0, close=1.0)
        assert bar.volume == 0.0
        assert bar.timestamp is None
        assert bar.symbol == ""

    def test_dict_roundtrip_with_timestamp(self):
        bar = Bar(
            open=1.0, high=2.0, low=0.5, close=1.5, volume=10.0,
            timestamp=datetime(2024, 3, 1, 14, 30), symbol="BTC/USD",
        )
        data = bar.to_dict()
        assert data['timestamp'] == "2024-03-01T14:30:00"
        assert Bar.from_dict(data) == bar

    def test_from_dict_optional_fields(self):
        bar = Bar.from_dict({'open': "1", 'high': 2, 'low': 0.5, 'close': 1.5})
        assert bar.open == 1.0
        assert bar.volume == 0.0
        assert bar.symbol == ""

    def test_frozen(self):
        with pytest.raises(AttributeError):
            self.BAR.close = 1.0
