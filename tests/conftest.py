"""
Shared fixtures for the indicator tests.
"""

import math
from typing import List

import pytest

from streaming_indicators.core.models import Bar


def _wave_bars(count: int) -> List[Bar]:
    """Positive, gently trending OHLCV bars with some chop"""
    bars = []
    for i in range(count):
        close = 100.0 + 10.0 * math.sin(i / 3.0) + 0.1 * i
        open_ = close - 0.5 * math.cos(i)
        bars.append(Bar(
            open=open_,
            high=max(open_, close) + 1.0,
            low=min(open_, close) - 1.0,
            close=close,
            volume=1000.0 + i,
        ))
    return bars


@pytest.fixture
def wave_bars():
    """Factory for deterministic synthetic bars"""
    return _wave_bars


@pytest.fixture
def flat_bar():
    """Factory for a bar with open == high == low == close"""
    def _make(price: float, volume: float = 100.0) -> Bar:
        return Bar(open=price, high=price, low=price, close=price, volume=volume)
    return _make


@pytest.fixture
def volatile_prices():
    """Factory for a long, noisy BTC-like price history between 60k and 70k"""
    def _make(count: int = 5000) -> List[float]:
        return [
            65000.0 + 4000.0 * math.sin(i * 0.37) + 900.0 * math.cos(i * 1.91) + (i % 7) * 13.37
            for i in range(count)
        ]
    return _make
