"""
Moving average indicators.
"""

import math
from typing import Optional

from .base import Indicator
from ..core.buffer import HistoryBuffer
from ..core.exceptions import require_positive_float, require_positive_int


class SimpleMovingAverage(Indicator):
    """
    Simple Moving Average (SMA).

    Calculates the arithmetic mean of the last N values.

    Formula: SMA = (P1 + P2 + ... + Pn) / n

    The mean is recomputed from the last N inputs with math.fsum on every
    step, so rounding error never carries over from evicted values.
    """

    def __init__(self, period: int = 20, history: int = 1):
        super().__init__(period, history)
        self._window = HistoryBuffer(self.period)

    @property
    def warmup(self) -> int:
        return self.period

    def _compute(self, value: float) -> Optional[float]:
        self._window.append(value)
        if len(self._window) < self.period:
            return None
        return math.fsum(self._window) / self.period

    def reset(self) -> None:
        super().reset()
        self._window.reset()


class ExponentialMovingAverage(Indicator):
    """
    Exponential Moving Average (EMA).

    Gives more weight to recent prices using exponential smoothing.
    The first value is the SMA of the first N prices.

    Formula: EMA = Price * k + EMA(prev) * (1 - k)
    where k = smoothing / (period + 1)
    """

    def __init__(self, period: int = 20, smoothing: float = 2.0, history: int = 1):
        super().__init__(period, history)
        self.smoothing = require_positive_float("smoothing", smoothing)
        self._multiplier: float = self.smoothing / (self.period + 1)
        self._ema: float = 0.0

    @property
    def warmup(self) -> int:
        return self.period

    def _compute(self, value: float) -> Optional[float]:
        if self._count <= self.period:
            # Build up initial SMA
            self._ema += value
            if self._count < self.period:
                return None
            self._ema /= self.period
        else:
            self._ema = value * self._multiplier + self._ema * (1.0 - self._multiplier)
        return self._ema

    def reset(self) -> None:
        super().reset()
        self._ema = 0.0


class DoubleExponentialMovingAverage(Indicator):
    """
    Double Exponential Moving Average (DEMA).

    Reduces the lag of a plain EMA by subtracting an EMA of the EMA.

    Formula: DEMA = 2 * EMA1 - EMA2
    where EMA2 = EMA(EMA1)
    """

    def __init__(self, period: int = 20, history: int = 1):
        super().__init__(period, history)
        self._first_ema = ExponentialMovingAverage(period)
        self._second_ema = ExponentialMovingAverage(period)

    @property
    def warmup(self) -> int:
        return 2 * self.period - 1

    def _compute(self, value: float) -> Optional[float]:
        ema1 = self._first_ema.update(value)
        if ema1 is None:
            return None

        ema2 = self._second_ema.update(ema1)
        if ema2 is None:
            return None

        return 2.0 * ema1 - ema2

    def reset(self) -> None:
        super().reset()
        self._first_ema.reset()
        self._second_ema.reset()


class TripleExponentialMovingAverage(Indicator):
    """
    Triple Exponential Moving Average (TEMA).

    Formula: TEMA = 3 * EMA1 - 3 * EMA2 + EMA3
    where EMA2 = EMA(EMA1) and EMA3 = EMA(EMA2)
    """

    def __init__(self, period: int = 20, history: int = 1):
        super().__init__(period, history)
        self._first_ema = ExponentialMovingAverage(period)
        self._second_ema = ExponentialMovingAverage(period)
        self._third_ema = ExponentialMovingAverage(period)

    @property
    def warmup(self) -> int:
        return 3 * self.period - 2

    def _compute(self, value: float) -> Optional[float]:
        ema1 = self._first_ema.update(value)
        if ema1 is None:
            return None

        ema2 = self._second_ema.update(ema1)
        if ema2 is None:
            return None

        ema3 = self._third_ema.update(ema2)
        if ema3 is None:
            return None

        return 3.0 * ema1 - 3.0 * ema2 + ema3

    def reset(self) -> None:
        super().reset()
        self._first_ema.reset()
        self._second_ema.reset()
        self._third_ema.reset()


class TriangularMovingAverage(Indicator):
    """
    Triangular Moving Average (TRIMA).

    SMA of an SMA over the same period, weighting the middle of the
    window most heavily.
    """

    def __init__(self, period: int = 20, history: int = 1):
        super().__init__(period, history)
        self._first_ma = SimpleMovingAverage(period)
        self._second_ma = SimpleMovingAverage(period)

    @property
    def warmup(self) -> int:
        return 2 * self.period - 1

    def _compute(self, value: float) -> Optional[float]:
        first = self._first_ma.update(value)
        if first is None:
            return None
        return self._second_ma.update(first)

    def reset(self) -> None:
        super().reset()
        self._first_ma.reset()
        self._second_ma.reset()


class KaufmanAdaptiveMovingAverage(Indicator):
    """
    Kaufman Adaptive Moving Average (KAMA).

    Moves fast when price trends cleanly and slowly when it chops.

    ER (efficiency ratio) = |Price - Price N ago| / Sum(|Price(i) - Price(i-1)|)
    SC = (ER * (fast_sc - slow_sc) + slow_sc) ** 2
    KAMA = KAMA(prev) + SC * (Price - KAMA(prev))

    where fast_sc = 2 / (fast_period + 1), slow_sc = 2 / (slow_period + 1).
    The first KAMA equals the price at which N + 1 prices are available.
    A window with no movement has ER = 0.
    """

    def __init__(
        self,
        period: int = 10,
        fast_period: int = 2,
        slow_period: int = 30,
        history: int = 1
    ):
        super().__init__(period, history)
        self.fast_period = require_positive_int("fast_period", fast_period)
        self.slow_period = require_positive_int("slow_period", slow_period)
        self._fast_sc = 2.0 / (self.fast_period + 1)
        self._slow_sc = 2.0 / (self.slow_period + 1)
        self._prices = HistoryBuffer(self.period + 1)
        self._kama: Optional[float] = None

    @property
    def warmup(self) -> int:
        return self.period + 1

    def _compute(self, value: float) -> Optional[float]:
        self._prices.append(value)
        if len(self._prices) <= self.period:
            return None

        if self._kama is None:
            self._kama = value

        change = abs(value - self._prices.get(-self.period))
        volatility = sum(
            abs(self._prices.get(-i) - self._prices.get(-i - 1))
            for i in range(self.period)
        )
        er = change / volatility if volatility > 0 else 0.0

        sc = (er * (self._fast_sc - self._slow_sc) + self._slow_sc) ** 2
        self._kama = self._kama + sc * (value - self._kama)
        return self._kama

    def reset(self) -> None:
        super().reset()
        self._prices.reset()
        self._kama = None
