"""
Volatility indicators (Bollinger Bands, ATR, etc.)
"""

import math
from dataclasses import dataclass
from typing import Optional

from .base import Indicator
from .moving_averages import SimpleMovingAverage
from ..core.buffer import HistoryBuffer
from ..core.exceptions import require_positive_float
from ..core.models import Bar


class MovingVariance(Indicator):
    """
    Moving Variance (MV).

    Population variance of the last N values around their SMA.

    Formula: MV = Sum((P(i) - SMA) ** 2) / N

    A window of identical values has a variance of exactly 0.
    """

    def __init__(self, period: int = 20, history: int = 1):
        super().__init__(period, history)
        self._mean = SimpleMovingAverage(period)
        self._window = HistoryBuffer(self.period)

    @property
    def warmup(self) -> int:
        return self.period

    def _compute(self, value: float) -> Optional[float]:
        self._window.append(value)
        mean = self._mean.update(value)
        if mean is None:
            return None
        if max(self._window) == min(self._window):
            return 0.0
        return math.fsum((x - mean) ** 2 for x in self._window) / self.period

    def reset(self) -> None:
        super().reset()
        self._mean.reset()
        self._window.reset()


class StandardDeviation(Indicator):
    """
    Standard Deviation (STDEV).

    Square root of the moving variance over the last N values.
    """

    def __init__(self, period: int = 20, history: int = 1):
        super().__init__(period, history)
        self._variance = MovingVariance(period)

    @property
    def warmup(self) -> int:
        return self.period

    def _compute(self, value: float) -> Optional[float]:
        variance = self._variance.update(value)
        if variance is None:
            return None
        return math.sqrt(variance)

    def reset(self) -> None:
        super().reset()
        self._variance.reset()


@dataclass(frozen=True)
class BollingerResult:
    """Upper, middle and lower band for one step"""
    upper: float
    middle: float
    lower: float


class BollingerBands(Indicator):
    """
    Bollinger Bands.

    Volatility bands placed above and below a moving average.
    Bands widen when volatility increases and narrow when it decreases.

    Components:
    - Middle Band: SMA of close prices
    - Upper Band: Middle Band + (k * Standard Deviation)
    - Lower Band: Middle Band - (k * Standard Deviation)

    Default: 20-period SMA with 2 standard deviations
    """

    def __init__(self, period: int = 20, num_std_dev: float = 2.0, history: int = 1):
        super().__init__(period, history)
        self.num_std_dev = require_positive_float("num_std_dev", num_std_dev, allow_zero=True)
        self._middle = SimpleMovingAverage(period)
        self._deviation = StandardDeviation(period)

    @property
    def warmup(self) -> int:
        return self.period

    def _compute(self, value: float) -> Optional[BollingerResult]:
        middle = self._middle.update(value)
        deviation = self._deviation.update(value)
        if middle is None or deviation is None:
            return None

        offset = deviation * self.num_std_dev
        return BollingerResult(upper=middle + offset, middle=middle, lower=middle - offset)

    def bandwidth(self, key: int = 0) -> Optional[float]:
        """
        Bandwidth = (Upper - Lower) / Middle

        Returns 0.0 when the middle band is exactly zero.
        """
        bands = self.get(key)
        if bands is None:
            return None
        if bands.middle == 0:
            return 0.0
        return (bands.upper - bands.lower) / bands.middle

    def percent_b(self, price: float, key: int = 0) -> Optional[float]:
        """
        %B = (Price - Lower) / (Upper - Lower)
        Shows where price is relative to the bands.

        Returns 0.5 when the bands have collapsed onto each other.
        """
        bands = self.get(key)
        if bands is None:
            return None
        band_width = bands.upper - bands.lower
        if band_width == 0:
            return 0.5
        return (price - bands.lower) / band_width

    def reset(self) -> None:
        super().reset()
        self._middle.reset()
        self._deviation.reset()


class TrueRange(Indicator):
    """
    True Range (TRANGE).

    True Range = max of:
    - Current High - Current Low
    - abs(Current High - Previous Close)
    - abs(Current Low - Previous Close)

    The first bar has no previous close and uses High - Low.
    """

    input_type = "bar"

    def __init__(self, history: int = 1):
        super().__init__(1, history)
        self._prev_close: Optional[float] = None

    @property
    def warmup(self) -> int:
        return 1

    def _compute(self, bar: Bar) -> float:
        if self._prev_close is None:
            true_range = bar.high - bar.low
        else:
            tr1 = bar.high - bar.low
            tr2 = abs(bar.high - self._prev_close)
            tr3 = abs(bar.low - self._prev_close)
            true_range = max(tr1, tr2, tr3)

        self._prev_close = bar.close
        return true_range

    def reset(self) -> None:
        super().reset()
        self._prev_close = None


class AverageTrueRange(Indicator):
    """
    Average True Range (ATR).

    Measures market volatility by analyzing the range of price movement.
    Higher ATR = Higher volatility.

    ATR = SMA of True Range over N bars
    """

    input_type = "bar"

    def __init__(self, period: int = 14, history: int = 1):
        super().__init__(period, history)
        self._true_range = TrueRange()
        self._average = SimpleMovingAverage(period)

    @property
    def warmup(self) -> int:
        return self.period

    def _compute(self, bar: Bar) -> Optional[float]:
        return self._average.update(self._true_range.update(bar))

    def reset(self) -> None:
        super().reset()
        self._true_range.reset()
        self._average.reset()


class NormalizedAverageTrueRange(Indicator):
    """
    Normalized Average True Range (NATR).

    ATR expressed as a percentage of the close, comparable across
    instruments with different price levels.

    Formula: NATR = ATR / Close * 100

    A bar closing at exactly zero has no NATR (None).
    """

    input_type = "bar"

    def __init__(self, period: int = 14, history: int = 1):
        super().__init__(period, history)
        self._atr = AverageTrueRange(period)

    @property
    def warmup(self) -> int:
        return self.period

    def _compute(self, bar: Bar) -> Optional[float]:
        atr = self._atr.update(bar)
        if atr is None or bar.close == 0:
            return None
        return atr / bar.close * 100.0

    def reset(self) -> None:
        super().reset()
        self._atr.reset()
