"""
Trend indicators (ADX, Aroon, Stochastic, Parabolic SAR)

Indicators for trend strength and direction. All of them read OHLC bars.
"""

from dataclasses import dataclass
from typing import Optional

from .base import Indicator
from .moving_averages import SimpleMovingAverage
from ..core.buffer import HistoryBuffer
from ..core.exceptions import InvalidParameterError, require_positive_float, require_positive_int
from ..core.models import Bar


@dataclass(frozen=True)
class ADXValues:
    """ADX, +DI and -DI for one step"""
    adx: Optional[float]
    plus_di: Optional[float]
    minus_di: Optional[float]


class ADX(Indicator):
    """
    Average Directional Index (ADX).

    Measures trend strength regardless of direction.
    Used to determine if a market is trending or ranging.

    Components:
    - +DI (Positive Directional Indicator): Measures upward trend strength
    - -DI (Negative Directional Indicator): Measures downward trend strength
    - ADX: Smoothed average of DX = 100 * |+DI - -DI| / (+DI + -DI)

    The first bar only seeds the previous high/low/close. True range and
    directional movement are averaged over the next N bars, then smoothed
    with Wilder's method. A zero smoothed true range gives DI values of 0,
    and a zero DI sum gives DX = 0.

    Interpretation:
    - ADX > 25: Strong trend (good for trend-following)
    - ADX > 20: Trending market
    - ADX < 20: Weak/no trend (ranging market, good for scalping)

    Default period: 14
    """

    input_type = "bar"

    def __init__(self, period: int = 14, history: int = 1):
        super().__init__(period, history)
        self._prev_bar: Optional[Bar] = None
        self._length = 0

        self._smoothed_tr: float = 0.0
        self._smoothed_plus_dm: float = 0.0
        self._smoothed_minus_dm: float = 0.0
        self._adx: float = 0.0

        self._plus_di = HistoryBuffer(self.history)
        self._minus_di = HistoryBuffer(self.history)

    @property
    def warmup(self) -> int:
        return self.period + 2

    @property
    def plus_di(self) -> Optional[float]:
        """Positive Directional Indicator (+DI)"""
        return self._plus_di.get(0)

    @property
    def minus_di(self) -> Optional[float]:
        """Negative Directional Indicator (-DI)"""
        return self._minus_di.get(0)

    @property
    def trend_strength(self) -> Optional[str]:
        """Get descriptive trend strength"""
        adx = self.value
        if adx is None:
            return None
        if adx >= 25:
            return "strong"
        elif adx >= 20:
            return "moderate"
        elif adx >= 15:
            return "weak"
        else:
            return "absent"

    def _compute(self, bar: Bar) -> Optional[float]:
        prev = self._prev_bar
        self._prev_bar = bar
        if prev is None:
            return self._skip()

        # Calculate True Range
        tr1 = bar.high - bar.low
        tr2 = abs(bar.high - prev.close)
        tr3 = abs(bar.low - prev.close)
        true_range = max(tr1, tr2, tr3)

        # Calculate Directional Movement
        up_move = bar.high - prev.high
        down_move = prev.low - bar.low

        plus_dm = up_move if up_move > down_move and up_move > 0 else 0.0
        minus_dm = down_move if down_move > up_move and down_move > 0 else 0.0

        self._length += 1
        p = self.period

        # First smoothing - simple average
        if self._length <= p:
            self._smoothed_tr += true_range
            self._smoothed_plus_dm += plus_dm
            self._smoothed_minus_dm += minus_dm
            if self._length == p:
                self._smoothed_tr /= p
                self._smoothed_plus_dm /= p
                self._smoothed_minus_dm /= p
            return self._skip()

        # Wilder's smoothing
        self._smoothed_tr = (self._smoothed_tr * (p - 1) + true_range) / p
        self._smoothed_plus_dm = (self._smoothed_plus_dm * (p - 1) + plus_dm) / p
        self._smoothed_minus_dm = (self._smoothed_minus_dm * (p - 1) + minus_dm) / p

        # Calculate +DI and -DI
        if self._smoothed_tr > 0:
            plus_di = 100.0 * self._smoothed_plus_dm / self._smoothed_tr
            minus_di = 100.0 * self._smoothed_minus_dm / self._smoothed_tr
        else:
            plus_di = 0.0
            minus_di = 0.0

        # Calculate DX
        di_sum = plus_di + minus_di
        dx = 100.0 * abs(plus_di - minus_di) / di_sum if di_sum > 0 else 0.0

        if self._length == p + 1:
            self._adx = dx
        else:
            self._adx = (self._adx * (p - 1) + dx) / p

        self._plus_di.append(plus_di)
        self._minus_di.append(minus_di)
        return self._adx

    def _skip(self) -> None:
        self._plus_di.append(None)
        self._minus_di.append(None)
        return None

    def get_values(self, key: int = 0) -> ADXValues:
        return ADXValues(
            adx=self._data.get(key),
            plus_di=self._plus_di.get(key),
            minus_di=self._minus_di.get(key),
        )

    def is_trending(self, threshold: float = 20.0) -> bool:
        """
        Check if market is trending.

        Parameters
        ----------
        threshold : float
            ADX threshold for trending market (default 20)

        Returns
        -------
        bool
            True if ADX > threshold
        """
        adx = self.value
        return adx is not None and adx > threshold

    def is_ranging(self, threshold: float = 20.0) -> bool:
        """Check if market is ranging (ADX < threshold)"""
        adx = self.value
        return adx is not None and adx < threshold

    def is_bullish(self) -> bool:
        """Check if trend is bullish (+DI > -DI)"""
        values = self.get_values(0)
        return values.adx is not None and values.plus_di > values.minus_di

    def is_bearish(self) -> bool:
        """Check if trend is bearish (-DI > +DI)"""
        values = self.get_values(0)
        return values.adx is not None and values.minus_di > values.plus_di

    def reset(self) -> None:
        super().reset()
        self._prev_bar = None
        self._length = 0
        self._smoothed_tr = 0.0
        self._smoothed_plus_dm = 0.0
        self._smoothed_minus_dm = 0.0
        self._adx = 0.0
        self._plus_di.reset()
        self._minus_di.reset()


@dataclass(frozen=True)
class AroonValues:
    """Aroon Up, Aroon Down and the oscillator for one step"""
    up: Optional[float]
    down: Optional[float]
    oscillator: Optional[float]


class Aroon(Indicator):
    """
    Aroon indicator.

    Measures how recently the highest high and lowest low of the last
    N bars occurred.

    Aroon Up = (N - bars since highest high) / N * 100
    Aroon Down = (N - bars since lowest low) / N * 100
    Oscillator = Aroon Up - Aroon Down

    When an extreme repeats inside the window the oldest occurrence counts.
    update() and get() return Aroon Up.
    """

    input_type = "bar"

    def __init__(self, period: int = 25, history: int = 1):
        super().__init__(period, history)
        self._highs = HistoryBuffer(self.period)
        self._lows = HistoryBuffer(self.period)
        self._down = HistoryBuffer(self.history)
        self._oscillator = HistoryBuffer(self.history)

    @property
    def warmup(self) -> int:
        return self.period

    def _compute(self, bar: Bar) -> Optional[float]:
        self._highs.append(bar.high)
        self._lows.append(bar.low)

        if len(self._highs) < self.period:
            self._down.append(None)
            self._oscillator.append(None)
            return None

        highest_high = float("-inf")
        lowest_low = float("inf")
        since_high = since_low = self.period - 1

        for periods_ago in range(self.period):
            high = self._highs.get(-periods_ago)
            low = self._lows.get(-periods_ago)
            if high >= highest_high:
                highest_high = high
                since_high = periods_ago
            if low <= lowest_low:
                lowest_low = low
                since_low = periods_ago

        up = (self.period - since_high) / self.period * 100.0
        down = (self.period - since_low) / self.period * 100.0

        self._down.append(down)
        self._oscillator.append(up - down)
        return up

    def get_values(self, key: int = 0) -> AroonValues:
        return AroonValues(
            up=self._data.get(key),
            down=self._down.get(key),
            oscillator=self._oscillator.get(key),
        )

    def reset(self) -> None:
        super().reset()
        self._highs.reset()
        self._lows.reset()
        self._down.reset()
        self._oscillator.reset()


@dataclass(frozen=True)
class StochResult:
    """%K and %D of the stochastic oscillator for one step"""
    k: float
    d: Optional[float]


class Stochastic(Indicator):
    """
    Stochastic Oscillator.

    Momentum indicator comparing closing price to the range over a period.
    Used to identify overbought/oversold conditions.

    Components:
    - %K: (Close - Lowest Low) / (Highest High - Lowest Low) * 100
    - %D: SMA of %K, None until d_period %K values exist

    A zero high-low range gives %K = 50.

    Interpretation:
    - Above 80: Overbought
    - Below 20: Oversold
    - %K crosses above %D: Bullish signal
    - %K crosses below %D: Bearish signal

    Default: %K period = 14, %D period = 3
    """

    input_type = "bar"

    def __init__(self, k_period: int = 14, d_period: int = 3, history: int = 1):
        super().__init__(k_period, history)
        self.k_period = self.period
        self.d_period = require_positive_int("d_period", d_period)

        self._highs = HistoryBuffer(self.period)
        self._lows = HistoryBuffer(self.period)
        self._d_average = SimpleMovingAverage(d_period)

    @property
    def warmup(self) -> int:
        return self.k_period

    def _compute(self, bar: Bar) -> Optional[StochResult]:
        self._highs.append(bar.high)
        self._lows.append(bar.low)

        if len(self._highs) < self.k_period:
            return None

        highest_high = max(self._highs)
        lowest_low = min(self._lows)
        hl_range = highest_high - lowest_low

        if hl_range == 0:
            k = 50.0
        else:
            k = 100.0 * (bar.close - lowest_low) / hl_range

        return StochResult(k=k, d=self._d_average.update(k))

    def is_overbought(self, threshold: float = 80.0) -> bool:
        """True if %K > threshold"""
        current = self.value
        return current is not None and current.k > threshold

    def is_oversold(self, threshold: float = 20.0) -> bool:
        """True if %K < threshold"""
        current = self.value
        return current is not None and current.k < threshold

    def is_bullish_cross(self) -> bool:
        """
        Check for bullish crossover (%K crosses above %D).

        Needs history >= 2 to see the previous step.
        """
        prev, curr = self.get(-1), self.get(0)
        if prev is None or curr is None or prev.d is None or curr.d is None:
            return False
        return prev.k <= prev.d and curr.k > curr.d

    def is_bearish_cross(self) -> bool:
        """Check for bearish crossover (%K crosses below %D)"""
        prev, curr = self.get(-1), self.get(0)
        if prev is None or curr is None or prev.d is None or curr.d is None:
            return False
        return prev.k >= prev.d and curr.k < curr.d

    def reset(self) -> None:
        super().reset()
        self._highs.reset()
        self._lows.reset()
        self._d_average.reset()

    @property
    def name(self) -> str:
        return f"Stochastic({self.k_period},{self.d_period})"


@dataclass(frozen=True)
class PSARResult:
    """Parabolic SAR state for one step"""
    sar: float
    is_uptrend: bool
    af: float


class ParabolicSAR(Indicator):
    """
    Parabolic Stop and Reverse (PSAR).

    Trailing stop that accelerates towards price as a trend extends.

    SAR(next) = SAR + AF * (EP - SAR)

    where EP is the extreme point of the current trend and AF starts at
    `acceleration`, grows by `acceleration` on every new extreme and is
    capped at `maximum`. When price crosses the SAR the trend flips, SAR
    jumps to the previous extreme and AF resets.

    The first bar seeds the initial high/low, the second picks the
    initial trend; output starts on the third bar.
    """

    input_type = "bar"

    def __init__(self, acceleration: float = 0.02, maximum: float = 0.2, history: int = 1):
        super().__init__(1, history)
        self.acceleration = require_positive_float("acceleration", acceleration)
        self.maximum = require_positive_float("maximum", maximum)
        if self.maximum < self.acceleration:
            raise InvalidParameterError(
                f"maximum ({self.maximum}) must be >= acceleration ({self.acceleration})"
            )
        self._init_bar: Optional[Bar] = None
        self._sar: Optional[float] = None
        self._extreme: float = 0.0
        self._af: float = self.acceleration
        self._is_uptrend = True

    @property
    def warmup(self) -> int:
        return 3

    def _compute(self, bar: Bar) -> Optional[PSARResult]:
        if self._init_bar is None:
            self._init_bar = bar
            return None

        if self._sar is None:
            first = self._init_bar
            if bar.close > first.low:
                self._is_uptrend = True
                self._sar = first.low
                self._extreme = max(first.high, bar.high)
            else:
                self._is_uptrend = False
                self._sar = first.high
                self._extreme = min(first.low, bar.low)
            self._af = self.acceleration
            return None

        prev_extreme = self._extreme
        self._sar = self._sar + self._af * (prev_extreme - self._sar)

        if self._is_uptrend:
            if bar.low < self._sar:
                # Reversal to downtrend
                self._is_uptrend = False
                self._sar = prev_extreme
                self._extreme = bar.low
                self._af = self.acceleration
            else:
                if bar.high > prev_extreme:
                    self._extreme = bar.high
                    self._af = min(self._af + self.acceleration, self.maximum)
                if self._sar > bar.low:
                    self._sar = bar.low
        else:
            if bar.high > self._sar:
                # Reversal to uptrend
                self._is_uptrend = True
                self._sar = prev_extreme
                self._extreme = bar.high
                self._af = self.acceleration
            else:
                if bar.low < prev_extreme:
                    self._extreme = bar.low
                    self._af = min(self._af + self.acceleration, self.maximum)
                if self._sar < bar.high:
                    self._sar = bar.high

        return PSARResult(sar=self._sar, is_uptrend=self._is_uptrend, af=self._af)

    def reset(self) -> None:
        super().reset()
        self._init_bar = None
        self._sar = None
        self._extreme = 0.0
        self._af = self.acceleration
        self._is_uptrend = True

    @property
    def name(self) -> str:
        return f"ParabolicSAR({self.acceleration},{self.maximum})"
