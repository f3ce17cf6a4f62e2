"""
Oscillator indicators (RSI, MACD, etc.)
"""

import math
from dataclasses import dataclass
from typing import Optional

from .base import Indicator
from .moving_averages import ExponentialMovingAverage, SimpleMovingAverage
from ..core.buffer import HistoryBuffer
from ..core.exceptions import require_positive_float, require_positive_int
from ..core.models import Bar


class RelativeStrengthIndex(Indicator):
    """
    Relative Strength Index (RSI).

    Measures the speed and magnitude of recent price changes.
    Values range from 0 to 100.
    - Above 70: Overbought
    - Below 30: Oversold

    Formula: RSI = 100 - (100 / (1 + RS))
    where RS = Average Gain / Average Loss

    Gains and losses are the bar bodies (close - open), averaged with a
    simple moving average. When the average loss is zero RSI is 100,
    or 50 if the average gain is zero as well.
    """

    input_type = "bar"

    def __init__(self, period: int = 14, history: int = 1):
        super().__init__(period, history)
        self._gains = SimpleMovingAverage(period)
        self._losses = SimpleMovingAverage(period)

    @property
    def warmup(self) -> int:
        return self.period

    def _compute(self, bar: Bar) -> Optional[float]:
        change = bar.close - bar.open
        avg_gain = self._gains.update(max(0.0, change))
        avg_loss = self._losses.update(max(0.0, -change))

        if avg_gain is None or avg_loss is None:
            return None

        if avg_loss == 0:
            return 100.0 if avg_gain > 0 else 50.0

        rs = avg_gain / avg_loss
        return 100.0 - (100.0 / (1.0 + rs))

    def is_overbought(self, threshold: float = 70.0) -> bool:
        rsi = self.value
        return rsi is not None and rsi > threshold

    def is_oversold(self, threshold: float = 30.0) -> bool:
        rsi = self.value
        return rsi is not None and rsi < threshold

    def reset(self) -> None:
        super().reset()
        self._gains.reset()
        self._losses.reset()


@dataclass(frozen=True)
class MACDValues:
    """MACD line, signal line and histogram for one step"""
    macd: Optional[float]
    signal: Optional[float]
    histogram: Optional[float]


class MACD(Indicator):
    """
    Moving Average Convergence Divergence (MACD).

    Trend-following momentum indicator showing relationship between
    two exponential moving averages.

    Components:
    - MACD Line: Fast EMA - Slow EMA
    - Signal Line: EMA of MACD Line
    - Histogram: MACD Line - Signal Line

    update() and get() return the MACD line, available once both EMAs
    are ready. The signal line needs signal_period further values on
    top of that; get_values() returns all three lines for one step.

    Default periods: 12, 26, 9
    """

    def __init__(
        self,
        fast_period: int = 12,
        slow_period: int = 26,
        signal_period: int = 9,
        history: int = 1
    ):
        super().__init__(slow_period, history)  # Use slow period as main period
        self.fast_period = require_positive_int("fast_period", fast_period)
        self.slow_period = self.period
        self.signal_period = require_positive_int("signal_period", signal_period)

        self._fast_ema = ExponentialMovingAverage(fast_period)
        self._slow_ema = ExponentialMovingAverage(slow_period)
        self._signal_ema = ExponentialMovingAverage(signal_period)

        self._signal = HistoryBuffer(self.history)
        self._histogram = HistoryBuffer(self.history)

    @property
    def warmup(self) -> int:
        return max(self.fast_period, self.slow_period)

    @property
    def signal_warmup(self) -> int:
        """Inputs required before the signal line and histogram exist"""
        return self.warmup + self.signal_period - 1

    @property
    def signal(self) -> Optional[float]:
        """Signal line value"""
        return self._signal.get(0)

    @property
    def histogram(self) -> Optional[float]:
        """Histogram value (MACD - Signal)"""
        return self._histogram.get(0)

    def _compute(self, value: float) -> Optional[float]:
        # Update component EMAs
        fast = self._fast_ema.update(value)
        slow = self._slow_ema.update(value)

        if fast is None or slow is None:
            self._signal.append(None)
            self._histogram.append(None)
            return None

        macd_line = fast - slow
        signal = self._signal_ema.update(macd_line)
        self._signal.append(signal)
        self._histogram.append(None if signal is None else macd_line - signal)
        return macd_line

    def get_values(self, key: int = 0) -> MACDValues:
        return MACDValues(
            macd=self._data.get(key),
            signal=self._signal.get(key),
            histogram=self._histogram.get(key),
        )

    def is_bullish_cross(self) -> bool:
        """True if the MACD line just crossed above the signal line"""
        prev, curr = self._histogram.get(-1), self._histogram.get(0)
        return prev is not None and curr is not None and prev <= 0 < curr

    def is_bearish_cross(self) -> bool:
        """True if the MACD line just crossed below the signal line"""
        prev, curr = self._histogram.get(-1), self._histogram.get(0)
        return prev is not None and curr is not None and prev >= 0 > curr

    def reset(self) -> None:
        super().reset()
        self._fast_ema.reset()
        self._slow_ema.reset()
        self._signal_ema.reset()
        self._signal.reset()
        self._histogram.reset()

    @property
    def name(self) -> str:
        return f"MACD({self.fast_period},{self.slow_period},{self.signal_period})"


@dataclass(frozen=True)
class PPOResult:
    """PPO line, signal line and histogram for one step"""
    ppo: float
    signal: Optional[float]
    histogram: Optional[float]


class PercentagePriceOscillator(Indicator):
    """
    Percentage Price Oscillator (PPO).

    MACD expressed as a percentage of the slow EMA.

    Formula: PPO = (Fast EMA - Slow EMA) / Slow EMA * 100
    Signal = EMA of PPO, Histogram = PPO - Signal

    A step where the slow EMA is exactly zero has no PPO (None) and
    does not advance the signal line.
    """

    def __init__(
        self,
        fast_period: int = 12,
        slow_period: int = 26,
        signal_period: int = 9,
        history: int = 1
    ):
        super().__init__(slow_period, history)
        self.fast_period = require_positive_int("fast_period", fast_period)
        self.slow_period = self.period
        self.signal_period = require_positive_int("signal_period", signal_period)

        self._fast_ema = ExponentialMovingAverage(fast_period)
        self._slow_ema = ExponentialMovingAverage(slow_period)
        self._signal_ema = ExponentialMovingAverage(signal_period)

    @property
    def warmup(self) -> int:
        return max(self.fast_period, self.slow_period)

    def _compute(self, value: float) -> Optional[PPOResult]:
        fast = self._fast_ema.update(value)
        slow = self._slow_ema.update(value)

        if fast is None or slow is None or slow == 0:
            return None

        ppo = (fast - slow) / slow * 100.0
        signal = self._signal_ema.update(ppo)
        histogram = None if signal is None else ppo - signal
        return PPOResult(ppo=ppo, signal=signal, histogram=histogram)

    def reset(self) -> None:
        super().reset()
        self._fast_ema.reset()
        self._slow_ema.reset()
        self._signal_ema.reset()

    @property
    def name(self) -> str:
        return f"PPO({self.fast_period},{self.slow_period},{self.signal_period})"


class ChandeMomentumOscillator(Indicator):
    """
    Chande Momentum Oscillator (CMO).

    Formula: CMO = 100 * (Sum Gains - Sum Losses) / (Sum Gains + Sum Losses)
    over the last N price changes. Values range from -100 to 100.

    The first input has no previous price and counts as a zero change.
    A window with no movement at all gives 0.
    """

    def __init__(self, period: int = 14, history: int = 1):
        super().__init__(period, history)
        self._prev_value: Optional[float] = None
        self._gains = HistoryBuffer(self.period)
        self._losses = HistoryBuffer(self.period)

    @property
    def warmup(self) -> int:
        return self.period

    def _compute(self, value: float) -> Optional[float]:
        gain = loss = 0.0
        if self._prev_value is not None:
            change = value - self._prev_value
            gain = max(0.0, change)
            loss = max(0.0, -change)
        self._prev_value = value

        self._gains.append(gain)
        self._losses.append(loss)

        if len(self._gains) < self.period:
            return None

        sum_gains = sum(self._gains)
        sum_losses = sum(self._losses)
        total_movement = sum_gains + sum_losses
        if total_movement == 0:
            return 0.0
        return (sum_gains - sum_losses) / total_movement * 100.0

    def reset(self) -> None:
        super().reset()
        self._prev_value = None
        self._gains.reset()
        self._losses.reset()


class Momentum(Indicator):
    """
    Momentum (MOM).

    Formula: MOM = Price - Price N periods ago
    """

    def __init__(self, period: int = 10, history: int = 1):
        super().__init__(period, history)
        self._prices = HistoryBuffer(self.period + 1)

    @property
    def warmup(self) -> int:
        return self.period + 1

    def _compute(self, value: float) -> Optional[float]:
        self._prices.append(value)
        if len(self._prices) <= self.period:
            return None
        return value - self._prices.get(-self.period)

    def reset(self) -> None:
        super().reset()
        self._prices.reset()


class RateOfChange(Indicator):
    """
    Rate of Change (ROC).

    Formula: ROC = (Price - Price N ago) / Price N ago * 100

    A zero base price has no ROC (None).
    """

    def __init__(self, period: int = 10, history: int = 1):
        super().__init__(period, history)
        self._prices = HistoryBuffer(self.period + 1)

    @property
    def warmup(self) -> int:
        return self.period + 1

    def _compute(self, value: float) -> Optional[float]:
        self._prices.append(value)
        if len(self._prices) <= self.period:
            return None

        base = self._prices.get(-self.period)
        if base == 0:
            return None
        return (value - base) / base * 100.0

    def reset(self) -> None:
        super().reset()
        self._prices.reset()


class ReturnOnInvestment(Indicator):
    """
    Return on Investment (ROI), the one-step simple return.

    Formula: ROI = Price / Previous Price - 1

    A zero previous price has no ROI (None).
    """

    def __init__(self, history: int = 1):
        super().__init__(1, history)
        self._prev_value: Optional[float] = None

    @property
    def warmup(self) -> int:
        return 2

    def _compute(self, value: float) -> Optional[float]:
        prev = self._prev_value
        self._prev_value = value
        if prev is None or prev == 0:
            return None
        return value / prev - 1.0

    def reset(self) -> None:
        super().reset()
        self._prev_value = None


class CommodityChannelIndex(Indicator):
    """
    Commodity Channel Index (CCI).

    Formula: CCI = (TP - SMA(TP)) / (constant * Mean Deviation)
    where TP = (High + Low + Close) / 3

    A window with zero mean deviation (all typical prices equal) gives 0.
    """

    input_type = "bar"

    def __init__(self, period: int = 20, constant: float = 0.015, history: int = 1):
        super().__init__(period, history)
        self.constant = require_positive_float("constant", constant)
        self._window = HistoryBuffer(self.period)
        self._average = SimpleMovingAverage(period)

    @property
    def warmup(self) -> int:
        return self.period

    def _compute(self, bar: Bar) -> Optional[float]:
        typical_price = bar.typical_price
        self._window.append(typical_price)
        tp_avg = self._average.update(typical_price)
        if tp_avg is None:
            return None

        if max(self._window) == min(self._window):
            return 0.0
        mean_deviation = math.fsum(abs(tp - tp_avg) for tp in self._window) / self.period
        return (typical_price - tp_avg) / (self.constant * mean_deviation)

    def reset(self) -> None:
        super().reset()
        self._window.reset()
        self._average.reset()


@dataclass(frozen=True)
class StochRSIValues:
    """Smoothed %K and %D of the Stochastic RSI for one step"""
    k: Optional[float]
    d: Optional[float]


class StochasticRSI(Indicator):
    """
    Stochastic RSI.

    Applies the stochastic formula to RSI values instead of prices:
    Raw %K = (RSI - Lowest RSI) / (Highest RSI - Lowest RSI) * 100
    over the last N RSI values, then %K = SMA(Raw %K) and %D = SMA(%K).

    update() and get() return %K. A flat RSI window gives a raw %K of 50.
    """

    input_type = "bar"

    def __init__(
        self,
        rsi_period: int = 14,
        period: int = 14,
        k_period: int = 3,
        d_period: int = 3,
        history: int = 1
    ):
        super().__init__(period, history)
        self.rsi_period = require_positive_int("rsi_period", rsi_period)
        self.k_period = require_positive_int("k_period", k_period)
        self.d_period = require_positive_int("d_period", d_period)

        self._rsi = RelativeStrengthIndex(rsi_period)
        self._rsi_window = HistoryBuffer(self.period)
        self._k_average = SimpleMovingAverage(k_period)
        self._d_average = SimpleMovingAverage(d_period)
        self._d = HistoryBuffer(self.history)

    @property
    def warmup(self) -> int:
        return max(self.period, self.rsi_period) + self.k_period - 1

    def _compute(self, bar: Bar) -> Optional[float]:
        rsi = self._rsi.update(bar)
        self._rsi_window.append(rsi)

        if rsi is None or len(self._rsi_window) < self.period:
            self._d.append(None)
            return None

        window = [v for v in self._rsi_window if v is not None]
        highest_rsi = max(window)
        lowest_rsi = min(window)
        if highest_rsi == lowest_rsi:
            raw_k = 50.0
        else:
            raw_k = (rsi - lowest_rsi) / (highest_rsi - lowest_rsi) * 100.0

        k = self._k_average.update(raw_k)
        d = None if k is None else self._d_average.update(k)
        self._d.append(d)
        return k

    def get_values(self, key: int = 0) -> StochRSIValues:
        return StochRSIValues(k=self._data.get(key), d=self._d.get(key))

    def reset(self) -> None:
        super().reset()
        self._rsi.reset()
        self._rsi_window.reset()
        self._k_average.reset()
        self._d_average.reset()
        self._d.reset()
