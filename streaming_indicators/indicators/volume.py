"""
Volume indicators (A/D line, OBV, MFI)

Indicators combining price and volume. All of them read OHLCV bars.
"""

from typing import Optional

from .base import Indicator
from ..core.buffer import HistoryBuffer
from ..core.models import Bar


class AccumulationDistribution(Indicator):
    """
    Accumulation/Distribution Line (A/D).

    Running total of volume weighted by where the close sits in the
    bar's range.

    Formula: A/D += CLV * Volume
    where CLV = ((Close - Low) - (High - Close)) / (High - Low)

    A bar with High == Low leaves the accumulated value unchanged.
    """

    input_type = "bar"

    def __init__(self, history: int = 1):
        super().__init__(1, history)
        self._ad: float = 0.0

    @property
    def warmup(self) -> int:
        return 1

    def _compute(self, bar: Bar) -> float:
        bar_range = bar.high - bar.low
        if bar_range != 0:
            clv = ((bar.close - bar.low) - (bar.high - bar.close)) / bar_range
            self._ad += clv * bar.volume
        return self._ad

    def reset(self) -> None:
        super().reset()
        self._ad = 0.0


class OnBalanceVolume(Indicator):
    """
    On Balance Volume (OBV).

    Adds the bar's volume when the close rises, subtracts it when the
    close falls, and carries the total over unchanged closes.
    The first bar starts the total at its own volume.
    """

    input_type = "bar"

    def __init__(self, history: int = 1):
        super().__init__(1, history)
        self._prev_close: Optional[float] = None
        self._obv: float = 0.0

    @property
    def warmup(self) -> int:
        return 1

    def _compute(self, bar: Bar) -> float:
        if self._prev_close is None:
            self._obv = bar.volume
        elif bar.close > self._prev_close:
            self._obv += bar.volume
        elif bar.close < self._prev_close:
            self._obv -= bar.volume
        self._prev_close = bar.close
        return self._obv

    def reset(self) -> None:
        super().reset()
        self._prev_close = None
        self._obv = 0.0


class MoneyFlowIndex(Indicator):
    """
    Money Flow Index (MFI), a volume-weighted RSI.

    Money Flow = Typical Price * Volume, counted as positive when the
    typical price rises and negative when it falls.

    Formula: MFI = 100 - 100 / (1 + Positive Flow / Negative Flow)
    over the last N bars.

    With no negative flow MFI is 100, or 50 if there is no flow at all.
    """

    input_type = "bar"

    def __init__(self, period: int = 14, history: int = 1):
        super().__init__(period, history)
        self._prev_typical_price: Optional[float] = None
        self._pos_flow = HistoryBuffer(self.period)
        self._neg_flow = HistoryBuffer(self.period)

    @property
    def warmup(self) -> int:
        return self.period

    def _compute(self, bar: Bar) -> Optional[float]:
        typical_price = bar.typical_price
        money_flow = typical_price * bar.volume

        pos_flow = neg_flow = 0.0
        if self._prev_typical_price is not None:
            if typical_price > self._prev_typical_price:
                pos_flow = money_flow
            elif typical_price < self._prev_typical_price:
                neg_flow = money_flow
        self._prev_typical_price = typical_price

        self._pos_flow.append(pos_flow)
        self._neg_flow.append(neg_flow)

        if len(self._pos_flow) < self.period:
            return None

        sum_pos = sum(self._pos_flow)
        sum_neg = sum(self._neg_flow)
        if sum_neg == 0:
            return 50.0 if sum_pos == 0 else 100.0

        money_flow_ratio = sum_pos / sum_neg
        return 100.0 - 100.0 / (1.0 + money_flow_ratio)

    def reset(self) -> None:
        super().reset()
        self._prev_typical_price = None
        self._pos_flow.reset()
        self._neg_flow.reset()
