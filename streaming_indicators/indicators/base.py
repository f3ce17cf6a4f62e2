"""
Base indicator class that all indicators inherit from.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

from ..core.buffer import HistoryBuffer
from ..core.exceptions import require_positive_int
from ..core.models import Bar

logger = logging.getLogger(__name__)


class Indicator(ABC):
    """
    Abstract base class for all technical indicators.

    Lifecycle shared by every indicator:
    - update(): Advance by one input, return the new output or None
      while warming up
    - get(): Read a past output (0 = latest, -1 = previous, ...)
    - reset(): Return to the empty, warming-up state

    Every update() appends exactly one entry to the output history,
    None during warmup, so that get(-n) always means "n inputs ago".

    Subclasses implement _compute() and warmup. Composite indicators own
    their sub-indicators, call every sub-indicator's update() on each step
    (so their warmup keeps progressing) and return None whenever a value
    they depend on is None. Extra output lines live in extra
    HistoryBuffers that the subclass appends to from _compute() and
    clears in reset().
    """

    # "price" indicators take a float, "bar" indicators take a Bar
    input_type = "price"

    def __init__(self, period: int = 14, history: int = 1):
        """
        Initialize indicator.

        Parameters
        ----------
        period : int
            Lookback period for the indicator
        history : int
            Number of past outputs retained for get()
        """
        self.period = require_positive_int("period", period)
        self.history = require_positive_int("history", history)
        self._data = HistoryBuffer(history)
        self._count = 0

    @property
    @abstractmethod
    def warmup(self) -> int:
        """Number of inputs required before the first output"""
        pass

    @property
    def initialized(self) -> bool:
        """
        Check if indicator has received enough inputs to produce values.

        A ready indicator can still return None for a single degenerate
        step, e.g. a percentage change from a base of exactly zero.
        """
        return self._count >= self.warmup

    @property
    def count(self) -> int:
        """Number of inputs received since construction or reset"""
        return self._count

    @property
    def value(self) -> Optional[Any]:
        """Get current indicator value (None while warming up)"""
        return self._data.get(0)

    def update(self, value: Any) -> Optional[Any]:
        """
        Update indicator with new input.

        Parameters
        ----------
        value : float or Bar
            New data point, matching input_type

        Returns
        -------
        Any or None
            Current output, or None if it is not available yet
        """
        self._count += 1
        result = self._compute(value)
        self._data.append(result)
        if self._count == self.warmup:
            logger.debug("%s ready after %d inputs", self.name, self._count)
        return result

    @abstractmethod
    def _compute(self, value: Any) -> Optional[Any]:
        """
        Advance the formula by one input.

        count already includes the input being processed.
        """
        pass

    def update_from_bar(self, bar: Bar) -> Optional[Any]:
        """
        Update indicator from a Bar object.
        Price indicators use the close price.

        Parameters
        ----------
        bar : Bar
            Bar object with OHLCV data
        """
        if self.input_type == "bar":
            return self.update(bar)
        return self.update(bar.close)

    def get(self, key: int = 0) -> Optional[Any]:
        """
        Access a past output in time-series style.

        Parameters
        ----------
        key : int
            0 for the current step, -1 for the previous one, and so on

        Returns
        -------
        Any or None
            None if the step is in the future, older than the retained
            history, or fell inside the warmup period
        """
        return self._data.get(key)

    def reset(self) -> None:
        """Reset indicator to initial state"""
        self._data.reset()
        self._count = 0
        logger.debug("%s reset", self.name)

    @property
    def name(self) -> str:
        return f"{self.__class__.__name__}({self.period})"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(period={self.period}, "
            f"history={self.history}, value={self.value!r})"
        )
