"""
Fixed-capacity circular history buffer.

Stores the last N values written to a stream and reads them back by
relative index, time-series style:

- key = 0: most recent value
- key = -1: previous value
- key = -(N - 1): oldest value still retained

Storage is allocated once at construction and never resized.
"""

from typing import Any, Iterator, List, Optional

from .exceptions import require_positive_int


class HistoryBuffer:
    """
    Circular buffer holding the most recent ``capacity`` values.

    Reads return None instead of raising when the requested value does
    not exist:
    - nothing has been appended yet
    - key is positive (future values do not exist)
    - abs(key) >= capacity (evicted or never retainable)
    - fewer than abs(key) + 1 values have been appended so far

    The last rule is what keeps never-written slots from leaking out of
    a buffer that has not wrapped around yet.
    """

    def __init__(self, capacity: int = 1):
        """
        Initialize buffer.

        Parameters
        ----------
        capacity : int
            Number of values retained (>= 1)
        """
        self._capacity = require_positive_int("capacity", capacity)
        self._data: List[Any] = [None] * self._capacity
        self._pos = -1
        self._filled = False

    @property
    def capacity(self) -> int:
        """Maximum number of values retained"""
        return self._capacity

    @property
    def filled(self) -> bool:
        """True once every slot has been written at least once"""
        return self._filled

    def append(self, value: Any) -> None:
        """
        Write a value into the next slot, evicting the oldest when full.

        Parameters
        ----------
        value : Any
            Value to store (None is stored as-is and read back as None)
        """
        self._pos = (self._pos + 1) % self._capacity
        self._data[self._pos] = value
        if self._pos == self._capacity - 1:
            self._filled = True

    def get(self, key: int = 0) -> Optional[Any]:
        """
        Read the value written ``-key`` appends ago.

        Parameters
        ----------
        key : int
            Relative index, 0 for the latest value, negative for older ones

        Returns
        -------
        Any or None
            Stored value, or None if it is not available
        """
        if self._pos == -1 or key > 0 or -key >= self._capacity:
            return None
        if not self._filled and -key > self._pos:
            return None
        return self._data[(self._pos + key) % self._capacity]

    def reset(self) -> None:
        """Discard every stored value. Capacity is kept."""
        for i in range(self._capacity):
            self._data[i] = None
        self._pos = -1
        self._filled = False

    def __getitem__(self, key: int) -> Optional[Any]:
        return self.get(key)

    def __len__(self) -> int:
        """Number of values currently retained"""
        if self._filled:
            return self._capacity
        return self._pos + 1

    def __iter__(self) -> Iterator[Any]:
        """Iterate retained values from oldest to newest"""
        for key in range(1 - len(self), 1):
            yield self.get(key)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(capacity={self._capacity}, size={len(self)})"
