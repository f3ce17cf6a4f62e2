"""
Unit tests for the circular history buffer.

Run with:
    python -m pytest tests/test_buffer.py -v
"""

import pytest

from streaming_indicators.core import HistoryBuffer, InvalidParameterError


class TestHistoryBufferBounds:
    """Reads inside and outside the retained window."""

    def test_empty_buffer_returns_none(self):
        """Nothing appended means nothing to read."""
        buf = HistoryBuffer(3)
        assert buf.get(0) is None
        assert len(buf) == 0

    def test_partial_fill(self):
        """With k < N appends only the last k values are readable."""
        buf = HistoryBuffer(3)
        buf.append(1.0)
        buf.append(2.0)
        assert buf.get(0) == 2.0
        assert buf.get(-1) == 1.0
        assert buf.get(-2) is None

    def test_positive_key_returns_none(self):
        """Future values do not exist."""
        buf = HistoryBuffer(3)
        buf.append(1.0)
        assert buf.get(1) is None

    def test_key_beyond_capacity_returns_none(self):
        """Keys at or past -N never read a slot."""
        buf = HistoryBuffer(3)
        for v in (1.0, 2.0, 3.0, 4.0):
            buf.append(v)
        assert buf.get(-3) is None
        assert buf.get(-10) is None

    def test_getitem_matches_get(self):
        buf = HistoryBuffer(2)
        buf.append(5.0)
        buf.append(6.0)
        assert buf[0] == 6.0
        assert buf[-1] == 5.0


class TestHistoryBufferOverwrite:
    """Eviction once the buffer wraps around."""

    def test_overwrite_oldest(self):
        """After N+1 appends the first value is gone."""
        buf = HistoryBuffer(3)
        for v in (1.0, 2.0, 3.0, 4.0):
            buf.append(v)
        assert buf.get(0) == 4.0
        assert buf.get(-1) == 3.0
        assert buf.get(-2) == 2.0
        assert len(buf) == 3

    def test_iteration_oldest_to_newest(self):
        buf = HistoryBuffer(3)
        for v in range(1, 6):
            buf.append(float(v))
        assert list(buf) == [3.0, 4.0, 5.0]

    def test_filled_flag(self):
        """filled flips once every slot has been written."""
        buf = HistoryBuffer(2)
        buf.append(1.0)
        assert not buf.filled
        buf.append(2.0)
        assert buf.filled

    def test_capacity_one(self):
        """A single slot always holds the latest value."""
        buf = HistoryBuffer(1)
        buf.append(1.0)
        buf.append(2.0)
        assert buf.get(0) == 2.0
        assert buf.get(-1) is None

    def test_none_is_stored(self):
        """None is a legal value and keeps positions aligned."""
        buf = HistoryBuffer(3)
        buf.append(None)
        buf.append(7.0)
        assert buf.get(0) == 7.0
        assert buf.get(-1) is None
        assert len(buf) == 2


class TestHistoryBufferReset:
    """Reset and construction."""

    def test_reset_clears_values(self):
        buf = HistoryBuffer(3)
        for v in (1.0, 2.0, 3.0, 4.0):
            buf.append(v)
        buf.reset()
        assert len(buf) == 0
        assert buf.get(0) is None
        assert not buf.filled
        assert buf.capacity == 3

    def test_reset_then_refill(self):
        """Old values never leak back after a reset."""
        buf = HistoryBuffer(3)
        for v in (1.0, 2.0, 3.0):
            buf.append(v)
        buf.reset()
        buf.append(9.0)
        assert buf.get(0) == 9.0
        assert buf.get(-1) is None

    @pytest.mark.parametrize("capacity", [0, -1, 1.5, True])
    def test_invalid_capacity(self, capacity):
        with pytest.raises(InvalidParameterError):
            HistoryBuffer(capacity)
