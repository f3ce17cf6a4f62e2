"""
Core building blocks shared by every indicator
"""

from .models import Bar
from .buffer import HistoryBuffer
from .exceptions import (
    IndicatorError,
    InvalidParameterError,
    UnknownIndicatorError,
)

__all__ = [
    'Bar',
    'HistoryBuffer',
    'IndicatorError',
    'InvalidParameterError',
    'UnknownIndicatorError',
]
