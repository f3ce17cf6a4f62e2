"""
Streaming Indicators
====================

Technical-analysis indicators that consume one market data point at a
time and keep a short, fixed-size history of their outputs.

Every indicator follows the same lifecycle:
- update(value) feeds a price (or Bar) and returns the new output,
  or None while the indicator is still warming up
- get(key) reads past outputs (0 = latest, -1 = previous, ...)
- reset() returns the indicator to its empty, warming-up state
"""

from .core import (
    Bar,
    HistoryBuffer,
    IndicatorError,
    InvalidParameterError,
    UnknownIndicatorError,
)
from .indicators import Indicator, create_indicator, available_indicators
from .config import IndicatorConfig

__version__ = "1.0.0"
__author__ = "TheVolumeAI"

__all__ = [
    'Bar',
    'HistoryBuffer',
    'IndicatorError',
    'InvalidParameterError',
    'UnknownIndicatorError',
    'Indicator',
    'create_indicator',
    'available_indicators',
    'IndicatorConfig',
]
