"""
Technical indicators library.

All indicators follow a consistent interface:
- update(value) or update_from_bar(bar) to add new data
- get(key) to read current (0) or past (-1, -2, ...) outputs
- value / initialized properties for the current state
- reset() to clear all data

Outputs are None until the indicator has seen enough data.
"""

from .base import Indicator
from .moving_averages import (
    SimpleMovingAverage,
    ExponentialMovingAverage,
    DoubleExponentialMovingAverage,
    TripleExponentialMovingAverage,
    TriangularMovingAverage,
    KaufmanAdaptiveMovingAverage,
)
from .volatility import (
    MovingVariance,
    StandardDeviation,
    BollingerBands,
    BollingerResult,
    TrueRange,
    AverageTrueRange,
    NormalizedAverageTrueRange,
)
from .oscillators import (
    RelativeStrengthIndex,
    MACD,
    MACDValues,
    PercentagePriceOscillator,
    PPOResult,
    ChandeMomentumOscillator,
    Momentum,
    RateOfChange,
    ReturnOnInvestment,
    CommodityChannelIndex,
    StochasticRSI,
    StochRSIValues,
)
from .trend import (
    ADX,
    ADXValues,
    Aroon,
    AroonValues,
    Stochastic,
    StochResult,
    ParabolicSAR,
    PSARResult,
)
from .volume import AccumulationDistribution, OnBalanceVolume, MoneyFlowIndex
from .registry import INDICATORS, available_indicators, create_indicator, get_indicator_class

__all__ = [
    'Indicator',
    # Moving averages
    'SimpleMovingAverage',
    'ExponentialMovingAverage',
    'DoubleExponentialMovingAverage',
    'TripleExponentialMovingAverage',
    'TriangularMovingAverage',
    'KaufmanAdaptiveMovingAverage',
    # Volatility
    'MovingVariance',
    'StandardDeviation',
    'BollingerBands',
    'BollingerResult',
    'TrueRange',
    'AverageTrueRange',
    'NormalizedAverageTrueRange',
    # Oscillators
    'RelativeStrengthIndex',
    'MACD',
    'MACDValues',
    'PercentagePriceOscillator',
    'PPOResult',
    'ChandeMomentumOscillator',
    'Momentum',
    'RateOfChange',
    'ReturnOnInvestment',
    'CommodityChannelIndex',
    'StochasticRSI',
    'StochRSIValues',
    # Trend
    'ADX',
    'ADXValues',
    'Aroon',
    'AroonValues',
    'Stochastic',
    'StochResult',
    'ParabolicSAR',
    'PSARResult',
    # Volume
    'AccumulationDistribution',
    'OnBalanceVolume',
    'MoneyFlowIndex',
    # Registry
    'INDICATORS',
    'available_indicators',
    'create_indicator',
    'get_indicator_class',
]
