"""
Indicator registry - look up indicator classes by short name.

Usage:
    from streaming_indicators.indicators.registry import create_indicator

    macd = create_indicator("macd", fast_period=12, slow_period=26, history=5)
"""

import logging
from typing import Any, Dict, List, Type

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
    TrueRange,
    AverageTrueRange,
    NormalizedAverageTrueRange,
)
from .oscillators import (
    RelativeStrengthIndex,
    MACD,
    PercentagePriceOscillator,
    ChandeMomentumOscillator,
    Momentum,
    RateOfChange,
    ReturnOnInvestment,
    CommodityChannelIndex,
    StochasticRSI,
)
from .trend import ADX, Aroon, Stochastic, ParabolicSAR
from .volume import AccumulationDistribution, OnBalanceVolume, MoneyFlowIndex
from ..core.exceptions import InvalidParameterError, UnknownIndicatorError

logger = logging.getLogger(__name__)


INDICATORS: Dict[str, Type[Indicator]] = {
    # Moving averages
    'sma': SimpleMovingAverage,
    'ema': ExponentialMovingAverage,
    'dema': DoubleExponentialMovingAverage,
    'tema': TripleExponentialMovingAverage,
    'trima': TriangularMovingAverage,
    'kama': KaufmanAdaptiveMovingAverage,
    # Volatility
    'mv': MovingVariance,
    'stdev': StandardDeviation,
    'bbands': BollingerBands,
    'trange': TrueRange,
    'atr': AverageTrueRange,
    'natr': NormalizedAverageTrueRange,
    # Oscillators
    'rsi': RelativeStrengthIndex,
    'macd': MACD,
    'ppo': PercentagePriceOscillator,
    'cmo': ChandeMomentumOscillator,
    'mom': Momentum,
    'roc': RateOfChange,
    'roi': ReturnOnInvestment,
    'cci': CommodityChannelIndex,
    'stochrsi': StochasticRSI,
    # Trend
    'adx': ADX,
    'aroon': Aroon,
    'stoch': Stochastic,
    'psar': ParabolicSAR,
    # Volume
    'ad': AccumulationDistribution,
    'obv': OnBalanceVolume,
    'mfi': MoneyFlowIndex,
}


def available_indicators() -> List[str]:
    """Return the registered indicator names, sorted"""
    return sorted(INDICATORS)


def get_indicator_class(name: str) -> Type[Indicator]:
    """
    Look up an indicator class by name (case-insensitive).

    Raises
    ------
    UnknownIndicatorError
        If no indicator is registered under name
    """
    try:
        return INDICATORS[name.lower()]
    except KeyError:
        raise UnknownIndicatorError(
            f"Unknown indicator '{name}'. Available: {', '.join(available_indicators())}"
        ) from None


def create_indicator(name: str, **params: Any) -> Indicator:
    """
    Build an indicator by name.

    Parameters
    ----------
    name : str
        Registered indicator name, e.g. "sma" or "bbands"
    **params
        Constructor arguments (periods, multipliers, history)

    Returns
    -------
    Indicator
        New indicator instance in its warming-up state

    Raises
    ------
    UnknownIndicatorError
        If name is not registered
    InvalidParameterError
        If params do not match the indicator's constructor or are out of range
    """
    cls = get_indicator_class(name)
    try:
        indicator = cls(**params)
    except TypeError as e:
        raise InvalidParameterError(f"Invalid parameters for '{name}': {e}") from e
    logger.debug("Created %s with %s", indicator.name, params)
    return indicator
