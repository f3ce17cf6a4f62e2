"""
Indicator Configuration Module

Holds the default periods and multipliers for every indicator family
and builds indicators from them:
- Default parameters per indicator
- Output history depth
- JSON save/load
"""

import json
import logging
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Any, Dict, Union

from ..core.exceptions import require_positive_float, require_positive_int
from ..indicators.base import Indicator
from ..indicators.registry import create_indicator, get_indicator_class

logger = logging.getLogger(__name__)


# Constructor argument -> config field, per registered indicator name
PARAMETER_MAP: Dict[str, Dict[str, str]] = {
    'sma': {'period': 'sma_period'},
    'ema': {'period': 'ema_period', 'smoothing': 'ema_smoothing'},
    'dema': {'period': 'dema_period'},
    'tema': {'period': 'tema_period'},
    'trima': {'period': 'trima_period'},
    'kama': {
        'period': 'kama_period',
        'fast_period': 'kama_fast_period',
        'slow_period': 'kama_slow_period',
    },
    'mv': {'period': 'variance_period'},
    'stdev': {'period': 'variance_period'},
    'bbands': {'period': 'bb_period', 'num_std_dev': 'bb_std_dev'},
    'trange': {},
    'atr': {'period': 'atr_period'},
    'natr': {'period': 'atr_period'},
    'rsi': {'period': 'rsi_period'},
    'macd': {
        'fast_period': 'macd_fast_period',
        'slow_period': 'macd_slow_period',
        'signal_period': 'macd_signal_period',
    },
    'ppo': {
        'fast_period': 'macd_fast_period',
        'slow_period': 'macd_slow_period',
        'signal_period': 'macd_signal_period',
    },
    'cmo': {'period': 'cmo_period'},
    'mom': {'period': 'momentum_period'},
    'roc': {'period': 'momentum_period'},
    'roi': {},
    'cci': {'period': 'cci_period', 'constant': 'cci_constant'},
    'stochrsi': {
        'rsi_period': 'rsi_period',
        'period': 'stochrsi_period',
        'k_period': 'stochrsi_k_period',
        'd_period': 'stochrsi_d_period',
    },
    'adx': {'period': 'adx_period'},
    'aroon': {'period': 'aroon_period'},
    'stoch': {'k_period': 'stoch_k_period', 'd_period': 'stoch_d_period'},
    'psar': {'acceleration': 'psar_acceleration', 'maximum': 'psar_maximum'},
    'ad': {},
    'obv': {},
    'mfi': {'period': 'mfi_period'},
}

# Multipliers that may legitimately be zero
ZERO_ALLOWED = {'bb_std_dev'}


@dataclass
class IndicatorConfig:
    """Default parameters for building indicators."""

    # Number of past outputs every indicator keeps for get()
    history: int = 1

    # Moving averages
    sma_period: int = 20
    ema_period: int = 20
    ema_smoothing: float = 2.0
    dema_period: int = 20
    tema_period: int = 20
    trima_period: int = 20
    kama_period: int = 10
    kama_fast_period: int = 2
    kama_slow_period: int = 30

    # Volatility
    variance_period: int = 20
    bb_period: int = 20
    bb_std_dev: float = 2.0
    atr_period: int = 14

    # Oscillators
    rsi_period: int = 14
    macd_fast_period: int = 12
    macd_slow_period: int = 26
    macd_signal_period: int = 9
    cmo_period: int = 14
    momentum_period: int = 10
    cci_period: int = 20
    cci_constant: float = 0.015
    stochrsi_period: int = 14
    stochrsi_k_period: int = 3
    stochrsi_d_period: int = 3

    # Trend
    adx_period: int = 14
    aroon_period: int = 25
    stoch_k_period: int = 14
    stoch_d_period: int = 3
    psar_acceleration: float = 0.02
    psar_maximum: float = 0.2

    # Volume
    mfi_period: int = 14

    def validate(self) -> None:
        """
        Check every field is in range.

        Raises
        ------
        InvalidParameterError
            On the first field that is not a positive int / non-negative float
        """
        for f in fields(self):
            value = getattr(self, f.name)
            if f.type is int:
                require_positive_int(f.name, value)
            else:
                require_positive_float(f.name, value, allow_zero=f.name in ZERO_ALLOWED)

    def params_for(self, name: str) -> Dict[str, Any]:
        """
        Constructor arguments for an indicator, taken from this config.

        Parameters
        ----------
        name : str
            Registered indicator name

        Returns
        -------
        dict
            Keyword arguments including history
        """
        get_indicator_class(name)
        mapping = PARAMETER_MAP[name.lower()]
        params = {arg: getattr(self, field_name) for arg, field_name in mapping.items()}
        params['history'] = self.history
        return params

    def create(self, name: str, **overrides: Any) -> Indicator:
        """
        Build an indicator using configured defaults.

        Parameters
        ----------
        name : str
            Registered indicator name
        **overrides
            Constructor arguments that take precedence over the config
        """
        params = self.params_for(name)
        params.update(overrides)
        return create_indicator(name, **params)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'IndicatorConfig':
        """Build a config from a mapping. Unknown keys are ignored."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            logger.warning("Ignoring unknown indicator config keys: %s", ", ".join(unknown))
        config = cls(**{k: v for k, v in data.items() if k in known})
        config.validate()
        return config

    def save(self, path: Union[str, Path]) -> None:
        """Save configuration to a JSON file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(asdict(self), f, indent=2)
        logger.info("Indicator configuration saved to: %s", path)

    @classmethod
    def load(cls, path: Union[str, Path]) -> 'IndicatorConfig':
        """
        Load configuration from a JSON file.

        A missing or unreadable file gives the defaults.
        Out-of-range values raise InvalidParameterError.
        """
        path = Path(path)
        if not path.exists():
            logger.info("No indicator config at %s, using defaults", path)
            return cls()
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError, OSError) as e:
            logger.warning("Could not load indicator config file %s: %s", path, e)
            return cls()
        if not isinstance(data, dict):
            logger.warning("Indicator config file %s does not hold an object", path)
            return cls()
        return cls.from_dict(data)
