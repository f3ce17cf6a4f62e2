"""
Configuration module for the indicator library.
"""

from .indicator_config import IndicatorConfig, PARAMETER_MAP

__all__ = [
    'IndicatorConfig',
    'PARAMETER_MAP',
]
