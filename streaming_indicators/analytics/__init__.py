"""
Analytics helpers for running indicators over pandas data.
"""

from .frame import bars_from_dataframe, run_indicator

__all__ = [
    'bars_from_dataframe',
    'run_indicator',
]
