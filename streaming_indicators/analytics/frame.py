"""
pandas adapter for the streaming indicators.

Replays a price Series or an OHLCV DataFrame through an indicator one
row at a time and collects the outputs into pandas objects aligned with
the input index.
"""

import dataclasses
import logging
from typing import List, Union

import numpy as np
import pandas as pd

from ..core.models import Bar
from ..indicators.base import Indicator

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ('open', 'high', 'low', 'close')


def bars_from_dataframe(df: pd.DataFrame, symbol: str = "") -> List[Bar]:
    """
    Convert an OHLCV DataFrame to Bars.

    Parameters
    ----------
    df : pd.DataFrame
        Frame with open, high, low, close columns. volume is optional,
        timestamps come from a timestamp column or a DatetimeIndex.
    symbol : str
        Symbol stamped on every bar

    Returns
    -------
    list of Bar
        One bar per row, in row order

    Raises
    ------
    ValueError
        If an OHLC column is missing
    """
    columns = {str(c).lower(): c for c in df.columns}
    missing = [c for c in REQUIRED_COLUMNS if c not in columns]
    if missing:
        raise ValueError(f"DataFrame is missing required columns: {', '.join(missing)}")

    if 'timestamp' in columns:
        timestamps = pd.to_datetime(df[columns['timestamp']])
    elif isinstance(df.index, pd.DatetimeIndex):
        timestamps = df.index.to_series()
    else:
        timestamps = None

    bars = []
    for i, (_, row) in enumerate(df.iterrows()):
        volume = row[columns['volume']] if 'volume' in columns else 0.0
        bars.append(Bar(
            open=float(row[columns['open']]),
            high=float(row[columns['high']]),
            low=float(row[columns['low']]),
            close=float(row[columns['close']]),
            volume=0.0 if pd.isna(volume) else float(volume),
            timestamp=None if timestamps is None else timestamps.iloc[i].to_pydatetime(),
            symbol=symbol,
        ))
    return bars


def run_indicator(
    indicator: Indicator,
    data: Union[pd.Series, pd.DataFrame],
    reset: bool = True
) -> Union[pd.Series, pd.DataFrame]:
    """
    Feed every row of data through an indicator.

    Parameters
    ----------
    indicator : Indicator
        Indicator to drive
    data : pd.Series or pd.DataFrame
        Prices (price indicators only) or OHLCV bars
    reset : bool
        Reset the indicator before replaying

    Returns
    -------
    pd.Series or pd.DataFrame
        Series for single-value outputs, DataFrame with one column per
        field for multi-value outputs. NaN where the output was None.

    Raises
    ------
    ValueError
        If a bar indicator gets a Series, or the frame lacks OHLC columns
    """
    if reset:
        indicator.reset()

    if isinstance(data, pd.Series):
        if indicator.input_type == "bar":
            raise ValueError(f"{indicator.name} needs OHLC bars, got a Series")
        outputs = [indicator.update(float(value)) for value in data]
    else:
        outputs = [indicator.update_from_bar(bar) for bar in bars_from_dataframe(data)]

    logger.debug("Replayed %d rows through %s", len(outputs), indicator.name)

    sample = next((o for o in outputs if o is not None), None)
    if sample is None or not dataclasses.is_dataclass(sample):
        values = [np.nan if o is None else o for o in outputs]
        return pd.Series(values, index=data.index, name=indicator.name, dtype=float)

    columns = [f.name for f in dataclasses.fields(sample)]
    rows = [
        {c: np.nan for c in columns} if o is None
        else {k: (np.nan if v is None else v) for k, v in dataclasses.asdict(o).items()}
        for o in outputs
    ]
    return pd.DataFrame(rows, index=data.index, columns=columns)
