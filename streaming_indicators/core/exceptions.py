"""
Exceptions raised by the indicator library.

Only construction-time problems are raised. Warmup, lookback past the
retained history and degenerate formula inputs are reported through
None or a documented fallback value instead.
"""


class IndicatorError(Exception):
    """Base class for all indicator library errors"""


class InvalidParameterError(IndicatorError, ValueError):
    """A period, history depth or multiplier is outside its valid range"""


class UnknownIndicatorError(IndicatorError, KeyError):
    """No indicator is registered under the requested name"""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the message readable
        return str(self.args[0]) if self.args else ""


def require_positive_int(name: str, value) -> int:
    """
    Validate a period-like parameter.

    Parameters
    ----------
    name : str
        Parameter name used in the error message
    value : int
        Value to check

    Returns
    -------
    int
        The validated value

    Raises
    ------
    InvalidParameterError
        If value is not an int >= 1
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidParameterError(f"{name} must be an int, got {type(value).__name__}")
    if value < 1:
        raise InvalidParameterError(f"{name} must be >= 1, got {value}")
    return value


def require_positive_float(name: str, value, allow_zero: bool = False) -> float:
    """Validate a multiplier-like parameter and return it as float."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidParameterError(f"{name} must be a number, got {type(value).__name__}")
    value = float(value)
    if value != value:
        raise InvalidParameterError(f"{name} must not be NaN")
    if value < 0 or (value == 0 and not allow_zero):
        bound = ">= 0" if allow_zero else "> 0"
        raise InvalidParameterError(f"{name} must be {bound}, got {value}")
    return value
