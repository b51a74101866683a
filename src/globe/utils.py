"""
Utility functions for the Globe package.
"""

import math
import warnings
from datetime import timedelta
from numbers import Real
from typing import Type, Union
from .config import config

TimeLike = Union[float, int, timedelta]


def validation_error(message: str, error_class: Type[Exception] = ValueError):
    """
    Raise error or warn based on config.STRICT_VALIDATION.
    
    This function provides consistent validation behavior across the package.
    When STRICT_VALIDATION is True (default), raises the specified exception.
    When False, issues a UserWarning instead.
    
    Parameters
    ----------
    message : str
        Validation error message
    error_class : Type[Exception], optional
        Exception class to raise if STRICT_VALIDATION is True.
        Default: ValueError
    
    Raises
    ------
    Exception (of type error_class)
        If config.STRICT_VALIDATION is True
    
    Warns
    -----
    UserWarning
        If config.STRICT_VALIDATION is False
    
    Examples
    --------
    >>> from globe.utils import validation_error
    >>> from globe import config
    >>> config.STRICT_VALIDATION = True
    >>> validation_error("Duplicate body name")  # Raises ValueError
    
    >>> config.STRICT_VALIDATION = False
    >>> validation_error("Duplicate body name")  # Issues warning
    """
    if config.STRICT_VALIDATION:
        raise error_class(message)
    else:
        warnings.warn(message, UserWarning, stacklevel=3)


def clamp_warning(quantity: str, given: float, clamped: float):
    """
    Report that a unit constructor clamped its input.
    
    Only warns when config.WARN_ON_CLAMP is enabled, since clamping is the
    documented behavior of every unit type.
    """
    if config.WARN_ON_CLAMP and given != clamped:
        warnings.warn(
            f"{quantity} input {given!r} is out of range, clamped to {clamped!r}",
            UserWarning,
            stacklevel=4
        )


def as_seconds(time: TimeLike) -> float:
    """
    Convert a time argument into seconds.
    
    Parameters
    ----------
    time : float, int or datetime.timedelta
        Elapsed time since epoch. Numbers are taken as seconds and may be
        negative.
    
    Returns
    -------
    float
        Elapsed time [s]
    
    Raises
    ------
    TypeError
        If time is neither a real number nor a timedelta
    ValueError
        If time is NaN or infinite
    """
    if isinstance(time, timedelta):
        return time.total_seconds()
    if isinstance(time, bool) or not isinstance(time, Real):
        raise TypeError(f"time must be seconds or timedelta, got {type(time)}")
    seconds = float(time)
    if not math.isfinite(seconds):
        raise ValueError(f"time must be finite, got {seconds}")
    return seconds


def hash_key(value: float) -> float:
    """
    Coarse key for hashing values compared with tolerant equality.
    
    Keeps config.HASH_SIGNIFICANT_DIGITS significant digits, so values
    equal within EQUALITY_RTOL share a key at any magnitude, and maps
    anything closer to zero than 10**-HASH_DECIMALS to 0.
    
    Notes
    -----
    The hash is approximate: two equal values lying on either side of a
    rounding boundary of the last kept digit still get different keys.
    
    Examples
    --------
    >>> hash_key(149597870.7) == hash_key(149597870.7 * (1 + 1e-13))
    True
    """
    if abs(value) < 10.0 ** -config.HASH_DECIMALS:
        return 0.0
    return float(f"{value:.{config.HASH_SIGNIFICANT_DIGITS - 1}e}")
