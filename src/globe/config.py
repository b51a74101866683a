"""
Global Configuration for Globe Package
======================================

This module provides package-wide configuration settings that users can modify
to control numerical tolerances, the Kepler solver and validation behavior.

Examples
--------
View current configuration:

>>> import globe
>>> print(globe.config)

Modify settings:

>>> globe.config.KEPLER_MAX_ITERATIONS = 50  # Fewer Newton iterations
>>> globe.config.WARN_ON_CLAMP = True  # Warn when units clamp their input

Reset to defaults:

>>> globe.config.reset()

Temporarily modify settings:

>>> with globe.temp_config(KEPLER_TOLERANCE=0.0):
...     # Always run the full Newton-Raphson iteration count
...     state = system.state_at(3600.0)

Notes
-----
These settings affect package-wide behavior. Modifying them will impact
all subsequent operations until changed again or reset.
"""

from dataclasses import dataclass
from contextlib import contextmanager
import math


@dataclass
class GlobeConfig:
    """
    Global configuration for Globe package.
    
    Attributes
    ----------
    EQUALITY_RTOL : float
        Relative tolerance for floating-point equality comparisons.
        Default: 1e-12
    EQUALITY_ATOL : float
        Absolute tolerance for floating-point equality comparisons.
        Default: 1e-14
    HASH_DECIMALS : int
        Number of decimal places for rounding when computing hash values.
        Values closer to zero than 10**-HASH_DECIMALS hash as zero.
        Automatically computed from EQUALITY_ATOL
    HASH_SIGNIFICANT_DIGITS : int
        Number of significant digits kept when computing hash values.
        Automatically computed from EQUALITY_RTOL
    KEPLER_MAX_ITERATIONS : int
        Upper bound of Newton-Raphson iterations when solving Kepler's
        equation. Default: 100
    KEPLER_TOLERANCE : float
        The solver stops early once |E - e*sin(E) - M| drops below this
        value. Set to 0.0 to always run KEPLER_MAX_ITERATIONS iterations.
        Default: 1e-15
    KEPLER_HIGH_ECCENTRICITY : float
        Eccentricity from which the solver is seeded at pi instead of at
        the mean anomaly. Default: 0.8
    STRICT_VALIDATION : bool
        If True, validation failures raise exceptions.
        If False, validation failures issue warnings.
        Orbits with eccentricity outside [0, 1) are always rejected.
        Default: True
    WARN_ON_CLAMP : bool
        If True, unit constructors issue a UserWarning whenever an
        out-of-range input is clamped into the unit's domain.
        Default: False
    DEFAULT_SAMPLE_SEGMENTS : int
        Number of points produced by sample() when no count is given.
        Default: 1024
    """
    
    # Numerical tolerance for equality comparisons
    EQUALITY_RTOL: float = 1e-12
    EQUALITY_ATOL: float = 1e-14
    
    # Kepler equation solver
    KEPLER_MAX_ITERATIONS: int = 100
    KEPLER_TOLERANCE: float = 1e-15
    KEPLER_HIGH_ECCENTRICITY: float = 0.8
    
    # Validation behavior
    STRICT_VALIDATION: bool = True
    WARN_ON_CLAMP: bool = False
    
    # Sampling defaults
    DEFAULT_SAMPLE_SEGMENTS: int = 1024

    @property
    def HASH_DECIMALS(self) -> int:
        """
        Compute hash rounding decimals from equality tolerance.
        
        The hash rounding must be coarse enough that if two values
        are equal (within EQUALITY_ATOL), they hash to the same value.
        
        Formula: HASH_DECIMALS = -floor(log10(ATOL)) - 2
        The -2 provides a margin of 2 orders of magnitude.
        
        Returns
        -------
        int
            Number of decimal places for hash rounding
        """
        magnitude = -math.floor(math.log10(self.EQUALITY_ATOL))
        return max(magnitude - 2, 0)  # At least 0 decimals

    @property
    def HASH_SIGNIFICANT_DIGITS(self) -> int:
        """
        Compute hash rounding significant digits from equality tolerance.

        Values equal within EQUALITY_RTOL agree on their leading digits,
        so the hash keeps RTOL's digits minus a margin of 2.

        Formula: HASH_SIGNIFICANT_DIGITS = -floor(log10(RTOL)) - 2

        Returns
        -------
        int
            Number of significant digits kept for hashing
        """
        magnitude = -math.floor(math.log10(self.EQUALITY_RTOL))
        return max(magnitude - 2, 1)
    
    def reset(self):
        """
        Reset all configuration values to package defaults.
        
        Examples
        --------
        >>> import globe
        >>> globe.config.KEPLER_MAX_ITERATIONS = 10  # Modify
        >>> globe.config.reset()  # Back to defaults
        >>> globe.config.KEPLER_MAX_ITERATIONS
        100
        """
        defaults = GlobeConfig()
        for key in self.__dataclass_fields__:
            setattr(self, key, getattr(defaults, key))
    
    def __repr__(self):
        """Return formatted string showing all configuration values."""
        lines = ["GlobeConfig:"]
        lines.append("  Numerical Tolerances:")
        lines.append(f"    EQUALITY_RTOL = {self.EQUALITY_RTOL}")
        lines.append(f"    EQUALITY_ATOL = {self.EQUALITY_ATOL}")
        lines.append(f"    HASH_DECIMALS = {self.HASH_DECIMALS}")
        lines.append(f"    HASH_SIGNIFICANT_DIGITS = {self.HASH_SIGNIFICANT_DIGITS}")
        lines.append("  Kepler Solver:")
        lines.append(f"    KEPLER_MAX_ITERATIONS = {self.KEPLER_MAX_ITERATIONS}")
        lines.append(f"    KEPLER_TOLERANCE = {self.KEPLER_TOLERANCE}")
        lines.append(f"    KEPLER_HIGH_ECCENTRICITY = {self.KEPLER_HIGH_ECCENTRICITY}")
        lines.append("  Behavior:")
        lines.append(f"    STRICT_VALIDATION = {self.STRICT_VALIDATION}")
        lines.append(f"    WARN_ON_CLAMP = {self.WARN_ON_CLAMP}")
        lines.append("  Sampling:")
        lines.append(f"    DEFAULT_SAMPLE_SEGMENTS = {self.DEFAULT_SAMPLE_SEGMENTS}")
        return "\n".join(lines)


# Global configuration instance
config = GlobeConfig()


@contextmanager
def temp_config(**kwargs):
    """
    Context manager for temporarily modifying configuration values.
    
    Configuration is automatically restored when the context exits,
    even if an exception occurs.
    
    Parameters
    ----------
    **kwargs
        Configuration attributes to temporarily modify.
    
    Examples
    --------
    >>> import globe
    >>> with globe.temp_config(STRICT_VALIDATION=False, WARN_ON_CLAMP=True):
    ...     # Negative mass is clamped with a warning instead of silently
    ...     mass = globe.Mass.kg(-5.0)
    >>> # Original config restored here
    >>> globe.config.WARN_ON_CLAMP
    False
    
    Raises
    ------
    AttributeError
        If an invalid configuration attribute is specified.
    """
    old_values = {}
    for key, value in kwargs.items():
        if not hasattr(config, key):
            raise AttributeError(
                f"GlobeConfig has no attribute '{key}'. "
                f"Valid attributes: {list(config.__dataclass_fields__.keys())}"
            )
        old_values[key] = getattr(config, key)
        setattr(config, key, value)
    
    try:
        yield config
    finally:
        for key, value in old_values.items():
            setattr(config, key, value)
