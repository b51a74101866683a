"""
Physical Units
==============

Scalar quantities used as the vocabulary of the package. Every unit wraps
a single float and keeps an invariant on it:

- Distance, Mass, Velocity, Frequency and Luminosity are never negative,
  their constructors take the absolute value of the input.
- Ratio always lies in [0, 1], its constructor clamps the input.
- Radian always lies in [0, 2*pi), its constructor wraps the input.

NaN is rejected by every unit. Clamping is silent unless
``config.WARN_ON_CLAMP`` is enabled.

Each quantity has one canonical base unit and named accessors for the
others:

=========== ============ ================================
Quantity    Stored as    Accessors
=========== ============ ================================
Distance    km           as_km(), as_meters()
Mass        kg           as_kg()
Velocity    m/s          as_meters_sec(), as_km_sec()
Frequency   Hz           as_hz(), period(), angular()
Luminosity  W            as_watts()
Ratio       --           as_float()
Radian      rad          as_float(), degrees()
=========== ============ ================================
"""

import math
from functools import total_ordering
from numbers import Real
from .config import config
from .utils import clamp_warning, hash_key

TWO_PI = 2 * math.pi


def _as_float(value, quantity: str) -> float:
    """Coerce a real number into a float, rejecting NaN."""
    if isinstance(value, bool) or not isinstance(value, Real):
        raise TypeError(f"{quantity} must be a real number, got {type(value)}")
    value = float(value)
    if math.isnan(value):
        raise ValueError(f"{quantity} cannot be NaN")
    return value


@total_ordering
class _Quantity:
    """Base class for scalar units, holding a single float."""
    __slots__ = ("_value",)

    def __init__(self, value=0.0):
        given = _as_float(value, type(self).__name__)
        clamped = self._clamp(given)
        clamp_warning(type(self).__name__, given, clamped)
        self._value = clamped

    @staticmethod
    def _clamp(value: float) -> float:
        return value

    @classmethod
    def _raw(cls, value: float):
        # arithmetic results are clamped without the out-of-range warning
        instance = cls.__new__(cls)
        instance._value = cls._clamp(value)
        return instance

    def _check_same(self, other):
        if type(other) is not type(self):
            raise TypeError(
                f"unsupported operand types: '{type(self).__name__}' "
                f"and '{type(other).__name__}'"
            )

    # ========== ARITHMETIC ==========
    def __add__(self, other):
        self._check_same(other)
        return self._raw(self._value + other._value)

    def __sub__(self, other):
        self._check_same(other)
        return self._raw(self._value - other._value)

    def __mul__(self, factor):
        if isinstance(factor, _Quantity):
            return NotImplemented
        return self._raw(self._value * _as_float(factor, "factor"))

    __rmul__ = __mul__

    def __truediv__(self, divisor):
        # same-unit division yields a plain ratio
        if type(divisor) is type(self):
            return self._value / divisor._value
        if isinstance(divisor, _Quantity):
            return NotImplemented
        return self._raw(self._value / _as_float(divisor, "divisor"))

    # ========== SPECIAL METHODS ==========
    def __float__(self):
        return self._value

    def __bool__(self):
        return self._value != 0.0

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return math.isclose(self._value, other._value,
                            rel_tol=config.EQUALITY_RTOL,
                            abs_tol=config.EQUALITY_ATOL)

    def __lt__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self._value < other._value

    def __hash__(self):
        return hash((type(self).__name__, hash_key(self._value)))

    def __repr__(self):
        return f"{type(self).__name__}({self._value!r})"


class _PositiveQuantity(_Quantity):
    """A quantity that is never negative."""
    __slots__ = ()

    @staticmethod
    def _clamp(value: float) -> float:
        return abs(value)


class Distance(_PositiveQuantity):
    """
    The distance between two points in space, stored in kilometers.

    Examples
    --------
    >>> Distance.km(-2.5).as_km()
    2.5
    >>> Distance.meters(1500).as_km()
    1.5
    """
    __slots__ = ()

    @classmethod
    def km(cls, km: float) -> "Distance":
        """New distance of km kilometers."""
        return cls(km)

    @classmethod
    def meters(cls, meters: float) -> "Distance":
        """New distance of the given meters."""
        return cls(_as_float(meters, "Distance") / 1000.0)

    def as_km(self) -> float:
        """Distance in kilometers."""
        return self._value

    def as_meters(self) -> float:
        """Distance in meters."""
        return self._value * 1000.0

    def __str__(self):
        return f"{self._value:.6g} km"


class Mass(_PositiveQuantity):
    """The mass of an arbitrary object, stored in kilograms."""
    __slots__ = ()

    @classmethod
    def kg(cls, kg: float) -> "Mass":
        """New mass of kg kilograms."""
        return cls(kg)

    def as_kg(self) -> float:
        """Mass in kilograms."""
        return self._value

    def __str__(self):
        return f"{self._value:.6g} kg"


class Velocity(_PositiveQuantity):
    """The speed of an object through space, stored in meters per second."""
    __slots__ = ()

    @classmethod
    def meters_sec(cls, v: float) -> "Velocity":
        """New velocity of v meters per second."""
        return cls(v)

    @classmethod
    def km_sec(cls, v: float) -> "Velocity":
        """New velocity of v kilometers per second."""
        return cls(_as_float(v, "Velocity") * 1000.0)

    def as_meters_sec(self) -> float:
        """Velocity in meters per second."""
        return self._value

    def as_km_sec(self) -> float:
        """Velocity in kilometers per second."""
        return self._value / 1000.0

    def __str__(self):
        return f"{self._value:.6g} m/s"


class Frequency(_PositiveQuantity):
    """The rate at which an event repeats, stored in hertz."""
    __slots__ = ()

    @classmethod
    def hz(cls, hz: float) -> "Frequency":
        """New frequency of hz occurrences per second."""
        return cls(hz)

    @classmethod
    def from_period(cls, seconds: float) -> "Frequency":
        """Frequency of an event repeating every given seconds (0 for none)."""
        seconds = abs(_as_float(seconds, "period"))
        return cls(0.0 if seconds == 0.0 or math.isinf(seconds) else 1.0 / seconds)

    def as_hz(self) -> float:
        """Frequency in hertz."""
        return self._value

    def period(self) -> float:
        """Seconds between occurrences, infinite for a zero frequency."""
        return math.inf if self._value == 0.0 else 1.0 / self._value

    def angular(self) -> float:
        """Angular frequency [rad/s]."""
        return self._value * TWO_PI

    def __str__(self):
        return f"{self._value:.6g} Hz"


class Luminosity(_PositiveQuantity):
    """The radiant power emitted by a body, stored in watts."""
    __slots__ = ()

    @classmethod
    def watts(cls, watts: float) -> "Luminosity":
        """New luminosity of the given watts."""
        return cls(watts)

    def as_watts(self) -> float:
        """Luminosity in watts."""
        return self._value

    def relative_to_sun(self) -> float:
        """Luminosity in units of the nominal solar luminosity."""
        return self._value / Luminosity.SUN._value

    def __str__(self):
        return f"{self._value:.6g} W"


class Ratio(_Quantity):
    """
    A value within [0, 1].

    Inputs above 1 become exactly 1 and inputs below 0 become exactly 0.
    """
    __slots__ = ()

    @staticmethod
    def _clamp(value: float) -> float:
        return min(max(value, 0.0), 1.0)

    def as_float(self) -> float:
        return self._value


class Radian(_Quantity):
    """
    An angle in radians, always within [0, 2*pi).

    Values outside the range are reduced modulo 2*pi. Negative angles wrap
    into the positive range, so -pi/2 becomes 3*pi/2, and an exact turn of
    2*pi becomes 0.

    Examples
    --------
    >>> Radian(-math.pi / 2).as_float() == 3 * math.pi / 2
    True
    >>> Radian(2 * math.pi).as_float()
    0.0
    """
    __slots__ = ()

    def __init__(self, value=0.0):
        value = _as_float(value, "Radian")
        if math.isinf(value):
            raise ValueError("Radian cannot be infinite")
        super().__init__(value)

    @staticmethod
    def _clamp(value: float) -> float:
        if 0.0 <= value < TWO_PI:
            return value
        # floored modulo keeps the sign of the divisor, so negatives wrap up
        modulus = value % TWO_PI
        if modulus >= TWO_PI:
            # tiny negative inputs round up to exactly 2*pi
            modulus = 0.0
        return modulus

    @classmethod
    def from_degrees(cls, degrees: float) -> "Radian":
        """New angle from degrees."""
        return cls(math.radians(_as_float(degrees, "Radian")))

    def __neg__(self):
        return self._raw(-self._value)

    def as_float(self) -> float:
        """Angle in radians."""
        return self._value

    def degrees(self) -> float:
        """Angle in degrees."""
        return math.degrees(self._value)

    def abs_diff(self, other: "Radian") -> float:
        """Absolute difference between both angles, within [0, 2*pi)."""
        self._check_same(other)
        return abs(self._value - other._value)

    def sin(self) -> float:
        return math.sin(self._value)

    def cos(self) -> float:
        return math.cos(self._value)

    def __str__(self):
        return f"{self._value:.6g} rad ({self.degrees():.4f}°)"


# ========== CONSTANTS ==========
Distance.ZERO = Distance(0.0)
Distance.ASTRONOMICAL_UNIT = Distance.km(149_597_870.7)
Mass.ZERO = Mass(0.0)
Velocity.ZERO = Velocity(0.0)
Frequency.ZERO = Frequency(0.0)
Luminosity.ZERO = Luminosity(0.0)
# IAU 2015 nominal solar luminosity
Luminosity.SUN = Luminosity.watts(3.828e26)
Radian.ZERO = Radian(0.0)
