"""
Celestial bodies and their rotation about their own axis.
"""

import math
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any, Dict, Union
from .orbit import GRAVITATIONAL_CONSTANT
from .units import Distance, Frequency, Luminosity, Mass, Radian, TWO_PI
from .utils import TimeLike, as_seconds, validation_error


@dataclass(frozen=True)
class Spin:
    """
    Immutable rotation of a body about its own axis.

    Attributes
    ----------
    period : float
        Sidereal rotation period [s]. A timedelta is accepted and
        converted. Zero means the body does not rotate.
    clockwise : bool
        Whether the body rotates clockwise (default False)
    """
    period: Union[float, timedelta] = 0.0
    clockwise: bool = False

    def __post_init__(self):
        period = as_seconds(self.period)
        if period < 0:
            validation_error(f"Spin period must be non-negative, got {period}")
            period = abs(period)
        object.__setattr__(self, 'period', period)
        object.__setattr__(self, 'clockwise', bool(self.clockwise))

    @classmethod
    def from_frequency(cls, frequency: Frequency, clockwise: bool = False) -> "Spin":
        """Spin completing frequency revolutions per second."""
        period = frequency.period()
        return cls(0.0 if math.isinf(period) else period, clockwise)

    def frequency(self) -> Frequency:
        return Frequency.from_period(self.period)

    def angular_rate(self) -> float:
        """Signed rotation rate [rad/s], negative when clockwise."""
        if self.period == 0.0:
            return 0.0
        rate = self.frequency().angular()
        return -rate if self.clockwise else rate

    def angle_at(self, time: TimeLike) -> Radian:
        """
        Rotation angle at the given time.

        spin = 2*pi/period * (time mod period), negated if clockwise.
        A body without rotation stays at 0.
        """
        if self.period == 0.0:
            return Radian.ZERO
        elapsed = as_seconds(time) % self.period
        angle = TWO_PI / self.period * elapsed
        return Radian(-angle if self.clockwise else angle)


@dataclass(frozen=True)
class Body:
    """
    Immutable physical parameters of a celestial body.

    Plain numbers are accepted for the unit fields and wrapped into their
    unit: radius in km, mass in kg and luminosity in watts.

    Attributes
    ----------
    name : str
        Identifier of the body, unique within a System
    radius : Distance
        Equatorial radius
    spin : Spin
        Rotation about its own axis
    mass : Mass
        Mass of the body
    luminosity : Luminosity
        Radiant power, zero for non-stars

    Examples
    --------
    >>> earth = Body('Earth', radius=6378.1363, mass=5.9722e24,
    ...              spin=Spin(86164.0905))
    >>> earth.gravitational_parameter()  # m^3/s^2
    3.9858...e+14
    """
    name: str
    radius: Distance = Distance.ZERO
    spin: Spin = field(default_factory=Spin)
    mass: Mass = Mass.ZERO
    luminosity: Luminosity = Luminosity.ZERO

    def __post_init__(self):
        if not isinstance(self.name, str) or not self.name:
            raise ValueError(f"Body name must be a non-empty string, got {self.name!r}")
        if not isinstance(self.radius, Distance):
            object.__setattr__(self, 'radius', Distance.km(self.radius))
        if not isinstance(self.mass, Mass):
            object.__setattr__(self, 'mass', Mass.kg(self.mass))
        if not isinstance(self.luminosity, Luminosity):
            object.__setattr__(self, 'luminosity', Luminosity.watts(self.luminosity))
        if not isinstance(self.spin, Spin):
            raise TypeError(f"Body spin must be a Spin, got {type(self.spin)}")

    # ========== CONSTRUCTION ==========
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Body":
        """
        Create a Body from a plain mapping.

        Keys: name, and optionally radius [km], mass [kg], luminosity [W],
        spin_period [s] and spin_clockwise.

        Raises
        ------
        ValueError
            If the mapping holds unknown keys or lacks a name
        """
        known = {'name', 'radius', 'mass', 'luminosity', 'spin_period', 'spin_clockwise'}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown body fields: {sorted(unknown)}")
        if 'name' not in data:
            raise ValueError("Body description requires 'name'")
        return cls(
            name=data['name'],
            radius=data.get('radius', 0.0),
            spin=Spin(data.get('spin_period', 0.0), data.get('spin_clockwise', False)),
            mass=data.get('mass', 0.0),
            luminosity=data.get('luminosity', 0.0),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'radius': self.radius.as_km(),
            'mass': self.mass.as_kg(),
            'luminosity': self.luminosity.as_watts(),
            'spin_period': self.spin.period,
            'spin_clockwise': self.spin.clockwise,
        }

    # ========== PHYSICAL PROPERTIES ==========
    def gravitational_parameter(self) -> float:
        """Standard gravitational parameter mu = G*M [m^3/s^2]."""
        return GRAVITATIONAL_CONSTANT * self.mass.as_kg()

    def is_luminous(self) -> bool:
        return self.luminosity != Luminosity.ZERO

    def sidereal_period(self) -> float:
        """Rotation period relative to the stars [s]."""
        return self.spin.period

    def spin_at(self, time: TimeLike) -> Radian:
        """Rotation angle of the body at the given time."""
        return self.spin.angle_at(time)

    def __str__(self):
        return (f"Body '{self.name}':\n"
                f"  radius     = {self.radius}\n"
                f"  mass       = {self.mass}\n"
                f"  luminosity = {self.luminosity}\n"
                f"  spin       = {self.spin.period:.6g} s"
                f"{' (clockwise)' if self.spin.clockwise else ''}")
