"""
Orbits and Kepler's Equation
============================

An Orbit describes the path of a body around the body it orbits (the
orbitee), and answers where that body is, how fast it moves and at which
phase angle it sits at any time since epoch.

Positions are given in the orbit's local frame, in km, relative to the
geometric center of the ellipse with its major axis along x. The occupied
focus lies at (+c, 0, 0) of that frame, so adding focus() moves a position
into a frame centered at the orbitee:

>>> local = orbit.position_at(t, sun)
>>> relative_to_sun = local.transform(Translation(orbit.focus()))

Time is a float number of seconds (or a timedelta) since epoch, negative
values included.
"""

import math
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Dict, Optional
import numpy as np
from .cartesian import Coords
from .config import config
from .shape import Sample, Shape, _segments
from .units import Distance, Frequency, Radian, Ratio, Velocity, TWO_PI
from .utils import TimeLike, as_seconds

if TYPE_CHECKING:
    from .body import Body

# Newtonian constant of gravitation [N m^2 kg^-2]
GRAVITATIONAL_CONSTANT = 6.674010551359e-11


class InvalidOrbitParameters(ValueError):
    """Raised for orbital elements outside the closed-ellipse domain."""


def _check_eccentricity(eccentricity) -> float:
    e = float(eccentricity)
    if not 0.0 <= e < 1.0:
        # also rejects NaN
        raise InvalidOrbitParameters(
            f"Eccentricity must be within [0, 1), got {eccentricity}. "
            "Parabolic and hyperbolic orbits are not supported")
    return e


def solve_kepler(mean_anomaly: float, eccentricity: float,
                 max_iterations: Optional[int] = None,
                 tolerance: Optional[float] = None) -> float:
    """
    Solve Kepler's equation E - e*sin(E) = M for the eccentric anomaly.

    Uses Newton-Raphson iteration, E <- E - f(E)/f'(E) with
    f(E) = E - e*sin(E) - M and f'(E) = 1 - e*cos(E). The iteration is
    seeded at M for moderate eccentricities and at pi from
    config.KEPLER_HIGH_ECCENTRICITY on, where seeding at M may diverge.

    Parameters
    ----------
    mean_anomaly : float
        Mean anomaly M [rad], reduced into [0, 2*pi) before solving
    eccentricity : float
        Eccentricity e, within [0, 1)
    max_iterations : int, optional
        Iteration cap (default config.KEPLER_MAX_ITERATIONS)
    tolerance : float, optional
        Stop once |f(E)| drops below it (default config.KEPLER_TOLERANCE)

    Returns
    -------
    float
        Eccentric anomaly E [rad]

    Raises
    ------
    InvalidOrbitParameters
        If eccentricity is outside [0, 1)

    Examples
    --------
    >>> E = solve_kepler(1.0, 0.5)
    >>> abs(E - 0.5 * math.sin(E) - 1.0) < 1e-12
    True
    """
    e = _check_eccentricity(eccentricity)
    if max_iterations is None:
        max_iterations = config.KEPLER_MAX_ITERATIONS
    if tolerance is None:
        tolerance = config.KEPLER_TOLERANCE

    M = float(mean_anomaly) % TWO_PI
    E = M if e < config.KEPLER_HIGH_ECCENTRICITY else math.pi

    for _ in range(max_iterations):
        f = E - e * math.sin(E) - M
        if abs(f) < tolerance:
            break
        E -= f / (1.0 - e * math.cos(E))

    return E


def vis_viva(mu: float, r: float, a: float) -> float:
    """
    Orbital speed, v = sqrt(mu*(2/r - 1/(2a))).

    Parameters
    ----------
    mu : float
        Gravitational parameter of the orbitee [m^3/s^2]
    r : float
        Distance between both bodies [m]
    a : float
        Semi-major axis [m]

    Returns
    -------
    float
        Speed [m/s]
    """
    # rounding at the apsides may leave a tiny negative radicand
    return math.sqrt(max(mu * (2.0 / r - 1.0 / (2.0 * a)), 0.0))


class Orbit(ABC):
    """
    The path of a body around the body it orbits.

    Every method taking an orbitee expects the orbited Body, whose mass
    determines the gravitational parameter.
    """
    __slots__ = ()

    @abstractmethod
    def period(self, orbitee: "Body") -> float:
        """Time to complete a revolution [s]."""

    def frequency(self, orbitee: "Body") -> Frequency:
        """Revolutions per second."""
        return Frequency.from_period(self.period(orbitee))

    def mean_motion(self, orbitee: "Body") -> float:
        """Average angular rate [rad/s]."""
        return self.frequency(orbitee).angular()

    @property
    def is_clockwise(self) -> bool:
        return False

    @abstractmethod
    def theta_at(self, time: TimeLike, orbitee: "Body") -> Radian:
        """Phase angle of the orbiting body at the given time."""

    @abstractmethod
    def position_at(self, time: TimeLike, orbitee: "Body") -> Coords:
        """Position in the orbit's local frame at the given time [km]."""

    @abstractmethod
    def velocity_at(self, time: TimeLike, orbitee: "Body") -> Velocity:
        """Orbital speed at the given time."""

    @abstractmethod
    def min_velocity(self, orbitee: "Body") -> Velocity:
        """Orbital speed at the farthest point."""

    @abstractmethod
    def max_velocity(self, orbitee: "Body") -> Velocity:
        """Orbital speed at the nearest point."""

    @abstractmethod
    def focus(self) -> Coords:
        """Offset applied to local positions to center them on the orbitee."""

    @abstractmethod
    def radius(self) -> Distance:
        """Farthest distance between the orbitee and the orbit."""

    @abstractmethod
    def perimeter(self) -> Distance:
        """Length of a full revolution."""


class Ellipse(Orbit, Sample):
    """
    Elliptical orbit, solved analytically through Kepler's equation.

    Parameters
    ----------
    semi_major_axis : Distance or float
        Semi-major axis a (float in km), must be positive
    eccentricity : Ratio or float, optional
        Eccentricity e within [0, 1) (default 0, a circle)
    initial_theta : Radian or float, optional
        Phase offset of the orbit [rad] (default 0)
    clockwise : bool, optional
        Whether the body revolves clockwise (default False)

    Raises
    ------
    InvalidOrbitParameters
        If eccentricity is outside [0, 1) or the semi-major axis is not
        positive

    Examples
    --------
    >>> earth_orbit = Ellipse(Distance.ASTRONOMICAL_UNIT, 0.017)
    >>> earth_orbit.period(SUN) / 86400  # days
    365.2...
    """
    __slots__ = ("_semi_major_axis", "_eccentricity", "_initial_theta", "_clockwise")

    def __init__(self, semi_major_axis, eccentricity=0.0,
                 initial_theta=0.0, clockwise: bool = False):
        a = semi_major_axis.as_km() if isinstance(semi_major_axis, Distance) \
            else float(semi_major_axis)
        if not (math.isfinite(a) and a > 0.0):
            raise InvalidOrbitParameters(
                f"Semi-major axis must be positive, got {semi_major_axis}")
        e = eccentricity.as_float() if isinstance(eccentricity, Ratio) else eccentricity

        self._semi_major_axis = Distance.km(a)
        self._eccentricity = Ratio(_check_eccentricity(e))
        self._initial_theta = initial_theta if isinstance(initial_theta, Radian) \
            else Radian(initial_theta)
        self._clockwise = bool(clockwise)

    # ========== CONSTRUCTION ==========
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Ellipse":
        """
        Create an Ellipse from a plain mapping.

        Expected keys are semi_major_axis [km] and, optionally,
        eccentricity, initial_theta [rad] and clockwise.

        Raises
        ------
        ValueError
            If the mapping holds unknown keys or lacks semi_major_axis
        """
        known = {'semi_major_axis', 'eccentricity', 'initial_theta', 'clockwise'}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown orbit fields: {sorted(unknown)}")
        if 'semi_major_axis' not in data:
            raise ValueError("Orbit description requires 'semi_major_axis'")
        return Ellipse(
            data['semi_major_axis'],
            data.get('eccentricity', 0.0),
            data.get('initial_theta', 0.0),
            data.get('clockwise', False),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'semi_major_axis': self.semi_major_axis.as_km(),
            'eccentricity': self.eccentricity.as_float(),
            'initial_theta': self.initial_theta.as_float(),
            'clockwise': self.is_clockwise,
        }

    def with_initial_theta(self, initial_theta) -> "Ellipse":
        return Ellipse(self._semi_major_axis, self._eccentricity,
                       initial_theta, self._clockwise)

    def with_clockwise(self, clockwise: bool) -> "Ellipse":
        return Ellipse(self._semi_major_axis, self._eccentricity,
                       self._initial_theta, clockwise)

    # ========== PROPERTY ACCESS ==========
    @property
    def semi_major_axis(self) -> Distance:
        return self._semi_major_axis

    @property
    def semi_minor_axis(self) -> Distance:
        """b = a*sqrt(1 - e^2)"""
        e = self._eccentricity.as_float()
        return self._semi_major_axis * math.sqrt(1.0 - e**2)

    @property
    def eccentricity(self) -> Ratio:
        return self._eccentricity

    @property
    def linear_eccentricity(self) -> Distance:
        """c = a*e, distance between the center and either focus."""
        return self._semi_major_axis * self._eccentricity.as_float()

    @property
    def initial_theta(self) -> Radian:
        return self._initial_theta

    @property
    def is_clockwise(self) -> bool:
        return self._clockwise

    @property
    def _direction(self) -> float:
        return -1.0 if self._clockwise else 1.0

    # ========== GEOMETRY ==========
    def _point(self, theta: float) -> Coords:
        # position for the given angle in the local frame
        a = self._semi_major_axis.as_km()
        b = self.semi_minor_axis.as_km()
        return Coords(a * math.cos(theta), b * math.sin(theta), 0.0)

    def focus(self) -> Coords:
        return Coords(-self.linear_eccentricity.as_km(), 0.0, 0.0)

    def radius(self) -> Distance:
        """a + c, the apoapsis distance."""
        return self._semi_major_axis + self.linear_eccentricity

    def perimeter(self) -> Distance:
        """
        Perimeter of the ellipse (Ramanujan-Cantrell approximation).

        P = pi*(a + b)*(1 + 3h/(10 + sqrt(4 - 3h)) + (4/pi - 14/11)*h^12)
        with h = ((a - b)/(a + b))^2. Exact for circles.
        """
        a = self._semi_major_axis.as_km()
        b = self.semi_minor_axis.as_km()
        h = ((a - b) / (a + b))**2
        perimeter = math.pi * (a + b) * (
            1.0 + 3.0 * h / (10.0 + math.sqrt(4.0 - 3.0 * h))
            + (4.0 / math.pi - 14.0 / 11.0) * h**12
        )
        return Distance.km(perimeter)

    def sample(self, segments: Optional[int] = None, span: float = TWO_PI) -> Shape:
        """
        Points of the ellipse evenly spaced in angle, in the local frame.

        Parameters
        ----------
        segments : int, optional
            Number of points (default config.DEFAULT_SAMPLE_SEGMENTS)
        span : float, optional
            Angle covered by the samples [rad] (default a full turn)

        Returns
        -------
        Shape
            Exactly segments points, starting at initial_theta and
            advancing in the orbit's direction. The shape is not closed.
        """
        segments = _segments(segments)
        steps = np.arange(segments) * (float(span) / segments)
        theta = self._initial_theta.as_float() + self._direction * steps

        a = self._semi_major_axis.as_km()
        b = self.semi_minor_axis.as_km()
        xs = a * np.cos(theta)
        ys = b * np.sin(theta)

        return Shape(Coords(x, y, 0.0) for x, y in zip(xs, ys))

    # ========== DYNAMICS ==========
    def period(self, orbitee: "Body") -> float:
        """T = 2*pi*sqrt(a^3/mu), with a in meters."""
        mu = orbitee.gravitational_parameter()
        if mu <= 0.0:
            return math.inf
        a = self._semi_major_axis.as_meters()
        return TWO_PI * math.sqrt(a**3 / mu)

    def _true_anomaly(self, time: TimeLike, orbitee: "Body") -> float:
        period = self.period(orbitee)
        if math.isinf(period):
            # a massless orbitee never moves the body
            return 0.0

        elapsed = as_seconds(time) % period
        mean_anomaly = TWO_PI * (elapsed / period)

        e = self._eccentricity.as_float()
        E = solve_kepler(mean_anomaly, e)
        return 2.0 * math.atan2(math.sqrt(1.0 + e) * math.sin(E / 2.0),
                                math.sqrt(1.0 - e) * math.cos(E / 2.0))

    def theta_at(self, time: TimeLike, orbitee: "Body") -> Radian:
        """initial_theta advanced by the true anomaly in the orbit's direction."""
        nu = self._true_anomaly(time, orbitee)
        return Radian(self._initial_theta.as_float() + self._direction * nu)

    def position_at(self, time: TimeLike, orbitee: "Body") -> Coords:
        return self._point(self.theta_at(time, orbitee).as_float())

    def velocity_at(self, time: TimeLike, orbitee: "Body") -> Velocity:
        """Speed from vis_viva, r being the distance to the occupied focus."""
        r = (self.position_at(time, orbitee) + self.focus()).magnitude()
        return self._vis_viva(Distance.km(r), orbitee)

    def min_velocity(self, orbitee: "Body") -> Velocity:
        return self._vis_viva(self._semi_major_axis + self.linear_eccentricity, orbitee)

    def max_velocity(self, orbitee: "Body") -> Velocity:
        return self._vis_viva(self._semi_major_axis - self.linear_eccentricity, orbitee)

    def _vis_viva(self, r: Distance, orbitee: "Body") -> Velocity:
        if r.as_meters() == 0.0:
            return Velocity.ZERO
        speed = vis_viva(orbitee.gravitational_parameter(), r.as_meters(),
                         self._semi_major_axis.as_meters())
        return Velocity.meters_sec(speed)

    # ========== SPECIAL METHODS ==========
    def __eq__(self, other):
        if not isinstance(other, Ellipse):
            return NotImplemented
        return (self._semi_major_axis == other._semi_major_axis
                and self._eccentricity == other._eccentricity
                and self._initial_theta == other._initial_theta
                and self._clockwise == other._clockwise)

    def __hash__(self):
        return hash((self._semi_major_axis, self._eccentricity,
                     self._initial_theta, self._clockwise))

    def __repr__(self):
        return (f"{type(self).__name__}(semi_major_axis={self._semi_major_axis.as_km()!r}, "
                f"eccentricity={self._eccentricity.as_float()!r}, "
                f"initial_theta={self._initial_theta.as_float()!r}, "
                f"clockwise={self._clockwise!r})")

    def __str__(self):
        direction = "clockwise" if self._clockwise else "counterclockwise"
        return (f"Elliptical Orbit ({direction}):\n"
                f"  a     = {self._semi_major_axis.as_km():16.4f} km\n"
                f"  e     = {self._eccentricity.as_float():16.6f}\n"
                f"  theta = {self._initial_theta.degrees():16.4f}°")


class Circle(Ellipse):
    """
    Circular orbit, an Ellipse of eccentricity 0.

    Parameters
    ----------
    radius : Distance or float
        Radius of the orbit (float in km)
    initial_theta : Radian or float, optional
        Phase offset of the orbit [rad] (default 0)
    clockwise : bool, optional
        Whether the body revolves clockwise (default False)
    """
    __slots__ = ()

    def __init__(self, radius, initial_theta=0.0, clockwise: bool = False):
        super().__init__(radius, 0.0, initial_theta, clockwise)

    def with_initial_theta(self, initial_theta) -> "Circle":
        return Circle(self._semi_major_axis, initial_theta, self._clockwise)

    def with_clockwise(self, clockwise: bool) -> "Circle":
        return Circle(self._semi_major_axis, self._initial_theta, clockwise)

    def __repr__(self):
        return (f"Circle(radius={self._semi_major_axis.as_km()!r}, "
                f"initial_theta={self._initial_theta.as_float()!r}, "
                f"clockwise={self._clockwise!r})")
