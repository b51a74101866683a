"""
Geographic Coordinates
======================

Longitude, latitude and altitude of a point relative to the center of a
sphere, and the conversions between this system and the cartesian one as
specified by the spherical coordinate system
(https://en.wikipedia.org/wiki/Spherical_coordinate_system).

The polar angle used by the conversions is measured from the z axis, so
latitude is its complement: latitude = pi/2 - theta.
"""

import math
from typing import Optional
from . import cartesian
from .units import _Quantity, _PositiveQuantity, TWO_PI

HALF_PI = math.pi / 2


class Longitude(_Quantity):
    """
    Horizontal axis of a geographic system of coordinates.

    The longitude of a point is the angle east (positive) or west
    (negative) of the zero meridian, so it lies in [-pi, pi]. Both
    boundaries are consecutive: overflowing one continues from the other.

    Examples
    --------
    >>> Longitude(math.pi + 1.0) == Longitude(-math.pi + 1.0)
    True
    """
    __slots__ = ()

    @staticmethod
    def _clamp(value: float) -> float:
        if -math.pi <= value <= math.pi:
            return value
        return (value + math.pi) % TWO_PI - math.pi

    @classmethod
    def from_cartesian(cls, point: cartesian.Coords) -> "Longitude":
        # atan2 covers every quadrant, the origin falls back to 0
        return cls(math.atan2(point.y, point.x))

    def as_float(self) -> float:
        return self._value

    def normal(self) -> float:
        """Longitude in [-1, 1], resulting from dividing self by pi."""
        return self._value / math.pi


class Latitude(_Quantity):
    """
    Vertical axis of a geographic system of coordinates.

    The latitude of a point is the angle between the equatorial plane and
    the line through that point and the center of the sphere, so it lies
    in [-pi/2, pi/2]. Overflowing a boundary behaves like moving away from
    it, back towards the opposite one.

    Examples
    --------
    >>> math.isclose(Latitude(-5 * math.pi / 4).as_float(), math.pi / 4)
    True
    """
    __slots__ = ()

    @staticmethod
    def _clamp(value: float) -> float:
        if -HALF_PI <= value <= HALF_PI:
            return value
        return math.asin(math.sin(value))

    @classmethod
    def from_cartesian(cls, point: cartesian.Coords) -> "Latitude":
        # the origin falls back to the equator
        horizontal = math.hypot(point.x, point.y)
        return cls(math.atan2(point.z, horizontal))

    def as_float(self) -> float:
        return self._value

    def normal(self) -> float:
        """Latitude in [-1, 1], resulting from dividing self by pi/2."""
        return self._value / HALF_PI


class Altitude(_PositiveQuantity):
    """
    Radius of a geographic system of coordinates [km].

    The distance between a point and the center of the sphere, never
    negative.
    """
    __slots__ = ()

    @classmethod
    def from_cartesian(cls, point: cartesian.Coords) -> "Altitude":
        return cls(point.magnitude())

    def as_float(self) -> float:
        return self._value


class Coords:
    """
    Coordinates according to the geographic system of coordinates.

    Parameters
    ----------
    longitude : Longitude or float, optional
        Angle along the equator [rad] (default 0)
    latitude : Latitude or float, optional
        Angle above the equator [rad] (default 0)
    altitude : Altitude or float, optional
        Distance to the center [km] (default 0)
    """
    __slots__ = ("_longitude", "_latitude", "_altitude")

    def __init__(self, longitude=0.0, latitude=0.0, altitude=0.0):
        self._longitude = _wrap(longitude, Longitude)
        self._latitude = _wrap(latitude, Latitude)
        self._altitude = _wrap(altitude, Altitude)

    @classmethod
    def from_cartesian(cls, point: cartesian.Coords) -> "Coords":
        """Geographic coordinates of the given cartesian point."""
        return cls(
            Longitude.from_cartesian(point),
            Latitude.from_cartesian(point),
            Altitude.from_cartesian(point),
        )

    def to_cartesian(self) -> cartesian.Coords:
        """Cartesian position of self, on the unit sphere if altitude is 0."""
        return cartesian.Coords.from_geographic(self)

    @property
    def longitude(self) -> Longitude:
        return self._longitude

    @property
    def latitude(self) -> Latitude:
        return self._latitude

    @property
    def altitude(self) -> Altitude:
        return self._altitude

    def with_longitude(self, longitude) -> "Coords":
        return Coords(longitude, self._latitude, self._altitude)

    def with_latitude(self, latitude) -> "Coords":
        return Coords(self._longitude, latitude, self._altitude)

    def with_altitude(self, altitude) -> "Coords":
        return Coords(self._longitude, self._latitude, altitude)

    def distance(self, other: "Coords", radius: Optional[float] = None) -> float:
        """
        Great-circle distance between self and other.

        Parameters
        ----------
        other : Coords
            The other point
        radius : float, optional
            Radius of the sphere [km]. If omitted the central angle between
            both points is returned [rad].

        Returns
        -------
        float
            Central angle [rad], or arc length [km] if radius is given
        """
        lat_a = self._latitude.as_float()
        lat_b = other._latitude.as_float()
        longitude_diff = abs(self._longitude.as_float() - other._longitude.as_float())

        cos_angle = (math.sin(lat_a) * math.sin(lat_b)
                     + math.cos(lat_a) * math.cos(lat_b) * math.cos(longitude_diff))
        # rounding may push the cosine slightly outside [-1, 1]
        angle = math.acos(min(max(cos_angle, -1.0), 1.0))

        if radius is None:
            return angle
        return angle * abs(float(radius))

    def __eq__(self, other):
        if not isinstance(other, Coords):
            return NotImplemented
        return (self._longitude == other._longitude
                and self._latitude == other._latitude
                and self._altitude == other._altitude)

    def __hash__(self):
        return hash((self._longitude, self._latitude, self._altitude))

    def __repr__(self):
        return (f"geographic.Coords(longitude={self._longitude.as_float()!r}, "
                f"latitude={self._latitude.as_float()!r}, "
                f"altitude={self._altitude.as_float()!r})")

    def __str__(self):
        return (f"Geographic Coords:\n"
                f"  longitude = {math.degrees(self._longitude.as_float()):12.4f}°\n"
                f"  latitude  = {math.degrees(self._latitude.as_float()):12.4f}°\n"
                f"  altitude  = {self._altitude.as_float():12.4f} km")


def _wrap(value, unit):
    return value if isinstance(value, unit) else unit(value)
