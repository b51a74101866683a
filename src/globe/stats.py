"""
Time-independent statistics of a System tree.

SystemStats mirrors a System once: orbit extent and perimeter, orbital
period, velocity extrema, synodic periods and the habitable zone of every
body. None of it depends on time, so a System computes it once and keeps it.
"""

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterator, Optional, Tuple
import pandas as pd
from .body import Body
from .units import Distance, Luminosity, Velocity, TWO_PI

if TYPE_CHECKING:
    from .system import System

# Bounds of the habitable zone in units of stellar flux relative to the
# flux received at 1 AU from the Sun
HZ_INNER_FLUX = 1.1
HZ_OUTER_FLUX = 0.53


@dataclass(frozen=True)
class HabitableZone:
    """
    Range of distances around a body where insolation allows liquid water.

    inner_edge = 1 AU * sqrt(L/1.1), outer_edge = 1 AU * sqrt(L/0.53), with L
    the luminosity relative to the Sun. Non-luminous bodies have an empty
    zone at zero distance.

    Attributes
    ----------
    inner_edge : Distance
    outer_edge : Distance
    """
    inner_edge: Distance = Distance.ZERO
    outer_edge: Distance = Distance.ZERO

    @classmethod
    def from_luminosity(cls, luminosity: Luminosity) -> "HabitableZone":
        """Habitable zone of a body radiating the given luminosity (or watts)."""
        if not isinstance(luminosity, Luminosity):
            luminosity = Luminosity.watts(luminosity)
        sun_relative = luminosity.relative_to_sun()
        return cls(
            inner_edge=Distance.ASTRONOMICAL_UNIT * math.sqrt(sun_relative / HZ_INNER_FLUX),
            outer_edge=Distance.ASTRONOMICAL_UNIT * math.sqrt(sun_relative / HZ_OUTER_FLUX),
        )

    @classmethod
    def from_body(cls, body: Body) -> "HabitableZone":
        return cls.from_luminosity(body.luminosity)

    def contains(self, distance: Distance) -> bool:
        """Whether the given distance from the body lies within the zone."""
        return self.inner_edge <= distance <= self.outer_edge

    def width(self) -> Distance:
        return self.outer_edge - self.inner_edge


@dataclass(frozen=True)
class SynodicPeriod:
    """
    Time for a body to show again the same face to one of its ancestors
    (the length of its solar day when the ancestor is its star).

    Attributes
    ----------
    relative : str
        Name of the ancestor the period is relative to
    period : float
        Synodic period [s], infinite if the face never changes
    """
    relative: str
    period: float


def synodic_period(spin_rate: float, orbital_rate: float) -> float:
    """
    Synodic period from signed angular rates [rad/s].

    Returns 2*pi/|spin_rate - orbital_rate|, infinite when both match
    (tidally locked).
    """
    difference = abs(spin_rate - orbital_rate)
    if difference == 0.0:
        return math.inf
    return TWO_PI / difference


@dataclass(frozen=True)
class SystemStats:
    """
    Immutable statistics of a System node and everything orbiting it.

    Orbit related values are zero for the root, which has no orbit.

    Attributes
    ----------
    body : str
        Name of the body
    radius : Distance
        Farthest distance between the body and its orbitee
    perimeter : Distance
        Length of the orbit
    orbital_period : float
        Time to complete an orbit [s]
    synodic_periods : tuple of SynodicPeriod
        One per ancestor, nearest first
    min_velocity, max_velocity : Velocity
        Orbital speed at the farthest and nearest points
    habitable_zone : HabitableZone
        Habitable zone around the body
    secondary : tuple of SystemStats
        Statistics of the orbiting bodies
    """
    body: str
    radius: Distance = Distance.ZERO
    perimeter: Distance = Distance.ZERO
    orbital_period: float = 0.0
    synodic_periods: Tuple[SynodicPeriod, ...] = ()
    min_velocity: Velocity = Velocity.ZERO
    max_velocity: Velocity = Velocity.ZERO
    habitable_zone: HabitableZone = HabitableZone()
    secondary: Tuple["SystemStats", ...] = ()

    @classmethod
    def from_system(cls, system: "System") -> "SystemStats":
        """Walk the tree once and build its statistics."""
        return cls._build(system, None, ())

    @classmethod
    def _build(cls, system: "System", orbitee: Optional[Body],
               ancestors: Tuple[Tuple[str, float], ...]) -> "SystemStats":
        # ancestors holds (name, signed orbital rate of the branch orbiting it)
        primary = system.primary
        orbit = system.orbit

        if orbitee is not None and orbit is not None:
            radius = orbit.radius()
            perimeter = orbit.perimeter()
            orbital_period = orbit.period(orbitee)
            min_velocity = orbit.min_velocity(orbitee)
            max_velocity = orbit.max_velocity(orbitee)
        else:
            radius = Distance.ZERO
            perimeter = Distance.ZERO
            orbital_period = 0.0
            min_velocity = Velocity.ZERO
            max_velocity = Velocity.ZERO

        spin_rate = primary.spin.angular_rate()
        synodic_periods = tuple(
            SynodicPeriod(name, synodic_period(spin_rate, orbital_rate))
            for name, orbital_rate in reversed(ancestors)
        )

        secondary = tuple(
            cls._build(subsystem, primary,
                       ancestors + ((primary.name, _orbital_rate(subsystem, primary)),))
            for subsystem in system.secondary
        )

        return cls(
            body=primary.name,
            radius=radius,
            perimeter=perimeter,
            orbital_period=orbital_period,
            synodic_periods=synodic_periods,
            min_velocity=min_velocity,
            max_velocity=max_velocity,
            habitable_zone=HabitableZone.from_body(primary),
            secondary=secondary,
        )

    def stats(self, name: str) -> Optional["SystemStats"]:
        """Statistics of the body with the given name, or None if absent."""
        for stats in self.walk():
            if stats.body == name:
                return stats
        return None

    def walk(self) -> Iterator["SystemStats"]:
        """Iterate over self and every descendant, depth first."""
        yield self
        for stats in self.secondary:
            yield from stats.walk()

    def synodic_period(self, relative: str) -> Optional[float]:
        """Synodic period relative to the named ancestor [s], None if absent."""
        for synodic in self.synodic_periods:
            if synodic.relative == relative:
                return synodic.period
        return None

    def to_dataframe(self) -> pd.DataFrame:
        """
        Export the statistics tree to a pandas DataFrame.

        Returns
        -------
        pd.DataFrame
            One row per body, in depth first order. Distances in km,
            periods in seconds and velocities in m/s.
        """
        rows = []
        for stats in self.walk():
            rows.append({
                'body': stats.body,
                'radius': stats.radius.as_km(),
                'perimeter': stats.perimeter.as_km(),
                'orbital_period': stats.orbital_period,
                'min_velocity': stats.min_velocity.as_meters_sec(),
                'max_velocity': stats.max_velocity.as_meters_sec(),
                'hz_inner_edge': stats.habitable_zone.inner_edge.as_km(),
                'hz_outer_edge': stats.habitable_zone.outer_edge.as_km(),
            })
        return pd.DataFrame(rows)


def _orbital_rate(system: "System", orbitee: Body) -> float:
    # signed mean motion of system around orbitee, negative when clockwise
    if system.orbit is None:
        return 0.0
    rate = system.orbit.mean_motion(orbitee)
    return -rate if system.orbit.is_clockwise else rate
