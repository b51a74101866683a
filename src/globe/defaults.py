"""
Default Bodies, Orbits and System Configurations
================================================

Predefined Solar System bodies and their heliocentric (or geocentric)
orbits, plus factory functions for commonly-used systems. Factories build
a new System on every call.

Examples
--------
>>> from globe import sun_earth, inner_solar_system
>>> system = sun_earth()
>>> system.stats('Earth').orbital_period / 86400  # days
365.2...
"""
from .body import Body, Spin
from .orbit import Ellipse
from .system import System

"""
Predefined Solar System bodies
Radii in km, masses in kg, luminosity in W, sidereal spin periods in s
"""
SUN = Body(
    name='Sun',
    radius=6.957e5,
    spin=Spin(2.19283e6),
    mass=1.9891e30,
    luminosity=3.828e26,
)

MERCURY = Body(
    name='Mercury',
    radius=2439.0,
    spin=Spin(5.06703e6),
    mass=3.3011e23,
)

VENUS = Body(
    name='Venus',
    radius=6052.0,
    spin=Spin(2.09968e7, clockwise=True),
    mass=4.8675e24,
)

EARTH = Body(
    name='Earth',
    radius=6378.1363,
    spin=Spin(86164.0905),
    mass=5.9722e24,
)

MOON = Body(
    name='Moon',
    radius=1738.0,
    spin=Spin(2.3605915e6),
    mass=7.342e22,
)

MARS = Body(
    name='Mars',
    radius=3397.2,
    spin=Spin(88642.66),
    mass=6.4171e23,
)

"""
Predefined orbits, semi-major axes in km
"""
MERCURY_ORBIT = Ellipse(semi_major_axis=5.7909050e7, eccentricity=0.205630)
VENUS_ORBIT = Ellipse(semi_major_axis=1.08208e8, eccentricity=0.006772)
EARTH_ORBIT = Ellipse(semi_major_axis=1.49598023e8, eccentricity=0.0167086)
MOON_ORBIT = Ellipse(semi_major_axis=3.84399e5, eccentricity=0.0549)
MARS_ORBIT = Ellipse(semi_major_axis=2.279392e8, eccentricity=0.0934)


def sun_earth():
    """
    Create the Sun with the Earth orbiting it.

    Returns
    -------
    System
        Two-body heliocentric system
    """
    return System(SUN, secondary=[System(EARTH, EARTH_ORBIT)])


def earth_moon():
    """
    Create the Earth with the Moon orbiting it.

    Returns
    -------
    System
        Two-body geocentric system, the Earth at the origin
    """
    return System(EARTH, secondary=[System(MOON, MOON_ORBIT)])


def inner_solar_system():
    """
    Create the Sun with the four inner planets, the Moon orbiting the Earth.

    Returns
    -------
    System
        Three-level system: Sun, planets, Moon
    """
    return System(SUN, secondary=[
        System(MERCURY, MERCURY_ORBIT),
        System(VENUS, VENUS_ORBIT),
        System(EARTH, EARTH_ORBIT, secondary=[System(MOON, MOON_ORBIT)]),
        System(MARS, MARS_ORBIT),
    ])
