"""
Globe: Orbital Mechanics and Geometry Engine

A Python package that computes positions, velocities, rotation angles and
statistics of hierarchical systems of celestial bodies at any instant,
solving Kepler's equation analytically, and samples geometric curves into
point sequences.
"""

# Configuration
from .config import config, temp_config, GlobeConfig

# Units
from .units import (
    Distance, Mass, Velocity, Frequency, Luminosity, Ratio, Radian
)

# Geometry
from .cartesian import Coords, Transform, Translation, Rotation, Scaling
from . import geographic
from .shape import Shape, Sample, Arc

# Orbits and systems
from .orbit import (
    Orbit, Ellipse, Circle, solve_kepler, InvalidOrbitParameters,
    GRAVITATIONAL_CONSTANT
)
from .body import Body, Spin
from .system import System
from .state import BodyPosition, SystemState, SystemStateGenerator
from .stats import HabitableZone, SynodicPeriod, SystemStats, synodic_period

# Commonly-used celestial bodies and systems
from .defaults import SUN, EARTH, MOON, MARS
from .defaults import sun_earth, earth_moon, inner_solar_system

# Package metadata
__version__ = "0.1.0"

# Define what gets imported with "from globe import *"
__all__ = [
    # Configuration
    "config",
    "temp_config",
    "GlobeConfig",
    # Units
    "Distance",
    "Mass",
    "Velocity",
    "Frequency",
    "Luminosity",
    "Ratio",
    "Radian",
    # Geometry
    "Coords",
    "Transform",
    "Translation",
    "Rotation",
    "Scaling",
    "geographic",
    "Shape",
    "Sample",
    "Arc",
    # Orbits and systems
    "Orbit",
    "Ellipse",
    "Circle",
    "solve_kepler",
    "InvalidOrbitParameters",
    "GRAVITATIONAL_CONSTANT",
    "Body",
    "Spin",
    "System",
    "BodyPosition",
    "SystemState",
    "SystemStateGenerator",
    "HabitableZone",
    "SynodicPeriod",
    "synodic_period",
    "SystemStats",
    # Constants
    "SUN",
    "EARTH",
    "MOON",
    "MARS",
    # Factories
    "sun_earth",
    "earth_moon",
    "inner_solar_system",
]
