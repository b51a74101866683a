"""
Time-dependent state of a System tree.

A SystemState mirrors a System node at a given instant: spin angle,
absolute position, orbital phase angle and orbital speed of its body, plus
the states of the bodies orbiting it in the same order as the source tree.
States are plain values, recomputed on every call and never mutated.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterator, Optional, Tuple
import pandas as pd
from .body import Body
from .cartesian import Coords, Translation
from .units import Radian, Velocity
from .utils import TimeLike, as_seconds

if TYPE_CHECKING:
    from .system import System


@dataclass(frozen=True)
class BodyPosition:
    """
    A body together with its already-resolved absolute position, the
    reference frame of every body orbiting it.
    """
    body: Body
    position: Coords


@dataclass(frozen=True)
class SystemState:
    """
    Immutable state of a System node at a given time.

    Attributes
    ----------
    body : str
        Name of the body this state belongs to
    rotation : Radian
        Spin angle of the body about its own axis
    position : Coords
        Absolute position of the body [km]
    theta : Radian
        Orbital phase angle, zero for the root
    velocity : Velocity
        Orbital speed, zero for the root
    secondary : tuple of SystemState
        States of the orbiting bodies
    """
    body: str
    rotation: Radian
    position: Coords
    theta: Radian
    velocity: Velocity
    secondary: Tuple["SystemState", ...] = ()

    @classmethod
    def at(cls, time: TimeLike, system: "System",
           parent: Optional[BodyPosition] = None) -> "SystemState":
        """
        Resolve the state of system, and of everything orbiting it, at time.

        Parameters
        ----------
        time : float or timedelta
            Time since epoch [s]
        system : System
            The node to resolve
        parent : BodyPosition, optional
            The orbited body and its absolute position, None for the root

        Returns
        -------
        SystemState
        """
        orbit = system.orbit
        if parent is None:
            position = Coords()
            theta = Radian.ZERO
            velocity = Velocity.ZERO
        elif orbit is None:
            # only reachable with STRICT_VALIDATION disabled
            position = parent.position
            theta = Radian.ZERO
            velocity = Velocity.ZERO
        else:
            # solved around the occupied focus, then moved onto the parent
            position = (orbit.position_at(time, parent.body)
                        .transform(Translation(parent.position))
                        .transform(Translation(orbit.focus())))
            theta = orbit.theta_at(time, parent.body)
            velocity = orbit.velocity_at(time, parent.body)

        reference = BodyPosition(system.primary, position)
        secondary = tuple(cls.at(time, subsystem, reference)
                          for subsystem in system.secondary)

        return cls(
            body=system.primary.name,
            rotation=system.primary.spin_at(time),
            position=position,
            theta=theta,
            velocity=velocity,
            secondary=secondary,
        )

    def state(self, name: str) -> Optional["SystemState"]:
        """State of the body with the given name, or None if absent."""
        for state in self.walk():
            if state.body == name:
                return state
        return None

    def walk(self) -> Iterator["SystemState"]:
        """Iterate over self and every descendant, depth first."""
        yield self
        for state in self.secondary:
            yield from state.walk()

    def to_dataframe(self) -> pd.DataFrame:
        """
        Export the state tree to a pandas DataFrame.

        Returns
        -------
        pd.DataFrame
            One row per body, in depth first order, with columns body,
            parent, x, y, z [km], rotation, theta [rad] and velocity [m/s]
        """
        rows = []
        pending = [(self, None)]
        while pending:
            state, parent = pending.pop()
            rows.append({
                'body': state.body,
                'parent': parent,
                'x': state.position.x,
                'y': state.position.y,
                'z': state.position.z,
                'rotation': state.rotation.as_float(),
                'theta': state.theta.as_float(),
                'velocity': state.velocity.as_meters_sec(),
            })
            pending.extend((child, state.body) for child in reversed(state.secondary))

        return pd.DataFrame(rows, columns=['body', 'parent', 'x', 'y', 'z',
                                           'rotation', 'theta', 'velocity'])


class SystemStateGenerator:
    """
    Iterator over the states of a system at evenly spaced times.

    Yields system.state_at(start), system.state_at(start + step), and so on
    without end. A negative step runs backwards in time.

    Parameters
    ----------
    system : System
        The system to resolve
    step : float or timedelta
        Time between consecutive states [s], must not be zero
    start : float or timedelta, optional
        Time of the first state [s] (default 0)

    Examples
    --------
    >>> from itertools import islice
    >>> hourly = SystemStateGenerator(system, step=3600.0)
    >>> states = list(islice(hourly, 24))
    """

    def __init__(self, system: "System", step: TimeLike, start: TimeLike = 0.0):
        self._system = system
        self._step = as_seconds(step)
        if self._step == 0.0:
            raise ValueError("SystemStateGenerator step must not be zero")
        self._start = as_seconds(start)
        self._count = 0

    @property
    def time(self) -> float:
        """Time of the next state to be yielded [s]."""
        # start + n*step, never a running sum
        return self._start + self._count * self._step

    @property
    def step(self) -> float:
        return self._step

    def __iter__(self):
        return self

    def __next__(self) -> SystemState:
        state = self._system.state_at(self.time)
        self._count += 1
        return state
