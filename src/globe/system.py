"""
System class definition

A System is a node of a tree of celestial bodies: one primary Body, the
orbit it follows around its parent node (None for the root) and the
Systems orbiting it.
"""

import json
from typing import Any, Dict, Iterator, List, Optional, Sequence
from .body import Body
from .orbit import Ellipse, Orbit
from .state import SystemState
from .stats import SystemStats
from .units import Distance
from .utils import TimeLike, validation_error


class System:
    """
    Immutable hierarchy of celestial bodies.

    Each node owns its primary body, the orbit of that body around the
    parent node's body and the nodes orbiting it. Ownership is strictly top
    down, nodes hold no reference to their parent.

    Parameters
    ----------
    primary : Body
        The body at this node
    orbit : Orbit, optional
        Orbit of the primary around the parent's primary, None for the root
    secondary : sequence of System, optional
        Systems orbiting the primary, in order

    Raises
    ------
    ValueError
        If body names are not unique across the tree, or a secondary system
        has no orbit (warnings instead when STRICT_VALIDATION is disabled)
    TypeError
        If arguments are not of the expected types

    Examples
    --------
    >>> sun_earth = System(SUN, secondary=[
    ...     System(EARTH, Ellipse(Distance.ASTRONOMICAL_UNIT, 0.0167)),
    ... ])
    >>> state = sun_earth.state_at(86400.0)
    >>> state.state('Earth').position
    """

    # ========== CONSTRUCTION ==========
    def __init__(self, primary: Body, orbit: Optional[Orbit] = None,
                 secondary: Sequence["System"] = ()):
        secondary = tuple(secondary)
        self._validate_params(primary, orbit, secondary)

        # Store parameters in private attributes for immutability
        self._primary = primary
        self._orbit = orbit
        self._secondary = secondary
        self._stats: Optional[SystemStats] = None

    @staticmethod
    def _validate_params(primary, orbit, secondary):
        """
        Validate System parameters.

        Raises
        ------
        TypeError
            If primary, orbit or secondary have the wrong type
        ValueError
            If a secondary lacks an orbit or body names repeat
        """
        if not isinstance(primary, Body):
            raise TypeError(f"primary must be a Body, got {type(primary)}")
        if orbit is not None and not isinstance(orbit, Orbit):
            raise TypeError(f"orbit must be an Orbit, got {type(orbit)}")

        for subsystem in secondary:
            if not isinstance(subsystem, System):
                raise TypeError(f"secondary must hold Systems, got {type(subsystem)}")
            if subsystem.orbit is None:
                validation_error(
                    f"'{subsystem.primary.name}' orbits '{primary.name}' "
                    f"but has no orbit, it will sit at '{primary.name}'")

        # subsystems are already unique within themselves
        names = [primary.name]
        for subsystem in secondary:
            names.extend(body.name for body in subsystem.bodies())
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            validation_error(f"Body names must be unique, found duplicates: {duplicates}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "System":
        """
        Create a System tree from nested plain mappings.

        Each node is a mapping with a 'body' (see Body.from_dict), an
        optional 'orbit' (see Ellipse.from_dict) and an optional list of
        'secondary' nodes.

        Raises
        ------
        ValueError
            If a node holds unknown keys or lacks a body
        """
        unknown = set(data) - {'body', 'orbit', 'secondary'}
        if unknown:
            raise ValueError(f"Unknown system fields: {sorted(unknown)}")
        if 'body' not in data:
            raise ValueError("System description requires 'body'")

        orbit = data.get('orbit')
        return cls(
            Body.from_dict(data['body']),
            Ellipse.from_dict(orbit) if orbit is not None else None,
            [cls.from_dict(subsystem) for subsystem in data.get('secondary', ())],
        )

    def to_dict(self) -> Dict[str, Any]:
        data = {'body': self._primary.to_dict()}
        if self._orbit is not None:
            if not hasattr(self._orbit, 'to_dict'):
                raise TypeError(f"{type(self._orbit).__name__} cannot be serialized")
            data['orbit'] = self._orbit.to_dict()
        if self._secondary:
            data['secondary'] = [subsystem.to_dict() for subsystem in self._secondary]
        return data

    @classmethod
    def from_json(cls, text: str) -> "System":
        """Create a System tree from a JSON document (see from_dict)."""
        return cls.from_dict(json.loads(text))

    def to_json(self, indent: Optional[int] = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    # ========== PROPERTY ACCESS ==========
    @property
    def primary(self) -> Body:
        return self._primary

    @property
    def orbit(self) -> Optional[Orbit]:
        return self._orbit

    @property
    def secondary(self) -> tuple:
        return self._secondary

    @property
    def name(self) -> str:
        return self._primary.name

    # ========== TREE ACCESS ==========
    def walk(self) -> Iterator["System"]:
        """Iterate over self and every descendant, depth first."""
        yield self
        for subsystem in self._secondary:
            yield from subsystem.walk()

    def bodies(self) -> List[Body]:
        """Every body of the tree, depth first."""
        return [system.primary for system in self.walk()]

    def system(self, name: str) -> Optional["System"]:
        """Subsystem whose primary has the given name, or None if absent."""
        for system in self.walk():
            if system.primary.name == name:
                return system
        return None

    def radius(self) -> Distance:
        """
        Maximum extent of the whole tree.

        The body radius plus its own orbit radius, plus the largest extent
        among the orbiting systems.
        """
        own = self._primary.radius
        if self._orbit is not None:
            own = own + self._orbit.radius()
        if not self._secondary:
            return own
        return own + max(subsystem.radius() for subsystem in self._secondary)

    # ========== STATE & STATISTICS ==========
    def state_at(self, time: TimeLike) -> SystemState:
        """
        State of every body of the tree at the given time.

        Parameters
        ----------
        time : float or timedelta
            Time since epoch [s], may be negative

        Returns
        -------
        SystemState
            State tree mirroring self, with self at the origin
        """
        return SystemState.at(time, self)

    def stats(self, name: Optional[str] = None) -> Optional[SystemStats]:
        """
        Time-independent statistics of the tree, computed once.

        Parameters
        ----------
        name : str, optional
            Return the statistics of the named body only

        Returns
        -------
        SystemStats or None
            None if name is given and no body has it
        """
        if self._stats is None:
            self._stats = SystemStats.from_system(self)
        if name is None:
            return self._stats
        return self._stats.stats(name)

    def summary(self):
        """Print the tree of bodies with their orbital statistics."""
        stats = self.stats()
        self._print_node(stats, 0)

    def _print_node(self, stats: SystemStats, depth: int):
        indent = "  " * depth
        line = f"{indent}{self._primary.name}"
        if self._orbit is not None and stats.orbital_period:
            line += (f": r = {self._orbit.radius().as_km():.6g} km, "
                     f"T = {stats.orbital_period / 86400.0:.6g} d")
        print(line)
        for subsystem, substats in zip(self._secondary, stats.secondary):
            subsystem._print_node(substats, depth + 1)

    # ========== SPECIAL METHODS ==========
    def __eq__(self, other):
        if not isinstance(other, System):
            return NotImplemented
        return (self._primary == other._primary
                and self._orbit == other._orbit
                and self._secondary == other._secondary)

    def __hash__(self):
        return hash((self._primary, self._orbit, self._secondary))

    def __len__(self):
        # number of bodies in the tree
        return sum(1 for _ in self.walk())

    def __repr__(self):
        return (f"System(primary='{self._primary.name}', orbit={self._orbit!r}, "
                f"secondary={len(self._secondary)})")
