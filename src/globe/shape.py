"""
Shapes and Sampling
===================

A Shape is an ordered sequence of cartesian points produced by sampling a
continuous curve. Any curve able to produce one implements Sample.

Sampling returns exactly the requested number of points. The curve is not
closed, closing it is up to the caller:

>>> trail = orbit.sample(1024).closed()  # 1025 points, last == first
"""

import math
from abc import ABC, abstractmethod
from typing import Iterator, List, Optional
import numpy as np
import pandas as pd
from .cartesian import Coords, Rotation, Translation
from .config import config
from .units import Distance, TWO_PI


class Shape:
    """
    An ordered sequence of points in cartesian space.

    Parameters
    ----------
    points : iterable of Coords
        The points of the shape, in order
    """
    __slots__ = ("_points",)

    def __init__(self, points=()):
        self._points = tuple(points)
        for point in self._points:
            if not isinstance(point, Coords):
                raise TypeError(f"Shape points must be Coords, got {type(point)}")

    @property
    def points(self) -> List[Coords]:
        return list(self._points)

    def closed(self) -> "Shape":
        """New shape whose last point repeats the first one."""
        if not self._points:
            return Shape()
        return Shape(self._points + (self._points[0],))

    def to_numpy(self) -> np.ndarray:
        """
        Points as an array.

        Returns
        -------
        np.ndarray
            Array of shape (len(self), 3) holding x, y, z in km
        """
        if not self._points:
            return np.empty((0, 3))
        return np.vstack([point.to_numpy() for point in self._points])

    def to_dataframe(self) -> pd.DataFrame:
        """
        Export the points to a pandas DataFrame.

        Returns
        -------
        pd.DataFrame
            DataFrame with columns x, y, z [km], one row per point
        """
        array = self.to_numpy()
        data = {
            'x': array[:, 0],
            'y': array[:, 1],
            'z': array[:, 2],
        }
        return pd.DataFrame(data)

    def __len__(self):
        return len(self._points)

    def __getitem__(self, key):
        return self._points[key]

    def __iter__(self) -> Iterator[Coords]:
        return iter(self._points)

    def __eq__(self, other):
        if not isinstance(other, Shape):
            return NotImplemented
        return self._points == other._points

    def __repr__(self):
        return f"Shape({len(self._points)} points)"


class Sample(ABC):
    """A continuous curve that can be discretized into a Shape."""
    __slots__ = ()

    @abstractmethod
    def sample(self, segments: Optional[int] = None) -> Shape:
        """
        Discretize the curve into segments points.

        Parameters
        ----------
        segments : int, optional
            Number of points to produce (default
            config.DEFAULT_SAMPLE_SEGMENTS)
        """


def _segments(segments: Optional[int]) -> int:
    # shared validation for every Sample implementation
    if segments is None:
        segments = config.DEFAULT_SAMPLE_SEGMENTS
    if isinstance(segments, bool) or not isinstance(segments, (int, np.integer)):
        raise TypeError(f"segments must be an integer, got {type(segments)}")
    if segments <= 0:
        raise ValueError(f"segments must be positive, got {segments}")
    return int(segments)


class Arc(Sample):
    """
    A portion of the circumference of a circle.

    The arc starts at `start` and sweeps `angle` radians about `axis`,
    around `center`, following the right hand rule.

    Parameters
    ----------
    center : Coords, optional
        Center of the circumference (default the origin)
    start : Coords, optional
        First point of the arc (default the origin)
    axis : Coords, optional
        Axis about which the arc is swept (default z axis)
    angle : float, optional
        Angle swept by the arc [rad], 2*pi for a full circumference
        (default 0)

    Examples
    --------
    >>> arc = Arc(start=Coords(1, 0, 0), angle=math.pi)
    >>> arc.end()
    Coords(-1.0, 1.2246467991473532e-16, 0.0)
    """
    __slots__ = ("_center", "_start", "_axis", "_angle")

    def __init__(self, center: Coords = None, start: Coords = None,
                 axis: Coords = None, angle: float = 0.0):
        self._center = center if center is not None else Coords()
        self._start = start if start is not None else Coords()
        self._axis = axis if axis is not None else Coords(0.0, 0.0, 1.0)
        if self._axis.magnitude() == 0.0:
            raise ValueError("Arc axis cannot be the zero vector")
        self._angle = float(angle)
        if not math.isfinite(self._angle):
            raise ValueError(f"Arc angle must be finite, got {self._angle}")

    # ========== PROPERTY ACCESS ==========
    @property
    def center(self) -> Coords:
        return self._center

    @property
    def start(self) -> Coords:
        return self._start

    @property
    def axis(self) -> Coords:
        return self._axis

    @property
    def angle(self) -> float:
        return self._angle

    def with_center(self, center: Coords) -> "Arc":
        return Arc(center, self._start, self._axis, self._angle)

    def with_start(self, start: Coords) -> "Arc":
        return Arc(self._center, start, self._axis, self._angle)

    def with_axis(self, axis: Coords) -> "Arc":
        return Arc(self._center, self._start, axis, self._angle)

    def with_angle(self, angle: float) -> "Arc":
        return Arc(self._center, self._start, self._axis, angle)

    # ========== GEOMETRY ==========
    def radius(self) -> Distance:
        """Radius of the arc's circumference."""
        return Distance.km(self._center.distance(self._start))

    def length(self) -> Distance:
        """Length of the arc."""
        return Distance.km(self._center.distance(self._start) * self._angle)

    def perimeter(self) -> Distance:
        """Perimeter of the arc's circumference."""
        return Distance.km(self._center.distance(self._start) * TWO_PI)

    def _rotate_about_center(self, point: Coords, rotation: Rotation) -> Coords:
        to_origin = Translation(-self._center)
        return point.transform(to_origin).transform(rotation).transform(-to_origin)

    def end(self) -> Coords:
        """Last point of the arc."""
        rotation = Rotation(self._axis, self._angle)
        return self._rotate_about_center(self._start, rotation)

    def sample(self, segments: Optional[int] = None) -> Shape:
        """
        Points evenly spaced along the arc, starting at `start`.

        Each point is the previous one rotated by angle/segments about the
        center, so the arc's end point is not included.
        """
        segments = _segments(segments)
        rotation = Rotation(self._axis, self._angle / segments)

        points = [self._start]
        for _ in range(1, segments):
            points.append(self._rotate_about_center(points[-1], rotation))

        return Shape(points)

    def __repr__(self):
        return (f"Arc(center={self._center!r}, start={self._start!r}, "
                f"axis={self._axis!r}, angle={self._angle!r})")
