"""
Cartesian Coordinates and Transforms
====================================

Coords is an immutable 3-vector, used both as a point and as a
displacement. Geometric transforms produce new Coords and are composed by
chaining calls in application order:

>>> p = Coords(0, 1, 0)
>>> p.transform(Rotation(axis=Coords(1, 0, 0), theta=math.pi / 2))
Coords(0.0, 6.123233995736766e-17, 1.0)

Rotating about a pivot other than the origin takes three steps: move the
pivot to the origin, rotate, then move it back:

>>> to_origin = Translation(-pivot)
>>> p.transform(to_origin).transform(rotation).transform(-to_origin)

Distances expressed through Coords are in kilometers.
"""

import math
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING
import numpy as np
from .config import config
from .units import Radian
from .utils import hash_key

if TYPE_CHECKING:
    from . import geographic


class Coords:
    """
    Coordinates according to the cartesian system of coordinates.

    Coords is immutable, the with_* methods and every transform return a
    new instance.

    Parameters
    ----------
    x, y, z : float, optional
        Components of the vector (default 0)
    """
    __slots__ = ("_vector",)

    # ========== CONSTRUCTION ==========
    def __init__(self, x: float = 0.0, y: float = 0.0, z: float = 0.0):
        vector = np.array([x, y, z], dtype=float)
        if not np.all(np.isfinite(vector)):
            raise ValueError(f"Coords contain NaN or Inf: {vector}")
        vector.flags.writeable = False
        self._vector = vector

    @classmethod
    def from_array(cls, array) -> "Coords":
        """
        Create Coords from any 3-element array-like.

        Raises
        ------
        ValueError
            If the array does not hold exactly 3 elements
        """
        array = np.asarray(array, dtype=float).reshape(-1)
        if array.shape != (3,):
            raise ValueError(f"Coords require 3 components, got {array.shape[0]}")
        return cls(*array)

    @classmethod
    def from_geographic(cls, point: "geographic.Coords") -> "Coords":
        """
        Compute the cartesian position of a geographic point as specified by
        the spherical coordinate system. A zero altitude is taken as the unit
        sphere.
        """
        radial_distance = float(point.altitude) or 1.0
        theta = math.pi / 2 - float(point.latitude)
        phi = float(point.longitude)

        theta_sin, theta_cos = _precise_sin_cos(theta)
        phi_sin, phi_cos = _precise_sin_cos(phi)

        return cls(
            radial_distance * theta_sin * phi_cos,
            radial_distance * theta_sin * phi_sin,
            radial_distance * theta_cos,
        )

    def to_geographic(self) -> "geographic.Coords":
        """Geographic representation of this point."""
        from .geographic import Coords as GeographicCoords
        return GeographicCoords.from_cartesian(self)

    # ========== PROPERTY ACCESS ==========
    @property
    def x(self) -> float:
        return float(self._vector[0])

    @property
    def y(self) -> float:
        return float(self._vector[1])

    @property
    def z(self) -> float:
        return float(self._vector[2])

    def with_x(self, x: float) -> "Coords":
        return Coords(x, self.y, self.z)

    def with_y(self, y: float) -> "Coords":
        return Coords(self.x, y, self.z)

    def with_z(self, z: float) -> "Coords":
        return Coords(self.x, self.y, z)

    def to_numpy(self) -> np.ndarray:
        """Read-only array [x, y, z]."""
        return self._vector

    # ========== VECTOR OPERATIONS ==========
    def magnitude(self) -> float:
        """Distance of the point relative to the origin of coordinates."""
        return float(np.linalg.norm(self._vector))

    def unit(self) -> "Coords":
        """
        Unit vector with the direction of self.

        Raises
        ------
        ValueError
            If self is the zero vector
        """
        magnitude = self.magnitude()
        if magnitude == 0.0:
            raise ValueError("Cannot normalize the zero vector")
        return Coords.from_array(self._vector / magnitude)

    def distance(self, other: "Coords") -> float:
        """Euclidean distance between self and the given point."""
        return float(np.linalg.norm(self._vector - other._vector))

    def dot(self, other: "Coords") -> float:
        return float(np.dot(self._vector, other._vector))

    def cross(self, other: "Coords") -> "Coords":
        return Coords.from_array(np.cross(self._vector, other._vector))

    def transform(self, transformation: "Transform") -> "Coords":
        """Perform the given transformation over self."""
        return transformation.transform(self)

    # ========== SPECIAL METHODS ==========
    def __add__(self, other):
        if not isinstance(other, Coords):
            return NotImplemented
        return Coords.from_array(self._vector + other._vector)

    def __sub__(self, other):
        if not isinstance(other, Coords):
            return NotImplemented
        return Coords.from_array(self._vector - other._vector)

    def __neg__(self):
        return Coords.from_array(-self._vector)

    def __mul__(self, factor):
        if isinstance(factor, Coords):
            return NotImplemented
        return Coords.from_array(self._vector * float(factor))

    __rmul__ = __mul__

    def __truediv__(self, divisor):
        if isinstance(divisor, Coords):
            return NotImplemented
        return Coords.from_array(self._vector / float(divisor))

    def __len__(self):
        return 3

    def __getitem__(self, key):
        return self._vector[key]

    def __iter__(self):
        return iter(self._vector.tolist())

    def __eq__(self, other):
        # equality within the configured tolerance
        if not isinstance(other, Coords):
            return NotImplemented
        return bool(np.allclose(self._vector, other._vector,
                                rtol=config.EQUALITY_RTOL,
                                atol=config.EQUALITY_ATOL))

    def __hash__(self):
        rounded = tuple(hash_key(x) for x in self._vector.tolist())
        return hash(rounded)

    def __repr__(self):
        return f"Coords({self.x!r}, {self.y!r}, {self.z!r})"


def _precise_sin_cos(rad: float):
    """Sine and cosine, exact at the quadrant boundaries."""
    if abs(rad) == math.pi / 2:
        return math.copysign(1.0, rad), 0.0
    elif abs(rad) == math.pi:
        return 0.0, -1.0
    elif rad == 0.0:
        return 0.0, 1.0
    return math.sin(rad), math.cos(rad)


# ========== TRANSFORMS ==========
class Transform(ABC):
    """A geometric transformation over Coords."""
    __slots__ = ()

    @abstractmethod
    def transform(self, point: Coords) -> Coords:
        """Perform the geometric transformation over the given point."""

    def __call__(self, point: Coords) -> Coords:
        return self.transform(point)


class Translation(Transform):
    """
    Shift points by a vector.

    See https://en.wikipedia.org/wiki/Translation_(geometry)

    Parameters
    ----------
    vector : Coords, optional
        Displacement applied to every point (default the zero vector)
    """
    __slots__ = ("_vector",)

    def __init__(self, vector: Coords = None):
        self._vector = vector if vector is not None else Coords()

    @property
    def vector(self) -> Coords:
        return self._vector

    def with_vector(self, vector: Coords) -> "Translation":
        return Translation(vector)

    @property
    def matrix(self) -> np.ndarray:
        """Homogeneous 4x4 translation matrix."""
        matrix = np.eye(4)
        matrix[:3, 3] = self._vector.to_numpy()
        return matrix

    def transform(self, point: Coords) -> Coords:
        return point + self._vector

    def __neg__(self):
        return Translation(-self._vector)

    def __add__(self, other):
        if not isinstance(other, Translation):
            return NotImplemented
        return Translation(self._vector + other._vector)

    def __eq__(self, other):
        if not isinstance(other, Translation):
            return NotImplemented
        return self._vector == other._vector

    def __hash__(self):
        return hash(("Translation", self._vector))

    def __repr__(self):
        return f"Translation({self._vector!r})"


class Rotation(Transform):
    """
    Rotate points by an angle about an axis through the origin.

    Being v a vector in R3 and k a unit vector describing an axis of
    rotation about which v rotates by an angle theta, the rotation follows
    the right hand rule (Rodrigues' rotation formula). See
    https://en.wikipedia.org/wiki/Rotation_matrix

    Parameters
    ----------
    axis : Coords, optional
        Axis of rotation, normalized on construction (default z axis)
    theta : float or Radian, optional
        Angle of rotation [rad] (default 0)

    Raises
    ------
    ValueError
        If axis is the zero vector

    Examples
    --------
    >>> Rotation(Coords(1, 0, 0), math.pi / 2).transform(Coords(0, 1, 0))
    Coords(0.0, 6.123233995736766e-17, 1.0)
    """
    __slots__ = ("_axis", "_theta")

    def __init__(self, axis: Coords = None, theta=0.0):
        axis = axis if axis is not None else Coords(0.0, 0.0, 1.0)
        if axis.magnitude() == 0.0:
            raise ValueError("Rotation axis cannot be the zero vector")
        self._axis = axis.unit()
        self._theta = theta if isinstance(theta, Radian) else Radian(theta)

    @property
    def axis(self) -> Coords:
        """Unit axis of rotation."""
        return self._axis

    @property
    def theta(self) -> Radian:
        return self._theta

    def with_axis(self, axis: Coords) -> "Rotation":
        return Rotation(axis, self._theta)

    def with_theta(self, theta) -> "Rotation":
        return Rotation(self._axis, theta)

    @property
    def matrix(self) -> np.ndarray:
        """3x3 rotation matrix."""
        sin_theta = self._theta.sin()
        cos_theta = self._theta.cos()
        sub_1_cos_theta = 1.0 - cos_theta
        x, y, z = self._axis

        return np.array([
            [cos_theta + x**2 * sub_1_cos_theta,
             x * y * sub_1_cos_theta - z * sin_theta,
             x * z * sub_1_cos_theta + y * sin_theta],
            [y * x * sub_1_cos_theta + z * sin_theta,
             cos_theta + y**2 * sub_1_cos_theta,
             y * z * sub_1_cos_theta - x * sin_theta],
            [z * x * sub_1_cos_theta - y * sin_theta,
             z * y * sub_1_cos_theta + x * sin_theta,
             cos_theta + z**2 * sub_1_cos_theta],
        ])

    def transform(self, point: Coords) -> Coords:
        return Coords.from_array(self.matrix @ point.to_numpy())

    def __neg__(self):
        return Rotation(self._axis, -self._theta)

    def __repr__(self):
        return f"Rotation(axis={self._axis!r}, theta={self._theta.as_float()!r})"


class Scaling(Transform):
    """
    Scale points uniformly about the origin.

    See https://en.wikipedia.org/wiki/Scaling_(geometry)
    """
    __slots__ = ("_factor",)

    def __init__(self, factor: float = 1.0):
        self._factor = float(factor)

    @property
    def factor(self) -> float:
        return self._factor

    def with_factor(self, factor: float) -> "Scaling":
        return Scaling(factor)

    @property
    def matrix(self) -> np.ndarray:
        return np.eye(3) * self._factor

    def transform(self, point: Coords) -> Coords:
        return Coords.from_array(self.matrix @ point.to_numpy())

    def __repr__(self):
        return f"Scaling({self._factor!r})"
