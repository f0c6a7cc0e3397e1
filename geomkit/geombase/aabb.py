"""AABox - Axis-Aligned Bounding Box in 3D space with an explicit empty state."""

from __future__ import annotations

from enum import Enum

import numpy

from geomkit.config import DEFAULT_DTYPE
from geomkit.util import as_vector


class Intersection(Enum):
    """Relationship of a volume to a box (or a frustum)."""
    INSIDE = "inside"
    INTERSECT = "intersect"
    OUTSIDE = "outside"


class AABox:
    """
    Axis-Aligned Bounding Box in 3D space.

    An empty box keeps sentinel corners (min = +MAX, max = lowest); they
    are not a real volume and must not be read as one.
    """

    __slots__ = ('min', 'max', '_empty')

    def __init__(self, min_point: numpy.ndarray = None, max_point: numpy.ndarray = None,
                 dtype=DEFAULT_DTYPE):
        if min_point is None and max_point is None:
            self.set_empty(dtype)
            return
        if min_point is None or max_point is None:
            raise ValueError("AABox needs both min_point and max_point, or neither")
        self.min = as_vector(min_point, 3, dtype).copy()
        self.max = as_vector(max_point, 3, dtype).copy()
        if numpy.any(self.min > self.max):
            raise ValueError(f"AABox: min_point {self.min} exceeds max_point {self.max}")
        self._empty = False

    def set_empty(self, dtype=None):
        dtype = dtype if dtype is not None else self.min.dtype
        finfo = numpy.finfo(dtype)
        self.min = numpy.full(3, finfo.max, dtype=dtype)
        self.max = numpy.full(3, finfo.min, dtype=dtype)
        self._empty = True

    @property
    def is_empty(self) -> bool:
        return self._empty

    @staticmethod
    def from_points(points: numpy.ndarray, dtype=DEFAULT_DTYPE) -> "AABox":
        """Create an AABox that encompasses a set of points (empty for no points)."""
        points = numpy.asarray(points, dtype=dtype).reshape(-1, 3)
        if len(points) == 0:
            return AABox(dtype=dtype)
        return AABox(points.min(axis=0), points.max(axis=0), dtype)

    def copy(self) -> "AABox":
        result = AABox(dtype=self.min.dtype)
        result.min = self.min.copy()
        result.max = self.max.copy()
        result._empty = self._empty
        return result

    def extend(self, point: numpy.ndarray) -> "AABox":
        """Extend the box to include the point. The first point sets both corners."""
        point = as_vector(point, 3, self.min.dtype)
        if self._empty:
            self.min = point.copy()
            self.max = point.copy()
            self._empty = False
        else:
            self.min = numpy.minimum(self.min, point)
            self.max = numpy.maximum(self.max, point)
        return self

    def extend_box(self, other: "AABox") -> "AABox":
        """In-place union. An empty operand changes nothing."""
        if other.is_empty:
            return self
        if self._empty:
            self.min = other.min.copy()
            self.max = other.max.copy()
            self._empty = False
        else:
            self.min = numpy.minimum(self.min, other.min)
            self.max = numpy.maximum(self.max, other.max)
        return self

    def merge(self, other: "AABox") -> "AABox":
        """Union of this box with another, returned as a new box."""
        return self.copy().extend_box(other)

    def __iadd__(self, other):
        if isinstance(other, AABox):
            return self.extend_box(other)
        return self.extend(other)

    def center(self) -> numpy.ndarray:
        return (self.max + self.min) * 0.5

    def extents(self) -> numpy.ndarray:
        """Edge lengths (max - min); zeros for an empty box."""
        if self._empty:
            return numpy.zeros(3, dtype=self.min.dtype)
        return self.max - self.min

    def longest_edge(self) -> float:
        if self._empty:
            return 0.0
        return float(numpy.max(self.max - self.min))

    def shortest_edge(self) -> float:
        if self._empty:
            return 0.0
        return float(numpy.min(self.max - self.min))

    def corner(self, index: int) -> numpy.ndarray:
        """
        Corner by index 0..7.

        Bit 0 selects X, bit 1 selects Y, bit 2 selects Z;
        a cleared bit takes min on that axis, a set bit takes max.
        """
        if not 0 <= index < 8:
            raise ValueError(f"corner index must be in [0, 8), got {index}")
        return numpy.array([
            self.max[0] if index & 1 else self.min[0],
            self.max[1] if index & 2 else self.min[1],
            self.max[2] if index & 4 else self.min[2],
        ], dtype=self.min.dtype)

    def corners(self) -> numpy.ndarray:
        """The 8 corners as an (8, 3) array, ordered as corner()."""
        return numpy.array([self.corner(i) for i in range(8)])

    def corners_homogeneous(self) -> numpy.ndarray:
        """The 8 corners in homogeneous coordinates, (8, 4)."""
        corners = self.corners()
        return numpy.hstack([corners, numpy.ones((8, 1), dtype=corners.dtype)])

    def contains(self, point: numpy.ndarray) -> bool:
        """Point membership, inclusive on all six faces."""
        if self._empty:
            return False
        point = numpy.asarray(point)
        return bool(numpy.all(self.min <= point) and numpy.all(point <= self.max))

    def intersects(self, other: "AABox") -> bool:
        """Look for a separating axis on each box for each axis."""
        if self._empty or other.is_empty:
            return False
        for i in range(3):
            if self.min[i] > other.max[i] or other.min[i] > self.max[i]:
                return False
        return True

    def classify(self, other: "AABox") -> Intersection:
        """
        INSIDE if other lies entirely within this box, INTERSECT if they
        overlap, OUTSIDE if separated or either box is empty.
        """
        if not self.intersects(other):
            return Intersection.OUTSIDE
        if numpy.all(self.min <= other.min) and numpy.all(other.max <= self.max):
            return Intersection.INSIDE
        return Intersection.INTERSECT

    def project_point(self, point: numpy.ndarray) -> numpy.ndarray:
        """Project a point onto the box with clamping."""
        from geomkit.geomalgo.project import project_point_on_aabox

        return project_point_on_aabox(point, self.min, self.max)

    def is_equal(self, other: "AABox", eps: float = 1e-6) -> bool:
        if eps < 0:
            raise ValueError("eps must be >= 0")
        return (self._empty == other.is_empty
                and numpy.allclose(self.min, other.min, rtol=0.0, atol=eps)
                and numpy.allclose(self.max, other.max, rtol=0.0, atol=eps))

    def __eq__(self, other):
        if not isinstance(other, AABox):
            return NotImplemented
        return (self._empty == other.is_empty
                and numpy.array_equal(self.min, other.min)
                and numpy.array_equal(self.max, other.max))

    def __repr__(self):
        if self._empty:
            return "AABox(empty)"
        return f"AABox(min={self.min}, max={self.max})"
