"""
AABox2 - ограничивающий прямоугольник на плоскости.

В отличие от AABox (3D) отдельного флага пустоты нет: прямоугольник
считается нулевым (null), когда min.x > max.x или min.y > max.y.
"""

from __future__ import annotations

import math

import numpy

from geomkit.config import DEFAULT_DTYPE
from geomkit.geombase.aabb import Intersection
from geomkit.util import as_vector


class AABox2:
    """Axis-aligned box in 2D. Null until the first extend()."""

    __slots__ = ('min', 'max')

    def __init__(self, p1: numpy.ndarray = None, p2: numpy.ndarray = None, dtype=DEFAULT_DTYPE):
        self.min = numpy.zeros(2, dtype=dtype)
        self.max = numpy.zeros(2, dtype=dtype)
        self.set_null()
        if p1 is not None:
            self.extend(p1)
        if p2 is not None:
            self.extend(p2)

    @staticmethod
    def from_center_radius(center: numpy.ndarray, radius: float, dtype=DEFAULT_DTYPE) -> "AABox2":
        box = AABox2(dtype=dtype)
        box.extend_circle(center, radius)
        return box

    def set_null(self):
        finfo = numpy.finfo(self.min.dtype)
        self.min = numpy.full(2, finfo.max, dtype=self.min.dtype)
        self.max = numpy.full(2, finfo.min, dtype=self.max.dtype)

    def is_null(self) -> bool:
        return bool(self.min[0] > self.max[0] or self.min[1] > self.max[1])

    def copy(self) -> "AABox2":
        result = AABox2(dtype=self.min.dtype)
        result.min = self.min.copy()
        result.max = self.max.copy()
        return result

    def _vec(self, v) -> numpy.ndarray:
        return as_vector(v, 2, self.min.dtype)

    def extend(self, point: numpy.ndarray) -> "AABox2":
        point = self._vec(point)
        if self.is_null():
            self.min = point.copy()
            self.max = point.copy()
        else:
            self.min = numpy.minimum(point, self.min)
            self.max = numpy.maximum(point, self.max)
        return self

    def extend_box(self, other: "AABox2") -> "AABox2":
        """
        Grow to encompass other.

        On a null box the sentinel corners would corrupt the min/max
        comparison, so the result is reset to exactly the operand.
        """
        if other.is_null():
            return self
        if self.is_null():
            self.min = other.min.copy()
            self.max = other.max.copy()
            return self
        self.min = numpy.minimum(self.min, other.min)
        self.max = numpy.maximum(self.max, other.max)
        return self

    def __iadd__(self, other):
        if isinstance(other, AABox2):
            return self.extend_box(other)
        return self.extend(other)

    def extend_circle(self, center: numpy.ndarray, radius: float) -> "AABox2":
        """Grow to include a circle centered at center."""
        center = self._vec(center)
        self.extend(center - radius)
        self.extend(center + radius)
        return self

    def extend_disk(self, center: numpy.ndarray, normal: numpy.ndarray, radius: float) -> "AABox2":
        """
        Grow to include a disk of the given radius lying across normal.

        In 2D the disk is the segment through center perpendicular to normal.
        """
        center = self._vec(center)
        normal = self._vec(normal)
        n = math.hypot(normal[0], normal[1])
        if n < 1e-12:
            return self.extend(center)
        nx, ny = normal / n
        extent = numpy.array([
            math.sqrt(max(0.0, 1.0 - nx * nx)) * radius,
            math.sqrt(max(0.0, 1.0 - ny * ny)) * radius,
        ], dtype=self.min.dtype)
        self.extend(center - extent)
        self.extend(center + extent)
        return self

    def pad(self, value: float) -> "AABox2":
        """Extend the box on all sides by value. A null box stays null."""
        if not self.is_null():
            self.min = self.min - value
            self.max = self.max + value
        return self

    def translate(self, v: numpy.ndarray) -> "AABox2":
        if not self.is_null():
            v = self._vec(v)
            self.min = self.min + v
            self.max = self.max + v
        return self

    def scale(self, scale: numpy.ndarray, origin: numpy.ndarray) -> "AABox2":
        """Scale around origin. A zero component would collapse the box and is rejected."""
        scale = self._vec(scale)
        if numpy.any(scale == 0):
            raise ValueError(f"AABox2.scale: scale components must be non-zero, got {scale}")
        if not self.is_null():
            origin = self._vec(origin)
            a = (self.min - origin) * scale + origin
            b = (self.max - origin) * scale + origin
            self.min = numpy.minimum(a, b)
            self.max = numpy.maximum(a, b)
        return self

    def center(self) -> numpy.ndarray:
        return (self.min + self.max) * 0.5

    def diagonal(self) -> numpy.ndarray:
        """max - min, or zeros for a null box."""
        if self.is_null():
            return numpy.zeros(2, dtype=self.min.dtype)
        return self.max - self.min

    def extents(self) -> numpy.ndarray:
        return self.diagonal()

    def longest_edge(self) -> float:
        return float(numpy.max(self.diagonal()))

    def shortest_edge(self) -> float:
        return float(numpy.min(self.diagonal()))

    def overlaps(self, other: "AABox2") -> bool:
        if self.is_null() or other.is_null():
            return False
        if other.min[0] > self.max[0] or other.max[0] < self.min[0]:
            return False
        if other.min[1] > self.max[1] or other.max[1] < self.min[1]:
            return False
        return True

    def classify(self, other: "AABox2") -> Intersection:
        """INSIDE / INTERSECT / OUTSIDE; OUTSIDE when either box is null."""
        if not self.overlaps(other):
            return Intersection.OUTSIDE
        if numpy.all(self.min <= other.min) and numpy.all(other.max <= self.max):
            return Intersection.INSIDE
        return Intersection.INTERSECT

    def contains(self, point: numpy.ndarray) -> bool:
        point = numpy.asarray(point)
        return bool(self.min[0] <= point[0] <= self.max[0]
                    and self.min[1] <= point[1] <= self.max[1])

    def corner(self, index: int) -> numpy.ndarray:
        """Corner 0..3: bit 0 selects X, bit 1 selects Y; a set bit takes max."""
        if not 0 <= index < 4:
            raise ValueError(f"corner index must be in [0, 4), got {index}")
        return numpy.array([
            self.max[0] if index & 1 else self.min[0],
            self.max[1] if index & 2 else self.min[1],
        ], dtype=self.min.dtype)

    def __eq__(self, other):
        if not isinstance(other, AABox2):
            return NotImplemented
        return numpy.array_equal(self.min, other.min) and numpy.array_equal(self.max, other.max)

    def __repr__(self):
        if self.is_null():
            return "AABox2(null)"
        return f"AABox2(min={self.min}, max={self.max})"
