"""
Circle3 - окружность в 3D: центр, нормаль диска, радиус.

Угол отсчитывается в базисе (u, v) плоскости окружности, построенном
generate_uv(). Нормаль не нормализуется, это забота вызывающего кода.
"""

from __future__ import annotations

import math
from typing import Tuple

import numpy

from geomkit.config import DEFAULT_DTYPE, DEFAULT_TOLERANCES, Tolerances
from geomkit.errors import DegenerateGeometryError
from geomkit.geombase.plane import Plane, generate_uv
from geomkit.util import as_vector, normalize

TWO_PI = 2.0 * math.pi


class Circle3:
    __slots__ = ('center', 'normal', 'radius')

    def __init__(self, center: numpy.ndarray = None, normal: numpy.ndarray = None,
                 radius: float = 0.0, dtype=DEFAULT_DTYPE):
        if center is None:
            center = numpy.zeros(3, dtype=dtype)
        if normal is None:
            normal = numpy.array([0.0, 0.0, 1.0], dtype=dtype)
        self.center = as_vector(center, 3, dtype)
        self.normal = as_vector(normal, 3, dtype)
        self.radius = float(radius)

    def plane(self) -> Plane:
        return Plane.from_normal_point(self.normal, self.center, self.center.dtype)

    def basis(self) -> Tuple[numpy.ndarray, numpy.ndarray]:
        return generate_uv(self.plane())

    def point_from_angle(self, angle: float) -> numpy.ndarray:
        u, v = self.basis()
        return self.center + self.radius * (u * math.cos(angle) + v * math.sin(angle))

    def angle_from_point(self, point: numpy.ndarray,
                         tolerances: Tolerances = DEFAULT_TOLERANCES) -> float:
        """Angle of point around the center, in [0, 2*pi)."""
        try:
            d = normalize(numpy.asarray(point, dtype=self.center.dtype) - self.center, tolerances)
        except DegenerateGeometryError as e:
            raise DegenerateGeometryError("Circle3: the center has no angle") from e
        u, v = self.basis()
        angle = math.atan2(numpy.dot(v, d), numpy.dot(u, d))
        if angle < 0.0:
            angle += TWO_PI
        return angle

    def discretize(self, num_segments: int, a0: float = 0.0, a1: float = 0.0) -> numpy.ndarray:
        """
        num_segments points evenly spaced in angle from a0 to a1.

        a1 < a0 describes an arc across the 0/2pi seam; a0 == a1 (the
        default) means the full circle, so the last point repeats the first.
        """
        if num_segments < 2:
            raise ValueError(f"Circle3.discretize: num_segments must be >= 2, got {num_segments}")

        if a1 < a0:
            a1 += TWO_PI
        delta = a1 - a0
        if delta <= 0.0:
            delta += TWO_PI
        step = delta / (num_segments - 1)

        u, v = self.basis()
        angles = a0 + step * numpy.arange(num_segments)
        offsets = numpy.outer(numpy.cos(angles), u) + numpy.outer(numpy.sin(angles), v)
        return self.center + self.radius * offsets

    def __repr__(self):
        return f"Circle3(center={self.center}, normal={self.normal}, radius={self.radius})"
