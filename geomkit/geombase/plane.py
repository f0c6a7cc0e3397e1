"""
Plane - плоскость в 3D пространстве.

Все точки P плоскости удовлетворяют уравнению dot(P, normal) = offset.
Нормаль предполагается единичной.

Внимание: offset = -D, где D - константа из записи n·P + D = 0,
встречающейся в учебниках. Знак отличается.
"""

from __future__ import annotations

from typing import Optional, Tuple

import numpy

from geomkit.config import DEFAULT_DTYPE, DEFAULT_TOLERANCES, Tolerances
from geomkit.errors import DegenerateGeometryError
from geomkit.util import as_vector, lensq, normalize


class Plane:
    """Plane with unit normal and offset such that dot(P, normal) == offset."""

    __slots__ = ('normal', 'offset')

    def __init__(self, normal: numpy.ndarray = None, offset: float = 0.0, dtype=DEFAULT_DTYPE):
        if normal is None:
            normal = numpy.zeros(3, dtype=dtype)
        self.normal = as_vector(normal, 3, dtype)
        self.offset = float(offset)

    @staticmethod
    def from_points(p1, p2, p3, dtype=DEFAULT_DTYPE,
                    tolerances: Tolerances = DEFAULT_TOLERANCES) -> "Plane":
        """
        Plane through three points, normal = normalize(cross(p2 - p1, p3 - p1)).

        Collinear points raise DegenerateGeometryError.
        """
        p1 = as_vector(p1, 3, dtype)
        p2 = as_vector(p2, 3, dtype)
        p3 = as_vector(p3, 3, dtype)
        cross = numpy.cross(p2 - p1, p3 - p1)
        try:
            normal = normalize(cross, tolerances)
        except DegenerateGeometryError as e:
            raise DegenerateGeometryError("Plane.from_points: points are collinear") from e
        return Plane(normal, float(numpy.dot(p1, normal)), dtype)

    @staticmethod
    def from_normal_point(normal, point, dtype=DEFAULT_DTYPE) -> "Plane":
        """Plane with the given normal passing through point. The normal is used as is."""
        normal = as_vector(normal, 3, dtype)
        point = as_vector(point, 3, dtype)
        return Plane(normal, float(numpy.dot(point, normal)), dtype)

    def copy(self) -> "Plane":
        return Plane(self.normal.copy(), self.offset, self.normal.dtype)

    def distance_to(self, point: numpy.ndarray):
        """
        Signed distance, positive on the side the normal points to.

        Accepts a single point (3,) or an array of points (N, 3).
        """
        return numpy.asarray(point) @ self.normal - self.offset

    def closest_point(self, point: numpy.ndarray) -> numpy.ndarray:
        """Orthogonal projection of point onto the plane."""
        point = numpy.asarray(point, dtype=self.normal.dtype)
        return point - self.normal * self.distance_to(point)

    def flipped(self) -> "Plane":
        return Plane(-self.normal, -self.offset, self.normal.dtype)

    def generate_u(self) -> numpy.ndarray:
        return generate_u(self)

    def generate_uv(self) -> Tuple[numpy.ndarray, numpy.ndarray]:
        return generate_uv(self)

    def project(self, point: numpy.ndarray) -> numpy.ndarray:
        """Plane-local 2D coordinates of point in the (u, v) basis."""
        from geomkit.geomalgo.project import project

        u, v = self.generate_uv()
        return project(u, v, point)

    def unproject(self, uv: numpy.ndarray) -> numpy.ndarray:
        """3D point on the plane for plane-local coordinates uv."""
        from geomkit.geomalgo.project import unproject

        u, v = self.generate_uv()
        return unproject(self, u, v, uv)

    def intersect(self, other: "Plane",
                  tolerances: Tolerances = DEFAULT_TOLERANCES
                  ) -> Optional[Tuple[numpy.ndarray, numpy.ndarray]]:
        """Line of intersection as (point, direction), None for parallel planes."""
        from geomkit.geomalgo.intersection import intersect_planes

        return intersect_planes(self, other, tolerances)

    def is_equal(self, other: "Plane", eps: float = 1e-6) -> bool:
        return (numpy.allclose(self.normal, other.normal, rtol=0.0, atol=eps)
                and abs(self.offset - other.offset) <= eps)

    def __eq__(self, other):
        if not isinstance(other, Plane):
            return NotImplemented
        return numpy.array_equal(self.normal, other.normal) and self.offset == other.offset

    def __repr__(self):
        return f"Plane(normal={self.normal}, offset={self.offset})"


def generate_u(plane: Plane, tolerances: Tolerances = DEFAULT_TOLERANCES) -> numpy.ndarray:
    """
    First in-plane basis vector.

    The helper axis is chosen by comparing |n.x| and |n.z| so that the
    cross product never degenerates for a normal close to an axis.
    """
    n = plane.normal
    if lensq(n) < tolerances.degenerate_length * tolerances.degenerate_length:
        raise DegenerateGeometryError("cannot build a basis for a plane with zero normal")
    if abs(n[0]) > abs(n[2]):
        u = numpy.array([-n[1], n[0], 0.0], dtype=n.dtype)
    else:
        u = numpy.array([0.0, -n[2], n[1]], dtype=n.dtype)
    return normalize(u, tolerances)


def generate_uv(plane: Plane, tolerances: Tolerances = DEFAULT_TOLERANCES
                ) -> Tuple[numpy.ndarray, numpy.ndarray]:
    """Orthonormal in-plane basis (u, v) with v = cross(u, normal)."""
    u = generate_u(plane, tolerances)
    v = numpy.cross(u, plane.normal)
    return u, v
