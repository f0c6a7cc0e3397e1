"""Sphere - center point and radius."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy

from geomkit.config import DEFAULT_DTYPE
from geomkit.geomalgo.intersection import sphere_intersects_aabox
from geomkit.geombase.aabb import AABox
from geomkit.util import as_vector

if TYPE_CHECKING:
    from geomkit.geomalgo.intersection import RayHit
    from geomkit.geombase.ray import Ray3


class Sphere:
    """Sphere in 3D space. radius >= 0 is expected but not enforced."""

    __slots__ = ('center', 'radius')

    def __init__(self, center: numpy.ndarray = None, radius: float = 0.0, dtype=DEFAULT_DTYPE):
        if center is None:
            center = numpy.zeros(3, dtype=dtype)
        self.center = as_vector(center, 3, dtype)
        self.radius = float(radius)

    def intersects_aabox(self, box: AABox) -> bool:
        """On an edge IS considered intersection."""
        return sphere_intersects_aabox(self, box)

    def intersect_ray(self, ray: "Ray3") -> "RayHit":
        return ray.intersect_sphere(self)

    def contains(self, point: numpy.ndarray) -> bool:
        d = numpy.asarray(point) - self.center
        return float(numpy.dot(d, d)) <= self.radius * self.radius

    def aabox(self) -> AABox:
        """Bounding box of the sphere."""
        return AABox(self.center - self.radius, self.center + self.radius, self.center.dtype)

    def copy(self) -> "Sphere":
        return Sphere(self.center.copy(), self.radius, self.center.dtype)

    def __eq__(self, other):
        if not isinstance(other, Sphere):
            return NotImplemented
        return numpy.array_equal(self.center, other.center) and self.radius == other.radius

    def __repr__(self):
        return f"Sphere(center={self.center}, radius={self.radius})"
