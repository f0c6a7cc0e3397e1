"""
Ray3 - луч в 3D:
    origin - начало
    direction - направление (не обязательно единичное)

Любая точка луча: P(t) = origin + direction * t, t >= 0.
"""

from __future__ import annotations

from typing import Optional, Tuple, TYPE_CHECKING

import numpy

from geomkit.config import DEFAULT_DTYPE, DEFAULT_TOLERANCES, Tolerances
from geomkit.geomalgo.intersection import (
    RayHit,
    intersect_ray_aabox,
    intersect_ray_aabox_slab,
    intersect_ray_sphere,
)
from geomkit.util import as_vector

if TYPE_CHECKING:
    from geomkit.geombase.aabb import AABox
    from geomkit.geombase.sphere import Sphere


class Ray3:
    __slots__ = ('origin', 'direction')

    def __init__(self, origin: numpy.ndarray = None, direction: numpy.ndarray = None,
                 dtype=DEFAULT_DTYPE):
        if origin is None:
            origin = numpy.zeros(3, dtype=dtype)
        if direction is None:
            direction = numpy.zeros(3, dtype=dtype)
        self.origin = as_vector(origin, 3, dtype)
        self.direction = as_vector(direction, 3, dtype)

    def point_at(self, t: float) -> numpy.ndarray:
        """
        Возвращает точку на луче при параметре t:
        P(t) = origin + direction * t
        """
        return self.origin + self.direction * float(t)

    def intersect_sphere(self, sphere: "Sphere") -> RayHit:
        """Hits with the sphere shell; see intersect_ray_sphere."""
        return intersect_ray_sphere(self, sphere)

    def intersect_aabox_slab(self, box: "AABox",
                             tolerances: Tolerances = DEFAULT_TOLERANCES
                             ) -> Optional[Tuple[float, float]]:
        return intersect_ray_aabox_slab(self, box, tolerances)

    def intersect_aabox(self, box: "AABox",
                        tolerances: Tolerances = DEFAULT_TOLERANCES) -> RayHit:
        return intersect_ray_aabox(self, box, tolerances)

    def copy(self) -> "Ray3":
        return Ray3(self.origin.copy(), self.direction.copy(), self.origin.dtype)

    def __repr__(self):
        return f"Ray3(origin={self.origin}, direction={self.direction})"
