"""
Intersection tests between kernel primitives.

Failure is reported by value, never by exception:
    - ray/sphere and ray/box return a RayHit with count 0, 1 or 2;
      t0/t1 are None when count == 0;
    - the slab test and plane/plane return None when there is no answer.

Degenerate inputs (zero-length ray direction for ray/sphere) raise
DegenerateGeometryError instead of producing NaN.
"""

from __future__ import annotations

import math
from typing import List, Optional, Tuple, TYPE_CHECKING

import numpy

from geomkit import log
from geomkit.config import DEFAULT_TOLERANCES, Tolerances
from geomkit.errors import DegenerateGeometryError
from geomkit.util import lensq

if TYPE_CHECKING:
    from geomkit.geombase.aabb import AABox
    from geomkit.geombase.plane import Plane
    from geomkit.geombase.ray import Ray3
    from geomkit.geombase.sphere import Sphere


class RayHit:
    """
    Результат пересечения луча с объемом.

    count: число пересечений с поверхностью (0, 1, 2)
    t0, t1: параметры на луче; точка = origin + direction * t.
            При count == 1 оба равны единственному пересечению.
            При count == 0 оба None.
    """

    __slots__ = ('count', 't0', 't1')

    def __init__(self, count: int = 0, t0: Optional[float] = None, t1: Optional[float] = None):
        self.count = count
        self.t0 = t0
        self.t1 = t1

    def __bool__(self):
        return self.count > 0

    def params(self) -> List[float]:
        """The distinct hit parameters, nearest first."""
        if self.count == 0:
            return []
        if self.count == 1:
            return [self.t0]
        return [self.t0, self.t1]

    def points(self, ray: "Ray3") -> List[numpy.ndarray]:
        return [ray.point_at(t) for t in self.params()]

    def __eq__(self, other):
        if not isinstance(other, RayHit):
            return NotImplemented
        return (self.count, self.t0, self.t1) == (other.count, other.t0, other.t1)

    def __repr__(self):
        return f"RayHit(count={self.count}, t0={self.t0}, t1={self.t1})"


def intersect_ray_sphere(ray: "Ray3", sphere: "Sphere") -> RayHit:
    """
    Пересечение луча с оболочкой сферы (не с объемом).

    Квадратное уравнение Q(t) = a*t^2 + 2*b*t + c:
        a = |D|^2
        b = dot(O - C, D)
        c = |O - C|^2 - r^2
    Направление не нормализуется, t измеряется в длинах direction.
    """
    direction = ray.direction
    a = lensq(direction)
    if a == 0.0:
        raise DegenerateGeometryError("ray/sphere: ray direction has zero length")

    offset = ray.origin - sphere.center
    b = float(numpy.dot(offset, direction))
    c = lensq(offset) - sphere.radius * sphere.radius

    discriminant = b * b - a * c
    if discriminant < 0.0:
        return RayHit()

    if discriminant > 0.0:
        root = math.sqrt(discriminant)
        inv_a = 1.0 / a
        t0 = (-b - root) * inv_a
        t1 = (-b + root) * inv_a

        if t0 >= 0.0:
            return RayHit(2, t0, t1)
        if t1 >= 0.0:
            # начало луча внутри сферы, остается только выход
            return RayHit(1, t1, t1)
        return RayHit()

    # касание
    t0 = -b / a
    if t0 >= 0.0:
        return RayHit(1, t0, t0)
    return RayHit()


def intersect_ray_aabox_slab(ray: "Ray3", box: "AABox",
                             tolerances: Tolerances = DEFAULT_TOLERANCES
                             ) -> Optional[Tuple[float, float]]:
    """
    Slab test (Kay-Kajiya, Geometric Tools for Computer Graphics, pp. 626-630).

    Returns (t_in, t_out), the parameters where the ray enters and exits
    the box, or None. t_in is negative when the origin is inside the box.
    A direction parallel to all three slabs has no finite answer and raises
    DegenerateGeometryError.
    """
    if box.is_empty:
        return None

    origin = ray.origin
    direction = ray.direction
    if numpy.all(numpy.abs(direction) < tolerances.ray_parallel):
        raise DegenerateGeometryError("ray/box: ray direction is below ray_parallel on every axis")
    t_in = -math.inf
    t_out = math.inf

    for i in range(3):
        if abs(direction[i]) < tolerances.ray_parallel:
            # луч параллелен паре плоскостей
            if origin[i] < box.min[i] or origin[i] > box.max[i]:
                log.debug(f"ray/box: ray parallel to axis {i} slab and outside it")
                return None
            continue

        t0 = (box.min[i] - origin[i]) / direction[i]
        t1 = (box.max[i] - origin[i]) / direction[i]
        if t0 > t1:
            t0, t1 = t1, t0

        if t0 > t_in:
            t_in = float(t0)
        if t1 < t_out:
            t_out = float(t1)

        if t_in > t_out or t_out < 0.0:
            return None

    return t_in, t_out


def intersect_ray_aabox(ray: "Ray3", box: "AABox",
                        tolerances: Tolerances = DEFAULT_TOLERANCES) -> RayHit:
    """
    Ray/box crossings.

    With the origin inside the box only the exit is reported (count 1,
    t0 == t1 == t_out); otherwise both entry and exit (count 2).
    """
    slab = intersect_ray_aabox_slab(ray, box, tolerances)
    if slab is None:
        return RayHit()
    t_in, t_out = slab
    if t_in < 0.0:
        return RayHit(1, t_out, t_out)
    return RayHit(2, t_in, t_out)


def sphere_intersects_aabox(sphere: "Sphere", box: "AABox") -> bool:
    """
    True if the point of box closest to the sphere center is within radius.

    Touching counts as intersection. An empty box never intersects.
    """
    if box.is_empty:
        return False

    dist_sqr = 0.0
    for i in range(3):
        c = sphere.center[i]
        if c < box.min[i]:
            s = c - box.min[i]
            dist_sqr += s * s
        elif c > box.max[i]:
            s = c - box.max[i]
            dist_sqr += s * s

    return dist_sqr <= sphere.radius * sphere.radius


def intersect_planes(p1: "Plane", p2: "Plane",
                     tolerances: Tolerances = DEFAULT_TOLERANCES
                     ) -> Optional[Tuple[numpy.ndarray, numpy.ndarray]]:
    """
    Line of intersection of two planes as (point, direction).

    direction = cross(n1, n2) and is not normalized. The point solves
        dot(n1, x) = offset1
        dot(n2, x) = offset2
        dot(direction, x) = 0
    Parallel or coincident planes give None.
    """
    line_dir = numpy.cross(p1.normal, p2.normal)
    det = lensq(line_dir)
    if det <= tolerances.parallel_planes:
        log.debug(f"plane/plane: planes are parallel (|n1 x n2|^2 = {det})")
        return None

    A = numpy.array([p1.normal, p2.normal, line_dir])
    b = numpy.array([p1.offset, p2.offset, 0.0], dtype=A.dtype)
    point = numpy.linalg.inv(A) @ b
    return point, line_dir
