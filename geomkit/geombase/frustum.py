"""
Frustum - view volume as a set of 6 planes.

Both extraction methods orient the planes the same way: normals point
into the volume, so a point is inside when distance_to() >= 0 for all
six planes.

Matrix conventions are explicit parameters:
    depth  - ClipDepth, the clip-space depth range of the projection
    layout - MatrixLayout, whether points are column or row vectors
"""

from __future__ import annotations

from enum import Enum, IntEnum
from typing import List

import numpy

from geomkit.config import (
    DEFAULT_TOLERANCES,
    ClipDepth,
    MatrixLayout,
    Tolerances,
)
from geomkit.errors import DegenerateGeometryError
from geomkit.geomalgo.projection import frustum_corners
from geomkit.geombase.aabb import AABox, Intersection
from geomkit.geombase.plane import Plane
from geomkit.geombase.sphere import Sphere
from geomkit.util import as_matrix, normalize


class FrustumPlane(IntEnum):
    """Plane indices, to not have to remember the numbers."""
    LEFT = 0
    RIGHT = 1
    BOTTOM = 2
    TOP = 3
    NEAR = 4
    FAR = 5


class ExtractionMethod(Enum):
    ROWS = "rows"
    CORNERS = "corners"


# Four corners of each face, indices into clip_corners() order.
# Consecutive corners give the two edges whose cross product is the normal.
FACE_CORNERS = (
    (4, 5, 1, 0),  # LEFT
    (2, 3, 7, 6),  # RIGHT
    (0, 2, 6, 4),  # BOTTOM
    (1, 5, 7, 3),  # TOP
    (1, 3, 2, 0),  # NEAR
    (5, 4, 6, 7),  # FAR
)


class Frustum:
    __slots__ = ('planes',)

    def __init__(self, planes: List[Plane] = None):
        if planes is None:
            planes = [Plane() for _ in range(6)]
        if len(planes) != 6:
            raise ValueError(f"Frustum needs 6 planes, got {len(planes)}")
        self.planes = list(planes)

    @staticmethod
    def from_matrix(matrix: numpy.ndarray,
                    method: ExtractionMethod = ExtractionMethod.CORNERS,
                    depth: ClipDepth = ClipDepth.ZERO_TO_ONE,
                    layout: MatrixLayout = MatrixLayout.COLUMN_VECTORS,
                    tolerances: Tolerances = DEFAULT_TOLERANCES) -> "Frustum":
        """Frustum of a combined projection @ view matrix."""
        frustum = Frustum()
        if method is ExtractionMethod.ROWS:
            frustum.extract_planes_rows(matrix, depth, layout, tolerances)
        else:
            frustum.extract_planes_corners(matrix, depth, layout, tolerances)
        return frustum

    @staticmethod
    def from_view_projection(view: numpy.ndarray, projection: numpy.ndarray,
                             method: ExtractionMethod = ExtractionMethod.CORNERS,
                             depth: ClipDepth = ClipDepth.ZERO_TO_ONE,
                             layout: MatrixLayout = MatrixLayout.COLUMN_VECTORS,
                             tolerances: Tolerances = DEFAULT_TOLERANCES) -> "Frustum":
        """
        Матрицы перемножаются в порядке M = projection @ view
        (для ROW_VECTORS: M = view @ projection), затем из M извлекаются плоскости.
        """
        view = as_matrix(view)
        projection = as_matrix(projection)
        if layout is MatrixLayout.ROW_VECTORS:
            matrix = view @ projection
        else:
            matrix = projection @ view
        return Frustum.from_matrix(matrix, method, depth, layout, tolerances)

    def __getitem__(self, index: FrustumPlane) -> Plane:
        return self.planes[index]

    def extract_planes_rows(self, matrix: numpy.ndarray,
                            depth: ClipDepth = ClipDepth.ZERO_TO_ONE,
                            layout: MatrixLayout = MatrixLayout.COLUMN_VECTORS,
                            tolerances: Tolerances = DEFAULT_TOLERANCES):
        """
        Each plane is a fixed combination of the rows of M.

        A clip-space point is inside when -w <= x <= w, -w <= y <= w and
        near <= z <= w, so e.g. LEFT is (row3 + row0) . p >= 0. The first
        three coefficients are the normal, the fourth is -offset.
        """
        m = layout.to_column_vectors(as_matrix(matrix))
        r0, r1, r2, r3 = m[0], m[1], m[2], m[3]

        if depth is ClipDepth.ZERO_TO_ONE:
            near = r2
        else:
            near = r3 + r2

        rows = {
            FrustumPlane.LEFT: r3 + r0,
            FrustumPlane.RIGHT: r3 - r0,
            FrustumPlane.BOTTOM: r3 + r1,
            FrustumPlane.TOP: r3 - r1,
            FrustumPlane.NEAR: near,
            FrustumPlane.FAR: r3 - r2,
        }
        for index, coeffs in rows.items():
            self.planes[index] = Plane(coeffs[:3], -coeffs[3], m.dtype)

        self.normalize(tolerances)

    def extract_planes_corners(self, matrix: numpy.ndarray,
                               depth: ClipDepth = ClipDepth.ZERO_TO_ONE,
                               layout: MatrixLayout = MatrixLayout.COLUMN_VECTORS,
                               tolerances: Tolerances = DEFAULT_TOLERANCES):
        """
        Unproject the 8 clip cube corners and build each face from three of them.

        A matrix that reverses orientation (any right-handed view with a
        left-handed clip space) flips the cross products, so every plane is
        turned to face the centroid of the corners.
        """
        corners = frustum_corners(matrix, depth, layout, tolerances)
        centroid = corners.mean(axis=0)

        for index, face in enumerate(FACE_CORNERS):
            vec1 = corners[face[1]] - corners[face[0]]
            vec2 = corners[face[2]] - corners[face[1]]
            try:
                normal = normalize(numpy.cross(vec2, vec1), tolerances)
            except DegenerateGeometryError as e:
                raise DegenerateGeometryError(
                    f"frustum: face {FrustumPlane(index).name} has zero area") from e
            plane = Plane(normal, float(numpy.dot(normal, corners[face[1]])), corners.dtype)
            if plane.distance_to(centroid) < 0.0:
                plane = plane.flipped()
            self.planes[index] = plane

    def normalize(self, tolerances: Tolerances = DEFAULT_TOLERANCES):
        """Divide normal and offset of every plane by the normal length."""
        for plane in self.planes:
            n = float(numpy.linalg.norm(plane.normal))
            if n < tolerances.degenerate_length:
                raise DegenerateGeometryError("frustum: plane with zero normal")
            plane.normal = plane.normal / n
            plane.offset = plane.offset / n

    def contains_point(self, point: numpy.ndarray) -> bool:
        return all(plane.distance_to(point) >= 0.0 for plane in self.planes)

    def intersects_sphere(self, sphere: Sphere) -> bool:
        """Conservative test: False only if the sphere is fully outside one plane."""
        return all(plane.distance_to(sphere.center) >= -sphere.radius for plane in self.planes)

    def classify_aabox(self, box: AABox) -> Intersection:
        """
        Positive/negative vertex test.

        OUTSIDE if the box is fully behind one plane, INSIDE if fully in
        front of all of them, INTERSECT otherwise (may be conservative
        near frustum edges).
        """
        if box.is_empty:
            return Intersection.OUTSIDE

        result = Intersection.INSIDE
        for plane in self.planes:
            positive = numpy.where(plane.normal >= 0.0, box.max, box.min)
            negative = numpy.where(plane.normal >= 0.0, box.min, box.max)
            if plane.distance_to(positive) < 0.0:
                return Intersection.OUTSIDE
            if plane.distance_to(negative) < 0.0:
                result = Intersection.INTERSECT
        return result

    def is_equal(self, other: "Frustum", eps: float = 1e-6) -> bool:
        return all(a.is_equal(b, eps) for a, b in zip(self.planes, other.planes))

    def __repr__(self):
        planes = ", ".join(f"{FrustumPlane(i).name}={p}" for i, p in enumerate(self.planes))
        return f"Frustum({planes})"
