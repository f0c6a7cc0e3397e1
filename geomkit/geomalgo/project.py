"""Проекции точек на плоскость (в локальный базис) и на AABox."""

import numpy


def project(u: numpy.ndarray, v: numpy.ndarray, point: numpy.ndarray) -> numpy.ndarray:
    """2D coordinates of point in the in-plane basis (u, v)."""
    point = numpy.asarray(point)
    return numpy.array([numpy.dot(u, point), numpy.dot(v, point)])


def unproject(plane, u: numpy.ndarray, v: numpy.ndarray, uv: numpy.ndarray) -> numpy.ndarray:
    """
    3D point on plane for local coordinates uv.

    The in-plane part comes from the basis, the out-of-plane part is
    normal * offset, the point of the plane closest to the origin.
    """
    return uv[0] * u + uv[1] * v + plane.normal * plane.offset


def project_point_on_aabox(point: numpy.ndarray, box_min: numpy.ndarray,
                           box_max: numpy.ndarray) -> numpy.ndarray:
    """Closest point of the box to point (clamping)."""
    return numpy.minimum(numpy.maximum(point, box_min), box_max)
