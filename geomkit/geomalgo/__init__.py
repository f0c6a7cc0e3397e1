"""Geometric algorithms: intersections, projections, camera matrices."""

from .intersection import (
    RayHit,
    intersect_planes,
    intersect_ray_aabox,
    intersect_ray_aabox_slab,
    intersect_ray_sphere,
    sphere_intersects_aabox,
)
from .project import project, project_point_on_aabox, unproject
from .projection import clip_corners, frustum_corners, look_at, orthographic, perspective

__all__ = [
    'RayHit',
    'intersect_planes',
    'intersect_ray_aabox',
    'intersect_ray_aabox_slab',
    'intersect_ray_sphere',
    'sphere_intersects_aabox',
    'project',
    'project_point_on_aabox',
    'unproject',
    'clip_corners',
    'frustum_corners',
    'look_at',
    'orthographic',
    'perspective',
]
