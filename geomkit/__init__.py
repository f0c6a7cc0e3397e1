"""
geomkit - геометрическое ядро для отсечения, пикинга и broad-phase.

Основные модули:
- geombase - базовые типы (Plane, Ray3, Sphere, AABox, AABox2, Frustum, Circle3, Range)
- geomalgo - алгоритмы пересечений и проекций
"""

from .geombase import (
    AABox,
    AABox2,
    Circle3,
    Frustum,
    FrustumPlane,
    Intersection,
    Plane,
    Range,
    Ray3,
    Sphere,
)
from .geomalgo.intersection import RayHit

__version__ = '0.1.0'

__all__ = [
    'AABox',
    'AABox2',
    'Circle3',
    'Frustum',
    'FrustumPlane',
    'Intersection',
    'Plane',
    'Range',
    'Ray3',
    'RayHit',
    'Sphere',
]
