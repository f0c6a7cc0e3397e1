"""
Базовые геометрические классы (Geometric Base).

Содержит value-типы ядра:
- Range - скалярный интервал
- Plane - плоскость (единичная нормаль + offset)
- Ray3 - луч
- Sphere - сфера
- AABox, AABox2 - ограничивающие боксы в 3D и 2D
- Frustum - пирамида видимости из 6 плоскостей
- Circle3 - окружность в 3D
"""

from .range import Range
from .plane import Plane, generate_u, generate_uv
from .aabb import AABox, Intersection
from .aabb2 import AABox2
from .ray import Ray3
from .sphere import Sphere
from .frustum import ExtractionMethod, Frustum, FrustumPlane
from .circle3 import Circle3

__all__ = [
    'Range',
    'Plane',
    'generate_u',
    'generate_uv',
    'AABox',
    'AABox2',
    'Intersection',
    'Ray3',
    'Sphere',
    'ExtractionMethod',
    'Frustum',
    'FrustumPlane',
    'Circle3',
]
