"""
Tolerances and conventions shared by the geometry kernel.

Nothing here is mutable at runtime: routines take an optional
``tolerances=`` argument and fall back to DEFAULT_TOLERANCES.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import numpy

DEFAULT_DTYPE = numpy.float64


@dataclass(frozen=True)
class Tolerances:
    """
    Пороговые значения для вырожденных случаев.

    Атрибуты:
        ray_parallel: |direction[i]| ниже которого луч считается параллельным слэбу
        parallel_planes: квадрат длины cross(n1, n2), ниже которого плоскости параллельны
        degenerate_length: минимальная длина нормализуемого вектора
        homogeneous_w: минимальный |w| для перспективного деления
    """
    ray_parallel: float = 1e-7
    parallel_planes: float = 1e-12
    degenerate_length: float = 1e-12
    homogeneous_w: float = 1e-12

    def __post_init__(self):
        for name in ("ray_parallel", "parallel_planes", "degenerate_length", "homogeneous_w"):
            if getattr(self, name) < 0:
                raise ValueError(f"Tolerances.{name} must be >= 0")


DEFAULT_TOLERANCES = Tolerances()


class ClipDepth(Enum):
    """Depth range of clip space after the perspective divide."""
    ZERO_TO_ONE = "zero_to_one"
    NEGATIVE_ONE_TO_ONE = "negative_one_to_one"

    @property
    def near(self) -> float:
        return 0.0 if self is ClipDepth.ZERO_TO_ONE else -1.0


class MatrixLayout(Enum):
    """
    How a 4x4 matrix is applied to a point.

    COLUMN_VECTORS: clip = M @ p  (numpy / OpenGL math convention)
    ROW_VECTORS:    clip = p @ M  (DirectX convention, the transpose)
    """
    COLUMN_VECTORS = "column_vectors"
    ROW_VECTORS = "row_vectors"

    def to_column_vectors(self, matrix: numpy.ndarray) -> numpy.ndarray:
        if self is MatrixLayout.ROW_VECTORS:
            return matrix.T
        return matrix
