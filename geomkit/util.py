"""Scalar and vector helpers used across the kernel."""

import math
from typing import Optional

import numpy

from geomkit.config import DEFAULT_DTYPE, DEFAULT_TOLERANCES, Tolerances
from geomkit.errors import DegenerateGeometryError


def sqr(x):
    return x * x


def lensq(v: numpy.ndarray) -> float:
    """Squared length of a vector."""
    return float(numpy.dot(v, v))


def length(v: numpy.ndarray) -> float:
    return math.sqrt(lensq(v))


def normalize(v: numpy.ndarray, tolerances: Tolerances = DEFAULT_TOLERANCES) -> numpy.ndarray:
    """Unit vector along v. Vectors shorter than degenerate_length are rejected."""
    n = length(v)
    if n < tolerances.degenerate_length:
        raise DegenerateGeometryError(f"cannot normalize vector of length {n}")
    return v / n


def next_power_of_two(n: int) -> int:
    """Smallest power of two that is >= n."""
    if n < 1:
        raise ValueError(f"next_power_of_two expects a positive integer, got {n}")
    return 1 << (int(n) - 1).bit_length()


def as_vector(v, size: int = 3, dtype=DEFAULT_DTYPE) -> numpy.ndarray:
    """Convert a sequence to a numpy vector of the given size."""
    arr = numpy.asarray(v, dtype=dtype)
    if arr.shape != (size,):
        raise ValueError(f"expected vector of shape ({size},), got {arr.shape}")
    return arr


def as_matrix(m) -> numpy.ndarray:
    """
    Convert to a 4x4 numpy matrix.

    A floating dtype is kept as is (float32 stays float32), anything
    else becomes DEFAULT_DTYPE.
    """
    arr = numpy.asarray(m)
    if not numpy.issubdtype(arr.dtype, numpy.floating):
        arr = arr.astype(DEFAULT_DTYPE)
    if arr.shape != (4, 4):
        raise ValueError(f"expected matrix of shape (4, 4), got {arr.shape}")
    return arr


def make_rng(seed: Optional[int] = None) -> numpy.random.Generator:
    return numpy.random.default_rng(seed)


def unit_random(rng: numpy.random.Generator) -> float:
    """
    Uniform sample in [0, 1).

    The generator is passed in by the caller; the kernel keeps no random state.
    """
    return float(rng.random())
