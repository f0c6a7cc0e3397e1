"""Range - scalar interval used for min/max accumulation."""

import numpy

from geomkit.config import DEFAULT_DTYPE
from geomkit.errors import DegenerateGeometryError


class Range:
    """
    Closed interval [min, max].

    Default construction gives an empty range (min = +MAX, max = -MAX),
    so that the first extend() sets both bounds.
    """

    __slots__ = ('min', 'max')

    def __init__(self, min: float = None, max: float = None, dtype=DEFAULT_DTYPE):
        big = float(numpy.finfo(dtype).max)
        self.min = big if min is None else float(min)
        self.max = -big if max is None else float(max)

    @property
    def is_empty(self) -> bool:
        return self.max < self.min

    @property
    def length(self) -> float:
        if self.is_empty:
            return 0.0
        return self.max - self.min

    def copy(self) -> "Range":
        return Range(self.min, self.max)

    def intersect(self, other: "Range") -> "Range":
        return Range(max(self.min, other.min), min(self.max, other.max))

    def union(self, other: "Range") -> "Range":
        if self.is_empty:
            return other.copy()
        if other.is_empty:
            return self.copy()
        return Range(min(self.min, other.min), max(self.max, other.max))

    def extend(self, value: float) -> "Range":
        value = float(value)
        self.min = min(self.min, value)
        self.max = max(self.max, value)
        return self

    def __iadd__(self, value: float) -> "Range":
        return self.extend(value)

    def offset(self, value: float) -> "Range":
        self.min += value
        self.max += value
        return self

    def normalize(self, value: float) -> float:
        """Map [min, max] onto [0, 1]. Empty and zero-length ranges have no mapping."""
        if self.is_empty or self.max == self.min:
            raise DegenerateGeometryError(f"Range.normalize: zero-length range {self}")
        return (value - self.min) / (self.max - self.min)

    def contains(self, value: float) -> bool:
        return self.min <= value <= self.max

    def __eq__(self, other):
        if not isinstance(other, Range):
            return NotImplemented
        return self.min == other.min and self.max == other.max

    def __repr__(self):
        return f"Range(min={self.min}, max={self.max})"
