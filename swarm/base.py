from __future__ import annotations
from typing import Callable, List, NamedTuple, Sequence, Tuple, Union
import numpy as np

# Lower is better. To maximise, return the negative of the value.
Fitness = Callable[[np.ndarray], float]

# Must return False if a particle position is invalid.
Constraint = Callable[[np.ndarray], bool]


class InvalidShapeError(ValueError):
    """Raised when an optimizer is built with a zero-dimensional shape."""

    def __init__(self, message: str = "shape must have at least 1 dimension"):
        super().__init__(message)


class Range(NamedTuple):
    """
    Closed interval [lower, upper].

    Range(0, 0) is the unbounded sentinel: it contains everything and
    clipping against it is the identity.
    """
    lower: float
    upper: float

    @property
    def unbounded(self) -> bool:
        return self.lower == 0 and self.upper == 0

    @property
    def width(self) -> float:
        return self.upper - self.lower

    def contains(self, x: float) -> bool:
        if self.unbounded:
            return True
        return self.lower <= x <= self.upper

    def clip(self, x: float) -> float:
        if self.unbounded:
            return x
        if x < self.lower:
            return self.lower
        if self.upper < x:
            return self.upper
        return x


RangeLike = Union[Range, Tuple[float, float]]


def as_ranges(ranges: Sequence[RangeLike] | None) -> List[Range]:
    """Coerce plain (lo, hi) pairs into Range."""
    if not ranges:
        return []
    return [r if isinstance(r, Range) else Range(float(r[0]), float(r[1])) for r in ranges]


def limits(bounds: Sequence[Range], dim: int) -> Tuple[np.ndarray, np.ndarray]:
    """
    Per-dimension (lo, hi) arrays for vectorised clipping.
    Sentinel ranges and dimensions past the end of bounds map to (-inf, inf).
    """
    lo = np.full(dim, -np.inf)
    hi = np.full(dim, np.inf)
    for j, r in enumerate(bounds[:dim]):
        if not r.unbounded:
            lo[j] = r.lower
            hi[j] = r.upper
    return lo, hi


def project(x: np.ndarray, bounds: Sequence[Range]) -> np.ndarray:
    """Clip x (a single position or a (n, D) stack) into bounds."""
    x = np.asarray(x, dtype=float)
    lo, hi = limits(bounds, x.shape[-1])
    return np.minimum(np.maximum(x, lo), hi)
