"""
Golinski speed reducer design problem.

Seven design variables:
    x0 face width, x1 tooth module, x2 pinion teeth,
    x3/x4 shaft lengths between bearings, x5/x6 shaft diameters.

The cost is the weight of the reducer. Every design constraint is written
as g(x) <= 1.
"""
from __future__ import annotations
from typing import List

import numpy as np

from swarm.base import Constraint, Range

SHAPE: List[Range] = [
    Range(2.6, 3.6),
    Range(0.7, 0.8),
    Range(17.0, 28.0),
    Range(7.3, 8.3),
    Range(7.3, 8.3),
    Range(2.9, 3.9),
    Range(5.0, 5.5),
]

# published design, used as a sanity check for the cost
REFERENCE = np.array([3.50, 0.7, 17.0, 7.3, 7.30, 3.35, 5.29])


def golinski(x: np.ndarray) -> float:
    x0, x1, x2, x3, x4, x5, x6 = np.asarray(x, dtype=float)
    a = 0.7854 * x0 * x1 ** 2 * (3.3333 * x2 ** 2 + 14.9334 * x2 - 43.0934)
    b = 1.508 * x0 * (x5 ** 2 + x6 ** 2)
    c = 7.4777 * (x5 ** 3 + x6 ** 3)
    d = 0.7854 * (x3 * x5 ** 2 + x4 * x6 ** 2)
    return float(a - b + c + d)


def _bending(x):
    return 27.0 / (x[0] * x[1] ** 2 * x[2])


def _contact(x):
    return 397.5 / (x[0] * x[1] ** 2 * x[2] ** 2)


def _deflection_1(x):
    return 1.93 * x[3] ** 3 / (x[1] * x[2] * x[5] ** 4)


def _deflection_2(x):
    return 1.93 * x[4] ** 3 / (x[1] * x[2] * x[6] ** 4)


def _stress_1(x):
    return np.sqrt((745.0 * x[3] / x[1] / x[2]) ** 2 + 16.9e6) / (110.0 * x[5] ** 3)


def _stress_2(x):
    return np.sqrt((745.0 * x[4] / x[1] / x[2]) ** 2 + 157.5e6) / (85.0 * x[6] ** 3)


def _width(x):
    return x[1] * x[2] / 40.0


def _min_ratio(x):
    return 5.0 * x[1] / x[0]


def _max_ratio(x):
    return x[0] / 12.0 / x[1]


def _shaft_1(x):
    return (1.5 * x[5] + 1.9) / x[3]


def _shaft_2(x):
    return (1.1 * x[6] + 1.9) / x[4]


CONSTRAINT_TERMS = [
    _bending, _contact, _deflection_1, _deflection_2, _stress_1, _stress_2,
    _width, _min_ratio, _max_ratio, _shaft_1, _shaft_2,
]


def _at_most_one(g) -> Constraint:
    def within(x: np.ndarray) -> bool:
        return bool(g(x) <= 1.0)
    within.__name__ = g.__name__.lstrip("_")
    return within


CONSTRAINTS: List[Constraint] = [_at_most_one(g) for g in CONSTRAINT_TERMS]


def violations(x: np.ndarray) -> List[str]:
    """Names of the constraints x fails."""
    return [c.__name__ for c in CONSTRAINTS if not c(x)]
