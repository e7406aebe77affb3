"""
Parallel fitness evaluation.

Every particle is scored exactly once per step. Workers receive particle
indices and return (index, fitness) pairs in completion order; fitness is
None when the position broke a bound or a constraint. The caller drains all
results before touching optimizer state, so aggregation never overlaps with
evaluation.
"""
from __future__ import annotations
from multiprocessing.pool import ThreadPool
from typing import Callable, Iterator, Optional, Sequence, Tuple

import numpy as np

from .base import Constraint, Fitness, Range

ParticleFitness = Tuple[int, Optional[float]]


def is_feasible(x: np.ndarray, bounds: Sequence[Range], constraints: Sequence[Constraint]) -> bool:
    # bounds first, they are cheap
    for xj, r in zip(x, bounds):
        if not r.contains(xj):
            return False
    for within in constraints:
        if not within(x):
            return False
    return True


def evaluate_particle(
    idx: int,
    x: np.ndarray,
    fitness: Fitness,
    bounds: Sequence[Range],
    constraints: Sequence[Constraint],
) -> ParticleFitness:
    if not is_feasible(x, bounds, constraints):
        return idx, None
    return idx, float(fitness(x))


def evaluate_population(
    n: int,
    evaluate: Callable[[int], ParticleFitness],
    parallelism: int = 1,
) -> Iterator[ParticleFitness]:
    """
    Yield evaluate(idx) for every idx in range(n), in completion order.

    With parallelism > 1 a pool of that many threads pulls indices off the
    pool's task queue. The pool is torn down only after the last result has
    been yielded. Exceptions raised by evaluate are re-raised here.
    """
    if parallelism <= 1:
        for idx in range(n):
            yield evaluate(idx)
        return

    chunksize = max(1, n // (4 * parallelism))
    with ThreadPool(processes=parallelism) as pool:
        for result in pool.imap_unordered(evaluate, range(n), chunksize=chunksize):
            yield result
