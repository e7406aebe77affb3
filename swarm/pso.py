from __future__ import annotations
import logging
import math
from typing import Any, Callable, Dict, Optional, Sequence, Union

import numpy as np

from .base import Fitness, InvalidShapeError, RangeLike, as_ranges, project
from .evaluation import ParticleFitness, evaluate_particle, evaluate_population
from .options import Options, resolve_options

logger = logging.getLogger(__name__)

StepCallback = Callable[[int, Dict[str, Any]], None]


def should_stop(steps: int, stalled: int, wait_magnitude: float) -> bool:
    """
    Logarithmic stall rule.

    Stop once the current stagnation streak is longer than 10**W steps while
    still being within a factor of 10**W of the total step count. Streaks of
    zero or one step never stop the search.
    """
    if stalled <= 1:
        return False
    waited_for = math.log10(stalled)
    wait_limit = math.log10(steps)
    return waited_for > wait_magnitude and wait_limit - waited_for < wait_magnitude


class Optimizer:
    """
    Particle Swarm Optimisation with a local-group topology.

    - particle i belongs to group i % group_count
    - velocity pulls towards personal, group and global bests, each scaled by
      one uniform draw per particle per step
    - positions are clipped into bounds after every move
    - infeasible positions (out of bounds or failing a constraint) are not
      scored that step

    shape only sets where particles and velocities are sampled on reset();
    it does not limit where they may go afterwards.
    """
    def __init__(
        self,
        fitness: Fitness,
        shape: Sequence[RangeLike],
        options: Union[Options, Dict[str, Any], None] = None,
    ):
        if len(shape) == 0:
            raise InvalidShapeError()

        self.fitness = fitness
        self.shape = as_ranges(shape)
        self.options: Options = resolve_options(self.shape, options)
        self.D: int = len(self.shape)
        self.rng: np.random.Generator = self.options.rng

        self._groups = np.arange(self.options.population_size) % self.options.group_count

        self.reset()

    def reset(self):
        """Scatter a fresh swarm across shape and forget every best."""
        n, D = self.options.population_size, self.D
        lo = np.array([r.lower for r in self.shape], dtype=float)
        span = np.array([r.width for r in self.shape], dtype=float)

        self.positions = lo + span * self.rng.random((n, D))
        self.velocities = (2.0 * self.rng.random((n, D)) - 1.0) * span
        self.stall_count = np.zeros(n, dtype=int)

        self.pbest_x = self.positions.copy()
        self.pbest_f = np.full(n, np.inf)

        first = np.arange(self.options.group_count) * self.options.local_size
        self.group_best_x = self.positions[np.minimum(first, n - 1)].copy()
        self.group_best_f = np.full(self.options.group_count, np.inf)

        self.gbest_x = self.positions[0].copy()
        self.gbest_f = np.inf

        self.average_fitness = np.inf
        self._feasible = 0
        self._iters = 0
        self._evals_total = 0

        logger.debug("Swarm reset: %d particles, %d groups, %d dimensions",
                     n, self.options.group_count, D)

    @property
    def best_fitness(self) -> float:
        return float(self.gbest_f)

    def best(self) -> np.ndarray:
        """Current global-best position."""
        return self.gbest_x.copy()

    def state(self) -> Dict[str, Any]:
        return {
            "iter": self._iters,
            "evals_total": self._evals_total,
            "gbest_f": float(self.gbest_f),
            "f_mean": float(self.average_fitness),
            "feasible": self._feasible,
            "stalled": int(self.stall_count.sum()),
        }

    def _particle_fitness(self, idx: int) -> ParticleFitness:
        return evaluate_particle(
            idx,
            self.positions[idx].copy(),
            self.fitness,
            self.options.bounds,
            self.options.constraints,
        )

    def update_fitness(self):
        """Score every particle once and fold the results into the bests."""
        total, count = 0.0, 0
        results = evaluate_population(
            self.options.population_size, self._particle_fitness, self.options.parallelism
        )
        for idx, fx in results:
            if fx is None:
                self.stall_count[idx] += 1
                continue

            total += fx
            count += 1

            if fx < self.pbest_f[idx]:
                self.pbest_f[idx] = fx
                self.pbest_x[idx] = self.positions[idx]

            g = self._groups[idx]
            if fx < self.group_best_f[g]:
                self.group_best_f[g] = fx
                self.group_best_x[g] = self.positions[idx]

            if fx < self.gbest_f:
                self.gbest_f = fx
                self.gbest_x = self.positions[idx].copy()

        # no feasible particle this step: report the worst possible average
        self.average_fitness = total / count if count else np.inf
        self._feasible = count
        self._evals_total += count

    def step(self):
        """Advance the swarm by one generation: evaluate, then move."""
        self.update_fitness()

        o = self.options
        x = self.positions
        r = self.rng.random((o.population_size, 3))
        rp, rl, rg = r[:, 0:1], r[:, 1:2], r[:, 2:3]

        self.velocities = (
            o.inertia * self.velocities
            + o.particle_step * rp * (self.pbest_x - x)
            + o.local_step * rl * (self.group_best_x[self._groups] - x)
            + o.global_step * rg * (self.gbest_x - x)
        )
        self.positions = project(x + self.velocities, self.options.bounds)
        self._iters += 1

    def step_until(self, progress_rate: float, callback: Optional[StepCallback] = None) -> int:
        """
        Step until the global best stops improving by at least |progress_rate|
        for long enough (see should_stop). Returns the number of steps taken.
        """
        verbose = self.options.verbose
        min_progress = abs(progress_rate)
        wait = self.options.wait_magnitude

        self.step()
        steps = 1
        if callback is not None:
            callback(steps, self.state())

        last = float(self.gbest_f)
        stalled = 0

        while True:
            self.step()
            steps += 1
            current = float(self.gbest_f)
            if verbose:
                logger.info("step %d | best %.6e | mean %.6e", steps, current, self.average_fitness)
            if callback is not None:
                callback(steps, self.state())

            # inf - inf (nothing feasible yet) is nan and counts as no progress
            if not last - current >= min_progress:
                stalled += 1
                if should_stop(steps, stalled, wait):
                    break
            else:
                if verbose:
                    logger.info("step %d | improved to %.6e", steps, current)
                stalled = 0

            last = current

        if verbose:
            logger.info("converged after %d steps | best %.6e", steps, self.gbest_f)
        return steps


# Helpers for callers holding an Optional[Optimizer]: each one is a no-op
# returning the zero value when handed None.

def new(
    fitness: Fitness,
    shape: Sequence[RangeLike],
    options: Union[Options, Dict[str, Any], None] = None,
) -> Optimizer:
    return Optimizer(fitness, shape, options)


def reset(opt: Optional[Optimizer]) -> None:
    if opt is not None:
        opt.reset()


def step(opt: Optional[Optimizer]) -> None:
    if opt is not None:
        opt.step()


def step_until(opt: Optional[Optimizer], progress_rate: float) -> int:
    if opt is None:
        return 0
    return opt.step_until(progress_rate)


def best(opt: Optional[Optimizer]) -> Optional[np.ndarray]:
    if opt is None:
        return None
    return opt.best()
