from __future__ import annotations
import os
from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, List, Optional, Sequence, Union

import numpy as np

from .base import Constraint, InvalidShapeError, Range, as_ranges


@dataclass
class Options:
    """
    Optimizer settings. Any field left as None is filled in by resolve_options.
    """
    # Size of groups of particles that can "see" one another.
    local_size: Optional[int] = None           # 25
    # Scales with the number of dimensions and local_size by default.
    population_size: Optional[int] = None      # 10 * local_size * D
    # Worker threads used for fitness evaluation.
    parallelism: Optional[int] = None          # os.cpu_count()

    # Hard per-dimension limits, enforced every step. Range(0, 0) leaves a
    # dimension unbounded.
    bounds: List[Range] = field(default_factory=list)
    # Hard limits relating parameters to one another.
    constraints: List[Constraint] = field(default_factory=list)

    inertia: Optional[float] = None            # 0.95
    particle_step: Optional[float] = None      # 0.75
    local_step: Optional[float] = None         # 0.50
    global_step: Optional[float] = None        # 0.10
    stall_limit: Optional[int] = None          # 3, reserved

    verbose: bool = False
    wait_magnitude: Optional[float] = None     # 2.0

    # Source of randomness. Falls back to default_rng(seed).
    rng: Optional[np.random.Generator] = None
    seed: Optional[int] = None

    # Derived, set by resolve_options.
    group_count: int = 0

    @classmethod
    def from_dict(cls, options: Dict[str, Any]) -> "Options":
        known = {f.name for f in fields(cls)}
        unknown = set(options) - known
        if unknown:
            raise ValueError(f"Unknown options: {sorted(unknown)}")
        return cls(**options)


DEFAULTS: Dict[str, Any] = {
    "local_size": 25,
    "inertia": 0.95,
    "particle_step": 0.75,
    "local_step": 0.50,
    "global_step": 0.10,
    "stall_limit": 3,
    "wait_magnitude": 2.0,
}

SIZES = ("local_size", "population_size", "parallelism")


def resolve_options(shape: Sequence, options: Union[Options, Dict[str, Any], None] = None) -> Options:
    """Return a copy of options with every default filled in."""
    if len(shape) == 0:
        raise InvalidShapeError()

    if options is None:
        options = Options()
    elif isinstance(options, dict):
        options = Options.from_dict(options)

    filled = {k: v for k, v in DEFAULTS.items() if getattr(options, k) is None}
    # a zero size is as good as unset
    for k in SIZES:
        if not getattr(options, k):
            filled[k] = DEFAULTS.get(k)
    opt = replace(options, **filled)

    if opt.population_size is None:
        opt.population_size = 10 * opt.local_size * len(shape)
    if opt.parallelism is None:
        opt.parallelism = os.cpu_count() or 1

    opt.group_count = max(1, opt.population_size // opt.local_size)
    opt.bounds = as_ranges(opt.bounds)
    opt.constraints = list(opt.constraints or [])

    if opt.rng is None:
        opt.rng = np.random.default_rng(opt.seed)
    return opt
