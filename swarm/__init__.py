from .base import Constraint, Fitness, InvalidShapeError, Range, project
from .options import Options, resolve_options
from .pso import Optimizer, best, new, reset, should_stop, step, step_until

__all__ = [
    "Constraint",
    "Fitness",
    "InvalidShapeError",
    "Optimizer",
    "Options",
    "Range",
    "best",
    "new",
    "project",
    "reset",
    "resolve_options",
    "should_stop",
    "step",
    "step_until",
]
