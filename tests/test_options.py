import os

import numpy as np
import pytest

from swarm.base import InvalidShapeError, Range
from swarm.options import Options, resolve_options


SHAPE_2D = [Range(-1.0, 1.0), Range(-1.0, 1.0)]


def test_defaults():
    opt = resolve_options(SHAPE_2D)
    assert opt.local_size == 25
    assert opt.population_size == 10 * 25 * 2
    assert opt.group_count == 20
    assert opt.parallelism == (os.cpu_count() or 1)
    assert opt.inertia == 0.95
    assert opt.particle_step == 0.75
    assert opt.local_step == 0.50
    assert opt.global_step == 0.10
    assert opt.stall_limit == 3
    assert opt.wait_magnitude == 2.0
    assert opt.bounds == []
    assert opt.constraints == []
    assert isinstance(opt.rng, np.random.Generator)


def test_population_scales_with_local_size():
    opt = resolve_options(SHAPE_2D, Options(local_size=4))
    assert opt.population_size == 80
    assert opt.group_count == 20


def test_uneven_population_rounds_groups_down():
    opt = resolve_options(SHAPE_2D, Options(population_size=10, local_size=4))
    assert opt.group_count == 2


def test_group_count_never_zero():
    opt = resolve_options(SHAPE_2D, Options(population_size=3, local_size=25))
    assert opt.group_count == 1


def test_explicit_values_are_kept():
    opt = resolve_options(SHAPE_2D, Options(inertia=0.0, global_step=0.3, parallelism=2))
    assert opt.inertia == 0.0
    assert opt.global_step == 0.3
    assert opt.parallelism == 2


def test_dict_options():
    opt = resolve_options(SHAPE_2D, {"population_size": 12, "local_size": 3, "bounds": [(0, 1), (0, 0)]})
    assert opt.population_size == 12
    assert opt.group_count == 4
    assert opt.bounds == [Range(0.0, 1.0), Range(0.0, 0.0)]


def test_unknown_dict_option():
    with pytest.raises(ValueError):
        resolve_options(SHAPE_2D, {"swarm_size": 10})


def test_resolve_does_not_mutate_input():
    options = Options(local_size=5)
    resolve_options(SHAPE_2D, options)
    assert options.population_size is None
    assert options.inertia is None


def test_empty_shape():
    with pytest.raises(InvalidShapeError):
        resolve_options([])


def test_seed_builds_rng():
    a = resolve_options(SHAPE_2D, Options(seed=3)).rng.random(4)
    b = resolve_options(SHAPE_2D, Options(seed=3)).rng.random(4)
    assert np.allclose(a, b)


def test_zero_local_size_uses_default():
    opt = resolve_options(SHAPE_2D, Options(local_size=0))
    assert opt.local_size == 25
    assert opt.population_size == 500
    assert opt.group_count == 20


def test_zero_population_size_uses_default():
    opt = resolve_options(SHAPE_2D, Options(population_size=0, local_size=5))
    assert opt.population_size == 100
    assert opt.group_count == 20


def test_zero_parallelism_uses_default():
    opt = resolve_options(SHAPE_2D, {"parallelism": 0})
    assert opt.parallelism == (os.cpu_count() or 1)
