import numpy as np
import pytest

from benchmarks.golinski import CONSTRAINTS, REFERENCE, SHAPE, golinski, violations
from benchmarks.iris_nn import N_WEIGHTS, accuracy, feed_forward, make_fitness, training_loss
from swarm.options import Options
from swarm.pso import Optimizer
from utils.iris_data import load_split


def test_golinski_reference_cost():
    assert golinski(REFERENCE) == pytest.approx(2987.4, abs=1.0)


def test_golinski_constraints():
    assert len(SHAPE) == 7
    assert len(CONSTRAINTS) == 11
    x = REFERENCE.copy()
    x[0], x[1] = 2.6, 0.8
    # 5 * x1 / x0 > 1
    assert "min_ratio" in violations(x)
    names = {c.__name__ for c in CONSTRAINTS}
    assert set(violations(REFERENCE)) <= names


def test_iris_split():
    data = load_split()
    assert data.X_train.shape == (135, 4)
    assert data.X_test.shape == (15, 4)
    assert set(np.unique(data.y_test)) == {0, 1, 2}
    with pytest.raises(ValueError):
        load_split(test_every=1)


def test_network_shapes():
    assert N_WEIGHTS == 55
    data = load_split()
    p = feed_forward(np.ones(N_WEIGHTS) * 0.1, data.X_test)
    assert p.shape == (15, 3)
    assert np.allclose(p.sum(axis=1), 1.0)
    with pytest.raises(ValueError):
        feed_forward(np.zeros(54), data.X_test)


def test_zero_weights_are_uninformative():
    data = load_split()
    w = np.zeros(N_WEIGHTS)
    # every class gets probability 1/3
    assert training_loss(w, data.X_train, data.y_train) == pytest.approx(-len(data.y_train) / 3.0)
    assert accuracy(w, data.X_train, data.y_train) == pytest.approx(45 / 135)


def test_swarm_trains_network():
    data = load_split()
    fitness = make_fitness(data.X_train, data.y_train)
    shape = [(-10.0, 10.0)] * N_WEIGHTS
    opt = Optimizer(fitness, shape, Options(population_size=30, local_size=3, seed=0))
    opt.step()
    first = opt.best_fitness
    for _ in range(40):
        opt.step()
    assert opt.best_fitness < first
    assert 0.0 <= accuracy(opt.best(), data.X_test, data.y_test) <= 1.0
