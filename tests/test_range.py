import numpy as np
from swarm.base import Range, as_ranges, project


def test_sentinel_contains_everything():
    r = Range(0.0, 0.0)
    for x in [-1e300, -3.5, 0.0, 2.0, 1e300]:
        assert r.contains(x)


def test_sentinel_clip_is_identity():
    r = Range(0.0, 0.0)
    for x in [-1e9, -0.25, 0.0, 7.0, 1e9]:
        assert r.clip(x) == x


def test_contains_is_inclusive():
    r = Range(-1.0, 2.0)
    assert r.contains(-1.0)
    assert r.contains(2.0)
    assert r.contains(0.5)
    assert not r.contains(-1.0000001)
    assert not r.contains(2.5)


def test_clip_saturates_to_nearest_bound():
    r = Range(-1.0, 2.0)
    assert r.clip(-5.0) == -1.0
    assert r.clip(9.0) == 2.0
    assert r.clip(0.3) == 0.3


def test_as_ranges_accepts_tuples():
    ranges = as_ranges([(0, 1), Range(2.0, 3.0)])
    assert ranges == [Range(0.0, 1.0), Range(2.0, 3.0)]
    assert as_ranges(None) == []


def test_project_clips_and_skips_unbounded():
    bounds = [Range(-1.0, 1.0), Range(0.0, 0.0), Range(-1.0, 1.0)]
    x = np.array([-2.0, 50.0, 5.0])
    y = project(x, bounds)
    assert np.allclose(y, np.array([-1.0, 50.0, 1.0]))


def test_project_stack_of_positions():
    bounds = [Range(0.0, 1.0)]
    X = np.array([[-1.0, 4.0], [0.5, -4.0], [3.0, 0.0]])
    Y = project(X, bounds)
    assert np.allclose(Y[:, 0], [0.0, 0.5, 1.0])
    # no bound given for the second dimension
    assert np.allclose(Y[:, 1], X[:, 1])
