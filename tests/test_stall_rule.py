from swarm.pso import should_stop


def test_long_stall_stops():
    # log10(50) ~ 1.70 > 1 and log10(100) - log10(50) ~ 0.30 < 1
    assert should_stop(100, 50, 1.0)


def test_short_stall_continues():
    # log10(2) ~ 0.30 is not > 1
    assert not should_stop(100, 2, 1.0)


def test_stall_small_relative_to_run_continues():
    # log10(20) > 1 but log10(10000) - log10(20) ~ 2.7 is not < 1
    assert not should_stop(10000, 20, 1.0)


def test_zero_or_one_never_stops():
    for wait in [-1.0, 0.0, 2.0]:
        assert not should_stop(10, 0, wait)
        assert not should_stop(10, 1, wait)
        assert not should_stop(1, 1, wait)


def test_default_wait_needs_over_a_hundred_steps():
    assert not should_stop(150, 100, 2.0)
    assert should_stop(150, 101, 2.0)
