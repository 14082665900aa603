import numpy as np

from logdensity_jax import (
    LogDensityRejectErrors,
    StressTestCFG,
    TransformedLogDensity,
    Value,
    evaluate,
    logdensity,
    random_real,
    random_reals,
    stresstest,
)
from logdensity_jax.transforms import IdentityTransform

from _problems import nan_in_negative_orthant, standard_normal


def _checked_value(problem, x):
    return evaluate(Value, problem, x)


def test_failure_rate_in_negative_orthant():
    problem = TransformedLogDensity(IdentityTransform(2), nan_in_negative_orthant)
    failures = stresstest(_checked_value, problem, N=1000, rng=np.random.default_rng(42))
    assert 200 <= len(failures) <= 300
    assert all(np.all(x < 0) for x in failures)


def test_no_failures_for_raw_or_rejecting_evaluation():
    problem = TransformedLogDensity(IdentityTransform(2), nan_in_negative_orthant)
    # the raw path does not check, so nan is returned rather than raised
    assert stresstest(logdensity, problem, N=200, rng=1) == []
    assert stresstest(_checked_value, LogDensityRejectErrors(problem), N=200, rng=1) == []


def test_failures_are_reproducible_and_ordered():
    problem = TransformedLogDensity(IdentityTransform(2), nan_in_negative_orthant)
    a = stresstest(_checked_value, problem, N=100, rng=7)
    b = stresstest(_checked_value, problem, N=100, rng=7)
    assert len(a) == len(b)
    for xa, xb in zip(a, b):
        np.testing.assert_array_equal(xa, xb)


def test_cfg_defaults():
    problem = standard_normal(2)
    calls = []
    stresstest(lambda p, x: calls.append(x), problem, rng=0, cfg=StressTestCFG(N=17))
    assert len(calls) == 17
    assert all(x.shape == (2,) for x in calls)


def test_any_exception_is_recorded():
    def f(problem, x):
        if x[0] > 0:
            raise KeyError("positive")

    failures = stresstest(f, standard_normal(3), N=500, rng=3)
    assert 0 < len(failures) < 500
    assert all(x[0] > 0 for x in failures)


def test_random_reals():
    x = random_reals(5, rng=0)
    assert x.shape == (5,)
    np.testing.assert_array_equal(x, random_reals(5, rng=0))
    assert isinstance(random_real(rng=0), float)
    scaled = random_reals(5, scale=10.0, rng=0)
    np.testing.assert_allclose(scaled, 10.0 * x)
    # heavy tails: the largest draws are orders of magnitude apart
    rng = np.random.default_rng(11)
    normal = np.abs([random_real(rng=rng) for _ in range(2000)])
    heavy = np.abs([random_real(cauchy=True, rng=rng) for _ in range(2000)])
    assert np.max(heavy) > 100 * np.max(normal)
