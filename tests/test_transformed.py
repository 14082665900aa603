import jax.numpy as jnp
import numpy as np
import pytest

from logdensity_jax import (
    ConfigurationError,
    JacobianUnavailableError,
    LogDensityOrder,
    NO_LOGJAC,
    TransformedLogDensity,
    Value,
    capabilities,
    dimension,
    evaluate,
    logdensity,
)
from logdensity_jax.transforms import ExpTransform, IdentityTransform

from _problems import normal_logdensity, positive_exponential, standard_normal


class _NoJacobian:
    def dimension(self):
        return 2

    def transform_and_logjac(self, x):
        return x, NO_LOGJAC


def test_transformed_value_is_logjac_plus_function():
    problem = TransformedLogDensity(ExpTransform(3), lambda theta: -jnp.sum(theta))
    x = np.array([0.1, -0.2, 0.3])
    expected = np.sum(x) - np.sum(np.exp(x))
    np.testing.assert_allclose(logdensity(problem, x), expected)
    assert float(evaluate(Value, problem, x).value) == pytest.approx(expected)


def test_transformed_identity():
    problem = standard_normal(3)
    assert dimension(problem) == 3
    assert capabilities(problem) == LogDensityOrder(0)
    np.testing.assert_allclose(logdensity(problem, jnp.ones(3)), -1.5)


def test_transformed_display():
    assert repr(standard_normal(5)) == "TransformedLogDensity of dimension 5"


def test_transformed_wrong_length():
    with pytest.raises(ValueError):
        logdensity(standard_normal(3), np.zeros(2))


def test_transformed_reject_gives_minus_inf():
    problem = TransformedLogDensity(IdentityTransform(1), positive_exponential)
    assert logdensity(problem, np.array([-1.0])) == -np.inf
    assert float(logdensity(problem, np.array([2.0]))) == pytest.approx(-2.0)
    assert evaluate(Value, problem, np.array([-1.0])).is_infinite()


def test_transformed_without_jacobian():
    problem = TransformedLogDensity(_NoJacobian(), normal_logdensity)
    with pytest.raises(JacobianUnavailableError):
        logdensity(problem, np.zeros(2))


def test_transformed_construction_errors():
    with pytest.raises(ConfigurationError):
        TransformedLogDensity("a fish", normal_logdensity)
    with pytest.raises(ConfigurationError):
        TransformedLogDensity(IdentityTransform(2), "not callable")
    with pytest.raises(ConfigurationError):
        TransformedLogDensity(IdentityTransform(0), normal_logdensity)
