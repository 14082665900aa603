import jax.numpy as jnp
import numpy as np
import pytest

from logdensity_jax import (
    ADgradient,
    ConfigurationError,
    InvalidLogDensityError,
    LogDensityOrder,
    LogDensityRejectErrors,
    Value,
    ValueGradient,
    ValueGradientBuffer,
    capabilities,
    dimension,
    evaluate,
    logdensity,
    logdensity_and_gradient,
    logdensity_gradient_and_hessian,
    TransformedLogDensity,
)
from logdensity_jax.transforms import IdentityTransform

from _problems import Returns, standard_normal


class _Raises:
    """Problem of dimension 2 raising `error` from every entry point."""

    def __init__(self, error):
        self.error = error

    def dimension(self):
        return 2

    def capabilities(self):
        return LogDensityOrder(2)

    def logdensity(self, x):
        raise self.error

    def logdensity_and_gradient(self, x, buffer=None):
        raise self.error

    def logdensity_gradient_and_hessian(self, x):
        raise self.error

    def __repr__(self):
        return "Raises"


def test_selected_errors_become_minus_inf():
    wrapped = LogDensityRejectErrors(_Raises(ZeroDivisionError()), ZeroDivisionError)
    x = np.zeros(2)
    assert logdensity(wrapped, x) == -np.inf
    value, gradient = logdensity_and_gradient(wrapped, x)
    assert value == -np.inf
    assert gradient.shape == (2,)
    value, gradient, hessian = logdensity_gradient_and_hessian(wrapped, x)
    assert value == -np.inf
    assert hessian.shape == (2, 2)


def test_other_errors_propagate():
    wrapped = LogDensityRejectErrors(_Raises(KeyError("b")), (ZeroDivisionError, ArithmeticError))
    with pytest.raises(KeyError):
        logdensity(wrapped, np.zeros(2))
    with pytest.raises(KeyError):
        logdensity_and_gradient(wrapped, np.zeros(2))


def test_element_type_follows_argument():
    wrapped = LogDensityRejectErrors(_Raises(ValueError()), ValueError)
    x = np.zeros(2, dtype=np.float32)
    value, gradient = logdensity_and_gradient(wrapped, x)
    assert value.dtype == np.float32
    assert gradient.dtype == np.float32
    assert logdensity(wrapped, np.zeros(2, dtype=int)).dtype == np.float64


def test_buffer_is_lent_on_rejection():
    wrapped = LogDensityRejectErrors(_Raises(ValueError()), ValueError)
    buffer = np.empty(2)
    value, gradient = logdensity_and_gradient(wrapped, np.zeros(2), buffer)
    assert value == -np.inf
    assert gradient is buffer
    vg = evaluate(ValueGradientBuffer(buffer), wrapped, np.zeros(2))
    assert vg.is_infinite()
    assert vg.gradient is buffer


def test_invalid_results_rejected_by_default():
    wrapped = LogDensityRejectErrors(Returns(np.nan, (np.nan, 1.0)))
    assert wrapped.errors == (InvalidLogDensityError,)
    assert evaluate(Value, wrapped, np.zeros(2)).is_infinite()
    vg = evaluate(ValueGradient, wrapped, np.zeros(2))
    assert vg.is_infinite()
    assert vg.gradient.shape == (2,)
    # without the wrapper the checked path raises
    with pytest.raises(InvalidLogDensityError):
        evaluate(ValueGradient, Returns(np.nan, (np.nan, 1.0)), np.zeros(2))


def test_valid_results_pass_through():
    ad = ADgradient("jax", standard_normal(2))
    wrapped = LogDensityRejectErrors(ad)
    x = np.array([1.0, 2.0])
    np.testing.assert_allclose(evaluate(ValueGradient, wrapped, x).gradient, -x)
    np.testing.assert_allclose(logdensity(wrapped, x), -2.5)


def test_wrapper_preserves_interface():
    ad = ADgradient("jax", standard_normal(3))
    wrapped = LogDensityRejectErrors(ad)
    assert dimension(wrapped) == 3
    assert capabilities(wrapped) == capabilities(ad)
    assert wrapped.parent() is ad


def test_display():
    wrapped = LogDensityRejectErrors(_Raises(ValueError()), (ValueError, KeyError))
    assert repr(wrapped) == "Raises rejecting ValueError, KeyError"
    ad = ADgradient("jax", standard_normal(5))
    assert repr(LogDensityRejectErrors(ad)) == (
        "Jax AD wrapper for TransformedLogDensity of dimension 5 "
        "rejecting InvalidLogDensityError"
    )


def test_construction_errors():
    with pytest.raises(ConfigurationError):
        LogDensityRejectErrors("a fish")
    with pytest.raises(ConfigurationError):
        LogDensityRejectErrors(standard_normal(2), ("not an exception",))
    with pytest.raises(ConfigurationError):
        LogDensityRejectErrors(standard_normal(2), ())


def test_reject_errors_around_nan_gradient():
    def logp(theta):
        # the gradient at the origin is 0 * inf = nan
        return jnp.sqrt(jnp.sum(theta ** 2))

    ad = ADgradient("jax", TransformedLogDensity(IdentityTransform(2), logp))
    with pytest.raises(InvalidLogDensityError):
        evaluate(ValueGradient, ad, np.zeros(2))
    assert evaluate(ValueGradient, LogDensityRejectErrors(ad), np.zeros(2)).is_infinite()


def test_configuration_errors_propagate():
    # ConfigurationError is a ValueError, but misconfiguration is never rejected
    wrapped = LogDensityRejectErrors(standard_normal(3), ValueError)
    with pytest.raises(ConfigurationError):
        wrapped.logdensity_and_gradient(np.zeros(3))
    with pytest.raises(ConfigurationError):
        wrapped.logdensity_gradient_and_hessian(np.zeros(3))
    raising = LogDensityRejectErrors(_Raises(ConfigurationError("bad setup")), ValueError)
    with pytest.raises(ConfigurationError, match="bad setup"):
        logdensity(raising, np.zeros(2))
    with pytest.raises(ConfigurationError):
        evaluate(Value, raising, np.zeros(2))


def test_wrong_length_is_not_rejected():
    wrapped = LogDensityRejectErrors(standard_normal(3), ValueError)
    with pytest.raises(ValueError, match="expected dimension 3"):
        logdensity(wrapped, np.zeros(2))
    with pytest.raises(ValueError, match="expected dimension 3"):
        evaluate(Value, wrapped, np.zeros(2))
    np.testing.assert_allclose(logdensity(wrapped, np.ones(3)), -1.5)
