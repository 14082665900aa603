# logdensity_jax/core/problem.py
"""
Evaluating log density problems.

These functions are what consumers (samplers, optimisers) call. The raw ones
return whatever the problem computes, unchecked:

    logdensity(problem, x)                          -> value
    logdensity_and_gradient(problem, x, buffer)     -> (value, gradient)
    logdensity_gradient_and_hessian(problem, x)     -> (value, gradient, hessian)

`evaluate(kind, problem, x)` is the checked path, where `kind` is one of the
result types in `result.py` (or a `ValueGradientBuffer` instance).
"""
from __future__ import annotations

from typing import Optional

import numpy as np

from .capabilities import LogDensityOrder, require_capabilities
from .exceptions import RejectLogDensity

_ORDER_GRADIENT = LogDensityOrder(1)
_ORDER_HESSIAN = LogDensityOrder(2)


def dimension(problem) -> int:
    """The dimension of the problem, ie the length of the vectors in its domain."""
    return problem.dimension()


def logdensity(problem, x):
    """Evaluate the log density of `problem` at `x` (unchecked)."""
    return problem.logdensity(x)


def logdensity_and_gradient(problem, x, buffer: Optional[np.ndarray] = None):
    """
    Evaluate the log density and its gradient (unchecked).

    When `buffer` is given the gradient *may* be written into it and returned
    aliased; the caller must not use the buffer elsewhere while the result is
    in use.
    """
    require_capabilities(problem, _ORDER_GRADIENT)
    if buffer is None:
        return problem.logdensity_and_gradient(x)
    return problem.logdensity_and_gradient(x, buffer=buffer)


def logdensity_gradient_and_hessian(problem, x):
    """Evaluate the log density, its gradient and Hessian (unchecked)."""
    require_capabilities(problem, _ORDER_HESSIAN)
    return problem.logdensity_gradient_and_hessian(x)


def evaluate(kind, problem, x):
    """
    Checked evaluation of `problem` at `x`.

    `kind` selects what is computed and returned: `Value`, `ValueGradient`,
    `ValueGradientHessian`, or a `ValueGradientBuffer` lending its vector for
    the gradient. Raises `InvalidLogDensityError` when the result is neither
    finite nor ``-inf``.

    Objects that need to intervene in checked evaluation (`LogDensityRejectErrors`)
    define a ``_evaluate_checked(kind, x)`` method, which is used instead.
    """
    hook = getattr(problem, "_evaluate_checked", None)
    if hook is not None:
        return hook(kind, x)
    return kind.from_problem(problem, x)


def reject_logdensity():
    """
    Make the enclosing problem return a ``-inf`` log density.

    Call from inside a log density function for infeasible points. Using this
    or returning ``-inf`` directly is a matter of convenience.
    """
    raise RejectLogDensity()
