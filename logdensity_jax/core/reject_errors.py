# logdensity_jax/core/reject_errors.py
"""
Catching errors and treating them as a ``-inf`` log density.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Tuple, Type, Union

import numpy as np

from .capabilities import LogDensityOrder, capabilities, require_capabilities
from .exceptions import ConfigurationError, InvalidLogDensityError
from .problem import evaluate, logdensity_and_gradient, logdensity_gradient_and_hessian
from .result import _check_problem_dimension, minus_inf_like, real_dtype
from .wrapper import LogDensityWrapper

ErrorTypes = Union[Type[Exception], Tuple[Type[Exception], ...]]

_ORDER_GRADIENT = LogDensityOrder(1)
_ORDER_HESSIAN = LogDensityOrder(2)


@dataclass(frozen=True, repr=False)
class LogDensityRejectErrors(LogDensityWrapper):
    """
    Wrap a log density so that `errors` raised while evaluating it are caught
    and replaced with a ``-inf`` value.

    `errors` defaults to `InvalidLogDensityError`, ie results that are neither
    finite nor ``-inf`` in checked evaluation (`evaluate`). Errors of other
    types propagate unchanged.

    For gradient entry points a gradient of the expected length and element
    type is synthesised; its contents are arbitrary, as derivatives are
    meaningless at ``-inf``. A lent buffer is returned as the gradient.

    Notes
    -----
    Use cautiously, as catching errors can mask bugs. The recommended use case
    is catching quirks and corner cases of AD; `stresstest` is an alternative.
    Since some AD transformations do not handle ``try``/``except``, use this as
    the outermost wrapper.
    """
    inner: Any
    errors: ErrorTypes = (InvalidLogDensityError,)

    def __post_init__(self):
        errors = (self.errors,) if isinstance(self.errors, type) else tuple(self.errors)
        if not errors or not all(
            isinstance(e, type) and issubclass(e, Exception) for e in errors
        ):
            raise ConfigurationError(
                f"errors must be exception classes, got {self.errors!r}."
            )
        object.__setattr__(self, "errors", errors)
        if capabilities(self.inner) is None:
            raise ConfigurationError(
                f"{self.inner!r} does not implement the log density interface."
            )

    # Misconfiguration (wrong length, missing capability) is checked outside
    # the guard and ConfigurationError always propagates, whatever `errors` is.

    def logdensity(self, x):
        _check_problem_dimension(self, x)
        try:
            return self.inner.logdensity(x)
        except ConfigurationError:
            raise
        except self.errors:
            return minus_inf_like(x)

    def logdensity_and_gradient(self, x, buffer: Optional[np.ndarray] = None):
        n = _check_problem_dimension(self, x)
        require_capabilities(self.inner, _ORDER_GRADIENT)
        try:
            return logdensity_and_gradient(self.inner, x, buffer)
        except ConfigurationError:
            raise
        except self.errors:
            if buffer is None:
                return minus_inf_like(x), np.empty(n, dtype=real_dtype(x))
            return minus_inf_like(buffer), buffer

    def logdensity_gradient_and_hessian(self, x):
        n = _check_problem_dimension(self, x)
        require_capabilities(self.inner, _ORDER_HESSIAN)
        try:
            return logdensity_gradient_and_hessian(self.inner, x)
        except ConfigurationError:
            raise
        except self.errors:
            dtype = real_dtype(x)
            return minus_inf_like(x), np.empty(n, dtype=dtype), np.empty((n, n), dtype=dtype)

    def _evaluate_checked(self, kind, x):
        """Checked evaluation (see `evaluate`), with validity errors inside the guard."""
        _check_problem_dimension(self, x)
        try:
            return evaluate(kind, self.inner, x)
        except ConfigurationError:
            raise
        except self.errors:
            return kind.rejected(self, x)

    def __repr__(self) -> str:
        names = ", ".join(e.__name__ for e in self.errors)
        return f"{self.inner!r} rejecting {names}"
