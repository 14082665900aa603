# logdensity_jax/core/transformed.py
"""
Transformed log density (typically Bayesian inference).

A flat vector ``x`` of length ``transformation.dimension()`` is mapped to a
general object ``θ`` (a dict or named tuple is recommended for clean code),
the log density function is evaluated at ``θ``, and the log absolute Jacobian
determinant of the transformation is added:

    logdensity(x) = logjac(x) + log_density_function(θ(x))
"""
from __future__ import annotations

import operator
from dataclasses import dataclass
from typing import Any, Callable, Protocol, Tuple, runtime_checkable

from .base import LogDensityProblem
from .capabilities import LogDensityOrder
from .exceptions import ConfigurationError, JacobianUnavailableError, RejectLogDensity
from .result import minus_inf_like


class _NoLogJac:
    """Sentinel type for transformations without a log Jacobian correction."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NO_LOGJAC"


NO_LOGJAC = _NoLogJac()


@runtime_checkable
class Transformation(Protocol):
    """
    What `TransformedLogDensity` needs from a transformation.

    `transform_and_logjac` returns ``(θ, logjac)``, where ``logjac`` is the log
    absolute determinant of the Jacobian at ``x``, or `NO_LOGJAC` when the
    transformation cannot provide it.
    """

    def dimension(self) -> int:
        ...

    def transform_and_logjac(self, x) -> Tuple[Any, Any]:
        ...


@dataclass(frozen=True, repr=False)
class TransformedLogDensity(LogDensityProblem):
    """
    A log density defined through a transformation of a flat vector.

    `log_density_function(θ)` is expected to return a real number, and may be
    shifted by a constant consistent across calls. For zero densities or
    infeasible ``θ``, return ``-inf`` or call `reject_logdensity()`; for
    efficient inference, prefer a `transformation` that avoids such points.

    It is recommended that `log_density_function` is a callable object that
    also encapsulates the data of the problem.

    Supports value evaluation only (``LogDensityOrder(0)``); wrap it with
    `ADgradient` for derivatives.
    """
    transformation: Transformation
    log_density_function: Callable[[Any], Any]

    def __post_init__(self):
        if not isinstance(self.transformation, Transformation):
            raise ConfigurationError(
                f"{self.transformation!r} does not provide dimension() and "
                f"transform_and_logjac()."
            )
        if not callable(self.log_density_function):
            raise ConfigurationError("log_density_function must be callable.")
        n = self.transformation.dimension()
        try:
            n = operator.index(n)
        except TypeError:
            raise ConfigurationError(f"Dimension must be an integer, got {n!r}.") from None
        if n < 1:
            raise ConfigurationError(f"Dimension must be positive, got {n}.")

    def dimension(self) -> int:
        """The dimension of the problem, ie the length of the vectors in its domain."""
        return self.transformation.dimension()

    def capabilities(self) -> LogDensityOrder:
        return LogDensityOrder(0)

    def logdensity(self, x):
        n = self.dimension()
        if len(x) != n:
            raise ValueError(f"Argument of length {len(x)}, expected dimension {n}.")
        theta, logjac = self.transformation.transform_and_logjac(x)
        if logjac is NO_LOGJAC:
            raise JacobianUnavailableError(
                f"Could not correct for the Jacobian of {self.transformation!r}."
            )
        try:
            return logjac + self.log_density_function(theta)
        except RejectLogDensity:
            return minus_inf_like(x)

    def __repr__(self) -> str:
        return f"TransformedLogDensity of dimension {self.dimension()}"
