# logdensity_jax/core/base.py
from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .capabilities import LogDensityOrder


@runtime_checkable
class LogDensityProblem(Protocol):
    """
    Protocol for log density problems.

    Design principles
    -----------------
    - A LogDensityProblem maps real vectors of length `dimension()` to a
      scalar log density.
    - The log density MAY be shifted by an arbitrary additive constant, as
      long as the constant is the same across calls (unnormalised posteriors).
    - It MUST be side-effect free.
    - It MUST declare what it can compute via `capabilities()`.

    Capability-dependent methods
    ----------------------------
    Objects reporting ``LogDensityOrder(1)`` or higher also implement

        logdensity_and_gradient(x, buffer=None) -> (value, gradient)

    and ``LogDensityOrder(2)`` adds

        logdensity_gradient_and_hessian(x) -> (value, gradient, hessian)

    Consumers query `capabilities` once and then evaluate repeatedly. They
    MUST NOT rely on any other internal structure.
    """

    def dimension(self) -> int:
        """Length of the vectors in the domain."""
        ...

    def capabilities(self) -> "LogDensityOrder":
        """Highest derivative order implemented."""
        ...

    def logdensity(self, x):
        """
        Evaluate the log density at `x`, without checking the result.

        Returns
        -------
        Real scalar, which could be ``nan`` or ``inf``: validity is the
        caller's business on this path.
        """
        ...
