# logdensity_jax/core/capabilities.py
"""
Capability trait: which derivative orders a log density supports.

`capabilities(problem)` returns

* ``None`` when `problem` does not implement the log density interface at all,
* ``LogDensityOrder(K)`` when derivatives up to order ``K`` are available:
  ``0`` for the value only, ``1`` for value and gradient, ``2`` adds the Hessian.

Consumers compare with ``>=`` to check a minimum requirement, e.g.

    >>> capabilities(problem) >= LogDensityOrder(1)   # gradient available

while AD adapters use the strict ``>`` to verify they raised the order of the
object they wrap.
"""
from __future__ import annotations

import operator
from dataclasses import dataclass
from typing import Optional

from .base import LogDensityProblem
from .exceptions import ConfigurationError


@dataclass(frozen=True, order=True)
class LogDensityOrder:
    """Derivatives up to `order` are implemented. Immutable, totally ordered."""
    order: int

    def __post_init__(self):
        if isinstance(self.order, bool):
            raise ConfigurationError(f"Order must be an integer, got {self.order!r}.")
        try:
            order = operator.index(self.order)
        except TypeError:
            raise ConfigurationError(
                f"Order must be an integer, got {type(self.order).__name__}."
            ) from None
        if order < 0:
            raise ConfigurationError(f"Order must be non-negative, got {order}.")
        object.__setattr__(self, "order", order)

    def __repr__(self) -> str:
        return f"LogDensityOrder({self.order})"


def capabilities(obj) -> Optional[LogDensityOrder]:
    """
    The `LogDensityOrder` of `obj`, or ``None`` if it is not a log density.

    Never raises for unrecognised objects, so it can be used to probe support.
    """
    if isinstance(obj, type) or not isinstance(obj, LogDensityProblem):
        return None
    return obj.capabilities()


def require_capabilities(obj, minimum: LogDensityOrder) -> LogDensityOrder:
    """Return the capabilities of `obj`, raising unless they are at least `minimum`."""
    found = capabilities(obj)
    if found is None:
        raise ConfigurationError(f"{obj!r} does not implement the log density interface.")
    if not found >= minimum:
        raise ConfigurationError(
            f"{obj!r} supports derivatives up to order {found.order}, "
            f"order {minimum.order} is required."
        )
    return found
