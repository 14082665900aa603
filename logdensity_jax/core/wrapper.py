# logdensity_jax/core/wrapper.py
from __future__ import annotations

from typing import List


class LogDensityWrapper:
    """
    Mixin for objects that wrap another log density, stored in the field `inner`.

    Carries no state: concrete wrappers are dataclasses declaring `inner`
    (plus whatever they need) and listing this mixin as a base.

    Defaults
    --------
    - `dimension()` and `capabilities()` are those of the inner object,
    - `logdensity(x)` evaluates the inner object,
    - `parent()` returns the inner object itself (not a copy).

    Wrappers override only what they change. Attributes of the inner object
    are NOT forwarded; use `parent()` to reach them.
    """

    __slots__ = ()

    def parent(self):
        return self.inner

    def dimension(self) -> int:
        return self.inner.dimension()

    def capabilities(self):
        return self.inner.capabilities()

    def logdensity(self, x):
        return self.inner.logdensity(x)


def wrapper_chain(problem) -> List:
    """The chain of log densities from `problem` inwards, outermost first."""
    chain = [problem]
    while isinstance(chain[-1], LogDensityWrapper):
        chain.append(chain[-1].parent())
    return chain


def innermost(problem):
    """The base log density at the bottom of a chain of wrappers."""
    return wrapper_chain(problem)[-1]
