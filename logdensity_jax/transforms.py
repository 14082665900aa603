# logdensity_jax/transforms.py
"""
Reference transformations for `TransformedLogDensity`.

These are minimal examples of the `Transformation` interface, useful for
testing and for problems that need no reparameterisation or only positivity.
Richer transformations belong to dedicated libraries; anything with
``dimension()`` and ``transform_and_logjac(x)`` can be used.
"""
from __future__ import annotations

from dataclasses import dataclass

import jax.numpy as jnp


@dataclass(frozen=True)
class IdentityTransform:
    """θ = x, with a zero log Jacobian."""
    n: int

    def dimension(self) -> int:
        return self.n

    def transform_and_logjac(self, x):
        return jnp.asarray(x), 0.0


@dataclass(frozen=True)
class ExpTransform:
    """Elementwise θ = exp(x), mapping ℝⁿ to the positive orthant."""
    n: int

    def dimension(self) -> int:
        return self.n

    def transform_and_logjac(self, x):
        x = jnp.asarray(x)
        return jnp.exp(x), jnp.sum(x)
