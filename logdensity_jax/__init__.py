# logdensity_jax/__init__.py
"""
A common interface for log densities in JAX.

Log density problems map flat real vectors to a log density value and, when
supported, its gradient and Hessian. Consumers (samplers, optimisers) depend
only on this interface:

    from logdensity_jax import TransformedLogDensity, ADgradient, logdensity_and_gradient
    from logdensity_jax.transforms import IdentityTransform

    problem = TransformedLogDensity(IdentityTransform(3), lambda x: -0.5 * jnp.sum(x ** 2))
    grad_problem = ADgradient("jax", problem)
    value, gradient = logdensity_and_gradient(grad_problem, jnp.zeros(3))

Layout:
  - core:       result validity, capabilities, evaluation, wrappers, stress testing
  - ad:         automatic differentiation backends and their registry
  - transforms: reference transformations for `TransformedLogDensity`
  - inference:  consumers of the interface (mode finding, MALA)
"""

__version__ = "0.1.0"

from .core import *  # noqa: F401,F403
from .core import __all__ as _core_all
from .ad import ADgradient, register_backend, list_backends

__all__ = list(_core_all) + ["ADgradient", "register_backend", "list_backends"]
