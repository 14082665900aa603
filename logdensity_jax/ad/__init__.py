# logdensity_jax/ad/__init__.py
"""
Automatic differentiation backends.

`ADgradient(kind, problem, **kwargs)` wraps a log density supporting value
evaluation into one that also computes derivatives, with the backend
registered under `kind`:

    'jax'          reverse mode, `jax.value_and_grad`
    'jax_forward'  forward mode, chunked (keyword ``chunk``)
    'jax_hessian'  gradient and Hessian (``LogDensityOrder(2)``)

Further backends are added with `register_backend`, see `registry`.
"""

from .registry import (
    BACKEND_MODULES_ENV,
    BackendRegistry,
    get_registry,
    register_backend,
    get_backend,
    list_backends,
    load_backend_module,
    load_env_backend_modules,
)
from .base import ADGradientWrapper, ADgradient
from .jax_reverse import JaxGradientCFG, JaxGradientLogDensity, jax_gradient
from .jax_forward import JaxForwardCFG, JaxForwardLogDensity, jax_forward_gradient
from .jax_hessian import JaxHessianCFG, JaxHessianLogDensity, jax_hessian

# --------------------------------------------------
# Registry
# --------------------------------------------------
register_backend("jax", jax_gradient)
register_backend("jax_forward", jax_forward_gradient)
register_backend("jax_hessian", jax_hessian)

load_env_backend_modules()

__all__ = [
    "BACKEND_MODULES_ENV",
    "BackendRegistry",
    "get_registry",
    "register_backend",
    "get_backend",
    "list_backends",
    "load_backend_module",
    "load_env_backend_modules",
    "ADGradientWrapper",
    "ADgradient",
    "JaxGradientCFG",
    "JaxGradientLogDensity",
    "jax_gradient",
    "JaxForwardCFG",
    "JaxForwardLogDensity",
    "jax_forward_gradient",
    "JaxHessianCFG",
    "JaxHessianLogDensity",
    "jax_hessian",
]
