# logdensity_jax/ad/jax_hessian.py
"""
Gradient and Hessian via JAX (`jax.value_and_grad`, `jax.hessian`).
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Optional

import jax
import numpy as np

from ..core.capabilities import LogDensityOrder
from ..core.result import fill_buffer
from .base import ADGradientWrapper, as_real_input, make_cfg


@dataclass(frozen=True)
class JaxHessianCFG:
    """
    Configuration for the JAX Hessian backend.

    jit: compile the derivative functions with `jax.jit` (the inner log density
        must then be traceable).
    """
    jit: bool = False


@dataclass(frozen=True, repr=False)
class JaxHessianLogDensity(ADGradientWrapper):
    """
    Gradient and Hessian of the inner log density.

    The Hessian is computed forward-over-reverse; the value and gradient come
    from a separate reverse pass, so the Hessian is only paid for when asked.
    """
    inner: Any
    cfg: JaxHessianCFG = JaxHessianCFG()
    _value_and_grad: Callable = field(init=False, repr=False, compare=False)
    _hessian: Callable = field(init=False, repr=False, compare=False)

    order = LogDensityOrder(2)
    label = "JaxHessian"

    def __post_init__(self):
        super().__post_init__()
        f = self._logdensity_closure()
        value_and_grad, hessian = jax.value_and_grad(f), jax.hessian(f)
        if self.cfg.jit:
            value_and_grad, hessian = jax.jit(value_and_grad), jax.jit(hessian)
        object.__setattr__(self, "_value_and_grad", value_and_grad)
        object.__setattr__(self, "_hessian", hessian)

    def logdensity_and_gradient(self, x, buffer: Optional[np.ndarray] = None):
        value, gradient = self._value_and_grad(as_real_input(x))
        return value, fill_buffer(buffer, gradient)

    def logdensity_gradient_and_hessian(self, x):
        x = as_real_input(x)
        value, gradient = self._value_and_grad(x)
        return value, gradient, self._hessian(x)

    def _describe_cfg(self) -> str:
        return ", w/ jit" if self.cfg.jit else ""


def jax_hessian(problem, cfg: Optional[JaxHessianCFG] = None, **kwargs) -> JaxHessianLogDensity:
    """
    ``ADgradient('jax_hessian', problem; jit=False)``

    Gradient and Hessian using automatic differentiation via JAX. Keywords
    build a `JaxHessianCFG`.
    """
    return JaxHessianLogDensity(problem, make_cfg(JaxHessianCFG, cfg, **kwargs))
