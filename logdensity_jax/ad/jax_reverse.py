# logdensity_jax/ad/jax_reverse.py
"""
Gradient via reverse-mode AD in JAX (`jax.value_and_grad`).
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Optional

import jax
import numpy as np

from ..core.result import fill_buffer
from .base import ADGradientWrapper, as_real_input, make_cfg


@dataclass(frozen=True)
class JaxGradientCFG:
    """
    Configuration for the reverse-mode JAX backend.

    jit: compile the value-and-gradient function with `jax.jit`. The inner
        log density must then be traceable: no Python control flow on values,
        and no exceptions raised from values (`reject_logdensity` included).
    """
    jit: bool = False


@dataclass(frozen=True, repr=False)
class JaxGradientLogDensity(ADGradientWrapper):
    """Gradient of the inner log density by reverse-mode AD."""
    inner: Any
    cfg: JaxGradientCFG = JaxGradientCFG()
    _value_and_grad: Callable = field(init=False, repr=False, compare=False)

    label = "Jax"

    def __post_init__(self):
        super().__post_init__()
        fn = jax.value_and_grad(self._logdensity_closure())
        object.__setattr__(self, "_value_and_grad", jax.jit(fn) if self.cfg.jit else fn)

    def logdensity_and_gradient(self, x, buffer: Optional[np.ndarray] = None):
        value, gradient = self._value_and_grad(as_real_input(x))
        return value, fill_buffer(buffer, gradient)

    def _describe_cfg(self) -> str:
        return ", w/ jit" if self.cfg.jit else ""


def jax_gradient(problem, cfg: Optional[JaxGradientCFG] = None, **kwargs) -> JaxGradientLogDensity:
    """
    ``ADgradient('jax', problem; jit=False)``

    Gradient using reverse-mode automatic differentiation via JAX. Keywords
    build a `JaxGradientCFG`.
    """
    return JaxGradientLogDensity(problem, make_cfg(JaxGradientCFG, cfg, **kwargs))
