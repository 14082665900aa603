# logdensity_jax/ad/jax_forward.py
"""
Gradient via forward-mode AD in JAX.

The log density is linearised once at ``x`` (`jax.linearize`), then the
linear map is pushed along the standard basis vectors, `chunk` directions at
a time (`jax.vmap`). Larger chunks use more memory and fewer passes.
"""
from __future__ import annotations

import operator
from dataclasses import dataclass, field
from typing import Any, Optional

import jax
import jax.numpy as jnp
import numpy as np

from ..core.exceptions import ConfigurationError
from ..core.result import fill_buffer
from .base import ADGradientWrapper, as_real_input, make_cfg

# Default chunk sizes are capped here, as in most forward-mode AD libraries.
DEFAULT_CHUNK_THRESHOLD = 12


def default_chunk(dimension: int) -> int:
    return min(dimension, DEFAULT_CHUNK_THRESHOLD)


@dataclass(frozen=True)
class JaxForwardCFG:
    """
    Configuration for the forward-mode JAX backend.

    chunk: number of directional derivatives computed per pass, an integer in
        ``[1, dimension]``; `None` uses `default_chunk(dimension)`.
    """
    chunk: Optional[int] = None


@dataclass(frozen=True, repr=False)
class JaxForwardLogDensity(ADGradientWrapper):
    """Gradient of the inner log density by chunked forward-mode AD."""
    inner: Any
    cfg: JaxForwardCFG = JaxForwardCFG()
    chunk: int = field(init=False, compare=False)

    label = "JaxForward"

    def __post_init__(self):
        super().__post_init__()
        n = self.dimension()
        chunk = default_chunk(n) if self.cfg.chunk is None else self.cfg.chunk
        try:
            chunk = operator.index(chunk)
        except TypeError:
            raise ConfigurationError(f"Chunk size must be an integer, got {chunk!r}.") from None
        if not 1 <= chunk <= n:
            raise ConfigurationError(f"Chunk size must be in [1, {n}], got {chunk}.")
        object.__setattr__(self, "chunk", chunk)

    def logdensity_and_gradient(self, x, buffer: Optional[np.ndarray] = None):
        x = as_real_input(x)
        n = x.shape[0]
        value, pushforward = jax.linearize(self._logdensity_closure(), x)
        basis = jnp.eye(n, dtype=x.dtype)
        pushforward_chunk = jax.vmap(pushforward)
        gradient = jnp.concatenate(
            [pushforward_chunk(basis[i:i + self.chunk]) for i in range(0, n, self.chunk)]
        )
        return value, fill_buffer(buffer, gradient)

    def _describe_cfg(self) -> str:
        return f", w/ chunk size {self.chunk}"


def jax_forward_gradient(
    problem, cfg: Optional[JaxForwardCFG] = None, **kwargs
) -> JaxForwardLogDensity:
    """
    ``ADgradient('jax_forward', problem; chunk=None)``

    Gradient using forward-mode automatic differentiation via JAX. Keywords
    build a `JaxForwardCFG`; in particular the chunk size can be set with
    ``chunk``.
    """
    return JaxForwardLogDensity(problem, make_cfg(JaxForwardCFG, cfg, **kwargs))
