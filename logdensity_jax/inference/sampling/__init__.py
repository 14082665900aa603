# logdensity_jax/inference/sampling/__init__.py
"""
MCMC sampling kernels for log densities with gradients.
"""
from .mala import MALA, MALACFG, MALARun

__all__ = [
    "MALA", "MALACFG", "MALARun",
]
