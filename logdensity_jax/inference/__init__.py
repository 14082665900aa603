# logdensity_jax/inference/__init__.py
"""
Consumers of the log density interface.

Optimisers and samplers here use nothing but the evaluation functions and the
capability trait of `logdensity_jax.core`, so any conforming problem (a
`TransformedLogDensity` behind an AD wrapper, a hand-written class, a
`LogDensityRejectErrors` wrapper) can be plugged in.
"""

from .base import InferenceMethod
from .optimisation import ModeFinder, ModeFinderCFG, ModeFinderRun, find_mode
from .sampling import MALA, MALACFG, MALARun

__all__ = [
    "InferenceMethod",
    "ModeFinder", "ModeFinderCFG", "ModeFinderRun",
    "find_mode",
    "MALA", "MALACFG", "MALARun",
]
