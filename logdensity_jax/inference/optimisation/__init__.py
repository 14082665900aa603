# logdensity_jax/inference/optimisation/__init__.py
from .mode import ModeFinder, ModeFinderCFG, ModeFinderRun, find_mode

__all__ = [
    "ModeFinder", "ModeFinderCFG", "ModeFinderRun",
    "find_mode",
]
