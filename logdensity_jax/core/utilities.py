# logdensity_jax/core/utilities.py
"""
Random reals and stress testing of log densities.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Union

import numpy as np

from .problem import dimension

logger = logging.getLogger(__name__)

SeedLike = Union[None, int, np.random.Generator]
ScaleLike = Union[float, np.ndarray]


@dataclass(frozen=True)
class StressTestCFG:
    """Configuration for `stresstest`."""
    N: int = 1000
    scale: ScaleLike = 1.0


def _random_reals_scale(rng: np.random.Generator, scale: ScaleLike, cauchy: bool):
    return np.asarray(scale) / rng.standard_normal() ** 2 if cauchy else np.asarray(scale) * 1.0


def random_real(scale: float = 1.0, cauchy: bool = False, rng: SeedLike = None) -> float:
    """
    Random real number.

    A standard normal draw, scaled with `scale`. When `cauchy`, the scale is
    further divided by the square of an independent standard normal, which
    gives heavy tails. `rng` is a `numpy.random.Generator` or a seed.
    """
    rng = np.random.default_rng(rng)
    return float(rng.standard_normal() * _random_reals_scale(rng, scale, cauchy))


def random_reals(
    n: int,
    scale: ScaleLike = 1.0,
    cauchy: bool = False,
    rng: SeedLike = None,
) -> np.ndarray:
    """
    Random vector in ℝⁿ of length `n`.

    Standard multivariate normal draws, scaled with `scale` (a scalar or a
    conformable vector). When `cauchy`, the whole vector is further divided by
    the square of one independent standard normal, giving a heavy-tailed
    distribution that still has independent signs across components.
    """
    rng = np.random.default_rng(rng)
    return rng.standard_normal(n) * _random_reals_scale(rng, scale, cauchy)


def stresstest(
    f: Callable,
    problem,
    N: Optional[int] = None,
    rng: SeedLike = None,
    scale: Optional[ScaleLike] = None,
    cfg: StressTestCFG = StressTestCFG(),
) -> List[np.ndarray]:
    """
    Test `problem` with random values.

    `N` random vectors are drawn with `random_reals(dimension(problem),
    cauchy=True, scale=scale)`, and each is used as an argument in
    ``f(problem, x)``. `logdensity`, `logdensity_and_gradient` or a checked
    ``lambda p, x: evaluate(Value, p, x)`` are recommended for `f`.

    When the call raises, the argument is recorded as a failure. Failures are
    returned in the order they were drawn; errors are reported as data, not
    propagated.

    `N` and `scale` default to the values in `cfg`.
    """
    N = cfg.N if N is None else N
    scale = cfg.scale if scale is None else scale
    rng = np.random.default_rng(rng)
    d = dimension(problem)
    failures = []
    for _ in range(N):
        x = random_reals(d, scale=scale, cauchy=True, rng=rng)
        try:
            f(problem, x)
        except Exception as e:
            logger.debug("stresstest failure at %s: %r", x, e)
            failures.append(x)
    logger.debug("stresstest of %r: %d failures in %d draws", problem, len(failures), N)
    return failures
