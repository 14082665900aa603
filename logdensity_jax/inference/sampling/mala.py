# logdensity_jax/inference/sampling/mala.py
"""
Metropolis-Adjusted Langevin Algorithm (MALA).

MALA is a gradient-based MCMC method that uses Langevin dynamics to propose moves.
It is simpler than HMC (no momentum, single step) but more efficient than random-walk
Metropolis-Hastings by using gradient information.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import jax.numpy as jnp
from jax import random

from ...core.capabilities import LogDensityOrder, require_capabilities
from ...core.problem import evaluate
from ...core.result import ValueGradient
from ..base import InferenceMethod

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MALACFG:
    """Configuration for MALA kernel."""
    step_size: float = 1e-2
    n_samples: int = 256
    n_warmup: int = 256


@dataclass(frozen=True)
class MALARun:
    """MALA run results."""
    samples: Any  # shape [n_samples, dimension]
    accept_rate: float
    logdensity_trace: jnp.ndarray  # shape [n_samples]


class MALA(InferenceMethod):
    """
    Metropolis-Adjusted Langevin Algorithm (MALA).

    MALA uses Langevin dynamics to propose moves:
        x_proposed = x_current + (step_size / 2) * grad_logp(x_current) + sqrt(step_size) * noise

    where noise ~ N(0, I). Evaluations are checked: an invalid result raises
    `InvalidLogDensityError`, while a proposal at ``-inf`` is rejected outright
    without reading its gradient.

    The loop runs in Python, so the log density may branch on values or call
    `reject_logdensity`; jit the gradient inside the AD wrapper instead.
    """

    def __init__(self, cfg: MALACFG = MALACFG()):
        self.cfg = cfg

    def _log_proposal(self, x_from, x_to, grad_from):
        """Log density of proposing x_to from x_from, up to a constant."""
        mean = x_from + 0.5 * self.cfg.step_size * grad_from
        return -0.5 * jnp.sum((x_to - mean) ** 2) / self.cfg.step_size

    def _mala_step(self, problem, state):
        """Single MALA step on state = (x, ValueGradient at x, key)."""
        x_current, current, key = state
        step_size = self.cfg.step_size
        key, subkey1, subkey2 = random.split(key, 3)

        noise = random.normal(subkey1, x_current.shape, dtype=x_current.dtype)
        x_proposed = x_current + 0.5 * step_size * current.gradient + jnp.sqrt(step_size) * noise
        proposed = evaluate(ValueGradient, problem, x_proposed)
        if proposed.is_infinite():
            return (x_current, current, key), 0.0

        log_accept_ratio = (
            proposed.value - current.value
            + self._log_proposal(x_proposed, x_current, proposed.gradient)
            - self._log_proposal(x_current, x_proposed, current.gradient)
        )
        accept_prob = float(jnp.minimum(1.0, jnp.exp(log_accept_ratio)))
        if float(random.uniform(subkey2)) < accept_prob:
            return (x_proposed, proposed, key), accept_prob
        return (x_current, current, key), accept_prob

    def run(self, problem, x0, *, key) -> MALARun:
        """
        Run MALA sampling.

        Args:
            problem: log density of order >= 1 (e.g. wrapped with `ADgradient`)
            x0: initial point, with a finite log density
            key: PRNG key

        Returns:
            MALARun with samples, accept_rate, and logdensity_trace
        """
        require_capabilities(problem, LogDensityOrder(1))
        cfg = self.cfg

        x = jnp.asarray(x0, dtype=jnp.result_type(float))
        current = evaluate(ValueGradient, problem, x)
        if current.is_infinite():
            raise ValueError("Initial point is outside the support (log density is -inf).")
        state = (x, current, key)

        # Warmup
        for _ in range(cfg.n_warmup):
            state, _ = self._mala_step(problem, state)

        # Sampling
        samples = []
        logdensity_trace = []
        accept_probs = []
        for _ in range(cfg.n_samples):
            state, accept_prob = self._mala_step(problem, state)
            samples.append(state[0])
            logdensity_trace.append(state[1].value)
            accept_probs.append(accept_prob)

        accept_rate = float(jnp.mean(jnp.asarray(accept_probs)))
        logger.debug("MALA: %d samples, accept rate %.3f", cfg.n_samples, accept_rate)
        return MALARun(
            samples=jnp.stack(samples),
            accept_rate=accept_rate,
            logdensity_trace=jnp.asarray(logdensity_trace),
        )
