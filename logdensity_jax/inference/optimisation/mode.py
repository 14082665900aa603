# logdensity_jax/inference/optimisation/mode.py
"""
Mode finding (maximum a posteriori point estimates).

Maximises the log density with a first-order `optax` optimiser, ie minimises

    E(x) = -logdensity(problem, x)

Points where the log density is ``-inf`` are outside the support: a step that
lands there is shortened (halved, up to `max_backtracks` times) and, failing
that, rejected, keeping the previous iterate.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Literal, Optional

import jax.numpy as jnp
import numpy as np
import optax

from ...core.capabilities import LogDensityOrder, require_capabilities
from ...core.problem import evaluate
from ...core.result import ValueGradient
from ..base import InferenceMethod

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ModeFinderCFG:
    """Configuration for mode finding."""
    steps: int = 200
    lr: float = 1e-2
    optimizer: Literal["sgd", "adam", "rmsprop"] = "adam"
    clip_grad_norm: Optional[float] = None
    max_backtracks: int = 10


@dataclass(frozen=True)
class ModeFinderRun:
    """Mode finding results."""
    x: Any
    logdensity_trace: jnp.ndarray  # shape [steps]
    grad_norm_trace: jnp.ndarray  # shape [steps]
    n_rejected: int = 0


class ModeFinder(InferenceMethod):
    """
    Gradient-based mode finder for log densities of order >= 1.

    Each step evaluates value and gradient (checked, so ``nan`` results raise
    `InvalidLogDensityError`), asks the optimiser for an update of the
    negated objective, and accepts the first candidate with a finite log
    density. Traces record the value and gradient norm at the start of each
    step.
    """

    def __init__(self, cfg: ModeFinderCFG = ModeFinderCFG()):
        self.cfg = cfg

    def _get_optimizer(self, lr: float):
        """Get optimizer based on configuration."""
        if self.cfg.optimizer == "sgd":
            optimizer = optax.sgd(lr)
        elif self.cfg.optimizer == "adam":
            optimizer = optax.adam(lr)
        elif self.cfg.optimizer == "rmsprop":
            optimizer = optax.rmsprop(lr)
        else:
            raise ValueError(f"Unknown optimizer: {self.cfg.optimizer}")
        if self.cfg.clip_grad_norm is not None:
            optimizer = optax.chain(optax.clip_by_global_norm(self.cfg.clip_grad_norm), optimizer)
        return optimizer

    def run(self, problem, x0) -> ModeFinderRun:
        require_capabilities(problem, LogDensityOrder(1))
        cfg = self.cfg
        optimizer = self._get_optimizer(cfg.lr)

        x = jnp.asarray(x0, dtype=jnp.result_type(float))
        current = evaluate(ValueGradient, problem, x)
        if current.is_infinite():
            raise ValueError("Initial point is outside the support (log density is -inf).")
        opt_state = optimizer.init(x)

        logdensity_trace = np.zeros(cfg.steps)
        grad_norm_trace = np.zeros(cfg.steps)
        n_rejected = 0
        for i in range(cfg.steps):
            grad = -jnp.asarray(current.gradient)
            logdensity_trace[i] = float(current.value)
            grad_norm_trace[i] = float(jnp.linalg.norm(grad))

            updates, opt_state = optimizer.update(grad, opt_state, params=x)
            for k in range(cfg.max_backtracks + 1):
                candidate = optax.apply_updates(x, updates * 0.5 ** k)
                result = evaluate(ValueGradient, problem, candidate)
                if result.is_finite():
                    x, current = candidate, result
                    break
            else:
                n_rejected += 1
                logger.debug("step %d rejected, log density -inf after %d backtracks",
                             i, cfg.max_backtracks)

        logger.debug("mode finder: %d steps, %d rejected, final log density %s",
                     cfg.steps, n_rejected, current.value)
        return ModeFinderRun(
            x=x,
            logdensity_trace=jnp.asarray(logdensity_trace),
            grad_norm_trace=jnp.asarray(grad_norm_trace),
            n_rejected=n_rejected,
        )


def find_mode(problem, x0, cfg: ModeFinderCFG = ModeFinderCFG()) -> ModeFinderRun:
    """Maximise the log density of `problem` starting from `x0`."""
    return ModeFinder(cfg).run(problem, x0)
