# logdensity_jax/inference/base.py
from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from ..core.base import LogDensityProblem


@runtime_checkable
class InferenceMethod(Protocol):
    """
    Protocol for methods consuming a log density.

    Design principles
    -----------------
    - An InferenceMethod consumes a LogDensityProblem through the evaluation
      functions of `logdensity_jax.core` only.
    - It queries `capabilities` once, before the first evaluation, and fails
      early if the order it needs is not available.
    - It MUST treat a ``-inf`` log density as a rejected point and never read
      the derivatives returned with it.

    Canonical contract
    ------------------
    The exact `run` signature is method-specific, but all methods:
    - accept a LogDensityProblem and an initial point,
    - return a frozen record of results (points, traces, diagnostics).
    """

    def run(self, problem: LogDensityProblem, *args, **kwargs) -> Any:
        ...
