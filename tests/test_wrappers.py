from dataclasses import dataclass
from typing import Any

import numpy as np

from logdensity_jax import (
    ADgradient,
    LogDensityOrder,
    LogDensityRejectErrors,
    LogDensityWrapper,
    capabilities,
    dimension,
    innermost,
    logdensity,
    wrapper_chain,
)

from _problems import standard_normal


@dataclass(frozen=True)
class Tempered(LogDensityWrapper):
    """Wrapper overriding only the value."""
    inner: Any
    beta: float = 0.5

    def logdensity(self, x):
        return self.beta * self.inner.logdensity(x)


def test_defaults_forward_to_inner():
    problem = standard_normal(3)
    tempered = Tempered(problem)
    assert dimension(tempered) == 3
    assert capabilities(tempered) == LogDensityOrder(0)
    assert tempered.parent() is problem
    np.testing.assert_allclose(logdensity(tempered, np.ones(3)), -0.75)


def test_attributes_are_not_forwarded():
    tempered = Tempered(standard_normal(3))
    assert not hasattr(tempered, "transformation")
    assert hasattr(tempered.parent(), "transformation")


def test_wrapper_chain():
    problem = standard_normal(2)
    ad = ADgradient("jax", Tempered(problem))
    outer = LogDensityRejectErrors(ad)
    chain = wrapper_chain(outer)
    assert chain[0] is outer
    assert chain[1] is ad
    assert chain[-1] is problem
    assert len(chain) == 4
    assert innermost(outer) is problem
    assert innermost(problem) is problem
    assert all(dimension(w) == 2 for w in chain)
