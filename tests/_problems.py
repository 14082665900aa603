"""Small log density problems shared by the tests."""
from dataclasses import dataclass

import jax.numpy as jnp
import numpy as np

from logdensity_jax import LogDensityOrder, TransformedLogDensity, reject_logdensity
from logdensity_jax.transforms import IdentityTransform


def normal_logdensity(theta):
    return -0.5 * jnp.sum(theta ** 2)


def standard_normal(n):
    return TransformedLogDensity(IdentityTransform(n), normal_logdensity)


@dataclass(frozen=True)
class Quadratic:
    """Order-1 problem written by hand: -0.5 * |x - mu|^2."""
    mu: np.ndarray

    def dimension(self):
        return len(self.mu)

    def capabilities(self):
        return LogDensityOrder(1)

    def logdensity(self, x):
        return -0.5 * float(np.sum((np.asarray(x) - self.mu) ** 2))

    def logdensity_and_gradient(self, x, buffer=None):
        g = self.mu - np.asarray(x, dtype=float)
        if buffer is not None:
            buffer[...] = g
            g = buffer
        return self.logdensity(x), g


@dataclass(frozen=True)
class Returns:
    """Order-1 problem returning fixed results, for checked evaluation."""
    value: float
    gradient: tuple = (0.0, 0.0)

    def dimension(self):
        return len(self.gradient)

    def capabilities(self):
        return LogDensityOrder(1)

    def logdensity(self, x):
        return self.value

    def logdensity_and_gradient(self, x, buffer=None):
        return self.value, np.asarray(self.gradient, dtype=float)


def positive_exponential(theta):
    if theta[0] <= 0:
        reject_logdensity()
    return -theta[0]


def nan_in_negative_orthant(theta):
    """nan when every component is negative, otherwise -|theta|^2."""
    theta = np.asarray(theta)
    if np.all(theta < 0):
        return np.nan
    return -np.sum(theta ** 2)
