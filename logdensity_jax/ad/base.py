# logdensity_jax/ad/base.py
"""
Wrappers for automatic differentiation.

An AD wrapper takes a log density that supports value evaluation and makes it
compute gradients (and, for some backends, Hessians) with an AD library. The
value itself is forwarded to the wrapped object unchanged.
"""
from __future__ import annotations

import warnings
from typing import ClassVar

import jax.numpy as jnp

from ..core.capabilities import LogDensityOrder, capabilities
from ..core.exceptions import ConfigurationError
from ..core.wrapper import LogDensityWrapper
from .registry import get_backend


class ADGradientWrapper(LogDensityWrapper):
    """
    Mixin for AD wrappers: a `LogDensityWrapper` raising the derivative order.

    Subclasses are dataclasses with an `inner` field (the wrapped log density)
    and a `cfg` field (backend configuration, a frozen dataclass), define
    `logdensity_and_gradient(x, buffer=None)`, and set

    - `order`: the `LogDensityOrder` they report,
    - `label`: the backend name shown in `repr`.

    The value (`logdensity`) is that of the inner object. Errors raised by the
    inner object propagate; the wrappers never catch them.
    """

    __slots__ = ()

    order: ClassVar[LogDensityOrder] = LogDensityOrder(1)
    label: ClassVar[str] = "AD"

    def __post_init__(self):
        inner_capabilities = capabilities(self.inner)
        if inner_capabilities is None:
            raise ConfigurationError(
                f"{self.inner!r} does not implement the log density interface."
            )
        if not self.order > inner_capabilities:
            warnings.warn(
                f"{self.label} AD wrapper does not raise the derivative order of "
                f"{self.inner!r} ({inner_capabilities!r}).",
                RuntimeWarning,
            )

    def capabilities(self) -> LogDensityOrder:
        return self.order

    def _logdensity_closure(self):
        """Function evaluating the inner log density, to be differentiated."""
        inner = self.inner
        return lambda x: inner.logdensity(x)

    def _describe_cfg(self) -> str:
        """Configuration suffix of `repr`, empty by default."""
        return ""

    def __repr__(self) -> str:
        return f"{self.label} AD wrapper for {self.inner!r}{self._describe_cfg()}"


def as_real_input(x):
    """`x` as a JAX array with a floating element type, so it can be differentiated."""
    x = jnp.asarray(x)
    if not jnp.issubdtype(x.dtype, jnp.floating):
        x = x.astype(jnp.result_type(float))
    return x


def make_cfg(cfg_cls, cfg=None, **kwargs):
    """`cfg`, or a `cfg_cls` built from the keyword arguments of a backend factory."""
    if cfg is not None:
        if kwargs:
            raise ConfigurationError("Pass either cfg or keyword arguments, not both.")
        return cfg
    try:
        return cfg_cls(**kwargs)
    except TypeError as e:
        raise ConfigurationError(f"Invalid options for {cfg_cls.__name__}: {e}") from e


def ADgradient(kind: str, problem, **kwargs):
    """
    Wrap `problem` using automatic differentiation to obtain a gradient.

    `kind` names a registered backend, e.g.

        ADgradient('jax', problem)
        ADgradient('jax_forward', problem, chunk=2)

    Keyword arguments are passed to the backend factory. Raises
    `BackendUnavailableError` if no backend is registered under `kind`; see
    `list_backends()` and `register_backend`.
    """
    return get_backend(kind)(problem, **kwargs)
