# logdensity_jax/core/exceptions.py
"""Custom exceptions for logdensity-jax."""
from __future__ import annotations

from typing import Any, Optional, Sequence


class LogDensityError(Exception):
    """Base class for exceptions in the logdensity-jax package."""


class ConfigurationError(LogDensityError, ValueError):
    """Raised when an object is constructed with invalid parameters."""


class JacobianUnavailableError(ConfigurationError):
    """Raised when a transformation cannot correct for the log Jacobian."""


class InvalidLogDensityError(LogDensityError):
    """
    Raised when a log density result is neither finite nor ``-inf``.

    Attributes
    ----------
    component : str
        ``"value"``, ``"gradient"`` or ``"hessian"``.
    index : int | tuple | None
        Location of the offending element, ``None`` for the value itself or
        for a malformed container.
    value : Any
        The offending element (or container).
    """

    def __init__(self, component: str, index: Any, value: Any):
        self.component = component
        self.index = index
        self.value = value
        super().__init__(self._describe())

    def _describe(self) -> str:
        if self.index is None:
            return f"{self.component} is {self.value!r}"
        if isinstance(self.index, tuple):
            location = ", ".join(str(i) for i in self.index)
        else:
            location = str(self.index)
        return f"{self.component}[{location}] is {self.value!r}"


class RejectLogDensity(LogDensityError):
    """
    Signal for infeasible points, see `reject_logdensity`.

    Converted to a ``-inf`` log density where the scoring function is called;
    it is not expected to reach callers.
    """


class BackendUnavailableError(LogDensityError, LookupError):
    """Raised when an AD backend is requested that has not been registered."""

    def __init__(self, name: str, available: Optional[Sequence[str]] = None):
        self.name = name
        self.available = list(available or [])
        super().__init__(
            f"Don't know how to AD with '{name}'. "
            f"Available backends: {self.available}. "
            f"Register one with logdensity_jax.ad.register_backend('{name}', factory) "
            f"or import a module that does."
        )
