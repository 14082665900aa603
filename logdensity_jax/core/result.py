# logdensity_jax/core/result.py
"""
Result types for log density evaluations, and the validity predicate.

A log density result is *valid* when

1. the value is a finite real number, and every derivative supplied with it
   consists of finite real numbers, or
2. the value is exactly ``-inf``; derivatives are then meaningless and ignored.

Anything else (``nan``, ``+inf``, complex, missing) is invalid.

Two evaluation paths exist:

* the *raw* path (``logdensity(problem, x)``, ``logdensity_and_gradient(problem, x)``)
  returns plain numbers and arrays and does not check them,
* the *checked* path (``evaluate(kind, problem, x)``) builds one of the result types
  below, which validate at construction and raise `InvalidLogDensityError`.

The result types double as the ``kind`` argument of ``evaluate``: the class
(or, for `ValueGradientBuffer`, the instance) knows how to obtain itself from a
problem and how to stand for a rejected (``-inf``) point.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

import numpy as np

from .exceptions import ConfigurationError, InvalidLogDensityError
from .problem import logdensity, logdensity_and_gradient, logdensity_gradient_and_hessian

_REAL_KINDS = "fiu"
_MISSING = object()


# -----------------------------
# Validity predicate
# -----------------------------

def _real_scalar(value) -> Optional[float]:
    """`value` as a float when it is a real scalar, otherwise None."""
    if value is None or isinstance(value, (bool, np.bool_)):
        return None
    arr = np.asarray(value)
    if arr.ndim != 0 or arr.dtype.kind not in _REAL_KINDS:
        return None
    return float(arr)


def _real_array(obj, ndim: int) -> Optional[np.ndarray]:
    """`obj` as a real array of the given rank, otherwise None."""
    if obj is None:
        return None
    try:
        arr = np.asarray(obj)
    except (TypeError, ValueError):
        # ragged or otherwise non-rectangular containers
        return None
    if arr.ndim != ndim or arr.dtype.kind not in _REAL_KINDS:
        return None
    return arr


def _valid_value(value) -> bool:
    v = _real_scalar(value)
    return v is not None and (np.isfinite(v) or v == -np.inf)


def _is_minus_inf(value) -> bool:
    return _real_scalar(value) == -np.inf


def is_valid_logdensity(value, gradient=_MISSING, hessian=_MISSING) -> bool:
    """
    Check whether a log density result is valid.

    Called with one, two or three arguments:

        is_valid_logdensity(value)
        is_valid_logdensity(value, gradient)
        is_valid_logdensity(value, gradient, hessian)

    The value must be a finite real or ``-inf``. When the value is ``-inf`` the
    derivatives are ignored, whatever their type or contents. Otherwise the
    gradient must be a one-dimensional real sequence of finite numbers, and the
    Hessian an ``(n, n)`` real array of finite numbers with ``n`` the gradient
    length. Symmetry of the Hessian is not checked.

    Pure predicate, never raises for malformed input.
    """
    if not _valid_value(value):
        return False
    if _is_minus_inf(value) or gradient is _MISSING:
        return True
    g = _real_array(gradient, 1)
    if g is None or not np.all(np.isfinite(g)):
        return False
    if hessian is _MISSING:
        return True
    h = _real_array(hessian, 2)
    if h is None or h.shape != (g.shape[0], g.shape[0]):
        return False
    return bool(np.all(np.isfinite(h)))


# -----------------------------
# Checks raising diagnostics
# -----------------------------

def _check_value(value) -> None:
    if not _valid_value(value):
        v = _real_scalar(value)
        raise InvalidLogDensityError("value", None, value if v is None else v)


def _check_gradient(gradient) -> np.ndarray:
    g = _real_array(gradient, 1)
    if g is None:
        raise InvalidLogDensityError("gradient", None, gradient)
    bad = np.flatnonzero(~np.isfinite(g))
    if bad.size:
        i = int(bad[0])
        raise InvalidLogDensityError("gradient", i, g[i].item())
    return g


def _check_hessian(hessian, n: int) -> None:
    h = _real_array(hessian, 2)
    if h is None or h.shape != (n, n):
        raise InvalidLogDensityError("hessian", None, hessian)
    bad = np.argwhere(~np.isfinite(h))
    if bad.size:
        i, j = (int(k) for k in bad[0])
        raise InvalidLogDensityError("hessian", (i, j), h[i, j].item())


def real_dtype(x) -> np.dtype:
    """Element type for synthesised results: that of `x` when it is real floating."""
    dtype = getattr(x, "dtype", None)
    if dtype is None:
        dtype = np.asarray(x).dtype
    dtype = np.dtype(dtype)
    return dtype if dtype.kind == "f" else np.dtype(np.float64)


def minus_inf_like(x):
    """``-inf`` in the real floating element type of `x` (float64 otherwise)."""
    return real_dtype(x).type(-np.inf)


def _check_problem_dimension(problem, x) -> int:
    n = problem.dimension()
    if len(x) != n:
        raise ValueError(f"Argument of length {len(x)}, expected dimension {n}.")
    return n


# -----------------------------
# Result types
# -----------------------------

class _Result:
    value: Any

    def is_finite(self) -> bool:
        return bool(np.isfinite(_real_scalar(self.value)))

    def is_infinite(self) -> bool:
        return bool(np.isinf(_real_scalar(self.value)))


@dataclass(frozen=True)
class Value(_Result):
    """
    The value of a log density at a given point.

    Construction checks that the value is finite or ``-inf``.
    """
    value: Any

    def __post_init__(self):
        _check_value(self.value)

    @classmethod
    def from_problem(cls, problem, x) -> "Value":
        return cls(logdensity(problem, x))

    @classmethod
    def rejected(cls, problem, x) -> "Value":
        return cls(minus_inf_like(x))


@dataclass(frozen=True, eq=False)
class ValueGradient(_Result):
    """
    Value and gradient of a log density at a given point.

    Construction checks that either both are finite, or the value is ``-inf``
    (the gradient is then not checked).
    """
    value: Any
    gradient: Any

    def __post_init__(self):
        _check_value(self.value)
        if not _is_minus_inf(self.value):
            _check_gradient(self.gradient)

    @classmethod
    def from_problem(cls, problem, x) -> "ValueGradient":
        return cls(*logdensity_and_gradient(problem, x))

    @classmethod
    def rejected(cls, problem, x) -> "ValueGradient":
        n = _check_problem_dimension(problem, x)
        return cls(minus_inf_like(x), np.empty(n, dtype=real_dtype(x)))


@dataclass(frozen=True, eq=False)
class ValueGradientHessian(_Result):
    """Value, gradient and Hessian of a log density at a given point."""
    value: Any
    gradient: Any
    hessian: Any

    def __post_init__(self):
        _check_value(self.value)
        if not _is_minus_inf(self.value):
            g = _check_gradient(self.gradient)
            _check_hessian(self.hessian, g.shape[0])

    @classmethod
    def from_problem(cls, problem, x) -> "ValueGradientHessian":
        return cls(*logdensity_gradient_and_hessian(problem, x))

    @classmethod
    def rejected(cls, problem, x) -> "ValueGradientHessian":
        n = _check_problem_dimension(problem, x)
        dtype = real_dtype(x)
        return cls(minus_inf_like(x), np.empty(n, dtype=dtype), np.empty((n, n), dtype=dtype))


@dataclass(frozen=True, eq=False)
class ValueGradientBuffer:
    """
    A vector that *may* be used for the gradient of a `ValueGradient`.

    The buffer is on loan to the evaluation: it may be overwritten and returned
    aliased inside the result, so the caller must not use it for anything else
    while that result is alive.
    """
    buffer: np.ndarray

    def __post_init__(self):
        buf = self.buffer
        if not isinstance(buf, np.ndarray):
            raise ConfigurationError(
                f"Gradient buffer must be a numpy.ndarray, got {type(buf).__name__}."
            )
        if buf.ndim != 1 or buf.dtype.kind != "f":
            raise ConfigurationError(
                f"Gradient buffer must be a real floating vector, "
                f"got dtype {buf.dtype} with {buf.ndim} dimension(s)."
            )

    def from_problem(self, problem, x) -> ValueGradient:
        return ValueGradient(*logdensity_and_gradient(problem, x, buffer=self.buffer))

    def rejected(self, problem, x) -> ValueGradient:
        return ValueGradient(minus_inf_like(self.buffer), self.buffer)


def fill_buffer(buffer: Optional[np.ndarray], gradient):
    """Copy `gradient` into `buffer` and return the buffer, or return `gradient` if none."""
    if buffer is None:
        return gradient
    buffer[...] = np.asarray(gradient)
    return buffer
