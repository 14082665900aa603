# logdensity_jax/core/__init__.py
from .base import LogDensityProblem
from .capabilities import LogDensityOrder, capabilities, require_capabilities
from .exceptions import (
    LogDensityError,
    ConfigurationError,
    JacobianUnavailableError,
    InvalidLogDensityError,
    RejectLogDensity,
    BackendUnavailableError,
)
from .problem import (
    dimension,
    logdensity,
    logdensity_and_gradient,
    logdensity_gradient_and_hessian,
    evaluate,
    reject_logdensity,
)
from .result import (
    is_valid_logdensity,
    Value,
    ValueGradient,
    ValueGradientHessian,
    ValueGradientBuffer,
)
from .wrapper import LogDensityWrapper, innermost, wrapper_chain
from .transformed import TransformedLogDensity, Transformation, NO_LOGJAC
from .reject_errors import LogDensityRejectErrors
from .utilities import StressTestCFG, random_real, random_reals, stresstest

__all__ = [
    "LogDensityProblem",
    "LogDensityOrder",
    "capabilities",
    "require_capabilities",
    "LogDensityError",
    "ConfigurationError",
    "JacobianUnavailableError",
    "InvalidLogDensityError",
    "RejectLogDensity",
    "BackendUnavailableError",
    "dimension",
    "logdensity",
    "logdensity_and_gradient",
    "logdensity_gradient_and_hessian",
    "evaluate",
    "reject_logdensity",
    "is_valid_logdensity",
    "Value",
    "ValueGradient",
    "ValueGradientHessian",
    "ValueGradientBuffer",
    "LogDensityWrapper",
    "innermost",
    "wrapper_chain",
    "TransformedLogDensity",
    "Transformation",
    "NO_LOGJAC",
    "LogDensityRejectErrors",
    "StressTestCFG",
    "random_real",
    "random_reals",
    "stresstest",
]
