# logdensity_jax/ad/registry.py
"""
Registry of automatic differentiation backends.

Backends are registered explicitly, by name, with a factory

    factory(problem, **kwargs) -> gradient-capable wrapper of `problem`

The built-in JAX backends are registered when `logdensity_jax.ad` is imported.
Other packages register theirs at import time:

    from logdensity_jax.ad import register_backend
    from .my_backend import make_my_gradient

    register_backend('my_backend', make_my_gradient)

and users make them available by importing that module, either directly, via
`load_backend_module('my_package.ad')`, or by listing it in the environment
variable ``LOGDENSITY_JAX_BACKEND_MODULES`` (comma-separated module paths,
imported when `logdensity_jax.ad` is imported).
"""
from __future__ import annotations

import importlib
import logging
import os
import warnings
from typing import Any, Callable, Dict, List

from ..core.exceptions import BackendUnavailableError, ConfigurationError

logger = logging.getLogger(__name__)

BACKEND_MODULES_ENV = "LOGDENSITY_JAX_BACKEND_MODULES"


class BackendRegistry:
    """
    Central registry for AD backends.

    Singleton pattern ensures consistency across the application.
    """

    _instance = None
    _backends: Dict[str, Callable[..., Any]]  # {name: factory}

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._backends = {}
        return cls._instance

    def register(
        self,
        name: str,
        factory: Callable[..., Any],
        override: bool = False,
    ) -> None:
        """
        Register a backend.

        Args:
            name: Backend name (e.g., 'jax', 'jax_forward')
            factory: Callable ``factory(problem, **kwargs)`` returning the AD wrapper
            override: If True, allow replacing an existing backend

        Raises:
            ConfigurationError: If the name is taken and override=False
        """
        if not callable(factory):
            raise ConfigurationError(f"Factory for backend '{name}' is not callable.")
        if name in self._backends and not override:
            raise ConfigurationError(
                f"Backend '{name}' already registered. Use override=True to replace."
            )
        self._backends[name] = factory
        logger.debug("registered AD backend '%s'", name)

    def unregister(self, name: str) -> None:
        """Remove a backend, raising BackendUnavailableError if it is unknown."""
        if name not in self._backends:
            raise BackendUnavailableError(name, self.list_backends())
        del self._backends[name]

    def get(self, name: str) -> Callable[..., Any]:
        """
        Get the factory of a backend.

        Raises:
            BackendUnavailableError: If no backend is registered under `name`
        """
        try:
            return self._backends[name]
        except KeyError:
            raise BackendUnavailableError(name, self.list_backends()) from None

    def list_backends(self) -> List[str]:
        """List all registered backend names."""
        return list(self._backends.keys())

    def load_module(self, module_path: str) -> int:
        """
        Import a module that registers backends at import time.

        Args:
            module_path: Dotted module path (e.g., 'my_package.ad')

        Returns:
            Number of backends registered during import
        """
        before_count = len(self._backends)

        try:
            importlib.import_module(module_path)
        except ImportError as e:
            warnings.warn(
                f"Could not import backend module '{module_path}': {e}",
                RuntimeWarning,
            )
            return 0

        return len(self._backends) - before_count


# Global registry instance
_registry = BackendRegistry()


def get_registry() -> BackendRegistry:
    """Get the global backend registry."""
    return _registry


def register_backend(
    name: str,
    factory: Callable[..., Any],
    override: bool = False,
) -> None:
    """Register an AD backend (convenience function), see `BackendRegistry.register`."""
    _registry.register(name, factory, override=override)


def get_backend(name: str) -> Callable[..., Any]:
    """Factory of the backend `name`; raises BackendUnavailableError if unknown."""
    return _registry.get(name)


def list_backends() -> List[str]:
    """Names of the registered backends."""
    return _registry.list_backends()


def load_backend_module(module_path: str) -> int:
    """Import a module registering backends, returning how many it registered."""
    return _registry.load_module(module_path)


def load_env_backend_modules() -> Dict[str, int]:
    """
    Import the modules listed in ``LOGDENSITY_JAX_BACKEND_MODULES``.

    Returns:
        Dictionary of {module_path: number of backends registered}
    """
    value = os.getenv(BACKEND_MODULES_ENV, "")
    modules = [m.strip() for m in value.split(",") if m.strip()]
    return {module: load_backend_module(module) for module in modules}
