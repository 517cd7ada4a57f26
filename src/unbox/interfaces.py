"""Abstract interfaces implemented by the container and its providers."""

from abc import ABC, abstractmethod
from typing import Any, TYPE_CHECKING

if TYPE_CHECKING:
    from unbox.container import Container

__all__ = ["ContainerInterface", "FactoryInterface", "ProviderInterface"]


class ContainerInterface(ABC):
    """Look up components by name."""

    @abstractmethod
    def get(self, name: Any) -> Any:
        """Return the component registered under ``name``."""

    @abstractmethod
    def has(self, name: Any) -> bool:
        """True if a component is defined under ``name``."""


class FactoryInterface(ABC):
    """Create instances, resolving their constructor arguments."""

    @abstractmethod
    def create(self, class_or_name: Any, parameter_map: Any = None) -> Any:
        """Create a new instance of the given class."""


class ProviderInterface(ABC):
    """A packaged set of registrations and configurations.

    Example:
        >>> class CacheProvider(ProviderInterface):
        ...     def register(self, container):
        ...         container.set("cache.path", "/tmp/cache")
        ...         container.register(Cache, FileCache, {"path": container.ref("cache.path")})
        >>>
        >>> container.add(CacheProvider())
    """

    @abstractmethod
    def register(self, container: "Container"):
        """Register components and configuration functions with the container."""
