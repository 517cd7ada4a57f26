"""Boxed values: arguments whose expansion is deferred until they are consumed.

A boxed value may be placed in a parameter-override map without doing any work.
The resolver unboxes it exactly once, at the moment it fills the argument slot
the value was supplied for.

Example:
    >>> container.register("repo", UserRepository, {"cache": container.ref("cache")})
    >>> # "cache" is not activated until "repo" is built for the first time
"""

from abc import ABC, abstractmethod
from typing import Any, TYPE_CHECKING

if TYPE_CHECKING:
    from unbox.interfaces import ContainerInterface

__all__ = ["BoxedValue", "BoxedReference"]


class BoxedValue(ABC):
    """A value which is expanded only when the resolver consumes it."""

    @abstractmethod
    def unbox(self) -> Any:
        """Expand and return the boxed value."""


class BoxedReference(BoxedValue):
    """A deferred reference to a named component in a container."""

    def __init__(self, container: "ContainerInterface", name: str):
        self._container = container
        self.name = name

    def unbox(self) -> Any:
        return self._container.get(self.name)

    def __repr__(self) -> str:
        return f"BoxedReference({self.name!r})"
