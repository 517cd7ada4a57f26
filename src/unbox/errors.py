"""Exceptions raised by the container."""

from typing import Optional

__all__ = [
    "ContainerError",
    "NotFoundError",
    "LifecycleError",
    "ResolutionError",
    "InvalidArgumentError",
    "CyclicDependencyError",
]


class ContainerError(Exception):
    """Base class for every error raised by the container."""

    pass


class NotFoundError(ContainerError, LookupError):
    """Raised when a component has neither a stored value nor a registered factory."""

    def __init__(self, name: str):
        super().__init__(f"undefined component: {name}")
        self.name = name


class LifecycleError(ContainerError):
    """Raised when an active component would be re-registered or overwritten."""

    def __init__(self, name: str, message: str):
        super().__init__(f"{message}: {name}")
        self.name = name


class ResolutionError(ContainerError):
    """Raised when a parameter cannot be satisfied by override, lookup or default.

    Attributes:
        parameter_name: Name of the unresolved parameter.
        type_name: The type name the resolver tried to look up, if any.
        location: Best-effort source location of the declaring callable.
    """

    def __init__(self, parameter_name: str, type_name: Optional[str], location: str):
        super().__init__(
            f'unable to resolve "{type_name or ""}" for parameter: {parameter_name} '
            f"in {location}"
        )
        self.parameter_name = parameter_name
        self.type_name = type_name
        self.location = location


class InvalidArgumentError(ContainerError, ValueError):
    """Raised for callables that cannot be called or types that cannot be created."""

    pass


class CyclicDependencyError(ContainerError):
    """Raised when a component depends, directly or indirectly, on itself."""

    def __init__(self, chain: list[str]):
        super().__init__(f"cyclic dependency: {' -> '.join(chain)}")
        self.chain = chain
