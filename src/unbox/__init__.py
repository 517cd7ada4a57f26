"""Unbox dependency injection container.

Unbox is a small dependency injection container that maps component names to
lazily constructed values. Components are built on first use, by factory
functions or constructors whose arguments are resolved automatically: by
explicitly supplied values, by the declared type of each parameter, by the
parameter name, or by its default.

Key Features:
    - Lazy, single construction of components
    - Argument resolution by name, position, declared type and default
    - Boxed references that defer activation of dependencies until consumed
    - Configuration functions applied once, on first use, in order
    - Components are sealed once active

Basic Usage:
    >>> from unbox import Container
    >>>
    >>> container = Container()
    >>> container.set("database.dsn", "sqlite:///:memory:")
    >>>
    >>> @container.provides()
    ... def make_database(dsn: Annotated[str, "database.dsn"]) -> Database:
    ...     return Database(dsn)
    >>>
    >>> db = container.get(Database)

The package consists of several modules:
    - container: The Container facade and component lifecycle
    - resolver: Argument resolution
    - registry: Component records and lifecycle rules
    - introspection: Parameter descriptions of callables
    - boxed: Deferred values and component references
    - interfaces: Container, factory and provider interfaces
    - domain: Core domain models (ParameterDescriptor, ComponentRecord)
    - errors: Container exceptions
"""

from unbox.boxed import BoxedReference, BoxedValue
from unbox.container import Container
from unbox.errors import (
    ContainerError,
    CyclicDependencyError,
    InvalidArgumentError,
    LifecycleError,
    NotFoundError,
    ResolutionError,
)
from unbox.interfaces import ContainerInterface, FactoryInterface, ProviderInterface

__all__ = [
    "BoxedReference",
    "BoxedValue",
    "Container",
    "ContainerError",
    "ContainerInterface",
    "CyclicDependencyError",
    "FactoryInterface",
    "InvalidArgumentError",
    "LifecycleError",
    "NotFoundError",
    "ProviderInterface",
    "ResolutionError",
]
