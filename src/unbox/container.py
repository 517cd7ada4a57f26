"""The dependency injection container.

Components are registered under a name (or a class, which names the component
by its qualified name), and constructed lazily on first use. Arguments of
factory functions, constructors and configuration functions are resolved by
the :class:`~unbox.resolver.Resolver`.

Example:
    >>> container = Container()
    >>> container.set("cache.path", "/tmp/cache")
    >>> container.register(Cache, FileCache, {"path": container.ref("cache.path")})
    >>> container.configure(Cache, lambda cache: cache.clear())
    >>>
    >>> @container.provides()
    ... def make_user_repository(cache: Cache) -> UserRepository:
    ...     return UserRepository(cache)
    >>>
    >>> users = container.get(UserRepository)  # builds FileCache, clears it, then the repository
"""

import inspect
import logging
import pkgutil
import threading
from typing import Any, Callable

from unbox.boxed import BoxedReference
from unbox.domain import ParameterMap
from unbox.errors import CyclicDependencyError, InvalidArgumentError
from unbox.interfaces import ContainerInterface, FactoryInterface, ProviderInterface
from unbox.introspection import component_name, describe_parameters, inferred_name
from unbox.registry import ComponentRegistry
from unbox.resolver import Resolver, invoke, normalize_map

__all__ = ["Container"]

logger = logging.getLogger(__name__)


class Container(ContainerInterface, FactoryInterface):
    """A simple dependency injection container.

    Each component moves from *registered* (a factory is known) to *active*
    (its value has been built) the first time it is fetched with :meth:`get`.
    Active components are sealed: they can no longer be re-registered or
    overwritten.

    The container registers itself, already active, under its own class name
    and under the names of the interfaces it implements, so that factories may
    depend on it.

    Every public operation holds a single re-entrant lock for its duration.
    """

    def __init__(self):
        self._registry = ComponentRegistry()
        self._resolver = Resolver(self)
        self._lock = threading.RLock()
        self._activating: list[str] = []

        for key in (type(self), Container, ContainerInterface, FactoryInterface):
            name = component_name(key)
            if not self._registry.is_sealed(name):
                self._registry.put_value(name, self)
                self._registry.mark_active(name)

    def get(self, name: Any) -> Any:
        """Resolve the component with the given name, building it on first use.

        On first use, the factory's parameters are resolved and the factory is
        invoked; then any queued configuration functions are applied in the
        order they were added, and the component is sealed.

        Raises:
            NotFoundError: If nothing is defined under the name.
            ResolutionError: If a factory or configuration parameter is unresolvable.
            CyclicDependencyError: If the component depends on itself.
        """
        name = component_name(name)

        with self._lock:
            if self._registry.is_active(name):
                self._registry.mark_active(name)
                return self._registry.value(name)

            factory, factory_map = self._registry.factory(name)

            if name in self._activating:
                chain = self._activating[self._activating.index(name):] + [name]
                raise CyclicDependencyError(chain)

            self._activating.append(name)
            try:
                value = self._call(factory, factory_map)
            finally:
                self._activating.pop()

            self._registry.put_value(name, value)

            for entry in self._registry.drain_configurations(name):
                self._apply_configuration(name, entry.func, entry.parameter_map)

            self._registry.mark_active(name)
            logger.debug("Activated component %s", name)

            return self._registry.value(name)

    def set(self, name: Any, value: Any):
        """Directly inject a component that has already been created.

        Raises:
            LifecycleError: If the component is already active.
        """
        name = component_name(name)
        with self._lock:
            self._registry.put_value(name, value)
        logger.debug("Injected value for component %s", name)

    def register(self, name: Any, source: Any = None, parameter_map: Any = None):
        """Register a component for dependency injection.

        The ``source`` decides how the component is built:

        * a function (or any callable that is not a class) is the factory, and
          ``parameter_map`` supplies some of its arguments;
        * a class, or the dotted import path of one, is created with
          ``parameter_map`` supplying some of its constructor arguments; this
          registers an implementation under another name, e.g. an interface;
        * a dict, list or tuple supplies constructor arguments for ``name``
          itself, which must be a class or the import path of one;
        * None creates ``name`` itself, using ``parameter_map``.

        Any value in a parameter map may be boxed, e.g. using :meth:`ref`, in
        which case it is unboxed as late as possible.

        Example:
            >>> container.register(FileCache)
            >>> container.register(FileCache, ["/tmp/cache"])
            >>> container.register(Cache, FileCache, {"path": container.ref("cache.path")})
            >>> container.register("db", lambda dsn: connect(dsn), {"dsn": "sqlite://"})

        Raises:
            LifecycleError: If the component is already active.
            InvalidArgumentError: If ``source`` is of an unsupported kind.
        """
        key = name
        name = component_name(name)

        if source is None:
            factory = lambda: self.create(key, parameter_map)
            factory_map: ParameterMap = {}
        elif isinstance(source, (dict, list, tuple)):
            factory = lambda: self.create(key, source)
            factory_map = {}
        elif inspect.isclass(source) or isinstance(source, str):
            factory = lambda: self.create(source, parameter_map)
            factory_map = {}
        elif callable(source):
            factory = source
            factory_map = normalize_map(parameter_map)
        else:
            raise InvalidArgumentError(f"unsupported component source for {name}: {source!r}")

        with self._lock:
            self._registry.put_factory(name, factory, factory_map)
        logger.debug("Registered component %s", name)

    def alias(self, name: Any, ref_name: Any):
        """Register a component as an alias of another, resolved on first use."""
        ref_name = component_name(ref_name)
        self.register(name, lambda: self.get(ref_name))

    def configure(self, name: Any, func: Callable, parameter_map: Any = None):
        """Register a configuration function, applied as late as possible.

        The configuration function receives the component as its first argument,
        and any further parameters are resolved and injected. If it returns
        anything other than None, the returned value replaces the component.

        If the component is already active, the function is applied immediately.

        Example:
            >>> container.configure("num_kittens", lambda num_kittens: num_kittens + 6)
            >>> container.configure(Stack, lambda stack, auth: stack.push(auth), {"auth": container.ref("auth")})

        Raises:
            NotFoundError: If nothing is defined under the name.
            InvalidArgumentError: If ``func`` is not callable.
        """
        if not callable(func):
            raise InvalidArgumentError(f"expected callable, got {func!r}")

        name = component_name(name)
        parameter_map = normalize_map(parameter_map)

        with self._lock:
            if self._registry.is_active(name):
                self._apply_configuration(name, func, parameter_map)
                return

            self._registry.queue_configuration(name, func, parameter_map)
        logger.debug("Queued configuration of component %s", name)

    def has(self, name: Any) -> bool:
        """True if a component is defined under the name, active or not."""
        return self._registry.exists(component_name(name))

    def is_active(self, name: Any) -> bool:
        """True if the component holds a concrete value."""
        return self._registry.is_active(component_name(name))

    def call(self, target: Any, parameter_map: Any = None) -> Any:
        """Call any callable, injecting its arguments, and return the result.

        Works for functions, lambdas, bound methods, static and class methods,
        and objects implementing ``__call__``. A ``(target, "method_name")``
        pair calls the named method of an object or class.

        Raises:
            InvalidArgumentError: If the target is not callable.
            ResolutionError: If a parameter is unresolvable.
        """
        if isinstance(target, tuple) and len(target) == 2 and isinstance(target[1], str):
            owner, method_name = target
            method = getattr(owner, method_name, None)
            if method is None:
                raise InvalidArgumentError(f"{owner!r} has no method {method_name}")
            target = method

        if not callable(target):
            raise InvalidArgumentError(f"expected callable, got {target!r}")

        with self._lock:
            return self._call(target, normalize_map(parameter_map))

    def create(self, class_or_name: Any, parameter_map: Any = None) -> Any:
        """Create a new instance of a class, injecting its constructor arguments.

        Args:
            class_or_name: The class, or its dotted import path.
            parameter_map: Constructor arguments to supply by name or position.

        Raises:
            InvalidArgumentError: If the class is unknown, not a class or abstract.
            ResolutionError: If a constructor parameter is unresolvable.
        """
        cls = _load_class(class_or_name)
        with self._lock:
            return self._call(cls, normalize_map(parameter_map))

    def ref(self, name: Any) -> BoxedReference:
        """Create a boxed reference to a component, expanded only when consumed.

        Compared to passing ``container.get("cache")``, the referenced component
        is not activated until the component using it is built, which leaves
        room to register or configure it later.
        """
        return BoxedReference(self, component_name(name))

    def add(self, provider: ProviderInterface):
        """Apply a packaged set of registrations to this container."""
        if not isinstance(provider, ProviderInterface):
            raise InvalidArgumentError(f"{provider!r} is not a provider")
        provider.register(self)
        logger.debug("Added provider %s", type(provider).__qualname__)

    def provides(self, name: Any = None, parameter_map: Any = None) -> Callable:
        """Decorator registering a function or class as a component factory.

        Args:
            name: Optional component name; otherwise inferred from the class,
                the function's return annotation, or the function name with any
                ``make_`` prefix removed.
            parameter_map: Optional parameter-override map for the factory.

        Example:
            >>> @container.provides()
            ... def make_database(dsn: Annotated[str, "database.dsn"]) -> Database:
            ...     return Database(dsn)
        """

        def decorator(target):
            self.register(name if name is not None else inferred_name(target), target, parameter_map)
            return target

        return decorator

    def configures(self, name: Any, parameter_map: Any = None) -> Callable:
        """Decorator adding the decorated function as a configuration of a component."""

        def decorator(func):
            self.configure(name, func, parameter_map)
            return func

        return decorator

    def __getitem__(self, name: Any) -> Any:
        return self.get(name)

    def __contains__(self, name: Any) -> bool:
        return self.has(name)

    def _call(self, func: Callable, parameter_map: ParameterMap) -> Any:
        parameters = describe_parameters(func)
        arguments = self._resolver.resolve(parameters, parameter_map, func)
        return invoke(func, parameters, arguments)

    def _apply_configuration(self, name: str, func: Callable, parameter_map: ParameterMap):
        parameters = describe_parameters(func)

        # the component itself is the first argument, unless supplied explicitly
        if parameters and parameters[0].name not in parameter_map and 0 not in parameter_map:
            parameter_map = {**parameter_map, 0: self._registry.value(name)}

        arguments = self._resolver.resolve(parameters, parameter_map, func)
        value = invoke(func, parameters, arguments)

        if value is not None:
            self._registry.replace_value(name, value)
        logger.debug("Applied configuration %s to component %s", getattr(func, "__qualname__", func), name)


def _load_class(class_or_name: Any) -> type:
    cls = class_or_name
    if isinstance(class_or_name, str):
        try:
            cls = pkgutil.resolve_name(class_or_name)
        except (ImportError, AttributeError, ValueError) as e:
            raise InvalidArgumentError(f"unable to create component: {class_or_name}") from e

    if not inspect.isclass(cls):
        raise InvalidArgumentError(f"unable to create component: {class_or_name!r} is not a class")

    if inspect.isabstract(cls):
        raise InvalidArgumentError(f"unable to create instance of abstract class: {component_name(cls)}")

    return cls
