"""Argument resolution: the heart of the container.

Given the parameters of a callable and a parameter-override map, the
:class:`Resolver` produces the complete list of arguments to call it with. For
each parameter, in declaration order, the first of these that applies wins:

1. a value supplied in the map under the parameter's name;
2. a value supplied in the map under the parameter's zero-based index;
3. the component registered under the parameter's declared type name;
4. the component registered under the parameter's name;
5. the parameter's default value.

A parameter satisfied by none of these is an error. Whichever way a value was
found, a :class:`~unbox.boxed.BoxedValue` is unboxed before it is used.

Note that a supplied value always wins, even ``None``: an explicit override
shadows an otherwise resolvable component.
"""

from collections.abc import Mapping
from typing import Any, Callable, Optional, TYPE_CHECKING

from unbox.boxed import BoxedValue
from unbox.domain import ParameterDescriptor, ParameterMap
from unbox.errors import ResolutionError
from unbox.introspection import describe_location

if TYPE_CHECKING:
    from unbox.interfaces import ContainerInterface

__all__ = ["Resolver", "normalize_map", "invoke"]


def normalize_map(parameter_map: Any) -> ParameterMap:
    """Normalise the accepted shapes of parameter-override map to a dict.

    Mappings are copied; lists and tuples supply positional arguments; None is
    an empty map, and any other single value is the first positional argument.

    Example:
        >>> normalize_map(["a", "b"])        # {0: "a", 1: "b"}
        >>> normalize_map({"path": "/tmp"})  # {"path": "/tmp"}
        >>> normalize_map("a")               # {0: "a"}
    """
    if parameter_map is None:
        return {}
    if isinstance(parameter_map, Mapping):
        return dict(parameter_map)
    if isinstance(parameter_map, (list, tuple)):
        return dict(enumerate(parameter_map))
    return {0: parameter_map}


class Resolver:
    """Resolve parameter lists against an override map and a container."""

    def __init__(self, container: "ContainerInterface"):
        self._container = container

    def resolve(
        self,
        parameters: list[ParameterDescriptor],
        parameter_map: ParameterMap,
        declared_by: Optional[Callable] = None,
    ) -> list[Any]:
        """Produce one argument per parameter, in declaration order.

        Args:
            parameters: Descriptors of the parameters to resolve.
            parameter_map: Normalised parameter-override map.
            declared_by: The callable declaring the parameters, used only to
                describe its location when resolution fails.

        Returns:
            The resolved arguments, with any boxed values unboxed.

        Raises:
            ResolutionError: If a parameter cannot be satisfied.
        """
        return [
            self._resolve_parameter(index, parameter, parameter_map, declared_by)
            for index, parameter in enumerate(parameters)
        ]

    def _resolve_parameter(
        self,
        index: int,
        parameter: ParameterDescriptor,
        parameter_map: ParameterMap,
        declared_by: Optional[Callable],
    ) -> Any:
        if parameter.name in parameter_map:
            value = parameter_map[parameter.name]
        elif index in parameter_map:
            value = parameter_map[index]
        elif parameter.type_name and self._container.has(parameter.type_name):
            value = self._container.get(parameter.type_name)
        elif self._container.has(parameter.name):
            value = self._container.get(parameter.name)
        elif parameter.is_optional:
            value = parameter.default
        else:
            location = describe_location(declared_by) if declared_by is not None else "<unknown>"
            raise ResolutionError(parameter.name, parameter.type_name, location)

        if isinstance(value, BoxedValue):
            value = value.unbox()

        return value


def invoke(func: Callable, parameters: list[ParameterDescriptor], arguments: list[Any]) -> Any:
    """Call ``func`` with resolved arguments, passing keyword-only parameters by keyword."""
    args = []
    kwargs = {}
    for parameter, argument in zip(parameters, arguments):
        if parameter.keyword_only:
            kwargs[parameter.name] = argument
        else:
            args.append(argument)
    return func(*args, **kwargs)
