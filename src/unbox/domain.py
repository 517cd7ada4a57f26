"""Domain models used throughout the container."""

from dataclasses import dataclass, field
from typing import Any, Callable, Optional

__all__ = ["ParameterMap", "ParameterDescriptor", "ConfigurationEntry", "ComponentRecord"]


ParameterMap = dict[Any, Any]
"""Normalised parameter-override map.

Keys are parameter names (``str``) or zero-based positional indices (``int``);
values are the arguments to supply, possibly :class:`~unbox.boxed.BoxedValue`
instances which are unboxed when consumed.
"""


@dataclass(frozen=True)
class ParameterDescriptor:
    """Describes one parameter of a callable, as seen by the resolver.

    Attributes:
        name: The parameter name.
        type_name: Name of the declared type, used for type-directed lookup.
            None if the parameter is not annotated.
        is_optional: True if the parameter declares a default value.
        default: The default value (only meaningful when ``is_optional``).
        keyword_only: True if the parameter must be passed by keyword.
    """

    name: str
    type_name: Optional[str]
    is_optional: bool = False
    default: Any = None
    keyword_only: bool = False


@dataclass(frozen=True)
class ConfigurationEntry:
    """A configuration function queued against a component, with its parameter map."""

    func: Callable
    parameter_map: ParameterMap


@dataclass
class ComponentRecord:
    """Everything the registry knows about a single component name.

    Attributes:
        factory: Function producing the component, if one is registered.
        factory_map: Parameter-override map applied when invoking ``factory``.
        value: The materialised (or directly injected) component value.
        has_value: True if ``value`` holds a component; None is a valid value.
        sealed: True once the component has been activated; irreversible.
        configurations: Configuration entries waiting for activation.
    """

    factory: Optional[Callable] = None
    factory_map: ParameterMap = field(default_factory=dict)
    value: Any = None
    has_value: bool = False
    sealed: bool = False
    configurations: list[ConfigurationEntry] = field(default_factory=list)
