"""Introspection utilities describing callables to the resolver.

The resolver never inspects a callable directly; it consumes the ordered list of
:class:`~unbox.domain.ParameterDescriptor` produced here. Declared types are
reduced to *names*: nothing is imported in order to describe a parameter, so
a component may be registered under a type name long before (or without ever)
loading the corresponding class. String annotations are evaluated against the
names the declaring module already holds; if that fails, each one is looked up
as a plain dotted name instead.
"""

import builtins
import inspect
import re
import sys
import types
from typing import Annotated, Any, Callable, Optional, Union, get_args, get_origin, get_type_hints

from unbox.domain import ParameterDescriptor
from unbox.errors import InvalidArgumentError

__all__ = [
    "component_name",
    "type_name",
    "inferred_name",
    "describe_parameters",
    "describe_location",
]

_DOTTED_NAME = re.compile(r"[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)*")

_VARIADIC = (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)

_MISSING = object()


def component_name(key: Any) -> str:
    """Normalise a component key to the string the registry stores it under.

    Strings are used as they are. Classes are named by their fully qualified
    name; any other typing construct by its string representation.

    Example:
        >>> component_name("cache")           # "cache"
        >>> component_name(FileCache)         # "myapp.cache.FileCache"
        >>> component_name(Callable[[], int]) # "typing.Callable[[], int]"
    """
    if isinstance(key, str):
        return key
    if isinstance(key, type) and not isinstance(key, types.GenericAlias):
        return f"{key.__module__}.{key.__qualname__}"
    return str(key)


def type_name(annotation: Any, scope: Optional[dict[str, Any]] = None) -> Optional[str]:
    """Derive the type name used for type-directed lookup from an annotation.

    Args:
        annotation: A parameter or return annotation, possibly a string.
        scope: Globals of the declaring callable, used to look up string
            annotations without evaluating them.

    Returns:
        The type name, or None if the annotation is empty.

    Example:
        >>> type_name(Cache)                     # "myapp.Cache"
        >>> type_name(Annotated[Cache, "redis"]) # "redis"
        >>> type_name(Optional[Cache])           # "myapp.Cache"
        >>> type_name("Cache", vars(myapp))      # "myapp.Cache"
    """
    if annotation is inspect.Parameter.empty or annotation is None or annotation is type(None):
        return None

    if isinstance(annotation, str):
        return _type_name_from_string(annotation, scope or {})

    origin = get_origin(annotation)

    if origin is Annotated:
        base_type, *metadata = get_args(annotation)
        qualifier = next((m for m in metadata if isinstance(m, str)), None)
        return qualifier or type_name(base_type, scope)

    if origin is Union or origin is types.UnionType:
        members = [a for a in get_args(annotation) if a is not type(None)]
        if len(members) == 1:
            return type_name(members[0], scope)

    return component_name(annotation)


def _type_name_from_string(annotation: str, scope: dict[str, Any]) -> str:
    # plain lookups only: an unknown name is kept as written
    path = annotation.strip()
    if not _DOTTED_NAME.fullmatch(path):
        return annotation

    head, *attributes = path.split(".")
    target = scope.get(head, _MISSING)
    if target is _MISSING:
        target = getattr(builtins, head, _MISSING)

    for attribute in attributes:
        if target is _MISSING:
            break
        target = getattr(target, attribute, _MISSING)

    if isinstance(target, type) or get_origin(target) is not None:
        return component_name(target)
    return annotation


def inferred_name(target: Any) -> str:
    """Derive a component name for a decorated provider.

    Classes are named by their qualified name. Functions are named by their
    return annotation if they have one, otherwise by the function name with
    any ``make_`` prefix removed.

    Example:
        >>> inferred_name(Database)             # "myapp.Database"
        >>> inferred_name(make_db)              # "myapp.Database" if annotated "-> Database"
        >>> inferred_name(make_database_url)    # "database_url" if unannotated
    """
    if inspect.isclass(target):
        return component_name(target)

    try:
        return_annotation = inspect.signature(target).return_annotation
    except (TypeError, ValueError):
        return_annotation = inspect.Signature.empty

    if return_annotation is not inspect.Signature.empty:
        return_annotation = _evaluated_hints(target).get("return", return_annotation)
        provided = type_name(return_annotation, _scope_of(target))
        if provided is not None:
            return provided

    if target.__name__.startswith("make_"):
        return target.__name__[5:]
    return target.__name__


def describe_parameters(target: Callable) -> list[ParameterDescriptor]:
    """Describe the resolvable parameters of a callable or class constructor.

    Variadic parameters (``*args`` and ``**kwargs``) are left out, since there
    is nothing to resolve them against.

    Raises:
        InvalidArgumentError: If the callable's signature cannot be inspected.
    """
    try:
        signature = inspect.signature(target)
    except (TypeError, ValueError) as e:
        raise InvalidArgumentError(f"unable to inspect parameters of {target!r}: {e}") from e

    scope = _scope_of(target)
    hints = _evaluated_hints(target)
    return [
        _make_descriptor(parameter, hints.get(parameter.name, parameter.annotation), scope)
        for parameter in signature.parameters.values()
        if parameter.kind not in _VARIADIC
    ]


def _make_descriptor(
    parameter: inspect.Parameter, annotation: Any, scope: dict[str, Any]
) -> ParameterDescriptor:
    has_default = parameter.default is not inspect.Parameter.empty
    return ParameterDescriptor(
        parameter.name,
        type_name(annotation, scope),
        has_default,
        parameter.default if has_default else None,
        parameter.kind is inspect.Parameter.KEYWORD_ONLY,
    )


def describe_location(target: Any) -> str:
    """Best-effort description of where a callable is declared, for diagnostics."""
    func = _function_of(target)
    label = getattr(target, "__qualname__", None) or repr(target)
    try:
        func = inspect.unwrap(func)
        return f"{label} (file: {inspect.getsourcefile(func)}, line {func.__code__.co_firstlineno})"
    except (TypeError, AttributeError, ValueError):
        return label


def _function_of(target: Any) -> Any:
    if inspect.isclass(target):
        return target.__init__
    if hasattr(target, "__func__"):
        return target.__func__
    if inspect.isfunction(target):
        return target
    return getattr(type(target), "__call__", target)


def _scope_of(target: Any) -> dict[str, Any]:
    if inspect.isclass(target):
        module = sys.modules.get(target.__module__)
        return vars(module) if module is not None else {}
    return getattr(_function_of(target), "__globals__", {})


def _evaluated_hints(target: Any) -> dict[str, Any]:
    try:
        return get_type_hints(_function_of(target), include_extras=True)
    except (NameError, AttributeError, SyntaxError, TypeError):
        # e.g. names imported only when TYPE_CHECKING: annotations stay unevaluated
        return {}
