from typing import Annotated, Callable, Optional

import pytest

import deferred_annotations
from unbox.domain import ParameterDescriptor
from unbox.errors import InvalidArgumentError
from unbox.introspection import (
    component_name,
    describe_location,
    describe_parameters,
    inferred_name,
    type_name,
)

Greeter = Callable[[str], str]


class Cache:
    def __init__(self, path: str, size: int = 10):
        self.path = path
        self.size = size


class Service:
    def handle(self, cache: Cache, *, verbose: bool = False):
        pass

    def __call__(self, request):
        pass


def test_component_name_of_string_is_unchanged():
    assert component_name("cache.path") == "cache.path"


def test_component_name_of_class_is_qualified():
    assert component_name(Cache) == f"{__name__}.Cache"
    assert component_name(int) == "builtins.int"


def test_component_name_of_typing_construct():
    assert component_name(Greeter) == str(Greeter)


def test_type_name_of_empty_annotation_is_none():
    def func(a):
        pass

    assert describe_parameters(func)[0].type_name is None


def test_type_name_uses_annotated_qualifier():
    assert type_name(Annotated[Cache, "file_cache"]) == "file_cache"
    assert type_name(Annotated[Cache, 42]) == component_name(Cache)


def test_type_name_unwraps_optional():
    assert type_name(Optional[Cache]) == component_name(Cache)
    assert type_name(Cache | None) == component_name(Cache)


def test_type_name_of_string_annotation_is_looked_up_without_evaluation():
    assert type_name("Cache", globals()) == component_name(Cache)
    assert type_name("int", {}) == "builtins.int"


def test_type_name_of_unknown_string_annotation_is_kept():
    assert type_name("NotDefinedHere", globals()) == "NotDefinedHere"
    assert type_name("Cache.missing", globals()) == "Cache.missing"
    assert type_name("list[Cache]", globals()) == "list[Cache]"


def test_string_annotation_naming_a_non_type_is_kept():
    assert type_name("pytest.fixture", globals()) == "pytest.fixture"
    assert type_name("pytest", globals()) == "pytest"
    assert type_name("Greeter", globals()) == str(Greeter)


def test_string_annotations_use_declaring_module():
    def func(cache: "Cache"):
        pass

    assert describe_parameters(func) == [ParameterDescriptor("cache", component_name(Cache))]


def test_describe_constructor_parameters():
    assert describe_parameters(Cache) == [
        ParameterDescriptor("path", "builtins.str"),
        ParameterDescriptor("size", "builtins.int", True, 10),
    ]


def test_describe_bound_method_parameters():
    assert describe_parameters(Service().handle) == [
        ParameterDescriptor("cache", component_name(Cache)),
        ParameterDescriptor("verbose", "builtins.bool", True, False, True),
    ]


def test_describe_invokable_object_parameters():
    assert describe_parameters(Service()) == [ParameterDescriptor("request", None)]


def test_describe_class_without_constructor():
    class Empty:
        pass

    assert describe_parameters(Empty) == []


def test_describe_uninspectable_callable_raises():
    with pytest.raises(InvalidArgumentError, match="unable to inspect"):
        describe_parameters(42)


def test_inferred_name():
    def make_database_url():
        pass

    def make_greeter() -> Greeter:
        pass

    def plain():
        pass

    assert inferred_name(Cache) == component_name(Cache)
    assert inferred_name(make_database_url) == "database_url"
    assert inferred_name(make_greeter) == str(Greeter)
    assert inferred_name(plain) == "plain"


def test_describe_location_of_function():
    def func():
        pass

    location = describe_location(func)
    assert "test_describe_location_of_function.<locals>.func" in location
    assert "test_introspection.py" in location


def test_describe_location_of_class_and_builtin():
    assert "Cache" in describe_location(Cache)
    assert describe_location(len) == "len"


def test_postponed_annotations_keep_qualifiers_and_optional():
    assert describe_parameters(deferred_annotations.connect) == [ParameterDescriptor("db", "primary")]
    assert describe_parameters(deferred_annotations.use) == [
        ParameterDescriptor("cache", component_name(deferred_annotations.Cache), True, None)
    ]
    assert inferred_name(deferred_annotations.make_cache) == component_name(deferred_annotations.Cache)


def test_unevaluable_postponed_annotations_fall_back_to_plain_lookup():
    assert describe_parameters(deferred_annotations.charge) == [
        ParameterDescriptor("amount", "Decimal"),
        ParameterDescriptor("cache", component_name(deferred_annotations.Cache)),
    ]


def test_none_annotation_has_no_type_name():
    def func(nothing: None):
        pass

    def make_nothing() -> None:
        pass

    assert describe_parameters(func) == [ParameterDescriptor("nothing", None)]
    assert inferred_name(make_nothing) == "nothing"
