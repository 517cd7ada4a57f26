import pytest

from unbox.errors import LifecycleError, NotFoundError
from unbox.registry import ComponentRegistry


@pytest.fixture
def registry():
    return ComponentRegistry()


def factory():
    return "built"


def test_unknown_component_does_not_exist(registry):
    assert not registry.exists("nothing")
    assert not registry.is_active("nothing")
    assert not registry.is_sealed("nothing")


def test_registered_factory_exists_but_is_not_active(registry):
    registry.put_factory("thing", factory, {0: "a"})

    assert registry.exists("thing")
    assert not registry.is_active("thing")
    assert registry.factory("thing") == (factory, {0: "a"})


def test_stored_value_makes_component_active(registry):
    registry.put_value("thing", None)

    assert registry.exists("thing")
    assert registry.is_active("thing")
    assert registry.value("thing") is None


def test_value_short_circuits_factory(registry):
    registry.put_factory("thing", factory, {})
    registry.put_value("thing", "injected")

    assert registry.value("thing") == "injected"
    assert registry.factory("thing") == (factory, {})


def test_factory_clears_stored_value(registry):
    registry.put_value("thing", "injected")
    registry.put_factory("thing", factory, {})

    assert not registry.is_active("thing")
    with pytest.raises(NotFoundError):
        registry.value("thing")


def test_sealed_component_cannot_change(registry):
    registry.put_value("thing", 1)
    registry.mark_active("thing")

    with pytest.raises(LifecycleError, match="attempted re-registration of active component: thing"):
        registry.put_factory("thing", factory, {})

    with pytest.raises(LifecycleError, match="attempted overwrite of initialized component: thing"):
        registry.put_value("thing", 2)

    registry.replace_value("thing", 3)
    assert registry.value("thing") == 3


def test_missing_factory_raises_not_found(registry):
    registry.put_value("thing", 1)

    with pytest.raises(NotFoundError, match="undefined component: thing"):
        registry.factory("thing")


def test_configurations_are_drained_in_order(registry):
    registry.put_factory("thing", factory, {})
    registry.queue_configuration("thing", str.upper, {})
    registry.queue_configuration("thing", str.lower, {"x": 1})

    entries = registry.drain_configurations("thing")

    assert [(e.func, e.parameter_map) for e in entries] == [(str.upper, {}), (str.lower, {"x": 1})]
    assert registry.drain_configurations("thing") == []


def test_queue_configuration_requires_component(registry):
    with pytest.raises(NotFoundError):
        registry.queue_configuration("nothing", str.upper, {})

