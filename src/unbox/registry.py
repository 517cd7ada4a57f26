"""Storage for component records, keyed by component name."""

from typing import Any, Callable, Optional

from unbox.domain import ComponentRecord, ConfigurationEntry, ParameterMap
from unbox.errors import LifecycleError, NotFoundError

__all__ = ["ComponentRegistry"]


class ComponentRegistry:
    """Holds the lifecycle state of every component known to a container.

    Each component name maps to a single :class:`ComponentRecord`, holding its
    factory and parameter map, its value (once it has one), whether it has been
    sealed, and the configuration functions waiting for it to be activated.

    The registry enforces the lifecycle rules; resolution and invocation are
    the container's business.
    """

    def __init__(self):
        self._records: dict[str, ComponentRecord] = {}

    def exists(self, name: str) -> bool:
        """True if the component has a value or a registered factory."""
        record = self._records.get(name)
        return record is not None and (record.has_value or record.factory is not None)

    def is_active(self, name: str) -> bool:
        """True if a concrete value is stored for the component."""
        record = self._records.get(name)
        return record is not None and record.has_value

    def is_sealed(self, name: str) -> bool:
        """True if the component has been activated, after which it cannot change."""
        record = self._records.get(name)
        return record is not None and record.sealed

    def value(self, name: str) -> Any:
        """Return the stored value of an active component.

        Raises:
            NotFoundError: If no value is stored under the name.
        """
        if not self.is_active(name):
            raise NotFoundError(name)
        return self._records[name].value

    def factory(self, name: str) -> tuple[Callable, ParameterMap]:
        """Return the registered factory of a component, with its parameter map.

        Raises:
            NotFoundError: If no factory is registered under the name.
        """
        record = self._records.get(name)
        if record is None or record.factory is None:
            raise NotFoundError(name)
        return record.factory, record.factory_map

    def put_value(self, name: str, value: Any):
        """Store a value, which from now on takes precedence over any factory.

        Raises:
            LifecycleError: If the component has been sealed.
        """
        if self.is_sealed(name):
            raise LifecycleError(name, "attempted overwrite of initialized component")
        record = self._record(name)
        record.value = value
        record.has_value = True

    def replace_value(self, name: str, value: Any):
        """Replace the value of a component that is being configured.

        Unlike :meth:`put_value`, this is not subject to sealing: configuration
        functions applied to an active component may still replace its value.
        """
        record = self._record(name)
        record.value = value
        record.has_value = True

    def put_factory(self, name: str, factory: Callable, parameter_map: ParameterMap):
        """Register a factory, discarding any raw value stored under the name.

        Raises:
            LifecycleError: If the component has been sealed.
        """
        if self.is_sealed(name):
            raise LifecycleError(name, "attempted re-registration of active component")
        record = self._record(name)
        record.factory = factory
        record.factory_map = parameter_map
        record.value = None
        record.has_value = False

    def mark_active(self, name: str):
        """Seal the component. There is no way back."""
        self._record(name).sealed = True

    def queue_configuration(self, name: str, func: Callable, parameter_map: ParameterMap):
        """Append a configuration function to be applied on activation.

        Raises:
            NotFoundError: If the component has neither a value nor a factory.
        """
        if not self.exists(name):
            raise NotFoundError(name)
        self._records[name].configurations.append(ConfigurationEntry(func, parameter_map))

    def drain_configurations(self, name: str) -> list[ConfigurationEntry]:
        """Remove and return the pending configuration entries, in registration order."""
        record: Optional[ComponentRecord] = self._records.get(name)
        if record is None:
            return []
        entries, record.configurations = record.configurations, []
        return entries

    def _record(self, name: str) -> ComponentRecord:
        record = self._records.get(name)
        if record is None:
            record = self._records[name] = ComponentRecord()
        return record
