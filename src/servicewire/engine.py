"""Instantiation engine building services on demand."""

import logging
from collections.abc import Mapping
from typing import Any

from servicewire.errors import (
    CircularReferenceError,
    InvalidCallError,
    InvalidDefinitionError,
)
from servicewire.factories import FactoryRegistration, FactoryRegistry
from servicewire.instances import InstanceRegistry
from servicewire.models import ServiceDefinition
from servicewire.protocols import ConfigProvider
from servicewire.resolver import ArgumentResolver
from servicewire.store import DefinitionStore

logger = logging.getLogger(__name__)


class InstantiationEngine:
    """Build, cache and configure service instances.

    Container-scope services are stored in the instance registry before their
    post-construction calls run, so a call may refer back to the service
    through another service. Prototype services are never cached.

    Services currently being built are tracked on a stack; re-entering one
    raises ``CircularReferenceError`` naming the whole chain.
    """

    def __init__(
        self,
        store: DefinitionStore,
        instances: InstanceRegistry,
        factories: FactoryRegistry,
        config: ConfigProvider | None = None,
    ) -> None:
        self._store = store
        self._instances = instances
        self._factories = factories
        self._resolver = ArgumentResolver(store, self.get, config)
        self._building: list[str] = []

    @property
    def resolver(self) -> ArgumentResolver:
        return self._resolver

    def get(self, name: str) -> Any:  # noqa: ANN401
        """Return the instance for ``name``, building it if needed.

        Returns:
            The instance, or None when no service of that name is defined.

        Raises:
            CircularReferenceError: If building ``name`` requires ``name``.
            InvalidDefinitionError: If the definition has no usable class.
            InvalidCallError: If a post-construction call is malformed.
            ResolutionError: If an argument cannot be resolved.

        """
        definition = self._store.definition(name)
        if definition is None:
            return None

        if not definition.is_prototype and name in self._instances:
            logger.debug("Returning cached singleton service: %s", name)
            return self._instances.get(name)

        if name in self._building:
            chain = " -> ".join([*self._building[self._building.index(name) :], name])
            raise CircularReferenceError(f"Circular reference detected: {chain}")

        self._building.append(name)
        try:
            return self._build(name, definition)
        finally:
            self._building.pop()

    def _build(self, name: str, definition: ServiceDefinition) -> Any:  # noqa: ANN401
        if definition.class_ is None:
            raise InvalidDefinitionError(f"Service {name} does not specify a class")

        registration = self._factories.lookup(definition.class_)
        arguments = self._resolver.resolve_all(name, definition.arguments)

        if definition.is_prototype:
            logger.debug("Creating prototype service: %s", name)
            instance = _invoke(registration.factory, arguments)
        else:
            logger.debug("Creating singleton service: %s", name)
            instance = _invoke(registration.factory, arguments)
            self._instances.store(name, instance)

        for call in definition.calls:
            self._process_call(name, registration, instance, call)
        return instance

    def _process_call(
        self,
        name: str,
        registration: FactoryRegistration,
        instance: Any,  # noqa: ANN401
        call: Any,  # noqa: ANN401
    ) -> None:
        if not isinstance(call, list | tuple) or not call or not isinstance(call[0], str):
            raise InvalidCallError(f"Invalid Service Call for: {name}")

        method = call[0]
        raw_arguments = call[1] if len(call) > 1 else None
        if isinstance(raw_arguments, list | tuple | Mapping):
            arguments = self._resolver.resolve_all(
                name, raw_arguments if isinstance(raw_arguments, Mapping) else list(raw_arguments)
            )
        else:
            arguments = []

        hook = registration.hooks.get(method)
        if hook is not None:
            _invoke(hook, arguments, instance)
            return

        target = getattr(instance, method, None)
        if not callable(target):
            raise InvalidCallError(f"Service {name} has no callable method '{method}'")
        _invoke(target, arguments)


def _invoke(
    func: Any,  # noqa: ANN401
    arguments: list[Any] | dict[str, Any],
    *leading: Any,  # noqa: ANN401
) -> Any:  # noqa: ANN401
    if isinstance(arguments, dict):
        return func(*leading, **arguments)
    return func(*leading, *arguments)
