"""Factory registry mapping class identities to factories and call hooks.

A service definition's ``class`` is a key into this registry. Each
registration carries the factory that builds the instance and an optional
table of named post-construction hooks, so ``calls`` entries can be
expressed as data without relying on attribute lookup.
"""

import importlib
import inspect
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, TypeAlias

from servicewire.errors import InvalidDefinitionError

logger = logging.getLogger(__name__)

Factory: TypeAlias = Callable[..., Any]
Hook: TypeAlias = Callable[..., Any]
ClassIdentity: TypeAlias = str | Callable[..., Any]


@dataclass(frozen=True)
class FactoryRegistration:
    """A factory together with its named post-construction hooks.

    Attributes:
        key: The class identity the factory is registered under.
        factory: Callable invoked with the resolved arguments.
        hooks: Mapping of method name to a callable taking the instance
            followed by the resolved call arguments.

    """

    key: ClassIdentity
    factory: Factory
    hooks: Mapping[str, Hook] = field(default_factory=dict)


class FactoryRegistry:
    """Registry of factories keyed by class identity.

    Example:
        ```python
        factories = FactoryRegistry()

        @factories.provides("Mailer", hooks={"use_transport": Mailer.set_transport})
        class Mailer:
            ...

        factories.register("Db", lambda dsn: Db.connect(dsn))
        ```

    """

    def __init__(self, allow_imports: bool = False) -> None:
        """Initialise an empty registry.

        Args:
            allow_imports: Resolve unregistered string identities such as
                ``package.module:Name`` by importing them.

        """
        self._registrations: dict[ClassIdentity, FactoryRegistration] = {}
        self._allow_imports = allow_imports

    def register(
        self,
        key: ClassIdentity,
        factory: Factory | None = None,
        hooks: Mapping[str, Hook] | None = None,
    ) -> FactoryRegistration:
        """Register a factory under a class identity.

        Args:
            key: Identity used in the definition's ``class`` field.
            factory: Callable building the instance. Defaults to ``key``
                when ``key`` is itself callable.
            hooks: Named post-construction hooks.

        Returns:
            The stored registration.

        Raises:
            InvalidDefinitionError: If no factory is given and ``key`` is not callable.

        """
        if factory is None:
            if not callable(key):
                raise InvalidDefinitionError(f"No factory given for class '{key}'")
            factory = key
        registration = FactoryRegistration(key, factory, dict(hooks or {}))
        self._registrations[key] = registration
        logger.debug("Registered factory for class: %s", _describe(key))
        return registration

    def provides(
        self, key: str | None = None, hooks: Mapping[str, Hook] | None = None
    ) -> Callable[[Factory], Factory]:
        """Decorator registering a class or function as a factory.

        Args:
            key: Class identity; defaults to the decorated object's ``__name__``.
            hooks: Named post-construction hooks.

        """

        def decorator(obj: Factory) -> Factory:
            if not (inspect.isclass(obj) or inspect.isfunction(obj)):
                raise InvalidDefinitionError(f"{obj} is not a class or function")
            self.register(key or obj.__name__, obj, hooks)
            return obj

        return decorator

    def lookup(self, key: ClassIdentity) -> FactoryRegistration:
        """Find the registration for a class identity.

        A string matching the ``module:qualname`` import path of a callable
        registered under its own object finds that registration, so definitions
        read back from a container cache keep their factory and hooks.
        Unregistered callables act as their own factory. Unregistered strings
        are imported when imports are allowed.

        Raises:
            InvalidDefinitionError: If the identity cannot be resolved.

        """
        registration = self._registrations.get(key)
        if registration is not None:
            return registration
        if isinstance(key, str):
            registration = self._by_import_path(key)
            if registration is not None:
                return registration
        if callable(key):
            return FactoryRegistration(key, key)
        if self._allow_imports:
            return FactoryRegistration(key, _import_object(key))
        raise InvalidDefinitionError(f"No factory registered for class '{key}'")

    def __contains__(self, key: object) -> bool:
        return key in self._registrations

    def _by_import_path(self, path: str) -> FactoryRegistration | None:
        for key, registration in self._registrations.items():
            if callable(key) and _importable_path(key) == path:
                return registration
        return None


def import_path(obj: Callable[..., Any]) -> str:
    """Return the ``module:qualname`` path under which ``obj`` can be imported."""
    return f"{obj.__module__}:{obj.__qualname__}"


def _describe(key: ClassIdentity) -> str:
    return key if isinstance(key, str) else import_path(key)


def _import_object(path: str) -> Factory:
    """Import ``package.module:Name`` or ``package.module.Name``."""
    if ":" in path:
        module_name, _, attribute_path = path.partition(":")
    else:
        module_name, _, attribute_path = path.rpartition(".")
    if not module_name or not attribute_path:
        raise InvalidDefinitionError(f"Class '{path}' is not an importable path")

    try:
        target: Any = importlib.import_module(module_name)
        for attribute in attribute_path.split("."):
            target = getattr(target, attribute)
    except (ImportError, AttributeError) as e:
        raise InvalidDefinitionError(f"Cannot import class '{path}': {e}") from e

    if not callable(target):
        raise InvalidDefinitionError(f"Imported class '{path}' is not callable")
    return target


def _importable_path(obj: Callable[..., Any]) -> str | None:
    if not (inspect.isclass(obj) or inspect.isfunction(obj)):
        return None
    return import_path(obj)
