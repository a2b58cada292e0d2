"""Service container facade.

The container composes the definition store, merge engine, instance
registry and instantiation engine behind ``get``, ``set`` and ``show``.
It registers itself as the ``container`` service and the configuration
provider as the ``config`` service, both as ready-made instances.
"""

import inspect
import logging
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any, Self, TypedDict

from servicewire.engine import InstantiationEngine
from servicewire.errors import ConfigurationMissingError, InvalidDefinitionError
from servicewire.factories import FactoryRegistry, import_path
from servicewire.instances import InstanceRegistry
from servicewire.loader import parse_document
from servicewire.merge import BUNDLE_DOCUMENT, MergeEngine
from servicewire.models import (
    CONTAINER_SCOPE,
    DefinitionDocument,
    Scope,
    ServiceDefinition,
)
from servicewire.protocols import BundleDiscovery, ConfigProvider
from servicewire.store import DefinitionStore

logger = logging.getLogger(__name__)

CONTAINER_SERVICE = "container"
CONFIG_SERVICE = "config"


class ContainerSnapshot(TypedDict):
    """Introspection snapshot returned by ``ServiceContainer.show()``."""

    parameters: dict[str, Any]
    services: list[str]


class ServiceContainer:
    """Lazily build and wire services from merged definition documents.

    Example:
        ```python
        factories = FactoryRegistry()
        factories.register("Db", Database)
        factories.register("Repo", Repository)

        container = ServiceContainer("/srv/app", config=MappingConfigProvider({}),
                                     factories=factories)
        container.load(Path("/srv/app/config/container.yml"))
        repo = container.get("repo")
        ```

    """

    def __init__(
        self,
        root: str | Path,
        config: ConfigProvider | None = None,
        factories: FactoryRegistry | None = None,
        bundle_document: Path = BUNDLE_DOCUMENT,
    ) -> None:
        """Initialise an empty container.

        Args:
            root: Application root, the default value of the ``root`` parameter.
            config: Provider behind ``config.*`` references and the ``config`` service.
            factories: Registry resolving each definition's ``class``.
            bundle_document: Location of a bundle's container file, relative
                to the bundle root.

        Raises:
            ConfigurationMissingError: If ``root`` is empty.

        """
        if root is None or not str(root):
            raise ConfigurationMissingError(
                "Can not create container without passing root"
            )
        self._root = str(root)
        self._config = config
        self._factories = factories or FactoryRegistry()
        self._bundle_document = bundle_document
        self._store = DefinitionStore()
        self._instances = InstanceRegistry()
        self._merger = MergeEngine(self._store, self._root)
        self._engine = InstantiationEngine(
            self._store, self._instances, self._factories, config
        )

        self.set(CONTAINER_SERVICE, self)
        if config is not None:
            self.set(CONFIG_SERVICE, config)
        logger.debug("ServiceContainer initialised with root: %s", self._root)

    @classmethod
    def from_cache(
        cls,
        root: str | Path,
        document: DefinitionDocument | Mapping[str, Any],
        config: ConfigProvider | None = None,
        factories: FactoryRegistry | None = None,
    ) -> Self:
        """Create a container from an already fully-merged document.

        Skips document loading, import walking and bundle discovery.
        """
        container = cls(root, config=config, factories=factories)
        container.load_cached(document)
        return container

    @property
    def root(self) -> str:
        return self._root

    @property
    def factories(self) -> FactoryRegistry:
        return self._factories

    # -------------------------------------------------------------------------
    # Definitions
    # -------------------------------------------------------------------------

    def merge(
        self, document: DefinitionDocument | Mapping[str, Any], base_directory: Path | str
    ) -> None:
        """Merge a definition document; relative imports resolve against ``base_directory``."""
        self._merger.merge(parse_document(document), Path(base_directory))

    def load(self, path: Path | str) -> None:
        """Load and merge a definition document file and its imports."""
        self._merger.merge_file(Path(path))

    def load_bundles(self, discovery: BundleDiscovery) -> list[str]:
        """Merge the container documents of discovered bundles, after the primary document."""
        return self._merger.merge_bundles(discovery, self._bundle_document)

    def load_cached(self, document: DefinitionDocument | Mapping[str, Any]) -> None:
        """Merge a pre-merged document without processing imports."""
        self._merger.merge_cached(parse_document(document))

    # -------------------------------------------------------------------------
    # Services
    # -------------------------------------------------------------------------

    def get(self, name: str) -> Any:  # noqa: ANN401
        """Return the service named ``name``, or None if it is not defined."""
        return self._engine.get(name)

    def has(self, name: str) -> bool:
        """Whether a service named ``name`` is defined."""
        return self._store.has_service(name)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.has(name)

    def set(
        self,
        name: str,
        value: Any,  # noqa: ANN401
        scope: Scope = CONTAINER_SCOPE,
        arguments: list[Any] | None = None,
        calls: list[Any] | None = None,
    ) -> None:
        """Install a ready-made instance, or forget one.

        A ``None`` value only removes the cached instance; the definition is
        left untouched. Any other value is cached immediately and the
        definition metadata for ``name`` is rewritten without a class.
        """
        if value is None:
            self._instances.remove(name)
            return
        self._instances.store(name, value)
        self._store.services[name] = ServiceDefinition(
            scope=scope, arguments=arguments or [], calls=calls or []
        )

    # -------------------------------------------------------------------------
    # Introspection
    # -------------------------------------------------------------------------

    def show(self) -> ContainerSnapshot:
        """Return the parameter table and the known service names."""
        return {
            "parameters": dict(self._store.parameters),
            "services": self._store.service_names(),
        }

    def export(self) -> dict[str, Any]:
        """Return the merged definitions as a document suitable for ``from_cache``.

        Definitions without a class (installed with ``set``) are left out.
        Callable classes are written as ``module:qualname`` import paths.

        Raises:
            InvalidDefinitionError: If a parameter value, argument or call would
                not read back unchanged from JSON, or a callable class has no
                import path.

        """
        for name, value in self._store.parameters.items():
            if not _json_native(value):
                raise InvalidDefinitionError(
                    f"Parameter {name} can not be written to a container cache: "
                    f"{value!r} is not a JSON value"
                )

        services: dict[str, Any] = {}
        for name, definition in self._store.services.items():
            if definition.class_ is None:
                continue
            if not (_json_native(definition.arguments) and _json_native(definition.calls)):
                raise InvalidDefinitionError(
                    f"Service {name} can not be written to a container cache: "
                    "arguments and calls must be JSON values"
                )
            entry = definition.model_dump(by_alias=True)
            entry["class"] = _exportable_class(definition.class_)
            services[name] = entry
        return {"parameters": dict(self._store.parameters), "services": services}


def _exportable_class(service_class: str | Callable[..., Any]) -> str:
    if isinstance(service_class, str):
        return service_class
    if inspect.isclass(service_class) or inspect.isfunction(service_class):
        return import_path(service_class)
    raise InvalidDefinitionError(
        f"Class {service_class!r} can not be written to a container cache"
    )


def _json_native(value: Any) -> bool:  # noqa: ANN401
    """Whether ``value`` survives a JSON round trip with its type intact."""
    if value is None or isinstance(value, str | bool | int | float):
        return True
    if isinstance(value, list):
        return all(_json_native(item) for item in value)
    if isinstance(value, dict):
        return all(
            isinstance(key, str) and _json_native(item) for key, item in value.items()
        )
    return False
