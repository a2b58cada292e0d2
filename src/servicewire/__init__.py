"""servicewire - declarative service container.

Services are described in YAML documents (class identity, arguments,
post-construction calls and scope) next to a flat parameter table, then
built lazily and wired on demand.
"""

__version__ = "0.1.0"

from servicewire.builder import build_container, load_configuration, write_cache
from servicewire.bundles import EntryPointBundleDiscovery, StaticBundleDiscovery
from servicewire.config_providers import MappingConfigProvider
from servicewire.configuration import ContainerConfiguration
from servicewire.container import (
    CONFIG_SERVICE,
    CONTAINER_SERVICE,
    ContainerSnapshot,
    ServiceContainer,
)
from servicewire.errors import (
    CircularReferenceError,
    ConfigurationMissingError,
    DocumentError,
    DocumentNotFoundError,
    DocumentParseError,
    InvalidCallError,
    InvalidDefinitionError,
    MissingCollaboratorError,
    MissingParameterError,
    ResolutionError,
    ServiceWireError,
    UnknownServiceError,
)
from servicewire.factories import FactoryRegistration, FactoryRegistry
from servicewire.models import DefinitionDocument, ServiceDefinition
from servicewire.protocols import BundleDiscovery, ConfigProvider
from servicewire.synchronised import SynchronisedServiceContainer

__all__ = [
    # Version
    "__version__",
    # Container
    "CONFIG_SERVICE",
    "CONTAINER_SERVICE",
    "ContainerSnapshot",
    "ServiceContainer",
    "SynchronisedServiceContainer",
    # Definitions
    "DefinitionDocument",
    "ServiceDefinition",
    "FactoryRegistration",
    "FactoryRegistry",
    # Bootstrap
    "ContainerConfiguration",
    "build_container",
    "load_configuration",
    "write_cache",
    # Collaborators
    "BundleDiscovery",
    "ConfigProvider",
    "EntryPointBundleDiscovery",
    "MappingConfigProvider",
    "StaticBundleDiscovery",
    # Errors
    "ServiceWireError",
    "CircularReferenceError",
    "ConfigurationMissingError",
    "DocumentError",
    "DocumentNotFoundError",
    "DocumentParseError",
    "InvalidCallError",
    "InvalidDefinitionError",
    "MissingCollaboratorError",
    "MissingParameterError",
    "ResolutionError",
    "UnknownServiceError",
]
