"""Bootstrap helpers building a ready container from configuration."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from servicewire.configuration import ContainerConfiguration
from servicewire.container import ServiceContainer
from servicewire.errors import ConfigurationMissingError
from servicewire.factories import FactoryRegistry
from servicewire.loader import load_cache_document
from servicewire.protocols import BundleDiscovery, ConfigProvider

logger = logging.getLogger(__name__)


def load_configuration(properties: dict[str, Any]) -> ContainerConfiguration:
    """Create a ContainerConfiguration, reporting problems as ConfigurationMissingError."""
    try:
        return ContainerConfiguration.from_properties(properties)
    except ValidationError as e:
        raise ConfigurationMissingError(f"Invalid container configuration: {e}") from e


def build_container(
    configuration: ContainerConfiguration,
    config: ConfigProvider | None = None,
    factories: FactoryRegistry | None = None,
    bundles: BundleDiscovery | None = None,
) -> ServiceContainer:
    """Build a ServiceContainer from its configuration.

    Reads the pre-merged cache when enabled and present. Otherwise merges the
    primary container document with its imports, then each discovered
    bundle's container document.

    Args:
        configuration: Root, document and cache locations.
        config: Provider behind ``config.*`` references.
        factories: Factory registry; a new one honouring ``allow_imports``
            is created when omitted.
        bundles: Bundle discovery, consulted only when documents are loaded.

    Returns:
        Configured ServiceContainer.

    Raises:
        ConfigurationMissingError: If there is neither a usable cache nor a
            container document.

    """
    if factories is None:
        factories = FactoryRegistry(allow_imports=configuration.allow_imports)
    container = ServiceContainer(
        configuration.root,
        config=config,
        factories=factories,
        bundle_document=configuration.bundle_document,
    )

    cache_path = configuration.cache_path
    if configuration.use_cache and cache_path is not None and cache_path.exists():
        container.load_cached(load_cache_document(cache_path))
        logger.info("Container loaded from cache: %s", cache_path)
        return container

    if configuration.container_path is None:
        raise ConfigurationMissingError(
            "Can not bootstrap container without container path"
        )
    container.load(configuration.container_path)

    merged_bundles = container.load_bundles(bundles) if bundles is not None else []
    logger.info(
        "Container built from %s with %d bundle(s), %d service(s)",
        configuration.container_path,
        len(merged_bundles),
        len(container.show()["services"]),
    )
    return container


def write_cache(container: ServiceContainer, path: Path) -> None:
    """Write the container's merged definitions as a JSON cache file.

    Raises:
        InvalidDefinitionError: If the definitions can not be cached without
            changing them; no file is written.

    """
    document = container.export()
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(document, f, indent=2)
    logger.info("Container cache written: %s", path)
