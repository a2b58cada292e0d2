"""Merge engine folding definition documents into the definition store.

Imports are merged before the importing document's own entries, so the
importing document always wins on a name collision. Bundle documents are
merged after the primary document and therefore override it.
"""

import logging
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from servicewire.errors import InvalidDefinitionError
from servicewire.loader import load_document, resolve_import_path
from servicewire.models import DefinitionDocument, ServiceDefinition
from servicewire.protocols import BundleDiscovery
from servicewire.store import ROOT_PARAMETER, DefinitionStore

logger = logging.getLogger(__name__)

BUNDLE_DOCUMENT = Path("..", "config", "containers", "package-container.yml")


class MergeEngine:
    """Fold definition documents into a DefinitionStore."""

    def __init__(
        self,
        store: DefinitionStore,
        root: str,
        loader: Callable[[Path], DefinitionDocument] = load_document,
    ) -> None:
        """Initialise the merge engine.

        Args:
            store: Store that receives merged parameters and services.
            root: Engine root, used as the default ``root`` parameter.
            loader: Callable loading a document from a path.

        """
        self._store = store
        self._root = root
        self._loader = loader

    def merge(self, document: DefinitionDocument, base_directory: Path) -> None:
        """Merge one document, its imports first.

        Args:
            document: The document to merge.
            base_directory: Directory relative imports are resolved against.

        Raises:
            DocumentNotFoundError: If an imported document does not exist.
            DocumentParseError: If an imported document is malformed.
            InvalidDefinitionError: If a service entry is invalid.

        """
        self._default_root()
        for import_path in document.imports:
            self.merge_file(resolve_import_path(import_path, base_directory))
        self._merge_parameters(document.parameters)
        self._merge_services(document.services)

    def merge_file(self, path: Path) -> None:
        """Load a document from disk and merge it with its directory as base."""
        logger.info("Merging container file: %s", path)
        document = self._loader(path)
        self.merge(document, path.parent)

    def merge_cached(self, document: DefinitionDocument) -> None:
        """Merge an already fully-merged document without walking imports."""
        if document.imports:
            logger.warning(
                "Ignoring %d import(s) in pre-merged container document",
                len(document.imports),
            )
        self._default_root()
        self._merge_parameters(document.parameters)
        self._merge_services(document.services)

    def merge_bundles(
        self, discovery: BundleDiscovery, bundle_document: Path = BUNDLE_DOCUMENT
    ) -> list[str]:
        """Merge the container document of each discovered bundle, in discovery order.

        Bundles whose root has no container document are skipped.

        Returns:
            Names of the bundles whose documents were merged.

        """
        merged: list[str] = []
        for bundle_name, bundle_root in discovery.bundles().items():
            container_file = Path(bundle_root) / bundle_document
            if not container_file.exists():
                logger.debug(
                    "Bundle '%s' has no container file at %s", bundle_name, container_file
                )
                continue
            self.merge_file(container_file)
            merged.append(bundle_name)
        return merged

    def _default_root(self) -> None:
        if ROOT_PARAMETER not in self._store.parameters:
            self._store.parameters[ROOT_PARAMETER] = self._root

    def _merge_parameters(self, parameters: Mapping[str, Any]) -> None:
        for name, value in parameters.items():
            self._store.parameters[name] = value

    def _merge_services(self, services: Mapping[str, Any]) -> None:
        for name, entry in services.items():
            self._store.services[name] = self._build_definition(name, entry)

    def _build_definition(self, name: str, entry: Any) -> ServiceDefinition:  # noqa: ANN401
        if isinstance(entry, ServiceDefinition):
            entry = entry.model_dump(by_alias=True)
        if not isinstance(entry, Mapping):
            raise InvalidDefinitionError(f"Service {name} must be a mapping")
        if entry.get("class") is None:
            raise InvalidDefinitionError(f"Service {name} does not specify a class")

        service_class = entry["class"]
        if isinstance(service_class, list | tuple | dict | set):
            raise InvalidDefinitionError(
                f"Class can not be array, near: {service_class!r}"
            )

        data = dict(entry)
        data["class"] = self._substitute_class(name, service_class)
        try:
            return ServiceDefinition.model_validate(data)
        except ValidationError as e:
            raise InvalidDefinitionError(f"Invalid definition for service {name}: {e}") from e

    def _substitute_class(self, name: str, service_class: Any) -> Any:  # noqa: ANN401
        """Replace a ``%parameter%`` class with the parameter's value."""
        if not isinstance(service_class, str) or not service_class.startswith("%"):
            return service_class

        parameter = service_class[1:-1] if service_class.endswith("%") else service_class[1:]
        if parameter not in self._store.parameters:
            raise InvalidDefinitionError(
                f"Variable service class not defined as parameter: {name}: {parameter}"
            )
        resolved = self._store.parameters[parameter]
        if (
            resolved is None
            or isinstance(resolved, list | tuple | dict | set)
            or (isinstance(resolved, str) and resolved.startswith("%"))
        ):
            raise InvalidDefinitionError(
                f"Parameter {parameter} used as class of service {name} must be a class name"
            )
        return resolved
