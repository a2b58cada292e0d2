"""Thread-safe wrapper around ServiceContainer.

The container itself takes no locks. Hosts that share one container between
threads wrap it here so merges and first construction of a singleton are
serialised; otherwise two threads could build the same singleton twice and
run its post-construction calls twice.
"""

import threading
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from servicewire.container import ContainerSnapshot, ServiceContainer
from servicewire.models import CONTAINER_SCOPE, DefinitionDocument, Scope
from servicewire.protocols import BundleDiscovery


class SynchronisedServiceContainer:
    """Serialise access to a ServiceContainer with a re-entrant lock.

    The lock is re-entrant because building a service resolves its
    dependencies through ``get`` on the same thread.
    """

    def __init__(self, container: ServiceContainer) -> None:
        self._container = container
        self._lock = threading.RLock()

    @property
    def container(self) -> ServiceContainer:
        """Get the wrapped container."""
        return self._container

    def get(self, name: str) -> Any:  # noqa: ANN401
        with self._lock:
            return self._container.get(name)

    def has(self, name: str) -> bool:
        with self._lock:
            return self._container.has(name)

    def set(
        self,
        name: str,
        value: Any,  # noqa: ANN401
        scope: Scope = CONTAINER_SCOPE,
        arguments: list[Any] | None = None,
        calls: list[Any] | None = None,
    ) -> None:
        with self._lock:
            self._container.set(name, value, scope, arguments, calls)

    def show(self) -> ContainerSnapshot:
        with self._lock:
            return self._container.show()

    def merge(
        self, document: DefinitionDocument | Mapping[str, Any], base_directory: Path | str
    ) -> None:
        with self._lock:
            self._container.merge(document, base_directory)

    def load(self, path: Path | str) -> None:
        with self._lock:
            self._container.load(path)

    def load_bundles(self, discovery: BundleDiscovery) -> list[str]:
        with self._lock:
            return self._container.load_bundles(discovery)
