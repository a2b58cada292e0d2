"""Collaborator protocols for the service container."""

from collections.abc import Mapping
from pathlib import Path
from typing import Any, Protocol


class ConfigProvider(Protocol):
    """Protocol for the external configuration source behind ``config.*`` references.

    An argument token ``config.db.host`` is resolved by calling
    ``provider.get("db.host")``. The container also registers the provider
    as the ``config`` service, so dependent services can receive it with
    ``@config``.

    Example:
        ```python
        class EnvironmentConfig:
            def get(self, key: str) -> Any:
                return os.environ.get(key.upper().replace(".", "_"))

        container = ServiceContainer(root, config=EnvironmentConfig())
        ```

    """

    def get(self, key: str) -> Any:  # noqa: ANN401
        """Return the value stored under ``key``."""
        ...


class BundleDiscovery(Protocol):
    """Protocol for discovering bundles that contribute definition documents.

    The merge engine visits bundles in the order the mapping yields them, so
    later bundles override earlier ones.
    """

    def bundles(self) -> Mapping[str, Path | str]:
        """Return a mapping of bundle name to bundle root location."""
        ...
