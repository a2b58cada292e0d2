"""Instance registry for constructed singleton services."""

import logging
from typing import Any

logger = logging.getLogger(__name__)


class InstanceRegistry:
    """Mapping of service name to its constructed singleton instance.

    Holds container-scope services after first construction and instances
    installed with ``ServiceContainer.set()``. Entries live until removed.
    """

    def __init__(self) -> None:
        self._instances: dict[str, Any] = {}

    def __contains__(self, name: object) -> bool:
        return name in self._instances

    def get(self, name: str) -> Any:  # noqa: ANN401
        return self._instances[name]

    def store(self, name: str, instance: Any) -> None:  # noqa: ANN401
        self._instances[name] = instance
        logger.debug("Instance stored: %s", name)

    def remove(self, name: str) -> None:
        """Forget the instance for ``name``; no-op if none is held."""
        if self._instances.pop(name, None) is not None:
            logger.debug("Instance removed: %s", name)

    def clear(self) -> None:
        self._instances.clear()

    def names(self) -> list[str]:
        return list(self._instances)
