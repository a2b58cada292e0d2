"""Configuration providers for ``config.*`` argument references."""

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Self

import yaml

from servicewire.errors import DocumentNotFoundError, DocumentParseError

logger = logging.getLogger(__name__)


class MappingConfigProvider:
    """Configuration provider backed by a nested mapping.

    Keys are dotted paths through the mapping: ``get("db.host")`` returns
    ``data["db"]["host"]``. A key that names a top-level entry containing a
    dot is matched first. Missing keys return ``None``.

    Example:
        ```python
        config = MappingConfigProvider({"db": {"host": "localhost"}})
        config.get("db.host")  # "localhost"
        config.get("db")       # {"host": "localhost"}
        ```

    """

    def __init__(self, data: Mapping[str, Any] | None = None) -> None:
        self._data: Mapping[str, Any] = data or {}

    def get(self, key: str) -> Any:  # noqa: ANN401
        """Look up a dotted key, returning None when any segment is missing."""
        if key in self._data:
            return self._data[key]

        current: Any = self._data
        for segment in key.split("."):
            if not isinstance(current, Mapping) or segment not in current:
                logger.debug("Configuration key not found: %s", key)
                return None
            current = current[segment]
        return current

    @classmethod
    def from_file(cls, path: Path) -> Self:
        """Create a provider from a YAML file.

        Raises:
            DocumentNotFoundError: If the file does not exist.
            DocumentParseError: If the YAML is invalid or not a mapping.

        """
        try:
            with path.open("r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except FileNotFoundError as e:
            raise DocumentNotFoundError(f"Configuration file not found: {path}") from e
        except yaml.YAMLError as e:
            raise DocumentParseError(f"{path}: {e}") from e

        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise DocumentParseError(
                f"Configuration file {path} must be a mapping, but got {type(data)}"
            )
        return cls(data)
