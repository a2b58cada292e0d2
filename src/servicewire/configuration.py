"""Configuration for bootstrapping a service container.

Configuration supports both explicit instantiation and environment variable
fallback.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field, field_validator

from servicewire.merge import BUNDLE_DOCUMENT

_TRUTHY = ("true", "1", "yes")


class ContainerConfiguration(BaseModel):
    """Settings for building a container from documents or a cache.

    Attributes:
        root: Application root; default value of the ``root`` parameter.
        container_path: Primary container document.
        cache_path: Pre-merged JSON cache, used instead of documents when present.
        use_cache: Whether to read ``cache_path`` at all.
        bundle_document: Bundle container file location relative to a bundle root.
        allow_imports: Resolve unregistered classes by importing dotted paths.

    Example:
        ```python
        # Explicit configuration
        config = ContainerConfiguration(
            root=Path("/srv/app"),
            container_path=Path("/srv/app/config/container.yml"),
        )

        # Zero-config (reads from environment)
        config = ContainerConfiguration.from_properties({})
        ```

    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    root: Path = Field(description="Application root directory")
    container_path: Path | None = Field(
        default=None, description="Primary container document"
    )
    cache_path: Path | None = Field(
        default=None, description="Pre-merged container cache (JSON)"
    )
    use_cache: bool = Field(default=True, description="Read the cache when present")
    bundle_document: Path = Field(
        default=BUNDLE_DOCUMENT,
        description="Bundle container file, relative to the bundle root",
    )
    allow_imports: bool = Field(
        default=False, description="Import unregistered classes by dotted path"
    )

    @field_validator("root", mode="before")
    @classmethod
    def validate_root(cls, v: Any) -> Any:  # noqa: ANN401
        """Reject an empty root before it becomes ``Path(".")``.

        Raises:
            ValueError: If root is empty

        """
        if isinstance(v, str) and not v.strip():
            raise ValueError("Root cannot be empty")
        return v

    @classmethod
    def from_properties(cls, properties: dict[str, Any]) -> Self:
        """Create configuration from properties with environment fallback.

        Environment variables used:
        - SERVICEWIRE_ROOT: Application root
        - SERVICEWIRE_CONTAINER_PATH: Primary container document
        - SERVICEWIRE_CACHE_PATH: Container cache file
        - SERVICEWIRE_USE_CACHE: Read the cache ("true"/"1"/"yes")
        - SERVICEWIRE_ALLOW_IMPORTS: Import unregistered classes ("true"/"1"/"yes")

        Args:
            properties: Configuration properties dictionary

        Returns:
            Validated configuration instance

        Raises:
            ValidationError: If configuration is invalid

        """
        config_data = properties.copy()

        env_paths = {
            "root": "SERVICEWIRE_ROOT",
            "container_path": "SERVICEWIRE_CONTAINER_PATH",
            "cache_path": "SERVICEWIRE_CACHE_PATH",
        }
        for field_name, env_var in env_paths.items():
            if field_name not in config_data:
                value = os.getenv(env_var)
                if value:
                    config_data[field_name] = value

        env_flags = {
            "use_cache": "SERVICEWIRE_USE_CACHE",
            "allow_imports": "SERVICEWIRE_ALLOW_IMPORTS",
        }
        for field_name, env_var in env_flags.items():
            if field_name not in config_data:
                value = os.getenv(env_var)
                if value is not None:
                    config_data[field_name] = value.lower() in _TRUTHY

        return cls.model_validate(config_data)
