"""Pydantic models for definition documents and service definitions."""

import logging
from collections.abc import Callable
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

logger = logging.getLogger(__name__)

Scope = Literal["container", "prototype"]

CONTAINER_SCOPE: Scope = "container"
PROTOTYPE_SCOPE: Scope = "prototype"

DOCUMENT_SECTIONS = ("imports", "parameters", "services")


class ServiceDefinition(BaseModel):
    """Definition of a single constructible service.

    Attributes:
        class_: Factory key, dotted import path, or callable. Exposed as
            ``class`` in documents. ``None`` only for definitions written
            by ``ServiceContainer.set()``.
        scope: ``container`` (singleton) or ``prototype`` (new per access).
        arguments: Raw argument tokens, positional (list) or keyword (mapping).
        calls: Raw post-construction call entries, ``[method, [tokens...]]``.

    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        arbitrary_types_allowed=True,
    )

    class_: str | Callable[..., Any] | None = Field(default=None, alias="class")
    scope: Scope = CONTAINER_SCOPE
    arguments: list[Any] | dict[str, Any] = Field(default_factory=list)
    calls: list[Any] = Field(default_factory=list)

    @field_validator("arguments", mode="before")
    @classmethod
    def arguments_default(cls, v: Any) -> Any:  # noqa: ANN401
        """Treat anything but a list or mapping as no arguments."""
        if isinstance(v, list | tuple):
            return list(v)
        if isinstance(v, dict):
            return v
        if v is not None:
            logger.warning("Ignoring arguments that are not a list or mapping: %r", v)
        return []

    @field_validator("calls", mode="before")
    @classmethod
    def calls_default(cls, v: Any) -> Any:  # noqa: ANN401
        """Treat anything but a list as no calls."""
        if isinstance(v, list | tuple):
            return list(v)
        if v is not None:
            logger.warning("Ignoring calls that are not a list: %r", v)
        return []

    @property
    def is_prototype(self) -> bool:
        """Whether a fresh instance is built on every access."""
        return self.scope == PROTOTYPE_SCOPE


class DefinitionDocument(BaseModel):
    """One unit of declarative input: imports, parameters and services.

    Service entries are kept raw here; the merge engine validates each one
    so that errors can name the offending service. Unknown top-level keys
    are ignored, and a section of the wrong shape counts as empty.
    """

    model_config = ConfigDict(extra="ignore")

    imports: list[str] = Field(default_factory=list)
    parameters: dict[str, Any] = Field(default_factory=dict)
    services: dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def warn_unknown_keys(cls, data: Any) -> Any:  # noqa: ANN401
        """Log top-level keys that are not document sections."""
        if isinstance(data, dict):
            unknown = [key for key in data if key not in DOCUMENT_SECTIONS]
            if unknown:
                logger.warning("Ignoring unknown container document keys: %s", unknown)
        return data

    @field_validator("imports", mode="before")
    @classmethod
    def imports_default(cls, v: Any) -> Any:  # noqa: ANN401
        """Treat anything but a list as no imports."""
        if isinstance(v, list | tuple):
            return list(v)
        if v is not None:
            logger.warning("Ignoring imports that are not a list: %r", v)
        return []

    @field_validator("parameters", "services", mode="before")
    @classmethod
    def mapping_default(cls, v: Any) -> Any:  # noqa: ANN401
        """Treat anything but a mapping as an empty section."""
        if isinstance(v, dict):
            return v
        if v is not None:
            logger.warning("Ignoring container document section that is not a mapping: %r", v)
        return {}
