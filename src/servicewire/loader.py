"""Loaders for YAML definition documents and JSON cache documents.

This module turns files into validated ``DefinitionDocument`` models and
resolves import paths relative to the importing document.
"""

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from servicewire.errors import DocumentNotFoundError, DocumentParseError
from servicewire.models import DefinitionDocument

logger = logging.getLogger(__name__)


def load_document(path: Path) -> DefinitionDocument:
    """Load a definition document from a YAML file.

    Args:
        path: Path to the YAML document.

    Returns:
        Validated DefinitionDocument. An empty file yields an empty document.

    Raises:
        DocumentNotFoundError: If the file does not exist.
        DocumentParseError: If the file cannot be read, the YAML is invalid,
            or the document shape is wrong.

    """
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError as e:
        raise DocumentNotFoundError(f"Container file not found: {path}") from e
    except yaml.YAMLError as e:
        raise DocumentParseError(f"{path}: {e}") from e
    except OSError as e:
        raise DocumentParseError(f"Cannot read container file {path}: {e}") from e

    logger.debug("Loaded container file: %s", path)
    return parse_document(data, source=path)


def load_cache_document(path: Path) -> DefinitionDocument:
    """Load a pre-merged definition document from a JSON cache file.

    Raises:
        DocumentNotFoundError: If the cache file does not exist.
        DocumentParseError: If the cache file is not valid JSON or has the wrong shape.

    """
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise DocumentNotFoundError(f"Container cache not found: {path}") from e
    except json.JSONDecodeError as e:
        raise DocumentParseError(f"{path}: {e}") from e
    except OSError as e:
        raise DocumentParseError(f"Cannot read container cache {path}: {e}") from e

    return parse_document(data, source=path)


def parse_document(data: Any, source: Path | str | None = None) -> DefinitionDocument:  # noqa: ANN401
    """Validate already-deserialised data as a definition document.

    Args:
        data: Mapping with optional ``imports``, ``parameters`` and ``services``.
            ``None`` is accepted as an empty document.
        source: Where the data came from, used in error messages.

    Raises:
        DocumentParseError: If the structure is invalid.

    """
    where = source if source is not None else "<document>"
    if data is None:
        return DefinitionDocument()
    if isinstance(data, DefinitionDocument):
        return data
    if not isinstance(data, Mapping):
        raise DocumentParseError(
            f"{where}: container document must be a mapping, got {type(data).__name__}"
        )
    try:
        return DefinitionDocument.model_validate(dict(data))
    except ValidationError as e:
        raise DocumentParseError(f"{where}: invalid container document: {e}") from e


def resolve_import_path(import_path: str, base_directory: Path) -> Path:
    """Resolve an import entry against the importing document's directory.

    Absolute paths are returned as given; anything else is joined onto
    ``base_directory``.
    """
    candidate = Path(import_path)
    if candidate.is_absolute():
        return candidate
    return base_directory / candidate
