"""Tests for MappingConfigProvider."""

from pathlib import Path

import pytest

from servicewire.config_providers import MappingConfigProvider
from servicewire.errors import DocumentNotFoundError, DocumentParseError

from .conftest import write_yaml


class TestMappingConfigProvider:
    """Test suite for dotted-key configuration lookup."""

    def test_dotted_key_walks_nested_mappings(self) -> None:
        provider = MappingConfigProvider({"db": {"primary": {"host": "h"}}})

        assert provider.get("db.primary.host") == "h"

    def test_section_is_returned_whole(self) -> None:
        provider = MappingConfigProvider({"db": {"host": "h"}})

        assert provider.get("db") == {"host": "h"}

    def test_exact_key_containing_dot_wins(self) -> None:
        provider = MappingConfigProvider({"db.host": "flat", "db": {"host": "nested"}})

        assert provider.get("db.host") == "flat"

    @pytest.mark.parametrize("key", ["missing", "db.missing", "db.host.deeper"])
    def test_missing_key_returns_none(self, key: str) -> None:
        provider = MappingConfigProvider({"db": {"host": "h"}})

        assert provider.get(key) is None

    def test_empty_provider(self) -> None:
        assert MappingConfigProvider().get("anything") is None


class TestFromFile:
    """Test suite for loading configuration from YAML."""

    def test_from_file(self, tmp_path: Path) -> None:
        path = write_yaml(tmp_path / "config.yml", {"mail": {"from": "noreply@example.com"}})

        provider = MappingConfigProvider.from_file(path)

        assert provider.get("mail.from") == "noreply@example.com"

    def test_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yml"
        path.write_text("")

        assert MappingConfigProvider.from_file(path).get("a") is None

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(DocumentNotFoundError):
            MappingConfigProvider.from_file(tmp_path / "config.yml")

    def test_non_mapping_file_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yml"
        path.write_text("- a\n")

        with pytest.raises(DocumentParseError, match="must be a mapping"):
            MappingConfigProvider.from_file(path)
