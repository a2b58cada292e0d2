"""Shared test fixtures for servicewire tests."""

from pathlib import Path
from typing import Any

import pytest
import yaml

from servicewire import FactoryRegistry, MappingConfigProvider, ServiceContainer


class Database:
    """Simple service taking a DSN."""

    def __init__(self, dsn: str) -> None:
        self.dsn = dsn


class Repository:
    """Service depending on another service."""

    def __init__(self, db: Database | None) -> None:
        self.db = db


class Recorder:
    """Service recording constructor arguments and method calls in order."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        self.args = args
        self.kwargs = kwargs
        self.calls: list[tuple[str, tuple[Any, ...]]] = []

    def configure(self, *args: Any) -> None:
        self.calls.append(("configure", args))

    def enable(self) -> None:
        self.calls.append(("enable", ()))


class Mailer:
    """Service configured through a registered hook."""

    def __init__(self) -> None:
        self.transport: str | None = None


def use_transport(mailer: Mailer, transport: str) -> None:
    mailer.transport = transport


def write_yaml(path: Path, data: dict[str, Any]) -> Path:
    """Write ``data`` as YAML to ``path``, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(yaml.safe_dump(data))
    return path


@pytest.fixture
def factories() -> FactoryRegistry:
    """Registry with the sample services registered under short names."""
    registry = FactoryRegistry()
    registry.register("Db", Database)
    registry.register("Repo", Repository)
    registry.register("Recorder", Recorder)
    registry.register("Mailer", Mailer, hooks={"use_transport": use_transport})
    return registry


@pytest.fixture
def config_provider() -> MappingConfigProvider:
    """Configuration provider with a nested database section."""
    return MappingConfigProvider({"db": {"host": "localhost", "port": 5432}})


@pytest.fixture
def root(tmp_path: Path) -> str:
    return str(tmp_path)


@pytest.fixture
def container(
    root: str, config_provider: MappingConfigProvider, factories: FactoryRegistry
) -> ServiceContainer:
    """Empty container with configuration provider and sample factories."""
    return ServiceContainer(root, config=config_provider, factories=factories)
