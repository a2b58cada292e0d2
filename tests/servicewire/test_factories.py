"""Tests for FactoryRegistry - factory lookup and call hooks."""

from collections import OrderedDict

import pytest

from servicewire.errors import InvalidDefinitionError
from servicewire.factories import FactoryRegistry, import_path

from .conftest import Database, Mailer, use_transport


class TestRegistration:
    """Test suite for registering factories."""

    def test_register_and_lookup(self) -> None:
        registry = FactoryRegistry()
        registry.register("Db", Database)

        registration = registry.lookup("Db")

        assert registration.key == "Db"
        assert registration.factory is Database
        assert registration.hooks == {}
        assert "Db" in registry

    def test_register_with_hooks(self) -> None:
        registry = FactoryRegistry()
        registry.register("Mailer", Mailer, hooks={"use_transport": use_transport})

        assert registry.lookup("Mailer").hooks["use_transport"] is use_transport

    def test_callable_key_is_its_own_factory(self) -> None:
        registry = FactoryRegistry()

        registration = registry.register(Database)

        assert registration.factory is Database
        assert registry.lookup(Database) is registration

    def test_string_key_without_factory_raises(self) -> None:
        with pytest.raises(InvalidDefinitionError, match="No factory given"):
            FactoryRegistry().register("Db")

    def test_later_registration_replaces_earlier(self) -> None:
        registry = FactoryRegistry()
        registry.register("Db", Database)

        registry.register("Db", Mailer)

        assert registry.lookup("Db").factory is Mailer


class TestProvidesDecorator:
    """Test suite for the provides() decorator."""

    def test_decorator_registers_under_name(self) -> None:
        registry = FactoryRegistry()

        @registry.provides()
        class Cache:
            pass

        assert registry.lookup("Cache").factory is Cache

    def test_decorator_with_explicit_key_and_hooks(self) -> None:
        registry = FactoryRegistry()

        @registry.provides("mailer.smtp", hooks={"use_transport": use_transport})
        def make_mailer() -> Mailer:
            return Mailer()

        registration = registry.lookup("mailer.smtp")
        assert registration.factory is make_mailer
        assert "use_transport" in registration.hooks

    def test_decorator_rejects_non_class_objects(self) -> None:
        registry = FactoryRegistry()

        with pytest.raises(InvalidDefinitionError):
            registry.provides("x")(len)


class TestLookup:
    """Test suite for lookup of unregistered identities."""

    def test_unregistered_callable_is_its_own_factory(self) -> None:
        registration = FactoryRegistry().lookup(Database)

        assert registration.factory is Database
        assert registration.hooks == {}

    def test_unregistered_string_raises_without_imports(self) -> None:
        with pytest.raises(InvalidDefinitionError, match="No factory registered"):
            FactoryRegistry().lookup("collections:OrderedDict")

    @pytest.mark.parametrize("path", ["collections:OrderedDict", "collections.OrderedDict"])
    def test_import_path_is_imported_when_allowed(self, path: str) -> None:
        registration = FactoryRegistry(allow_imports=True).lookup(path)

        assert registration.factory is OrderedDict

    def test_nested_attribute_import(self) -> None:
        registration = FactoryRegistry(allow_imports=True).lookup(
            "collections:OrderedDict.fromkeys"
        )

        assert registration.factory(["a"]) == OrderedDict(a=None)

    @pytest.mark.parametrize(
        "path", ["NoModule", "missing_module_xyz:Thing", "collections:Missing"]
    )
    def test_unimportable_path_raises(self, path: str) -> None:
        with pytest.raises(InvalidDefinitionError):
            FactoryRegistry(allow_imports=True).lookup(path)

    def test_non_callable_import_raises(self) -> None:
        with pytest.raises(InvalidDefinitionError, match="not callable"):
            FactoryRegistry(allow_imports=True).lookup("os:sep")

    def test_import_path_finds_callable_registered_under_itself(self) -> None:
        """Verify a cached ``module:qualname`` class finds the registration and its hooks."""
        registry = FactoryRegistry()
        registration = registry.register(Mailer, hooks={"use_transport": use_transport})

        assert registry.lookup(import_path(Mailer)) is registration

    def test_import_path_ignores_string_registrations(self) -> None:
        registry = FactoryRegistry()
        registry.register("Db", Database)

        with pytest.raises(InvalidDefinitionError, match="No factory registered"):
            registry.lookup(import_path(Database))

    def test_registered_key_wins_over_import(self) -> None:
        registry = FactoryRegistry(allow_imports=True)
        registry.register("collections:OrderedDict", Database)

        assert registry.lookup("collections:OrderedDict").factory is Database


def test_import_path_round_trips_through_lookup() -> None:
    path = import_path(Database)

    assert path.endswith(":Database")
    assert FactoryRegistry(allow_imports=True).lookup(path).factory is Database
