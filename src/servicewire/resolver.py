"""Argument resolution for service arguments and post-construction calls.

Token grammar, first match wins:

- ``config.key``    value from the configuration provider
- ``%name%``        parameter value; ``%?name%`` is optional; ``%%...`` escapes
- ``@name``         service instance; ``@?name`` is optional; ``@@...`` escapes
- anything else     returned unchanged

Optional references that cannot be satisfied resolve to ``None``.
"""

import logging
from collections.abc import Callable, Mapping
from typing import Any

from servicewire.errors import (
    CircularReferenceError,
    MissingCollaboratorError,
    MissingParameterError,
    UnknownServiceError,
)
from servicewire.protocols import ConfigProvider
from servicewire.store import DefinitionStore

logger = logging.getLogger(__name__)

CONFIG_PREFIX = "config."
PARAMETER_DELIMITER = "%"
SERVICE_DELIMITER = "@"
OPTIONAL_MARKER = "?"


class ArgumentResolver:
    """Resolve raw argument tokens to concrete values.

    Never mutates the store. Service references recurse into the
    instantiation engine through ``get_service``.
    """

    def __init__(
        self,
        store: DefinitionStore,
        get_service: Callable[[str], Any],
        config: ConfigProvider | None = None,
    ) -> None:
        self._store = store
        self._get_service = get_service
        self._config = config

    def resolve(self, service_name: str, token: Any) -> Any:  # noqa: ANN401
        """Resolve one token on behalf of ``service_name``.

        Args:
            service_name: The service whose arguments are being built.
            token: The raw token.

        Returns:
            The resolved value, or None for an unsatisfied optional reference.

        Raises:
            MissingCollaboratorError: ``config.*`` used without a configuration provider.
            MissingParameterError: Required parameter is not defined.
            CircularReferenceError: The token references ``service_name`` itself.
            UnknownServiceError: Required service is not defined.

        """
        if not isinstance(token, str):
            return token
        if token.startswith(CONFIG_PREFIX):
            return self._resolve_config(token[len(CONFIG_PREFIX) :])
        if token.startswith(PARAMETER_DELIMITER):
            return self._resolve_parameter(service_name, token)
        if token.startswith(SERVICE_DELIMITER):
            return self._resolve_service(service_name, token)
        return token

    def resolve_all(
        self, service_name: str, tokens: list[Any] | Mapping[str, Any]
    ) -> list[Any] | dict[str, Any]:
        """Resolve a list of tokens in order, or a mapping of tokens value by value."""
        if isinstance(tokens, Mapping):
            return {key: self.resolve(service_name, token) for key, token in tokens.items()}
        return [self.resolve(service_name, token) for token in tokens]

    def _resolve_config(self, key: str) -> Any:  # noqa: ANN401
        if self._config is None:
            raise MissingCollaboratorError(
                "For service container to inject configuration, "
                "configuration provider must be set."
            )
        return self._config.get(key)

    def _resolve_parameter(self, service_name: str, token: str) -> Any:  # noqa: ANN401
        # Escape check comes before the optional marker: %%?x% is the literal %?x%
        if token.startswith(PARAMETER_DELIMITER * 2):
            return token[1:]
        if len(token) < 2 or not token.endswith(PARAMETER_DELIMITER):
            return token

        parameter = token[1:-1]
        optional = parameter.startswith(OPTIONAL_MARKER)
        if optional:
            parameter = parameter[1:]

        if parameter in self._store.parameters:
            return self._store.parameters[parameter]
        if optional:
            logger.debug(
                "Optional parameter '%s' for service '%s' not set", parameter, service_name
            )
            return None
        raise MissingParameterError(f"{service_name} requires parameter {parameter}, not set")

    def _resolve_service(self, service_name: str, token: str) -> Any:  # noqa: ANN401
        reference = token[1:]
        if reference.startswith(SERVICE_DELIMITER):
            return reference[1:]

        optional = reference.startswith(OPTIONAL_MARKER)
        if optional:
            reference = reference[1:]

        if reference == service_name:
            raise CircularReferenceError(
                f"Circular reference to self, {service_name} references {service_name}"
            )
        if reference in self._store.services:
            return self._get_service(reference)
        if optional:
            logger.debug(
                "Optional service '%s' for service '%s' not defined", reference, service_name
            )
            return None
        raise UnknownServiceError(f"Service: {reference} not defined in container")
