"""Error classes for servicewire.

This module provides:
- ServiceWireError: Base exception class for all container errors
- ConfigurationMissingError: Engine built without a required setting
- DocumentError, DocumentNotFoundError, DocumentParseError: Document loading exceptions
- InvalidDefinitionError: Malformed service definition
- ResolutionError and subclasses: Argument resolution exceptions
- InvalidCallError: Malformed post-construction call
"""


class ServiceWireError(Exception):
    """Base exception for all servicewire errors."""

    pass


class ConfigurationMissingError(ServiceWireError):
    """Raised when the engine is built without a root path or required collaborator."""

    pass


class DocumentError(ServiceWireError):
    """Base exception for definition document errors."""

    pass


class DocumentNotFoundError(DocumentError):
    """Raised when a primary, imported, or bundle document does not exist."""

    pass


class DocumentParseError(DocumentError):
    """Raised when a document is malformed; the message names the document path."""

    pass


class InvalidDefinitionError(ServiceWireError):
    """Raised when a service entry lacks a class or its class is a structured value."""

    pass


class ResolutionError(ServiceWireError):
    """Base exception for argument resolution errors."""

    pass


class MissingParameterError(ResolutionError):
    """Raised when a required %name% reference has no matching parameter."""

    pass


class MissingCollaboratorError(ResolutionError):
    """Raised when a config.* reference is used without a configuration provider."""

    pass


class CircularReferenceError(ResolutionError):
    """Raised when a service depends on itself, directly or through other services."""

    pass


class UnknownServiceError(ResolutionError):
    """Raised when a required @name reference does not resolve to a known service."""

    pass


class InvalidCallError(ServiceWireError):
    """Raised when a post-construction call entry is malformed or cannot be invoked."""

    pass
