"""Definition store holding the merged parameter and service tables."""

from dataclasses import dataclass, field
from typing import Any

from servicewire.models import ServiceDefinition

ROOT_PARAMETER = "root"


@dataclass
class DefinitionStore:
    """Merged parameter table and service-definition table.

    Pure data. Only the merge engine and ``ServiceContainer.set()`` write to it.
    Insertion order of ``services`` is registration order.
    """

    parameters: dict[str, Any] = field(default_factory=dict)
    services: dict[str, ServiceDefinition] = field(default_factory=dict)

    def has_parameter(self, name: str) -> bool:
        return name in self.parameters

    def has_service(self, name: str) -> bool:
        return name in self.services

    def definition(self, name: str) -> ServiceDefinition | None:
        return self.services.get(name)

    def service_names(self) -> list[str]:
        return list(self.services)
