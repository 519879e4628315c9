"""Resource requirement translation for cloudstate-config.

This module turns a resolved ResourceConfig section into the request/limit
shape consumed by the Kubernetes scheduler:
- ResourceName: Resource kinds (cpu, memory)
- ResourceRequirements: Validated requests and limits
- to_resource_requirements(): Parse and assemble a ResourceConfig

Requests always carry cpu and memory. Limits always carry memory and carry
cpu only when a CPU limit was configured; an absent CPU limit means no key,
since the presence of a limit tells the scheduler to enforce a ceiling.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

from cloudstate_config.errors import QuantityParseError
from cloudstate_config.quantity import InvalidQuantityError, Quantity

if TYPE_CHECKING:
    from cloudstate_config.schemas.service_config import ResourceConfig


class ResourceName(str, Enum):
    """Kubernetes resource kinds managed by this package."""

    CPU = "cpu"
    MEMORY = "memory"


class ResourceRequirements(BaseModel):
    """Container resource requests and limits.

    Attributes:
        requests: Guaranteed reservations, keyed by resource kind.
        limits: Enforced ceilings, keyed by resource kind. A missing key
            means no ceiling is enforced for that resource.

    Example:
        >>> requirements = ResourceRequirements(
        ...     requests={
        ...         ResourceName.CPU: Quantity.parse("400m"),
        ...         ResourceName.MEMORY: Quantity.parse("512Mi"),
        ...     },
        ...     limits={ResourceName.MEMORY: Quantity.parse("512Mi")},
        ... )
        >>> requirements.to_dict()
        {'requests': {'cpu': '400m', 'memory': '512Mi'}, 'limits': {'memory': '512Mi'}}
    """

    model_config = ConfigDict(frozen=True)

    requests: dict[ResourceName, Quantity] = Field(
        default_factory=dict,
        description="Resource requests (guaranteed)",
    )
    limits: dict[ResourceName, Quantity] = Field(
        default_factory=dict,
        description="Resource limits (maximum)",
    )

    def to_dict(self) -> dict[str, dict[str, str]]:
        """Render as a container spec "resources" fragment.

        Returns:
            Dictionary with "requests" and "limits" mappings of resource
            name to canonical quantity string.
        """
        return {
            "requests": {name.value: str(quantity) for name, quantity in self.requests.items()},
            "limits": {name.value: str(quantity) for name, quantity in self.limits.items()},
        }


def _parse_field(field_name: str, description: str, raw_value: str) -> Quantity:
    try:
        return Quantity.parse(raw_value)
    except InvalidQuantityError as exc:
        raise QuantityParseError(
            field_name,
            description,
            raw_value,
            internal_details=str(exc),
        ) from exc


def to_resource_requirements(config: ResourceConfig) -> ResourceRequirements:
    """Translate a resource section into validated requests and limits.

    Fields are parsed in document order and the first failure aborts the
    translation, so no partial result is ever produced.

    Args:
        config: Resolved resource section (proxy or user function).

    Returns:
        ResourceRequirements with cpu/memory requests, a memory limit, and
        a cpu limit only when config.cpu_limit is set.

    Raises:
        QuantityParseError: If any quantity string cannot be parsed. The
            error names the document field and the raw value.

    Example:
        >>> requirements = to_resource_requirements(build_defaults().proxy.resources)
        >>> ResourceName.CPU in requirements.limits
        False
    """
    cpu_request = _parse_field("cpuRequest", "CPU request", config.cpu_request)
    memory_request = _parse_field("memoryRequest", "memory request", config.memory_request)
    memory_limit = _parse_field("memoryLimit", "memory limit", config.memory_limit)

    requests = {
        ResourceName.CPU: cpu_request,
        ResourceName.MEMORY: memory_request,
    }
    limits = {
        ResourceName.MEMORY: memory_limit,
    }

    if config.cpu_limit is not None:
        limits[ResourceName.CPU] = _parse_field("cpuLimit", "CPU limit", config.cpu_limit)

    return ResourceRequirements(requests=requests, limits=limits)
