"""Stateful service configuration models for cloudstate-config.

This module defines the config.yaml schema for a stateful service:
- ServiceConfig: Root configuration model
- AutoscalerConfig: Horizontal autoscaling settings
- ProxyConfig: Proxy sidecar image, JVM heap and resources
- UserFunctionConfig: User function container resources
- ResourceConfig: CPU/memory requests and limits as quantity strings

Document keys are camelCase aliases of the snake_case attributes. Models
are assignable with validation so a partial document can be merged onto a
pre-built default instance (see cloudstate_config.overlay). Unknown keys
are ignored for forward compatibility.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from cloudstate_config.resources import ResourceRequirements, to_resource_requirements

# Shared model configuration for every config.yaml section
_SECTION_CONFIG = ConfigDict(
    extra="ignore",
    populate_by_name=True,
    validate_assignment=True,
    coerce_numbers_to_str=True,
)


class ImagePullPolicy(str, Enum):
    """Kubernetes container image pull policy.

    Values:
        ALWAYS: Pull the image on every container start.
        IF_NOT_PRESENT: Pull only when the image is missing on the node.
        NEVER: Never pull; the image must already be present.
    """

    ALWAYS = "Always"
    IF_NOT_PRESENT = "IfNotPresent"
    NEVER = "Never"


class ResourceConfig(BaseModel):
    """CPU and memory sizing for a container.

    Attributes:
        cpu_request: CPU request (e.g., "400m").
        cpu_limit: CPU limit, or None to impose no CPU limit.
        memory_request: Memory request (e.g., "512Mi").
        memory_limit: Memory limit (e.g., "512Mi").

    Example:
        >>> resources = ResourceConfig(
        ...     cpu_request="400m",
        ...     memory_request="512Mi",
        ...     memory_limit="512Mi",
        ... )
        >>> resources.cpu_limit is None
        True
    """

    model_config = _SECTION_CONFIG

    cpu_request: str = Field(
        ...,
        alias="cpuRequest",
        description="CPU request",
    )
    cpu_limit: str | None = Field(
        default=None,
        alias="cpuLimit",
        description="CPU limit; unset means no CPU limit is imposed",
    )
    memory_request: str = Field(
        ...,
        alias="memoryRequest",
        description="Memory request",
    )
    memory_limit: str = Field(
        ...,
        alias="memoryLimit",
        description="Memory limit",
    )

    def to_resource_requirements(self) -> ResourceRequirements:
        """Translate into validated requests and limits.

        Raises:
            QuantityParseError: If any quantity string cannot be parsed.
        """
        return to_resource_requirements(self)


class AutoscalerConfig(BaseModel):
    """Autoscaler settings.

    Ranges are not cross-checked (min_replicas may exceed max_replicas);
    the autoscaling controller owns that policy.

    Attributes:
        enabled: Whether the autoscaler runs for this service.
        min_replicas: Replica count to scale down to.
        max_replicas: Replica count to scale up to.
        cpu_utilization_threshold: Average CPU utilization, as a percentage
            of requested CPU, at which the autoscaler scales.
    """

    model_config = _SECTION_CONFIG

    enabled: bool = Field(
        ...,
        description="Whether the autoscaler is enabled",
    )
    min_replicas: int = Field(
        ...,
        alias="minReplicas",
        description="Minimum number of replicas",
    )
    max_replicas: int = Field(
        ...,
        alias="maxReplicas",
        description="Maximum number of replicas",
    )
    cpu_utilization_threshold: int = Field(
        ...,
        alias="cpuUtilizationThreshold",
        description="CPU utilization threshold (percent of requested CPU)",
    )


class ProxyConfig(BaseModel):
    """Proxy sidecar settings.

    Attributes:
        image: Proxy image override. None lets the operator pick an image
            for the configured stateful store; an explicit "" is kept as-is.
        image_pull_policy: Image pull policy for the proxy container.
        resources: Proxy container resources.
        initial_heap_size: Initial JVM heap size (e.g., "256m").
        max_heap_size: Maximum JVM heap size (e.g., "256m").
    """

    model_config = _SECTION_CONFIG

    image: str | None = Field(
        default=None,
        description="Proxy image; unset lets the operator choose",
    )
    image_pull_policy: ImagePullPolicy = Field(
        ...,
        alias="imagePullPolicy",
        description="Image pull policy",
    )
    resources: ResourceConfig = Field(
        ...,
        description="Proxy resource requirements",
    )
    initial_heap_size: str = Field(
        ...,
        alias="initialHeapSize",
        description="Initial JVM heap size",
    )
    max_heap_size: str = Field(
        ...,
        alias="maxHeapSize",
        description="Maximum JVM heap size",
    )


class UserFunctionConfig(BaseModel):
    """User function container settings."""

    model_config = _SECTION_CONFIG

    resources: ResourceConfig = Field(
        ...,
        description="User function resource requirements",
    )


class ServiceConfig(BaseModel):
    """Resolved configuration of a stateful service.

    This is the root model for the config.yaml document. Build a complete
    instance with build_defaults() and merge the operator's document onto
    it; do not construct it from a partial document directly.

    Attributes:
        autoscaler: Autoscaler settings.
        proxy: Proxy sidecar settings.
        user_function: User function container settings.

    Example:
        >>> config = build_defaults()
        >>> merge_overlay(config, "autoscaler:\\n  enabled: false\\n")
        >>> config.autoscaler.enabled
        False
    """

    model_config = _SECTION_CONFIG

    autoscaler: AutoscalerConfig = Field(
        ...,
        description="Autoscaler settings",
    )
    proxy: ProxyConfig = Field(
        ...,
        description="Proxy settings",
    )
    user_function: UserFunctionConfig = Field(
        ...,
        alias="userFunction",
        description="User function settings",
    )

    def proxy_resource_requirements(self) -> ResourceRequirements:
        """Translate the proxy resource section."""
        return self.proxy.resources.to_resource_requirements()

    def user_function_resource_requirements(self) -> ResourceRequirements:
        """Translate the user function resource section."""
        return self.user_function.resources.to_resource_requirements()
