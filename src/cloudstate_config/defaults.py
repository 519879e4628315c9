"""Default stateful service configuration.

The defaults are built directly as model instances. They are never produced
by merging a document, so every field starts from a known value and the
overlay engine only ever has to decide whether to touch it.
"""

from __future__ import annotations

from cloudstate_config.schemas import (
    AutoscalerConfig,
    ImagePullPolicy,
    ProxyConfig,
    ResourceConfig,
    ServiceConfig,
    UserFunctionConfig,
)

DEFAULT_AUTOSCALER_ENABLED = True
DEFAULT_MIN_REPLICAS = 1
DEFAULT_MAX_REPLICAS = 10
DEFAULT_CPU_UTILIZATION_THRESHOLD = 80

DEFAULT_IMAGE_PULL_POLICY = ImagePullPolicy.IF_NOT_PRESENT
DEFAULT_HEAP_SIZE = "256m"

DEFAULT_CPU_REQUEST = "400m"
DEFAULT_MEMORY_REQUEST = "512Mi"
DEFAULT_MEMORY_LIMIT = "512Mi"


def build_default_resources() -> ResourceConfig:
    """Return the default resource block (no CPU limit)."""
    return ResourceConfig(
        cpu_request=DEFAULT_CPU_REQUEST,
        cpu_limit=None,
        memory_request=DEFAULT_MEMORY_REQUEST,
        memory_limit=DEFAULT_MEMORY_LIMIT,
    )


def build_defaults() -> ServiceConfig:
    """Build a fully populated default configuration.

    Every call returns a new, independent instance, so callers may merge
    into it without affecting other resolutions.

    Returns:
        ServiceConfig with baseline values for every field.

    Example:
        >>> config = build_defaults()
        >>> config.autoscaler.max_replicas
        10
        >>> config.proxy.image is None
        True
    """
    return ServiceConfig(
        autoscaler=AutoscalerConfig(
            enabled=DEFAULT_AUTOSCALER_ENABLED,
            min_replicas=DEFAULT_MIN_REPLICAS,
            max_replicas=DEFAULT_MAX_REPLICAS,
            cpu_utilization_threshold=DEFAULT_CPU_UTILIZATION_THRESHOLD,
        ),
        proxy=ProxyConfig(
            image=None,
            image_pull_policy=DEFAULT_IMAGE_PULL_POLICY,
            resources=build_default_resources(),
            initial_heap_size=DEFAULT_HEAP_SIZE,
            max_heap_size=DEFAULT_HEAP_SIZE,
        ),
        user_function=UserFunctionConfig(
            resources=build_default_resources(),
        ),
    )
