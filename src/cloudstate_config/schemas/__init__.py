"""Schema definitions for cloudstate-config.

This module exports the config.yaml Pydantic models:
- ServiceConfig: Root schema for a stateful service's config.yaml
- AutoscalerConfig, ProxyConfig, UserFunctionConfig: Sections
- ResourceConfig: CPU/memory sizing shared by proxy and user function
- ImagePullPolicy: Enum for container image pull policies
"""

from __future__ import annotations

from cloudstate_config.schemas.service_config import (
    AutoscalerConfig,
    ImagePullPolicy,
    ProxyConfig,
    ResourceConfig,
    ServiceConfig,
    UserFunctionConfig,
)

__all__ = [
    "ServiceConfig",
    "AutoscalerConfig",
    "ProxyConfig",
    "UserFunctionConfig",
    "ResourceConfig",
    "ImagePullPolicy",
]
