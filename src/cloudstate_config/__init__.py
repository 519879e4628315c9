"""cloudstate-config: Layered configuration for Cloudstate stateful services.

This package provides:
- build_defaults(): Hardcoded baseline ServiceConfig
- merge_overlay(): Merge a partial config.yaml onto a configuration in place
- to_resource_requirements(): Translate resource sizing into validated
  Kubernetes requests and limits
- render_example_document(): Fully commented example config.yaml
- ServiceConfigResolver: Resolve configuration from ConfigMap data
"""

from __future__ import annotations

__version__ = "0.1.0"

# Default construction
from cloudstate_config.defaults import build_defaults

# Error types
from cloudstate_config.errors import (
    CloudstateConfigError,
    ConfigurationError,
    QuantityParseError,
)

# JSON Schema export
from cloudstate_config.export import export_service_config_schema

# Overlay merge
from cloudstate_config.overlay import (
    CLEARED,
    UNSET,
    FieldPatch,
    Value,
    apply_overlay,
    lookup_field,
    merge_overlay,
    parse_overlay_document,
)

# Quantities and resource requirements
from cloudstate_config.quantity import InvalidQuantityError, Quantity, QuantityFormat
from cloudstate_config.resolver import (
    CONFIG_KEY,
    ServiceConfigResolver,
    resolve_service_config,
)
from cloudstate_config.resources import (
    ResourceName,
    ResourceRequirements,
    to_resource_requirements,
)

# Schema models
from cloudstate_config.schemas import (
    AutoscalerConfig,
    ImagePullPolicy,
    ProxyConfig,
    ResourceConfig,
    ServiceConfig,
    UserFunctionConfig,
)
from cloudstate_config.template import EXAMPLE_CONFIG_DOCUMENT, render_example_document

__all__ = [
    "__version__",
    # Defaults
    "build_defaults",
    # Errors
    "CloudstateConfigError",
    "ConfigurationError",
    "QuantityParseError",
    "InvalidQuantityError",
    # JSON Schema export
    "export_service_config_schema",
    # Overlay
    "merge_overlay",
    "apply_overlay",
    "parse_overlay_document",
    "lookup_field",
    "FieldPatch",
    "UNSET",
    "CLEARED",
    "Value",
    # Resolver
    "CONFIG_KEY",
    "ServiceConfigResolver",
    "resolve_service_config",
    # Quantities
    "Quantity",
    "QuantityFormat",
    "ResourceName",
    "ResourceRequirements",
    "to_resource_requirements",
    # Schema models
    "ServiceConfig",
    "AutoscalerConfig",
    "ProxyConfig",
    "UserFunctionConfig",
    "ResourceConfig",
    "ImagePullPolicy",
    # Template
    "EXAMPLE_CONFIG_DOCUMENT",
    "render_example_document",
]
