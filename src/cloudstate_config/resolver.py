"""Service configuration resolver for cloudstate-config.

This module resolves a stateful service's configuration from the data of
its ConfigMap:
- resolve_service_config(): Defaults plus an optional config.yaml document
- ServiceConfigResolver: Reads the document from ConfigMap data and seeds
  new ConfigMaps with the example document

Every resolution builds its own default object, so resolutions share no
state and need no locking. On error the caller keeps its previous
known-good configuration; nothing here retries.
"""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping

import structlog

from cloudstate_config.defaults import build_defaults
from cloudstate_config.errors import ConfigurationError
from cloudstate_config.overlay import merge_overlay
from cloudstate_config.schemas import ServiceConfig
from cloudstate_config.template import render_example_document

logger = structlog.get_logger(__name__)

# ConfigMap data key holding the config.yaml document
CONFIG_KEY = "config.yaml"


def resolve_service_config(document_text: str | None = None) -> ServiceConfig:
    """Resolve a configuration from defaults and an optional document.

    Args:
        document_text: config.yaml text. None or empty yields the defaults.

    Returns:
        Fully populated ServiceConfig.

    Raises:
        ConfigurationError: If the document is malformed.

    Example:
        >>> config = resolve_service_config("autoscaler:\\n  maxReplicas: 3\\n")
        >>> config.autoscaler.max_replicas
        3
    """
    config = build_defaults()
    if document_text:
        merge_overlay(config, document_text)

    logger.debug("service_config_resolved", from_document=bool(document_text))
    return config


class ServiceConfigResolver:
    """Resolves service configuration from ConfigMap data.

    Attributes:
        config_key: ConfigMap data key holding the config.yaml document.

    Example:
        >>> resolver = ServiceConfigResolver()
        >>> data = resolver.example_data()
        >>> resolver.resolve(data) == build_defaults()
        True
    """

    def __init__(self, config_key: str = CONFIG_KEY) -> None:
        self.config_key = config_key

    def resolve(self, data: Mapping[str, str] | None) -> ServiceConfig:
        """Resolve configuration from ConfigMap data.

        A missing data mapping or a missing key yields the defaults.

        Args:
            data: ConfigMap data (key to document text).

        Returns:
            Fully populated ServiceConfig.

        Raises:
            ConfigurationError: If the document is malformed. The error
                names the ConfigMap key.
        """
        document_text = (data or {}).get(self.config_key, "")
        try:
            return resolve_service_config(document_text)
        except ConfigurationError as exc:
            raise exc.with_config_key(self.config_key) from exc.__cause__

    def example_data(self) -> dict[str, str]:
        """Return ConfigMap data holding only the example document."""
        return {self.config_key: render_example_document()}

    def seed_example(self, data: MutableMapping[str, str]) -> None:
        """Write the example document into ConfigMap data in place.

        Args:
            data: ConfigMap data to update; other keys are kept.
        """
        data[self.config_key] = render_example_document()
        logger.debug("example_config_seeded", config_key=self.config_key)
