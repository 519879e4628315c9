"""Integration tests for ConfigMap data to container resources.

Exercises the full path a controller takes on each reconciliation:
ConfigMap data -> resolved ServiceConfig -> container resource fragments.
"""

from __future__ import annotations

import pytest

from cloudstate_config import (
    CONFIG_KEY,
    ConfigurationError,
    QuantityParseError,
    ResourceName,
    ServiceConfigResolver,
    build_defaults,
)


class TestConfigMapResolution:
    """End-to-end resolution of a service's ConfigMap."""

    def test_seeded_configmap_yields_default_resources(self) -> None:
        """A new ConfigMap produces the default container resources."""
        resolver = ServiceConfigResolver()
        data: dict[str, str] = {}
        resolver.seed_example(data)

        config = resolver.resolve(data)

        assert config == build_defaults()
        assert config.proxy_resource_requirements().to_dict() == {
            "requests": {"cpu": "400m", "memory": "512Mi"},
            "limits": {"memory": "512Mi"},
        }

    def test_operator_edit_flows_into_resources(self) -> None:
        """Uncommenting settings in the example changes the resources."""
        resolver = ServiceConfigResolver()
        document = resolver.example_data()[CONFIG_KEY]
        edited = document.replace(
            "    # cpuLimit:\n", "    cpuLimit: 1500m\n", 1
        ).replace("  # memoryLimit: 512Mi\n", "  memoryLimit: 1Gi\n")

        config = resolver.resolve({CONFIG_KEY: edited})
        proxy = config.proxy_resource_requirements()
        user_function = config.user_function_resource_requirements()

        assert proxy.limits[ResourceName.CPU].milli_value() == 1500
        assert str(proxy.limits[ResourceName.MEMORY]) == "1Gi"
        assert ResourceName.CPU not in user_function.limits
        assert str(user_function.limits[ResourceName.MEMORY]) == "1Gi"

    def test_bad_quantity_surfaces_after_resolution(self) -> None:
        """A syntactically valid but unparsable quantity fails translation."""
        resolver = ServiceConfigResolver()
        config = resolver.resolve(
            {CONFIG_KEY: "userFunction:\n  resources:\n    memoryRequest: abc\n"}
        )

        config.proxy_resource_requirements()
        with pytest.raises(QuantityParseError) as exc_info:
            config.user_function_resource_requirements()

        assert exc_info.value.field_name == "memoryRequest"
        assert exc_info.value.raw_value == "abc"

    def test_block_scalar_quantity_is_rejected(self) -> None:
        """A block scalar keeps its trailing newline, which is not a quantity."""
        resolver = ServiceConfigResolver()
        document = "proxy:\n  resources:\n    memoryLimit: |\n      1Gi\n"
        config = resolver.resolve({CONFIG_KEY: document})

        assert config.proxy.resources.memory_limit == "1Gi\n"
        with pytest.raises(QuantityParseError) as exc_info:
            config.proxy_resource_requirements()

        assert exc_info.value.field_name == "memoryLimit"

    def test_previous_config_survives_failed_resolution(self) -> None:
        """A failed resolution leaves the previous snapshot intact."""
        resolver = ServiceConfigResolver()
        known_good = resolver.resolve({CONFIG_KEY: "autoscaler:\n  maxReplicas: 5\n"})

        with pytest.raises(ConfigurationError):
            resolver.resolve({CONFIG_KEY: "autoscaler:\n  maxReplicas: [\n"})

        assert known_good.autoscaler.max_replicas == 5
