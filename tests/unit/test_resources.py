"""Unit tests for resource requirement translation."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from cloudstate_config.errors import QuantityParseError
from cloudstate_config.quantity import InvalidQuantityError, Quantity
from cloudstate_config.resources import (
    ResourceName,
    ResourceRequirements,
    to_resource_requirements,
)
from cloudstate_config.schemas import ResourceConfig


def _resources(**overrides: str | None) -> ResourceConfig:
    values: dict[str, str | None] = {
        "cpu_request": "400m",
        "cpu_limit": None,
        "memory_request": "512Mi",
        "memory_limit": "512Mi",
    }
    values.update(overrides)
    return ResourceConfig(**values)


class TestToResourceRequirements:
    """Tests for to_resource_requirements."""

    def test_default_block_without_cpu_limit(self) -> None:
        """Requests carry cpu and memory; limits carry memory only."""
        requirements = to_resource_requirements(_resources())

        assert requirements.requests == {
            ResourceName.CPU: Quantity.parse("400m"),
            ResourceName.MEMORY: Quantity.parse("512Mi"),
        }
        assert requirements.limits == {ResourceName.MEMORY: Quantity.parse("512Mi")}
        assert ResourceName.CPU not in requirements.limits

    def test_cpu_limit_adds_limit_entry(self) -> None:
        """A configured CPU limit adds a cpu entry without touching requests."""
        without_limit = to_resource_requirements(_resources())
        with_limit = to_resource_requirements(_resources(cpu_limit="1"))

        assert with_limit.limits[ResourceName.CPU].amount == 1
        assert with_limit.limits[ResourceName.CPU].milli_value() == 1000
        assert with_limit.limits[ResourceName.MEMORY] == Quantity.parse("512Mi")
        assert with_limit.requests == without_limit.requests

    def test_method_on_resource_config(self) -> None:
        """ResourceConfig.to_resource_requirements delegates to the translator."""
        config = _resources(cpu_limit="2")
        assert config.to_resource_requirements() == to_resource_requirements(config)

    @pytest.mark.parametrize(
        ("field", "document_key", "raw"),
        [
            ("cpu_request", "cpuRequest", "lots"),
            ("memory_request", "memoryRequest", "abc"),
            ("memory_limit", "memoryLimit", "-512Mi"),
            ("cpu_limit", "cpuLimit", "1Xi"),
            ("cpu_limit", "cpuLimit", "1e1000000"),
            ("memory_limit", "memoryLimit", "1Gi\n"),
        ],
    )
    def test_parse_error_names_field_and_value(
        self, field: str, document_key: str, raw: str
    ) -> None:
        """Each failure names the document field and the offending string."""
        with pytest.raises(QuantityParseError) as exc_info:
            to_resource_requirements(_resources(**{field: raw}))

        error = exc_info.value
        assert error.field_name == document_key
        assert error.raw_value == raw
        assert document_key in str(error)
        assert f"'{raw}'" in str(error)
        assert isinstance(error.__cause__, InvalidQuantityError)

    def test_memory_request_error_message(self) -> None:
        """The memoryRequest failure reads naturally."""
        with pytest.raises(QuantityParseError) as exc_info:
            to_resource_requirements(_resources(memory_request="abc"))

        assert str(exc_info.value) == (
            "Error parsing memory request 'abc' (field 'memoryRequest')"
        )

    def test_first_failure_short_circuits(self) -> None:
        """With several bad fields the first in document order is reported."""
        with pytest.raises(QuantityParseError) as exc_info:
            to_resource_requirements(
                _resources(cpu_request="x", memory_request="y", memory_limit="z")
            )

        assert exc_info.value.field_name == "cpuRequest"

    def test_empty_string_is_an_error(self) -> None:
        """An explicitly empty quantity is rejected, not treated as zero."""
        with pytest.raises(QuantityParseError) as exc_info:
            to_resource_requirements(_resources(cpu_limit=""))

        assert exc_info.value.field_name == "cpuLimit"


class TestResourceRequirements:
    """Tests for the ResourceRequirements model."""

    def test_to_dict_without_cpu_limit(self) -> None:
        """to_dict renders canonical strings and omits the absent cpu limit."""
        requirements = to_resource_requirements(_resources())

        assert requirements.to_dict() == {
            "requests": {"cpu": "400m", "memory": "512Mi"},
            "limits": {"memory": "512Mi"},
        }

    def test_to_dict_with_cpu_limit(self) -> None:
        """to_dict includes the cpu limit when configured."""
        requirements = to_resource_requirements(
            _resources(cpu_limit="1000m", memory_limit="1Gi")
        )

        assert requirements.to_dict()["limits"] == {"memory": "1Gi", "cpu": "1"}

    def test_is_frozen(self) -> None:
        """ResourceRequirements cannot be reassigned."""
        requirements = ResourceRequirements()
        with pytest.raises(ValidationError):
            requirements.requests = {}  # type: ignore[misc]
