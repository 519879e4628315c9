"""Custom exception hierarchy for cloudstate-config.

This module defines the exception classes raised while resolving a
stateful service configuration:
- CloudstateConfigError: Base exception for all resolver errors
- ConfigurationError: Raised when the config.yaml document cannot be merged
- QuantityParseError: Raised when a resource quantity cannot be parsed

User-facing messages are safe to display in controller status conditions;
technical details (parser output, offending snippets) are logged via structlog.
"""

from __future__ import annotations

import structlog

logger = structlog.get_logger(__name__)


class CloudstateConfigError(Exception):
    """Base exception for cloudstate-config.

    Args:
        user_message: Safe message to display to the operator.
        internal_details: Optional technical details for logging. Logged
            internally, never included in the exception message.

    Example:
        >>> raise CloudstateConfigError(
        ...     "Configuration invalid",
        ...     internal_details="mapping values are not allowed here",
        ... )
    """

    def __init__(
        self,
        user_message: str,
        *,
        internal_details: str | None = None,
    ) -> None:
        super().__init__(user_message)
        self.user_message = user_message

        if internal_details:
            logger.error(
                "cloudstate_config_error",
                error_type=self.__class__.__name__,
                user_message=user_message,
                internal_details=internal_details,
            )


class ConfigurationError(CloudstateConfigError):
    """Raised when the configuration document cannot be merged.

    Use this exception when:
    - config.yaml is not well-formed YAML
    - The document root or a section is not a mapping
    - A value cannot be coerced into its field's type

    Attributes:
        config_key: ConfigMap key the document was read from (if known).
        field_path: Dot-separated document path (e.g., "proxy.resources").
        line_number: 1-based line in the document (if the parser reported one).
        column_number: 1-based column in the document (if reported).

    Example:
        >>> raise ConfigurationError(
        ...     "Invalid value for field",
        ...     config_key="config.yaml",
        ...     field_path="autoscaler.minReplicas",
        ... )
        # User sees: "Invalid value for field (in config.yaml, field 'autoscaler.minReplicas')"
    """

    def __init__(
        self,
        user_message: str,
        *,
        config_key: str | None = None,
        field_path: str | None = None,
        line_number: int | None = None,
        column_number: int | None = None,
        internal_details: str | None = None,
    ) -> None:
        context_parts: list[str] = []
        if config_key:
            context_parts.append(f"in {config_key}")
        if line_number:
            if column_number:
                context_parts.append(f"line {line_number}, column {column_number}")
            else:
                context_parts.append(f"line {line_number}")
        if field_path:
            context_parts.append(f"field '{field_path}'")

        if context_parts:
            full_message = f"{user_message} ({', '.join(context_parts)})"
        else:
            full_message = user_message

        super().__init__(full_message, internal_details=internal_details)

        self.base_message = user_message
        self.config_key = config_key
        self.field_path = field_path
        self.line_number = line_number
        self.column_number = column_number

    def with_config_key(self, config_key: str) -> ConfigurationError:
        """Return a copy of this error attributed to a ConfigMap key."""
        return ConfigurationError(
            self.base_message,
            config_key=config_key,
            field_path=self.field_path,
            line_number=self.line_number,
            column_number=self.column_number,
        )


class QuantityParseError(CloudstateConfigError):
    """Raised when a resource quantity string cannot be parsed.

    Always names the document field and the raw value, and is chained to
    the underlying InvalidQuantityError.

    Attributes:
        field_name: Document key of the offending field (e.g., "memoryRequest").
        raw_value: The string that failed to parse.

    Example:
        >>> raise QuantityParseError(
        ...     field_name="memoryRequest",
        ...     description="memory request",
        ...     raw_value="abc",
        ... )
        # User sees: "Error parsing memory request 'abc' (field 'memoryRequest')"
    """

    def __init__(
        self,
        field_name: str,
        description: str,
        raw_value: str,
        *,
        internal_details: str | None = None,
    ) -> None:
        user_message = f"Error parsing {description} '{raw_value}' (field '{field_name}')"

        super().__init__(user_message, internal_details=internal_details)

        self.field_name = field_name
        self.raw_value = raw_value
