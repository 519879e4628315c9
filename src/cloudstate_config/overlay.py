"""Overlay merge of a partial config.yaml onto a pre-built configuration.

An operator-edited document is almost always partial. Merging follows
three rules:
- A key absent from the document leaves the target field untouched.
- A key present with a value replaces the field, even with False, 0 or "".
- A key present with null clears an optional field (image, cpuLimit) and
  leaves a mandatory field or a nested section untouched.

Each key is classified as a FieldPatch before it is applied:
UNSET (absent), CLEARED (present, null) or Value(v) (present, v).
Nested sections are merged depth-first, so a partial section never resets
its untouched siblings. Unknown keys are ignored.
"""

from __future__ import annotations

import re
import types
import typing
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

import pydantic
import structlog
import yaml
from pydantic import BaseModel
from pydantic.fields import FieldInfo

from cloudstate_config.errors import ConfigurationError
from cloudstate_config.schemas import ServiceConfig

logger = structlog.get_logger(__name__)

T = TypeVar("T")


class Unset:
    """Key absent from the document; the target field is left untouched."""

    _instance: Unset | None = None

    def __new__(cls) -> Unset:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"


class Cleared:
    """Key present with a null value."""

    _instance: Cleared | None = None

    def __new__(cls) -> Cleared:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "CLEARED"


@dataclass(frozen=True)
class Value(Generic[T]):
    """Key present with a non-null value."""

    value: T


UNSET = Unset()
CLEARED = Cleared()

FieldPatch = Union[Unset, Cleared, Value[Any]]

_BOOL_TAG = "tag:yaml.org,2002:bool"


class OverlayLoader(yaml.SafeLoader):
    """SafeLoader that resolves only true/false as booleans.

    YAML 1.1 spellings (yes, no, on, off, y, n) stay strings, so
    `image: yes` is text. Boolean fields still accept them through
    pydantic's coercion.
    """


OverlayLoader.yaml_implicit_resolvers = {
    first: [(tag, pattern) for tag, pattern in resolvers if tag != _BOOL_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}
OverlayLoader.add_implicit_resolver(
    _BOOL_TAG,
    re.compile(r"^(?:true|True|TRUE|false|False|FALSE)$"),
    list("tTfF"),
)


def lookup_field(document: Mapping[str, Any], key: str) -> FieldPatch:
    """Classify how a document supplies a key.

    Args:
        document: Parsed document section.
        key: Document key (camelCase alias).

    Returns:
        UNSET if the key is absent, CLEARED if it is present with null,
        otherwise Value wrapping the supplied value.

    Example:
        >>> lookup_field({"cpuLimit": None}, "cpuLimit")
        CLEARED
        >>> lookup_field({}, "cpuLimit")
        UNSET
        >>> lookup_field({"enabled": False}, "enabled")
        Value(value=False)
    """
    if key not in document:
        return UNSET
    value = document[key]
    if value is None:
        return CLEARED
    return Value(value)


def parse_overlay_document(document_text: str) -> dict[str, Any]:
    """Parse config.yaml text into a mapping.

    Args:
        document_text: YAML text. Empty or comment-only text is allowed.

    Returns:
        Parsed mapping; empty when the document holds no data.

    Raises:
        ConfigurationError: If the text is not valid YAML or its root is
            not a mapping.
    """
    try:
        data = yaml.load(document_text, Loader=OverlayLoader)
    except yaml.MarkedYAMLError as exc:
        mark = exc.problem_mark or exc.context_mark
        raise ConfigurationError(
            "Configuration document is not valid YAML",
            line_number=mark.line + 1 if mark is not None else None,
            column_number=mark.column + 1 if mark is not None else None,
            internal_details=str(exc),
        ) from exc
    except yaml.YAMLError as exc:
        raise ConfigurationError(
            "Configuration document is not valid YAML",
            internal_details=str(exc),
        ) from exc

    if data is None:
        return {}

    if not isinstance(data, dict):
        raise ConfigurationError(
            "Configuration document must be a mapping",
            internal_details=f"Document root is a {type(data).__name__}",
        )

    return data


def _nested_model(field_info: FieldInfo) -> type[BaseModel] | None:
    annotation = field_info.annotation
    if isinstance(annotation, type) and issubclass(annotation, BaseModel):
        return annotation
    return None


def _is_optional(field_info: FieldInfo) -> bool:
    annotation = field_info.annotation
    origin = typing.get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        return type(None) in typing.get_args(annotation)
    return False


def apply_overlay(
    target: BaseModel,
    document: Mapping[str, Any],
    path: str = "",
) -> list[str]:
    """Merge a parsed document section onto a model instance in place.

    Args:
        target: Model to mutate (a ServiceConfig or any of its sections).
        document: Parsed document section for target.
        path: Dotted document path of target, used in error messages.

    Returns:
        Dotted document paths of the fields that were written.

    Raises:
        ConfigurationError: If a section is not a mapping or a value cannot
            be coerced into its field. The target may be partially updated.
    """
    applied: list[str] = []

    for name, field_info in type(target).model_fields.items():
        key = field_info.alias or name
        field_path = f"{path}.{key}" if path else key
        patch = lookup_field(document, key)

        if isinstance(patch, Unset):
            continue

        if _nested_model(field_info) is not None:
            if isinstance(patch, Cleared):
                continue
            if not isinstance(patch.value, Mapping):
                raise ConfigurationError(
                    "Configuration section must be a mapping",
                    field_path=field_path,
                    internal_details=f"Got {type(patch.value).__name__}: {patch.value!r}",
                )
            applied.extend(apply_overlay(getattr(target, name), patch.value, field_path))
            continue

        if isinstance(patch, Cleared):
            if _is_optional(field_info):
                setattr(target, name, None)
                applied.append(field_path)
            continue

        try:
            setattr(target, name, patch.value)
        except pydantic.ValidationError as exc:
            raise ConfigurationError(
                "Invalid value for configuration field",
                field_path=field_path,
                internal_details=str(exc),
            ) from exc
        applied.append(field_path)

    return applied


def merge_overlay(target: ServiceConfig, document_text: str) -> None:
    """Merge a config.yaml document onto a configuration in place.

    Args:
        target: Pre-populated configuration, normally from build_defaults().
        document_text: Partial config.yaml text.

    Raises:
        ConfigurationError: If the document is malformed. The target is then
            in an undefined state and should be discarded.

    Example:
        >>> config = build_defaults()
        >>> merge_overlay(config, "proxy:\\n  resources:\\n    cpuLimit: '1'\\n")
        >>> config.proxy.resources.cpu_limit
        '1'
        >>> config.proxy.resources.cpu_request
        '400m'
    """
    applied = apply_overlay(target, parse_overlay_document(document_text))
    logger.debug("overlay_merged", overridden=applied)
