"""JSON Schema export for the config.yaml document.

Generates a JSON Schema Draft 2020-12 schema from the ServiceConfig model
for IDE autocomplete when editing a service's ConfigMap. The document is an
overlay, so the exported schema marks no property as required.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from cloudstate_config.schemas import ServiceConfig

SCHEMA_DIALECT = "https://json-schema.org/draft/2020-12/schema"
SCHEMA_ID = "https://cloudstate.io/schemas/service-config.schema.json"


def export_service_config_schema(
    output_path: Path | str | None = None,
) -> dict[str, Any]:
    """Export the config.yaml JSON Schema.

    Args:
        output_path: Optional path to write schema file. If provided,
            creates parent directories as needed.

    Returns:
        Dictionary containing the JSON Schema, keyed by document (camelCase)
        names.

    Example:
        >>> schema = export_service_config_schema()
        >>> schema["$schema"]
        'https://json-schema.org/draft/2020-12/schema'
        >>> "userFunction" in schema["properties"]
        True
    """
    schema = ServiceConfig.model_json_schema(by_alias=True)

    schema["$schema"] = SCHEMA_DIALECT
    schema["$id"] = SCHEMA_ID

    # Every key may be omitted from an overlay document
    schema.pop("required", None)
    for definition in schema.get("$defs", {}).values():
        definition.pop("required", None)

    if output_path is not None:
        _write_schema_file(schema, output_path)

    return schema


def _write_schema_file(schema: dict[str, Any], path: Path | str) -> None:
    """Write schema to JSON file.

    Args:
        schema: Schema dictionary to write.
        path: Output file path.
    """
    output_path = Path(path)

    output_path.parent.mkdir(parents=True, exist_ok=True)

    output_path.write_text(json.dumps(schema, indent=2))
