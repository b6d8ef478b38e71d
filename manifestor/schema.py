"""Light-weight JSON schema validation for manifests and configuration files.

Only the subset of JSON schema used by :data:`MANIFEST_SCHEMA` and the
configuration schema is supported: ``type`` (single or list), ``enum``,
``minimum``, ``properties``, ``required``, ``additionalProperties``,
``items`` and ``default``.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Dict

from .exceptions import SchemaValidationError

_TYPE_CHECKS = {
    "string": lambda value: isinstance(value, str),
    "integer": lambda value: isinstance(value, int) and not isinstance(value, bool),
    "number": lambda value: isinstance(value, (int, float)) and not isinstance(value, bool),
    "boolean": lambda value: isinstance(value, bool),
    "object": lambda value: isinstance(value, Mapping),
    "array": lambda value: isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)),
    "null": lambda value: value is None,
}


def _check_type(value: Any, schema_type: str | Sequence[str], path: str) -> None:
    options = [schema_type] if isinstance(schema_type, str) else list(schema_type)
    for option in options:
        check = _TYPE_CHECKS.get(option)
        if check is None:
            raise SchemaValidationError(f"Unsupported schema type {option!r} at {path!r}")
        if check(value):
            return
    expected = options[0] if len(options) == 1 else options
    raise SchemaValidationError(f"Expected {expected} at {path!r}, got {type(value).__name__}")


def _join(path: str, key: str) -> str:
    return f"{path}.{key}" if path else key


def _validate(schema: Mapping[str, Any], value: Any, path: str) -> Any:
    if "type" in schema:
        _check_type(value, schema["type"], path)
    if "enum" in schema and value not in schema["enum"]:
        raise SchemaValidationError(f"Value {value!r} at {path!r} not in {schema['enum']!r}")
    minimum = schema.get("minimum")
    if minimum is not None and _TYPE_CHECKS["number"](value) and value < minimum:
        raise SchemaValidationError(f"Value {value!r} at {path!r} below minimum {minimum!r}")

    if isinstance(value, Mapping):
        return _validate_object(schema, value, path)
    if _TYPE_CHECKS["array"](value):
        items_schema = schema.get("items")
        if isinstance(items_schema, Mapping):
            return [_validate(items_schema, item, f"{path}[{idx}]") for idx, item in enumerate(value)]
        return list(value)
    return value


def _validate_object(schema: Mapping[str, Any], value: Mapping[str, Any], path: str) -> Dict[str, Any]:
    properties = schema.get("properties", {})
    additional = schema.get("additionalProperties", True)
    result: Dict[str, Any] = {
        key: prop_schema["default"]
        for key, prop_schema in properties.items()
        if key not in value and "default" in prop_schema
    }

    for key in schema.get("required", ()):
        if key not in value and key not in result:
            raise SchemaValidationError(f"Missing required property {key!r} at {path!r}")

    for key, child in value.items():
        if key in properties:
            result[key] = _validate(properties[key], child, _join(path, key))
        elif additional is False:
            raise SchemaValidationError(f"Unexpected property {key!r} at {path!r}")
        elif isinstance(additional, Mapping):
            result[key] = _validate(additional, child, _join(path, key))
        else:
            result[key] = child
    return result


def validate(data: Any, schema: Mapping[str, Any]) -> Any:
    """Validate *data* against *schema* and return a normalised copy.

    Defaults declared in the schema are filled in for missing properties.
    """

    return _validate(schema, data, path="")


_STRINGS = {"type": "array", "items": {"type": "string"}}

_PARAMETER_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["name", "entityType"],
    "properties": {
        "name": {"type": "string"},
        "internalName": {"type": "string"},
        "qualifiedName": {"type": "string"},
        "entityType": {"type": "string"},
        "qualifiedTypeName": {"type": "string"},
        "typeModule": {"type": "string"},
        "aliases": _STRINGS,
        "examples": _STRINGS,
    },
}

MANIFEST_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["id", "version", "domain", "entities", "actions", "errorHandlers"],
    "properties": {
        "id": {"type": "string"},
        "version": {"type": "string"},
        "domain": {"type": "string"},
        "entities": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["id"],
                "properties": {
                    "id": {"type": "string"},
                    "type": {"type": "string"},
                    "namespace": {"type": "string"},
                    "name": {"type": "string"},
                    "module": {"type": "string"},
                    "values": {
                        "type": "array",
                        "items": {
                            "type": "object",
                            "required": ["keyword"],
                            "properties": {"keyword": {"type": "string"}, "synonyms": _STRINGS},
                        },
                    },
                },
            },
        },
        "actions": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "id": {"type": "string"},
                    "module": {"type": "string"},
                    "name": {"type": ["string", "null"]},
                    "parameters": {"type": "array", "items": _PARAMETER_SCHEMA},
                    "aliases": _STRINGS,
                },
            },
        },
        "errorHandlers": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["id"],
                "properties": {
                    "id": {"type": "string"},
                    "module": {"type": "string"},
                    "name": {"type": "string"},
                    "parameters": {"type": "array", "items": _PARAMETER_SCHEMA},
                },
            },
        },
    },
}
