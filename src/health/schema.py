"""Shallow JSON shape validator.

Checks a value's type and numeric bounds and, one level down, the presence,
type and bounds of declared properties. Not a JSON-Schema implementation.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class SchemaDescriptor:
    """Expected shape of a JSON value."""

    type: str | None = None
    minimum: float | None = None
    maximum: float | None = None
    properties: dict[str, SchemaDescriptor] | None = None


def is_number(value: Any) -> bool:
    """True for JSON numbers (bool is excluded)."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def json_type_matches(value: Any, type_name: str) -> bool:
    if type_name == "string":
        return isinstance(value, str)
    if type_name == "number":
        return is_number(value)
    if type_name == "integer":
        return is_number(value) and float(value).is_integer()
    if type_name == "boolean":
        return isinstance(value, bool)
    if type_name == "object":
        return isinstance(value, dict)
    if type_name == "array":
        return isinstance(value, list)
    if type_name == "null":
        return value is None
    return False


def _within_bounds(value: Any, schema: SchemaDescriptor) -> bool:
    # ``is not None``: a bound of 0 is a real bound
    if schema.minimum is None and schema.maximum is None:
        return True
    if not is_number(value):
        return False
    if schema.minimum is not None and value < schema.minimum:
        return False
    if schema.maximum is not None and value > schema.maximum:
        return False
    return True


def validate_schema(value: Any, schema: SchemaDescriptor) -> bool:
    """Return True if ``value`` satisfies ``schema``."""
    if schema.type is not None and not json_type_matches(value, schema.type):
        return False
    if not _within_bounds(value, schema):
        return False

    if schema.properties is not None:
        if not isinstance(value, dict):
            return False
        for name, prop in schema.properties.items():
            if name not in value:
                return False
            if prop.type is not None and not json_type_matches(value[name], prop.type):
                return False
            if not _within_bounds(value[name], prop):
                return False

    return True
