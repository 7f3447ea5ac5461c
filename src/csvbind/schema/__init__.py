"""
Schema building for record types.

Provides:
- build_schema / schema_for: FieldSpecs or a record class -> RecordSchema
- shape_from_class: read column declarations off a record class
- record_class_from_json: record classes declared as JSON documents
"""

from csvbind.schema.builder import (
    RecordSchema,
    build_schema,
    is_pydantic_model,
    schema_for,
    shape_from_class,
)
from csvbind.schema.json_shape import record_class_from_dict, record_class_from_json
from csvbind.schema.tags import parse_tag
from csvbind.schema.types import SCALAR_TYPES, TYPE_NAMES, ZERO_TIME, resolve_type, zero_value

__all__ = [
    "RecordSchema",
    "build_schema",
    "is_pydantic_model",
    "schema_for",
    "shape_from_class",
    "record_class_from_dict",
    "record_class_from_json",
    "parse_tag",
    "SCALAR_TYPES",
    "TYPE_NAMES",
    "ZERO_TIME",
    "resolve_type",
    "zero_value",
]
