"""
csvbind - Bind CSV rows to typed Python records.

This package reconciles a CSV header against a record class's declared
columns and converts each row's text cells into the record's typed fields.
"""

__version__ = "0.1.0"

from csvbind.binder import RecordBinder
from csvbind.config import RFC3339, BinderConfig
from csvbind.enums import FieldKind
from csvbind.errors import (
    CoercionError,
    CSVBindError,
    DecodeError,
    IncorrectHeaderError,
    RecordTypeError,
    RowShapeError,
    UnsupportedFieldTypeError,
    UnsupportedShapeError,
)
from csvbind.models import (
    UNSET,
    BoundColumn,
    ColumnOptions,
    FieldDescriptor,
    FieldSpec,
    column,
)
from csvbind.parsers import CSVRecordReader, ReadResult, RowError
from csvbind.schema import (
    ZERO_TIME,
    RecordSchema,
    build_schema,
    record_class_from_json,
    schema_for,
    shape_from_class,
)

__all__ = [
    # Configuration
    "BinderConfig",
    "RFC3339",
    # Declarations and descriptors
    "FieldKind",
    "FieldSpec",
    "ColumnOptions",
    "column",
    "FieldDescriptor",
    "BoundColumn",
    "UNSET",
    "ZERO_TIME",
    # Schema building
    "RecordSchema",
    "build_schema",
    "schema_for",
    "shape_from_class",
    "record_class_from_json",
    # Binding
    "RecordBinder",
    "CSVRecordReader",
    "ReadResult",
    "RowError",
    # Errors
    "CSVBindError",
    "IncorrectHeaderError",
    "DecodeError",
    "RowShapeError",
    "RecordTypeError",
    "CoercionError",
    "UnsupportedFieldTypeError",
    "UnsupportedShapeError",
]
