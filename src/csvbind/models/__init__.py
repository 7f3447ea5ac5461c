"""
Field declaration and descriptor models.

Provides:
- Declarations: FieldSpec, ColumnOptions, column()
- Built descriptors: FieldDescriptor
- Header bindings: BoundColumn
"""

from csvbind.models.fields import (
    COLUMN_METADATA_KEY,
    UNSET,
    BoundColumn,
    ColumnOptions,
    FieldDescriptor,
    FieldSpec,
    column,
)

__all__ = [
    "COLUMN_METADATA_KEY",
    "UNSET",
    "BoundColumn",
    "ColumnOptions",
    "FieldDescriptor",
    "FieldSpec",
    "column",
]
