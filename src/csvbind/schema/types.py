"""
Declared type resolution.

Maps the Python and numpy types a record field may be declared with to a
FieldKind and numeric width, and provides the zero value of each kind.
"""

import types
from datetime import datetime, timezone
from typing import Any, Union, get_args, get_origin

import numpy as np

from csvbind.enums import FieldKind
from csvbind.errors import UnsupportedFieldTypeError
from csvbind.models import FieldDescriptor

# Zero value of TIME fields: 0001-01-01 00:00:00 UTC
ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)

# Supported declared type -> (kind, bits)
SCALAR_TYPES: dict[type, tuple[FieldKind, int]] = {
    str: (FieldKind.STRING, 0),
    bool: (FieldKind.BOOL, 0),
    int: (FieldKind.INT, 64),
    np.int8: (FieldKind.INT, 8),
    np.int16: (FieldKind.INT, 16),
    np.int32: (FieldKind.INT, 32),
    np.int64: (FieldKind.INT, 64),
    np.uint8: (FieldKind.UINT, 8),
    np.uint16: (FieldKind.UINT, 16),
    np.uint32: (FieldKind.UINT, 32),
    np.uint64: (FieldKind.UINT, 64),
    float: (FieldKind.FLOAT, 64),
    np.float32: (FieldKind.FLOAT, 32),
    np.float64: (FieldKind.FLOAT, 64),
    datetime: (FieldKind.TIME, 0),
}

# Type names accepted in JSON shape documents
TYPE_NAMES: dict[str, type] = {
    "str": str,
    "bool": bool,
    "int": int,
    "int8": np.int8,
    "int16": np.int16,
    "int32": np.int32,
    "int64": np.int64,
    "uint8": np.uint8,
    "uint16": np.uint16,
    "uint32": np.uint32,
    "uint64": np.uint64,
    "float": float,
    "float32": np.float32,
    "float64": np.float64,
    "datetime": datetime,
}


def _is_union(declared_type: Any) -> bool:
    return get_origin(declared_type) in (Union, types.UnionType)


def resolve_type(field_name: str, declared_type: Any) -> tuple[FieldKind, bool, type, int]:
    """
    Resolve a declared field type.

    ``Optional[T]`` (or ``T | None``) unwraps to ``T`` with optional=True.
    Any other union, and any type outside SCALAR_TYPES, is rejected.

    Args:
        field_name: Field name, for the error message
        declared_type: The field's type annotation

    Returns:
        Tuple of (kind, optional, value_type, bits)

    Raises:
        UnsupportedFieldTypeError: If the type cannot be bound
    """
    optional = False
    value_type = declared_type

    if _is_union(declared_type):
        members = get_args(declared_type)
        inner = [m for m in members if m is not type(None)]
        if len(inner) != 1 or len(inner) == len(members):
            raise UnsupportedFieldTypeError(field_name, declared_type)
        optional = True
        value_type = inner[0]

    try:
        kind, bits = SCALAR_TYPES[value_type]
    except (KeyError, TypeError):
        raise UnsupportedFieldTypeError(field_name, declared_type) from None

    return kind, optional, value_type, bits


def zero_value(descriptor: FieldDescriptor) -> Any:
    """Value a field holds in a freshly allocated record."""
    if descriptor.optional:
        return None
    if descriptor.kind is FieldKind.TIME:
        return ZERO_TIME
    return descriptor.value_type()
