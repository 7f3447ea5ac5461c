"""
PyArrow schema derivation for bound records.
"""

import pyarrow as pa

from csvbind.enums import FieldKind
from csvbind.models import FieldDescriptor
from csvbind.schema import RecordSchema

_INT_TYPES = {8: pa.int8(), 16: pa.int16(), 32: pa.int32(), 64: pa.int64()}
_UINT_TYPES = {8: pa.uint8(), 16: pa.uint16(), 32: pa.uint32(), 64: pa.uint64()}
_FLOAT_TYPES = {32: pa.float32(), 64: pa.float64()}


def arrow_type(descriptor: FieldDescriptor) -> pa.DataType:
    """
    Get the PyArrow type for a field.

    Raises:
        ValueError: If the kind/width pair has no Arrow equivalent
    """
    kind = descriptor.kind
    if kind is FieldKind.STRING:
        return pa.string()
    if kind is FieldKind.BOOL:
        return pa.bool_()
    if kind is FieldKind.TIME:
        return pa.timestamp("us", tz="UTC")

    table = {
        FieldKind.INT: _INT_TYPES,
        FieldKind.UINT: _UINT_TYPES,
        FieldKind.FLOAT: _FLOAT_TYPES,
    }[kind]
    if descriptor.bits not in table:
        raise ValueError(f"No Arrow type for {kind.value}{descriptor.bits}")
    return table[descriptor.bits]


def arrow_schema(schema: RecordSchema) -> pa.Schema:
    """Build the PyArrow schema for a record schema. Optional fields are nullable."""
    return pa.schema(
        [
            pa.field(
                d.name,
                arrow_type(d),
                nullable=d.optional,
                metadata={b"column": d.column.encode()},
            )
            for d in schema.descriptors
        ]
    )
