"""
Field declarations and descriptors for record schemas.

``FieldSpec`` and ``ColumnOptions`` describe what a caller declared.
``FieldDescriptor`` is what the schema builder produced from a declaration,
and ``BoundColumn`` pairs a descriptor with a position in the current header.
"""

import dataclasses
from dataclasses import dataclass
from typing import Any, Optional

from csvbind.enums import FieldKind

# Column position reported for descriptors not found in the current header
UNSET = -1

# Dataclass field metadata key holding ColumnOptions
COLUMN_METADATA_KEY = "csvbind"


@dataclass(frozen=True)
class ColumnOptions:
    """
    Per-field column declaration.

    Attributes:
        name: External column name (defaults to the field name)
        required: Header reconciliation fails when the column is absent
        ignore: The field is never bound to a column
    """

    name: Optional[str] = None
    required: bool = False
    ignore: bool = False


def column(
    name: Optional[str] = None,
    *,
    required: bool = False,
    ignore: bool = False,
    **field_kwargs: Any,
) -> Any:
    """
    Declare a dataclass field's column options.

    Example:
        @dataclass
        class Person:
            name: str = column("Full Name", required=True)
            age: Optional[int] = column(default=None)

    Any extra keyword arguments go to ``dataclasses.field``.
    """
    metadata = dict(field_kwargs.pop("metadata", None) or {})
    metadata[COLUMN_METADATA_KEY] = ColumnOptions(name=name, required=required, ignore=ignore)
    return dataclasses.field(metadata=metadata, **field_kwargs)


@dataclass(frozen=True)
class FieldSpec:
    """One entry of a record shape description."""

    name: str
    declared_type: Any
    column: Optional[str] = None
    required: bool = False
    ignore: bool = False


@dataclass(frozen=True)
class FieldDescriptor:
    """
    A record field the binder can write.

    Attributes:
        name: Attribute written on the record instance
        column: Lower-cased external column name
        kind: Value kind selecting the coercion routine
        required: Whether the column must be present in the header
        optional: Whether the field accepts None (empty cells are skipped)
        value_type: Concrete type parsed values are narrowed to
        bits: Declared width of numeric kinds
        position: Declaration index within the record shape
    """

    name: str
    column: str
    kind: FieldKind
    required: bool = False
    optional: bool = False
    value_type: type = str
    bits: int = 64
    position: int = 0

    @property
    def type_name(self) -> str:
        """Human-readable declared type, e.g. ``int8`` or ``Optional[float]``."""
        name = getattr(self.value_type, "__name__", str(self.value_type))
        return f"Optional[{name}]" if self.optional else name


@dataclass(frozen=True)
class BoundColumn:
    """A descriptor located at a position of the current header."""

    descriptor: FieldDescriptor
    record_index: int

    @property
    def name(self) -> str:
        return self.descriptor.name

    @property
    def column(self) -> str:
        return self.descriptor.column
