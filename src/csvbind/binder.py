"""
Record binder: header reconciliation and row decoding.

A RecordBinder is driven once per CSV file. ``reconcile_header`` maps the
file's header positions to schema fields, then ``decode_row`` (or
``get_new_record``) is called once per data row using that mapping.
"""

import logging
from typing import Any, Optional, Sequence

from csvbind.coercion import coerce
from csvbind.config import BinderConfig
from csvbind.errors import (
    CoercionError,
    IncorrectHeaderError,
    RecordTypeError,
    RowShapeError,
)
from csvbind.models import UNSET, BoundColumn
from csvbind.schema import RecordSchema, schema_for

logger = logging.getLogger(__name__)


class RecordBinder:
    """
    Binds CSV rows to instances of one record type.

    Not safe for concurrent reconciliation. Threads decoding in parallel
    should each use their own binder from ``fork()``.

    Usage:
        binder = RecordBinder.for_class(Person)
        binder.reconcile_header(["Name", "Age"])

        person = binder.get_new_record(["Alice", "30"])
        print(person.age)
    """

    def __init__(self, schema: RecordSchema, config: Optional[BinderConfig] = None):
        """
        Initialize the binder.

        Args:
            schema: Built schema of the record type
            config: Binder configuration (defaults apply when omitted)
        """
        self.schema = schema
        self.config = config or BinderConfig()
        self._bound: tuple[BoundColumn, ...] = ()
        self._reconciled = False

    @classmethod
    def for_class(cls, record_type: type, config: Optional[BinderConfig] = None) -> "RecordBinder":
        """Build the schema declared on a record class and bind to it."""
        return cls(schema_for(record_type, config), config)

    def fork(self) -> "RecordBinder":
        """Create a binder sharing this schema and config, with no bindings."""
        return RecordBinder(self.schema, self.config)

    @property
    def record_type(self) -> type:
        return self.schema.record_type

    @property
    def bound_columns(self) -> tuple[BoundColumn, ...]:
        """Columns bound by the last successful reconciliation, in header order."""
        return self._bound

    @property
    def is_reconciled(self) -> bool:
        return self._reconciled

    def column_index(self, name: str) -> int:
        """
        Header position bound to a field.

        Returns:
            The position, or UNSET if the field's column is not in the header
        """
        self.schema.descriptor(name)
        for bound in self._bound:
            if bound.name == name:
                return bound.record_index
        return UNSET

    def reset(self) -> None:
        """Drop all header bindings."""
        self._bound = ()
        self._reconciled = False

    def reconcile_header(self, header: Sequence[str]) -> None:
        """
        Match a header against the schema and cache the column positions.

        Every header cell must name a schema column (after trimming and
        lower-casing). Every required column must be present.

        Args:
            header: Header row cells

        Raises:
            IncorrectHeaderError: On an unexpected column or a missing
                required column. The binder is left without bindings.
        """
        self.reset()
        bound: list[BoundColumn] = []

        for i, cell in enumerate(header):
            normalized = cell.strip().lower()
            matches = [d for d in self.schema.descriptors if d.column == normalized]
            if not matches:
                raise IncorrectHeaderError.unexpected_column(cell)
            bound.extend(BoundColumn(descriptor=d, record_index=i) for d in matches)

        found = {b.name for b in bound}
        for descriptor in self.schema.descriptors:
            if descriptor.required and descriptor.name not in found:
                raise IncorrectHeaderError.missing_column(descriptor.column)

        self._bound = tuple(bound)
        self._reconciled = True
        logger.debug(
            f"Bound {len(bound)} columns for {self.schema.name}: "
            + ", ".join(f"{b.column}={b.record_index}" for b in bound)
        )

    def decode_row(self, record: Sequence[str], target: Any) -> None:
        """
        Decode a data row into an existing record.

        Empty cells of optional fields are skipped, leaving the field as it
        was. Decoding stops at the first bad cell; fields written before it
        keep their new values.

        Args:
            record: Data row cells
            target: Instance of the schema's record type

        Raises:
            RowShapeError: If no header is bound or the cell count differs
                from the number of bound columns
            RecordTypeError: If target is not of the schema's record type
            CoercionError: If a cell cannot be parsed
        """
        if not self._reconciled:
            raise RowShapeError("CSV header must be reconciled before decoding rows")
        if len(record) != len(self._bound):
            raise RowShapeError(
                f"CSV record has {len(record)} columns but the header bound {len(self._bound)}"
            )
        if type(target) is not self.schema.record_type:
            raise RecordTypeError(
                f"Target must be an instance of {self.schema.name}, got {type(target).__name__}"
            )

        for bound in self._bound:
            descriptor = bound.descriptor
            cell = record[bound.record_index]
            if descriptor.optional and cell == "":
                continue
            try:
                value = coerce(cell, descriptor, self.config.time_format)
            except ValueError as e:
                raise CoercionError(descriptor.name, descriptor.column, cell, str(e)) from e
            setattr(target, descriptor.name, value)

    def get_new_record(self, record: Sequence[str]) -> Any:
        """
        Decode a data row into a new record.

        Returns:
            A zero-valued record populated from the row

        Raises:
            DecodeError: As for decode_row
        """
        target = self.schema.new_instance()
        self.decode_row(record, target)
        return target
