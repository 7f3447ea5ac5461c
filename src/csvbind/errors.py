"""
Exceptions raised while building schemas and binding CSV rows.

Two families exist:

- ``CSVBindError`` and its subclasses are recoverable, per-file or per-row
  failures (bad header, bad cell).
- ``UnsupportedFieldTypeError`` and ``UnsupportedShapeError`` are ``TypeError``
  subclasses raised while building a schema. They mean the record shape
  itself is wrong and should stop program initialization.
"""

import json
from typing import Optional


def quote(text: str) -> str:
    """Double-quote a value for use in error messages."""
    return json.dumps(text, ensure_ascii=False)


class CSVBindError(Exception):
    """Base class for recoverable binding errors."""


class IncorrectHeaderError(CSVBindError):
    """The CSV header does not match the record schema."""

    def __init__(self, message: str, column: Optional[str] = None):
        super().__init__(message)
        self.column = column

    @classmethod
    def unexpected_column(cls, column: str) -> "IncorrectHeaderError":
        return cls(f"Unexpected column {quote(column)}", column=column)

    @classmethod
    def missing_column(cls, column: str) -> "IncorrectHeaderError":
        return cls(f"Mandatory column {quote(column)} is missing", column=column)


class DecodeError(CSVBindError):
    """A data row could not be decoded into a record."""


class RowShapeError(DecodeError):
    """The row does not have the number of cells bound from the header."""


class RecordTypeError(DecodeError):
    """The target instance is not of the schema's record type."""


class CoercionError(DecodeError):
    """A cell could not be converted to its field's type."""

    def __init__(self, field: str, column: str, value: str, reason: str):
        super().__init__(f"Column {quote(column)}: {reason}")
        self.field = field
        self.column = column
        self.value = value
        self.reason = reason


class UnsupportedFieldTypeError(TypeError):
    """A record field is declared with a type that cannot be bound."""

    def __init__(self, field: str, declared_type: object):
        type_name = declared_type.__name__ if isinstance(declared_type, type) else repr(declared_type)
        super().__init__(
            f"CSV record binder does not support field {quote(field)} with type: {type_name}"
        )
        self.field = field
        self.declared_type = declared_type


class UnsupportedShapeError(TypeError):
    """The record type is not a dataclass or pydantic model that can be bound."""
