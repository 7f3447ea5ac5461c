"""
Enums for record field kinds.

These enums define the value kinds a CSV cell can be coerced into.
"""

from enum import Enum


class FieldKind(str, Enum):
    """Supported field kinds."""

    STRING = "string"
    BOOL = "bool"
    INT = "int"
    UINT = "uint"
    FLOAT = "float"
    TIME = "time"
