"""
Record shapes declared in JSON documents.

Lets a shape be supplied as data instead of code:

    {
        "name": "Person",
        "fields": [
            {"name": "name", "type": "str", "column": "Full Name", "required": true},
            {"name": "age", "type": "uint8", "optional": true},
            {"name": "notes", "type": "str", "ignore": true}
        ]
    }
"""

import json
from dataclasses import make_dataclass
from pathlib import Path
from typing import Any, Optional

from csvbind.errors import UnsupportedFieldTypeError
from csvbind.models import column
from csvbind.schema.types import TYPE_NAMES


def record_class_from_dict(document: dict[str, Any]) -> type:
    """
    Create a dataclass from a shape document.

    Args:
        document: Parsed shape document

    Returns:
        A new dataclass with column options attached to its fields

    Raises:
        ValueError: If the document is missing names
        UnsupportedFieldTypeError: If a non-ignored field names an unknown type
    """
    class_name = document.get("name") or "Record"
    fields = []

    for entry in document.get("fields", []):
        field_name = entry.get("name")
        if not field_name:
            raise ValueError(f"Shape field without a name: {entry!r}")

        ignore = bool(entry.get("ignore", False))
        type_name = entry.get("type", "str")
        declared_type: Any
        if ignore:
            # Never decoded, so any type name is accepted
            declared_type = TYPE_NAMES.get(type_name, Any)
        elif type_name not in TYPE_NAMES:
            raise UnsupportedFieldTypeError(field_name, type_name)
        else:
            declared_type = TYPE_NAMES[type_name]
            if entry.get("optional", False):
                declared_type = Optional[declared_type]

        fields.append(
            (
                field_name,
                declared_type,
                column(
                    entry.get("column"),
                    required=bool(entry.get("required", False)),
                    ignore=ignore,
                ),
            )
        )

    return make_dataclass(class_name, fields)


def record_class_from_json(path: str | Path) -> type:
    """
    Load a shape document from a JSON file.

    Raises:
        FileNotFoundError: If file doesn't exist
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    with open(path, "r") as f:
        document = json.load(f)

    return record_class_from_dict(document)
