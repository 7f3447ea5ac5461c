"""
Serialization utilities for converting bound records to plain dicts.

Numpy scalars are converted to Python scalars so the dicts can be handed
to PyArrow or the JSON encoder directly.
"""

from typing import Any

import numpy as np

from csvbind.schema import RecordSchema


def serialize_value(value: Any) -> Any:
    """
    Serialize a field value.

    Handles:
    - numpy scalars -> Python int/float/bool
    - everything else (str, datetime, None) -> preserved as-is
    """
    if isinstance(value, np.generic):
        return value.item()
    return value


def record_to_dict(schema: RecordSchema, record: Any) -> dict[str, Any]:
    """
    Convert a record to a dict of its schema fields.

    Args:
        schema: Schema the record was decoded with
        record: Record instance

    Returns:
        Dict keyed by field name, in declaration order
    """
    return {
        d.name: serialize_value(getattr(record, d.name, None)) for d in schema.descriptors
    }
