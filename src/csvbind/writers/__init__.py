"""
Writers module for outputting bound records to JSON Lines and Parquet files.

Module structure:
- schemas.py: PyArrow schema derived from a record schema
- serializers.py: Record-to-dict conversion utilities
- json_writer.py: JSONWriter class for JSON Lines output
- parquet_writer.py: ParquetWriter class
"""

from pathlib import Path
from typing import Any, Iterable

from csvbind.schema import RecordSchema

from .json_writer import JSONWriter
from .parquet_writer import ParquetWriter
from .schemas import arrow_schema, arrow_type
from .serializers import record_to_dict, serialize_value

__all__ = [
    "arrow_schema",
    "arrow_type",
    "record_to_dict",
    "serialize_value",
    "JSONWriter",
    "ParquetWriter",
    "write_records",
]

FORMATS = {
    "jsonl": JSONWriter,
    "parquet": ParquetWriter,
}


def write_records(
    schema: RecordSchema,
    records: Iterable[Any],
    output_dir: str | Path,
    name: str,
    fmt: str = "jsonl",
) -> Path:
    """
    Convenience function to write records in a named format.

    Raises:
        ValueError: If fmt is not recognized
    """
    if fmt not in FORMATS:
        raise ValueError(f"Unknown format: {fmt}. Expected one of {list(FORMATS.keys())}")
    return FORMATS[fmt](output_dir).write(schema, records, name)
