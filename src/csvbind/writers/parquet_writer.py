"""
Parquet writer for bound records.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Iterable

import pyarrow as pa
import pyarrow.parquet as pq

from csvbind.schema import RecordSchema

from .schemas import arrow_schema
from .serializers import record_to_dict

logger = logging.getLogger(__name__)


class ParquetWriter:
    """
    Writes records to a Parquet file typed from the record schema.

    Example:
        writer = ParquetWriter("/data/out")
        path = writer.write(binder.schema, result.records, "people")
    """

    def __init__(self, output_dir: str | Path):
        """
        Initialize the writer with an output directory.

        Args:
            output_dir: Directory for output files
        """
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)

    def to_table(self, schema: RecordSchema, records: Iterable[Any]) -> pa.Table:
        """Convert records to a PyArrow table."""
        rows = [record_to_dict(schema, record) for record in records]
        return pa.Table.from_pylist(rows, schema=arrow_schema(schema))

    def write(self, schema: RecordSchema, records: Iterable[Any], name: str) -> Path:
        """
        Write records to ``<output_dir>/<name>.parquet``.

        Returns:
            Path to the written file
        """
        table = self.to_table(schema, records)
        output_path = self.output_dir / f"{name}.parquet"

        pq.write_table(table, output_path)
        logger.info(f"Wrote {table.num_rows} records to {output_path}")
        return output_path
