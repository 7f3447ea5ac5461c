"""
JSON Lines writer for bound records.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Iterable

from csvbind.schema import RecordSchema

from .serializers import record_to_dict

logger = logging.getLogger(__name__)


class JSONEncoder(json.JSONEncoder):
    """Custom JSON encoder for datetime objects."""

    def default(self, obj: Any) -> Any:
        if isinstance(obj, datetime):
            return obj.isoformat()
        return super().default(obj)


class JSONWriter:
    """
    Writes records to JSON Lines files, one object per record.

    NaN and infinite floats have no JSON form and are rejected; use the
    Parquet writer for data that carries them.

    Example:
        writer = JSONWriter("/data/out")
        path = writer.write(binder.schema, result.records, "people")
    """

    def __init__(self, output_dir: str | Path):
        """
        Initialize the JSON writer.

        Args:
            output_dir: Directory for output files
        """
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)

    def write(self, schema: RecordSchema, records: Iterable[Any], name: str) -> Path:
        """
        Write records to ``<output_dir>/<name>.jsonl``.

        Returns:
            Path to the written file

        Raises:
            ValueError: If a record holds a NaN or infinite float
        """
        output_path = self.output_dir / f"{name}.jsonl"
        count = 0

        with open(output_path, "w", encoding="utf-8") as f:
            for record in records:
                try:
                    line = json.dumps(
                        record_to_dict(schema, record), cls=JSONEncoder, allow_nan=False
                    )
                except ValueError as e:
                    raise ValueError(f"Record {count + 1} cannot be written as JSON: {e}") from e
                f.write(line)
                f.write("\n")
                count += 1

        logger.info(f"Wrote {count} records to {output_path}")
        return output_path
