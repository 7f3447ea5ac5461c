"""
Reader for CSV files bound to a record type.

Tokenizes CSV text with the standard library ``csv`` module and feeds the
header and rows through a RecordBinder.
"""

import csv
import io
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, Sequence

from csvbind.binder import RecordBinder
from csvbind.errors import DecodeError

logger = logging.getLogger(__name__)


@dataclass
class RowError:
    """A data row that failed to decode."""

    line: int  # 1-based row number, header is row 1
    message: str
    row: list[str] = field(default_factory=list)


@dataclass
class ReadResult:
    """
    Records decoded from one CSV source.

    Attributes:
        source: File path or label of the source
        header: Header row as read
        records: Decoded record instances
        errors: Rows that failed to decode (non-strict reads only)
    """

    source: str = ""
    header: list[str] = field(default_factory=list)
    records: list[Any] = field(default_factory=list)
    errors: list[RowError] = field(default_factory=list)

    @property
    def num_records(self) -> int:
        return len(self.records)

    @property
    def has_errors(self) -> bool:
        return len(self.errors) > 0

    def summary(self) -> str:
        """Generate a human-readable summary."""
        lines = [f"Read {self.num_records} records from {self.source or '<input>'}"]
        if self.errors:
            lines.append(f"\nErrors ({len(self.errors)}):")
            for e in self.errors[:10]:  # Limit to first 10
                lines.append(f"  - row {e.line}: {e.message}")
            if len(self.errors) > 10:
                lines.append(f"  ... and {len(self.errors) - 10} more")
        return "\n".join(lines)


class CSVRecordReader:
    """
    Reads CSV sources into record instances.

    The first non-blank row is the header. Header problems always raise
    IncorrectHeaderError. Bad data rows raise DecodeError in strict mode
    and are collected in ``ReadResult.errors`` otherwise.

    Usage:
        reader = CSVRecordReader(RecordBinder.for_class(Person))
        result = reader.read("people.csv")

        for person in result.records:
            print(person.name)
    """

    def __init__(self, binder: RecordBinder, strict: bool = False, delimiter: str = ","):
        """
        Initialize the reader.

        Args:
            binder: Binder for the target record type
            strict: Raise on the first bad row instead of collecting it
            delimiter: CSV field delimiter
        """
        self.binder = binder
        self.strict = strict
        self.delimiter = delimiter

    def read(self, file_path: str | Path) -> ReadResult:
        """
        Read a CSV file.

        Raises:
            FileNotFoundError: If file doesn't exist
            IncorrectHeaderError: If the header does not match the schema
        """
        file_path = Path(file_path)

        if not file_path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")

        logger.info(f"Reading {file_path}")
        with open(file_path, "r", newline="", encoding="utf-8-sig") as f:
            return self.read_rows(csv.reader(f, delimiter=self.delimiter), str(file_path))

    def read_content(self, content: str, source: str = "") -> ReadResult:
        """Read CSV records from string content."""
        content = content.removeprefix("\ufeff")
        rows = csv.reader(io.StringIO(content, newline=""), delimiter=self.delimiter)
        return self.read_rows(rows, source)

    def read_header(self, rows: Iterable[Sequence[str]]) -> list[str]:
        """
        Reconcile the first non-blank row as the header.

        Input with no non-blank row reconciles as an empty header, so
        required columns are still enforced.

        Returns:
            The header row, or an empty list if there are no rows

        Raises:
            IncorrectHeaderError: If the header does not match the schema
        """
        header: list[str] = []
        for row in rows:
            if row:
                header = list(row)
                break
        self.binder.reconcile_header(header)
        return header

    def read_rows(self, rows: Iterable[Sequence[str]], source: str = "") -> ReadResult:
        """
        Decode tokenized rows.

        Args:
            rows: Header row followed by data rows
            source: Label used in the result and log messages

        Returns:
            ReadResult with the decoded records
        """
        result = ReadResult(source=source)
        numbered = enumerate(rows, start=1)
        result.header = self.read_header(row for _, row in numbered)

        for line, row in numbered:
            if not row:
                continue
            try:
                result.records.append(self.binder.get_new_record(row))
            except DecodeError as e:
                if self.strict:
                    raise
                logger.warning(f"{source or '<input>'} row {line}: {e}")
                result.errors.append(RowError(line=line, message=str(e), row=list(row)))

        logger.info(
            f"Read {result.num_records} records from {source or '<input>'}"
            f" ({len(result.errors)} rejected)"
        )
        return result
