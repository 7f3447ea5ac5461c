"""
CSV parsing into bound records.
"""

from csvbind.parsers.csv_reader import CSVRecordReader, ReadResult, RowError

__all__ = [
    "CSVRecordReader",
    "ReadResult",
    "RowError",
]
