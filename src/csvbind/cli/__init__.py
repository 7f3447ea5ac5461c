"""
Command-line interface for csvbind.

Provides commands for describing record shapes, checking CSV headers,
and converting CSV files to JSON Lines or Parquet.
"""

from .main import app, main

__all__ = ["main", "app"]
