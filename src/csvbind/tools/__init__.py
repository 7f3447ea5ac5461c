"""
Helper tools for locating record shapes.
"""

from csvbind.tools.loader import load_record_class

__all__ = ["load_record_class"]
