"""
Packed column tag strings.

A tag such as ``"String Field,required"`` combines a column name and flags
in one string. The tag ``"-"`` ignores the field.
"""

from csvbind.config import DEFAULT_TAG_FIELD_SEP
from csvbind.models import ColumnOptions

IGNORE_TAG = "-"
REQUIRED_FLAG = "required"


def parse_tag(tag: str, sep: str = DEFAULT_TAG_FIELD_SEP) -> ColumnOptions:
    """
    Parse a column tag string.

    Args:
        tag: Tag text, e.g. ``"Integer Field,required"``
        sep: Separator between the column name and its flags

    Returns:
        ColumnOptions; an empty name part leaves the name unset
    """
    if tag.strip() == IGNORE_TAG:
        return ColumnOptions(ignore=True)

    parts = tag.split(sep)
    name = parts[0].strip() or None
    required = any(part.strip() == REQUIRED_FLAG for part in parts[1:])
    return ColumnOptions(name=name, required=required)
