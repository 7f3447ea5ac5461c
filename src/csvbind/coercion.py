"""
Cell coercion routines.

Each parser takes non-empty cell text and returns a Python value or raises
ValueError. ``coerce`` picks the routine for a descriptor's kind and narrows
the result to the declared value type.
"""

import re
from datetime import datetime
from typing import Any, Callable

from dateutil.parser import isoparse

from csvbind.config import RFC3339
from csvbind.enums import FieldKind
from csvbind.errors import quote
from csvbind.models import FieldDescriptor

TRUE_VALUES = frozenset({"1", "t", "T", "TRUE", "true", "True"})
FALSE_VALUES = frozenset({"0", "f", "F", "FALSE", "false", "False"})

INT_PATTERN = re.compile(r"[+-]?[0-9]+")
UINT_PATTERN = re.compile(r"[0-9]+")
FLOAT_PATTERN = re.compile(
    r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?"
    r"|[+-]?(?:inf|infinity|nan)",
    re.IGNORECASE,
)
RFC3339_PATTERN = re.compile(
    r"[0-9]{4}-[0-9]{2}-[0-9]{2}"
    r"T(?:[01][0-9]|2[0-3]):[0-5][0-9]:[0-5][0-9](?:\.[0-9]+)?"
    r"(?:Z|[+-][0-9]{2}:[0-9]{2})"
)


def parse_bool(text: str) -> bool:
    if text in TRUE_VALUES:
        return True
    if text in FALSE_VALUES:
        return False
    raise ValueError(f"invalid boolean {quote(text)}")


def parse_int(text: str, bits: int = 64) -> int:
    """Parse a signed decimal integer that fits in ``bits`` bits."""
    if not INT_PATTERN.fullmatch(text):
        raise ValueError(f"invalid integer {quote(text)}")
    value = int(text)
    limit = 1 << (bits - 1)
    if not -limit <= value < limit:
        raise ValueError(f"integer {quote(text)} out of range for int{bits}")
    return value


def parse_uint(text: str, bits: int = 64) -> int:
    """Parse an unsigned decimal integer that fits in ``bits`` bits."""
    if not UINT_PATTERN.fullmatch(text):
        raise ValueError(f"invalid unsigned integer {quote(text)}")
    value = int(text)
    if value >= 1 << bits:
        raise ValueError(f"unsigned integer {quote(text)} out of range for uint{bits}")
    return value


def parse_float(text: str) -> float:
    """Parse a decimal or exponent float at double precision."""
    if not FLOAT_PATTERN.fullmatch(text):
        raise ValueError(f"invalid float {quote(text)}")
    return float(text)


def parse_time(text: str, time_format: str = RFC3339) -> datetime:
    """
    Parse a timestamp.

    The RFC 3339 layout is matched strictly (offset required, fractional
    seconds optional, hours 00-23) and parsed with dateutil. Other layouts go through
    ``datetime.strptime``.
    """
    if time_format == RFC3339:
        if not RFC3339_PATTERN.fullmatch(text):
            raise ValueError(f"time {quote(text)} is not in RFC 3339 format")
        return isoparse(text)
    try:
        return datetime.strptime(text, time_format)
    except ValueError:
        raise ValueError(f"time {quote(text)} does not match format {quote(time_format)}") from None


_PARSERS: dict[FieldKind, Callable[[str, FieldDescriptor, str], Any]] = {
    FieldKind.STRING: lambda text, d, fmt: text,
    FieldKind.BOOL: lambda text, d, fmt: parse_bool(text),
    FieldKind.INT: lambda text, d, fmt: parse_int(text, d.bits),
    FieldKind.UINT: lambda text, d, fmt: parse_uint(text, d.bits),
    FieldKind.FLOAT: lambda text, d, fmt: parse_float(text),
    FieldKind.TIME: lambda text, d, fmt: parse_time(text, fmt),
}

# Kinds whose parsed value is already of the declared type
_UNNARROWED = (FieldKind.STRING, FieldKind.BOOL, FieldKind.TIME)


def coerce(text: str, descriptor: FieldDescriptor, time_format: str = RFC3339) -> Any:
    """
    Convert cell text to a descriptor's declared type.

    Optional descriptors coerce like their wrapped kind; skipping empty
    optional cells is up to the caller.

    Raises:
        ValueError: If the text cannot be parsed as the field's kind
    """
    value = _PARSERS[descriptor.kind](text, descriptor, time_format)
    if descriptor.kind in _UNNARROWED or type(value) is descriptor.value_type:
        return value
    return descriptor.value_type(value)
