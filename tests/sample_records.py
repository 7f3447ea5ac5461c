"""
Record classes shared by the test modules and the CLI tests.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Annotated, Optional

import numpy as np
from pydantic import BaseModel, ConfigDict, Field

from csvbind import ColumnOptions, column


@dataclass
class Person:
    name: str = column("Name", required=True)
    age: int = column("Age", required=True)
    score: float = column("Score")


@dataclass
class Record:
    """Every supported kind, declared with column() options."""

    string_field: str = column("String Field", required=True)
    int_field: int = column("Integer Field", required=True)
    uint_field: np.uint64 = column("Unsigned Integer Field", required=True)
    bool_field: bool = column("Boolean Field", required=True)
    float_field: float = column("Float Field", required=True)
    optional_time_field: datetime = column("Optional Time Field")
    optional_int_field: int = 0
    optional_int_pointer: Optional[int] = None


@dataclass
class TaggedRecord:
    """Same columns as Record, declared with packed tag strings."""

    string_field: str = field(metadata={"csv": "String Field,required"})
    int_field: int = field(metadata={"csv": "Integer Field,required"})
    notes: list = field(default_factory=list, metadata={"csv": "-"})
    float_field: Optional[float] = field(default=None, metadata={"csv": "Float Field"})


@dataclass
class Measurement:
    """Fixed-width numeric fields."""

    sensor: str = column("Sensor", required=True)
    channel: np.uint8 = column("Channel", required=True)
    offset: np.int16 = column("Offset")
    reading: np.float32 = column("Reading")
    taken_at: Optional[datetime] = column("Taken At", default=None)
    ignored: str = column(ignore=True, default="untouched")


class Reading(BaseModel):
    """A pydantic record shape."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    station: Annotated[str, ColumnOptions("Station", required=True)]
    temperature: float = Field(default=0.0, json_schema_extra={"csv": "Temp (C),required"})
    humidity: Optional[int] = None
