"""
Binder configuration.

Settings are fixed at construction time and shared by the schema builder
and the record binder.
"""

from pydantic import BaseModel, ConfigDict, Field

# Layout for RFC 3339 timestamps with a numeric or "Z" offset
RFC3339 = "%Y-%m-%dT%H:%M:%S%z"

DEFAULT_TAG_NAME = "csv"
DEFAULT_TAG_FIELD_SEP = ","


class BinderConfig(BaseModel):
    """
    Configuration for building schemas and decoding rows.

    Column names are always matched case-insensitively; this is not
    configurable.

    Attributes:
        time_format: Layout used to parse TIME cells. The default RFC 3339
            layout accepts fractional seconds and requires an offset.
            Any other value is passed to ``datetime.strptime``.
        tag_name: Field metadata key holding a packed column tag string
        tag_field_sep: Separator between the column name and flags in a tag
    """

    model_config = ConfigDict(frozen=True)

    time_format: str = Field(default=RFC3339, min_length=1)
    tag_name: str = Field(default=DEFAULT_TAG_NAME, min_length=1)
    tag_field_sep: str = Field(default=DEFAULT_TAG_FIELD_SEP, min_length=1)
