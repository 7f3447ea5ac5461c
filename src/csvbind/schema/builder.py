"""
Schema builder.

Turns a record shape description into the ordered FieldDescriptor list the
record binder works from. Building happens once at setup; any field type the
binder cannot handle is reported here as a TypeError, never per row.
"""

import dataclasses
import logging
from dataclasses import dataclass, field
from typing import Annotated, Any, Iterable, Optional, get_args, get_origin, get_type_hints

from pydantic import BaseModel

from csvbind.config import BinderConfig
from csvbind.errors import UnsupportedShapeError
from csvbind.models import (
    COLUMN_METADATA_KEY,
    ColumnOptions,
    FieldDescriptor,
    FieldSpec,
)
from csvbind.schema.tags import parse_tag
from csvbind.schema.types import resolve_type, zero_value

logger = logging.getLogger(__name__)


def is_pydantic_model(record_type: Any) -> bool:
    """Check whether a type is a pydantic model class."""
    return isinstance(record_type, type) and issubclass(record_type, BaseModel)


@dataclass(frozen=True)
class RecordSchema:
    """
    The built schema of a record type.

    Immutable once built, so one schema may back any number of binders.

    Attributes:
        record_type: Dataclass or pydantic model class records are created from
        descriptors: Bindable fields in declaration order
        init_values: Constructor arguments for a zero-valued instance
        late_values: Attributes set after construction (non-init fields)
    """

    record_type: type
    descriptors: tuple[FieldDescriptor, ...]
    init_values: dict[str, Any] = field(default_factory=dict, repr=False)
    late_values: dict[str, Any] = field(default_factory=dict, repr=False)

    @property
    def name(self) -> str:
        return self.record_type.__name__

    @property
    def columns(self) -> list[str]:
        """Normalized column names in declaration order."""
        return [d.column for d in self.descriptors]

    @property
    def required_columns(self) -> list[str]:
        return [d.column for d in self.descriptors if d.required]

    def descriptor(self, name: str) -> FieldDescriptor:
        """
        Look up a descriptor by field name.

        Raises:
            KeyError: If the field is not part of the schema
        """
        for descriptor in self.descriptors:
            if descriptor.name == name:
                return descriptor
        raise KeyError(name)

    def new_instance(self) -> Any:
        """Allocate a record with every field at its default or zero value."""
        if is_pydantic_model(self.record_type):
            record = self.record_type.model_construct(**self.init_values)
        else:
            record = self.record_type(**self.init_values)
        for name, value in self.late_values.items():
            setattr(record, name, value)
        return record


def _check_record_type(record_type: Any) -> None:
    if is_pydantic_model(record_type):
        if record_type.model_config.get("frozen"):
            raise UnsupportedShapeError(
                f"Record type {record_type.__name__} is frozen and cannot be populated"
            )
        return
    if isinstance(record_type, type) and dataclasses.is_dataclass(record_type):
        if record_type.__dataclass_params__.frozen:
            raise UnsupportedShapeError(
                f"Record type {record_type.__name__} is frozen and cannot be populated"
            )
        return
    raise UnsupportedShapeError(
        f"Record type must be a dataclass or pydantic model class, got {record_type!r}"
    )


def _zero_values(
    record_type: type, descriptors: tuple[FieldDescriptor, ...]
) -> tuple[dict[str, Any], dict[str, Any]]:
    """Work out the values a freshly allocated record needs."""
    by_name = {d.name: d for d in descriptors}

    def value_for(name: str) -> Any:
        descriptor = by_name.get(name)
        return zero_value(descriptor) if descriptor else None

    init_values: dict[str, Any] = {}
    late_values: dict[str, Any] = {}

    if is_pydantic_model(record_type):
        for name, info in record_type.model_fields.items():
            if info.is_required():
                init_values[name] = value_for(name)
        return init_values, late_values

    for f in dataclasses.fields(record_type):
        has_default = (
            f.default is not dataclasses.MISSING or f.default_factory is not dataclasses.MISSING
        )
        if has_default:
            continue
        if f.init:
            init_values[f.name] = value_for(f.name)
        elif f.name in by_name:
            late_values[f.name] = value_for(f.name)
    return init_values, late_values


def build_schema(record_type: type, specs: Iterable[FieldSpec]) -> RecordSchema:
    """
    Build a schema from an ordered shape description.

    Args:
        record_type: Dataclass or pydantic model class to populate
        specs: Field declarations in declaration order

    Returns:
        RecordSchema with one descriptor per non-ignored field

    Raises:
        UnsupportedShapeError: If record_type cannot be populated
        UnsupportedFieldTypeError: If any field type is not supported
    """
    _check_record_type(record_type)

    descriptors: list[FieldDescriptor] = []
    for position, spec in enumerate(specs):
        if spec.ignore:
            logger.debug(f"Ignoring field {spec.name}")
            continue

        kind, optional, value_type, bits = resolve_type(spec.name, spec.declared_type)
        descriptors.append(
            FieldDescriptor(
                name=spec.name,
                column=(spec.column or spec.name).lower(),
                kind=kind,
                required=spec.required,
                optional=optional,
                value_type=value_type,
                bits=bits,
                position=position,
            )
        )

    frozen = tuple(descriptors)
    init_values, late_values = _zero_values(record_type, frozen)
    logger.debug(f"Built schema for {record_type.__name__} with {len(frozen)} fields")
    return RecordSchema(
        record_type=record_type,
        descriptors=frozen,
        init_values=init_values,
        late_values=late_values,
    )


def _split_annotated(declared_type: Any) -> tuple[Any, tuple[Any, ...]]:
    """Separate ``Annotated[T, ...]`` into T and its extras."""
    if get_origin(declared_type) is Annotated:
        base, *extras = get_args(declared_type)
        return base, tuple(extras)
    return declared_type, ()


def _options_from(candidates: Iterable[Any], tag: Any, sep: str) -> ColumnOptions:
    for candidate in candidates:
        if isinstance(candidate, ColumnOptions):
            return candidate
    if isinstance(tag, str):
        return parse_tag(tag, sep)
    return ColumnOptions()


def _spec(name: str, declared_type: Any, options: ColumnOptions) -> FieldSpec:
    return FieldSpec(
        name=name,
        declared_type=declared_type,
        column=options.name,
        required=options.required,
        ignore=options.ignore,
    )


def shape_from_class(record_type: type, config: Optional[BinderConfig] = None) -> list[FieldSpec]:
    """
    Read the shape description declared on a record class.

    Column options come from, in order of preference:
    - a ``ColumnOptions`` in dataclass field metadata (see ``column()``)
      or in ``Annotated[...]`` extras;
    - a tag string under ``config.tag_name`` in dataclass field metadata
      or in a pydantic field's ``json_schema_extra``.

    Args:
        record_type: Dataclass or pydantic model class
        config: Supplies the tag name and separator

    Returns:
        FieldSpecs in field declaration order
    """
    config = config or BinderConfig()
    _check_record_type(record_type)
    specs: list[FieldSpec] = []

    if is_pydantic_model(record_type):
        for name, info in record_type.model_fields.items():
            extra = info.json_schema_extra if isinstance(info.json_schema_extra, dict) else {}
            declared_type, extras = _split_annotated(info.annotation)
            options = _options_from(
                (*info.metadata, *extras), extra.get(config.tag_name), config.tag_field_sep
            )
            specs.append(_spec(name, declared_type, options))
        return specs

    hints = get_type_hints(record_type, include_extras=True)
    for f in dataclasses.fields(record_type):
        declared_type, extras = _split_annotated(hints.get(f.name, f.type))
        options = _options_from(
            (f.metadata.get(COLUMN_METADATA_KEY), *extras),
            f.metadata.get(config.tag_name),
            config.tag_field_sep,
        )
        specs.append(_spec(f.name, declared_type, options))
    return specs


def schema_for(record_type: type, config: Optional[BinderConfig] = None) -> RecordSchema:
    """Build the schema declared on a record class."""
    return build_schema(record_type, shape_from_class(record_type, config))
