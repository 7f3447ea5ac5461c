"""
Resolve record shapes named on the command line.

A shape is either ``package.module:ClassName`` or a path to a JSON shape
document (see ``csvbind.schema.json_shape``).
"""

import importlib
from pathlib import Path

from csvbind.schema import record_class_from_json


def load_record_class(shape: str) -> type:
    """
    Load a record class from an import path or a JSON shape file.

    Args:
        shape: ``module:Class`` or path to a ``.json`` file

    Returns:
        The record class

    Raises:
        ValueError: If the shape reference is malformed or not found
    """
    if shape.endswith(".json") or Path(shape).is_file():
        return record_class_from_json(shape)

    module_name, sep, attr = shape.partition(":")
    if not sep or not module_name or not attr:
        raise ValueError(f"Shape must be 'module:Class' or a JSON file, got: {shape}")

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise ValueError(f"Cannot import module {module_name}: {e}") from e

    record_type = module
    for part in attr.split("."):
        try:
            record_type = getattr(record_type, part)
        except AttributeError:
            raise ValueError(f"Module {module_name} has no attribute {attr}") from None

    return record_type
