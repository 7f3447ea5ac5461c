"""
Main CLI entry point for csvbind using Click.

Usage:
    csvbind describe SHAPE [--json]
    csvbind check-header SHAPE FILE [--json]
    csvbind convert SHAPE FILE --output DIR [--format jsonl|parquet] [--strict]

SHAPE is either ``package.module:ClassName`` or a path to a JSON shape file.
"""

from __future__ import annotations

import csv
import json
import logging
import sys
from pathlib import Path
from typing import Callable, Optional

import click
from pydantic import ValidationError

from csvbind import __version__
from csvbind.binder import RecordBinder
from csvbind.config import RFC3339, BinderConfig
from csvbind.errors import DecodeError, IncorrectHeaderError
from csvbind.parsers import CSVRecordReader
from csvbind.tools import load_record_class
from csvbind.writers import FORMATS, write_records


def setup_logging(verbose: bool = False, debug: bool = False) -> None:
    """Configure logging based on verbosity."""
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


class Config:
    """Shared configuration for CLI commands."""

    def __init__(self) -> None:
        self.verbose = False
        self.debug = False


pass_config = click.make_pass_decorator(Config, ensure=True)


def shape_options(fn: Callable) -> Callable:
    """Options controlling how a record shape is read and decoded."""
    fn = click.option(
        "--tag-sep", default=",", show_default=True, help="Separator inside column tags"
    )(fn)
    fn = click.option(
        "--tag-name", default="csv", show_default=True, help="Field metadata key for column tags"
    )(fn)
    fn = click.option(
        "--time-format",
        default=RFC3339,
        show_default=True,
        help="strptime layout for time columns",
    )(fn)
    return fn


def _build_binder(shape: str, time_format: str, tag_name: str, tag_sep: str) -> RecordBinder:
    """Load a shape and build its binder, turning failures into CLI errors."""
    try:
        config = BinderConfig(time_format=time_format, tag_name=tag_name, tag_field_sep=tag_sep)
    except ValidationError as e:
        raise click.ClickException(f"Invalid configuration: {e}")

    try:
        record_type = load_record_class(shape)
        return RecordBinder.for_class(record_type, config)
    except (ValueError, TypeError, FileNotFoundError) as e:
        raise click.ClickException(f"Error loading shape {shape}: {e}")


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
@click.option("--debug", is_flag=True, help="Enable debug output")
@click.version_option(version=__version__, prog_name="csvbind")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, debug: bool) -> None:
    """Bind CSV files to typed record classes."""
    ctx.ensure_object(Config)
    ctx.obj.verbose = verbose
    ctx.obj.debug = debug
    setup_logging(verbose=verbose, debug=debug)


@cli.command()
@click.argument("shape")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@shape_options
@pass_config
def describe(
    config: Config,
    shape: str,
    as_json: bool,
    time_format: str,
    tag_name: str,
    tag_sep: str,
) -> None:
    """Show the columns a record shape expects.

    Example:
        csvbind describe myapp.records:Person
    """
    binder = _build_binder(shape, time_format, tag_name, tag_sep)
    schema = binder.schema

    if as_json:
        output = {
            "record": schema.name,
            "fields": [
                {
                    "name": d.name,
                    "column": d.column,
                    "kind": d.kind.value,
                    "type": d.type_name,
                    "required": d.required,
                    "optional": d.optional,
                }
                for d in schema.descriptors
            ],
        }
        click.echo(json.dumps(output, indent=2))
        return

    click.echo(f"Record: {schema.name}")
    for d in schema.descriptors:
        flag = " (required)" if d.required else ""
        click.echo(f"  {d.column}: {d.name} [{d.type_name}]{flag}")


@cli.command("check-header")
@click.argument("shape")
@click.argument("file", type=click.Path(exists=True))
@click.option("--delimiter", default=",", show_default=True, help="CSV field delimiter")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@shape_options
@pass_config
def check_header(
    config: Config,
    shape: str,
    file: str,
    delimiter: str,
    as_json: bool,
    time_format: str,
    tag_name: str,
    tag_sep: str,
) -> None:
    """Check a CSV file's header against a record shape.

    Example:
        csvbind check-header myapp.records:Person people.csv
    """
    binder = _build_binder(shape, time_format, tag_name, tag_sep)
    reader = CSVRecordReader(binder, delimiter=delimiter)

    with open(file, "r", newline="", encoding="utf-8-sig") as f:
        try:
            header = reader.read_header(csv.reader(f, delimiter=delimiter))
        except IncorrectHeaderError as e:
            raise click.ClickException(f"Incorrect header in {file}: {e}")

    if as_json:
        output = {
            "file": file,
            "header": header,
            "bindings": {b.name: b.record_index for b in binder.bound_columns},
        }
        click.echo(json.dumps(output, indent=2))
        return

    click.echo(click.style(f"Header OK: {file}", fg="green"))
    for b in binder.bound_columns:
        click.echo(f"  [{b.record_index}] {header[b.record_index]!r} -> {b.name}")


@cli.command()
@click.argument("shape")
@click.argument("file", type=click.Path(exists=True))
@click.option(
    "--output",
    "-o",
    type=click.Path(),
    required=True,
    help="Output directory",
)
@click.option(
    "--format",
    "fmt",
    type=click.Choice(sorted(FORMATS)),
    default="jsonl",
    show_default=True,
    help="Output format",
)
@click.option("--name", default=None, help="Output file name (defaults to the input stem)")
@click.option("--delimiter", default=",", show_default=True, help="CSV field delimiter")
@click.option("--strict", is_flag=True, help="Fail on the first row that cannot be decoded")
@click.option("--dry-run", is_flag=True, help="Decode without writing output")
@shape_options
@pass_config
def convert(
    config: Config,
    shape: str,
    file: str,
    output: str,
    fmt: str,
    name: Optional[str],
    delimiter: str,
    strict: bool,
    dry_run: bool,
    time_format: str,
    tag_name: str,
    tag_sep: str,
) -> None:
    """Decode a CSV file and write the records.

    Example:
        csvbind convert myapp.records:Person people.csv -o out --format parquet
    """
    logger = logging.getLogger("convert")
    binder = _build_binder(shape, time_format, tag_name, tag_sep)
    reader = CSVRecordReader(binder, strict=strict, delimiter=delimiter)

    logger.info(f"Reading: {file}")
    try:
        result = reader.read(file)
    except IncorrectHeaderError as e:
        raise click.ClickException(f"Incorrect header in {file}: {e}")
    except DecodeError as e:
        raise click.ClickException(f"Error decoding {file}: {e}")

    click.echo(result.summary())

    if dry_run:
        logger.info("Dry run - skipping output")
        click.echo(click.style("\nDry run - no files written", fg="cyan"))
        return

    out_name = name or Path(file).stem
    try:
        path = write_records(binder.schema, result.records, output, out_name, fmt)
    except Exception as e:
        raise click.ClickException(f"Error writing output: {e}")

    click.echo(click.style(f"\nOutput file: {path}", fg="green"))
    if result.has_errors:
        sys.exit(2)


def app(args: Optional[list[str]] = None) -> int:
    """
    Main application entry point (for testing).

    Args:
        args: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success)
    """
    try:
        cli(args, standalone_mode=False)
        return 0
    except click.ClickException as e:
        e.show()
        return 1
    except SystemExit as e:
        return e.code if isinstance(e.code, int) else 1
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        return 1


def main() -> None:
    """CLI entry point."""
    cli()


if __name__ == "__main__":
    main()
