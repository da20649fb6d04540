"""
Main CLI entry point for remutable.

Provides the command-line interface using Click. Each subcommand reads a
YAML or JSON document, applies one update, and prints the new document.
The input file is never written.
"""

import json as _json
import logging as _logging
import typing as _typing

import click as _click
import pydantic as _pydantic
import yaml as _yaml

import remutable
import remutable.config as config
import remutable.errors as errors
import remutable.tree as tree

_logger = _logging.getLogger(__name__)

# Custom Click context settings for better help formatting
CONTEXT_SETTINGS: dict[str, _typing.Any] = {
    "help_option_names": ["-h", "--help"],
    "max_content_width": 100,
}

_FILE_ARGUMENT = _click.argument("document", metavar="FILE", type=_click.File("r"))
_PATH_ARGUMENT = _click.argument("path")


# =============================================================================
# Helpers
# =============================================================================


def _parse_yaml(text: str, what: str) -> _typing.Any:
    """Parse a YAML command-line value, reporting errors as usage errors."""
    try:
        return _yaml.safe_load(text)
    except _yaml.YAMLError as e:
        raise _click.BadParameter(f"invalid YAML: {e}", param_hint=what) from e


def _parse_path(text: str) -> tree.PathLike:
    """
    Turn a PATH argument into a path.

    A value starting with "[" is a YAML flow sequence of segments, so
    indices and predicates can be written ("[list, {id: 2}, name]").
    Anything else is a delimited string path.
    """
    if not text.startswith("["):
        return text
    segments = _parse_yaml(text, "PATH")
    if not isinstance(segments, list):
        raise _click.BadParameter("expected a YAML list", param_hint="PATH")
    return segments


def _parse_number(text: str) -> int | float:
    value = _parse_yaml(text, "--by")
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise _click.BadParameter(f"{text!r} is not a number", param_hint="--by")
    return value


def _load_document(document: _typing.TextIO) -> _typing.Any:
    """Read the input document. An empty document is an empty mapping."""
    try:
        data = _yaml.safe_load(document)
    except _yaml.YAMLError as e:
        raise _click.ClickException(f"Cannot parse {document.name}: {e}") from e
    return {} if data is None else data


def _emit(output_format: str, data: _typing.Any) -> None:
    if output_format == "json":
        _click.echo(_json.dumps(data, indent=2, default=str))
    else:
        _click.echo(_yaml.safe_dump(data, sort_keys=False, allow_unicode=True), nl=False)


def _descending(a: _typing.Any, b: _typing.Any) -> int:
    return (b > a) - (b < a)


def _run(
    ctx: _click.Context,
    document: _typing.TextIO,
    path: str,
    operation: tree.Operation,
) -> None:
    """Apply one operation to the document and print the result."""
    updater: tree.Updater = ctx.obj["updater"]
    data = _load_document(document)
    parsed_path = _parse_path(path)
    _logger.debug("Applying %s at %r", type(operation).__name__, parsed_path)
    try:
        result = updater.apply(data, [(parsed_path, operation)])
    except errors.RemutableError as e:
        raise _click.ClickException(str(e)) from e
    except TypeError as e:
        # Unorderable list items in sort
        raise _click.ClickException(f"Cannot {type(operation).__name__.lower()}: {e}") from e
    _emit(ctx.obj["output_format"], result)


# =============================================================================
# Command group
# =============================================================================


@_click.group(context_settings=CONTEXT_SETTINGS)
@_click.version_option(remutable.__version__, "--version", prog_name="remutable")
@_click.option(
    "--json",
    "json_output",
    is_flag=True,
    help="Output in JSON format instead of YAML",
)
@_click.option(
    "-v",
    "--verbose",
    is_flag=True,
    help="Enable debug logging",
)
@_click.pass_context
def cli(ctx: _click.Context, json_output: bool, verbose: bool) -> None:
    """
    remutable - persistent updates for YAML and JSON documents.

    Reads FILE ("-" for stdin), applies one update at PATH, and prints the
    updated document. The input file is left untouched.

    \b
    Examples:
        remutable set config.yaml server.port 8080
        remutable push state.json items '{id: 3}'
        remutable unset state.yaml '[list, {id: 2}]'
        cat doc.yaml | remutable --json toggle - flags.debug
    """
    # Load settings from environment and config file, then apply CLI flags
    try:
        settings = config.Settings()
    except config.ConfigFileError as e:
        raise _click.ClickException(str(e)) from e
    except _pydantic.ValidationError as e:
        raise _click.ClickException(f"Invalid configuration: {e}") from e

    if verbose or settings.verbose:
        _logging.basicConfig(
            level=_logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
        )

    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings
    ctx.obj["updater"] = tree.Updater.from_settings(settings)
    ctx.obj["output_format"] = "json" if json_output else settings.output_format


# =============================================================================
# Update commands
# =============================================================================


@cli.command("set")
@_FILE_ARGUMENT
@_PATH_ARGUMENT
@_click.argument("value")
@_click.pass_context
def set_command(ctx: _click.Context, document: _typing.TextIO, path: str, value: str) -> None:
    """Assign VALUE at PATH, creating missing mappings."""
    _run(ctx, document, path, tree.Set(_parse_yaml(value, "VALUE")))


@cli.command()
@_FILE_ARGUMENT
@_PATH_ARGUMENT
@_click.pass_context
def unset(ctx: _click.Context, document: _typing.TextIO, path: str) -> None:
    """Remove the value at PATH (no change if it is absent)."""
    _run(ctx, document, path, tree.Unset())


@cli.command()
@_FILE_ARGUMENT
@_PATH_ARGUMENT
@_click.option("--by", default="1", show_default=True, help="Amount to add")
@_click.pass_context
def increment(ctx: _click.Context, document: _typing.TextIO, path: str, by: str) -> None:
    """Add to the number at PATH."""
    _run(ctx, document, path, tree.Increment(_parse_number(by)))


@cli.command()
@_FILE_ARGUMENT
@_PATH_ARGUMENT
@_click.option("--by", default="1", show_default=True, help="Amount to subtract")
@_click.pass_context
def decrement(ctx: _click.Context, document: _typing.TextIO, path: str, by: str) -> None:
    """Subtract from the number at PATH."""
    _run(ctx, document, path, tree.Decrement(_parse_number(by)))


@cli.command()
@_FILE_ARGUMENT
@_PATH_ARGUMENT
@_click.argument("value")
@_click.pass_context
def push(ctx: _click.Context, document: _typing.TextIO, path: str, value: str) -> None:
    """Append VALUE to the list at PATH."""
    _run(ctx, document, path, tree.Push(_parse_yaml(value, "VALUE")))


@cli.command()
@_FILE_ARGUMENT
@_PATH_ARGUMENT
@_click.argument("value")
@_click.pass_context
def concat(ctx: _click.Context, document: _typing.TextIO, path: str, value: str) -> None:
    """Append the items of the list VALUE to the list at PATH."""
    _run(ctx, document, path, tree.Concat(_parse_yaml(value, "VALUE")))


@cli.command()
@_FILE_ARGUMENT
@_PATH_ARGUMENT
@_click.argument("value")
@_click.pass_context
def prepend(ctx: _click.Context, document: _typing.TextIO, path: str, value: str) -> None:
    """Insert the items of the list VALUE before the list at PATH."""
    _run(ctx, document, path, tree.Prepend(_parse_yaml(value, "VALUE")))


@cli.command()
@_FILE_ARGUMENT
@_PATH_ARGUMENT
@_click.argument("value")
@_click.pass_context
def merge(ctx: _click.Context, document: _typing.TextIO, path: str, value: str) -> None:
    """Shallow-merge the mapping (or list) VALUE into PATH."""
    _run(ctx, document, path, tree.Merge(_parse_yaml(value, "VALUE")))


@cli.command()
@_FILE_ARGUMENT
@_PATH_ARGUMENT
@_click.pass_context
def toggle(ctx: _click.Context, document: _typing.TextIO, path: str) -> None:
    """Flip the boolean at PATH (missing counts as false)."""
    _run(ctx, document, path, tree.Toggle())


@cli.command()
@_FILE_ARGUMENT
@_PATH_ARGUMENT
@_click.option("--reverse", is_flag=True, help="Sort in descending order")
@_click.pass_context
def sort(ctx: _click.Context, document: _typing.TextIO, path: str, reverse: bool) -> None:
    """Sort the list at PATH."""
    _run(ctx, document, path, tree.Sort(_descending if reverse else None))


@cli.command()
@_FILE_ARGUMENT
@_PATH_ARGUMENT
@_click.argument("index", type=int)
@_click.argument("how_many", type=int)
@_click.argument("items", nargs=-1)
@_click.pass_context
def splice(
    ctx: _click.Context,
    document: _typing.TextIO,
    path: str,
    index: int,
    how_many: int,
    items: tuple[str, ...],
) -> None:
    """
    Remove HOW_MANY items at INDEX in the list at PATH and insert ITEMS.

    A negative INDEX counts from the end; put "--" before it.
    """
    values = tuple(_parse_yaml(item, "ITEM") for item in items)
    _run(ctx, document, path, tree.Splice(index, how_many, values))


def main() -> None:
    """Main entry point with correct program name."""
    cli(prog_name="remutable")


if __name__ == "__main__":
    main()
