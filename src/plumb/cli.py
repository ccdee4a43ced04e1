"""Plumb Command Line Interface.

Entry point for the plumb CLI tool. Commands print their result (a hash,
an object payload) on stdout; errors are printed as a single line on
stderr and exit with status 1.
"""

from __future__ import annotations

from pathlib import Path
from typing import NoReturn

import typer
from dynaconf.vendor.ruamel.yaml.parser import ParserError as YamlParserError
from dynaconf.vendor.ruamel.yaml.scanner import ScannerError as YamlScannerError

from plumb import __version__
from plumb.contracts import ObjectType, PathError, PlumbError
from plumb.core.config import PlumbSettings, load_settings

__all__ = ["app"]

app = typer.Typer(
    name="plumb",
    help="Plumb: content-addressable object store.",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"plumb version {__version__}")
        raise typer.Exit()


def _fail(message: str | Exception) -> NoReturn:
    typer.echo(f"Error: {message}", err=True)
    raise typer.Exit(1)


def _settings(ctx: typer.Context) -> PlumbSettings:
    settings: PlumbSettings | None = ctx.obj
    if settings is None:
        return PlumbSettings()
    return settings


@app.callback()
def main(
    ctx: typer.Context,
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose/debug logging.",
    ),
    json_logs: bool = typer.Option(
        False,
        "--json-logs",
        help="Output structured JSON logs (for machine processing).",
    ),
    settings_file: Path | None = typer.Option(
        None,
        "--settings",
        "-s",
        help="Path to YAML settings file.",
    ),
) -> None:
    """Plumb: content-addressable object store."""
    from pydantic import ValidationError

    from plumb.core.logging import configure_logging

    try:
        settings = load_settings(settings_file)
    except (YamlParserError, YamlScannerError) as e:
        # e.problem holds the specific complaint, e.g. "expected ',' or ']'"
        _fail(f"Invalid settings file {settings_file}: {e.problem}")
    except FileNotFoundError as e:
        _fail(e)
    except ValidationError as e:
        _fail(f"Invalid settings: {e.error_count()} validation error(s)\n{e}")

    log_level = "DEBUG" if verbose else settings.log_level
    configure_logging(json_output=json_logs or settings.json_logs, level=log_level)
    ctx.obj = settings


@app.command()
def init(
    ctx: typer.Context,
    path: Path = typer.Argument(
        Path("."),
        help="Directory to create the repository in (must be empty or absent).",
    ),
) -> None:
    """Create an empty repository."""
    from plumb.core.repository import Repository

    try:
        repo = Repository.create(path.expanduser(), settings=_settings(ctx))
    except PlumbError as e:
        _fail(e)

    typer.echo(f"Initialized empty repository in {repo.git_dir.resolve()}")


@app.command("hash-object")
def hash_object_command(
    ctx: typer.Context,
    path: Path = typer.Argument(..., help="File to hash."),
    object_type: ObjectType = typer.Option(
        ObjectType.BLOB,
        "--type",
        "-t",
        help="Object type.",
    ),
    write: bool = typer.Option(
        False,
        "--write",
        "-w",
        help="Write the object into the repository containing the current directory.",
    ),
) -> None:
    """Compute an object's hash from a file, optionally storing it."""
    from plumb.core.object_store import hash_object
    from plumb.core.repository import Repository

    try:
        try:
            payload = path.read_bytes()
        except OSError as e:
            raise PathError(f"Could not read file ({e.strerror or e})", path) from e

        if write:
            repo = Repository.find(Path.cwd(), settings=_settings(ctx))
            object_id = repo.write_object(object_type, payload)
        else:
            object_id = hash_object(object_type, payload)
    except PlumbError as e:
        _fail(e)

    typer.echo(object_id)


@app.command("cat-file")
def cat_file(
    ctx: typer.Context,
    object_type: ObjectType = typer.Argument(..., help="Expected object type."),
    name: str = typer.Argument(..., help="Object hash."),
) -> None:
    """Print an object's raw payload."""
    from plumb.core.repository import Repository

    try:
        repo = Repository.find(Path.cwd(), settings=_settings(ctx))
        object_id = repo.object_find(name, object_type)
        obj = repo.read_object(object_id)
    except (PlumbError, ValueError) as e:
        _fail(e)

    typer.echo(obj.payload, nl=False)


if __name__ == "__main__":
    app()
