"""Command-line front end for the stagefs primitives."""

from __future__ import annotations

import importlib
import json
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Annotated, Any

import structlog
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

if TYPE_CHECKING:  # pragma: no cover - typing only
    import typer
    from typer import Typer as TyperType
else:  # pragma: no cover - runtime fallback for typing
    typer = importlib.import_module("typer")
    TyperType = Any

from stagefs.core.config import FsSettings, load_settings
from stagefs.core.errors import StageFsError
from stagefs.fs.hasher import hex_digest
from stagefs.fs.staged import delete_via, mkdir_via, mkdirs_via, rename_via
from stagefs.fs.walker import recursive_list

app: TyperType = typer.Typer(help="Crash-safe filesystem operations.")

VerboseFlag = Annotated[
    bool,
    typer.Option("--verbose", "-v", help="Log every operation step to stderr."),
]
MarkerOption = Annotated[
    str | None,
    typer.Option("--marker", help="Override the staging prefix."),
]
DirsFlag = Annotated[
    bool,
    typer.Option("--dirs", help="Include directories in the listing."),
]
StrictFlag = Annotated[
    bool,
    typer.Option("--strict", help="Fail on unreadable subdirectories."),
]
JsonFlag = Annotated[
    bool,
    typer.Option("--json", help="Emit JSON instead of one path per line."),
]
AlgorithmOption = Annotated[
    str | None,
    typer.Option("--algorithm", "-a", help="Digest algorithm (default SHA1)."),
]
ParentsFlag = Annotated[
    bool,
    typer.Option("--parents", "-p", help="Create missing parent directories."),
]


def _console() -> Console:
    return Console(highlight=False, soft_wrap=True)


def _settings() -> FsSettings:
    try:
        return load_settings()
    except ValidationError as e:
        typer.secho(f"Invalid STAGEFS_* configuration: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=2) from e


def _report(ok: bool, verb: str, detail: str) -> None:
    ui = _console()
    if ok:
        ui.print(f"✅ [green]{verb}[/green] {escape(detail)}")
        return

    ui.print(f"❌ [red]FAILED[/red] {escape(detail)}")
    raise typer.Exit(code=1)


def main(verbose: VerboseFlag = False) -> None:
    """Configure structured logging for the invoked command."""

    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.INFO if verbose else logging.WARNING
        ),
        logger_factory=structlog.PrintLoggerFactory(sys.stderr),
    )


def list_tree(
    root: Path,
    dirs: DirsFlag = False,
    strict: StrictFlag = False,
    json_output: JsonFlag = False,
) -> None:
    """List every file below ROOT in sorted order."""

    settings = _settings()
    on_unreadable = "fail" if strict else settings.on_unreadable
    try:
        paths = recursive_list(
            root,
            dirs,
            on_unreadable=on_unreadable,
            max_depth=settings.max_depth,
        )
    except StageFsError as e:
        typer.secho(str(e), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from e

    if json_output:
        typer.echo(json.dumps([str(path) for path in paths], indent=2))
        return

    for path in paths:
        typer.echo(str(path))


def hash_file(file: Path, algorithm: AlgorithmOption = None) -> None:
    """Print the content digest of FILE."""

    chosen = algorithm or _settings().hash_algorithm
    try:
        value = hex_digest(file, chosen)
    except StageFsError as e:
        typer.secho(str(e), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from e

    typer.echo(f"{value}  {file}")


def move(src: Path, dst: Path, marker: MarkerOption = None) -> None:
    """Rename SRC to DST through a staging path."""

    _report(rename_via(src, dst, marker), "RENAMED", f"{src} → {dst}")


def remove(path: Path, marker: MarkerOption = None) -> None:
    """Delete PATH (recursively) through a staging path."""

    _report(delete_via(path, marker), "DELETED", str(path))


def make_directory(
    folder: Path, parents: ParentsFlag = False, marker: MarkerOption = None
) -> None:
    """Create FOLDER through a staging path."""

    if parents:
        ok = mkdirs_via(folder, marker, max_depth=_settings().max_depth)
    else:
        ok = mkdir_via(folder, marker)
    _report(ok, "CREATED", str(folder))


app.callback()(main)
app.command("ls")(list_tree)
app.command("hash")(hash_file)
app.command("mv")(move)
app.command("rm")(remove)
app.command("mkdir")(make_directory)
