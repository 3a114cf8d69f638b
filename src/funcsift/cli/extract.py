"""Extract command — matched functions of one or more files."""

import json
from pathlib import Path
from typing import List, Optional

import click
import typer
from rich.markup import escape
from rich.table import Table

from ..api import default_supplier, extract_file
from ..exceptions import FuncsiftError
from ..extraction.models import File
from ..logging_config import setup_logging, verbosity_from_flags
from . import app
from ._common import build_universe, console, resolve_config

SOURCE_PREVIEW_CHARS = 60


@app.command()
def extract(
    paths: List[Path] = typer.Argument(
        ...,
        help="Source files to scan",
        dir_okay=False,
    ),
    types_file: Optional[Path] = typer.Option(
        None,
        "-t",
        "--types",
        help="TOML type universe (a [types] table of name = true/false)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    desired: Optional[List[str]] = typer.Option(
        None,
        "-d",
        "--desired",
        help="Desired type (repeatable)",
    ),
    undesired: Optional[List[str]] = typer.Option(
        None,
        "-u",
        "--undesired",
        help="Known but undesired type (repeatable)",
    ),
    language: Optional[str] = typer.Option(
        None,
        "-l",
        "--language",
        help="Language (default: detect from extension)",
    ),
    fmt: str = typer.Option(
        "rich",
        "-f",
        "--format",
        help="Output format",
        click_type=click.Choice(["rich", "json"], case_sensitive=False),
    ),
    output: Optional[Path] = typer.Option(
        None,
        "-o",
        "--output",
        help="Write JSON to this file instead of stdout",
        dir_okay=False,
    ),
    config: Optional[Path] = typer.Option(
        None,
        "-c",
        "--config",
        help="Configuration file (TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    workers: Optional[int] = typer.Option(
        None,
        "-w",
        "--workers",
        help="Header parsing workers (default: auto-detect)",
        min=1,
        max=32,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every rejected header"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only log errors"),
    log_file: Optional[Path] = typer.Option(
        None,
        "--log-file",
        help="Also append log records to this file",
        dir_okay=False,
    ),
):
    """
    Extract functions whose input and output types are all in the type universe.

    Files with no matching function are reported as empty, not as errors.
    """
    log_path = str(log_file) if log_file else None
    verbosity = verbosity_from_flags(verbose, quiet)
    logger = setup_logging(verbosity, log_path)

    try:
        settings = resolve_config(
            config=config, language=language, workers=workers, verbose=verbose, quiet=quiet
        )
        universe = build_universe(settings, types_file, desired, undesired)
    except FuncsiftError as e:
        logger.error(f"{e.__class__.__name__}: {e}")
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    # A config file or FUNCSIFT_VERBOSITY may ask for a different level
    if settings.verbosity != verbosity:
        logger = setup_logging(settings.verbosity, log_path)

    supplier = default_supplier(settings)
    files: list[File] = []
    unmatched: list[str] = []
    errors: list[dict] = []

    for path in paths:
        try:
            file, ok = extract_file(str(path), universe, supplier=supplier, config=settings)
        except FuncsiftError as e:
            logger.error(f"{path}: {e}")
            errors.append({"path": str(path), **e.to_dict()})
            continue
        if ok and file is not None:
            files.append(file)
        else:
            unmatched.append(str(path))

    if fmt.lower() == "json":
        _output_json(files, unmatched, errors, output)
    else:
        _output_rich(files, unmatched, errors)

    if errors:
        raise typer.Exit(1)


def _output_json(
    files: list[File], unmatched: list[str], errors: list[dict], output: Optional[Path]
) -> None:
    payload = {
        "files": [file.to_dict() for file in files],
        "unmatched": unmatched,
        "errors": errors,
    }
    text = json.dumps(payload, indent=2)
    if output is not None:
        output.write_text(text + "\n", encoding="utf-8")
        console.print(f"[green]Wrote {len(files)} file(s) to {output}[/green]")
    else:
        typer.echo(text)


def _output_rich(files: list[File], unmatched: list[str], errors: list[dict]) -> None:
    for file in files:
        table = Table(title=f"{escape(file.path)} [dim](id {file.id})[/dim]", show_lines=False)
        table.add_column("#", justify="right", style="dim")
        table.add_column("Function", style="bold cyan")
        table.add_column("Inputs", style="green")
        table.add_column("Outputs", style="yellow")
        table.add_column("Source")

        for fn in file.functions:
            preview = fn.source[:SOURCE_PREVIEW_CHARS]
            if len(fn.source) > SOURCE_PREVIEW_CHARS:
                preview += "…"
            table.add_row(
                str(fn.position),
                escape(fn.name),
                escape(", ".join(fn.input_types)),
                escape(", ".join(fn.output_types)),
                escape(preview) or "[dim]-[/dim]",
            )
        console.print(table)

        if not file.functions:
            console.print("[yellow]All matching functions were dropped (unbalanced braces)[/yellow]")

    for path in unmatched:
        console.print(f"[dim]{path}: no matching functions[/dim]")

    for error in errors:
        console.print(f"[red]{error['path']}:[/red] {error['message']}")
