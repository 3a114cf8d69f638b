"""Header command — show how a single header line is parsed."""

from pathlib import Path
from typing import List, Optional

import typer
from rich.markup import escape
from rich.table import Table

from ..exceptions import FuncsiftError
from ..extraction.header_parser import HeaderParser
from ..extraction.languages import DEFAULT_LANGUAGES
from . import app
from ._common import build_universe, console, resolve_config


@app.command()
def header(
    raw_header: str = typer.Argument(..., help="One function header line"),
    types_file: Optional[Path] = typer.Option(
        None,
        "-t",
        "--types",
        help="TOML type universe",
        exists=True,
        dir_okay=False,
        readable=True,
    ),
    desired: Optional[List[str]] = typer.Option(None, "-d", "--desired", help="Desired type"),
    undesired: Optional[List[str]] = typer.Option(
        None, "-u", "--undesired", help="Known but undesired type"
    ),
    language: str = typer.Option("java", "-l", "--language", help="Language for modifiers"),
):
    """Parse one header and print its name, types and verdict."""
    try:
        settings = resolve_config(language=language)
        universe = build_universe(settings, types_file, desired, undesired)
        spec = DEFAULT_LANGUAGES.get(language)
        parser = HeaderParser(
            modifiers=spec.modifiers,
            min_prefix_tokens=settings.min_prefix_tokens,
            comment_marker=settings.comment_marker,
        )
        signature = parser.parse(raw_header, universe)
    except FuncsiftError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    table = Table(show_header=False, box=None)
    table.add_column(style="bold")
    table.add_column()
    table.add_row("Name", escape(signature.name) or "[dim]-[/dim]")
    table.add_row("Inputs", escape(", ".join(signature.input_types)) or "[dim]-[/dim]")
    table.add_row("Outputs", escape(", ".join(signature.output_types)) or "[dim]-[/dim]")
    if signature.accepted:
        table.add_row("Verdict", "[green]accepted[/green]")
    else:
        table.add_row("Verdict", f"[red]rejected[/red] ({signature.reason.value})")
    console.print(table)
