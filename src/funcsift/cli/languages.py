"""Languages command — list the built-in language table."""

from rich.table import Table

from ..extraction.languages import DEFAULT_LANGUAGES
from . import app
from ._common import console


@app.command()
def languages():
    """Show supported languages, their extensions and ctags function kinds."""
    table = Table(title="Supported languages")
    table.add_column("Language", style="bold cyan")
    table.add_column("Extension")
    table.add_column("ctags kind")
    table.add_column("Modifiers", style="dim")

    for spec in DEFAULT_LANGUAGES:
        table.add_row(
            spec.name,
            f".{spec.extension}",
            spec.function_kind,
            " ".join(sorted(spec.modifiers)) or "-",
        )

    console.print(table)
