"""CLI entry point — the funcsift app and its subcommands."""

import typer

from .. import __version__
from ._common import console

app = typer.Typer(
    name="funcsift",
    help="funcsift - extract functions whose signatures match a type universe",
    add_completion=False,
    rich_markup_mode="rich",
    no_args_is_help=True,
)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"[bold cyan]funcsift[/bold cyan] version [green]{__version__}[/green]")
        raise typer.Exit(0)


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
):
    """
    Keep only the functions whose declared types all belong to your type universe.

    [bold cyan]Examples:[/bold cyan]

      funcsift extract src/Calculator.java --desired int --desired String

      funcsift extract src/*.java --types types.toml --format json

      funcsift header "public static int add(int a, int b) {" -d int
    """


# Import subcommands to register them
from .extract import extract as _extract  # noqa: F401, E402
from .header import header as _header  # noqa: F401, E402
from .languages import languages as _languages  # noqa: F401, E402
