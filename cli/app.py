"""
opennbs - Read, convert and analyze Note Block Song files.

A modern CLI tool for the .nbs format, Classic through version 5.
"""

import logging

import typer
from rich.console import Console
from rich.logging import RichHandler

from cli.commands.info import info
from cli.commands.convert import convert
from cli.commands.validate import validate
from cli.commands.dump import dump
from cli.commands.layers import layers
from opennbs import __version__

console = Console()

# Main app
app = typer.Typer(
    name="opennbs",
    help="Read, convert and analyze Note Block Song (.nbs) files.",
    add_completion=False,
    rich_markup_mode="rich",
)

app.command(name="info")(info)
app.command(name="layers")(layers)
app.command(name="convert")(convert)
app.command(name="validate")(validate)
app.command(name="dump")(dump)


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]opennbs[/bold] version {__version__}")
    console.print("[dim]Codec for Note Block Song files (Classic to version 5)[/dim]")


def configure_logging(debug: bool) -> None:
    """Route library log records through Rich."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version_flag: bool = typer.Option(False, "--version", "-V", help="Show version"),
    debug: bool = typer.Option(False, "--debug", help="Show decoder/encoder debug logging"),
) -> None:
    """
    opennbs - Inspect and convert Note Block Studio songs.

    Supports every .nbs revision:

    - [cyan]Classic[/cyan] (headerless) files
    - [cyan]Version 1-5[/cyan] files

    [bold]Quick Start:[/bold]

        opennbs info song.nbs          # Song overview
        opennbs info song.nbs --full   # Plus layers and instruments

    [bold]Analysis Commands:[/bold]

        opennbs layers song.nbs        # Per-layer details
        opennbs dump song.nbs          # Annotated header dump

    [bold]Utility Commands:[/bold]

        opennbs validate song.nbs               # Check file structure
        opennbs convert song.nbs -t 3 -o old.nbs  # Rewrite at version 3

    Use --help with any command for more details.
    """
    if version_flag:
        version()
        raise typer.Exit()

    configure_logging(debug)

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())


def run() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    run()
