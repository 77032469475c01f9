"""
Info command - display song information.
"""

from pathlib import Path

import typer
from rich.console import Console

from cli.display.tables import display_instruments_table, display_layers_table, display_song_info
from opennbs.analysis import SongAnalyzer
from opennbs.errors import NBSError
from opennbs.formats.nbs.reader import NBSReader

console = Console()
app = typer.Typer()


@app.command()
def info(
    file: Path = typer.Argument(..., help="Song file (.nbs)"),
    full: bool = typer.Option(False, "--full", "-f", help="Also show layers and instruments"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show tracebacks on errors"),
) -> None:
    """
    Display song header, timing and statistics.

    Examples:

        opennbs info song.nbs

        opennbs info song.nbs --full
    """
    try:
        song = NBSReader.read(file)
    except (NBSError, OSError) as e:
        console.print(f"[red]Error: {e}[/red]")
        if verbose:
            console.print_exception()
        raise typer.Exit(1)

    analyzer = SongAnalyzer()
    analysis = analyzer.analyze(song)

    display_song_info(song, analysis)

    if full:
        console.print()
        display_layers_table(analysis)
        console.print()
        display_instruments_table(song, analyzer, analysis)


if __name__ == "__main__":
    app()
