"""
Layers command - per-layer details.
"""

from pathlib import Path

import typer
from rich.console import Console

from cli.display.tables import display_layers_table
from opennbs.analysis import SongAnalyzer
from opennbs.errors import NBSError
from opennbs.formats.nbs.reader import NBSReader

console = Console()
app = typer.Typer()


@app.command()
def layers(
    file: Path = typer.Argument(..., help="Song file (.nbs)"),
    non_empty: bool = typer.Option(False, "--non-empty", "-n", help="Hide layers without notes"),
) -> None:
    """
    Show every layer with its volume, panning and note span.
    """
    try:
        song = NBSReader.read(file)
    except (NBSError, OSError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    analysis = SongAnalyzer().analyze(song)
    if non_empty:
        analysis.layers = [layer for layer in analysis.layers if layer.note_count]

    if not analysis.layers:
        console.print("[dim]No layers[/dim]")
        return

    display_layers_table(analysis)


if __name__ == "__main__":
    app()
