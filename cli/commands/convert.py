"""
Convert command - rewrite a song at another format version.
"""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn

from opennbs.converters import downgrade_losses
from opennbs.errors import NBSError
from opennbs.formats.nbs.reader import NBSReader
from opennbs.formats.nbs.writer import NBSWriter
from opennbs.models.version import LATEST_VERSION, Version

console = Console()
app = typer.Typer()


@app.command()
def convert(
    source: Path = typer.Argument(..., help="Source song (.nbs)"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Output file path"),
    target: int = typer.Option(
        LATEST_VERSION.as_int, "--to", "-t", min=0, max=5, help="Target version (0 = Classic)"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show detailed progress"),
) -> None:
    """
    Rewrite a song at another NBS version.

    Downgrading drops every field the older version cannot store; the
    dropped data is listed after conversion.

    Examples:

        opennbs convert song.nbs -t 3 -o song_v3.nbs

        opennbs convert old.nbs -o upgraded.nbs
    """
    version = Version.from_int(target)
    output_path = output or source.with_name(f"{source.stem}_v{target}{source.suffix or '.nbs'}")

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=not verbose,
    ) as progress:
        task = progress.add_task(f"Converting to {version.label}...", total=None)

        try:
            song = NBSReader.read(source)
            losses = downgrade_losses(song, version)
            NBSWriter.write(song, output_path, version)

            progress.update(task, description="Done!")

        except (NBSError, OSError) as e:
            console.print(f"[red]Error: {e}[/red]")
            if verbose:
                console.print_exception()
            raise typer.Exit(1)

    console.print(f"[green]Converted:[/green] {source} -> {output_path}")
    console.print(
        f"[dim]{song.version.label} -> {version.label}, output size: {output_path.stat().st_size} bytes[/dim]"
    )

    if losses:
        console.print()
        console.print("[yellow]IMPORTANT - Conversion Limitations:[/yellow]")
        for loss in losses:
            console.print(f"[yellow]  - {loss}[/yellow]")
        console.print()


if __name__ == "__main__":
    app()
