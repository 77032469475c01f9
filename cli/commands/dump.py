"""
Dump command - annotated hex dump of an .nbs header.
"""

from io import BytesIO
from pathlib import Path

import typer
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from cli.display.formatters import hex_bytes
from cli.display.hex_view import display_hex_dump
from opennbs.errors import NBSError
from opennbs.formats.nbs.reader import NBSReader

console = Console()
app = typer.Typer()


@app.command()
def dump(
    file: Path = typer.Argument(..., help="Song file (.nbs)"),
    lines: int = typer.Option(16, "--lines", "-l", help="Hex lines to show after the field table"),
) -> None:
    """
    Show every header field with its offset, size and raw bytes.

    The hex view below the table is colored by file section: header, note
    blocks, layer records and custom instruments.
    """
    if not file.is_file():
        console.print(f"[red]Error: Not a regular file: {file}[/red]")
        raise typer.Exit(1)

    data = file.read_bytes()

    reader = NBSReader()
    try:
        reader.parse_stream(BytesIO(data))
    except NBSError as e:
        if reader.header is None:
            console.print(f"[red]Error: {e}[/red]")
            display_hex_dump(data, title=f"{file.name} (undecodable)", max_lines=lines)
            raise typer.Exit(1)
        # Header is intact; show the sections that did decode
        console.print(f"[yellow]Warning: {escape(str(e))}[/yellow]")

    header = reader.header

    table = Table(
        title=f"{escape(file.name)} - {header.version.label} header",
        box=box.ROUNDED,
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("Offset", style="dim", width=8)
    table.add_column("Size", justify="right", width=5)
    table.add_column("Field", style="cyan", width=26)
    table.add_column("Value", width=28)
    table.add_column("Bytes", style="dim", width=40)

    for span in header.fields:
        value = span.value
        shown = repr(value) if isinstance(value, str) else str(value)
        table.add_row(
            f"0x{span.start:04X}",
            str(span.size),
            span.name,
            escape(shown),
            hex_bytes(data[span.start : span.end]),
        )

    console.print(table)

    header_end = header.fields[-1].end
    console.print(f"[dim]Note blocks start at 0x{header_end:04X}[/dim]")
    display_hex_dump(
        data[header_end:],
        title="Song data",
        start_offset=header_end,
        sections=reader.sections[1:],
        max_lines=lines,
    )


if __name__ == "__main__":
    app()
