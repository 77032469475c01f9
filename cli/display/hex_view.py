"""
Hex dump display for .nbs files.

Bytes are colored by the file section they belong to (header, note blocks,
layer records, custom instruments) and each line that opens a section is
tagged with its name.
"""

from typing import List, Optional, Sequence

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from opennbs.formats.nbs.reader import FieldSpan

console = Console()

SECTION_STYLES = {
    "header": "yellow",
    "note_blocks": "green",
    "layers": "magenta",
    "custom_instruments": "cyan",
}


def _section_at(sections: Sequence[FieldSpan], offset: int) -> Optional[FieldSpan]:
    for section in sections:
        if section.start <= offset < section.end:
            return section
    return None


def _styled(text: str, section: Optional[FieldSpan]) -> str:
    if section is None:
        return f"[red]{text}[/red]"
    style = SECTION_STYLES.get(section.name, "white")
    return f"[{style}]{text}[/{style}]"


def format_hex_line(
    chunk: bytes,
    addr: int,
    sections: Sequence[FieldSpan] = (),
    bytes_per_line: int = 16,
) -> str:
    """
    Format one dump line as Rich markup.

    Bytes outside every section (trailing garbage) are shown in red. When
    no sections are given the line is left uncolored.
    """
    hex_parts: List[str] = []
    for i, b in enumerate(chunk):
        if i == 8:
            hex_parts.append("")
        cell = f"{b:02X}"
        hex_parts.append(_styled(cell, _section_at(sections, addr + i)) if sections else cell)

    # Markup tags take no columns, so pad for the missing bytes by hand
    missing = bytes_per_line - len(chunk)
    padding = " " * (missing * 3 + (1 if len(chunk) <= 8 < bytes_per_line else 0))
    hex_str = " ".join(hex_parts) + padding

    ascii_str = escape("".join(chr(b) if 32 <= b < 127 else "." for b in chunk))

    tags = [
        section.name
        for section in sections
        if addr <= section.start < addr + len(chunk) and section.end > section.start
    ]
    tag = f"  [dim]<- {', '.join(tags)}[/dim]" if tags else ""

    return f"[dim]{addr:08X}[/dim]  {hex_str}  [cyan]{ascii_str}[/cyan]{tag}"


def display_hex_dump(
    data: bytes,
    title: str = "Hex Dump",
    start_offset: int = 0,
    sections: Sequence[FieldSpan] = (),
    bytes_per_line: int = 16,
    max_lines: int = 32,
) -> None:
    """
    Display a hex dump with Rich.

    Args:
        data: Bytes to show
        title: Panel title
        start_offset: File offset of data[0]; section offsets are absolute
        sections: Decoded file sections used to color the bytes
        bytes_per_line: Bytes per row
        max_lines: Rows to show before truncating
    """
    lines = []
    end = min(len(data), max_lines * bytes_per_line)

    for offset in range(0, end, bytes_per_line):
        chunk = data[offset : offset + bytes_per_line]
        lines.append(format_hex_line(chunk, start_offset + offset, sections, bytes_per_line))

    if len(data) > end:
        lines.append(f"[dim]... {len(data) - end} more bytes ...[/dim]")

    if sections:
        legend = "  ".join(
            _styled(f"{section.name} ({section.size} bytes)", section)
            for section in sections
        )
        lines.append("")
        lines.append(legend)

    console.print(Panel("\n".join(lines), title=escape(title), border_style="blue", expand=False))
