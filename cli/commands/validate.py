"""
Validate command - check .nbs file integrity and structure.
"""

from dataclasses import dataclass, field
from io import BytesIO
from pathlib import Path
from typing import List

import typer
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from opennbs.analysis import SongAnalyzer
from opennbs.errors import NBSError
from opennbs.formats.nbs.reader import NBSReader

console = Console()
app = typer.Typer()


@dataclass
class ValidationIssue:
    """A single validation issue."""

    severity: str  # "error", "warning", "info"
    area: str
    message: str


@dataclass
class ValidationResult:
    """Result of validating an .nbs file."""

    filepath: str
    valid: bool
    errors: List[ValidationIssue] = field(default_factory=list)
    warnings: List[ValidationIssue] = field(default_factory=list)
    info: List[ValidationIssue] = field(default_factory=list)

    @property
    def total_issues(self) -> int:
        return len(self.errors) + len(self.warnings) + len(self.info)


class NBSValidator:
    """Validate .nbs file structure and content."""

    def __init__(self, data: bytes, filepath: str):
        self.data = data
        self.filepath = filepath
        self.issues: List[ValidationIssue] = []

    def validate(self) -> ValidationResult:
        """Perform full validation and return result."""
        self.issues = []

        self._validate_decode()

        errors = [i for i in self.issues if i.severity == "error"]
        warnings = [i for i in self.issues if i.severity == "warning"]
        info = [i for i in self.issues if i.severity == "info"]

        return ValidationResult(
            filepath=self.filepath,
            valid=len(errors) == 0,
            errors=errors,
            warnings=warnings,
            info=info,
        )

    def _add_issue(self, severity: str, area: str, message: str) -> None:
        self.issues.append(ValidationIssue(severity=severity, area=area, message=message))

    def _validate_decode(self) -> None:
        """Decode the file and check what the decoder had to work around."""
        stream = BytesIO(self.data)
        reader = NBSReader()

        try:
            song = reader.parse_stream(stream)
        except NBSError as e:
            self._add_issue("error", type(e).__name__, str(e))
            return

        header = reader.header
        self._add_issue("info", "Header", f"{song.version.label}, {header.fields[-1].end} header bytes")
        self._add_issue(
            "info", "Content", f"{song.layer_count} layers, {song.note_count} notes"
        )

        trailing = len(stream.read())
        if trailing:
            self._add_issue("warning", "Trailing Data", f"{trailing} unread bytes at end of file")

        if reader.synthesized_layers:
            self._add_issue(
                "warning",
                "Layers",
                f"Header declares no layers; {len(reader.synthesized_layers)} recreated from notes",
            )
        if reader.dropped_notes:
            self._add_issue(
                "warning",
                "Layers",
                f"{reader.dropped_notes} notes on layers beyond the layer count were dropped",
            )

        analysis = SongAnalyzer().analyze(song)

        if analysis.dangling_instruments:
            ids = ", ".join(str(i) for i in analysis.dangling_instruments)
            self._add_issue("warning", "Instruments", f"Notes use undefined instrument ids: {ids}")

        if analysis.notes_beyond_length:
            self._add_issue(
                "warning",
                "Length",
                f"{analysis.notes_beyond_length} notes after song length {song.length}",
            )

        if song.looping and song.loop_start_tick > song.length:
            self._add_issue(
                "warning",
                "Loop",
                f"Loop start {song.loop_start_tick} is after song length {song.length}",
            )

        if song.tempo == 0:
            self._add_issue("warning", "Tempo", "Tempo is zero")


def display_validation_result(result: ValidationResult) -> None:
    """Display validation result with Rich formatting."""
    status = "[green]VALID[/green]" if result.valid else "[red]INVALID[/red]"

    console.print(
        Panel(
            f"[bold]File:[/bold] {escape(result.filepath)}\n[bold]Status:[/bold] {status}\n"
            f"[bold]Errors:[/bold] {len(result.errors)}  "
            f"[bold]Warnings:[/bold] {len(result.warnings)}",
            title="[bold]Validation[/bold]",
            border_style="green" if result.valid else "red",
            expand=False,
        )
    )

    if not result.total_issues:
        return

    table = Table(box=box.ROUNDED, show_header=True, header_style="bold")
    table.add_column("Severity", width=9)
    table.add_column("Area", style="cyan", width=16)
    table.add_column("Message", width=60)

    styles = {"error": "red", "warning": "yellow", "info": "dim"}
    for issue in result.errors + result.warnings + result.info:
        style = styles[issue.severity]
        table.add_row(f"[{style}]{issue.severity}[/{style}]", issue.area, escape(issue.message))

    console.print(table)


@app.command()
def validate(
    file: Path = typer.Argument(..., help="Song file (.nbs)"),
    strict: bool = typer.Option(False, "--strict", "-s", help="Treat warnings as errors"),
) -> None:
    """
    Validate an .nbs file.

    Decodes the whole song and reports decode errors, orphaned notes,
    undefined instruments and inconsistent lengths.
    """
    if not file.is_file():
        console.print(f"[red]Error: Not a regular file: {file}[/red]")
        raise typer.Exit(1)

    result = NBSValidator(file.read_bytes(), str(file)).validate()
    display_validation_result(result)

    if not result.valid or (strict and result.warnings):
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
