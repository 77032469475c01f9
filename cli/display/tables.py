"""
Rich table displays for song information.

Provides formatted output for .nbs file analysis.
"""

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from cli.display.formatters import pan_bar, value_bar
from opennbs.analysis import SongAnalysis, SongAnalyzer, key_to_name
from opennbs.models.song import Song

console = Console()


def _text(value: str) -> str:
    return escape(value) if value else "[dim]-[/dim]"


def display_song_info(song: Song, analysis: SongAnalysis) -> None:
    """Display the song header and statistics."""

    header_content = f"""[bold]Name:[/bold] {_text(song.name)}
[bold]Author:[/bold] {_text(song.author)}
[bold]Original Author:[/bold] {_text(song.original_author)}
[bold]Description:[/bold] {_text(song.description)}
[bold]Format:[/bold] {song.version.label}
[bold]Source File:[/bold] {_text(song.source_file)}"""

    console.print(
        Panel(
            header_content,
            title="[bold blue]Song Info[/bold blue]",
            border_style="blue",
            expand=False,
        )
    )

    loop = "[dim]Off[/dim]"
    if song.looping:
        limit = "forever" if song.max_loop_count == 0 else f"{song.max_loop_count}x"
        loop = f"[green]On[/green] from tick {song.loop_start_tick}, {limit}"

    timing_content = f"""[bold]Tempo:[/bold] {analysis.tempo_tps:.2f} t/s (raw: {song.tempo})
[bold]Length:[/bold] {song.length} ticks ({analysis.duration_str})
[bold]Time Signature:[/bold] {song.time_signature}/4
[bold]Looping:[/bold] {loop}"""

    console.print(
        Panel(
            timing_content, title="[bold cyan]Timing[/bold cyan]", border_style="cyan", expand=False
        )
    )

    stats_table = Table(box=box.SIMPLE, show_header=False)
    stats_table.add_column("Property", style="cyan", width=24)
    stats_table.add_column("Value", width=40)

    stats_table.add_row("Layers", str(analysis.layer_count))
    stats_table.add_row("Notes", str(analysis.note_count))
    stats_table.add_row("Key Range", analysis.key_range_str)
    stats_table.add_row("Vanilla Instruments", str(song.vanilla_instrument_count))
    stats_table.add_row("Custom Instruments", str(song.custom_instrument_count))
    stats_table.add_row("Oldest Lossless Version", analysis.required_version.label)
    stats_table.add_row("Minutes Spent", str(song.minutes_spent))
    stats_table.add_row("Left / Right Clicks", f"{song.left_clicks} / {song.right_clicks}")
    stats_table.add_row(
        "Blocks Added / Removed", f"{song.note_blocks_added} / {song.note_blocks_removed}"
    )
    auto_save = f"every {song.auto_saving_duration} min" if song.auto_saving else "off"
    stats_table.add_row("Auto-save", auto_save)

    console.print(stats_table)


def display_layers_table(analysis: SongAnalysis) -> None:
    """Display per-layer statistics."""
    table = Table(title="Layers", box=box.ROUNDED, show_header=True, header_style="bold green")
    table.add_column("#", style="dim", width=4)
    table.add_column("Name", style="cyan", width=20)
    table.add_column("Lock", width=4)
    table.add_column("Volume", width=16)
    table.add_column("Pan", width=18)
    table.add_column("Notes", justify="right", width=6)
    table.add_column("Ticks", width=12)

    for layer in analysis.layers:
        span = "-" if layer.first_tick is None else f"{layer.first_tick}-{layer.last_tick}"
        table.add_row(
            str(layer.index),
            _text(layer.name),
            "[yellow]🔒[/yellow]" if layer.is_locked else "",
            value_bar(layer.volume),
            pan_bar(layer.panning),
            str(layer.note_count),
            span,
        )

    console.print(table)


def display_instruments_table(song: Song, analyzer: SongAnalyzer, analysis: SongAnalysis) -> None:
    """Display instrument usage and custom instrument definitions."""
    if analysis.instrument_usage:
        usage_table = Table(
            title="Instrument Usage", box=box.ROUNDED, show_header=True, header_style="bold magenta"
        )
        usage_table.add_column("ID", style="dim", width=4)
        usage_table.add_column("Instrument", style="cyan", width=24)
        usage_table.add_column("Notes", justify="right", width=8)

        for instrument, count in analysis.instrument_usage.items():
            name = escape(analyzer.instrument_name(instrument))
            if instrument in analysis.dangling_instruments:
                name = f"[red]{name}[/red]"
            usage_table.add_row(str(instrument), name, str(count))

        console.print(usage_table)

    if song.custom_instruments:
        custom_table = Table(
            title="Custom Instruments", box=box.ROUNDED, show_header=True, header_style="bold yellow"
        )
        custom_table.add_column("ID", style="dim", width=4)
        custom_table.add_column("Name", style="cyan", width=20)
        custom_table.add_column("File", width=28)
        custom_table.add_column("Key", width=6)
        custom_table.add_column("Press", width=5)

        for offset, instrument in enumerate(song.custom_instruments):
            custom_table.add_row(
                str(song.vanilla_instrument_count + offset),
                _text(instrument.name),
                _text(instrument.file),
                key_to_name(instrument.key),
                "yes" if instrument.press_piano_key else "no",
            )

        console.print(custom_table)
