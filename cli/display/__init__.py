"""
CLI display modules.
"""

from cli.display.tables import (
    display_song_info,
    display_layers_table,
    display_instruments_table,
)
from cli.display.hex_view import display_hex_dump

__all__ = [
    "display_song_info",
    "display_layers_table",
    "display_instruments_table",
    "display_hex_dump",
]
