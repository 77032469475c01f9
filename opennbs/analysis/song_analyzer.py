"""
Note Block Song analyzer.

Extracts statistics from a decoded Song:
- Note counts per layer and per instrument
- Key range and tick span
- Playback duration
- Custom instrument usage and dangling instrument ids
- Oldest format version that holds the song without loss
"""

from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from opennbs.converters.version_converter import downgrade_losses, required_version
from opennbs.formats.nbs.reader import NBSReader
from opennbs.models.song import Song
from opennbs.models.version import Version

# Vanilla instrument ids in the order the editor defines them
VANILLA_INSTRUMENTS = [
    "Harp",
    "Double Bass",
    "Bass Drum",
    "Snare Drum",
    "Click",
    "Guitar",
    "Flute",
    "Bell",
    "Chime",
    "Xylophone",
    "Iron Xylophone",
    "Cow Bell",
    "Didgeridoo",
    "Bit",
    "Banjo",
    "Pling",
]

NOTE_NAMES = ["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"]


def key_to_name(key: int) -> str:
    """Convert a piano key (0 = A0) to a note name (e.g., 45 -> F#4)."""
    if key < 0 or key > 87:
        return f"?{key}"
    midi_note = key + 21
    octave = (midi_note // 12) - 1
    return f"{NOTE_NAMES[midi_note % 12]}{octave}"


@dataclass
class LayerInfo:
    """Statistics for one layer."""

    index: int
    name: str
    is_locked: bool
    volume: int
    panning: int
    note_count: int
    first_tick: Optional[int]
    last_tick: Optional[int]


@dataclass
class SongAnalysis:
    """Complete analysis of a song."""

    name: str
    version: Version
    length: int
    tempo_tps: float
    duration_seconds: float
    layer_count: int
    note_count: int
    layers: List[LayerInfo] = field(default_factory=list)
    instrument_usage: Dict[int, int] = field(default_factory=dict)
    key_range: Optional[Tuple[int, int]] = None
    dangling_instruments: List[int] = field(default_factory=list)
    notes_beyond_length: int = 0
    required_version: Version = Version.CLASSIC
    native_losses: List[str] = field(default_factory=list)

    @property
    def key_range_str(self) -> str:
        if self.key_range is None:
            return "-"
        low, high = self.key_range
        return f"{key_to_name(low)}-{key_to_name(high)}"

    @property
    def duration_str(self) -> str:
        minutes, seconds = divmod(int(round(self.duration_seconds)), 60)
        return f"{minutes}:{seconds:02d}"


class SongAnalyzer:
    """
    Analyzer for decoded songs.

    Example:
        analysis = SongAnalyzer().analyze_file("song.nbs")
        print(f"{analysis.note_count} notes, {analysis.duration_str}")
    """

    def __init__(self):
        self.song: Optional[Song] = None

    def analyze_file(self, filepath: Union[str, Path]) -> SongAnalysis:
        return self.analyze(NBSReader.read(filepath))

    def analyze(self, song: Song) -> SongAnalysis:
        """
        Analyze a song.

        Args:
            song: Song to analyze

        Returns:
            SongAnalysis with all statistics filled in
        """
        self.song = song

        usage: Counter = Counter()
        keys: List[int] = []
        for _, _, note in song.iter_notes():
            usage[note.instrument] += 1
            keys.append(note.key)

        known = song.vanilla_instrument_count + song.custom_instrument_count
        dangling = sorted(instrument for instrument in usage if instrument >= known)

        beyond = sum(
            1 for layer in song.layers.values() for tick in layer.notes if tick > song.length
        )

        tps = song.tempo_tps
        duration = song.length / tps if tps > 0 else 0.0

        return SongAnalysis(
            name=song.name,
            version=song.version,
            length=song.length,
            tempo_tps=tps,
            duration_seconds=duration,
            layer_count=song.layer_count,
            note_count=song.note_count,
            layers=[self._layer_info(index) for index in song.layers],
            instrument_usage=dict(sorted(usage.items())),
            key_range=(min(keys), max(keys)) if keys else None,
            dangling_instruments=dangling,
            notes_beyond_length=beyond,
            required_version=required_version(song),
            native_losses=downgrade_losses(song, song.version),
        )

    def _layer_info(self, index: int) -> LayerInfo:
        layer = self.song.layers[index]
        return LayerInfo(
            index=index,
            name=layer.name,
            is_locked=layer.is_locked,
            volume=layer.volume,
            panning=layer.panning,
            note_count=layer.note_count,
            first_tick=layer.first_tick,
            last_tick=layer.last_tick,
        )

    def instrument_name(self, instrument: int) -> str:
        """Resolve an instrument id to a display name."""
        song = self.song
        if song is not None and instrument >= song.vanilla_instrument_count:
            offset = instrument - song.vanilla_instrument_count
            if offset < song.custom_instrument_count:
                return song.custom_instruments[offset].name or f"Custom {offset}"
            return f"Unknown ({instrument})"
        if instrument < len(VANILLA_INSTRUMENTS):
            return VANILLA_INSTRUMENTS[instrument]
        return f"Vanilla {instrument}"
