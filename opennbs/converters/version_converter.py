"""
Version converter for Note Block Songs.

Re-encodes songs at another format version. Converting to an older
version is lossy: every field the target version cannot store comes back
with its default value. downgrade_losses() lists what a conversion will
drop so callers can warn before writing.
"""

from pathlib import Path
from typing import List, Optional, Union

from opennbs.codec import decode_bytes, encode_bytes
from opennbs.formats.nbs.reader import NBSReader
from opennbs.formats.nbs.writer import NBSWriter
from opennbs.models.song import DEFAULT_VANILLA_INSTRUMENT_COUNT, Song
from opennbs.models.version import Version
from opennbs.utils.binary_io import MAX_STRING_LENGTH

_BYTE_MAX = 0xFF
_SHORT_MAX = 0xFFFF


def _last_tick(song: Song) -> int:
    ticks = [layer.last_tick for layer in song.layers.values() if layer.notes]
    return max(ticks) if ticks else 0


def downgrade_losses(song: Song, target: Version) -> List[str]:
    """
    List the data lost when writing a song at a given version.

    Args:
        song: Song to check
        target: Version the song would be written at

    Returns:
        Human readable descriptions, empty if the conversion is lossless
    """
    losses: List[str] = []
    layers = list(song.layers.values())
    notes = [note for _, _, note in song.iter_notes()]

    if target < Version.V1:
        if song.vanilla_instrument_count != DEFAULT_VANILLA_INSTRUMENT_COUNT:
            losses.append(
                f"Vanilla instrument count {song.vanilla_instrument_count} resets to "
                f"{DEFAULT_VANILLA_INSTRUMENT_COUNT}"
            )
        if song.length == 0:
            losses.append("A Classic song of length 0 cannot be read back")

    if Version.CLASSIC < target < Version.V3:
        derived = _last_tick(song)
        if song.length != derived:
            losses.append(f"Song length {song.length} becomes {derived} (last note tick)")

    if target < Version.V2:
        panned = sum(1 for layer in layers if layer.panning != 100)
        if panned:
            losses.append(f"Panning on {panned} layer(s) resets to center")

    if target < Version.V4:
        locked = sum(1 for layer in layers if layer.is_locked)
        if locked:
            losses.append(f"Lock state on {locked} layer(s) is cleared")
        if song.looping or song.max_loop_count or song.loop_start_tick:
            losses.append("Loop settings (looping, max loop count, loop start) are cleared")
        extended = sum(1 for note in notes if note.has_extended_data)
        if extended:
            losses.append(f"Volume/panning/pitch on {extended} note(s) reset to defaults")

    beyond = sum(
        1 for layer in layers for tick in layer.notes if tick > song.length
    )
    if beyond:
        losses.append(f"{beyond} note(s) after the song length are dropped")

    if list(song.layers) != list(range(song.layer_count)):
        losses.append("Layer indices are not contiguous; notes on gapped layers are lost")

    oversized = [
        name
        for name in ("name", "author", "original_author", "description", "source_file")
        if len(getattr(song, name).encode("utf-8")) > MAX_STRING_LENGTH
    ]
    if oversized:
        losses.append(f"Text over {MAX_STRING_LENGTH} bytes cannot be read back: {', '.join(oversized)}")

    if (
        max(song.length, song.tempo, song.loop_start_tick, song.layer_count) > _SHORT_MAX
        or max(song.vanilla_instrument_count, song.custom_instrument_count) > _BYTE_MAX
        or any(note.instrument > _BYTE_MAX for note in notes)
    ):
        losses.append("Values wider than their field are truncated")

    return losses


def required_version(song: Song) -> Version:
    """
    Get the oldest version that stores a song without loss.

    Returns:
        Lowest Version with no downgrade losses, or the latest version
    """
    for version in Version:
        if not downgrade_losses(song, version):
            return version
    return Version.V5


def convert_version(song: Song, target: Version) -> Song:
    """
    Get a song as it decodes after being written at another version.

    Args:
        song: Source song
        target: Target version

    Returns:
        The re-decoded Song, tagged with the target version
    """
    return decode_bytes(encode_bytes(song, target))


class VersionConverter:
    """
    Converts .nbs files between format versions.

    Example:
        converter = VersionConverter(Version.V3)
        losses = converter.convert_file("song.nbs", "song_v3.nbs")
    """

    def __init__(self, target: Version):
        self.target = Version(target)

    def losses(self, song: Song) -> List[str]:
        return downgrade_losses(song, self.target)

    def convert(self, song: Song) -> Song:
        return convert_version(song, self.target)

    def convert_file(
        self, source: Union[str, Path], output: Optional[Union[str, Path]] = None
    ) -> List[str]:
        """
        Convert a file to the target version.

        Args:
            source: Input .nbs file
            output: Output path (defaults to overwriting the source)

        Returns:
            Losses incurred by the conversion
        """
        song = NBSReader.read(source)
        NBSWriter.write(song, output or source, self.target)
        return self.losses(song)


def convert_file(
    source: Union[str, Path], output: Union[str, Path], target: Version
) -> List[str]:
    """
    Convert an .nbs file to another version.

    Returns:
        Losses incurred by the conversion
    """
    return VersionConverter(target).convert_file(source, output)
