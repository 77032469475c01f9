"""
Note data model.
"""

from dataclasses import dataclass

from opennbs.utils.validation import (
    validate_key,
    validate_non_negative,
    validate_panning,
    validate_pitch,
    validate_volume,
)

DEFAULT_KEY = 45  # F#4
DEFAULT_VOLUME = 100
DEFAULT_PANNING = 100  # Center
DEFAULT_PITCH = 0


@dataclass(frozen=True)
class Note:
    """
    A single note block.

    Volume, panning and pitch were added in version 4; older files
    decode with the defaults.

    Attributes:
        instrument: Instrument id (vanilla below the song's vanilla count,
            custom offset otherwise)
        key: Piano key (0-87)
        volume: Velocity percentage (0-100)
        panning: Stereo position (0-200, 100 = center)
        pitch: Fine pitch in cents (-1200 to 1200)
    """

    instrument: int
    key: int = DEFAULT_KEY
    volume: int = DEFAULT_VOLUME
    panning: int = DEFAULT_PANNING
    pitch: int = DEFAULT_PITCH

    def __post_init__(self):
        validate_non_negative(self.instrument, "Instrument")
        validate_key(self.key)
        validate_volume(self.volume)
        validate_panning(self.panning)
        validate_pitch(self.pitch)

    @property
    def has_extended_data(self) -> bool:
        """Check if this note uses fields that need version 4 or later."""
        return (
            self.volume != DEFAULT_VOLUME
            or self.panning != DEFAULT_PANNING
            or self.pitch != DEFAULT_PITCH
        )
