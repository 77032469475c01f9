"""
Custom instrument data model.
"""

from dataclasses import dataclass

from opennbs.utils.validation import validate_key


@dataclass(frozen=True)
class Instrument:
    """
    A custom instrument defined by the song.

    Notes refer to custom instruments by id; any id at or above the song's
    vanilla instrument count is an offset into the custom instrument list.

    Attributes:
        name: Instrument name
        file: Sound file name, relative to the editor's sounds folder
        key: Base key of the sample (0-87, 45 = F#4)
        press_piano_key: Whether the editor animates the piano key
    """

    name: str
    file: str
    key: int = 45
    press_piano_key: bool = False

    def __post_init__(self):
        validate_key(self.key)
