"""
Data validation utilities for Note Block Song data.
"""

from opennbs.errors import NBSError

# Standard 88-key piano range
KEY_RANGE = (0, 87)
VOLUME_RANGE = (0, 100)
PANNING_RANGE = (0, 200)
PITCH_RANGE = (-1200, 1200)


class ValidationError(NBSError):
    """Raised when song data validation fails."""

    pass


def validate_range(value: int, low: int, high: int, name: str = "value") -> None:
    """
    Validate that an integer lies within an inclusive range.

    Args:
        value: The value to validate
        low: Lowest accepted value
        high: Highest accepted value
        name: Name of the value for error messages

    Raises:
        ValidationError: If value is out of range
    """
    if not low <= value <= high:
        raise ValidationError(f"{name} must be {low}-{high}, got {value}")


def validate_key(key: int) -> None:
    """
    Validate a piano key (0-87).

    Raises:
        ValidationError: If key is out of range
    """
    validate_range(key, *KEY_RANGE, name="Key")


def validate_volume(volume: int) -> None:
    """
    Validate a volume percentage (0-100).

    Raises:
        ValidationError: If volume is out of range
    """
    validate_range(volume, *VOLUME_RANGE, name="Volume")


def validate_panning(panning: int) -> None:
    """
    Validate stereo panning (0-200, 100 is center).

    Raises:
        ValidationError: If panning is out of range
    """
    validate_range(panning, *PANNING_RANGE, name="Panning")


def validate_pitch(pitch: int) -> None:
    """
    Validate fine pitch in cents (-1200 to 1200).

    Raises:
        ValidationError: If pitch is out of range
    """
    validate_range(pitch, *PITCH_RANGE, name="Pitch")


def validate_non_negative(value: int, name: str = "value") -> None:
    """Validate that a count or tick index is not negative."""
    if value < 0:
        raise ValidationError(f"{name} must not be negative, got {value}")
