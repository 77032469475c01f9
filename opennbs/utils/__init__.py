"""Utility functions for opennbs."""

from opennbs.utils.validation import (
    ValidationError,
    validate_key,
    validate_panning,
    validate_pitch,
    validate_volume,
)

__all__ = [
    "ValidationError",
    "validate_key",
    "validate_volume",
    "validate_panning",
    "validate_pitch",
]
