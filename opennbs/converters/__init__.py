"""
Version converters for Note Block Song files.

Example:
    from opennbs.converters import convert_file, downgrade_losses

    # Rewrite a version 5 song as a version 3 file
    losses = convert_file("song.nbs", "song_v3.nbs", Version.V3)
"""

from opennbs.converters.version_converter import (
    VersionConverter,
    convert_file,
    convert_version,
    downgrade_losses,
    required_version,
)

__all__ = [
    "VersionConverter",
    "convert_file",
    "convert_version",
    "downgrade_losses",
    "required_version",
]
