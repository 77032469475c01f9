"""
NBS format version registry.
"""

from enum import IntEnum
from typing import Optional


class Version(IntEnum):
    """
    Revisions of the Note Block Song format.

    CLASSIC files have no version header at all; every later revision
    starts with a zero short followed by the version byte. Versions are
    ordered by their integer value, and that order decides which fields
    are present in a file.
    """

    CLASSIC = 0
    V1 = 1
    V2 = 2
    V3 = 3
    V4 = 4
    V5 = 5

    @property
    def as_int(self) -> int:
        """Integer value stored in the file header."""
        return int(self.value)

    @classmethod
    def from_int(cls, value: int) -> Optional["Version"]:
        """
        Get the Version for a header value.

        Args:
            value: Version number read from a file

        Returns:
            Matching Version, or None if the value is not a known revision
        """
        return _BY_INT.get(value)

    @property
    def label(self) -> str:
        """Human readable name."""
        return "Classic" if self is Version.CLASSIC else f"Version {self.as_int}"


_BY_INT = {version.as_int: version for version in Version}

LATEST_VERSION = Version.V5
