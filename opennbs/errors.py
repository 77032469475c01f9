"""
Exception types raised by the NBS codec.
"""


class NBSError(Exception):
    """Base class for every error raised by opennbs."""

    pass


class FormatError(NBSError):
    """Raised when the stream declares a format version that is not supported."""

    pass


class SizeLimitError(NBSError):
    """Raised when a length-prefixed string exceeds the safety cap."""

    pass


class InputError(NBSError):
    """Raised for unusable inputs: non-file paths and truncated streams."""

    pass
