"""NBS format handlers."""

from opennbs.formats.nbs.reader import NBSReader, NBSHeader, FieldSpan
from opennbs.formats.nbs.writer import NBSWriter

__all__ = ["NBSReader", "NBSWriter", "NBSHeader", "FieldSpan"]
