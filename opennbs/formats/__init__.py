"""Format handlers for Note Block Song files."""

from opennbs.formats.nbs import NBSReader, NBSWriter

__all__ = ["NBSReader", "NBSWriter"]
