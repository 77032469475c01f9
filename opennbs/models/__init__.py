"""Data models for Note Block Song representation."""

from opennbs.models.version import Version, LATEST_VERSION
from opennbs.models.instrument import Instrument
from opennbs.models.note import Note
from opennbs.models.layer import Layer
from opennbs.models.song import Song

__all__ = [
    "Version",
    "LATEST_VERSION",
    "Instrument",
    "Note",
    "Layer",
    "Song",
]
