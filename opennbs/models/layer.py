"""
Layer data model.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional

from opennbs.models.note import Note
from opennbs.utils.validation import validate_non_negative, validate_panning, validate_volume


@dataclass(frozen=True)
class Layer:
    """
    A horizontal row of the song editor.

    Attributes:
        name: Layer name
        is_locked: Whether the layer is locked (version 4+)
        volume: Layer volume (0-100)
        panning: Layer panning (0-200, 100 = center, version 2+)
        notes: Notes on this layer keyed by tick, ascending (read-only)
    """

    name: str = ""
    is_locked: bool = False
    volume: int = 100
    panning: int = 100
    notes: Mapping[int, Note] = field(default_factory=dict)

    def __post_init__(self):
        validate_volume(self.volume)
        validate_panning(self.panning)
        for tick in self.notes:
            validate_non_negative(tick, "Tick")
        # The writer walks ticks in order, so keep them sorted
        object.__setattr__(self, "notes", MappingProxyType(dict(sorted(self.notes.items()))))

    def __hash__(self) -> int:
        return hash(
            (self.name, self.is_locked, self.volume, self.panning, tuple(self.notes.items()))
        )

    @property
    def note_count(self) -> int:
        return len(self.notes)

    @property
    def first_tick(self) -> Optional[int]:
        return next(iter(self.notes), None)

    @property
    def last_tick(self) -> Optional[int]:
        return max(self.notes) if self.notes else None
