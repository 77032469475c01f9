"""Test configuration and fixtures."""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from opennbs.models import Instrument, Layer, Note, Song, Version


@pytest.fixture
def sample_song():
    """Return a version 5 song using every field of the format."""
    return Song(
        name="Test Song",
        version=Version.V5,
        author="Test Author",
        original_author="Test Original Author",
        description="Test Description",
        length=10,
        tempo=500,
        vanilla_instrument_count=10,
        auto_saving=True,
        auto_saving_duration=5,
        time_signature=3,
        minutes_spent=100,
        left_clicks=200,
        right_clicks=300,
        note_blocks_added=50,
        note_blocks_removed=10,
        source_file="test.mid",
        looping=True,
        max_loop_count=10,
        loop_start_tick=1,
        layers={
            0: Layer(
                name="Layer 1",
                is_locked=True,
                volume=50,
                panning=150,
                notes={0: Note(instrument=1, key=46, volume=90, panning=200, pitch=600)},
            ),
            1: Layer(name="Layer 2", notes={10: Note(instrument=10)}),
        },
        custom_instruments=[
            Instrument(name="Test Inst", file="test.ogg", key=45, press_piano_key=True)
        ],
    )


@pytest.fixture
def sample_file(tmp_path, sample_song):
    """Return path to the sample song written as a version 5 file."""
    from opennbs.formats.nbs.writer import NBSWriter

    path = tmp_path / "sample.nbs"
    NBSWriter.write(sample_song, path)
    return path
