"""Tests for version conversion and song analysis."""

import pytest

from opennbs import decode, encode
from opennbs.analysis import SongAnalyzer, key_to_name
from opennbs.converters import (
    VersionConverter,
    convert_file,
    convert_version,
    downgrade_losses,
    required_version,
)
from opennbs.models import Layer, Note, Song, Version


class TestDowngradeLosses:
    """Test cases for loss reporting."""

    def test_no_losses_at_native_version(self, sample_song):
        assert downgrade_losses(sample_song, Version.V5) == []
        assert downgrade_losses(sample_song, Version.V4) == []

    def test_v3_losses(self, sample_song):
        losses = downgrade_losses(sample_song, Version.V3)
        text = "\n".join(losses)
        assert "Loop settings" in text
        assert "Lock state on 1 layer" in text
        assert "1 note(s)" in text
        assert "Panning" not in text

    def test_classic_losses(self, sample_song):
        text = "\n".join(downgrade_losses(sample_song, Version.CLASSIC))
        assert "Vanilla instrument count 10" in text
        assert "Panning on 1 layer" in text

    def test_v2_length_change_reported(self):
        song = Song(length=20, layers={0: Layer(notes={5: Note(0)})})
        text = "\n".join(downgrade_losses(song, Version.V2))
        assert "Song length 20 becomes 5" in text

    def test_notes_beyond_length_reported(self):
        song = Song(length=2, layers={0: Layer(notes={4: Note(0)})})
        assert any("after the song length" in loss for loss in downgrade_losses(song, Version.V5))

    def test_gapped_layers_reported(self):
        song = Song(layers={0: Layer(), 2: Layer()})
        assert any("not contiguous" in loss for loss in downgrade_losses(song, Version.V5))


class TestRequiredVersion:
    """Test cases for the oldest lossless version."""

    def test_full_song_needs_v4(self, sample_song):
        assert required_version(sample_song) == Version.V4

    def test_simple_song_fits_classic(self):
        song = Song(length=3, layers={0: Layer(notes={3: Note(0)})})
        assert required_version(song) == Version.CLASSIC

    def test_zero_length_song_needs_v1(self):
        song = Song(length=0, layers={0: Layer(notes={0: Note(0)})})
        assert required_version(song) == Version.V1

    def test_layer_panning_needs_v2(self):
        song = Song(length=1, layers={0: Layer(panning=50, notes={1: Note(0)})})
        assert required_version(song) == Version.V2

    def test_explicit_length_needs_v3(self):
        song = Song(length=8, vanilla_instrument_count=20, layers={0: Layer(notes={1: Note(0)})})
        assert required_version(song) == Version.V3


class TestConvertVersion:
    """Test cases for song conversion."""

    def test_convert_matches_losses(self, sample_song):
        converted = convert_version(sample_song, Version.V3)
        assert converted.version == Version.V3
        assert converted.looping is False
        assert converted.layers[0].notes[0] == Note(instrument=1, key=46)
        assert converted.layers[0].panning == 150

    def test_upgrade_is_lossless(self, sample_song):
        old = convert_version(sample_song, Version.V2)
        assert convert_version(old, Version.V5) == old.with_version(Version.V5)

    def test_convert_file(self, sample_file, tmp_path):
        output = tmp_path / "out" / "song_v1.nbs"
        losses = convert_file(sample_file, output, Version.V1)
        assert decode(output).version == Version.V1
        assert losses

    def test_converter_in_place(self, tmp_path):
        path = tmp_path / "song.nbs"
        encode(Song(name="in place", length=1), path)
        assert VersionConverter(Version.V3).convert_file(path) == []
        assert decode(path).version == Version.V3


class TestSongAnalyzer:
    """Test cases for song statistics."""

    def test_analysis(self, sample_song):
        analyzer = SongAnalyzer()
        analysis = analyzer.analyze(sample_song)

        assert analysis.note_count == 2
        assert analysis.layer_count == 2
        assert analysis.instrument_usage == {1: 1, 10: 1}
        assert analysis.key_range == (45, 46)
        assert analysis.dangling_instruments == []
        assert analysis.required_version == Version.V4
        assert analysis.native_losses == []
        assert analysis.duration_seconds == pytest.approx(2.0)
        assert analysis.duration_str == "0:02"

    def test_layer_info(self, sample_song):
        analysis = SongAnalyzer().analyze(sample_song)
        first, second = analysis.layers
        assert first.is_locked and first.note_count == 1
        assert (second.first_tick, second.last_tick) == (10, 10)

    def test_instrument_names(self, sample_song):
        analyzer = SongAnalyzer()
        analyzer.analyze(sample_song)
        assert analyzer.instrument_name(0) == "Harp"
        assert analyzer.instrument_name(10) == "Test Inst"
        assert analyzer.instrument_name(12) == "Unknown (12)"

    def test_dangling_instruments(self):
        song = Song(layers={0: Layer(notes={0: Note(instrument=40)})})
        assert SongAnalyzer().analyze(song).dangling_instruments == [40]

    def test_zero_tempo_duration(self):
        assert SongAnalyzer().analyze(Song(tempo=0, length=10)).duration_seconds == 0.0

    @pytest.mark.parametrize(
        "key,name", [(0, "A0"), (39, "C4"), (45, "F#4"), (87, "C8"), (88, "?88")]
    )
    def test_key_names(self, key, name):
        assert key_to_name(key) == name
