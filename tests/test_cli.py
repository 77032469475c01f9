"""Tests for the opennbs command line interface."""

import pytest
from typer.testing import CliRunner

from cli.app import app
from cli.display.hex_view import format_hex_line
from opennbs import decode, encode_bytes
from opennbs.formats.nbs.reader import FieldSpan
from opennbs.models import Version

runner = CliRunner()


class TestInfoCommand:
    """Test cases for `opennbs info`."""

    def test_info(self, sample_file):
        result = runner.invoke(app, ["info", str(sample_file)])
        assert result.exit_code == 0
        assert "Song Info" in result.output
        assert "Test Song" in result.output

    def test_info_full(self, sample_file):
        result = runner.invoke(app, ["info", str(sample_file), "--full"])
        assert result.exit_code == 0
        assert "Layers" in result.output

    def test_info_missing_file(self, tmp_path):
        result = runner.invoke(app, ["info", str(tmp_path / "missing.nbs")])
        assert result.exit_code == 1
        assert "Error" in result.output


class TestConvertCommand:
    """Test cases for `opennbs convert`."""

    def test_convert_downgrade(self, sample_file, tmp_path):
        output = tmp_path / "song_v3.nbs"
        result = runner.invoke(app, ["convert", str(sample_file), "-t", "3", "-o", str(output)])
        assert result.exit_code == 0
        assert "Conversion Limitations" in result.output
        assert decode(output).version == Version.V3

    def test_convert_default_output_name(self, sample_file):
        result = runner.invoke(app, ["convert", str(sample_file), "-t", "4"])
        assert result.exit_code == 0
        assert (sample_file.parent / "sample_v4.nbs").is_file()

    def test_convert_rejects_unknown_version(self, sample_file):
        result = runner.invoke(app, ["convert", str(sample_file), "-t", "9"])
        assert result.exit_code != 0


class TestValidateCommand:
    """Test cases for `opennbs validate`."""

    def test_valid_file(self, sample_file):
        result = runner.invoke(app, ["validate", str(sample_file)])
        assert result.exit_code == 0
        assert "VALID" in result.output

    def test_invalid_version(self, tmp_path):
        path = tmp_path / "bad.nbs"
        path.write_bytes(b"\x00\x00\x09")
        result = runner.invoke(app, ["validate", str(path)])
        assert result.exit_code == 1
        assert "INVALID" in result.output

    def test_trailing_data_warning_strict(self, sample_file):
        sample_file.write_bytes(sample_file.read_bytes() + b"\x00\x00")
        assert runner.invoke(app, ["validate", str(sample_file)]).exit_code == 0
        assert runner.invoke(app, ["validate", str(sample_file), "--strict"]).exit_code == 1

    def test_directory_rejected(self, tmp_path):
        result = runner.invoke(app, ["validate", str(tmp_path)])
        assert result.exit_code == 1


class TestOtherCommands:
    """Test cases for dump, layers and version."""

    def test_dump(self, sample_file):
        result = runner.invoke(app, ["dump", str(sample_file)])
        assert result.exit_code == 0
        assert "Note blocks start at" in result.output
        assert "note_blocks" in result.output
        assert "layers" in result.output

    def test_dump_truncated_song(self, sample_song, tmp_path):
        """Test that a file cut inside the layers still dumps its header."""
        data = encode_bytes(sample_song)
        path = tmp_path / "cut.nbs"
        path.write_bytes(data[:-12])
        result = runner.invoke(app, ["dump", str(path)])
        assert result.exit_code == 0
        assert "Warning" in result.output
        assert "Note blocks start at" in result.output

    def test_dump_undecodable(self, tmp_path):
        path = tmp_path / "bad.nbs"
        path.write_bytes(b"\x00\x00\x63")
        result = runner.invoke(app, ["dump", str(path)])
        assert result.exit_code == 1
        assert "undecodable" in result.output

    def test_layers(self, sample_file):
        result = runner.invoke(app, ["layers", str(sample_file)])
        assert result.exit_code == 0
        assert "Layers" in result.output

    @pytest.mark.parametrize("args", [["version"], ["--version"]])
    def test_version(self, args):
        result = runner.invoke(app, args)
        assert result.exit_code == 0
        assert "opennbs" in result.output


class TestHexView:
    """Test cases for the section-colored hex lines."""

    def test_section_tags_and_colors(self):
        sections = [FieldSpan("note_blocks", 4, 10, 1), FieldSpan("layers", 10, 20, 1)]
        line = format_hex_line(bytes(range(16)), 0, sections)
        assert "<- note_blocks, layers" in line
        assert "[green]04[/green]" in line
        assert "[magenta]0A[/magenta]" in line
        # Bytes before the first section are flagged
        assert "[red]00[/red]" in line

    def test_plain_line_without_sections(self):
        line = format_hex_line(b"AB", 0x20)
        assert "[dim]00000020[/dim]" in line
        assert "41 42" in line
        assert "<-" not in line
