#!/usr/bin/env python3
"""
Example: Basic song analysis

Shows how to decode an .nbs file and print its statistics.
"""

import sys

sys.path.insert(0, "..")

from opennbs.analysis import SongAnalyzer


def main(path: str) -> None:
    analyzer = SongAnalyzer()
    analysis = analyzer.analyze_file(path)

    # Basic info
    print(f"Song Name: {analysis.name}")
    print(f"Format: {analysis.version.label}")
    print(f"Tempo: {analysis.tempo_tps:.2f} ticks/s")
    print(f"Length: {analysis.length} ticks ({analysis.duration_str})")
    print(f"Key Range: {analysis.key_range_str}")
    print()

    # Layers
    print("Layers:")
    for layer in analysis.layers:
        lock = " [locked]" if layer.is_locked else ""
        print(f"  {layer.index:3d} {layer.name or '-'}: {layer.note_count} notes{lock}")
    print()

    # Instruments
    print("Instrument usage:")
    for instrument, count in analysis.instrument_usage.items():
        print(f"  {analyzer.instrument_name(instrument)}: {count}")
    print()

    print(f"Oldest lossless version: {analysis.required_version.label}")


if __name__ == "__main__":
    main(sys.argv[1] if len(sys.argv) > 1 else "song.nbs")
