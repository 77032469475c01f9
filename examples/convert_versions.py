#!/usr/bin/env python3
"""
Example: Writing a song for older editors

Builds a song in memory, then writes it at every format version and
shows what each downgrade drops.
"""

import sys
from pathlib import Path

sys.path.insert(0, "..")

import opennbs
from opennbs import Layer, Note, Song, Version
from opennbs.converters import downgrade_losses


def build_song() -> Song:
    melody = {tick: Note(instrument=0, key=45 + tick % 12, volume=80) for tick in range(0, 32, 4)}
    bass = {tick: Note(instrument=1, key=33) for tick in range(0, 32, 8)}
    return Song(
        name="Example",
        author="opennbs",
        length=31,
        tempo=1000,
        looping=True,
        layers={
            0: Layer(name="Melody", notes=melody),
            1: Layer(name="Bass", panning=60, notes=bass),
        },
    )


def main(output_dir: str = "out") -> None:
    song = build_song()
    out = Path(output_dir)

    for version in Version:
        path = out / f"example_v{version.as_int}.nbs"
        opennbs.encode(song, path, version)

        print(f"{version.label}: {path.stat().st_size} bytes")
        for loss in downgrade_losses(song, version):
            print(f"  - {loss}")


if __name__ == "__main__":
    main(*sys.argv[1:])
