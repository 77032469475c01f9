"""
Song analysis module.

Provides statistics and format-compatibility checks for decoded songs.
"""

from opennbs.analysis.song_analyzer import SongAnalyzer, SongAnalysis, LayerInfo, key_to_name

__all__ = [
    "SongAnalyzer",
    "SongAnalysis",
    "LayerInfo",
    "key_to_name",
]
