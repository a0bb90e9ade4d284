# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Guitar Pro header record

The single record produced by every parse path, plus the empty
sentinel returned when parsing cannot proceed.

Copyright 2025 DNAi inc.
"""

from typing import Any, Dict, Tuple
from dataclasses import dataclass


DEFAULT_TEMPO = 120
MIN_TEMPO = 1
MAX_TEMPO = 1000


def clamp_tempo(value: Any) -> int:
    """
    Return the tempo as an int if it lies in [MIN_TEMPO, MAX_TEMPO].

    Args:
        value: Raw tempo value read from the file

    Returns:
        The tempo, or DEFAULT_TEMPO when out of range or not numeric
    """
    try:
        tempo = int(value)
    except (TypeError, ValueError, OverflowError):
        return DEFAULT_TEMPO
    if MIN_TEMPO <= tempo <= MAX_TEMPO:
        return tempo
    return DEFAULT_TEMPO


@dataclass(frozen=True)
class GpHeaderInfo:
    """Metadata extracted from a Guitar Pro file header."""
    title: str = ""
    artist: str = ""
    album: str = ""
    tempo: int = DEFAULT_TEMPO
    track_names: Tuple[str, ...] = ()
    version: str = ""

    @property
    def track_count(self) -> int:
        return len(self.track_names)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to the record shape consumed by the metadata store.

        Returns:
            Dictionary with title, artist, album, tempo, trackCount,
            trackNames and version keys
        """
        return {
            'title': self.title,
            'artist': self.artist,
            'album': self.album,
            'tempo': self.tempo,
            'trackCount': self.track_count,
            'trackNames': list(self.track_names),
            'version': self.version,
        }


def empty_result(version: str = "") -> GpHeaderInfo:
    """Sentinel record with every field at its default."""
    return GpHeaderInfo(version=version)
