# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
GP3 / GP4 / GP5 header parser

Reads the song information block at the start of the classic binary
Guitar Pro formats. Only the header is decoded; the track and measure
body that follows is not.

Copyright 2025 DNAi inc.
"""

import logging
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, Optional

from gpmeta.binary_reader import BinaryReader
from gpmeta.header_info import GpHeaderInfo, clamp_tempo, DEFAULT_TEMPO
from gpmeta.string_decoder import decode_string

logger = logging.getLogger(__name__)


class Generation(Enum):
    """Binary format generation, derived from the version string."""
    GP3 = "gp3"
    GP4 = "gp4"
    GP5 = "gp5"


def classify_version(version: str) -> Generation:
    """
    Classify a version string such as 'FICHIER GUITAR PRO v5.00'.

    The version string is the only discriminator in this layout.
    """
    if '5.' in version:
        return Generation.GP5
    if '4.' in version:
        return Generation.GP4
    return Generation.GP3


class GP345Parser:
    """
    Parser for GP3, GP4 and GP5 file headers.

    Layout:
    - Version: 1 byte length + 30 byte slot
    - Info block: title, subtitle, artist, album, [words (GP5)], music,
      copyright, tab author, instructions (int-byte strings)
    - Comments: int32 count + int-byte strings
    - GP4/GP5: lyrics block; GP5: page setup and tempo name
    - Tempo: int32
    """

    VERSION_SLOT_SIZE = 30
    MAX_COMMENTS = 100
    LYRICS_LINES = 5
    PAGE_SETUP_STRINGS = 11

    def __init__(self, file_path: Optional[str] = None, file_data: Optional[bytes] = None):
        """
        Initialize GP3/4/5 parser.

        Args:
            file_path: Path to .gp3/.gp4/.gp5 file
            file_data: Raw file data
        """
        if file_path:
            self.file_path = Path(file_path)
            self.file_data = None
        elif file_data is not None:
            self.file_data = file_data
            self.file_path = None
        else:
            raise ValueError("Either file_path or file_data must be provided")

    def parse(self) -> GpHeaderInfo:
        """
        Parse the header.

        Returns:
            GpHeaderInfo with title, artist, album, tempo and version.
            Track names are never filled for these formats.
        """
        if self.file_data is None:
            with open(self.file_path, 'rb') as f:
                self.file_data = f.read()

        reader = BinaryReader(self.file_data)

        version_length = reader.read_byte()
        version_slot = reader.read_bytes(self.VERSION_SLOT_SIZE)
        version = decode_string(version_slot[:version_length])
        generation = classify_version(version)
        logger.debug("Classified %r as %s", version, generation.value)

        title = reader.read_int_byte_string()
        reader.read_int_byte_string()  # subtitle
        artist = reader.read_int_byte_string()
        album = reader.read_int_byte_string()

        tempo = DEFAULT_TEMPO
        try:
            self._skip_info_tail(reader, generation)
            self._skip_comments(reader)
            tempo = self._TEMPO_READERS[generation](self, reader)
        except Exception:
            # title/artist/album are already captured
            logger.debug("Stopped reading %s header at offset %d",
                         generation.value, reader.position, exc_info=True)

        return GpHeaderInfo(
            title=title,
            artist=artist,
            album=album,
            tempo=clamp_tempo(tempo),
            version=version,
        )

    def _skip_info_tail(self, reader: BinaryReader, generation: Generation) -> None:
        if generation is Generation.GP5:
            reader.read_int_byte_string()  # words
        reader.read_int_byte_string()  # music
        reader.read_int_byte_string()  # copyright
        reader.read_int_byte_string()  # tab author
        reader.read_int_byte_string()  # instructions

    def _skip_comments(self, reader: BinaryReader) -> None:
        count = reader.read_int32()
        for _ in range(min(count, self.MAX_COMMENTS)):
            reader.read_int_byte_string()

    def _skip_lyrics(self, reader: BinaryReader) -> None:
        reader.read_int32()  # lyrics track
        for _ in range(self.LYRICS_LINES):
            reader.read_int32()  # start bar
            reader.read_int_string()

    def _read_gp3_tempo(self, reader: BinaryReader) -> int:
        return reader.read_int32()

    def _read_gp4_tempo(self, reader: BinaryReader) -> int:
        self._skip_lyrics(reader)
        return reader.read_int32()

    def _read_gp5_tempo(self, reader: BinaryReader) -> int:
        self._skip_lyrics(reader)
        for _ in range(self.PAGE_SETUP_STRINGS):
            reader.read_int_byte_string()
        reader.read_int_byte_string()  # tempo name, e.g. "Moderate"
        return reader.read_int32()

    _TEMPO_READERS: Dict[Generation, Callable[['GP345Parser', BinaryReader], int]] = {
        Generation.GP3: _read_gp3_tempo,
        Generation.GP4: _read_gp4_tempo,
        Generation.GP5: _read_gp5_tempo,
    }
