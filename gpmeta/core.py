# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Core gpmeta API

parse_gp_header() routes file data to the GP3/4/5, GPX or GP7+ parser
from its leading bytes. GPMeta wraps it for files on disk.

Copyright 2025 DNAi inc.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

from gpmeta.exceptions import MetadataReadError
from gpmeta.format_detector import FormatDetector
from gpmeta.gp345_parser import GP345Parser
from gpmeta.gp7_parser import GP7Parser
from gpmeta.gpx_parser import GPXParser
from gpmeta.header_info import GpHeaderInfo

logger = logging.getLogger(__name__)

BytesLike = Union[bytes, bytearray, memoryview]

PARSERS = {
    'GP7': GP7Parser,
    'GPX': GPXParser,
    'GP345': GP345Parser,
}


def parse_gp_header(data: BytesLike) -> GpHeaderInfo:
    """
    Parse Guitar Pro header metadata.

    Supports GP3/GP4/GP5, GPX (GP6) and GP7+ files. Only metadata is
    read (title, artist, album, tempo, tracks); the score is not.

    Never raises: unrecognized or corrupt input yields the empty
    record, possibly tagged with the version of the path that failed.

    Args:
        data: Complete file data

    Returns:
        GpHeaderInfo
    """
    if not isinstance(data, (bytes, bytearray, memoryview)):
        logger.error("Unsupported input type %s", type(data).__name__)
        return GpHeaderInfo()
    data = bytes(data)

    container = FormatDetector.detect_container(data)
    if container is None:
        return GpHeaderInfo()

    try:
        logger.debug("Parsing %d bytes as %s", len(data), container)
        return PARSERS[container](file_data=data).parse()
    except Exception:
        logger.exception("gp header parse failed (first bytes: %s)", data[:16].hex(' '))
        return GpHeaderInfo()


class GPMeta:
    """
    Read Guitar Pro metadata from a file path or in-memory data.

    Example:
        >>> with GPMeta('song.gp5') as gp:
        ...     print(gp.read().title)
    """

    def __init__(self, file_path: Optional[Union[str, Path]] = None,
                 file_data: Optional[BytesLike] = None):
        """
        Initialize.

        Args:
            file_path: Path to a Guitar Pro file
            file_data: Raw file data (used instead of reading file_path)

        Raises:
            MetadataReadError: If neither argument is given or the
                path does not exist
        """
        if file_path is None and file_data is None:
            raise MetadataReadError("Either file_path or file_data must be provided")

        self.file_path = Path(file_path) if file_path is not None else None
        self.file_data = bytes(file_data) if file_data is not None else None
        self._info: Optional[GpHeaderInfo] = None

        if self.file_data is None and not self.file_path.is_file():
            raise MetadataReadError(f"File not found: {self.file_path}")

    def __enter__(self) -> 'GPMeta':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if self.file_path is not None:
            self.file_data = None

    def _read_file_data(self) -> bytes:
        if self.file_data is None:
            try:
                with open(self.file_path, 'rb') as f:
                    self.file_data = f.read()
            except OSError as e:
                raise MetadataReadError(f"Cannot read {self.file_path}: {e}") from e
        if not self.file_data:
            raise MetadataReadError(f"Empty file: {self.file_path or '<data>'}")
        return self.file_data

    def read(self) -> GpHeaderInfo:
        """
        Parse the file (once) and return its header record.

        Raises:
            MetadataReadError: If the file cannot be read or is empty
        """
        if self._info is None:
            self._info = parse_gp_header(self._read_file_data())
        return self._info

    @property
    def format(self) -> Optional[str]:
        """Detected format name (GP3, GP4, GP5, GPX or GP7)."""
        return FormatDetector.detect_format(
            str(self.file_path) if self.file_path else None,
            self._read_file_data(),
        )

    def get_all_metadata(self) -> Dict[str, Any]:
        """
        Get all metadata as group-prefixed tags.

        Returns:
            Dictionary such as {'GP:Title': ..., 'File:FileSize': ...}
        """
        info = self.read()
        metadata: Dict[str, Any] = {}

        if self.file_path is not None:
            metadata['File:FileName'] = self.file_path.name
        metadata['File:FileSize'] = len(self._read_file_data())
        file_type = self.format
        if file_type:
            metadata['File:FileType'] = file_type

        metadata['GP:Title'] = info.title
        metadata['GP:Artist'] = info.artist
        metadata['GP:Album'] = info.album
        metadata['GP:Tempo'] = info.tempo
        metadata['GP:TrackCount'] = info.track_count
        metadata['GP:TrackNames'] = list(info.track_names)
        metadata['GP:Version'] = info.version
        return metadata
