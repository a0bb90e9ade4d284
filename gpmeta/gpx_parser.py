# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
GPX (Guitar Pro 6) container parser

GPX files are BCFS containers, usually stored compressed as BCFZ:
- 4 bytes: "BCFZ"
- 4 bytes: declared decompressed size (uint32 LE)
- Rest: deflate-compressed BCFS container

The score.gpif document is located inside the container by text search.

Copyright 2025 DNAi inc.
"""

import logging
import struct
from pathlib import Path
from typing import Optional

from gpmeta.compression import inflate
from gpmeta.exceptions import ContainerCorruptError
from gpmeta.gpif_parser import GPIFParser
from gpmeta.header_info import GpHeaderInfo, empty_result

logger = logging.getLogger(__name__)

BCFZ_SIGNATURE = b'BCFZ'
BCFS_SIGNATURE = b'BCFS'
BCFZ_HEADER_SIZE = 8
GPX_VERSION = "GPX"


def declared_bcfz_size(data: bytes) -> int:
    """Decompressed size stored in bytes 4-7 of a BCFZ header."""
    if len(data) < BCFZ_HEADER_SIZE:
        return 0
    return struct.unpack_from('<I', data, 4)[0]


def decompress_bcfz(data: bytes) -> bytes:
    """
    Decompress a BCFZ container into BCFS data.

    Args:
        data: Complete BCFZ file data

    Returns:
        Decompressed container bytes

    Raises:
        ContainerCorruptError: If data is not BCFZ or cannot be inflated
    """
    if data[:4] != BCFZ_SIGNATURE:
        raise ContainerCorruptError("Not a BCFZ container")

    result = inflate(data[BCFZ_HEADER_SIZE:])

    declared = declared_bcfz_size(data)
    if declared != len(result):
        logger.debug("BCFZ declared size %d, decompressed %d bytes", declared, len(result))
    return result


def find_xml_in_container(data: bytes) -> Optional[str]:
    """
    Locate the score.gpif XML inside BCFS container data.

    Tried in order:
    - <Score>...</Score>
    - <GPIF>...</GPIF> (to end of data when unterminated)
    - <?xml ... through </GPIF>

    Args:
        data: Decompressed container bytes

    Returns:
        XML text, or None if no document was found
    """
    text = bytes(data).decode('utf-8', errors='replace')

    score_start = text.find('<Score>')
    if score_start != -1:
        score_end = text.find('</Score>', score_start)
        if score_end != -1:
            return text[score_start:score_end + len('</Score>')]

    gpif_start = text.find('<GPIF>')
    if gpif_start != -1:
        gpif_end = text.find('</GPIF>', gpif_start)
        if gpif_end != -1:
            return text[gpif_start:gpif_end + len('</GPIF>')]
        return text[gpif_start:]

    xml_start = text.find('<?xml')
    if xml_start != -1:
        gpif_end = text.find('</GPIF>', xml_start)
        if gpif_end != -1:
            return text[xml_start:gpif_end + len('</GPIF>')]

    return None


class GPXParser:
    """
    Parser for GPX (BCFZ / BCFS) files.

    Always returns a record tagged "GPX"; on failure it is the empty one.
    """

    def __init__(self, file_path: Optional[str] = None, file_data: Optional[bytes] = None):
        """
        Initialize GPX parser.

        Args:
            file_path: Path to .gpx file
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
        Parse GPX metadata.

        Returns:
            GpHeaderInfo with version "GPX"
        """
        if self.file_data is None:
            with open(self.file_path, 'rb') as f:
                self.file_data = f.read()
        data = bytes(self.file_data)

        magic = data[:4]
        if magic == BCFZ_SIGNATURE:
            try:
                container = decompress_bcfz(data)
            except ContainerCorruptError as e:
                logger.error("BCFZ decompression failed: %s (size=%d)", e, len(data))
                return empty_result(GPX_VERSION)
        elif magic == BCFS_SIGNATURE:
            container = data
        else:
            return empty_result(GPX_VERSION)

        xml = find_xml_in_container(container)
        if not xml:
            logger.error("score.gpif XML not found in container (size=%d, magic=%s)",
                         len(container), magic.decode('latin-1'))
            return empty_result(GPX_VERSION)

        return GPIFParser(xml).parse(version=GPX_VERSION)
