# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Guitar Pro format detector

Detects the Guitar Pro format generation from file signatures and
extensions.

Copyright 2025 DNAi inc.
"""

from typing import Optional, Dict
from pathlib import Path

from gpmeta.gp345_parser import GP345Parser, classify_version
from gpmeta.string_decoder import decode_string


class FormatDetector:
    """
    Detects Guitar Pro formats from file signatures and extensions.

    Container kinds returned by detect_container():
    - GP7: ZIP archive (.gp)
    - GPX: BCFZ / BCFS container (.gpx)
    - GP345: classic binary layout (.gp3, .gp4, .gp5)
    """

    # Smallest input that can hold a version string or magic number
    MIN_HEADER_SIZE = 32

    # Format signatures (magic numbers)
    FORMAT_SIGNATURES: Dict[bytes, str] = {
        b'PK\x03\x04': 'GP7',
        b'BCFZ': 'GPX',
        b'BCFS': 'GPX',
    }

    # Extension to format mapping
    EXTENSION_FORMATS: Dict[str, str] = {
        '.gp3': 'GP3',
        '.gp4': 'GP4',
        '.gp5': 'GP5',
        '.gpx': 'GPX',
        '.gp': 'GP7',
    }

    @classmethod
    def detect_container(cls, file_data: bytes) -> Optional[str]:
        """
        Detect which parse path handles the data.

        Args:
            file_data: Complete file data

        Returns:
            'GP7', 'GPX' or 'GP345', or None if the data is too short
        """
        if file_data is None or len(file_data) < cls.MIN_HEADER_SIZE:
            return None

        magic = bytes(file_data[:4])
        return cls.FORMAT_SIGNATURES.get(magic, 'GP345')

    @classmethod
    def detect_format(cls, file_path: Optional[str] = None, file_data: Optional[bytes] = None) -> Optional[str]:
        """
        Detect file format from file path and/or data.

        The extension is checked first. For the binary layout the
        generation is then read from the version string.

        Args:
            file_path: Path to file
            file_data: File data (at least the first 32 bytes)

        Returns:
            'GP3', 'GP4', 'GP5', 'GPX', 'GP7' or None if not detected
        """
        if file_path:
            ext = Path(file_path).suffix.lower()
            if ext in cls.EXTENSION_FORMATS:
                return cls.EXTENSION_FORMATS[ext]

        container = cls.detect_container(file_data) if file_data else None
        if container == 'GP345':
            length = min(file_data[0], GP345Parser.VERSION_SLOT_SIZE)
            version = decode_string(bytes(file_data[1:1 + length]))
            return classify_version(version).name
        return container

    @classmethod
    def is_guitar_pro_file(cls, file_name: str) -> bool:
        """
        Check if a file name has a Guitar Pro extension.

        Args:
            file_name: File name or path

        Returns:
            True for .gp3, .gp4, .gp5, .gpx and .gp files
        """
        return Path(str(file_name)).suffix.lower() in cls.EXTENSION_FORMATS
