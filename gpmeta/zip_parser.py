# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Minimal ZIP reader

Locates a single entry through the End of Central Directory Record
(EOCD), the Central Directory and the entry's Local File Header, and
returns its contents. Supports STORE (0) and DEFLATE (8) entries only;
multi-disk archives, encryption, ZIP64 and data descriptors are not
handled.

Copyright 2025 DNAi inc.
"""

import logging
import struct
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional

from gpmeta.compression import inflate
from gpmeta.exceptions import ContainerCorruptError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ZipEntry:
    """A Central Directory entry."""
    name: str
    compression_method: int
    compressed_size: int
    uncompressed_size: int
    local_header_offset: int


class ZIPParser:
    """
    Reader for entries of a ZIP archive held in memory.
    """

    LOCAL_FILE_SIGNATURE = b'PK\x03\x04'  # 0x04034b50
    CENTRAL_DIR_SIGNATURE = b'PK\x01\x02'  # 0x02014b50
    EOCD_SIGNATURE = b'PK\x05\x06'  # 0x06054b50

    EOCD_SIZE = 22
    CENTRAL_DIR_ENTRY_SIZE = 46
    LOCAL_HEADER_SIZE = 30
    # 22 bytes + 65535 bytes maximum comment
    EOCD_SEARCH_WINDOW = 65557

    METHOD_STORED = 0
    METHOD_DEFLATED = 8

    def __init__(self, file_path: Optional[str] = None, file_data: Optional[bytes] = None):
        """
        Initialize ZIP parser.

        Args:
            file_path: Path to ZIP file
            file_data: Raw file data
        """
        self.file_path = file_path
        self.file_data = bytes(file_data) if file_data is not None else None

    def _load(self) -> bytes:
        if self.file_data is None:
            if not self.file_path:
                return b''
            with open(self.file_path, 'rb') as f:
                self.file_data = f.read()
        return self.file_data

    def find_eocd(self) -> int:
        """
        Find End of Central Directory Record (EOCD) signature.

        The EOCD sits at the end of the archive, followed only by an
        optional comment, so only the last EOCD_SEARCH_WINDOW bytes
        are searched.

        Returns:
            Offset of EOCD signature, or -1 if not found
        """
        data = self._load()
        if len(data) < self.EOCD_SIZE:
            return -1

        search_start = max(0, len(data) - self.EOCD_SEARCH_WINDOW)
        # The signature must leave room for the fixed 22-byte record
        search_end = len(data) - self.EOCD_SIZE + len(self.EOCD_SIGNATURE)
        return data.rfind(self.EOCD_SIGNATURE, search_start, search_end)

    def read_end_of_central_directory(self) -> Optional[Dict[str, Any]]:
        """
        Parse the EOCD structure.

        EOCD structure (22 bytes minimum):
        - Signature: 4 bytes (0x06054b50)
        - Disk number: 2 bytes
        - Central directory disk: 2 bytes
        - Number of entries on this disk: 2 bytes
        - Total number of entries: 2 bytes
        - Central directory size: 4 bytes
        - Central directory offset: 4 bytes
        - Comment length: 2 bytes
        - Comment: variable length

        Returns:
            Dictionary of EOCD fields, or None if no EOCD was found
        """
        eocd_offset = self.find_eocd()
        if eocd_offset == -1:
            return None

        data = self._load()
        (disk_number, cd_disk, entries_on_disk, total_entries,
         cd_size, cd_offset, comment_length) = struct.unpack_from('<HHHHIIH', data, eocd_offset + 4)

        comment_start = eocd_offset + self.EOCD_SIZE
        comment = data[comment_start:comment_start + comment_length]

        return {
            'offset': eocd_offset,
            'disk_number': disk_number,
            'central_directory_disk': cd_disk,
            'entries_on_disk': entries_on_disk,
            'total_entries': total_entries,
            'central_directory_size': cd_size,
            'central_directory_offset': cd_offset,
            'comment': comment.decode('utf-8', errors='replace'),
        }

    def iter_central_directory(self) -> Iterator[ZipEntry]:
        """
        Walk the Central Directory entries in order.

        Stops at the first entry that is truncated or does not start
        with the Central Directory signature.
        """
        eocd = self.read_end_of_central_directory()
        if eocd is None:
            logger.error("ZIP EOCD not found")
            return

        data = self._load()
        pos = eocd['central_directory_offset']
        for _ in range(eocd['total_entries']):
            if pos + self.CENTRAL_DIR_ENTRY_SIZE > len(data):
                break
            if data[pos:pos + 4] != self.CENTRAL_DIR_SIGNATURE:
                break

            compression_method = struct.unpack_from('<H', data, pos + 10)[0]
            compressed_size, uncompressed_size = struct.unpack_from('<II', data, pos + 20)
            name_length, extra_length, comment_length = struct.unpack_from('<HHH', data, pos + 28)
            local_header_offset = struct.unpack_from('<I', data, pos + 42)[0]

            name_start = pos + self.CENTRAL_DIR_ENTRY_SIZE
            name = data[name_start:name_start + name_length].decode('utf-8', errors='replace')

            yield ZipEntry(
                name=name,
                compression_method=compression_method,
                compressed_size=compressed_size,
                uncompressed_size=uncompressed_size,
                local_header_offset=local_header_offset,
            )

            pos = name_start + name_length + extra_length + comment_length

    def list_entries(self) -> List[str]:
        return [entry.name for entry in self.iter_central_directory()]

    def _data_offset(self, entry: ZipEntry) -> int:
        # Local filename/extra lengths can differ from the central copies
        data = self._load()
        local_pos = entry.local_header_offset
        if local_pos + self.LOCAL_HEADER_SIZE > len(data):
            return -1
        if data[local_pos:local_pos + 4] != self.LOCAL_FILE_SIGNATURE:
            return -1
        name_length, extra_length = struct.unpack_from('<HH', data, local_pos + 26)
        return local_pos + self.LOCAL_HEADER_SIZE + name_length + extra_length

    def extract(self, name: str) -> Optional[bytes]:
        """
        Extract one entry by name.

        Args:
            name: Entry path inside the archive, e.g. 'Content/score.gpif'

        Returns:
            Entry contents, or None if not found or unreadable
        """
        for entry in self.iter_central_directory():
            if entry.name != name:
                continue

            data_start = self._data_offset(entry)
            if data_start == -1:
                logger.warning("Invalid local file header for %s at offset %d",
                               name, entry.local_header_offset)
                return None

            data = self._load()
            if entry.compression_method == self.METHOD_STORED:
                return data[data_start:data_start + entry.uncompressed_size]

            if entry.compression_method == self.METHOD_DEFLATED:
                compressed = data[data_start:data_start + entry.compressed_size]
                try:
                    return inflate(compressed)
                except ContainerCorruptError as e:
                    logger.warning("Failed to inflate %s: %s", name, e)
                    return None

            logger.warning("Unsupported ZIP compression method %d for %s",
                           entry.compression_method, name)
            return None

        return None
