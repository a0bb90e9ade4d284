# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Sequential little-endian reader for Guitar Pro binary files

Reads never raise. Reading past the end of the buffer returns zero
(or a short slice) and leaves the cursor at the end, so a truncated
file degrades to partial metadata instead of failing.

Copyright 2025 DNAi inc.
"""

import struct

from gpmeta.string_decoder import decode_string


class BinaryReader:
    """
    Bounds-checked cursor over an in-memory byte buffer.

    Also implements the two string layouts used by GP3/GP4/GP5:
    - int string: int32 length + bytes
    - int-byte string: int32 total length + byte length + bytes + padding
    """

    MAX_STRING_LENGTH = 10000

    def __init__(self, data: bytes):
        """
        Initialize reader.

        Args:
            data: Complete file data
        """
        self._data = bytes(data)
        self._pos = 0

    @property
    def position(self) -> int:
        return self._pos

    @property
    def remaining(self) -> int:
        return max(0, len(self._data) - self._pos)

    def __len__(self) -> int:
        return len(self._data)

    def seek(self, offset: int) -> None:
        self._pos = min(max(0, offset), len(self._data))

    def skip(self, count: int) -> None:
        self.seek(self._pos + count)

    def _read_struct(self, fmt: str, size: int) -> int:
        if self.remaining < size:
            self._pos = len(self._data)
            return 0
        value = struct.unpack_from(fmt, self._data, self._pos)[0]
        self._pos += size
        return value

    def read_byte(self) -> int:
        return self._read_struct('<B', 1)

    def read_int32(self) -> int:
        return self._read_struct('<i', 4)

    def read_uint32(self) -> int:
        return self._read_struct('<I', 4)

    def read_bytes(self, count: int) -> bytes:
        """Read up to count bytes; fewer are returned at end of buffer."""
        end = min(self._pos + max(0, count), len(self._data))
        result = self._data[self._pos:end]
        self._pos = end
        return result

    def read_int_string(self) -> str:
        """
        Read an int32 length-prefixed string.

        A length outside (0, MAX_STRING_LENGTH] or beyond the end of
        the buffer is treated as corrupt: the advertised bytes are
        skipped (bounded by what remains) and an empty string returned.
        """
        length = self.read_int32()
        if length <= 0 or length > self.MAX_STRING_LENGTH or self.remaining < length:
            if length > 0:
                self.skip(min(length, self.remaining))
            return ''
        return decode_string(self.read_bytes(length))

    def read_int_byte_string(self) -> str:
        """
        Read a double-prefixed string.

        Layout: int32 total length, one byte with the actual string
        length, the string bytes, then (total - 1 - actual) bytes of
        padding. Any inconsistency skips the total length (bounded by
        what remains) and returns an empty string.
        """
        total_length = self.read_int32()
        if total_length <= 0:
            return ''
        if total_length > self.MAX_STRING_LENGTH or total_length > self.remaining:
            self.skip(min(total_length, self.remaining))
            return ''

        string_length = self.read_byte()
        if string_length == 0 or string_length > total_length - 1:
            self.skip(total_length - 1)
            return ''

        text = decode_string(self.read_bytes(string_length))
        padding = total_length - 1 - string_length
        if padding > 0:
            self.skip(padding)
        return text
