# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Deflate decompression shared by the BCFZ container and ZIP entries.

Copyright 2025 DNAi inc.
"""

import zlib

from gpmeta.exceptions import ContainerCorruptError


# Raw deflate (no header) first, then zlib-wrapped deflate
INFLATE_WBITS = (-zlib.MAX_WBITS, zlib.MAX_WBITS)


def inflate(data: bytes) -> bytes:
    """
    Decompress a deflate stream.

    Truncated streams return whatever could be decoded.

    Args:
        data: Compressed bytes

    Returns:
        Decompressed bytes (never empty)

    Raises:
        ContainerCorruptError: If no attempt produced any output
    """
    for wbits in INFLATE_WBITS:
        try:
            decompressor = zlib.decompressobj(wbits)
            result = decompressor.decompress(data) + decompressor.flush()
        except zlib.error:
            continue
        if result:
            return result

    raise ContainerCorruptError(
        f"Deflate decompression failed for {len(data)} bytes with all formats"
    )
