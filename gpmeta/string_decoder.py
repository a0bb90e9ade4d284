# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
String decoding for Guitar Pro binary headers

Strings in GP3/GP4/GP5 files are stored in whatever code page the
authoring system used: UTF-8, GBK on Chinese systems, or a Western
single-byte page. The encoding is not recorded, so it is guessed by
trying decoders in a fixed order.

Copyright 2025 DNAi inc.
"""

from typing import Callable, Optional, Tuple


def _decode_utf8(data: bytes) -> Optional[str]:
    try:
        text = data.decode('utf-8')
    except UnicodeDecodeError:
        return None
    if '\ufffd' in text:
        return None
    return text


def _decode_gbk(data: bytes) -> Optional[str]:
    try:
        text = data.decode('gbk')
    except (UnicodeDecodeError, LookupError):
        return None
    return text or None


def _decode_latin1(data: bytes) -> Optional[str]:
    return data.decode('latin-1')


# Evaluated in order, first non-None result wins. Latin-1 maps every
# byte so the chain always produces text.
DECODE_STRATEGIES: Tuple[Tuple[str, Callable[[bytes], Optional[str]]], ...] = (
    ('utf-8', _decode_utf8),
    ('gbk', _decode_gbk),
    ('latin-1', _decode_latin1),
)


def _strip_trailing_nulls(data: bytes) -> bytes:
    return bytes(data).rstrip(b'\x00')


def _run_strategies(data: bytes) -> Tuple[str, str]:
    trimmed = _strip_trailing_nulls(data)
    if not trimmed:
        return '', ''

    for name, strategy in DECODE_STRATEGIES:
        text = strategy(trimmed)
        if text is not None:
            return name, text

    return 'latin-1', trimmed.decode('latin-1')


def decode_string(data: bytes) -> str:
    """
    Decode a byte span from a Guitar Pro header into text.

    Trailing null bytes are removed first. Then strict UTF-8, GBK and
    finally Latin-1 are tried in that order.

    Args:
        data: Raw string bytes

    Returns:
        Decoded text (empty string for empty or all-null input)
    """
    return _run_strategies(data)[1]


def detect_string_encoding(data: bytes) -> str:
    """
    Report which decoder decode_string() would use for the data.

    Returns:
        'utf-8', 'gbk' or 'latin-1', or '' for empty input
    """
    return _run_strategies(data)[0]
