from __future__ import annotations

import struct

from gpmeta.binary_reader import BinaryReader
from gp_builders import int_byte_string, int_string


def test_reads_little_endian_integers_in_sequence() -> None:
    reader = BinaryReader(struct.pack("<iIB", -2, 0xFFFFFFFE, 7))

    assert reader.read_int32() == -2
    assert reader.read_uint32() == 0xFFFFFFFE
    assert reader.read_byte() == 7
    assert reader.remaining == 0


def test_reads_past_end_return_zero_and_clamp_cursor() -> None:
    reader = BinaryReader(b"\x01\x02")

    assert reader.read_int32() == 0
    assert reader.position == 2
    assert reader.read_byte() == 0
    assert reader.read_uint32() == 0
    assert reader.position == 2


def test_read_bytes_returns_short_slice_at_end() -> None:
    reader = BinaryReader(b"abcdef")
    reader.skip(4)

    assert reader.read_bytes(10) == b"ef"
    assert reader.position == 6


def test_seek_and_skip_are_clamped_to_buffer() -> None:
    reader = BinaryReader(b"abcdef")

    reader.seek(100)
    assert reader.position == 6
    reader.skip(-100)
    assert reader.position == 0
    reader.seek(3)
    assert reader.read_bytes(1) == b"d"


def test_int_string_reads_length_prefixed_text() -> None:
    reader = BinaryReader(int_string("Verse") + b"\x09")

    assert reader.read_int_string() == "Verse"
    assert reader.read_byte() == 9


def test_int_string_with_oversized_length_skips_remaining_bytes() -> None:
    reader = BinaryReader(struct.pack("<i", 20000) + b"abc")

    assert reader.read_int_string() == ""
    assert reader.remaining == 0


def test_int_string_with_negative_length_skips_nothing() -> None:
    reader = BinaryReader(struct.pack("<i", -1) + b"\x05")

    assert reader.read_int_string() == ""
    assert reader.read_byte() == 5


def test_int_byte_string_skips_padding() -> None:
    reader = BinaryReader(int_byte_string("Title", padding=3) + b"\x2a")

    assert reader.read_int_byte_string() == "Title"
    assert reader.read_byte() == 0x2A


def test_int_byte_string_total_length_beyond_buffer_returns_empty_at_end() -> None:
    data = struct.pack("<i", 1000) + b"\x05hello"
    reader = BinaryReader(data)

    assert reader.read_int_byte_string() == ""
    assert reader.position == len(data)


def test_int_byte_string_inconsistent_lengths_skip_total_length() -> None:
    # actual length 5 does not fit in a total length of 3
    reader = BinaryReader(struct.pack("<i", 3) + b"\x05hello")

    assert reader.read_int_byte_string() == ""
    assert reader.position == 7


def test_int_byte_string_zero_actual_length_skips_body() -> None:
    reader = BinaryReader(struct.pack("<i", 4) + b"\x00abc" + b"\x01")

    assert reader.read_int_byte_string() == ""
    assert reader.read_byte() == 1


def test_int_byte_string_non_positive_total_returns_empty() -> None:
    reader = BinaryReader(struct.pack("<i", 0) + b"\x07")

    assert reader.read_int_byte_string() == ""
    assert reader.read_byte() == 7
