from __future__ import annotations

import logging
import struct

import pytest

from gpmeta.compression import inflate
from gpmeta.core import parse_gp_header
from gpmeta.exceptions import ContainerCorruptError
from gpmeta.gpx_parser import (
    GPXParser,
    declared_bcfz_size,
    decompress_bcfz,
    find_xml_in_container,
)
from gpmeta.header_info import empty_result
from gp_builders import GPIF_DOCUMENT, build_bcfz, raw_deflate

MINIMAL_GPIF = b"<GPIF><Score><Title>Song A</Title><Artist>Band B</Artist></Score></GPIF>"


def test_bcfz_round_trip_with_raw_deflate() -> None:
    info = parse_gp_header(build_bcfz(MINIMAL_GPIF))

    assert info.title == "Song A"
    assert info.artist == "Band B"
    assert info.album == ""
    assert info.tempo == 120
    assert info.version == "GPX"


def test_bcfz_round_trip_with_zlib_wrapper() -> None:
    info = parse_gp_header(build_bcfz(MINIMAL_GPIF, zlib_wrapped=True))

    assert info.title == "Song A"
    assert info.version == "GPX"


def test_bcfs_container_is_used_without_decompression() -> None:
    data = b"BCFS" + b"\x00" * 28 + b"\x01\x02binary" + MINIMAL_GPIF + b"\xff\xfe"

    info = GPXParser(file_data=data).parse()

    assert info.title == "Song A"
    assert info.artist == "Band B"
    assert info.version == "GPX"


def test_corrupt_bcfz_yields_gpx_sentinel(caplog) -> None:
    data = b"BCFZ" + struct.pack("<I", 1024) + b"\xff" * 40

    with caplog.at_level(logging.ERROR, logger="gpmeta.gpx_parser"):
        info = parse_gp_header(data)

    assert info == empty_result("GPX")
    assert "BCFZ decompression failed" in caplog.text


def test_container_without_xml_yields_gpx_sentinel() -> None:
    data = build_bcfz(b"no markup in here at all, just some bytes " * 4)

    assert parse_gp_header(data) == empty_result("GPX")


def test_decompress_bcfz_requires_bcfz_tag() -> None:
    with pytest.raises(ContainerCorruptError):
        decompress_bcfz(b"BCFS" + b"\x00" * 40)


def test_declared_bcfz_size_is_informational() -> None:
    data = b"BCFZ" + struct.pack("<I", 9999) + raw_deflate(MINIMAL_GPIF)

    assert declared_bcfz_size(data) == 9999
    assert decompress_bcfz(data) == MINIMAL_GPIF


def test_inflate_raises_when_nothing_decodes() -> None:
    with pytest.raises(ContainerCorruptError):
        inflate(b"")


def test_inflate_returns_partial_output_for_truncated_stream() -> None:
    payload = GPIF_DOCUMENT.encode("utf-8") * 20
    truncated = raw_deflate(payload)[:-20]

    result = inflate(truncated)

    assert result
    assert payload.startswith(result)


def test_find_xml_prefers_score_block() -> None:
    text = b"junk<GPIF><Score><Title>X</Title></Score><Tracks/></GPIF>junk"

    assert find_xml_in_container(text) == "<Score><Title>X</Title></Score>"


def test_find_xml_falls_back_to_unterminated_gpif() -> None:
    text = b"\x00\x01<GPIF><Title>Cut</Title><Tra"

    assert find_xml_in_container(text) == "<GPIF><Title>Cut</Title><Tra"


def test_find_xml_falls_back_to_xml_declaration() -> None:
    text = b'\x00<?xml version="1.0"?><GPIF version="7"><Title>Y</Title></GPIF>\x00'

    assert find_xml_in_container(text) == '<?xml version="1.0"?><GPIF version="7"><Title>Y</Title></GPIF>'


def test_find_xml_tolerates_invalid_utf8() -> None:
    text = b"\xff\xfe\x80<Score><Title>Z</Title></Score>"

    assert find_xml_in_container(text) == "<Score><Title>Z</Title></Score>"


def test_find_xml_returns_none_without_markup() -> None:
    assert find_xml_in_container(b"\x00" * 64) is None
