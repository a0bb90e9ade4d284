from __future__ import annotations

import io
import struct
import zipfile

from gpmeta.core import parse_gp_header
from gpmeta.gp7_parser import GP7Parser
from gpmeta.header_info import empty_result
from gpmeta.zip_parser import ZIPParser
from gp_builders import GPIF_DOCUMENT, build_zip

SCORE = "Content/score.gpif"
GPIF_BYTES = GPIF_DOCUMENT.encode("utf-8")


def _gp7_archive(method: int, **kwargs) -> bytes:
    return build_zip(
        [
            ("VERSION", b"7.0", 0),
            ("meta.json", b"{}", 0),
            (SCORE, GPIF_BYTES, method),
            ("Content/BinaryStylesheet", b"\x00" * 16, 0),
        ],
        **kwargs,
    )


def test_extract_stored_entry() -> None:
    assert ZIPParser(file_data=_gp7_archive(0)).extract(SCORE) == GPIF_BYTES


def test_extract_deflated_entry() -> None:
    assert ZIPParser(file_data=_gp7_archive(8)).extract(SCORE) == GPIF_BYTES


def test_stored_and_deflated_archives_parse_identically() -> None:
    stored = parse_gp_header(_gp7_archive(0))
    deflated = parse_gp_header(_gp7_archive(8))

    assert stored == deflated
    assert stored.title == "Song A"
    assert stored.artist == "Band B"
    assert stored.album == "Album C"
    assert stored.tempo == 96
    assert stored.track_names == ("Steel Guitar", "Bass")
    assert stored.version == "GP7+"


def test_archive_written_by_zipfile_module_is_readable() -> None:
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as archive:
        archive.writestr("VERSION", "7.0")
        archive.writestr(SCORE, GPIF_DOCUMENT)

    info = parse_gp_header(buffer.getvalue())

    assert info.title == "Song A"
    assert info.track_count == 2


def test_local_header_extra_field_differs_from_central_directory() -> None:
    data = _gp7_archive(8, local_extra=b"\x55\x54\x05\x00\x01\x00\x00\x00\x00")

    assert ZIPParser(file_data=data).extract(SCORE) == GPIF_BYTES


def test_archive_comment_does_not_hide_eocd() -> None:
    data = _gp7_archive(0, comment=b"created by a test")
    parser = ZIPParser(file_data=data)

    eocd = parser.read_end_of_central_directory()

    assert eocd["total_entries"] == 4
    assert eocd["comment"] == "created by a test"
    assert parser.extract(SCORE) == GPIF_BYTES


def test_list_entries_in_central_directory_order() -> None:
    names = ZIPParser(file_data=_gp7_archive(0)).list_entries()

    assert names == ["VERSION", "meta.json", SCORE, "Content/BinaryStylesheet"]


def test_missing_entry_returns_none() -> None:
    data = build_zip([("VERSION", b"7.0", 0), ("Content/other.xml", b"<x/>", 0)])

    assert ZIPParser(file_data=data).extract(SCORE) is None


def test_missing_score_yields_gp7_sentinel() -> None:
    data = build_zip([("VERSION", b"7.0", 0), ("Content/other.xml", b"<x/>" * 10, 0)])

    assert parse_gp_header(data) == empty_result("GP7+")


def test_no_eocd_in_search_window_is_not_found() -> None:
    early_eocd = struct.pack("<4sHHHHIIH", b"PK\x05\x06", 0, 0, 1, 1, 46, 0, 0)
    data = b"PK\x03\x04" + b"\x00" * 26 + early_eocd + b"\x00" * 70000
    parser = ZIPParser(file_data=data)

    assert parser.find_eocd() == -1
    assert parser.extract(SCORE) is None
    assert GP7Parser(file_data=data).parse() == empty_result("GP7+")


def test_unsupported_compression_method_returns_none() -> None:
    data = build_zip([(SCORE, GPIF_BYTES, 12)])

    assert ZIPParser(file_data=data).extract(SCORE) is None


def test_corrupt_central_directory_stops_the_walk() -> None:
    data = bytearray(_gp7_archive(0))
    cd_offset = ZIPParser(file_data=bytes(data)).read_end_of_central_directory()["central_directory_offset"]
    data[cd_offset:cd_offset + 4] = b"XXXX"

    parser = ZIPParser(file_data=bytes(data))

    assert parser.list_entries() == []
    assert parser.extract(SCORE) is None


def test_truncated_archive_without_eocd_returns_none() -> None:
    data = _gp7_archive(8)[:-10]

    assert ZIPParser(file_data=data).extract(SCORE) is None


def test_parser_reads_from_file_path(tmp_path) -> None:
    path = tmp_path / "song.gp"
    path.write_bytes(_gp7_archive(8))

    assert ZIPParser(file_path=str(path)).extract(SCORE) == GPIF_BYTES
