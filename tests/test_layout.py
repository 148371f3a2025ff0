"""Tests for the fixed-size record decoders."""

import io
import struct

import pytest

from lgres.errors import BadSignatureError, ResIOError, ResUnicodeError
from lgres.models.constants import ResourceFlags, ResourceType
from lgres.parser.layout import (
    decode_directory_entry,
    decode_directory_header,
    decode_file_header,
    read_exact,
)
from res_builder import TrickleStream, build_entry, build_header


class _FailingStream(io.RawIOBase):
    def readable(self):
        return True

    def read(self, size=-1):
        raise OSError("device not ready")


# --- read_exact ---

def test_read_exact_returns_requested_bytes():
    assert read_exact(io.BytesIO(b"abcdef"), 4) == b"abcd"


def test_read_exact_short_read():
    with pytest.raises(ResIOError, match="expected 4 bytes, got 2"):
        read_exact(io.BytesIO(b"ab"), 4)


def test_read_exact_joins_partial_reads():
    stream = TrickleStream(bytes(range(30)), chunk=7)
    assert read_exact(stream, 30) == bytes(range(30))
    assert stream.tell() == 30


def test_read_exact_partial_reads_then_end():
    with pytest.raises(ResIOError, match="expected 20 bytes, got 12"):
        read_exact(TrickleStream(b"x" * 12, chunk=5), 20)


def test_read_exact_zero_bytes():
    assert read_exact(io.BytesIO(b""), 0) == b""


def test_read_exact_wraps_stream_errors():
    with pytest.raises(ResIOError, match="device not ready") as info:
        read_exact(_FailingStream(), 4)
    assert isinstance(info.value.__cause__, OSError)


# --- File header ---

def test_decode_file_header():
    raw = build_header(0x1234, comment=b"Level data")
    header = decode_file_header(io.BytesIO(raw))
    assert header.dir_header_offset == 0x1234
    assert len(header.comment) == 96
    assert header.comment.startswith(b"Level data\x00")


def test_file_header_consumes_exactly_128_bytes():
    stream = io.BytesIO(build_header(0) + b"tail")
    decode_file_header(stream)
    assert stream.tell() == 128


def test_comment_keeps_embedded_nul_bytes():
    comment = b"a\x00b" + b"\xFF" * 93
    header = decode_file_header(io.BytesIO(build_header(0, comment=comment)))
    assert header.comment == comment


def test_comment_text():
    header = decode_file_header(io.BytesIO(build_header(0, comment=b"hello")))
    assert header.comment_text() == "hello" + "\x00" * 91


def test_comment_text_invalid_utf8_reports_position():
    header = decode_file_header(io.BytesIO(build_header(0, comment=b"abc\xFFdef")))
    with pytest.raises(ResUnicodeError) as info:
        header.comment_text()
    assert info.value.position == 3


def test_bad_signature():
    raw = build_header(0, signature=b"LG Res File v1\r\n")
    with pytest.raises(BadSignatureError):
        decode_file_header(io.BytesIO(raw))


def test_signature_must_match_line_ending():
    raw = build_header(0, signature=b"LG Res File v2\n\x00")
    with pytest.raises(BadSignatureError):
        decode_file_header(io.BytesIO(raw))


def test_truncated_file_header():
    with pytest.raises(ResIOError):
        decode_file_header(io.BytesIO(build_header(0)[:100]))


# --- Directory header ---

def test_decode_directory_header():
    header = decode_directory_header(io.BytesIO(struct.pack("<HI", 3, 0x80)))
    assert header.num_entries == 3
    assert header.data_offset == 0x80


def test_truncated_directory_header():
    with pytest.raises(ResIOError):
        decode_directory_header(io.BytesIO(b"\x01\x00\x80"))


# --- Directory entry ---

def test_decode_directory_entry():
    raw = build_entry(0x0868, 0x012345, 0x08, 0x00ABCD, 2)
    entry = decode_directory_entry(io.BytesIO(raw))
    assert entry.id == 0x0868
    assert entry.uncompressed_len == 0x012345
    assert entry.compressed_len == 0x00ABCD
    assert entry.flags == ResourceFlags.LOAD_ON_OPEN
    assert entry.type is ResourceType.IMAGE
    assert entry.loads_on_open
    assert not entry.is_deleted


def test_entry_field_order_on_disk():
    raw = bytes([0x01, 0x02, 0x03, 0x04, 0x05, 0x01, 0x06, 0x07, 0x08, 0x07])
    entry = decode_directory_entry(io.BytesIO(raw))
    assert entry.id == 0x0201
    assert entry.uncompressed_len == 0x050403
    assert entry.flags == ResourceFlags.LZW
    assert entry.compressed_len == 0x080706
    assert entry.type is ResourceType.VOC


def test_unknown_flag_bits_are_dropped():
    raw = build_entry(1, 0, 0xE0 | 0x10 | 0x01, 0, 1)
    entry = decode_directory_entry(io.BytesIO(raw))
    assert entry.flags == ResourceFlags.CD_SPOOF | ResourceFlags.LZW
    assert int(entry.flags) == 0x11


@pytest.mark.parametrize("code", [19, 47, 64, 200, 255])
def test_unmapped_type_codes_become_unknown(code):
    entry = decode_directory_entry(io.BytesIO(build_entry(1, 0, 0, 0, code)))
    assert entry.type is ResourceType.UNKNOWN


@pytest.mark.parametrize("code, expected", [
    (1, ResourceType.STRING),
    (15, ResourceType.OBJECT_3D),
    (18, ResourceType.RECTANGLE),
    (48, ResourceType.APP_DEFINED_0),
    (63, ResourceType.APP_DEFINED_15),
])
def test_known_type_codes(code, expected):
    entry = decode_directory_entry(io.BytesIO(build_entry(1, 0, 0, 0, code)))
    assert entry.type is expected


def test_deleted_entry():
    entry = decode_directory_entry(io.BytesIO(build_entry(0, 5, 0, 5, 1)))
    assert entry.is_deleted


def test_compressed_and_compound_accessors():
    lzw = decode_directory_entry(io.BytesIO(build_entry(1, 9, 0x01, 5, 1)))
    compound = decode_directory_entry(io.BytesIO(build_entry(2, 9, 0x02, 9, 1)))
    assert lzw.is_compressed and not lzw.is_compound
    assert compound.is_compound and not compound.is_compressed


def test_truncated_directory_entry():
    with pytest.raises(ResIOError):
        decode_directory_entry(io.BytesIO(build_entry(1, 0, 0, 0, 1)[:9]))
