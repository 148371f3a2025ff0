"""Fixed-size RES record decoders.

Each decoder reads exactly one record's worth of bytes from a stream and then
decodes it field by field. The stream is assumed to be positioned at the first
byte of the record; nothing here seeks.

Layout (all integers little-endian):
  File header       sig[16] comment[96] reserved[12] dir_header_offset:u32
  Directory header  num_entries:u16 data_offset:u32
  Directory entry   id:u16 uncompressed_len:u24 flags:u8 compressed_len:u24 type:u8
"""

from typing import BinaryIO

from lgres.errors import BadSignatureError, ResIOError
from lgres.models.constants import (
    COMMENT_SIZE,
    DIRECTORY_ENTRY_SIZE,
    DIRECTORY_HEADER_SIZE,
    FILE_HEADER_SIZE,
    RESERVED_SIZE,
    SIGNATURE,
    SIGNATURE_SIZE,
    ResourceFlags,
    ResourceType,
)
from lgres.models.records import DirectoryEntry, DirectoryHeader, FileHeader
from lgres.parser.binary_reader import BinaryReader


def read_exact(source: BinaryIO, size: int) -> bytes:
    """Read exactly `size` bytes from `source`.

    Raw streams may return fewer bytes than asked before the end, so reads
    repeat until `size` bytes arrive or a read returns nothing.

    Raises:
        ResIOError: If the stream raises or ends before `size` bytes.
    """
    chunks: list[bytes] = []
    got = 0
    while got < size:
        try:
            chunk = source.read(size - got)
        except OSError as exc:
            raise ResIOError(f"Read of {size} bytes failed: {exc}") from exc
        if not chunk:
            raise ResIOError(f"Unexpected end of stream: expected {size} bytes, got {got}")
        chunks.append(chunk)
        got += len(chunk)
    return b"".join(chunks)


def decode_file_header(source: BinaryIO) -> FileHeader:
    """Read and validate the 128-byte file header.

    Raises:
        ResIOError: On a short or failed read.
        BadSignatureError: If the first 16 bytes are not the RES signature.
    """
    reader = BinaryReader(read_exact(source, FILE_HEADER_SIZE))
    signature = reader.bytes(SIGNATURE_SIZE)
    if signature != SIGNATURE:
        raise BadSignatureError(f"Invalid RES file signature: {signature!r}")
    comment = reader.bytes(COMMENT_SIZE)
    reader.skip(RESERVED_SIZE)
    return FileHeader(comment=comment, dir_header_offset=reader.uint32())


def decode_directory_header(source: BinaryIO) -> DirectoryHeader:
    reader = BinaryReader(read_exact(source, DIRECTORY_HEADER_SIZE))
    return DirectoryHeader(num_entries=reader.uint16(), data_offset=reader.uint32())


def decode_directory_entry(source: BinaryIO) -> DirectoryEntry:
    """Read one 10-byte directory entry.

    Unknown flag bits are dropped and unknown type codes become UNKNOWN;
    neither is an error.
    """
    reader = BinaryReader(read_exact(source, DIRECTORY_ENTRY_SIZE))
    return DirectoryEntry(
        id=reader.uint16(),
        uncompressed_len=reader.uint24(),
        flags=ResourceFlags.from_byte(reader.uint8()),
        compressed_len=reader.uint24(),
        type=ResourceType.from_code(reader.uint8()),
    )
