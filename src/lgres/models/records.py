"""RES archive record data classes."""

from dataclasses import dataclass

from lgres.errors import ResUnicodeError
from lgres.models.constants import DELETED_ID, ResourceFlags, ResourceType


@dataclass(frozen=True, slots=True)
class FileHeader:
    """128-byte header at offset 0. The signature is checked before construction."""
    comment: bytes            # raw 96 bytes, not NUL-terminated
    dir_header_offset: int

    def comment_text(self) -> str:
        """Decode the full 96-byte comment as UTF-8.

        Raises:
            ResUnicodeError: If the bytes are not valid UTF-8. `position` is
                the offset of the first invalid byte within the comment.
        """
        try:
            return self.comment.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ResUnicodeError(
                f"Comment is not valid UTF-8 at byte {exc.start}", exc.start
            ) from exc


@dataclass(frozen=True, slots=True)
class DirectoryHeader:
    """6-byte header preceding the directory entries."""
    num_entries: int
    data_offset: int          # start of the data segment


@dataclass(frozen=True, slots=True)
class DirectoryEntry:
    """10-byte directory entry describing one resource."""
    id: int
    uncompressed_len: int
    flags: ResourceFlags
    compressed_len: int       # bytes occupied in the data segment
    type: ResourceType

    @property
    def is_deleted(self) -> bool:
        return self.id == DELETED_ID

    @property
    def is_compressed(self) -> bool:
        return bool(self.flags & ResourceFlags.LZW)

    @property
    def is_compound(self) -> bool:
        return bool(self.flags & ResourceFlags.COMPOUND)

    @property
    def loads_on_open(self) -> bool:
        return bool(self.flags & ResourceFlags.LOAD_ON_OPEN)


@dataclass(frozen=True, slots=True)
class Resource:
    """A materialized resource: its metadata plus the raw payload bytes."""
    id: int
    type: ResourceType
    flags: ResourceFlags
    data: bytes

    def __len__(self) -> int:
        return len(self.data)
