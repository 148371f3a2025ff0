"""RES archive reader with on-demand, cached resource loading.

Archive layout:
  file header → directory header → directory entries → data segment

The directory stores each resource's length, never its offset. Resources sit
in the data segment back to back in directory order, so the offset of entry n
is the data offset plus the compressed lengths of entries 0..n-1. Deleted
entries (ID 0) still occupy their bytes and must be counted.
"""

from collections.abc import Callable
from pathlib import Path
from typing import BinaryIO

from lgres.config import ReaderConfig
from lgres.errors import ResIOError, ResourceNotFoundError, UnsupportedResourceError
from lgres.logging import get_logger
from lgres.models.constants import DELETED_ID, ResourceFlags
from lgres.models.records import DirectoryEntry, FileHeader, Resource
from lgres.parser.layout import (
    decode_directory_entry,
    decode_directory_header,
    decode_file_header,
    read_exact,
)


logger = get_logger()

# Resources stored this way cannot be read yet
_UNSUPPORTED_FLAGS = ResourceFlags.LZW | ResourceFlags.COMPOUND


def _check_id(resource_id: int) -> None:
    if resource_id == DELETED_ID:
        raise ValueError(
            "Resource ID 0 marks a deleted slot and cannot be looked up; "
            "use has_deleted_entries() instead"
        )


def _seek(source: BinaryIO, offset: int) -> None:
    try:
        source.seek(offset)
    except OSError as exc:
        raise ResIOError(f"Seek to offset {offset} failed: {exc}") from exc


class ResReader:
    """Reader for Looking Glass RES archives.

    Opening an archive reads the header and the full directory, then loads
    every non-deleted entry flagged LOAD_ON_OPEN. Other resources are read
    the first time they are requested and cached for the reader's lifetime.

    The reader moves the stream position on every uncached load, so one
    reader must not be shared between threads.

    Example:
        with ResReader.from_path("gamescr.res") as res:
            text = res.get(0x0868).data
    """

    def __init__(self, source: BinaryIO, config: ReaderConfig | None = None) -> None:
        """Parse the archive directory from a seekable binary stream.

        Raises:
            BadSignatureError: If the stream is not a RES archive.
            ResIOError: If the stream fails or is truncated.
            UnsupportedResourceError: If a preload entry is compressed or compound.
        """
        self._source = source
        self._config = config if config is not None else ReaderConfig()
        self._owns_source = False
        self._cache: dict[int, Resource] = {}

        _seek(source, 0)
        self._header: FileHeader = decode_file_header(source)

        _seek(source, self._header.dir_header_offset)
        dir_header = decode_directory_header(source)
        self._data_offset = dir_header.data_offset

        entries: list[DirectoryEntry] = []
        preload: list[DirectoryEntry] = []
        for _ in range(dir_header.num_entries):
            entry = decode_directory_entry(source)
            entries.append(entry)
            if not entry.is_deleted and entry.loads_on_open:
                preload.append(entry)
        self._directory: tuple[DirectoryEntry, ...] = tuple(entries)

        logger.debug(
            "Opened RES archive: %d entries, data segment at %d",
            len(self._directory), self._data_offset,
        )

        if self._config.preload_on_open:
            for entry in preload:
                logger.debug("Preloading resource %d", entry.id)
                self.load(entry.id)

    @classmethod
    def open(cls, source: BinaryIO, config: ReaderConfig | None = None) -> "ResReader":
        """Open a RES archive over a caller-owned stream."""
        return cls(source, config)

    @classmethod
    def from_path(cls, path: str | Path, config: ReaderConfig | None = None) -> "ResReader":
        """Open a RES archive file. The returned reader owns and closes the file."""
        f = open(path, "rb")
        try:
            reader = cls(f, config)
        except Exception:
            f.close()
            raise
        reader._owns_source = True
        return reader

    def close(self) -> None:
        """Close the underlying file if this reader opened it."""
        if self._owns_source:
            self._source.close()
            self._owns_source = False

    def __enter__(self) -> "ResReader":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return (
            f"<ResReader entries={len(self._directory)} "
            f"data_offset={self._data_offset} cached={sorted(self._cache)}>"
        )

    # --- Archive metadata ---

    @property
    def comment(self) -> bytes:
        """The raw 96-byte header comment."""
        return self._header.comment

    def comment_as_text(self) -> str:
        return self._header.comment_text()

    @property
    def directory(self) -> tuple[DirectoryEntry, ...]:
        """All directory entries in on-disk order, deleted slots included."""
        return self._directory

    @property
    def data_offset(self) -> int:
        return self._data_offset

    def offset_for_index(self, index: int) -> int:
        """Return the absolute offset of the resource at a directory index."""
        if index < 0 or index >= len(self._directory):
            raise IndexError(
                f"Directory index {index} out of range [0, {len(self._directory)})"
            )
        offset = self._data_offset
        for entry in self._directory[:index]:
            offset += entry.compressed_len
        return offset

    # --- Lookups ---

    def contains(self, resource_id: int) -> bool:
        _check_id(resource_id)
        return any(entry.id == resource_id for entry in self._directory)

    def has_deleted_entries(self) -> bool:
        return any(entry.is_deleted for entry in self._directory)

    def loaded(self, resource_id: int) -> Resource | None:
        """Return the cached resource, or None if it has not been loaded."""
        _check_id(resource_id)
        return self._cache.get(resource_id)

    def get(self, resource_id: int) -> Resource:
        """Return a resource, loading it first if needed."""
        return self.load(resource_id)

    def load(self, resource_id: int) -> Resource:
        """Load a resource into the cache and return it.

        Loading an already cached resource does no I/O.

        Raises:
            ResourceNotFoundError: If no directory entry has this ID.
            UnsupportedResourceError: If the entry is compressed or compound.
            ResIOError: If the stream fails or the data is truncated.
        """
        _check_id(resource_id)
        cached = self._cache.get(resource_id)
        if cached is not None:
            logger.debug("Resource %d served from cache", resource_id)
            return cached

        offset = self._data_offset
        for entry in self._directory:
            if entry.id == resource_id:
                return self._materialize(entry, offset)
            offset += entry.compressed_len

        raise ResourceNotFoundError(resource_id)

    def find(self, predicate: Callable[[DirectoryEntry], bool]) -> Resource:
        """Load and return the first resource whose entry matches `predicate`.

        Deleted entries are never passed to the predicate. When the matching
        entry repeats an ID seen earlier in the directory, its bytes are
        returned without being cached; the cache only ever holds the first
        entry for each ID.
        """
        offset = self._data_offset
        seen: set[int] = set()
        for entry in self._directory:
            if not entry.is_deleted and predicate(entry):
                if entry.id in seen:
                    return self._materialize(entry, offset, cache=False)
                cached = self._cache.get(entry.id)
                if cached is not None:
                    return cached
                return self._materialize(entry, offset)
            seen.add(entry.id)
            offset += entry.compressed_len

        raise ResourceNotFoundError(None, "No resource matches the given predicate")

    def _materialize(self, entry: DirectoryEntry, offset: int, cache: bool = True) -> Resource:
        if entry.flags & _UNSUPPORTED_FLAGS:
            raise UnsupportedResourceError(entry.id, int(entry.flags))

        logger.debug(
            "Loading resource %d (%s): %d bytes at offset %d",
            entry.id, entry.type.name, entry.uncompressed_len, offset,
        )
        _seek(self._source, offset)
        data = read_exact(self._source, entry.uncompressed_len)

        resource = Resource(id=entry.id, type=entry.type, flags=entry.flags, data=data)
        if cache:
            self._cache[entry.id] = resource
        return resource
