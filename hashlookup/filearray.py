"""Index entries and a file of fixed-size entries with an in-memory cache for its head."""

from __future__ import annotations

import functools
import os
from collections.abc import Iterator
from dataclasses import dataclass

from .progressbar import ProgressBar

HASH_SIZE = 8
OFFSET_SIZE = 6
INDEX_SIZE = HASH_SIZE + OFFSET_SIZE

_OFFSET_LIMIT = 1 << (8 * OFFSET_SIZE)


@functools.total_ordering
@dataclass(frozen=True, eq=False)
class IndexEntry:
    """The first 64 bits of a word's hash and the word's offset in the wordlist.

    Entries compare and hash by their hash bytes only.
    """

    hash: bytes = bytes(HASH_SIZE)
    offset: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "hash", bytes(self.hash))
        if len(self.hash) != HASH_SIZE:
            raise ValueError(f"An index hash must be {HASH_SIZE} bytes long!")
        if not 0 <= self.offset < _OFFSET_LIMIT:
            raise ValueError(f"An index offset must fit into {OFFSET_SIZE} bytes!")

    @classmethod
    def from_hash(cls, hash_value, offset: int = 0) -> IndexEntry:
        """Build an entry from a full hash (truncated or zero-padded) and an offset."""
        prefix = bytes(hash_value)[:HASH_SIZE].ljust(HASH_SIZE, b"\0")
        return cls(prefix, int(offset) % _OFFSET_LIMIT)

    @classmethod
    def from_bytes(cls, data: bytes) -> IndexEntry:
        """Decode the on-disk form: hash bytes then a little-endian 48-bit offset."""
        if len(data) != INDEX_SIZE:
            raise ValueError(f"An index entry must be {INDEX_SIZE} bytes long!")
        return cls(bytes(data[:HASH_SIZE]), int.from_bytes(data[HASH_SIZE:], "little"))

    def to_bytes(self) -> bytes:
        return self.hash + self.offset.to_bytes(OFFSET_SIZE, "little")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, IndexEntry):
            return NotImplemented
        return self.hash == other.hash

    def __lt__(self, other: IndexEntry) -> bool:
        if not isinstance(other, IndexEntry):
            return NotImplemented
        return self.hash < other.hash

    def __hash__(self) -> int:
        return hash(self.hash)


def index_file_size(path: str | os.PathLike) -> int:
    """Size of an index file in bytes."""
    return os.path.getsize(path)


def index_entry_count(path: str | os.PathLike) -> int:
    """Number of whole entries in an index file."""
    return index_file_size(path) // INDEX_SIZE


class FileArray:
    """Random access to the entries of an index file.

    The first ``cache_size`` entries can be held in memory. With ``auto_load``
    the cache is filled on opening and written back on closing.
    """

    def __init__(
        self,
        path: str | os.PathLike,
        cache_size: int = 0,
        progress_bar: ProgressBar | None = None,
        auto_load: bool = True,
    ) -> None:
        try:
            self._file = open(path, "r+b")
        except FileNotFoundError:
            raise FileNotFoundError(f'File "{os.fspath(path)}" does not exist!') from None
        self.file_size = self._file.seek(0, os.SEEK_END)
        self._size = self.file_size // INDEX_SIZE
        if self._size * INDEX_SIZE != self.file_size:
            self._file.close()
            raise ValueError(
                f"The file size needs to be divisible by {INDEX_SIZE}!\n"
                f'File size of "{os.fspath(path)}" is {self.file_size}!'
            )
        self.cache_size = max(0, min(cache_size, self._size))
        self._cache = [IndexEntry()] * self.cache_size
        self._progress_bar = progress_bar
        self._auto_load = auto_load
        self._closed = False
        if auto_load:
            self.load_cache()

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[IndexEntry]:
        return (self.read(i) for i in range(self._size))

    def _check(self, index: int) -> None:
        if not 0 <= index < self._size:
            raise IndexError(f"index {index} out of range for {self._size} entries")

    def read(self, index: int) -> IndexEntry:
        """Return the entry at ``index``."""
        self._check(index)
        if index < self.cache_size:
            return self._cache[index]
        self._file.seek(INDEX_SIZE * index)
        return IndexEntry.from_bytes(self._file.read(INDEX_SIZE))

    def write(self, index: int, entry: IndexEntry) -> None:
        """Store ``entry`` at ``index``."""
        self._check(index)
        if index < self.cache_size:
            self._cache[index] = entry
            return
        self._file.seek(INDEX_SIZE * index)
        self._file.write(entry.to_bytes())

    def load_cache(self) -> None:
        """Read the cached head of the file into memory."""
        self._file.seek(0)
        data = self._file.read(INDEX_SIZE * self.cache_size)
        for i in range(self.cache_size):
            self._cache[i] = IndexEntry.from_bytes(data[i * INDEX_SIZE : (i + 1) * INDEX_SIZE])
            if self._progress_bar is not None:
                self._progress_bar.update_work(0, i + 1, self.cache_size)

    def write_cache(self) -> None:
        """Write the in-memory head back to the file."""
        bar = self._progress_bar
        last_segment = max(bar.num_segments - 1, 0) if bar is not None else 0
        self._file.seek(0)
        for done, entry in enumerate(self._cache, start=1):
            self._file.write(entry.to_bytes())
            if bar is not None:
                bar.update_work(last_segment, done, self.cache_size)
        self._file.flush()

    def close(self) -> None:
        """Write back an auto-loaded cache and close the file."""
        if self._closed:
            return
        self._closed = True
        try:
            if self._auto_load:
                self.write_cache()
        finally:
            self._file.close()

    def __enter__(self) -> FileArray:
        return self

    def __exit__(self, *args) -> None:
        self.close()