"""Looking up hashes in a sorted index."""

from __future__ import annotations

import os
from collections.abc import Iterator
from contextlib import ExitStack
from dataclasses import dataclass
from typing import BinaryIO

from .createidx import _open_wordlist
from .filearray import FileArray, IndexEntry
from .hashes import Hash, Hasher, get_hasher


@dataclass(frozen=True)
class Match:
    """A wordlist word whose hash equals (or starts with) the searched hash."""

    hash: Hash
    word: str
    full_match: bool

    def __str__(self) -> str:
        return f"{self.hash}: {self.word}" + ("" if self.full_match else " [partial]")


def _lower_bound(index: FileArray, target: IndexEntry) -> int:
    lower, upper = 0, len(index) - 1
    while lower < upper:
        middle = lower + (upper - lower) // 2
        if index.read(middle) < target:
            lower = middle + 1
        else:
            upper = middle
    return lower


def _scan(wordlist: BinaryIO, index: FileArray, hasher: Hasher, hash_value: Hash) -> Iterator[Match]:
    if not len(index):
        return
    target = IndexEntry.from_hash(hash_value)
    for position in range(_lower_bound(index, target), len(index)):
        entry = index.read(position)
        if entry != target:
            break
        wordlist.seek(entry.offset)
        line = wordlist.readline()
        if line.endswith(b"\n"):
            line = line[:-1]
        word = line.decode("utf-8", errors="surrogateescape")
        candidate = hasher.hash(line)
        if len(hash_value) == len(candidate):
            if hash_value == candidate:
                yield Match(hash_value, word, True)
        elif hash_value.partial_match(candidate):
            yield Match(candidate, word, False)


def find_matches(
    wordlist: str | os.PathLike | BinaryIO,
    index: str | os.PathLike | FileArray,
    hasher: str | Hasher,
    hash_value: str | Hash | bytes,
) -> list[Match]:
    """Return every word of the wordlist whose hash matches ``hash_value``.

    A hash shorter than the algorithm's digest gives partial matches.
    """
    if isinstance(hasher, str):
        hasher = get_hasher(hasher)
    if isinstance(hash_value, str):
        hash_value = Hash.from_string(hash_value)
    elif not isinstance(hash_value, Hash):
        hash_value = Hash(bytes(hash_value))
    with ExitStack() as stack:
        if isinstance(wordlist, (str, os.PathLike)):
            wordlist = stack.enter_context(_open_wordlist(wordlist))
        if not isinstance(index, FileArray):
            index = stack.enter_context(FileArray(index))
        return list(_scan(wordlist, index, hasher, hash_value))