"""Building an unsorted index file from a wordlist."""

from __future__ import annotations

import os
from collections.abc import Iterator
from typing import BinaryIO

from .filearray import IndexEntry
from .hashes import get_hasher
from .progressbar import ProgressBar, Segment
from .util import get_byte_power, get_formatted_size


def _open_wordlist(path: str | os.PathLike) -> BinaryIO:
    try:
        return open(path, "rb")
    except FileNotFoundError:
        raise FileNotFoundError(f'File "{os.fspath(path)}" does not exist!') from None


def _word_lines(source: BinaryIO) -> Iterator[tuple[int, bytes]]:
    """Yield ``(offset, line)`` for each line, without its newline.

    A wordlist that is empty or ends in a newline also yields a final empty line.
    """
    offset = 0
    ended_with_newline = True
    for raw in source:
        ended_with_newline = raw.endswith(b"\n")
        yield offset, raw[:-1] if ended_with_newline else raw
        offset += len(raw)
    if ended_with_newline:
        yield offset, b""


def _compile_bar(file_size: int) -> ProgressBar:
    power = get_byte_power(file_size)
    total = get_formatted_size(file_size, power)

    def extra(progress: float) -> str:
        return f"{get_formatted_size(int(file_size * progress), power)} / {total}"

    return ProgressBar([Segment("Compiling wordlist...", 1)], extra_data=extra)


def create_index(
    wordlist: str | os.PathLike,
    index_file: str | os.PathLike,
    hash_name: str,
    quiet: bool = False,
) -> None:
    """Write one index entry per wordlist line, in wordlist order."""
    hasher = get_hasher(hash_name)
    with _open_wordlist(wordlist) as source, open(index_file, "wb") as target:
        file_size = os.fstat(source.fileno()).st_size
        if quiet:
            bar = ProgressBar()
        else:
            print(
                f"Compiling wordlist {os.fspath(wordlist)} into {os.fspath(index_file)} "
                f"using the {hash_name} hash...",
                flush=True,
            )
            bar = _compile_bar(file_size)
        with bar:
            for offset, line in _word_lines(source):
                entry = IndexEntry.from_hash(hasher.hash(line), offset)
                target.write(entry.to_bytes())
                bar.update_work(0, offset, file_size)