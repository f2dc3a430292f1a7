"""Verification of index files."""

from __future__ import annotations

import os

from .createidx import _open_wordlist, _word_lines
from .filearray import HASH_SIZE, FileArray
from .hashes import Hash, get_hasher
from .progressbar import ProgressBar
from .search import find_matches
from .util import MatchMode


def check_sorted(array: FileArray, progress_bar: ProgressBar, quiet: bool = False) -> bool:
    """True if the entries of ``array`` are in ascending hash order."""
    total = len(array)
    previous = None
    for i, entry in enumerate(array):
        if not quiet:
            progress_bar.update_work(0, i, total)
        if previous is not None and entry < previous:
            return False
        previous = entry
    if not quiet:
        progress_bar.update_work(0, total, total)
    return True


def check_match(
    wordlist: str | os.PathLike,
    array: FileArray,
    hash_name: str,
    mode: MatchMode,
    progress_bar: ProgressBar,
    quiet: bool = False,
) -> bool:
    """True if every wordlist word can be found again through the index.

    Only the whole-wordlist modes check anything; random modes pass unchecked.
    """
    with _open_wordlist(wordlist) as source, _open_wordlist(wordlist) as lookup:
        if not mode.whole_wordlist:
            return True
        hasher = get_hasher(hash_name)
        for done, (_, line) in enumerate(_word_lines(source), start=1):
            word = line.decode("utf-8", errors="surrogateescape")
            full = hasher.hash(line)
            if mode.full and not any(
                m.full_match and m.word == word
                for m in find_matches(lookup, array, hasher, full)
            ):
                return False
            if mode.partial and not any(
                not m.full_match and m.word == word
                for m in find_matches(lookup, array, hasher, Hash(full.value[:HASH_SIZE]))
            ):
                return False
            if not quiet:
                progress_bar.update_work(1, done, len(array))
    return True