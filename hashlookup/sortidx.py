"""In-place heap sort of an index file, with an optional in-memory cache."""

from __future__ import annotations

import os

from .filearray import INDEX_SIZE, FileArray, IndexEntry, index_entry_count
from .progressbar import ProgressBar, Segment


def parent(i: int) -> int:
    """Index of the parent of heap node ``i``."""
    return (i - 1) // 2


def left(i: int) -> int:
    """Index of the left child of heap node ``i``."""
    return i * 2 + 1


def right(i: int) -> int:
    """Index of the right child of heap node ``i``."""
    return i * 2 + 2


def sift_down(array: FileArray, top: IndexEntry, position: int, limit: int) -> None:
    """Place ``top`` at ``position`` and move it down the heap ``[0, limit]``."""
    while True:
        pos_left = left(position)
        if pos_left > limit:
            break
        child_pos = pos_left
        child = array.read(pos_left)
        pos_right = right(position)
        if pos_right <= limit:
            right_entry = array.read(pos_right)
            if child < right_entry:
                child_pos, child = pos_right, right_entry
        if not top < child:
            break
        array.write(position, child)
        position = child_pos
    array.write(position, top)


def heapify(array: FileArray, progress_bar: ProgressBar, heapify_limit: int) -> None:
    """Turn the whole array into a max-heap (the first step of heap sort)."""
    limit = len(array) - 1
    for done, position in enumerate(range(heapify_limit, -1, -1), start=1):
        sift_down(array, array.read(position), position, limit)
        progress_bar.update_work(1, done, heapify_limit + 1)


def sort_heap(array: FileArray, progress_bar: ProgressBar, count: int) -> None:
    """Repeatedly move the heap's maximum to the end (the second step of heap sort)."""
    for done, pos_last in enumerate(range(count, 0, -1), start=1):
        largest = array.read(0)
        top = array.read(pos_last)
        array.write(pos_last, largest)
        sift_down(array, top, 0, pos_last - 1)
        progress_bar.update_work(2, done, count)


def sort_index(index_file: str | os.PathLike, cache_bytes: int, quiet: bool = False) -> None:
    """Sort an index file by hash, keeping up to ``cache_bytes`` of it in memory."""
    size = index_entry_count(index_file)
    cache_size = min(cache_bytes // INDEX_SIZE, size)
    last = size - 1
    heapify_limit = parent(last)
    if quiet:
        bar = ProgressBar()
    else:
        bar = ProgressBar(
            [
                Segment("Sorting Index (Loading Cache)...", cache_size // 15),
                Segment("Sorting Index (Creating Heap)...", max(heapify_limit, 0) // 5),
                Segment("Sorting Index (Sorting Heap)...", size),
                Segment("Sorting Index (Saving Cache)...", cache_size // 15),
            ]
        )
    with FileArray(
        index_file, cache_bytes // INDEX_SIZE, None if quiet else bar, auto_load=False
    ) as array, bar:
        array.load_cache()
        heapify(array, bar, heapify_limit)
        sort_heap(array, bar, last)
        array.write_cache()