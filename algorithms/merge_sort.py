"""
merge_sort.py — Merge Sort
==========================
Top-down merge sort with an in-place merge: when the head of the right
run is smaller, it is rotated in front of the head of the left run.
Every snapshot is therefore a permutation of the input, and merge sort
reports no swaps (elements move, they are not exchanged).
"""

from typing import Generator, List, Sequence

from algorithms.sort_tracer import SortTracer, fmt
from algorithms.step import Number, SortStep


PSEUDOCODE: List[str] = [
    "def merge_sort(arr, lo, hi):",                      # 0
    "    if lo >= hi: return",                           # 1
    "    mid = (lo + hi) // 2",                          # 2
    "    merge_sort(arr, lo, mid)",                      # 3
    "    merge_sort(arr, mid + 1, hi)",                  # 4
    "    i, j = lo, mid + 1",                            # 5
    "    while i <= mid and j <= hi:",                   # 6
    "        if arr[i] <= arr[j]: i += 1",               # 7
    "        else: move arr[j] before arr[i]",           # 8
]


def merge_sort(values: Sequence[Number]) -> Generator[SortStep, None, None]:
    t = SortTracer(values, PSEUDOCODE)
    yield t.start()
    if len(t) > 1:
        yield from _sort(t, 0, len(t) - 1)
    yield t.finish("Merge sort")


def _sort(t: SortTracer, lo: int, hi: int) -> Generator[SortStep, None, None]:
    if lo >= hi:
        return
    mid = (lo + hi) // 2
    yield t.snapshot(f"Split [{lo}..{hi}] into [{lo}..{mid}] and [{mid + 1}..{hi}]", line=2)
    yield from _sort(t, lo, mid)
    yield from _sort(t, mid + 1, hi)

    i, j, left_end = lo, mid + 1, mid
    while i <= left_end and j <= hi:
        yield t.compare(i, j, line=7)
        if t.arr[i] <= t.arr[j]:
            i += 1
        else:
            value = t.arr[j]
            yield t.move(j, i, line=8, description=f"Move {fmt(value)} from index {j} to index {i}")
            i += 1
            left_end += 1
            j += 1
    yield t.snapshot(f"Merged [{lo}..{hi}]", line=6)
