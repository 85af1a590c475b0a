"""
selection_sort.py — Selection Sort
==================================
Scans the unsorted suffix for its minimum and swaps it into place.
Comparisons are (current minimum, candidate).  A swap is only emitted
when the minimum is not already at position i.
"""

from typing import Generator, List, Sequence

from algorithms.sort_tracer import SortTracer, fmt
from algorithms.step import Number, SortStep


PSEUDOCODE: List[str] = [
    "def selection_sort(arr):",                          # 0
    "    for i in range(n - 1):",                        # 1
    "        min_idx = i",                               # 2
    "        for j in range(i + 1, n):",                 # 3
    "            if arr[j] < arr[min_idx]:",             # 4
    "                min_idx = j",                       # 5
    "        swap(arr[i], arr[min_idx])",                # 6
]


def selection_sort(values: Sequence[Number]) -> Generator[SortStep, None, None]:
    t = SortTracer(values, PSEUDOCODE)
    n = len(t)
    yield t.start()

    for i in range(n - 1):
        min_idx = i
        for j in range(i + 1, n):
            yield t.compare(min_idx, j, line=4)
            if t.arr[j] < t.arr[min_idx]:
                min_idx = j
                yield t.snapshot(f"New minimum {fmt(t.arr[j])} at index {j}", line=5)
        if min_idx != i:
            yield t.swap(i, min_idx, line=6)
        t.mark_sorted(i)
        yield t.snapshot(f"{fmt(t.arr[i])} placed at index {i}", line=6)

    yield t.finish("Selection sort")
