"""
heap_sort.py — Heap Sort
========================
Builds a max-heap in place, then repeatedly swaps the root to the end
of the shrinking heap and sifts the new root down.
"""

from typing import Generator, List, Sequence

from algorithms.sort_tracer import SortTracer, fmt
from algorithms.step import Number, SortStep


PSEUDOCODE: List[str] = [
    "def heap_sort(arr):",                                   # 0
    "    for i in range(n // 2 - 1, -1, -1): sift_down(i, n)",  # 1
    "    for end in range(n - 1, 0, -1):",                   # 2
    "        swap(arr[0], arr[end])",                        # 3
    "        sift_down(0, end)",                             # 4
    "def sift_down(i, size):",                               # 5
    "    largest = max(i, 2i + 1, 2i + 2)",                  # 6
    "    if largest != i:",                                  # 7
    "        swap(arr[i], arr[largest]); sift_down(largest, size)",  # 8
]


def heap_sort(values: Sequence[Number]) -> Generator[SortStep, None, None]:
    t = SortTracer(values, PSEUDOCODE)
    n = len(t)
    yield t.start()

    if n > 1:
        yield t.snapshot("Building a max-heap", line=1)
    for i in range(n // 2 - 1, -1, -1):
        yield from _sift_down(t, i, n)

    for end in range(n - 1, 0, -1):
        yield t.swap(0, end, line=3,
                     description=f"Move max {fmt(t.arr[0])} to index {end}")
        t.mark_sorted(end)
        yield from _sift_down(t, 0, end)

    yield t.finish("Heap sort")


def _sift_down(t: SortTracer, i: int, size: int) -> Generator[SortStep, None, None]:
    while True:
        largest = i
        for child in (2 * i + 1, 2 * i + 2):
            if child < size:
                yield t.compare(largest, child, line=6)
                if t.arr[child] > t.arr[largest]:
                    largest = child
        if largest == i:
            return
        yield t.swap(i, largest, line=8)
        i = largest
