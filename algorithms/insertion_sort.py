"""
insertion_sort.py — Insertion Sort
==================================
Grows a sorted prefix.  Each new element sinks left by adjacent swaps
until its left neighbour is not greater.
"""

from typing import Generator, List, Sequence

from algorithms.sort_tracer import SortTracer, fmt
from algorithms.step import Number, SortStep


PSEUDOCODE: List[str] = [
    "def insertion_sort(arr):",                          # 0
    "    for i in range(1, n):",                         # 1
    "        j = i",                                     # 2
    "        while j > 0 and arr[j - 1] > arr[j]:",      # 3
    "            swap(arr[j - 1], arr[j])",              # 4
    "            j -= 1",                                # 5
]


def insertion_sort(values: Sequence[Number]) -> Generator[SortStep, None, None]:
    t = SortTracer(values, PSEUDOCODE)
    n = len(t)
    yield t.start()

    for i in range(1, n):
        yield t.snapshot(f"Insert arr[{i}]={fmt(t.arr[i])} into the sorted prefix", line=1)
        j = i
        while j > 0:
            yield t.compare(j - 1, j, line=3)
            if t.arr[j - 1] <= t.arr[j]:
                break
            yield t.swap(j - 1, j, line=4)
            j -= 1

    yield t.finish("Insertion sort")
