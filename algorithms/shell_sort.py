"""
shell_sort.py — Shell Sort
==========================
Gapped insertion sort with the halving sequence n/2, n/4, …, 1.
"""

from typing import Generator, List, Sequence

from algorithms.sort_tracer import SortTracer
from algorithms.step import Number, SortStep


PSEUDOCODE: List[str] = [
    "def shell_sort(arr):",                                  # 0
    "    gap = n // 2",                                      # 1
    "    while gap > 0:",                                    # 2
    "        for i in range(gap, n):",                       # 3
    "            j = i",                                     # 4
    "            while j >= gap and arr[j - gap] > arr[j]:", # 5
    "                swap(arr[j - gap], arr[j])",            # 6
    "                j -= gap",                              # 7
    "        gap //= 2",                                     # 8
]


def shell_sort(values: Sequence[Number]) -> Generator[SortStep, None, None]:
    t = SortTracer(values, PSEUDOCODE)
    n = len(t)
    yield t.start()

    gap = n // 2
    while gap > 0:
        yield t.snapshot(f"Sorting with gap {gap}", line=2)
        for i in range(gap, n):
            j = i
            while j >= gap:
                yield t.compare(j - gap, j, line=5)
                if t.arr[j - gap] <= t.arr[j]:
                    break
                yield t.swap(j - gap, j, line=6)
                j -= gap
        gap //= 2

    yield t.finish("Shell sort")
