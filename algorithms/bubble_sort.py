"""
bubble_sort.py — Bubble Sort
============================
Repeatedly compares adjacent pairs and swaps them when out of order.
After pass i the largest i+1 values sit at the end of the array.

Yields a Step at:
  1. Initial array
  2. Every adjacent comparison
  3. Every swap (after the exchange)
  4. End of each pass  →  the last unsorted slot becomes sorted
  5. Early exit when a pass makes no swap
  6. Final step  →  every index sorted
"""

from typing import Generator, List, Sequence

from algorithms.sort_tracer import SortTracer, fmt
from algorithms.step import Number, SortStep


PSEUDOCODE: List[str] = [
    "def bubble_sort(arr):",                             # 0
    "    for i in range(n - 1):",                        # 1
    "        swapped = False",                           # 2
    "        for j in range(n - i - 1):",                # 3
    "            if arr[j] > arr[j + 1]:",               # 4
    "                swap(arr[j], arr[j + 1])",          # 5
    "                swapped = True",                    # 6
    "        if not swapped: break",                     # 7
]


def bubble_sort(values: Sequence[Number]) -> Generator[SortStep, None, None]:
    t = SortTracer(values, PSEUDOCODE)
    n = len(t)
    yield t.start()

    for i in range(n - 1):
        swapped = False
        for j in range(n - i - 1):
            yield t.compare(j, j + 1, line=4)
            if t.arr[j] > t.arr[j + 1]:
                yield t.swap(j, j + 1, line=5)
                swapped = True

        t.mark_sorted(n - i - 1)
        if not swapped:
            yield t.snapshot(
                f"Pass {i + 1} made no swaps — the array is already in order.",
                line=7,
            )
            break
        yield t.snapshot(
            f"End of pass {i + 1}: {fmt(t.arr[n - i - 1])} is in its final position.",
            line=1,
        )

    yield t.finish("Bubble sort")
