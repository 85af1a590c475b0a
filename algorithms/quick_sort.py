"""
quick_sort.py — Quick Sort
==========================
Lomuto partition with the LAST element of the current sub-range as
pivot.  That tie-break is fixed so identical inputs always produce
identical traces.

Sub-ranges are kept on an explicit stack (left range processed first,
same order as the recursive form) so sorted or reverse-sorted inputs
cannot hit the recursion limit.
"""

from typing import Generator, List, Sequence

from algorithms.sort_tracer import SortTracer, fmt
from algorithms.step import Number, SortStep


PSEUDOCODE: List[str] = [
    "def quick_sort(arr, lo, hi):",                      # 0
    "    if lo >= hi: return",                           # 1
    "    pivot = arr[hi]",                               # 2
    "    i = lo - 1",                                    # 3
    "    for j in range(lo, hi):",                       # 4
    "        if arr[j] < pivot:",                        # 5
    "            i += 1; swap(arr[i], arr[j])",          # 6
    "    swap(arr[i + 1], arr[hi])",                     # 7
    "    quick_sort(arr, lo, i); quick_sort(arr, i + 2, hi)",  # 8
]


def quick_sort(values: Sequence[Number]) -> Generator[SortStep, None, None]:
    t = SortTracer(values, PSEUDOCODE)
    yield t.start()

    stack = [(0, len(t) - 1)]
    while stack:
        lo, hi = stack.pop()
        if lo >= hi:
            if lo == hi:
                t.mark_sorted(lo)
            continue

        pivot = t.arr[hi]
        yield t.snapshot(f"Choosing pivot: {fmt(pivot)} (last element of [{lo}..{hi}])", line=2, pivot=hi)

        i = lo - 1
        for j in range(lo, hi):
            yield t.compare(j, hi, line=5, pivot=hi,
                            description=f"Comparing arr[{j}]={fmt(t.arr[j])} with pivot {fmt(pivot)}")
            if t.arr[j] < pivot:
                i += 1
                if i != j:
                    yield t.swap(i, j, line=6, pivot=hi)

        p = i + 1
        if p != hi:
            yield t.swap(p, hi, line=7, pivot=p)
        t.mark_sorted(p)
        yield t.snapshot(f"Pivot {fmt(pivot)} is in its final position {p}", line=7, pivot=p)

        stack.append((p + 1, hi))
        stack.append((lo, p - 1))

    yield t.finish("Quick sort")
