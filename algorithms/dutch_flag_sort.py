"""
dutch_flag_sort.py — Dutch Flag (three-way partition) Sort
==========================================================
A quick sort variant that handles duplicates efficiently: each pass
partitions the sub-range [lo..hi] around pivot = arr[hi] into

    low  – elements <  pivot    [lo .. low-1]
    mid  – elements == pivot    [low .. mid-1]   (scanned so far)
    high – elements >  pivot    [high+1 .. hi]

and then recurses on the low and high ranges only.  The equal block is
already in its final position.

Every comparison step carries the three sections so the renderer can
colour them.  The comparison pairs the scanned element with an index
currently holding the pivot value (tracked across swaps).
"""

from typing import Generator, List, Sequence

from algorithms.sort_tracer import SortTracer, fmt
from algorithms.step import Number, PartitionSections, SortStep


PSEUDOCODE: List[str] = [
    "def dutch_flag_sort(arr, lo, hi):",                 # 0
    "    pivot = arr[hi]",                               # 1
    "    low, mid, high = lo, lo, hi",                   # 2
    "    while mid <= high:",                            # 3
    "        if arr[mid] < pivot:",                      # 4
    "            swap(arr[low], arr[mid]); low += 1; mid += 1",  # 5
    "        elif arr[mid] > pivot:",                    # 6
    "            swap(arr[mid], arr[high]); high -= 1",  # 7
    "        else: mid += 1",                            # 8
    "    dutch_flag_sort(arr, lo, low - 1)",             # 9
    "    dutch_flag_sort(arr, high + 1, hi)",            # 10
]


def _sections(lo: int, low: int, mid: int, high: int, hi: int) -> PartitionSections:
    return PartitionSections(
        low=tuple(range(lo, low)),
        mid=tuple(range(low, mid)),
        high=tuple(range(high + 1, hi + 1)),
    )


def dutch_flag_sort(values: Sequence[Number]) -> Generator[SortStep, None, None]:
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
        pivot_idx = hi
        low, mid, high = lo, lo, hi
        yield t.snapshot(f"Choosing pivot: {fmt(pivot)} (last element of [{lo}..{hi}])", line=1, pivot=hi)

        while mid <= high:
            sections = _sections(lo, low, mid, high, hi)
            pair = (mid, pivot_idx) if mid != pivot_idx else (mid,)
            yield t.snapshot(
                f"low={low}, mid={mid}, high={high}. "
                f"Comparing arr[{mid}]={fmt(t.arr[mid])} with pivot {fmt(pivot)}",
                line=3, comparing=pair, pivot=pivot_idx, sections=sections,
            )

            if t.arr[mid] < pivot:
                if low != mid:
                    pivot_idx = _follow(pivot_idx, low, mid)
                    yield t.swap(low, mid, line=5, pivot=pivot_idx,
                                 sections=_sections(lo, low + 1, mid + 1, high, hi))
                else:
                    yield t.snapshot(f"{fmt(t.arr[mid])} < {fmt(pivot)}, already in the low section",
                                     line=5, pivot=pivot_idx, sections=_sections(lo, low + 1, mid + 1, high, hi))
                low += 1
                mid += 1
            elif t.arr[mid] > pivot:
                if mid != high:
                    pivot_idx = _follow(pivot_idx, mid, high)
                    yield t.swap(mid, high, line=7, pivot=pivot_idx,
                                 sections=_sections(lo, low, mid, high - 1, hi))
                else:
                    yield t.snapshot(f"{fmt(t.arr[mid])} > {fmt(pivot)}, already in the high section",
                                     line=7, pivot=pivot_idx, sections=_sections(lo, low, mid, high - 1, hi))
                high -= 1
            else:
                mid += 1
                yield t.snapshot(f"{fmt(pivot)} = pivot, no swap needed. Just increment mid",
                                 line=8, pivot=pivot_idx, sections=_sections(lo, low, mid, high, hi))

        t.mark_sorted(*range(low, high + 1))
        yield t.snapshot(
            f"Partition of [{lo}..{hi}] complete: < {fmt(pivot)} | = {fmt(pivot)} | > {fmt(pivot)}",
            line=3, sections=PartitionSections(
                low=tuple(range(lo, low)),
                mid=tuple(range(low, high + 1)),
                high=tuple(range(high + 1, hi + 1)),
            ),
        )

        stack.append((high + 1, hi))
        stack.append((lo, low - 1))

    yield t.finish("Dutch Flag sort")


def _follow(pivot_idx: int, a: int, b: int) -> int:
    """Where the tracked pivot copy lands after swapping a and b."""
    if pivot_idx == a:
        return b
    if pivot_idx == b:
        return a
    return pivot_idx
