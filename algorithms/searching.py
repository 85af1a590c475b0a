"""
searching.py — Linear & Binary Search
=====================================
Generator-based array searches that yield SearchStep snapshots.

Binary search needs sorted input; it runs on a sorted copy of the array
and says so in its first step.  Each midpoint check is a comparison step
(`comparing=(index,)`), the last step has `search_complete=True`.
"""

from typing import Generator, List, Sequence

from algorithms.sort_tracer import fmt, fmt_array
from algorithms.step import Number, SearchStep


LINEAR_PSEUDOCODE: List[str] = [
    "def linear_search(arr, target):",                   # 0
    "    for i in range(n):",                            # 1
    "        if arr[i] == target: return i",             # 2
    "    return -1",                                     # 3
]

BINARY_PSEUDOCODE: List[str] = [
    "def binary_search(arr, target):",                   # 0
    "    left, right = 0, n - 1",                        # 1
    "    while left <= right:",                          # 2
    "        mid = (left + right) // 2",                 # 3
    "        if arr[mid] == target: return mid",         # 4
    "        elif arr[mid] < target: left = mid + 1",    # 5
    "        else: right = mid - 1",                     # 6
    "    return -1",                                     # 7
]


def linear_search(values: Sequence[Number], target: Number) -> Generator[SearchStep, None, None]:
    arr = tuple(values)
    code = LINEAR_PSEUDOCODE
    yield SearchStep(array=arr, code=code[0],
                     description=f"Searching for {fmt(target)} in {fmt_array(arr)}")

    for i, value in enumerate(arr):
        hit = value == target
        yield SearchStep(
            array=arr, code=code[2], comparing=(i,), current_index=i, found=hit,
            found_index=i if hit else None,
            description=f"Checking arr[{i}]={fmt(value)}" + (" — found!" if hit else f" ≠ {fmt(target)}"),
        )
        if hit:
            yield SearchStep(array=arr, code=code[2], current_index=i, found=True, found_index=i,
                             search_complete=True,
                             description=f"Found {fmt(target)} at index {i}")
            return

    yield SearchStep(array=arr, code=code[3], search_complete=True,
                     description=f"{fmt(target)} is not in the array")


def binary_search(values: Sequence[Number], target: Number) -> Generator[SearchStep, None, None]:
    arr = tuple(sorted(values))
    code = BINARY_PSEUDOCODE
    left, right = 0, len(arr) - 1
    yield SearchStep(array=arr, code=code[1], left=left, right=right,
                     description=f"Binary search needs sorted input: searching for {fmt(target)} in {fmt_array(arr)}")

    while left <= right:
        mid = (left + right) // 2
        value = arr[mid]
        hit = value == target
        yield SearchStep(
            array=arr, code=code[4], comparing=(mid,), current_index=mid,
            left=left, right=right, mid=mid, found=hit, found_index=mid if hit else None,
            description=f"left={left}, right={right}, mid={mid}: comparing arr[{mid}]={fmt(value)} with {fmt(target)}",
        )
        if hit:
            yield SearchStep(array=arr, code=code[4], current_index=mid, left=left, right=right,
                             mid=mid, found=True, found_index=mid, search_complete=True,
                             description=f"Found {fmt(target)} at index {mid}")
            return
        if value < target:
            left = mid + 1
        else:
            right = mid - 1

    yield SearchStep(array=arr, code=code[7], left=left, right=right, search_complete=True,
                     description=f"{fmt(target)} is not in the array")
