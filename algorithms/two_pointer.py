"""
two_pointer.py — Two-Pointer Pair & Triplet Search
==================================================
Both searches sort a copy of the input first, then walk pointers inward:
a sum below the target moves `left` right, a sum above it moves `right`
left, and a hit records the match and moves both.

    two_sum    pointers = (left, right)
    three_sum  pointers = (i, left, right), one inward walk per i

Every pointer position is a step; a hit adds a second step with
`matched` set.  Matches are recorded by value in the order they are
found.  Repeated values can produce repeated matches.
"""

from typing import Generator, List, Sequence, Tuple

from algorithms.sort_tracer import fmt, fmt_array
from algorithms.step import Number, PointerStep


TWO_SUM_PSEUDOCODE: List[str] = [
    "def two_sum(arr, target):",                          # 0
    "    arr.sort(); left, right = 0, n - 1",             # 1
    "    while left < right:",                            # 2
    "        s = arr[left] + arr[right]",                 # 3
    "        if s == target: record; left += 1; right -= 1",  # 4
    "        elif s < target: left += 1",                 # 5
    "        else: right -= 1",                           # 6
    "    return found",                                   # 7
]

THREE_SUM_PSEUDOCODE: List[str] = [
    "def three_sum(arr, target):",                        # 0
    "    arr.sort()",                                     # 1
    "    for i in range(n - 2):",                         # 2
    "        left, right = i + 1, n - 1",                 # 3
    "        while left < right:",                        # 4
    "            s = arr[i] + arr[left] + arr[right]",    # 5
    "            if s == target: record; left += 1; right -= 1",  # 6
    "            elif s < target: left += 1",             # 7
    "            else: right -= 1",                       # 8
    "    return found",                                   # 9
]


def _walk(arr: Tuple[Number, ...], target: Number, fixed: Tuple[int, ...], left: int,
          found: List[Tuple[Number, ...]], code: List[str], base: int):
    """Inward walk over arr[left:] with the `fixed` pointers held in place."""
    right = len(arr) - 1
    while left < right:
        pointers = fixed + (left, right)
        total = sum(arr[k] for k in pointers)
        terms = " + ".join(fmt(arr[k]) for k in pointers)
        yield PointerStep(array=arr, target=target, code=code[base], pointers=pointers,
                          current_sum=total, found=tuple(found),
                          description=f"Checking {terms} = {fmt(total)}")
        if total == target:
            found.append(tuple(arr[k] for k in pointers))
            yield PointerStep(array=arr, target=target, code=code[base + 1], pointers=pointers,
                              current_sum=total, matched=pointers, found=tuple(found),
                              description=f"Found {terms} = {fmt(target)}")
            left += 1
            right -= 1
        elif total < target:
            left += 1
        else:
            right -= 1


def _finish(arr, target, found, code, noun) -> PointerStep:
    if found:
        text = f"Search complete: found {len(found)} {noun}(s) that sum to {fmt(target)}"
    else:
        text = f"No {noun}s sum to {fmt(target)}"
    return PointerStep(array=arr, target=target, code=code[-1], found=tuple(found),
                       search_complete=True, description=text)


def two_sum(values: Sequence[Number], target: Number) -> Generator[PointerStep, None, None]:
    arr = tuple(sorted(values))
    code = TWO_SUM_PSEUDOCODE
    found: List[Tuple[Number, ...]] = []
    yield PointerStep(array=arr, target=target, code=code[1],
                      description=f"Sorted the input to {fmt_array(arr)}; looking for pairs summing to {fmt(target)}")
    yield from _walk(arr, target, (), 0, found, code, base=3)
    yield _finish(arr, target, found, code, "pair")


def three_sum(values: Sequence[Number], target: Number) -> Generator[PointerStep, None, None]:
    arr = tuple(sorted(values))
    code = THREE_SUM_PSEUDOCODE
    found: List[Tuple[Number, ...]] = []
    yield PointerStep(array=arr, target=target, code=code[1],
                      description=f"Sorted the input to {fmt_array(arr)}; looking for triplets summing to {fmt(target)}")
    for i in range(len(arr) - 2):
        yield from _walk(arr, target, (i,), i + 1, found, code, base=5)
    yield _finish(arr, target, found, code, "triplet")
