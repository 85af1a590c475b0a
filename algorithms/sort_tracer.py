"""
sort_tracer.py — Array Scratch-Pad for Sorting Generators
=========================================================
Owns the working copy of the array and turns every comparison, swap and
note into a SortStep snapshot.

Usage inside an algorithm generator:
    t = SortTracer(values, PSEUDOCODE)
    yield t.start()
    yield t.compare(j, j + 1, line=3)
    if t.arr[j] > t.arr[j + 1]:
        yield t.swap(j, j + 1, line=4)
    yield t.finish()

Rules enforced here so no generator can get them wrong:
  - compare() always records both indices in `comparing`;
  - swap() exchanges the values FIRST, then snapshots;
  - finish() marks every index sorted.
"""

from typing import Iterable, List, Optional, Sequence, Set

from algorithms.step import Number, PartitionSections, SortStep


def fmt(value: Number) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def fmt_array(values: Iterable[Number]) -> str:
    return "[" + ", ".join(fmt(v) for v in values) + "]"


class SortTracer:
    """
    Attributes:
        arr        : The working array.  Generators read it; only swap()
                     and move() write it.
        pseudocode : Lines of the algorithm's pseudocode; `line` arguments
                     index into it.
        done       : Indices already in their final position.
    """

    def __init__(self, values: Sequence[Number], pseudocode: List[str]):
        self.arr:        List[Number] = list(values)
        self.pseudocode: List[str]    = pseudocode
        self.done:       Set[int]     = set()

    def __len__(self) -> int:
        return len(self.arr)

    # ------------------------------------------------------------------
    # Step factories
    # ------------------------------------------------------------------
    def snapshot(
        self,
        description: str,
        line: int = 0,
        comparing: Sequence[int] = (),
        swapping: Sequence[int] = (),
        pivot: Optional[int] = None,
        sections: Optional[PartitionSections] = None,
    ) -> SortStep:
        return SortStep(
            array=tuple(self.arr),
            description=description,
            code=self.pseudocode[line] if 0 <= line < len(self.pseudocode) else "",
            comparing=tuple(comparing),
            swapping=tuple(swapping),
            sorted=tuple(sorted(self.done)),
            pivot=pivot,
            partition_sections=sections,
        )

    def start(self) -> SortStep:
        return self.snapshot(f"Initial array: {fmt_array(self.arr)}", line=0)

    def compare(self, i: int, j: int, line: int, description: Optional[str] = None, **kwargs) -> SortStep:
        if description is None:
            description = f"Comparing arr[{i}]={fmt(self.arr[i])} with arr[{j}]={fmt(self.arr[j])}"
        return self.snapshot(description, line=line, comparing=(i, j), **kwargs)

    def swap(self, i: int, j: int, line: int, description: Optional[str] = None, **kwargs) -> SortStep:
        a, b = self.arr[i], self.arr[j]
        self.arr[i], self.arr[j] = b, a
        if description is None:
            description = f"Swapped arr[{i}]={fmt(a)} and arr[{j}]={fmt(b)}"
        return self.snapshot(description, line=line, swapping=(i, j), **kwargs)

    def move(self, src: int, dst: int, line: int, description: str) -> SortStep:
        """Rotate arr[src] into position dst (dst <= src), shifting the gap right by one."""
        value = self.arr.pop(src)
        self.arr.insert(dst, value)
        return self.snapshot(description, line=line)

    def mark_sorted(self, *indices: int) -> None:
        self.done.update(indices)

    def finish(self, name: str) -> SortStep:
        self.done = set(range(len(self.arr)))
        return self.snapshot(f"{name} complete! Final array: {fmt_array(self.arr)}", line=0)
