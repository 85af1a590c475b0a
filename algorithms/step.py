"""
step.py — Algorithm Step Snapshots
==================================
Every algorithm is a generator that yields Step objects.
A Step is a frozen-in-time picture of everything a renderer needs to
paint one frame, plus a plain-English description of why it happened.

Six shapes exist and no others:

    • SortStep    – array snapshot + compared / swapped / sorted indices,
                    pivot and three-way partition sections
    • SearchStep  – array snapshot + checked index and search window
    • SieveStep   – prime flags for 0..n + the prime being sieved
    • PointerStep – sorted array + two or three pointers and the
                    matches found so far
    • TreeStep    – binary search tree snapshot + the node in focus
    • GraphStep   – tagged by StepKind: init / visit / edge_relax /
                    discover / complete

Design decisions:
  - Steps are frozen dataclasses.  Index collections are tuples.
    The generator is the only writer; playback and renderers are pure
    readers.
  - A Trace is the whole run, materialised.  It is never appended to;
    new input means a new Trace.
  - GraphStepBuilder is a mutable scratch-pad holding the running
    algorithm state, so every GraphStep carries full copies of
    distances / visited / queue without each generator spelling them
    out.
"""

import math
from dataclasses import dataclass, field, fields, is_dataclass
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

from graph import Graph


Number = Union[int, float]
Indices = Tuple[int, ...]


# ---------------------------------------------------------------------------
# Sorting
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class PartitionSections:
    """Three-way partition state: < pivot, == pivot (scanned), > pivot."""
    low:  Indices = ()
    mid:  Indices = ()
    high: Indices = ()


@dataclass(frozen=True)
class SortStep:
    """
    Attributes:
        array              : Snapshot of the whole array at this step.
        description        : Human-readable "what just happened".
        code               : Pseudocode line executing at this step.
        comparing          : Indices being compared (non-empty ⇔ a comparison).
        swapping           : Indices just exchanged (non-empty ⇔ a swap).
        sorted             : Indices known to be in their final position.
        pivot              : Index holding the current pivot, if any.
        partition_sections : Dutch-flag low / mid / high index sets.
    """

    array:              Tuple[Number, ...]
    description:        str                          = ""
    code:               str                          = ""
    comparing:          Indices                      = ()
    swapping:           Indices                      = ()
    sorted:             Indices                      = ()
    pivot:              Optional[int]                = None
    partition_sections: Optional[PartitionSections]  = None


# ---------------------------------------------------------------------------
# Searching
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class SearchStep:
    array:           Tuple[Number, ...]
    description:     str            = ""
    code:            str            = ""
    comparing:       Indices        = ()
    current_index:   Optional[int]  = None
    left:            Optional[int]  = None
    right:           Optional[int]  = None
    mid:             Optional[int]  = None
    found:           bool           = False
    found_index:     Optional[int]  = None
    search_complete: bool           = False


# ---------------------------------------------------------------------------
# Array techniques: sieve and two pointers
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class SieveStep:
    """
    Attributes:
        is_prime      : Flag per number 0..n, as far as the sieve knows.
        current_prime : Prime whose multiples are being crossed out.
        marking       : Multiples of current_prime crossed out in this step.
        primes        : Every prime up to n; set on the final step only.
    """

    is_prime:      Tuple[bool, ...]
    description:   str            = ""
    code:          str            = ""
    current_prime: Optional[int]  = None
    marking:       Indices        = ()
    primes:        Tuple[int, ...] = ()
    complete:      bool           = False

    @property
    def limit(self) -> int:
        return len(self.is_prime) - 1


@dataclass(frozen=True)
class PointerStep:
    """
    Attributes:
        array       : The sorted array the pointers walk.
        pointers    : (left, right) for pairs, (i, left, right) for triplets.
        current_sum : Sum of the values under the pointers.
        matched     : The pointers, when their sum hit the target.
        found       : Matches so far, as value tuples.
    """

    array:           Tuple[Number, ...]
    target:          Number
    description:     str                            = ""
    code:            str                            = ""
    pointers:        Indices                        = ()
    current_sum:     Optional[Number]               = None
    matched:         Indices                        = ()
    found:           Tuple[Tuple[Number, ...], ...] = ()
    search_complete: bool                           = False


# ---------------------------------------------------------------------------
# Binary search trees
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class TreeNodeView:
    value: Number
    left:  Optional[Number] = None
    right: Optional[Number] = None


@dataclass(frozen=True)
class TreeStep:
    """
    Attributes:
        nodes     : Every node in insertion order; nodes[0] is the root.
                    Values are unique, so children are named by value.
        current   : Node in focus.
        comparing : True when this step compares `key` with `current`.
        key       : Value being inserted or searched for.
        path      : Values from the root to `current`.
        output    : Traversal output so far.
        queue     : Level-order queue, front first.
    """

    nodes:       Tuple[TreeNodeView, ...]
    description: str                  = ""
    code:        str                  = ""
    current:     Optional[Number]     = None
    comparing:   bool                 = False
    key:         Optional[Number]     = None
    path:        Tuple[Number, ...]   = ()
    output:      Tuple[Number, ...]   = ()
    queue:       Tuple[Number, ...]   = ()
    found:       bool                 = False
    complete:    bool                 = False

    @property
    def root(self) -> Optional[Number]:
        return self.nodes[0].value if self.nodes else None


# ---------------------------------------------------------------------------
# Graphs
# ---------------------------------------------------------------------------
class StepKind(Enum):
    INIT       = "init"
    VISIT      = "visit"
    EDGE_RELAX = "edge_relax"
    DISCOVER   = "discover"
    COMPLETE   = "complete"


@dataclass(frozen=True)
class GraphStep:
    """
    Fields used per kind:
        init       : node (source, if any)
        visit      : node, dist
        edge_relax : edge_id, from_node, to_node, old_dist, new_dist, improved
        discover   : node, dist, edge_id, from_node, to_node
        complete   : distances, parents, visited, order, path, cyclic

    Every kind also carries snapshots of the running state
    (distances, visited, queue, in_degree, order) so a renderer can
    paint any step in isolation.
    """

    kind:        StepKind
    description: str                          = ""
    node:        Optional[str]                = None
    dist:        Optional[float]              = None
    edge_id:     Optional[str]                = None
    from_node:   Optional[str]                = None
    to_node:     Optional[str]                = None
    old_dist:    Optional[float]              = None
    new_dist:    Optional[float]              = None
    improved:    bool                         = False
    distances:   Dict[str, float]             = field(default_factory=dict)
    parents:     Dict[str, Optional[str]]     = field(default_factory=dict)
    visited:     Tuple[str, ...]              = ()
    queue:       Tuple[str, ...]              = ()
    in_degree:   Dict[str, int]               = field(default_factory=dict)
    order:       Tuple[str, ...]              = ()
    path:        Tuple[str, ...]              = ()
    cyclic:      bool                         = False

    @property
    def is_final(self) -> bool:
        return self.kind is StepKind.COMPLETE


Step = Union[SortStep, SearchStep, SieveStep, PointerStep, TreeStep, GraphStep]


class GraphStepBuilder:
    """
    Mutable scratch-pad that graph generators use to construct Steps.

    Usage inside an algorithm generator:
        sb = GraphStepBuilder()
        sb.distances[source] = 0
        sb.visit(source)
        yield sb.build(StepKind.VISIT, "Visiting node 1", node=source, dist=0)
    """

    def __init__(self):
        self.distances: Dict[str, float]         = {}
        self.parents:   Dict[str, Optional[str]] = {}
        self.visited:   List[str]                = []
        self.queue:     List[str]                = []
        self.in_degree: Dict[str, int]           = {}
        self.order:     List[str]                = []

    def visit(self, node_id: str) -> None:
        if node_id not in self.visited:
            self.visited.append(node_id)

    def path_to(self, target: str) -> Tuple[str, ...]:
        """Walk parents back from target.  Empty if target was never reached."""
        if target not in self.parents:
            return ()
        path: List[str] = []
        cur: Optional[str] = target
        while cur is not None:
            path.append(cur)
            cur = self.parents.get(cur)
        path.reverse()
        return tuple(path)

    def build(self, kind: StepKind, description: str, **kwargs: Any) -> GraphStep:
        return GraphStep(
            kind=kind,
            description=description,
            distances=dict(self.distances),
            parents=dict(self.parents),
            visited=tuple(self.visited),
            queue=tuple(self.queue),
            in_degree=dict(self.in_degree),
            order=tuple(kwargs.pop("order", self.order)),
            **kwargs,
        )


# ---------------------------------------------------------------------------
# Trace
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Trace:
    """Ordered, immutable sequence of steps for one algorithm run."""

    algorithm: str
    steps:     Tuple[Step, ...]

    def __len__(self) -> int:
        return len(self.steps)

    def __getitem__(self, idx: int) -> Step:
        return self.steps[idx]

    def __iter__(self) -> Iterator[Step]:
        return iter(self.steps)

    @property
    def last(self) -> Step:
        return self.steps[-1]


# ---------------------------------------------------------------------------
# Contract checks
# ---------------------------------------------------------------------------
class StepContractError(AssertionError):
    """A generator emitted a step that does not fit the step model."""


def validate_sort_step(step: SortStep, length: int) -> None:
    if len(step.array) != length:
        raise StepContractError(f"array length {len(step.array)} != {length}")
    indices = list(step.comparing) + list(step.swapping) + list(step.sorted)
    if step.pivot is not None:
        indices.append(step.pivot)
    if step.partition_sections is not None:
        ps = step.partition_sections
        indices += list(ps.low) + list(ps.mid) + list(ps.high)
    for i in indices:
        if not 0 <= i < length:
            raise StepContractError(f"index {i} outside array of length {length}")


def validate_graph_step(step: GraphStep, graph: Graph) -> None:
    node_refs = [step.node, step.from_node, step.to_node]
    node_refs += list(step.visited) + list(step.queue) + list(step.order) + list(step.path)
    node_refs += list(step.distances) + list(step.parents) + list(step.in_degree)
    node_refs += [p for p in step.parents.values() if p is not None]
    for nid in node_refs:
        if nid is not None and nid not in graph.nodes:
            raise StepContractError(f"unknown node id {nid!r} in {step.kind.value} step")
    if step.edge_id is not None and step.edge_id not in graph.edges:
        raise StepContractError(f"unknown edge id {step.edge_id!r} in {step.kind.value} step")


# ---------------------------------------------------------------------------
# Serialisation
# ---------------------------------------------------------------------------
def _plain(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, float) and math.isinf(value):
        return None
    if is_dataclass(value):
        return {f.name: _plain(getattr(value, f.name)) for f in fields(value)}
    if isinstance(value, (tuple, list)):
        return [_plain(v) for v in value]
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items()}
    return value


def step_to_dict(step: Step) -> Dict[str, Any]:
    """JSON-ready dict.  Infinite distances become None."""
    return {f.name: _plain(getattr(step, f.name)) for f in fields(step)}
