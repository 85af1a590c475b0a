"""
algorithms/__init__.py — Algorithm Registry & Dispatch
======================================================
Single source of truth for every algorithm the visualizer knows about.

    from algorithms import SortAlgorithm, generate_sort_trace
    from algorithms import GraphAlgorithm, generate_graph_trace
    from algorithms import ArrayAlgorithm, generate_array_trace
    from algorithms import TreeAlgorithm, generate_tree_trace
    from algorithms import REGISTRY, get_algorithm

Each family is a closed Enum.  The generate_* dispatchers branch on
every member explicitly and the registry is checked against the enums
at import time, so adding or removing an algorithm fails loudly until
every piece knows about it.

REGISTRY is a dict of metadata cards for the UI:
    {
        "bubble": AlgoInfo(key, label, family, pseudocode, …),
        …
    }
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, Generator, List, Optional, Sequence

from graph import Graph
from algorithms.step import (
    GraphStep,
    Number,
    SearchStep,
    SortStep,
    Trace,
    TreeStep,
)
from algorithms.result import Failure, FailureReason, TraceResult

# ---------------------------------------------------------------------------
# Import all algorithm modules
# ---------------------------------------------------------------------------
from algorithms.bubble_sort      import bubble_sort,      PSEUDOCODE as _bubble_pc
from algorithms.selection_sort   import selection_sort,   PSEUDOCODE as _selection_pc
from algorithms.insertion_sort   import insertion_sort,   PSEUDOCODE as _insertion_pc
from algorithms.shell_sort       import shell_sort,       PSEUDOCODE as _shell_pc
from algorithms.merge_sort       import merge_sort,       PSEUDOCODE as _merge_pc
from algorithms.quick_sort       import quick_sort,       PSEUDOCODE as _quick_pc
from algorithms.heap_sort        import heap_sort,        PSEUDOCODE as _heap_pc
from algorithms.dutch_flag_sort  import dutch_flag_sort,  PSEUDOCODE as _dutch_pc
from algorithms.searching        import (
    linear_search, binary_search, LINEAR_PSEUDOCODE as _linear_pc, BINARY_PSEUDOCODE as _binary_pc,
)
from algorithms.bfs              import bfs,              PSEUDOCODE as _bfs_pc
from algorithms.dfs              import dfs,              PSEUDOCODE as _dfs_pc
from algorithms.dijkstra         import dijkstra,         PSEUDOCODE as _dij_pc
from algorithms.topological_sort import topological_sort, PSEUDOCODE as _topo_pc
from algorithms.sieve            import sieve,            PSEUDOCODE as _sieve_pc
from algorithms.two_pointer      import (
    two_sum, three_sum, TWO_SUM_PSEUDOCODE as _two_sum_pc, THREE_SUM_PSEUDOCODE as _three_sum_pc,
)
from algorithms.tree             import (
    bst_insert, bst_search, inorder, preorder, postorder, level_order,
    INSERT_PSEUDOCODE as _insert_pc, SEARCH_PSEUDOCODE as _bst_search_pc,
    INORDER_PSEUDOCODE as _inorder_pc, PREORDER_PSEUDOCODE as _preorder_pc,
    POSTORDER_PSEUDOCODE as _postorder_pc, LEVEL_ORDER_PSEUDOCODE as _level_pc,
)


logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Closed algorithm variants
# ---------------------------------------------------------------------------
class SortAlgorithm(Enum):
    BUBBLE     = "bubble"
    SELECTION  = "selection"
    INSERTION  = "insertion"
    SHELL      = "shell"
    MERGE      = "merge"
    QUICK      = "quick"
    HEAP       = "heap"
    DUTCH_FLAG = "dutch_flag"


class SearchAlgorithm(Enum):
    LINEAR = "linear"
    BINARY = "binary"


class GraphAlgorithm(Enum):
    BFS         = "bfs"
    DFS         = "dfs"
    DIJKSTRA    = "dijkstra"
    TOPOLOGICAL = "topological"


class ArrayAlgorithm(Enum):
    SIEVE     = "sieve"
    TWO_SUM   = "two_sum"
    THREE_SUM = "three_sum"


class TreeAlgorithm(Enum):
    INSERT      = "bst_insert"
    SEARCH      = "bst_search"
    INORDER     = "inorder"
    PREORDER    = "preorder"
    POSTORDER   = "postorder"
    LEVEL_ORDER = "level_order"


FAMILIES: Dict[type, str] = {
    SortAlgorithm:   "sorting",
    SearchAlgorithm: "searching",
    ArrayAlgorithm:  "array",
    TreeAlgorithm:   "tree",
    GraphAlgorithm:  "graph",
}


# ---------------------------------------------------------------------------
# AlgoInfo: metadata card for each algorithm
# ---------------------------------------------------------------------------
@dataclass
class AlgoInfo:
    algorithm:         Enum                   # the enum member this card describes
    label:             str                    # human label, e.g. "Bubble Sort"
    pseudocode:        List[str]              # lines for the side-panel
    tags:              List[str] = field(default_factory=list)
    requires_weighted: bool     = False
    requires_directed: bool     = False
    needs_source:      bool     = False
    complexity_time:   str      = ""
    complexity_space:  str      = ""
    description:       str      = ""

    @property
    def key(self) -> str:
        return self.algorithm.value

    @property
    def family(self) -> str:
        return FAMILIES[type(self.algorithm)]


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
_CARDS: List[AlgoInfo] = [

    AlgoInfo(SortAlgorithm.BUBBLE, "Bubble Sort", _bubble_pc,
             tags=["comparison", "stable", "in-place"],
             complexity_time="O(n²)", complexity_space="O(1)",
             description="Repeatedly swaps adjacent elements that are out of order."),

    AlgoInfo(SortAlgorithm.SELECTION, "Selection Sort", _selection_pc,
             tags=["comparison", "in-place"],
             complexity_time="O(n²)", complexity_space="O(1)",
             description="Selects the minimum of the unsorted part and moves it to the front."),

    AlgoInfo(SortAlgorithm.INSERTION, "Insertion Sort", _insertion_pc,
             tags=["comparison", "stable", "in-place"],
             complexity_time="O(n²)", complexity_space="O(1)",
             description="Inserts each element into its place in the sorted prefix."),

    AlgoInfo(SortAlgorithm.SHELL, "Shell Sort", _shell_pc,
             tags=["comparison", "in-place"],
             complexity_time="O(n²)", complexity_space="O(1)",
             description="Insertion sort over shrinking gaps; far-apart elements move early."),

    AlgoInfo(SortAlgorithm.MERGE, "Merge Sort", _merge_pc,
             tags=["comparison", "stable", "divide-and-conquer"],
             complexity_time="O(n log n)", complexity_space="O(n)",
             description="Sorts both halves, then merges them."),

    AlgoInfo(SortAlgorithm.QUICK, "Quick Sort", _quick_pc,
             tags=["comparison", "in-place", "divide-and-conquer"],
             complexity_time="O(n log n) avg, O(n²) worst", complexity_space="O(log n)",
             description="Partitions around the last element, then sorts both sides."),

    AlgoInfo(SortAlgorithm.HEAP, "Heap Sort", _heap_pc,
             tags=["comparison", "in-place"],
             complexity_time="O(n log n)", complexity_space="O(1)",
             description="Builds a max-heap and repeatedly moves its root to the end."),

    AlgoInfo(SortAlgorithm.DUTCH_FLAG, "Dutch Flag Sort", _dutch_pc,
             tags=["comparison", "in-place", "three-way-partition"],
             complexity_time="O(n log n) avg", complexity_space="O(log n)",
             description="Quick sort with a three-way partition: less than, equal to and greater than the pivot."),

    AlgoInfo(SearchAlgorithm.LINEAR, "Linear Search", _linear_pc,
             tags=["search"],
             complexity_time="O(n)", complexity_space="O(1)",
             description="Checks every element in order."),

    AlgoInfo(SearchAlgorithm.BINARY, "Binary Search", _binary_pc,
             tags=["search", "sorted-input"],
             complexity_time="O(log n)", complexity_space="O(1)",
             description="Halves the search window of a sorted array at each comparison."),

    AlgoInfo(GraphAlgorithm.BFS, "Breadth-First Search", _bfs_pc,
             tags=["traversal", "unweighted", "shortest-path"], needs_source=True,
             complexity_time="O(V + E)", complexity_space="O(V)",
             description="Explores nodes level by level, finding shortest path in unweighted graphs."),

    AlgoInfo(GraphAlgorithm.DFS, "Depth-First Search", _dfs_pc,
             tags=["traversal"], needs_source=True,
             complexity_time="O(V + E)", complexity_space="O(V)",
             description="Explores as far as possible along each branch before backtracking."),

    AlgoInfo(GraphAlgorithm.DIJKSTRA, "Dijkstra's Algorithm", _dij_pc,
             tags=["weighted", "shortest-path"], needs_source=True, requires_weighted=True,
             complexity_time="O(V²)", complexity_space="O(V)",
             description="Finds shortest paths from source to all vertices in weighted graphs."),

    AlgoInfo(GraphAlgorithm.TOPOLOGICAL, "Topological Sort", _topo_pc,
             tags=["dag", "ordering"], requires_directed=True,
             complexity_time="O(V + E)", complexity_space="O(V)",
             description="Linear ordering of a DAG's nodes so every edge points forward."),

    AlgoInfo(ArrayAlgorithm.SIEVE, "Sieve of Eratosthenes", _sieve_pc,
             tags=["primes", "number-theory"],
             complexity_time="O(n log log n)", complexity_space="O(n)",
             description="Crosses out the multiples of each prime; whatever survives is prime."),

    AlgoInfo(ArrayAlgorithm.TWO_SUM, "Two Sum (Two Pointers)", _two_sum_pc,
             tags=["two-pointers", "search", "sorted-input"],
             complexity_time="O(n log n)", complexity_space="O(n)",
             description="Walks two pointers inward over the sorted array to find pairs with the target sum."),

    AlgoInfo(ArrayAlgorithm.THREE_SUM, "Three Sum (Two Pointers)", _three_sum_pc,
             tags=["two-pointers", "search", "sorted-input"],
             complexity_time="O(n²)", complexity_space="O(n)",
             description="Fixes each element in turn and runs a two-pointer walk over the rest."),

    AlgoInfo(TreeAlgorithm.INSERT, "BST Insert", _insert_pc,
             tags=["tree", "bst"],
             complexity_time="O(h) per insert", complexity_space="O(n)",
             description="Builds a binary search tree: smaller values go left, larger go right."),

    AlgoInfo(TreeAlgorithm.SEARCH, "BST Search", _bst_search_pc,
             tags=["tree", "bst", "search"],
             complexity_time="O(h)", complexity_space="O(1)",
             description="Walks down from the root, going left or right after each comparison."),

    AlgoInfo(TreeAlgorithm.INORDER, "In-order Traversal", _inorder_pc,
             tags=["tree", "traversal", "depth-first"],
             complexity_time="O(n)", complexity_space="O(h)",
             description="Left subtree, node, right subtree: a BST comes out sorted."),

    AlgoInfo(TreeAlgorithm.PREORDER, "Pre-order Traversal", _preorder_pc,
             tags=["tree", "traversal", "depth-first"],
             complexity_time="O(n)", complexity_space="O(h)",
             description="Node first, then the left and right subtrees."),

    AlgoInfo(TreeAlgorithm.POSTORDER, "Post-order Traversal", _postorder_pc,
             tags=["tree", "traversal", "depth-first"],
             complexity_time="O(n)", complexity_space="O(h)",
             description="Both subtrees first, then the node."),

    AlgoInfo(TreeAlgorithm.LEVEL_ORDER, "Level-order Traversal", _level_pc,
             tags=["tree", "traversal", "breadth-first"],
             complexity_time="O(n)", complexity_space="O(n)",
             description="Visits the tree level by level with a queue."),
]

REGISTRY: Dict[str, AlgoInfo] = {card.key: card for card in _CARDS}

_missing = [
    algo for family in FAMILIES
    for algo in family if algo.value not in REGISTRY or REGISTRY[algo.value].algorithm is not algo
]
if _missing:
    raise ImportError(f"Algorithms without a registry card: {_missing}")


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_algorithm(key: str) -> Optional[AlgoInfo]:
    """Return AlgoInfo by key, or None."""
    return REGISTRY.get(key)


def list_algorithms(family: Optional[str] = None) -> List[AlgoInfo]:
    """Registered algorithms in insertion order, optionally one family only."""
    return [a for a in REGISTRY.values() if family is None or a.family == family]


def algorithms_by_tag(tag: str) -> List[AlgoInfo]:
    """Filter registry by tag."""
    return [a for a in REGISTRY.values() if tag in a.tags]


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------
def sort_generator(algorithm: SortAlgorithm) -> Callable[[Sequence[Number]], Generator[SortStep, None, None]]:
    if algorithm is SortAlgorithm.BUBBLE:
        return bubble_sort
    elif algorithm is SortAlgorithm.SELECTION:
        return selection_sort
    elif algorithm is SortAlgorithm.INSERTION:
        return insertion_sort
    elif algorithm is SortAlgorithm.SHELL:
        return shell_sort
    elif algorithm is SortAlgorithm.MERGE:
        return merge_sort
    elif algorithm is SortAlgorithm.QUICK:
        return quick_sort
    elif algorithm is SortAlgorithm.HEAP:
        return heap_sort
    elif algorithm is SortAlgorithm.DUTCH_FLAG:
        return dutch_flag_sort
    raise ValueError(f"Unhandled sort algorithm: {algorithm!r}")


def search_generator(algorithm: SearchAlgorithm) -> Callable[..., Generator[SearchStep, None, None]]:
    if algorithm is SearchAlgorithm.LINEAR:
        return linear_search
    elif algorithm is SearchAlgorithm.BINARY:
        return binary_search
    raise ValueError(f"Unhandled search algorithm: {algorithm!r}")


def graph_generator(algorithm: GraphAlgorithm) -> Callable[..., Generator[GraphStep, None, None]]:
    if algorithm is GraphAlgorithm.BFS:
        return bfs
    elif algorithm is GraphAlgorithm.DFS:
        return dfs
    elif algorithm is GraphAlgorithm.DIJKSTRA:
        return dijkstra
    elif algorithm is GraphAlgorithm.TOPOLOGICAL:
        return topological_sort
    raise ValueError(f"Unhandled graph algorithm: {algorithm!r}")


def tree_generator(algorithm: TreeAlgorithm) -> Callable[..., Generator[TreeStep, None, None]]:
    if algorithm is TreeAlgorithm.INSERT:
        return bst_insert
    elif algorithm is TreeAlgorithm.SEARCH:
        return bst_search
    elif algorithm is TreeAlgorithm.INORDER:
        return inorder
    elif algorithm is TreeAlgorithm.PREORDER:
        return preorder
    elif algorithm is TreeAlgorithm.POSTORDER:
        return postorder
    elif algorithm is TreeAlgorithm.LEVEL_ORDER:
        return level_order
    raise ValueError(f"Unhandled tree algorithm: {algorithm!r}")


def generate_sort_trace(algorithm: SortAlgorithm, values: Sequence[Number]) -> Trace:
    """Run a sorting algorithm to completion.  Pure: same input, same trace."""
    steps = tuple(sort_generator(algorithm)(list(values)))
    logger.debug("%s: %d values → %d steps", algorithm.value, len(values), len(steps))
    return Trace(algorithm=algorithm.value, steps=steps)


def generate_search_trace(algorithm: SearchAlgorithm, values: Sequence[Number], target: Number) -> Trace:
    steps = tuple(search_generator(algorithm)(list(values), target))
    logger.debug("%s: %d values → %d steps", algorithm.value, len(values), len(steps))
    return Trace(algorithm=algorithm.value, steps=steps)


def generate_array_trace(
    algorithm: ArrayAlgorithm,
    values: Sequence[Number] = (),
    target: Number = 0,
    limit: int = 0,
) -> Trace:
    """
    The sieve reads only `limit` (n >= 2, else ValueError); the pointer
    searches read `values` and `target`.
    """
    if algorithm is ArrayAlgorithm.SIEVE:
        steps = tuple(sieve(limit))
    elif algorithm is ArrayAlgorithm.TWO_SUM:
        steps = tuple(two_sum(list(values), target))
    elif algorithm is ArrayAlgorithm.THREE_SUM:
        steps = tuple(three_sum(list(values), target))
    else:
        raise ValueError(f"Unhandled array algorithm: {algorithm!r}")
    logger.debug("%s → %d steps", algorithm.value, len(steps))
    return Trace(algorithm=algorithm.value, steps=steps)


def generate_tree_trace(
    algorithm: TreeAlgorithm,
    values: Sequence[Number],
    target: Optional[Number] = None,
) -> Trace:
    """Build a BST from `values` in order and trace one operation on it."""
    if algorithm is TreeAlgorithm.SEARCH:
        if target is None:
            raise ValueError("BST search needs a target value")
        steps = tuple(bst_search(list(values), target))
    else:
        steps = tuple(tree_generator(algorithm)(list(values)))
    logger.debug("%s: %d values → %d steps", algorithm.value, len(values), len(steps))
    return Trace(algorithm=algorithm.value, steps=steps)


def check_graph_preconditions(
    algorithm: GraphAlgorithm,
    graph: Graph,
    source: Optional[str] = None,
    target: Optional[str] = None,
) -> Optional[Failure]:
    """First precondition the request violates, or None."""
    info = REGISTRY[algorithm.value]

    if info.requires_weighted:
        if not graph.weighted:
            return Failure(FailureReason.GRAPH_NOT_WEIGHTED,
                           f"{info.label} requires a weighted graph")
        if graph.has_negative_edges():
            return Failure(FailureReason.NEGATIVE_WEIGHTS,
                           f"{info.label} requires non-negative edge weights")
    if info.requires_directed and not graph.directed:
        return Failure(FailureReason.GRAPH_NOT_DIRECTED,
                       f"{info.label} requires a directed graph (DAG)")
    if info.needs_source:
        if source is None or source == "":
            return Failure(FailureReason.SOURCE_NOT_FOUND, "Please select a start node")
        if source not in graph.nodes:
            return Failure(FailureReason.SOURCE_NOT_FOUND, "Start node not found")
        if target is not None and target not in graph.nodes:
            return Failure(FailureReason.TARGET_NOT_FOUND, "Target node not found")
    return None


def generate_graph_trace(
    algorithm: GraphAlgorithm,
    graph: Graph,
    source: Optional[str] = None,
    target: Optional[str] = None,
) -> TraceResult:
    """Check preconditions, then run the graph algorithm to completion."""
    failure = check_graph_preconditions(algorithm, graph, source, target)
    if failure is not None:
        logger.info("%s rejected: %s", algorithm.value, failure.message)
        return TraceResult(failure=failure)

    steps = tuple(graph_generator(algorithm)(graph, source, target))
    logger.debug("%s on %r → %d steps", algorithm.value, graph, len(steps))
    return TraceResult(trace=Trace(algorithm=algorithm.value, steps=steps))


__all__ = [
    "AlgoInfo",
    "REGISTRY",
    "SortAlgorithm",
    "SearchAlgorithm",
    "GraphAlgorithm",
    "ArrayAlgorithm",
    "TreeAlgorithm",
    "FAMILIES",
    "Failure",
    "FailureReason",
    "TraceResult",
    "get_algorithm",
    "list_algorithms",
    "algorithms_by_tag",
    "sort_generator",
    "search_generator",
    "graph_generator",
    "tree_generator",
    "generate_sort_trace",
    "generate_search_trace",
    "generate_array_trace",
    "generate_tree_trace",
    "generate_graph_trace",
    "check_graph_preconditions",
]
