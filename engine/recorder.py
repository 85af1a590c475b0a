"""
recorder.py — Run Analytics & Operation History
================================================
Everything here is a projection of a finished Trace.  Nothing counts
comparisons or swaps while an algorithm runs; the numbers are read back
off the steps, so a metric can never disagree with what was animated.

Usage:
    metrics = trace_metrics(trace)               # the analytics card
    metrics = trace_metrics(trace, graph=g)      # + path cost for graph runs
    result  = compare(metrics_a, metrics_b)      # comparison mode

    history = OperationHistory()
    engine  = PlaybackEngine(scheduler)
    engine.on_step = history.recorder(engine)
"""

import time
from collections import deque
from dataclasses import asdict, dataclass, field
from typing import Any, Callable, Deque, Dict, List, Optional, Sequence, Tuple

import settings
from graph import Graph
from algorithms.step import (
    GraphStep, PointerStep, SearchStep, SieveStep, SortStep, StepKind, Trace, TreeStep,
)


# ---------------------------------------------------------------------------
# Metrics dataclass: what the Analytics panel renders
# ---------------------------------------------------------------------------
@dataclass
class RunMetrics:
    algorithm:       str   = ""
    total_steps:     int   = 0          # number of Steps in the trace
    # sorting / searching
    comparisons:     int   = 0
    swaps:           int   = 0
    found:           bool  = False
    # array techniques
    primes:          int   = 0          # primes up to n
    matches:         int   = 0          # pairs / triplets hitting the target
    # graphs
    nodes_visited:   int   = 0
    edges_relaxed:   int   = 0          # edge_relax steps, improving or not
    improvements:    int   = 0          # edge_relax steps that lowered a distance
    path_length:     int   = 0          # number of edges on the final path
    path_cost:       float = 0.0        # total weight of the final path
    path_found:      bool  = False
    cyclic:          bool  = False

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# ---------------------------------------------------------------------------
# ComparisonResult: side-by-side analytics
# ---------------------------------------------------------------------------
@dataclass
class ComparisonResult:
    left:  RunMetrics = field(default_factory=RunMetrics)
    right: RunMetrics = field(default_factory=RunMetrics)
    # derived: algorithm name of the side that did less work, or "tie"
    winner_steps:       str = ""
    winner_comparisons: str = ""
    winner_swaps:       str = ""
    winner_nodes:       str = ""
    winner_path:        str = ""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# ---------------------------------------------------------------------------
# Metrics
# ---------------------------------------------------------------------------
def sort_metrics(steps: Sequence[SortStep]) -> Tuple[int, int]:
    """(comparisons, swaps): steps with a non-empty comparing / swapping set."""
    comparisons = sum(1 for s in steps if s.comparing)
    swaps       = sum(1 for s in steps if s.swapping)
    return comparisons, swaps


def trace_metrics(trace: Trace, graph: Optional[Graph] = None) -> RunMetrics:
    """Analytics card for any finished trace."""
    m = RunMetrics(algorithm=trace.algorithm, total_steps=len(trace))
    if len(trace) == 0:
        return m
    last = trace.last

    if isinstance(last, SortStep):
        m.comparisons, m.swaps = sort_metrics(trace.steps)

    elif isinstance(last, SearchStep):
        m.comparisons = sum(1 for s in trace if s.comparing)
        m.found       = last.found

    elif isinstance(last, SieveStep):
        m.primes = len(last.primes)

    elif isinstance(last, PointerStep):
        m.comparisons = sum(1 for s in trace if s.pointers and not s.matched)
        m.matches     = len(last.found)
        m.found       = bool(last.found)

    elif isinstance(last, TreeStep):
        m.comparisons   = sum(1 for s in trace if s.comparing)
        m.nodes_visited = len(last.output)
        m.found         = last.found

    elif isinstance(last, GraphStep):
        relax = [s for s in trace if s.kind == StepKind.EDGE_RELAX]
        m.nodes_visited = len(last.visited)
        m.edges_relaxed = len(relax)
        m.improvements  = sum(1 for s in relax if s.improved)
        m.cyclic        = last.cyclic
        path            = last.path
        m.path_found    = bool(path)
        m.path_length   = len(path) - 1 if len(path) > 1 else 0

        # path cost: sum edge weights along the path
        if graph is not None and len(path) > 1:
            for a, b in zip(path, path[1:]):
                e = graph.get_edge_between(a, b)
                if e:
                    m.path_cost += e.weight

    return m


# ---------------------------------------------------------------------------
# Comparison helper
# ---------------------------------------------------------------------------
def compare(left: RunMetrics, right: RunMetrics) -> ComparisonResult:
    """Given two runs' metrics, produce a ComparisonResult."""

    def winner(l_val, r_val):
        if l_val == r_val:
            return "tie"
        return left.algorithm if l_val < r_val else right.algorithm

    return ComparisonResult(
        left=left,
        right=right,
        winner_steps=winner(left.total_steps, right.total_steps),
        winner_comparisons=winner(left.comparisons, right.comparisons),
        winner_swaps=winner(left.swaps, right.swaps),
        winner_nodes=winner(left.nodes_visited, right.nodes_visited),
        winner_path=winner(left.path_cost, right.path_cost),
    )


# ---------------------------------------------------------------------------
# Operation history
# ---------------------------------------------------------------------------
def history_line(index: int, step) -> str:
    return f"Step {index + 1}: {step.description}"


def history_lines(trace: Trace, upto: Optional[int] = None) -> List[str]:
    """Lines for steps 0..upto (inclusive) of a trace, oldest first."""
    end = len(trace) if upto is None else min(upto + 1, len(trace))
    return [history_line(i, trace[i]) for i in range(end) if trace[i].description]


class OperationHistory:
    """
    The last `limit` steps shown, newest first, each stamped with the
    wall-clock time it was displayed.
    """

    def __init__(self, limit: int = settings.HISTORY_LIMIT, clock: Callable[[], float] = time.time):
        self._entries: Deque[Dict[str, Any]] = deque(maxlen=limit)
        self._clock = clock

    def record(self, index: int, step) -> None:
        if step is None or not step.description:
            return
        self._entries.appendleft({
            "time": time.strftime("%H:%M:%S", time.localtime(self._clock())),
            "text": history_line(index, step),
        })

    def recorder(self, engine) -> Callable[[object], None]:
        """on_step callback that logs whatever the engine is now showing."""
        def on_step(step):
            if isinstance(step, tuple):
                # comparison mode: one line per side
                for idx, side in zip(engine.indices, step):
                    self.record(idx, side)
            else:
                self.record(engine.cursor, step)
        return on_step

    def clear(self) -> None:
        self._entries.clear()

    @property
    def entries(self) -> List[Dict[str, Any]]:
        return list(self._entries)

    def lines(self) -> List[str]:
        return [f"[{e['time']}] {e['text']}" for e in self._entries]

    def __len__(self) -> int:
        return len(self._entries)
