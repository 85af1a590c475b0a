"""
result.py — Generation Outcome
==============================
Precondition problems (missing source, Dijkstra on an unweighted graph,
…) are returned to the caller as a Failure inside a TraceResult.  They
are never raised across the generator boundary, and no step is
generated when one applies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from algorithms.step import Trace


class FailureReason(Enum):
    SOURCE_NOT_FOUND   = "source_not_found"
    TARGET_NOT_FOUND   = "target_not_found"
    GRAPH_NOT_WEIGHTED = "graph_not_weighted"
    NEGATIVE_WEIGHTS   = "negative_weights"
    GRAPH_NOT_DIRECTED = "graph_not_directed"


@dataclass(frozen=True)
class Failure:
    reason:  FailureReason
    message: str


@dataclass(frozen=True)
class TraceResult:
    trace:   Optional[Trace]   = None
    failure: Optional[Failure] = None

    @property
    def ok(self) -> bool:
        return self.failure is None
