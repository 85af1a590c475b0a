"""
engine/
-------
Playback & analytics layer.

    from engine import PlaybackEngine, ComparisonController, ManualScheduler
    from engine import trace_metrics, compare, OperationHistory
"""

from engine.scheduler  import Scheduler, ManualScheduler, MonotonicScheduler, AsyncioScheduler
from engine.playback   import PlaybackEngine, PlaybackState, NoTraceLoaded
from engine.recorder   import (
    RunMetrics, ComparisonResult, OperationHistory,
    compare, sort_metrics, trace_metrics, history_lines,
)
from engine.comparison import ComparisonController

__all__ = [
    "Scheduler",
    "ManualScheduler",
    "MonotonicScheduler",
    "AsyncioScheduler",
    "PlaybackEngine",
    "PlaybackState",
    "NoTraceLoaded",
    "ComparisonController",
    "RunMetrics",
    "ComparisonResult",
    "OperationHistory",
    "compare",
    "sort_metrics",
    "trace_metrics",
    "history_lines",
]
