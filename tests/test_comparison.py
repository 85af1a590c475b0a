"""
Tests for side-by-side playback under one shared cursor.
"""

import unittest

from algorithms import SortAlgorithm, generate_sort_trace
from algorithms.step import SortStep, Trace
from engine import ComparisonController, ManualScheduler, NoTraceLoaded, PlaybackState


def make_trace(length, name):
    return Trace(name, tuple(SortStep(array=(i,), description=f"{name} {i}") for i in range(length)))


class TestSharedCursor(unittest.TestCase):

    def setUp(self):
        self.clock = ManualScheduler()
        self.ctl = ComparisonController(self.clock, speed_ms=100)
        self.ctl.load_traces(make_trace(6, "short"), make_trace(9, "long"))

    def test_cursor_spans_the_longer_trace(self):
        self.assertEqual(self.ctl.length, 9)
        self.ctl.jump_to_end()
        self.assertEqual(self.ctl.cursor, 8)

    def test_shorter_side_freezes_on_final_step(self):
        self.ctl.goto_step(8)
        self.assertEqual(self.ctl.indices, (5, 8))
        left, right = self.ctl.current_step
        self.assertEqual(left.description, "short 5")
        self.assertEqual(right.description, "long 8")
        self.assertEqual(self.ctl.finished_sides, (True, True))

    def test_both_sides_advance_together(self):
        self.ctl.goto_step(3)
        self.assertEqual(self.ctl.indices, (3, 3))
        self.assertEqual(self.ctl.finished_sides, (False, False))

    def test_autoplay_runs_to_the_longer_end(self):
        self.ctl.play()
        for _ in range(5):
            self.clock.advance(100)
        self.assertEqual(self.ctl.indices, (5, 5))
        self.assertTrue(self.ctl.is_playing)
        for _ in range(10):
            self.clock.advance(100)
        self.assertEqual(self.ctl.indices, (5, 8))
        self.assertEqual(self.ctl.state, PlaybackState.FINISHED)
        self.assertEqual(self.clock.pending(), 0)

    def test_reload_invalidates_pending_tick(self):
        self.ctl.play()
        self.ctl.load_traces(make_trace(3, "a"), make_trace(3, "b"))
        self.clock.advance(1000)
        self.assertEqual(self.ctl.cursor, 0)
        self.assertEqual(self.ctl.state, PlaybackState.IDLE)

    def test_on_step_gets_both_sides(self):
        seen = []
        self.ctl.on_step = seen.append
        self.ctl.step_forward()
        self.assertEqual([(l.description, r.description) for l, r in seen], [("short 1", "long 1")])

    def test_single_trace_load_is_refused(self):
        with self.assertRaises(TypeError):
            self.ctl.load_trace(make_trace(3, "x"))

    def test_close(self):
        self.ctl.close()
        self.assertIsNone(self.ctl.current_step)
        with self.assertRaises(NoTraceLoaded):
            self.ctl.step_forward()


class TestComparisonResult(unittest.TestCase):

    def test_metrics_and_winners(self):
        values = [9, 8, 7, 6, 5, 4, 3, 2, 1]
        ctl = ComparisonController(ManualScheduler())
        ctl.load_traces(
            generate_sort_trace(SortAlgorithm.BUBBLE, values),
            generate_sort_trace(SortAlgorithm.MERGE, values),
        )
        result = ctl.comparison_result()
        self.assertEqual(result.left.algorithm, "bubble")
        self.assertEqual(result.right.algorithm, "merge")
        self.assertEqual(result.left.swaps, 36)
        self.assertEqual(result.right.swaps, 0)
        self.assertEqual(result.winner_swaps, "merge")
        self.assertEqual(result.winner_comparisons, "merge")
        self.assertEqual(result.winner_nodes, "tie")


if __name__ == "__main__":
    unittest.main()
