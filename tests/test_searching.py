"""
Tests for the linear and binary search traces.
"""

import unittest

from algorithms import SearchAlgorithm, generate_search_trace
from algorithms.step import SearchStep


class TestLinearSearch(unittest.TestCase):

    def test_found_stops_at_first_match(self):
        trace = generate_search_trace(SearchAlgorithm.LINEAR, [4, 2, 7, 2], 2)
        self.assertTrue(trace.last.found)
        self.assertTrue(trace.last.search_complete)
        self.assertEqual(trace.last.found_index, 1)
        checked = [s.current_index for s in trace if s.comparing]
        self.assertEqual(checked, [0, 1])

    def test_not_found_checks_every_element(self):
        trace = generate_search_trace(SearchAlgorithm.LINEAR, [4, 2, 7], 9)
        self.assertFalse(trace.last.found)
        self.assertTrue(trace.last.search_complete)
        self.assertEqual(sum(1 for s in trace if s.comparing), 3)
        self.assertIn("not in the array", trace.last.description)

    def test_empty_input(self):
        trace = generate_search_trace(SearchAlgorithm.LINEAR, [], 1)
        self.assertEqual(len(trace), 2)
        self.assertFalse(trace.last.found)


class TestBinarySearch(unittest.TestCase):

    def test_searches_the_sorted_array(self):
        trace = generate_search_trace(SearchAlgorithm.BINARY, [9, 1, 5, 3, 7], 7)
        self.assertEqual(trace[0].array, (1, 3, 5, 7, 9))
        self.assertTrue(trace.last.found)
        self.assertEqual(trace.last.found_index, 3)

    def test_midpoints_halve_the_window(self):
        trace = generate_search_trace(SearchAlgorithm.BINARY, list(range(1, 16)), 1)
        mids = [s.mid for s in trace if s.comparing]
        self.assertEqual(mids, [7, 3, 1, 0])

    def test_not_found(self):
        trace = generate_search_trace(SearchAlgorithm.BINARY, [1, 3, 5], 4)
        self.assertFalse(trace.last.found)
        self.assertTrue(trace.last.search_complete)
        for step in trace:
            self.assertIsInstance(step, SearchStep)
            for i in step.comparing:
                self.assertTrue(0 <= i < 3)


if __name__ == "__main__":
    unittest.main()
