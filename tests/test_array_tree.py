"""
Tests for the sieve, the two-pointer searches and the BST traces.
"""

import unittest

from algorithms import (
    ArrayAlgorithm, TreeAlgorithm, generate_array_trace, generate_tree_trace,
    get_algorithm, list_algorithms,
)
from algorithms.step import TreeNodeView, step_to_dict
from algorithms.tree import SearchTree
from engine.recorder import trace_metrics


def primes_by_trial_division(n):
    return [k for k in range(2, n + 1) if all(k % d for d in range(2, int(k ** 0.5) + 1))]


class TestSieve(unittest.TestCase):

    def test_primes_match_trial_division(self):
        for n in (2, 3, 10, 30, 97, 200):
            with self.subTest(n=n):
                trace = generate_array_trace(ArrayAlgorithm.SIEVE, limit=n)
                self.assertTrue(trace.last.complete)
                self.assertEqual(list(trace.last.primes), primes_by_trial_division(n))
                self.assertEqual(trace.last.limit, n)

    def test_crossing_out_starts_at_square(self):
        trace = generate_array_trace(ArrayAlgorithm.SIEVE, limit=50)
        marked = [(s.current_prime, s.marking) for s in trace if s.marking]
        self.assertEqual([p for p, _ in marked], [2, 3, 5, 7])
        for p, multiples in marked:
            self.assertEqual(multiples[0], p * p)
            self.assertTrue(all(m % p == 0 for m in multiples))

    def test_first_step_flags_zero_and_one(self):
        first = generate_array_trace(ArrayAlgorithm.SIEVE, limit=5)[0]
        self.assertEqual(first.is_prime, (False, False, True, True, True, True))

    def test_limit_below_two_rejected(self):
        with self.assertRaises(ValueError):
            generate_array_trace(ArrayAlgorithm.SIEVE, limit=1)


class TestTwoPointers(unittest.TestCase):

    def test_pairs(self):
        trace = generate_array_trace(ArrayAlgorithm.TWO_SUM, [5, 3, 1, 4, 2], 6)
        self.assertEqual(trace[0].array, (1, 2, 3, 4, 5))
        self.assertEqual(trace.last.found, ((1, 5), (2, 4)))
        self.assertTrue(trace.last.search_complete)
        hits = [s.matched for s in trace if s.matched]
        self.assertEqual(hits, [(0, 4), (1, 3)])

    def test_pointers_never_cross(self):
        trace = generate_array_trace(ArrayAlgorithm.TWO_SUM, [8, 1, 6, 3, 9, 2], 11)
        for step in trace:
            if step.pointers:
                left, right = step.pointers
                self.assertLess(left, right)
                self.assertEqual(step.current_sum, step.array[left] + step.array[right])

    def test_no_pair(self):
        trace = generate_array_trace(ArrayAlgorithm.TWO_SUM, [1, 2], 10)
        self.assertEqual(trace.last.found, ())
        self.assertIn("No pairs", trace.last.description)

    def test_triplets_keep_repeats(self):
        trace = generate_array_trace(ArrayAlgorithm.THREE_SUM, [-1, 0, 1, 2, -1, -4], 0)
        self.assertEqual(trace.last.found, ((-1, -1, 2), (-1, 0, 1), (-1, 0, 1)))
        for step in trace:
            if step.pointers:
                i, left, right = step.pointers
                self.assertTrue(i < left < right)

    def test_short_input(self):
        trace = generate_array_trace(ArrayAlgorithm.THREE_SUM, [1, 2], 3)
        self.assertEqual(len(trace), 2)
        self.assertTrue(trace.last.search_complete)

    def test_metrics(self):
        trace = generate_array_trace(ArrayAlgorithm.TWO_SUM, [1, 2, 3, 4, 5], 6)
        m = trace_metrics(trace)
        self.assertEqual(m.comparisons, 2)
        self.assertEqual(m.matches, 2)
        self.assertTrue(m.found)


class TestSearchTree(unittest.TestCase):

    VALUES = [5, 3, 8, 1, 4]

    def test_structure(self):
        tree = SearchTree(self.VALUES)
        self.assertEqual(tree.root, 5)
        self.assertEqual(tree.children[5], [3, 8])
        self.assertEqual(tree.children[3], [1, 4])
        self.assertFalse(tree.insert(4))
        self.assertEqual(len(tree), 5)

    def test_insert_trace(self):
        trace = generate_tree_trace(TreeAlgorithm.INSERT, [5, 3, 5])
        self.assertEqual(trace.last.nodes, (TreeNodeView(5, 3, None), TreeNodeView(3)))
        self.assertTrue(trace.last.complete)
        compared = [(s.key, s.current) for s in trace if s.comparing]
        self.assertEqual(compared, [(3, 5), (5, 5)])
        self.assertTrue(any("skipped" in s.description for s in trace))

    def test_search_found(self):
        trace = generate_tree_trace(TreeAlgorithm.SEARCH, self.VALUES, 4)
        self.assertTrue(trace.last.found)
        self.assertEqual(trace.last.path, (5, 3, 4))
        self.assertTrue(trace_metrics(trace).found)
        self.assertEqual(trace_metrics(trace).comparisons, 3)

    def test_search_not_found(self):
        trace = generate_tree_trace(TreeAlgorithm.SEARCH, self.VALUES, 7)
        self.assertFalse(trace.last.found)
        self.assertEqual(trace.last.path, (5, 8))
        self.assertIn("not in the tree", trace.last.description)

    def test_search_needs_target(self):
        with self.assertRaises(ValueError):
            generate_tree_trace(TreeAlgorithm.SEARCH, self.VALUES)

    def test_traversal_orders(self):
        expected = {
            TreeAlgorithm.INORDER:     (1, 3, 4, 5, 8),
            TreeAlgorithm.PREORDER:    (5, 3, 1, 4, 8),
            TreeAlgorithm.POSTORDER:   (1, 4, 3, 8, 5),
            TreeAlgorithm.LEVEL_ORDER: (5, 3, 8, 1, 4),
        }
        for algorithm, order in expected.items():
            with self.subTest(algorithm=algorithm.value):
                trace = generate_tree_trace(algorithm, self.VALUES)
                self.assertEqual(trace.last.output, order)
                visits = [s.current for s in trace if s.current is not None]
                self.assertEqual(tuple(visits), order)
                self.assertEqual(trace_metrics(trace).nodes_visited, 5)

    def test_level_order_queue(self):
        trace = generate_tree_trace(TreeAlgorithm.LEVEL_ORDER, self.VALUES)
        self.assertEqual(trace[0].queue, (5,))
        self.assertEqual(trace[1].queue, (3, 8))
        self.assertEqual(trace[2].queue, (8, 1, 4))

    def test_empty_tree(self):
        trace = generate_tree_trace(TreeAlgorithm.INORDER, [])
        self.assertEqual(trace.last.output, ())
        self.assertTrue(trace.last.complete)

    def test_degenerate_tree_is_not_recursive(self):
        values = list(range(1500))
        trace = generate_tree_trace(TreeAlgorithm.POSTORDER, values)
        self.assertEqual(trace.last.output, tuple(reversed(values)))

    def test_step_serialises(self):
        trace = generate_tree_trace(TreeAlgorithm.INORDER, [2, 1])
        data = step_to_dict(trace.last)
        self.assertEqual(data["nodes"], [{"value": 2, "left": 1, "right": None},
                                         {"value": 1, "left": None, "right": None}])
        self.assertEqual(data["output"], [1, 2])


class TestCards(unittest.TestCase):

    def test_families(self):
        self.assertEqual(get_algorithm("sieve").family, "array")
        self.assertEqual(get_algorithm("bst_search").family, "tree")
        self.assertEqual([a.key for a in list_algorithms("tree")],
                         ["bst_insert", "bst_search", "inorder", "preorder", "postorder", "level_order"])

    def test_traversal_tags(self):
        self.assertIn("breadth-first", get_algorithm("level_order").tags)
        self.assertIn("depth-first", get_algorithm("postorder").tags)


if __name__ == "__main__":
    unittest.main()
