"""
Tests for the graph trace generators: BFS, DFS, Dijkstra and
topological sort, plus the precondition failures the dispatcher
reports before any step is generated.
"""

import math
import unittest

from graph import Edge, Graph
from algorithms import (
    FailureReason,
    GraphAlgorithm,
    REGISTRY,
    SearchAlgorithm,
    SortAlgorithm,
    generate_graph_trace,
    get_algorithm,
    list_algorithms,
)
from algorithms.step import StepKind, validate_graph_step


INF = float("inf")


def build(nodes, edges, directed=False, weighted=True):
    """nodes: "ABC"; edges: [(u, v, w), …] with ids "u-v"."""
    g = Graph(directed=directed, weighted=weighted)
    for i, nid in enumerate(nodes, start=1):
        g.create_node(i, node_id=nid)
    for u, v, w in edges:
        g.create_edge(u, v, weight=w, edge_id=f"{u}-{v}")
    return g


def floyd_warshall(g):
    ids = g.node_ids()
    dist = {a: {b: (0 if a == b else INF) for b in ids} for a in ids}
    for e in g.edges.values():
        dist[e.source][e.target] = min(dist[e.source][e.target], e.weight)
        if not e.directed:
            dist[e.target][e.source] = min(dist[e.target][e.source], e.weight)
    for k in ids:
        for i in ids:
            for j in ids:
                if dist[i][k] + dist[k][j] < dist[i][j]:
                    dist[i][j] = dist[i][k] + dist[k][j]
    return dist


def run(algo, g, source=None, target=None):
    result = generate_graph_trace(algo, g, source, target)
    if not result.ok:
        raise AssertionError(result.failure)
    return result.trace


class TestRegistry(unittest.TestCase):

    def test_every_enum_member_has_a_card(self):
        for family in (SortAlgorithm, SearchAlgorithm, GraphAlgorithm):
            for algo in family:
                self.assertIs(REGISTRY[algo.value].algorithm, algo)

    def test_families(self):
        self.assertEqual(len(list_algorithms("sorting")), len(SortAlgorithm))
        self.assertEqual(len(list_algorithms("graph")), len(GraphAlgorithm))
        self.assertIsNone(get_algorithm("astar"))


class TestBFS(unittest.TestCase):

    def test_neighbours_follow_edge_insertion_order(self):
        g = build("ABCD", [("A", "C", 1), ("A", "B", 1), ("B", "D", 1)], weighted=False)
        trace = run(GraphAlgorithm.BFS, g, "A")
        visits = [s.node for s in trace if s.kind == StepKind.VISIT]
        self.assertEqual(visits, ["A", "C", "B", "D"])
        self.assertEqual(trace.last.distances, {"A": 0, "C": 1, "B": 1, "D": 2})

    def test_discover_references_the_traversed_edge(self):
        g = build("ABC", [("A", "B", 1), ("B", "C", 1)], weighted=False)
        trace = run(GraphAlgorithm.BFS, g, "A")
        discovers = [s for s in trace if s.kind == StepKind.DISCOVER]
        self.assertEqual([(s.edge_id, s.from_node, s.to_node) for s in discovers],
                         [("A-B", "A", "B"), ("B-C", "B", "C")])

    def test_directed_edges_only_followed_forwards(self):
        g = build("ABC", [("B", "A", 1), ("B", "C", 1)], directed=True, weighted=False)
        trace = run(GraphAlgorithm.BFS, g, "A")
        self.assertEqual(trace.last.visited, ("A",))

    def test_target_stops_early_with_path(self):
        g = build("ABCD", [("A", "B", 1), ("B", "C", 1), ("A", "D", 1)], weighted=False)
        trace = run(GraphAlgorithm.BFS, g, "A", "C")
        self.assertEqual(trace.last.kind, StepKind.COMPLETE)
        self.assertEqual(trace.last.path, ("A", "B", "C"))

    def test_unreachable_target(self):
        g = build("ABC", [("A", "B", 1)], weighted=False)
        trace = run(GraphAlgorithm.BFS, g, "A", "C")
        self.assertEqual(trace.last.path, ())
        self.assertIn("not reachable", trace.last.description)


class TestDFS(unittest.TestCase):

    def test_goes_deep_before_wide(self):
        g = build("ABCD", [("A", "B", 1), ("A", "C", 1), ("B", "D", 1)], weighted=False)
        trace = run(GraphAlgorithm.DFS, g, "A")
        visits = [s.node for s in trace if s.kind == StepKind.VISIT]
        self.assertEqual(visits, ["A", "B", "D", "C"])
        self.assertEqual(trace.last.parents, {"A": None, "B": "A", "D": "B", "C": "A"})

    def test_each_node_discovered_once(self):
        g = build("ABC", [("A", "B", 1), ("B", "C", 1), ("C", "A", 1)], weighted=False)
        trace = run(GraphAlgorithm.DFS, g, "A")
        discovered = [s.node for s in trace if s.kind == StepKind.DISCOVER]
        self.assertEqual(sorted(discovered), ["B", "C"])


class TestDijkstra(unittest.TestCase):

    def test_example_distances(self):
        g = build("ABCD", [("A", "B", 1), ("B", "C", 2), ("A", "C", 5)])
        trace = run(GraphAlgorithm.DIJKSTRA, g, "A")
        final = trace.last.distances
        self.assertEqual({k: final[k] for k in "ABC"}, {"A": 0, "B": 1, "C": 3})
        self.assertTrue(math.isinf(final["D"]))

    def test_matches_floyd_warshall(self):
        for seed in range(15):
            for directed in (False, True):
                with self.subTest(seed=seed, directed=directed):
                    g = Graph.generate_random(directed=directed, weighted=True, seed=seed)
                    source = g.node_ids()[0]
                    trace = run(GraphAlgorithm.DIJKSTRA, g, source)
                    self.assertEqual(trace.last.distances, floyd_warshall(g)[source])

    def test_distances_never_get_worse(self):
        for seed in range(10):
            g = Graph.generate_random(weighted=True, seed=seed)
            trace = run(GraphAlgorithm.DIJKSTRA, g, g.node_ids()[0])
            for nid in g.nodes:
                seen = [s.distances[nid] for s in trace]
                self.assertEqual(seen, sorted(seen, reverse=True))

    def test_failed_relaxation_emits_step_without_update(self):
        g = build("ABC", [("A", "B", 1), ("A", "C", 1), ("B", "C", 5)])
        trace = run(GraphAlgorithm.DIJKSTRA, g, "A")
        relax = [s for s in trace if s.kind == StepKind.EDGE_RELAX]
        failed = [s for s in relax if not s.improved]
        self.assertEqual([(s.from_node, s.to_node) for s in failed], [("B", "C")])
        for s in relax:
            self.assertEqual(s.improved, s.new_dist < s.old_dist)
        for s in failed:
            self.assertEqual(s.distances[s.to_node], s.old_dist)

    def test_ties_broken_by_node_insertion_order(self):
        # C's edge is inserted first, but B comes first among the nodes
        g = build("ABC", [("A", "C", 1), ("A", "B", 1)])
        trace = run(GraphAlgorithm.DIJKSTRA, g, "A")
        visits = [s.node for s in trace if s.kind == StepKind.VISIT]
        self.assertEqual(visits, ["A", "B", "C"])

    def test_target_path(self):
        g = build("ABCD", [("A", "B", 1), ("B", "C", 2), ("A", "C", 5), ("C", "D", 1)])
        trace = run(GraphAlgorithm.DIJKSTRA, g, "A", "D")
        self.assertEqual(trace.last.path, ("A", "B", "C", "D"))


class TestTopologicalSort(unittest.TestCase):

    def test_order_respects_every_edge(self):
        g = build("ABCDE", [("A", "C", 1), ("B", "C", 1), ("C", "D", 1), ("B", "E", 1)],
                  directed=True, weighted=False)
        trace = run(GraphAlgorithm.TOPOLOGICAL, g)
        order = trace.last.order
        self.assertFalse(trace.last.cyclic)
        self.assertEqual(len(order), g.node_count())
        pos = {nid: i for i, nid in enumerate(order)}
        for e in g.edges.values():
            self.assertLess(pos[e.source], pos[e.target])

    def test_random_graphs(self):
        for seed in range(20):
            g = Graph.generate_random(directed=True, seed=seed)
            trace = run(GraphAlgorithm.TOPOLOGICAL, g)
            partial = max((len(s.order) for s in trace), default=0)
            if trace.last.cyclic:
                self.assertEqual(trace.last.order, ())
                self.assertLess(partial, g.node_count())
            else:
                pos = {nid: i for i, nid in enumerate(trace.last.order)}
                for e in g.edges.values():
                    self.assertLess(pos[e.source], pos[e.target])

    def test_two_cycle_is_reported_in_band(self):
        g = build("ABC", [("A", "B", 1), ("B", "A", 1)], directed=True, weighted=False)
        result = generate_graph_trace(GraphAlgorithm.TOPOLOGICAL, g)
        self.assertTrue(result.ok)
        last = result.trace.last
        self.assertTrue(last.cyclic)
        self.assertEqual(last.order, ())
        self.assertLess(max(len(s.order) for s in result.trace), g.node_count())
        self.assertIn("cycle", last.description)

    def test_edge_added_as_undirected_is_still_one_way(self):
        g = build("ABC", [("A", "B", 1)], directed=True, weighted=False)
        g.add_edge(Edge("B", "C", directed=False, edge_id="B-C"))
        trace = run(GraphAlgorithm.TOPOLOGICAL, g)
        self.assertFalse(trace.last.cyclic)
        self.assertEqual(trace.last.order, ("A", "B", "C"))
        self.assertTrue(all(d >= 0 for s in trace for d in s.in_degree.values()))


class TestPreconditions(unittest.TestCase):

    def assertFailure(self, result, reason):
        self.assertFalse(result.ok)
        self.assertIsNone(result.trace)
        self.assertEqual(result.failure.reason, reason)
        self.assertTrue(result.failure.message)

    def test_dijkstra_needs_weighted_graph(self):
        g = build("AB", [("A", "B", 1)], weighted=False)
        self.assertFailure(generate_graph_trace(GraphAlgorithm.DIJKSTRA, g, "A"),
                           FailureReason.GRAPH_NOT_WEIGHTED)

    def test_dijkstra_rejects_negative_weights(self):
        g = build("AB", [("A", "B", -2)])
        self.assertFailure(generate_graph_trace(GraphAlgorithm.DIJKSTRA, g, "A"),
                           FailureReason.NEGATIVE_WEIGHTS)

    def test_topological_needs_directed_graph(self):
        g = build("AB", [("A", "B", 1)], weighted=False)
        self.assertFailure(generate_graph_trace(GraphAlgorithm.TOPOLOGICAL, g),
                           FailureReason.GRAPH_NOT_DIRECTED)

    def test_missing_source(self):
        g = build("AB", [("A", "B", 1)])
        for algo in (GraphAlgorithm.BFS, GraphAlgorithm.DFS, GraphAlgorithm.DIJKSTRA):
            with self.subTest(algorithm=algo.value):
                self.assertFailure(generate_graph_trace(algo, g, None),
                                   FailureReason.SOURCE_NOT_FOUND)
                self.assertFailure(generate_graph_trace(algo, g, "Z"),
                                   FailureReason.SOURCE_NOT_FOUND)

    def test_missing_target(self):
        g = build("AB", [("A", "B", 1)])
        self.assertFailure(generate_graph_trace(GraphAlgorithm.BFS, g, "A", "Z"),
                           FailureReason.TARGET_NOT_FOUND)


class TestStepContract(unittest.TestCase):

    def test_all_steps_reference_existing_ids(self):
        for seed in range(8):
            g = Graph.generate_random(directed=bool(seed % 2), weighted=True, seed=seed)
            source = g.node_ids()[0]
            runs = [GraphAlgorithm.BFS, GraphAlgorithm.DFS, GraphAlgorithm.DIJKSTRA]
            if g.directed:
                runs.append(GraphAlgorithm.TOPOLOGICAL)
            for algo in runs:
                with self.subTest(seed=seed, algorithm=algo.value):
                    trace = run(algo, g, source)
                    self.assertEqual(trace[0].kind, StepKind.INIT)
                    self.assertTrue(trace.last.is_final)
                    for step in trace:
                        validate_graph_step(step, g)

    def test_generation_is_deterministic(self):
        g = Graph.generate_random(weighted=True, seed=3)
        source = g.node_ids()[0]
        for algo in (GraphAlgorithm.BFS, GraphAlgorithm.DFS, GraphAlgorithm.DIJKSTRA):
            self.assertEqual(run(algo, g, source), run(algo, g, source))


if __name__ == "__main__":
    unittest.main()
