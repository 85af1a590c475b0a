"""
Tests for the graph arena: edit validation, adjacency, serialisation
and the random graph factory.
"""

import unittest

from graph import Edge, Graph, GraphError, Node


def line_graph(directed=False, weighted=False):
    g = Graph(directed=directed, weighted=weighted)
    for i, nid in enumerate("ABC", start=1):
        g.create_node(i, node_id=nid)
    g.create_edge("A", "B", weight=2, edge_id="ab")
    g.create_edge("B", "C", weight=3, edge_id="bc")
    return g


class TestGraphEdits(unittest.TestCase):

    def test_duplicate_value_rejected(self):
        g = Graph()
        g.create_node(5)
        with self.assertRaises(GraphError) as ctx:
            g.create_node(5)
        self.assertEqual(str(ctx.exception), "Node with this value already exists")

    def test_self_loop_rejected(self):
        g = Graph()
        a = g.create_node(1)
        with self.assertRaisesRegex(GraphError, "self-loop"):
            g.create_edge(a.id, a.id)

    def test_dangling_edge_rejected(self):
        g = Graph()
        a = g.create_node(1)
        with self.assertRaisesRegex(GraphError, "don't exist"):
            g.create_edge(a.id, "missing")

    def test_duplicate_edge_rejected(self):
        g = line_graph()
        with self.assertRaisesRegex(GraphError, "already exists"):
            g.create_edge("B", "A")

    def test_directed_reverse_edge_allowed(self):
        g = line_graph(directed=True)
        g.create_edge("B", "A", edge_id="ba")
        self.assertEqual(g.edge_count(), 3)

    def test_removing_a_node_removes_its_edges(self):
        g = line_graph()
        g.remove_node("B")
        self.assertEqual(g.edge_count(), 0)
        self.assertEqual(g.neighbours("A"), [])
        self.assertEqual(g.neighbours("C"), [])

    def test_unweighted_graph_ignores_weights(self):
        g = line_graph(weighted=False)
        self.assertEqual({e.weight for e in g.edges.values()}, {1})

    def test_added_edge_takes_the_graph_flags(self):
        g = line_graph(directed=True)
        g.create_node(4, node_id="D")
        edge = g.add_edge(Edge("C", "D", weight=9, directed=False, edge_id="cd"))
        self.assertTrue(edge.directed)
        self.assertEqual(edge.weight, 1)
        self.assertEqual(g.neighbours("D"), [])
        self.assertEqual(g.in_degrees()["D"], 1)


class TestAdjacency(unittest.TestCase):

    def test_undirected_neighbours_both_ways(self):
        g = line_graph()
        self.assertEqual([n for n, _ in g.neighbours("B")], ["A", "C"])

    def test_directed_neighbours_forward_only(self):
        g = line_graph(directed=True)
        self.assertEqual([n for n, _ in g.neighbours("B")], ["C"])
        self.assertEqual(g.in_degrees(), {"A": 0, "B": 1, "C": 1})

    def test_edge_between(self):
        g = line_graph(directed=True, weighted=True)
        self.assertEqual(g.get_edge_between("A", "B").weight, 2)
        self.assertIsNone(g.get_edge_between("B", "A"))

    def test_label_drops_trailing_zero(self):
        self.assertEqual(Node(3.0).label, "3")
        self.assertEqual(Node(2.5).label, "2.5")


class TestSerialisation(unittest.TestCase):

    def test_round_trip_preserves_structure(self):
        g = line_graph(directed=True, weighted=True)
        copy = Graph.from_dict(g.to_dict())
        self.assertEqual(copy.node_ids(), g.node_ids())
        self.assertEqual(list(copy.edges), list(g.edges))
        self.assertTrue(copy.directed)
        self.assertEqual(copy.get_edge_between("B", "C").weight, 3)

    def test_graph_flags_win_over_edge_data(self):
        data = {
            "directed": False,
            "weighted": False,
            "nodes": [{"id": "a", "value": 1}, {"id": "b", "value": 2}],
            "edges": [{"id": "e", "source": "a", "target": "b", "weight": 7, "directed": True}],
        }
        g = Graph.from_dict(data)
        edge = g.get_edge("e")
        self.assertFalse(edge.directed)
        self.assertEqual(edge.weight, 1)
        self.assertEqual([n for n, _ in g.neighbours("b")], ["a"])

    def test_missing_field_is_a_graph_error(self):
        with self.assertRaises(GraphError):
            Graph.from_dict({"nodes": [{"id": "a"}]})

    def test_invalid_edit_in_data_is_rejected(self):
        data = {"nodes": [{"id": "a", "value": 1}],
                "edges": [{"source": "a", "target": "a"}]}
        with self.assertRaises(GraphError):
            Graph.from_dict(data)

    def test_falsy_ids_are_kept(self):
        data = {
            "nodes": [{"id": 0, "value": 1}, {"id": "", "value": 2}],
            "edges": [{"id": 0, "source": 0, "target": ""}],
        }
        g = Graph.from_dict(data)
        self.assertEqual(g.node_ids(), [0, ""])
        self.assertEqual(list(g.edges), [0])

    def test_edge_from_dict_defaults(self):
        e = Edge.from_dict({"source": "a", "target": "b", "weight": None})
        self.assertEqual(e.weight, 1)
        self.assertFalse(e.directed)


class TestRandomGraph(unittest.TestCase):

    def test_seeded_generation_is_reproducible(self):
        a = Graph.generate_random(weighted=True, seed=7)
        b = Graph.generate_random(weighted=True, seed=7)
        self.assertEqual(a.to_dict(), b.to_dict())

    def test_shape(self):
        for seed in range(10):
            g = Graph.generate_random(directed=True, weighted=True, seed=seed)
            self.assertTrue(6 <= g.node_count() <= 9)
            self.assertLessEqual(g.edge_count(), int(g.node_count() * 1.5))
            for e in g.edges.values():
                self.assertNotEqual(e.source, e.target)
                self.assertTrue(1 <= e.weight <= 10)
                self.assertTrue(e.directed)
            self.assertEqual([n.value for n in g.nodes.values()], list(range(1, g.node_count() + 1)))


if __name__ == "__main__":
    unittest.main()
