"""
graph.py — Graph Arena
======================
Single source of truth for the graph.  Trace generators read from this
object; the interactive builder (outside this package) writes to it.

Responsibilities:
  1. CRUD on nodes & edges with validation    (add / remove / get)
  2. Adjacency queries                        (neighbours, in_degrees, …)
  3. Random graph factory                     (generate_random)
  4. Serialisation round-trip                 (to_dict / from_dict)

Design decisions:
  - The arena owns every Node and Edge, keyed by opaque id.  Edges name
    their endpoints by id, so nothing points back at its owner.
  - Dict insertion order is the tie-break every traversal relies on:
    `_adj[node_id]` lists (neighbour_id, edge_id) hops in the order the
    edges were added, built from Edge.arcs().
  - `directed` / `weighted` are graph-level flags and win over whatever
    an imported edge claims.
  - Invalid edits raise GraphError with a message fit to show the learner.
"""

import math
import random
from typing import Dict, List, Tuple, Optional

from graph.node import Node, Number
from graph.edge import Edge


class GraphError(ValueError):
    """Rejected graph edit: duplicate value, self-loop, dangling edge, …"""


class Graph:
    """
    Attributes:
        nodes    : {node_id: Node} in insertion order
        edges    : {edge_id: Edge} in insertion order
        directed : every edge is one-way
        weighted : weights are meaningful (otherwise all 1)
    """

    def __init__(self, directed: bool = False, weighted: bool = False):
        self.nodes:    Dict[str, Node] = {}
        self.edges:    Dict[str, Edge] = {}
        self.directed: bool           = directed
        self.weighted: bool           = weighted
        self._adj:     Dict[str, List[Tuple[str, str]]] = {}

    # ==================================================================
    # NODE CRUD
    # ==================================================================
    def add_node(self, node: Node) -> Node:
        if node.id in self.nodes:
            raise GraphError(f"Node id '{node.id}' already exists")
        if self.find_by_value(node.value) is not None:
            raise GraphError("Node with this value already exists")
        self.nodes[node.id] = node
        self._adj.setdefault(node.id, [])
        return node

    def create_node(
        self,
        value: Number,
        x: float = 0.0,
        y: float = 0.0,
        node_id: Optional[str] = None,
    ) -> Node:
        """Convenience: create + add in one call."""
        return self.add_node(Node(value=value, x=x, y=y, node_id=node_id))

    def remove_node(self, node_id: str) -> None:
        if node_id not in self.nodes:
            return
        # remove every edge touching this node
        for eid in [eid for eid, e in self.edges.items() if e.touches(node_id)]:
            self.remove_edge(eid)
        del self.nodes[node_id]
        self._adj.pop(node_id, None)

    def find_by_value(self, value: Number) -> Optional[Node]:
        for node in self.nodes.values():
            if node.value == value:
                return node
        return None

    # ==================================================================
    # EDGE CRUD
    # ==================================================================
    def add_edge(self, edge: Edge) -> Edge:
        """Validate and insert.  The graph-level flags overwrite the edge's own."""
        if edge.source not in self.nodes or edge.target not in self.nodes:
            raise GraphError("One or both nodes don't exist")
        if edge.source == edge.target:
            raise GraphError("Cannot create self-loop")
        if edge.id in self.edges:
            raise GraphError(f"Edge id '{edge.id}' already exists")
        edge.directed = self.directed
        if not self.weighted:
            edge.weight = 1
        if any(e.overlaps(edge) for e in self.edges.values()):
            raise GraphError("Edge already exists")

        self.edges[edge.id] = edge
        for a, b in edge.arcs():
            self._adj[a].append((b, edge.id))
        return edge

    def create_edge(
        self,
        source: str,
        target: str,
        weight: float = 1,
        edge_id: Optional[str] = None,
    ) -> Edge:
        return self.add_edge(Edge(
            source=source,
            target=target,
            weight=weight,
            edge_id=edge_id,
        ))

    def remove_edge(self, edge_id: str) -> None:
        if edge_id not in self.edges:
            return
        e = self.edges.pop(edge_id)
        for a, _ in e.arcs():
            self._adj[a] = [(n, eid) for n, eid in self._adj[a] if eid != edge_id]

    def get_edge(self, edge_id: str) -> Optional[Edge]:
        return self.edges.get(edge_id)

    def get_edge_between(self, a: str, b: str) -> Optional[Edge]:
        """First edge connecting a and b (direction-aware)."""
        for nbr, eid in self._adj.get(a, []):
            if nbr == b:
                return self.edges[eid]
        return None

    # ==================================================================
    # ADJACENCY QUERIES
    # ==================================================================
    def neighbours(self, node_id: str) -> List[Tuple[str, Edge]]:
        """[(neighbour_id, edge)] in edge insertion order, respecting directedness."""
        return [(nbr_id, self.edges[eid]) for nbr_id, eid in self._adj.get(node_id, [])]

    def in_degrees(self) -> Dict[str, int]:
        """In-degree of every node, counting directed edges only."""
        deg = {nid: 0 for nid in self.nodes}
        for e in self.edges.values():
            if e.directed:
                deg[e.target] += 1
        return deg

    # ==================================================================
    # SERIALISATION
    # ==================================================================
    def to_dict(self) -> dict:
        return {
            "directed": self.directed,
            "weighted": self.weighted,
            "nodes":    [n.to_dict() for n in self.nodes.values()],
            "edges":    [e.to_dict() for e in self.edges.values()],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Graph":
        """Rebuild a graph, applying the same validation as interactive edits."""
        g = cls(directed=bool(data.get("directed", False)), weighted=bool(data.get("weighted", False)))
        try:
            for nd in data.get("nodes", []):
                g.add_node(Node.from_dict(nd))
            for ed in data.get("edges", []):
                g.add_edge(Edge.from_dict(ed))
        except KeyError as exc:
            raise GraphError(f"Missing field {exc} in graph data") from exc
        except TypeError as exc:
            raise GraphError(str(exc)) from exc
        return g

    # ==================================================================
    # GENERATOR: factory class-method
    # ==================================================================
    @classmethod
    def generate_random(
        cls,
        directed: bool = False,
        weighted: bool = False,
        node_range: Tuple[int, int] = (6, 9),
        weight_range: Tuple[int, int] = (1, 10),
        seed: Optional[int] = None,
        center: Tuple[float, float] = (400, 250),
        radius: float = 150,
    ) -> "Graph":
        """
        Nodes valued 1..n laid out on a circle, then ~1.5·n random edge
        attempts.  Self-loops are re-drawn; duplicate edges are skipped,
        so the final edge count can be lower than the attempt count.
        """
        rng = random.Random(seed)
        g = cls(directed=directed, weighted=weighted)

        count = rng.randint(*node_range)
        ids = []
        for i in range(count):
            angle = 2 * math.pi * i / count
            node = g.create_node(
                i + 1,
                x=center[0] + radius * math.cos(angle),
                y=center[1] + radius * math.sin(angle),
                node_id=f"node-{i + 1}",
            )
            ids.append(node.id)

        for k in range(int(count * 1.5)):
            a = rng.randrange(count)
            b = rng.randrange(count)
            while b == a:
                b = rng.randrange(count)
            w = rng.randint(*weight_range) if weighted else 1
            try:
                g.create_edge(ids[a], ids[b], weight=w, edge_id=f"edge-{k + 1}")
            except GraphError:
                continue

        return g

    # ==================================================================
    # UTILITY
    # ==================================================================
    def node_count(self) -> int:
        return len(self.nodes)

    def edge_count(self) -> int:
        return len(self.edges)

    def has_negative_edges(self) -> bool:
        return any(e.weight < 0 for e in self.edges.values())

    def node_ids(self) -> List[str]:
        return list(self.nodes.keys())

    def label(self, node_id: str) -> str:
        node = self.nodes.get(node_id)
        return node.label if node else node_id

    def __repr__(self) -> str:
        return f"Graph(nodes={self.node_count()}, edges={self.edge_count()}, directed={self.directed})"
