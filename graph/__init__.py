"""
graph/
-----
Graph arena.  Public API:

    from graph import Graph, Node, Edge, GraphError
"""

from graph.node  import Node
from graph.edge  import Edge
from graph.graph import Graph, GraphError

__all__ = [
    "Node",
    "Edge",
    "Graph",
    "GraphError",
]
