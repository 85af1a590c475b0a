"""
topological_sort.py — Kahn's Algorithm
======================================
  1. Compute in-degrees, queue every zero in-degree node (node order)  →  INIT
  2. Pop a node, append it to the order                                →  VISIT
  3. For each outgoing edge, decrement the head's in-degree           →  EDGE_RELAX
  4. Head reaches in-degree 0, enqueue it                              →  DISCOVER
  5. COMPLETE with the order, or — when fewer nodes than the graph has
     were emitted — `cyclic=True` and an empty order.

A cycle is an in-band outcome, not an error: the trace is complete and
the last step says no valid ordering exists.
"""

from typing import Generator, List, Optional

from graph import Graph
from algorithms.step import GraphStep, GraphStepBuilder, StepKind


PSEUDOCODE: List[str] = [
    "def topological_sort(graph):",                 # 0
    "    in_deg ← in-degree of every node",         # 1
    "    queue ← [v for v in V if in_deg[v] = 0]",  # 2
    "    while queue is not empty:",                # 3
    "        u ← queue.dequeue(); order.append(u)", # 4
    "        for v in adj(u):",                     # 5
    "            in_deg[v] ← in_deg[v] - 1",        # 6
    "            if in_deg[v] = 0: queue.enqueue(v)",  # 7
    "    if |order| < |V|: cycle",                  # 8
]


def topological_sort(
    graph: Graph,
    source: Optional[str] = None,
    target: Optional[str] = None,
) -> Generator[GraphStep, None, None]:
    """source / target are accepted for a uniform signature and ignored."""

    sb = GraphStepBuilder()
    sb.in_degree = graph.in_degrees()
    sb.queue     = [nid for nid in graph.nodes if sb.in_degree[nid] == 0]

    yield sb.build(StepKind.INIT, "Starting Topological Sort")

    while sb.queue:
        u = sb.queue.pop(0)
        sb.order.append(u)
        sb.visit(u)
        yield sb.build(StepKind.VISIT, f"Adding node {graph.label(u)} to sorted order", node=u)

        for v, edge in graph.neighbours(u):
            sb.in_degree[v] -= 1
            yield sb.build(
                StepKind.EDGE_RELAX,
                f"Decreasing in-degree of node {graph.label(v)} to {sb.in_degree[v]}",
                edge_id=edge.id,
                from_node=u,
                to_node=v,
            )
            if sb.in_degree[v] == 0:
                sb.queue.append(v)
                yield sb.build(
                    StepKind.DISCOVER,
                    f"Node {graph.label(v)} has in-degree 0, adding to queue",
                    node=v,
                    edge_id=edge.id,
                    from_node=u,
                    to_node=v,
                )

    if len(sb.order) < graph.node_count():
        yield sb.build(
            StepKind.COMPLETE,
            "Graph has a cycle, topological sort not possible",
            order=(),
            cyclic=True,
        )
    else:
        yield sb.build(StepKind.COMPLETE, "Topological sort complete")
