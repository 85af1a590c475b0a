"""
bfs.py — Breadth-First Search
==============================
Generator-based BFS.  Yields a Step at every meaningful event:
  1. Start                      →  INIT, source queued at distance 0
  2. Dequeue a node             →  VISIT
  3. First sighting of a node   →  DISCOVER (with the edge it came through)
  4. Final step                 →  COMPLETE with distances / parents / visited
                                   (and the hop-count path when a target is given)

Neighbours are explored in edge insertion order; directed edges are
only followed forwards.
"""

from typing import Generator, List, Optional

from graph import Graph
from algorithms.step import GraphStep, GraphStepBuilder, StepKind


PSEUDOCODE: List[str] = [
    "def BFS(graph, source):",                  # 0
    "    queue ← [source]; dist[source] ← 0",   # 1
    "    while queue is not empty:",            # 2
    "        node ← queue.dequeue()",           # 3
    "        for neighbour in adj(node):",      # 4
    "            if neighbour not seen:",       # 5
    "                dist[nbr] ← dist[node] + 1",  # 6
    "                queue.enqueue(neighbour)", # 7
]


def bfs(
    graph: Graph,
    source: str,
    target: Optional[str] = None,
) -> Generator[GraphStep, None, None]:
    """
    Args:
        graph  : The graph to traverse.
        source : Starting node id (must exist).
        target : Optional node id; the run stops once it is visited.
    """

    sb = GraphStepBuilder()
    sb.distances[source] = 0
    sb.parents[source]   = None
    sb.queue             = [source]

    yield sb.build(StepKind.INIT, f"Starting BFS from node {graph.label(source)}", node=source)

    while sb.queue:
        node = sb.queue.pop(0)
        sb.visit(node)
        yield sb.build(
            StepKind.VISIT,
            f"Visiting node {graph.label(node)}",
            node=node,
            dist=sb.distances[node],
        )
        if node == target:
            break

        for nbr, edge in graph.neighbours(node):
            if nbr in sb.distances:
                continue
            sb.distances[nbr] = sb.distances[node] + 1
            sb.parents[nbr]   = node
            sb.queue.append(nbr)
            yield sb.build(
                StepKind.DISCOVER,
                f"Discovered node {graph.label(nbr)} at distance {sb.distances[nbr]}",
                node=nbr,
                dist=sb.distances[nbr],
                edge_id=edge.id,
                from_node=node,
                to_node=nbr,
            )

    yield _complete(graph, sb, "BFS", target)


def _complete(
    graph: Graph,
    sb: GraphStepBuilder,
    name: str,
    target: Optional[str],
    done: Optional[str] = None,
) -> GraphStep:
    if target is None:
        return sb.build(StepKind.COMPLETE, done or f"{name} traversal complete")
    path = sb.path_to(target) if target in sb.visited else ()
    if path:
        text = f"Target {graph.label(target)} reached: {' → '.join(graph.label(n) for n in path)}"
    else:
        text = f"{name} complete: node {graph.label(target)} is not reachable"
    return sb.build(StepKind.COMPLETE, text, node=target, path=path)
