"""
dfs.py — Depth-First Search
============================
Generator-based DFS.  Dives along the first unvisited neighbour (edge
insertion order) before backtracking.

The recursion is unrolled onto an explicit stack of neighbour
iterators, so the step order is exactly the recursive one but deep
graphs cannot hit the interpreter's recursion limit.

`dist` on DISCOVER / VISIT steps is the depth in the DFS tree — NOT a
shortest distance.
"""

from typing import Generator, Iterator, List, Optional, Tuple

from graph import Edge, Graph
from algorithms.bfs import _complete
from algorithms.step import GraphStep, GraphStepBuilder, StepKind


PSEUDOCODE: List[str] = [
    "def DFS(graph, node):",                    # 0
    "    visited.add(node)",                    # 1
    "    for neighbour in adj(node):",          # 2
    "        if neighbour not in visited:",     # 3
    "            DFS(graph, neighbour)",        # 4
]


def dfs(
    graph: Graph,
    source: str,
    target: Optional[str] = None,
) -> Generator[GraphStep, None, None]:

    sb = GraphStepBuilder()
    sb.distances[source] = 0
    sb.parents[source]   = None

    yield sb.build(StepKind.INIT, f"Starting DFS from node {graph.label(source)}", node=source)

    stack: List[Tuple[str, Iterator[Tuple[str, Edge]]]] = [(source, iter(graph.neighbours(source)))]
    sb.queue = [source]
    sb.visit(source)
    yield sb.build(StepKind.VISIT, f"Visiting node {graph.label(source)}", node=source, dist=0)
    found = source == target

    while stack and not found:
        node, neighbours = stack[-1]
        advanced = False
        for nbr, edge in neighbours:
            if nbr in sb.visited:
                continue
            sb.distances[nbr] = sb.distances[node] + 1
            sb.parents[nbr]   = node
            yield sb.build(
                StepKind.DISCOVER,
                f"Exploring edge to node {graph.label(nbr)}",
                node=nbr,
                dist=sb.distances[nbr],
                edge_id=edge.id,
                from_node=node,
                to_node=nbr,
            )

            stack.append((nbr, iter(graph.neighbours(nbr))))
            sb.queue = [n for n, _ in stack]
            sb.visit(nbr)
            yield sb.build(StepKind.VISIT, f"Visiting node {graph.label(nbr)}",
                           node=nbr, dist=sb.distances[nbr])
            advanced = True
            found = nbr == target
            break

        if not advanced:
            stack.pop()
            sb.queue = [n for n, _ in stack]

    yield _complete(graph, sb, "DFS", target)
