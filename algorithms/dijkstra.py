"""
dijkstra.py — Dijkstra's Shortest-Path Algorithm
==================================================
Extract-min by scanning every unvisited node (node insertion order) for
the smallest tentative distance.  Ties go to the first node scanned.

This is O(V²) on purpose: a heap would pop equal distances in a
different order, and recorded traces must not change.

Yields a Step at:
  1. Initialise distances (all ∞, source 0)   →  INIT
  2. Extract the minimum node                 →  VISIT
  3. Every relaxation attempt on an unvisited
     neighbour, successful or not             →  EDGE_RELAX (improved flag)
  4. No reachable unvisited node left, or
     target extracted                         →  COMPLETE

Preconditions (checked by the dispatcher before generation):
weighted graph, no negative weights, source exists.
"""

from typing import Dict, Generator, List, Optional

from graph import Graph
from algorithms.bfs import _complete
from algorithms.step import GraphStep, GraphStepBuilder, StepKind


INF = float("inf")

PSEUDOCODE: List[str] = [
    "def Dijkstra(graph, source):",                 # 0
    "    dist ← {v: ∞ for v in V}; dist[source] ← 0",  # 1
    "    unvisited ← V",                            # 2
    "    while unvisited has a finite dist:",       # 3
    "        u ← argmin(dist[v] for v in unvisited)",  # 4
    "        for (v, w) in adj(u), v unvisited:",   # 5
    "            if dist[u] + w < dist[v]:",        # 6
    "                dist[v] ← dist[u] + w",        # 7
    "                parent[v] ← u",                # 8
]


def dijkstra(
    graph: Graph,
    source: str,
    target: Optional[str] = None,
) -> Generator[GraphStep, None, None]:

    sb = GraphStepBuilder()
    sb.distances = {nid: INF for nid in graph.nodes}
    sb.parents   = {nid: None for nid in graph.nodes}
    sb.distances[source] = 0
    unvisited: Dict[str, None] = dict.fromkeys(graph.nodes)
    sb.queue = [source]

    yield sb.build(StepKind.INIT, f"Starting Dijkstra from node {graph.label(source)}", node=source)

    while unvisited:
        current, best = _extract_min(unvisited, sb.distances)
        if current is None:
            break

        del unvisited[current]
        sb.visit(current)
        sb.queue = _frontier(unvisited, sb.distances)
        yield sb.build(
            StepKind.VISIT,
            f"Visiting node {graph.label(current)} with distance {best}",
            node=current,
            dist=best,
        )
        if current == target:
            break

        for nbr, edge in graph.neighbours(current):
            if nbr not in unvisited:
                continue
            old = sb.distances[nbr]
            new = best + edge.weight
            improved = new < old
            if improved:
                sb.distances[nbr] = new
                sb.parents[nbr]   = current
                sb.queue = _frontier(unvisited, sb.distances)
                text = f"Updated distance to node {graph.label(nbr)}: {new}"
            else:
                text = f"Edge {graph.label(current)}→{graph.label(nbr)}: {new} ≥ current {old}, no improvement"
            yield sb.build(
                StepKind.EDGE_RELAX,
                text,
                edge_id=edge.id,
                from_node=current,
                to_node=nbr,
                old_dist=old,
                new_dist=new,
                improved=improved,
            )

    yield _complete(graph, sb, "Dijkstra", target, done="Dijkstra algorithm complete")


def _extract_min(unvisited: Dict[str, None], dist: Dict[str, float]):
    current, best = None, INF
    for nid in unvisited:
        if dist[nid] < best:
            current, best = nid, dist[nid]
    return current, best


def _frontier(unvisited: Dict[str, None], dist: Dict[str, float]) -> List[str]:
    return [nid for nid in unvisited if dist[nid] < INF]
