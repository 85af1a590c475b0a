"""
edge.py — Graph Edge
====================
A weighted link between two node ids.  Edges never hold Node objects, so
the arena has no reference cycles and an edge serialises as plain data.

An undirected edge is traversable both ways; `arcs()` spells out which
(from, to) hops it allows, and the Graph builds its adjacency lists from
exactly those hops.
"""

import numbers
import uuid
from typing import List, Optional, Tuple


class Edge:
    """
    Attributes:
        id       : Unique identifier ("edge-xxxxxxxx" unless supplied).
        source   : Node id the edge starts from.
        target   : Node id the edge ends at.
        weight   : Cost of the hop.  Unweighted graphs force it to 1.
        directed : If False, the edge can be walked target → source too.
    """

    __slots__ = ("id", "source", "target", "weight", "directed")

    def __init__(
        self,
        source: str,
        target: str,
        weight: float = 1,
        directed: bool = False,
        edge_id: Optional[str] = None,
    ):
        if isinstance(weight, bool) or not isinstance(weight, numbers.Real):
            raise TypeError(f"Edge weight must be a number, got {weight!r}")
        self.id:       str   = edge_id if edge_id is not None else f"edge-{str(uuid.uuid4())[:8]}"
        self.source:   str   = source
        self.target:   str   = target
        self.weight:   float = weight
        self.directed: bool  = directed

    def arcs(self) -> List[Tuple[str, str]]:
        """Hops this edge permits, as (from, to) pairs."""
        if self.directed:
            return [(self.source, self.target)]
        return [(self.source, self.target), (self.target, self.source)]

    def overlaps(self, other: "Edge") -> bool:
        """True if the two edges permit a common hop (a duplicate link)."""
        return bool(set(self.arcs()) & set(other.arcs()))

    def touches(self, node_id: str) -> bool:
        return node_id in (self.source, self.target)

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        return {
            "id":       self.id,
            "source":   self.source,
            "target":   self.target,
            "weight":   self.weight,
            "directed": self.directed,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Edge":
        weight = data.get("weight")
        return cls(
            source=data["source"],
            target=data["target"],
            weight=1 if weight is None else weight,
            directed=bool(data.get("directed", False)),
            edge_id=data.get("id"),
        )

    def __repr__(self) -> str:
        arrow = " → " if self.directed else " ↔ "
        return f"Edge({self.source}{arrow}{self.target}, w={self.weight})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Edge) and self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
