"""
node.py — Graph Node
====================
A vertex in the graph arena.  Nodes are plain records: identity, the
numeric value shown to the learner, and a canvas position.

Design decisions:
  - No algorithm state lives on the node.  Distances, parents and
    visited flags belong to the Step snapshots a generator yields, so a
    single Graph can be traced by any number of algorithms.
  - No references to edges or to the owning Graph.  Adjacency is kept
    by the Graph as id lists.
"""

from typing import Optional, Union
import uuid


Number = Union[int, float]


class Node:
    """
    Attributes:
        id    : Opaque unique identifier (short uuid by default, or user-supplied).
        value : Numeric value displayed on the canvas.  Unique within a Graph.
        x, y  : Canvas coordinates.  Irrelevant to every algorithm.
    """

    __slots__ = ("id", "value", "x", "y")

    def __init__(
        self,
        value: Number,
        x: float = 0.0,
        y: float = 0.0,
        node_id: Optional[str] = None,
    ):
        self.id: str      = node_id if node_id is not None else f"node-{str(uuid.uuid4())[:8]}"
        self.value: Number = value
        self.x: float     = x
        self.y: float     = y

    @property
    def label(self) -> str:
        """Value rendered without a trailing '.0' for whole floats."""
        if isinstance(self.value, float) and self.value.is_integer():
            return str(int(self.value))
        return str(self.value)

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        return {
            "id":    self.id,
            "value": self.value,
            "x":     self.x,
            "y":     self.y,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Node":
        return cls(
            value=data["value"],
            x=data.get("x", 0.0),
            y=data.get("y", 0.0),
            node_id=data.get("id"),
        )

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        return f"Node(id={self.id}, value={self.label}, pos=({self.x:.2f},{self.y:.2f}))"

    def __eq__(self, other) -> bool:
        return isinstance(other, Node) and self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
