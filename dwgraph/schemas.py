"""Pydantic snapshot models for graphs.

These models mirror the live records in ``node.py`` and ``edge.py`` but are
frozen, so a snapshot handed to a caller can never be used to change the
graph it came from. ``DirectedWeightedGraph.snapshot()`` builds them.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class EdgeSnapshot(BaseModel):
    """Point-in-time view of one directed edge."""

    model_config = ConfigDict(frozen=True)

    src: int = Field(..., description="Source node key")
    dest: int = Field(..., description="Destination node key")
    weight: float = Field(..., ge=0, description="Edge weight (non-negative)")


class NodeSnapshot(BaseModel):
    """Point-in-time view of one node: position and degree."""

    model_config = ConfigDict(frozen=True)

    key: int
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    out_degree: int = Field(0, ge=0)
    in_degree: int = Field(0, ge=0)


class GraphSnapshot(BaseModel):
    """Immutable view of a whole graph at the moment it was taken."""

    model_config = ConfigDict(frozen=True)

    nodes: Dict[int, NodeSnapshot] = Field(
        default_factory=dict,
        description="Map of node key → node snapshot",
    )
    edges: List[EdgeSnapshot] = Field(
        default_factory=list,
        description="Every edge once, grouped by source node",
    )
    edge_count: int = Field(0, ge=0)
    mutation_count: int = Field(0, ge=0)

    def edge_weights(self) -> Dict[Tuple[int, int], float]:
        """Return ``{(src, dest): weight}`` for every edge."""
        return {(edge.src, edge.dest): edge.weight for edge in self.edges}

    def weight_of(self, src: int, dest: int) -> Optional[float]:
        return self.edge_weights().get((src, dest))
