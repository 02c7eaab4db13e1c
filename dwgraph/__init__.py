"""
dwgraph - mutable in-memory directed weighted graph.

Integer-keyed nodes with planar positions, directed weighted edges indexed
in both directions, incremental edge counting, a mutation counter for
detecting changes during iteration, and fully independent deep copies.

Graph algorithms (shortest path, TSP, ...) are not included: they consume
this structure through its lookup and iteration API.
"""

__version__ = "0.1.0"

from .config import Config
from .geo import GeoLocation
from .edge import NO_TAG, EdgeRecord
from .node import NodeRecord, VisitState
from .graph import (
    ConcurrentModificationError,
    ConnectResult,
    DirectedWeightedGraph,
    GraphError,
    GraphInvariantError,
    InvalidEdgeError,
    InvalidNodeError,
    NodeNotFoundError,
)
from .schemas import EdgeSnapshot, GraphSnapshot, NodeSnapshot

__all__ = [
    # Core records
    "GeoLocation",
    "EdgeRecord",
    "NodeRecord",
    "VisitState",
    "NO_TAG",
    # Graph
    "DirectedWeightedGraph",
    "ConnectResult",
    # Errors
    "GraphError",
    "NodeNotFoundError",
    "InvalidEdgeError",
    "InvalidNodeError",
    "ConcurrentModificationError",
    "GraphInvariantError",
    # Snapshots
    "EdgeSnapshot",
    "NodeSnapshot",
    "GraphSnapshot",
    # Config
    "Config",
]
