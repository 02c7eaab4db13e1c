"""Graph vertices and their adjacency maps.

Each node indexes the edges it takes part in twice over: ``outgoing`` keyed
by destination and ``incoming`` keyed by source. Only the owning graph
changes those maps (through the underscore helpers below); everyone else
gets read-only views.
"""

from __future__ import annotations

import math
from enum import Enum
from types import MappingProxyType
from typing import Dict, Mapping, Optional

from .edge import NO_TAG, EdgeRecord
from .geo import GeoLocation


class VisitState(Enum):
    """Traversal marker used by external algorithms."""

    UNVISITED = "unvisited"
    IN_PROGRESS = "in_progress"
    VISITED = "visited"


class NodeRecord:
    """A vertex identified by an integer key.

    Scratch fields (algorithm workspace)
    ------------------------------------
    ``weight``, ``info``, ``tag`` and ``visit`` belong to whichever algorithm
    is currently walking the graph (tentative distance, free-form note,
    predecessor key, traversal state). The graph never reads them, they are
    excluded from equality, and ``reset_scratch()`` puts them back to their
    defaults.
    """

    def __init__(self, key: int, location: Optional[GeoLocation] = None) -> None:
        self._key = key
        self._location = location.copy() if location is not None else GeoLocation()
        self._outgoing: Dict[int, EdgeRecord] = {}
        self._incoming: Dict[int, EdgeRecord] = {}
        # Graph currently storing this node; set and cleared by the graph only.
        self._graph: Optional[object] = None
        self.weight = math.inf
        self.info = ""
        self.tag = NO_TAG
        self.visit = VisitState.UNVISITED

    @property
    def key(self) -> int:
        return self._key

    @property
    def location(self) -> GeoLocation:
        return self._location

    @location.setter
    def location(self, value: GeoLocation) -> None:
        # Copy coordinates so the caller's object is never aliased.
        self._location.move_to(value)

    # Read-only adjacency views (live, not snapshots)
    @property
    def outgoing(self) -> Mapping[int, EdgeRecord]:
        """Edges leaving this node, keyed by destination key."""
        return MappingProxyType(self._outgoing)

    @property
    def incoming(self) -> Mapping[int, EdgeRecord]:
        """Edges entering this node, keyed by source key."""
        return MappingProxyType(self._incoming)

    @property
    def out_degree(self) -> int:
        return len(self._outgoing)

    @property
    def in_degree(self) -> int:
        return len(self._incoming)

    def has_edge_to(self, dest_key: int) -> bool:
        return dest_key in self._outgoing

    def edge_to(self, dest_key: int) -> Optional[EdgeRecord]:
        return self._outgoing.get(dest_key)

    def has_edge_from(self, src_key: int) -> bool:
        return src_key in self._incoming

    def edge_from(self, src_key: int) -> Optional[EdgeRecord]:
        return self._incoming.get(src_key)

    def reset_scratch(self) -> None:
        """Restore weight, info, tag and visit state to their defaults."""

        self.weight = math.inf
        self.info = ""
        self.tag = NO_TAG
        self.visit = VisitState.UNVISITED

    # Graph-internal adjacency mutation
    def _link_out(self, edge: EdgeRecord) -> None:
        self._outgoing[edge.dest] = edge

    def _link_in(self, edge: EdgeRecord) -> None:
        self._incoming[edge.src] = edge

    def _unlink_out(self, dest_key: int) -> Optional[EdgeRecord]:
        return self._outgoing.pop(dest_key, None)

    def _unlink_in(self, src_key: int) -> Optional[EdgeRecord]:
        return self._incoming.pop(src_key, None)

    def __eq__(self, other: object) -> bool:
        """Structural equality: same key and the same edges in both directions.

        Edges compare by (src, dest, weight). Scratch fields and location are
        ignored because they are transient algorithm state.
        """
        if not isinstance(other, NodeRecord):
            return NotImplemented
        return (
            self._key == other._key
            and self._outgoing == other._outgoing
            and self._incoming == other._incoming
        )

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        return str(self._key)

    def __repr__(self) -> str:
        return (
            f"NodeRecord(key={self._key}, out={sorted(self._outgoing)}, "
            f"in={sorted(self._incoming)})"
        )
