"""Directed weighted edge records.

An ``EdgeRecord`` is created only by ``DirectedWeightedGraph.connect`` and is
shared by the two adjacency maps it lives in (the source's outgoing map and
the destination's incoming map). Its endpoints never change; weight and the
scratch fields do.
"""

from __future__ import annotations

from typing import Tuple

# Tag value meaning "no predecessor recorded", shared by nodes and edges.
NO_TAG = -1


class EdgeRecord:
    """Directed edge ``src -> dest`` with a non-negative weight.

    Ordering operators compare weights only, so records sort cheaply and can
    be pushed onto a ``heapq``. Equality is stricter: two records are equal
    when source, destination and weight all match. ``info`` and ``tag`` are
    algorithm workspace and never take part in comparisons.

    The record does not validate anything; self-loops and negative weights
    are rejected by the graph before a record is built.
    """

    __slots__ = ("_src", "_dest", "weight", "info", "tag")

    def __init__(
        self,
        src: int,
        dest: int,
        weight: float,
        info: str = "",
        tag: int = NO_TAG,
    ) -> None:
        self._src = src
        self._dest = dest
        self.weight = weight
        self.info = info
        self.tag = tag

    @property
    def src(self) -> int:
        return self._src

    @property
    def dest(self) -> int:
        return self._dest

    @property
    def endpoints(self) -> Tuple[int, int]:
        """The ``(src, dest)`` pair that identifies this edge."""
        return (self._src, self._dest)

    def copy(self) -> EdgeRecord:
        """Return an independent record with the same endpoints, weight and scratch fields."""
        return EdgeRecord(self._src, self._dest, self.weight, self.info, self.tag)

    def reset_scratch(self, info: str = "") -> None:
        self.info = info
        self.tag = NO_TAG

    def compare_to(self, other: EdgeRecord) -> int:
        """Three-way weight comparison: -1, 0 or 1."""
        if self.weight < other.weight:
            return -1
        if self.weight > other.weight:
            return 1
        return 0

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, EdgeRecord):
            return NotImplemented
        return self.weight < other.weight

    def __le__(self, other: object) -> bool:
        if not isinstance(other, EdgeRecord):
            return NotImplemented
        return self.weight <= other.weight

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, EdgeRecord):
            return NotImplemented
        return self.weight > other.weight

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, EdgeRecord):
            return NotImplemented
        return self.weight >= other.weight

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EdgeRecord):
            return NotImplemented
        return (
            self._src == other._src
            and self._dest == other._dest
            and self.weight == other.weight
        )

    # Weight is mutable, so records cannot be dict keys or set members.
    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"EdgeRecord(src={self._src}, dest={self._dest}, weight={self.weight})"
