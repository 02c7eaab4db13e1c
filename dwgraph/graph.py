"""
Directed weighted graph container.

The graph is the sole owner of its NodeRecords and the only code that
changes adjacency maps. Every mutator validates first and then applies the
whole change, so a call either completes or raises without touching state.

Bookkeeping kept alongside the nodes:
1. ``edge_count`` - number of distinct (src, dest) edges, maintained incrementally
2. ``mutation_count`` - grows on every structural change, never on a no-op

Iterators handed out by the graph are live. A structural change made while
one is in progress surfaces as ConcurrentModificationError on the next step.
Callers that need to mutate while walking should materialise a list first
or work on ``deep_copy()``.
"""

from __future__ import annotations

import math
from enum import Enum
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, TypeVar

from .config import Config
from .edge import EdgeRecord
from .geo import GeoLocation
from .logging_utils import log_info, log_mutation, log_rejected, log_success
from .node import NodeRecord
from .schemas import EdgeSnapshot, GraphSnapshot, NodeSnapshot

T = TypeVar("T")


# =============================
# Module-level Exceptions
# =============================

class GraphError(Exception):
    """Base class for every error raised by the graph."""


class NodeNotFoundError(GraphError, KeyError):
    """Raised when an operation references a node key that is not in the graph."""

    def __init__(self, *, key: int, operation: str) -> None:
        self.key = key
        self.operation = operation
        self.message = f"{operation}: node {key} does not exist in the graph"
        super().__init__(self.message)

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return self.message


class InvalidEdgeError(GraphError, ValueError):
    """Raised when connect() is asked for a self-loop or a negative/NaN weight."""

    def __init__(self, *, src: int, dest: int, weight: float, reason: str) -> None:
        self.src = src
        self.dest = dest
        self.weight = weight
        self.reason = reason
        super().__init__(f"Cannot connect {src}->{dest} (weight={weight}): {reason}")


class InvalidNodeError(GraphError, ValueError):
    """Raised when add_node() receives a node it cannot take ownership of."""

    def __init__(self, *, key: int, reason: str) -> None:
        self.key = key
        self.reason = reason
        message = (
            f"Cannot add node {key}: {reason}; nodes must be added bare and "
            "connected through the graph.\n\n"
            "Remediation tips:\n"
            "  - Build a fresh NodeRecord (or use graph.new_node) and call connect()\n"
            "  - To move a subgraph between graphs, copy it with deep_copy()"
        )
        super().__init__(message)


class ConcurrentModificationError(GraphError, RuntimeError):
    """Raised by a live iterator when the graph changed structurally under it."""

    def __init__(self, *, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Graph was modified during iteration (mutation count {expected} -> {actual}). "
            "Materialise the iterator with list() before mutating, or iterate a deep_copy()."
        )


class GraphInvariantError(GraphError, AssertionError):
    """Raised by check_invariants() listing every inconsistency found."""

    def __init__(self, *, violations: List[str]) -> None:
        self.violations = violations
        message_lines = [f"Graph invariants violated ({len(violations)}):"]
        message_lines.extend(f"  - {violation}" for violation in violations)
        super().__init__("\n".join(message_lines))


class ConnectResult(Enum):
    """What connect() did with an accepted request."""

    CREATED = "created"
    UPDATED = "updated"


class DirectedWeightedGraph:
    """
    Mutable directed weighted graph keyed by integer node ids.

    Not thread-safe: callers that share a graph across threads must
    serialise all mutating calls themselves.
    """

    def __init__(
        self,
        *,
        verbose: Optional[bool] = None,
        log_rejected: Optional[bool] = None,
    ) -> None:
        """
        Create an empty graph.

        Args:
            verbose: Print every structural change (defaults to Config.VERBOSE)
            log_rejected: Print rejected operations before raising
                (defaults to Config.LOG_REJECTED)
        """
        self.verbose = Config.VERBOSE if verbose is None else verbose
        self.log_rejected = Config.LOG_REJECTED if log_rejected is None else log_rejected
        self._nodes: Dict[int, NodeRecord] = {}
        self._edge_count = 0
        self._mc = 0

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def get_node(self, key: int) -> Optional[NodeRecord]:
        """Return the node with ``key``, or None if absent."""
        return self._nodes.get(key)

    def get_edge(self, src: int, dest: int) -> Optional[EdgeRecord]:
        """Return the edge ``src -> dest``, or None if either is missing."""
        node = self._nodes.get(src)
        if node is None:
            return None
        return node.edge_to(dest)

    @property
    def nodes(self) -> Mapping[int, NodeRecord]:
        """Read-only live mapping of key -> node."""
        return MappingProxyType(self._nodes)

    def node_size(self) -> int:
        return len(self._nodes)

    def edge_size(self) -> int:
        return self._edge_count

    def mutation_count(self) -> int:
        return self._mc

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, key: object) -> bool:
        return key in self._nodes

    # ------------------------------------------------------------------
    # Live iteration
    # ------------------------------------------------------------------

    def all_nodes(self) -> Iterator[NodeRecord]:
        """Iterate every node. Structural changes mid-iteration raise."""
        return self._guarded(self._nodes.values())

    def outgoing_edges(self, key: int) -> Iterator[EdgeRecord]:
        """Iterate edges leaving ``key``.

        ``key`` must be in the graph. Unlike get_node/get_edge, an absent key
        is an error rather than an empty result, so a typo cannot pass for a
        sink node.

        Raises:
            NodeNotFoundError: If ``key`` is not in the graph
        """
        return self._guarded(self._require(key, "outgoing_edges")._outgoing.values())

    def incoming_edges(self, key: int) -> Iterator[EdgeRecord]:
        """Iterate edges entering ``key``.

        ``key`` must be in the graph, as for outgoing_edges().

        Raises:
            NodeNotFoundError: If ``key`` is not in the graph
        """
        return self._guarded(self._require(key, "incoming_edges")._incoming.values())

    def all_edges(self) -> Iterator[EdgeRecord]:
        """Iterate every edge once (via the outgoing maps)."""

        def edges() -> Iterator[EdgeRecord]:
            for node in self._nodes.values():
                yield from node._outgoing.values()

        return self._guarded(edges())

    def _guarded(self, source: Iterable[T]) -> Iterator[T]:
        # Capture the counter now, not on first next(), so a mutation between
        # creating the iterator and consuming it is also detected.
        expected = self._mc
        iterator = iter(source)

        def walk() -> Iterator[T]:
            while True:
                # Check before advancing: the underlying dict iterator would
                # otherwise fail first with a less helpful RuntimeError.
                if self._mc != expected:
                    raise ConcurrentModificationError(expected=expected, actual=self._mc)
                try:
                    item = next(iterator)
                except StopIteration:
                    return
                yield item

        return walk()

    def _require(self, key: int, operation: str) -> NodeRecord:
        node = self._nodes.get(key)
        if node is None:
            if self.log_rejected:
                log_rejected(f"[Graph] {operation}: node {key} not found")
            raise NodeNotFoundError(key=key, operation=operation)
        return node

    # ------------------------------------------------------------------
    # Mutators
    # ------------------------------------------------------------------

    def add_node(self, node: NodeRecord) -> bool:
        """
        Insert ``node`` unless its key is already present.

        Re-adding an existing key is a strict no-op: the stored node is kept,
        no counter moves, and False is returned.

        Raises:
            InvalidNodeError: If ``node`` is still stored in another graph, or
                already has edges (e.g. it was returned by remove_node)
        """
        if node.key in self._nodes:
            return False
        if node._graph is not None:
            self._reject_node(node.key, "it is still stored in another graph")
        if node.out_degree or node.in_degree:
            self._reject_node(
                node.key,
                f"it already has {node.out_degree} outgoing and "
                f"{node.in_degree} incoming edge(s)",
            )
        node._graph = self
        self._nodes[node.key] = node
        self._mc += 1
        if self.verbose:
            log_mutation(f"[Graph] Added node {node.key} at ({node.location})")
        return True

    def new_node(self, key: int, location: Optional[GeoLocation] = None) -> NodeRecord:
        """Create and add a bare node, returning the node stored under ``key``.

        If ``key`` already exists the existing node is returned untouched.
        """
        if key not in self._nodes:
            self.add_node(NodeRecord(key, location))
        return self._nodes[key]

    def connect(self, src: int, dest: int, weight: float) -> ConnectResult:
        """
        Create the edge ``src -> dest`` or update its weight.

        Reconnecting an existing pair always counts as an update, even when
        the weight is identical: ``mutation_count`` grows, ``edge_size`` does not.

        Raises:
            InvalidEdgeError: Self-loop, negative weight, or NaN weight
            NodeNotFoundError: ``src`` or ``dest`` is not in the graph
        """
        if src == dest:
            self._reject_edge(src, dest, weight, "self-loops are not allowed")
        if math.isnan(weight) or weight < 0:
            self._reject_edge(src, dest, weight, "weight must be a non-negative number")
        source = self._require(src, "connect")
        target = self._require(dest, "connect")

        existing = source.edge_to(dest)
        if existing is not None:
            existing.weight = weight
            self._mc += 1
            if self.verbose:
                log_mutation(f"[Graph] Updated edge {src}->{dest} weight={weight}")
            return ConnectResult.UPDATED

        # One shared record: both maps must always agree on the weight.
        edge = EdgeRecord(src, dest, weight, info=Config.DEFAULT_EDGE_INFO)
        source._link_out(edge)
        target._link_in(edge)
        self._edge_count += 1
        self._mc += 1
        if self.verbose:
            log_mutation(f"[Graph] Connected {src}->{dest} weight={weight}")
        return ConnectResult.CREATED

    def _reject_node(self, key: int, reason: str) -> None:
        if self.log_rejected:
            log_rejected(f"[Graph] add_node {key} rejected: {reason}")
        raise InvalidNodeError(key=key, reason=reason)

    def _reject_edge(self, src: int, dest: int, weight: float, reason: str) -> None:
        if self.log_rejected:
            log_rejected(f"[Graph] connect {src}->{dest} rejected: {reason}")
        raise InvalidEdgeError(src=src, dest=dest, weight=weight, reason=reason)

    def remove_edge(self, src: int, dest: int) -> Optional[EdgeRecord]:
        """
        Remove the edge ``src -> dest`` and return it.

        Returns None (and changes nothing) when both nodes exist but are not
        connected in that direction.

        Raises:
            NodeNotFoundError: ``src`` or ``dest`` is not in the graph
        """
        source = self._require(src, "remove_edge")
        target = self._require(dest, "remove_edge")
        if not source.has_edge_to(dest):
            return None

        edge = source._unlink_out(dest)
        target._unlink_in(src)
        self._edge_count -= 1
        self._mc += 1
        if self.verbose:
            log_mutation(f"[Graph] Removed edge {src}->{dest}")
        return edge

    def remove_node(self, key: int) -> Optional[NodeRecord]:
        """
        Remove node ``key`` and every edge touching it.

        The returned record keeps its own outgoing/incoming maps so callers
        can inspect what was disconnected. Returns None if ``key`` is absent.

        Raises:
            GraphInvariantError: If a neighbour recorded in ``key``'s maps is
                missing from the graph; nothing is changed in that case
        """
        node = self._nodes.get(key)
        if node is None:
            return None

        # Resolve every neighbour before touching anything.
        sources = [(src_key, self._nodes.get(src_key)) for src_key in node._incoming]
        targets = [(dest_key, self._nodes.get(dest_key)) for dest_key in node._outgoing]
        missing = [
            f"node {key} links to missing node {other_key}"
            for other_key, other in sources + targets
            if other is None
        ]
        if missing:
            if self.log_rejected:
                log_rejected(f"[Graph] remove_node {key} rejected: {'; '.join(missing)}")
            raise GraphInvariantError(violations=missing)

        # Edges X -> key: drop them from each X's outgoing map
        for _, source in sources:
            source._unlink_out(key)
        # Edges key -> Y: drop them from each Y's incoming map
        for _, target in targets:
            target._unlink_in(key)

        # Self-loops are never stored, so the two sets above are disjoint.
        removed = len(sources) + len(targets)
        self._edge_count -= removed
        del self._nodes[key]
        node._graph = None
        self._mc += removed + 1
        if self.verbose:
            log_mutation(f"[Graph] Removed node {key} and {removed} incident edge(s)")
        return node

    # ------------------------------------------------------------------
    # Copies, scratch state, diagnostics
    # ------------------------------------------------------------------

    def deep_copy(self) -> DirectedWeightedGraph:
        """
        Return a fully independent copy of this graph.

        Every NodeRecord, EdgeRecord and GeoLocation is new; keys, weights,
        locations and scratch fields are preserved, and so are
        ``edge_count`` and ``mutation_count``.
        """
        clone = DirectedWeightedGraph(verbose=self.verbose, log_rejected=self.log_rejected)
        for key, node in self._nodes.items():
            copied = _bare_copy(node)
            copied._graph = clone
            clone._nodes[key] = copied
        for node in self._nodes.values():
            for edge in node._outgoing.values():
                copied = edge.copy()
                clone._nodes[copied.src]._link_out(copied)
                clone._nodes[copied.dest]._link_in(copied)
        clone._edge_count = self._edge_count
        clone._mc = self._mc
        if self.verbose:
            log_success(
                f"[Graph] Deep copy complete: {len(clone._nodes)} node(s), "
                f"{clone._edge_count} edge(s)"
            )
        return clone

    def copy_node(self, node: NodeRecord) -> NodeRecord:
        """Return a detached copy of ``node`` with copies of its incident edges.

        The copy is not part of any graph; its adjacency maps are a snapshot
        of ``node``'s at call time.
        """
        copied = _bare_copy(node)
        for edge in node._outgoing.values():
            copied._link_out(edge.copy())
        for edge in node._incoming.values():
            copied._link_in(edge.copy())
        return copied

    def reset_scratch(self) -> None:
        """Reset scratch fields on every node and edge.

        Scratch fields are algorithm workspace, so this is not a structural
        change and ``mutation_count`` does not move.
        """
        for node in self._nodes.values():
            node.reset_scratch()
            for edge in node._outgoing.values():
                edge.reset_scratch(info=Config.DEFAULT_EDGE_INFO)
        if self.verbose:
            log_info(f"[Graph] Scratch fields reset on {len(self._nodes)} node(s)")

    def check_invariants(self) -> None:
        """
        Verify adjacency bookkeeping.

        Checks that every edge sits in exactly its source's outgoing map and
        its destination's incoming map as the same record, that no self-loop
        or negative weight is stored, and that ``edge_count`` matches.

        Raises:
            GraphInvariantError: Listing every violation found
        """
        violations: List[str] = []
        total = 0
        for key, node in self._nodes.items():
            if node.key != key:
                violations.append(f"node stored under {key} reports key {node.key}")
            if node._graph is not self:
                violations.append(f"node {key} is not owned by this graph")
            for dest, edge in node._outgoing.items():
                total += 1
                if edge.src != key or edge.dest != dest:
                    violations.append(f"outgoing[{key}][{dest}] holds edge {edge.endpoints}")
                if dest == key:
                    violations.append(f"self-loop stored on node {key}")
                if math.isnan(edge.weight) or edge.weight < 0:
                    violations.append(f"edge {key}->{dest} has invalid weight {edge.weight}")
                target = self._nodes.get(dest)
                if target is None:
                    violations.append(f"edge {key}->{dest} points to a missing node")
                elif target._incoming.get(key) is not edge:
                    violations.append(f"edge {key}->{dest} missing from incoming map of {dest}")
            for src, edge in node._incoming.items():
                if edge.src != src or edge.dest != key:
                    violations.append(f"incoming[{key}][{src}] holds edge {edge.endpoints}")
                source = self._nodes.get(src)
                if source is None:
                    violations.append(f"edge {src}->{key} comes from a missing node")
                elif source._outgoing.get(key) is not edge:
                    violations.append(f"edge {src}->{key} missing from outgoing map of {src}")
        if total != self._edge_count:
            violations.append(f"edge_count is {self._edge_count} but {total} edge(s) are stored")

        if violations:
            raise GraphInvariantError(violations=violations)
        if self.verbose:
            log_success(f"[Graph] Invariants hold ({len(self._nodes)} nodes, {total} edges)")

    def snapshot(self) -> GraphSnapshot:
        """Return an immutable point-in-time view of the graph."""
        return GraphSnapshot(
            nodes={
                key: NodeSnapshot(
                    key=key,
                    x=node.location.x,
                    y=node.location.y,
                    z=node.location.z,
                    out_degree=node.out_degree,
                    in_degree=node.in_degree,
                )
                for key, node in self._nodes.items()
            },
            edges=[
                EdgeSnapshot(src=edge.src, dest=edge.dest, weight=edge.weight)
                for node in self._nodes.values()
                for edge in node._outgoing.values()
            ],
            edge_count=self._edge_count,
            mutation_count=self._mc,
        )

    def __eq__(self, other: object) -> bool:
        """Same keys and structurally equal nodes (see NodeRecord.__eq__)."""
        if not isinstance(other, DirectedWeightedGraph):
            return NotImplemented
        return self._nodes == other._nodes

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"DirectedWeightedGraph(nodes={len(self._nodes)}, "
            f"edges={self._edge_count}, mc={self._mc})"
        )


def _bare_copy(node: NodeRecord) -> NodeRecord:
    """Copy key, location and scratch fields, but no edges."""
    copied = NodeRecord(node.key, node.location)
    copied.weight = node.weight
    copied.info = node.info
    copied.tag = node.tag
    copied.visit = node.visit
    return copied
