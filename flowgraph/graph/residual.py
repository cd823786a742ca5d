"""Residual network with paired forward/reverse edges.

`ResidualNetwork` owns a fixed set of integer vertices and an append-only
arena of directed edges. Every call to ``add_edge`` appends two records: the
forward edge at an even index and its reverse residual edge at the following
odd index. Each record stores the index of its partner in ``rev`` so that an
augmentation updates both sides at once; flow on the reverse edge is always
the negation of the forward flow, which makes its residual capacity equal to
the forward edge's current flow.

Vertices are plain integers in ``[0, vertex_count)``. The network is never
resized and edges are never removed.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

from flowgraph.errors import InvalidArgument, OutOfRange
from flowgraph.types import EdgeHandle, Number, VertexID, require_number


@dataclass(slots=True)
class Edge:
    """One directed record in the edge arena.

    Attributes:
        source: Tail vertex.
        target: Head vertex.
        capacity: Upper bound on ``flow`` (zero for reverse records).
        cost: Cost per unit of flow (negated on reverse records).
        flow: Current flow. In ``[0, capacity]`` on forward records and in
            ``[-partner.capacity, 0]`` on reverse records.
        rev: Arena index of the paired record.
        is_reverse: True for the residual record created alongside a forward edge.
    """

    source: VertexID
    target: VertexID
    capacity: Number
    cost: Number
    flow: Number
    rev: int
    is_reverse: bool = False

    @property
    def residual(self) -> Number:
        """Remaining capacity ``capacity - flow``."""
        return self.capacity - self.flow


class ResidualNetwork:
    """Directed capacitated graph stored as an edge arena plus adjacency lists.

    Example:
        >>> net = ResidualNetwork(3)
        >>> e = net.add_edge(0, 1, 5)
        >>> net.residual_capacity(e)
        5
        >>> net.augment(e, 2)
        >>> net.flow(e), net.residual_capacity(net.reverse_of(e))
        (2, 2)
    """

    def __init__(self, vertex_count: int) -> None:
        """Create an empty network.

        Args:
            vertex_count: Number of vertices; must be positive.

        Raises:
            InvalidArgument: If ``vertex_count`` is not a positive integer.
        """
        if isinstance(vertex_count, bool) or not isinstance(vertex_count, int):
            raise InvalidArgument(f"vertex_count must be an integer, got {vertex_count!r}")
        if vertex_count <= 0:
            raise InvalidArgument(f"vertex_count must be positive, got {vertex_count}")

        self._vertex_count = vertex_count
        self._arena: List[Edge] = []
        self._adj: List[List[int]] = [[] for _ in range(vertex_count)]
        # (source, sink) of the last max-flow run that left no augmenting path.
        self._saturated_pair: Optional[Tuple[VertexID, VertexID]] = None

    def __repr__(self) -> str:
        return (
            f"ResidualNetwork(vertex_count={self._vertex_count}, "
            f"edges={self.num_edges})"
        )

    #
    # Structure
    #
    @property
    def vertex_count(self) -> int:
        return self._vertex_count

    @property
    def num_edges(self) -> int:
        """Number of forward edges (reverse records are not counted)."""
        return len(self._arena) // 2

    @property
    def arena(self) -> List[Edge]:
        """All edge records, forward and reverse, indexed by arena position.

        Algorithms read and mutate records through this list directly; the
        list itself must not be resized by callers.
        """
        return self._arena

    @property
    def adjacency(self) -> List[List[int]]:
        """Per-vertex lists of outgoing arena indices (forward and reverse)."""
        return self._adj

    def validate_vertex(self, v: VertexID, name: str = "vertex") -> VertexID:
        """Return ``v`` if it is a valid vertex id.

        Raises:
            OutOfRange: If ``v`` is not an integer in ``[0, vertex_count)``.
        """
        if isinstance(v, bool) or not isinstance(v, int) or not (
            0 <= v < self._vertex_count
        ):
            raise OutOfRange(
                f"{name} {v!r} is outside [0, {self._vertex_count})"
            )
        return v

    def add_edge(
        self, u: VertexID, v: VertexID, capacity: Number, cost: Number = 0
    ) -> EdgeHandle:
        """Append a forward edge ``u -> v`` and its reverse residual edge.

        Args:
            u: Tail vertex.
            v: Head vertex.
            capacity: Non-negative capacity.
            cost: Cost per unit of flow; may be negative.

        Returns:
            Handle of the forward edge (its arena index).

        Raises:
            OutOfRange: If ``u`` or ``v`` is not a valid vertex.
            InvalidArgument: If ``capacity`` is negative or either value is
                not a finite real number.
        """
        self.validate_vertex(u, "source vertex")
        self.validate_vertex(v, "target vertex")
        require_number(capacity, "capacity")
        require_number(cost, "cost")
        if capacity < 0:
            raise InvalidArgument(f"capacity must be non-negative, got {capacity}")

        fwd = len(self._arena)
        bwd = fwd + 1
        self._arena.append(Edge(u, v, capacity, cost, 0, bwd))
        self._arena.append(Edge(v, u, 0, -cost, 0, fwd, is_reverse=True))
        self._adj[u].append(fwd)
        self._adj[v].append(bwd)

        # A new edge may open an augmenting path.
        self._saturated_pair = None
        return fwd

    def _record(self, handle: EdgeHandle) -> Edge:
        if isinstance(handle, bool) or not isinstance(handle, int) or not (
            0 <= handle < len(self._arena)
        ):
            raise OutOfRange(f"Unknown edge handle {handle!r}")
        return self._arena[handle]

    def edge(self, handle: EdgeHandle) -> Edge:
        """Return the edge record for ``handle`` (forward or reverse)."""
        return self._record(handle)

    def reverse_of(self, handle: EdgeHandle) -> EdgeHandle:
        """Return the arena index paired with ``handle``."""
        return self._record(handle).rev

    def edges(self) -> Iterator[EdgeHandle]:
        """Iterate forward edge handles in insertion order."""
        return iter(range(0, len(self._arena), 2))

    def out_edges(self, u: VertexID) -> List[EdgeHandle]:
        """Arena indices leaving ``u``, including reverse residual records."""
        self.validate_vertex(u)
        return list(self._adj[u])

    #
    # Flow state
    #
    def residual_capacity(self, handle: EdgeHandle) -> Number:
        """Capacity left on ``handle`` (``capacity - flow``)."""
        return self._record(handle).residual

    def flow(self, handle: EdgeHandle) -> Number:
        """Current flow on ``handle``."""
        return self._record(handle).flow

    def augment(self, handle: EdgeHandle, amount: Number) -> None:
        """Push ``amount`` along ``handle`` and cancel it on the paired record.

        Raises:
            OutOfRange: If ``handle`` is unknown.
            InvalidArgument: If ``amount`` is negative or exceeds the residual
                capacity of ``handle``.
        """
        record = self._record(handle)
        require_number(amount, "amount")
        if amount < 0 or amount > record.residual:
            raise InvalidArgument(
                f"Cannot augment edge {handle} by {amount}; "
                f"residual capacity is {record.residual}"
            )
        record.flow += amount
        self._arena[record.rev].flow -= amount

    def reset_flow(self) -> None:
        """Zero the flow on every edge and forget any completed max-flow run."""
        for record in self._arena:
            record.flow = 0
        self._saturated_pair = None

    def net_outflow(self, v: VertexID) -> Number:
        """Flow leaving ``v`` minus flow entering it, over forward edges only."""
        self.validate_vertex(v)
        total: Number = 0
        for idx in self._adj[v]:
            record = self._arena[idx]
            # Reverse records at v carry minus the flow of edges entering v.
            total += record.flow
        return total

    def flow_value(self, source: VertexID) -> Number:
        """Total flow currently leaving ``source``."""
        return self.net_outflow(source)

    #
    # Completed max-flow marker
    #
    def mark_saturated(self, source: VertexID, sink: VertexID) -> None:
        """Record that no augmenting ``source -> sink`` path is left."""
        self._saturated_pair = (source, sink)

    def clear_saturated(self) -> None:
        self._saturated_pair = None

    def is_saturated(self, source: VertexID, sink: VertexID) -> bool:
        """True if a max-flow run for this pair completed on the current state."""
        return self._saturated_pair == (source, sink)

    def copy(self) -> ResidualNetwork:
        """Independent copy with the same edges, flows and max-flow marker."""
        clone = ResidualNetwork(self._vertex_count)
        clone._arena = [
            Edge(e.source, e.target, e.capacity, e.cost, e.flow, e.rev, e.is_reverse)
            for e in self._arena
        ]
        clone._adj = [list(out) for out in self._adj]
        clone._saturated_pair = self._saturated_pair
        return clone
