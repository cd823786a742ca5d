"""Minimum s-t cut from a saturated residual network.

Once a max-flow run leaves no augmenting path, the vertices still reachable
from the source over live edges form the source side ``S`` of a minimum cut.
The cut edges are the forward edges leaving ``S``; by max-flow min-cut duality
their capacities sum to the flow value. The residual state is only read, so
the cut can be queried repeatedly.
"""

from __future__ import annotations

from collections import deque
from typing import List, Set

from flowgraph.algorithms.types import MinCutResult
from flowgraph.errors import InvalidArgument, PreconditionViolated
from flowgraph.graph.residual import ResidualNetwork
from flowgraph.logging import get_logger
from flowgraph.types import EdgeHandle, Number, VertexID, check_limit

logger = get_logger(__name__)


def residual_reachable(network: ResidualNetwork, source: VertexID) -> Set[VertexID]:
    """Vertices reachable from ``source`` using edges with residual capacity."""
    network.validate_vertex(source, "source")
    arena = network.arena
    adj = network.adjacency
    seen = {source}
    queue = deque([source])
    while queue:
        u = queue.popleft()
        for idx in adj[u]:
            edge = arena[idx]
            if edge.target not in seen and edge.capacity - edge.flow > 0:
                seen.add(edge.target)
                queue.append(edge.target)
    return seen


def min_cut(network: ResidualNetwork, source: VertexID, sink: VertexID) -> MinCutResult:
    """Extract the minimum ``source``/``sink`` cut left by a max-flow run.

    Args:
        network: Network on which a max-flow procedure for the same pair has
            run to completion.
        source: Source vertex.
        sink: Sink vertex.

    Returns:
        MinCutResult with the cut value, cut edge handles (insertion order),
        and the two vertex sides.

    Raises:
        OutOfRange: If ``source`` or ``sink`` is not a vertex.
        InvalidArgument: If ``source == sink``.
        PreconditionViolated: If no completed max-flow run for this pair is
            recorded on ``network``.
    """
    network.validate_vertex(source, "source")
    network.validate_vertex(sink, "sink")
    if source == sink:
        raise InvalidArgument("min_cut requires distinct source and sink")
    if not network.is_saturated(source, sink):
        raise PreconditionViolated(
            f"No completed max flow {source} -> {sink} on this network; "
            "run calc_max_flow first"
        )

    reachable = residual_reachable(network, source)
    arena = network.arena
    cut_edges: List[EdgeHandle] = []
    value: Number = 0
    for handle in network.edges():
        edge = arena[handle]
        if edge.source in reachable and edge.target not in reachable:
            cut_edges.append(handle)
            value = check_limit(value + edge.capacity, "Cut value")

    source_side = frozenset(reachable)
    sink_side = frozenset(range(network.vertex_count)) - source_side
    logger.debug(
        "Min cut %d -> %d: %d edges, value %s, |S|=%d",
        source,
        sink,
        len(cut_edges),
        value,
        len(source_side),
    )
    return MinCutResult(
        value=value,
        edges=tuple(cut_edges),
        source_side=source_side,
        sink_side=sink_side,
    )


def saturated_edges(network: ResidualNetwork) -> List[EdgeHandle]:
    """Forward edges with positive capacity and no residual capacity left.

    Every min-cut edge is saturated, but a saturated edge need not lie on a
    minimum cut.
    """
    arena = network.arena
    return [
        handle
        for handle in network.edges()
        if arena[handle].capacity > 0 and arena[handle].capacity - arena[handle].flow <= 0
    ]
