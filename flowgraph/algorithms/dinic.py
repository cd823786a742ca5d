"""Maximum flow by blocking flows on level graphs (Dinic).

A phase labels every vertex with its BFS distance from the source over live
edges. If the sink has no label the current flow is maximum. Otherwise the
phase repeatedly walks source-to-sink paths that only use edges climbing
exactly one level, pushing each path's bottleneck, until the level graph has
no path left (a blocking flow). A per-vertex cursor remembers the first edge
that may still be useful, so exhausted edges are scanned once per phase.

The walk is an explicit stack of arena indices rather than recursion, so deep
level graphs do not hit the interpreter's recursion limit.

Phases are bounded by V, each costs O(V * E), O(V^2 * E) overall and
O(E * sqrt(V)) on unit-capacity networks.
"""

from __future__ import annotations

from collections import deque
from typing import List

from flowgraph.graph.residual import ResidualNetwork
from flowgraph.logging import get_logger
from flowgraph.types import Number, VertexID, check_limit

logger = get_logger(__name__)

UNREACHED = -1


def build_levels(network: ResidualNetwork, source: VertexID) -> List[int]:
    """BFS distance from ``source`` over live edges; ``UNREACHED`` elsewhere."""
    arena = network.arena
    adj = network.adjacency
    level = [UNREACHED] * network.vertex_count
    level[source] = 0
    queue = deque([source])
    while queue:
        u = queue.popleft()
        next_level = level[u] + 1
        for idx in adj[u]:
            edge = arena[idx]
            if level[edge.target] == UNREACHED and edge.capacity - edge.flow > 0:
                level[edge.target] = next_level
                queue.append(edge.target)
    return level


def blocking_flow(
    network: ResidualNetwork,
    source: VertexID,
    sink: VertexID,
    level: List[int],
) -> Number:
    """Push a blocking flow through the level graph described by ``level``.

    Args:
        network: Residual network, modified in place.
        source: Source vertex (level 0).
        sink: Sink vertex; must have a level.
        level: Output of :func:`build_levels` for this phase. Dead-end
            vertices are relabelled ``UNREACHED`` as they are discovered.

    Returns:
        Total flow pushed during the phase.
    """
    arena = network.arena
    adj = network.adjacency
    cursor = [0] * network.vertex_count
    pushed: Number = 0

    path: List[int] = []
    u = source
    while True:
        if u == sink:
            bottleneck = min(arena[idx].capacity - arena[idx].flow for idx in path)
            for idx in path:
                network.augment(idx, bottleneck)
            pushed = check_limit(pushed + bottleneck, "Accumulated flow")
            # Restart from the source; cursors keep the phase's progress.
            path.clear()
            u = source
            continue

        out = adj[u]
        advanced = False
        while cursor[u] < len(out):
            edge = arena[out[cursor[u]]]
            if edge.capacity - edge.flow > 0 and level[edge.target] == level[u] + 1:
                path.append(out[cursor[u]])
                u = edge.target
                advanced = True
                break
            cursor[u] += 1

        if advanced:
            continue
        if u == source:
            return pushed
        # Dead end: drop u from the level graph and retreat one edge.
        level[u] = UNREACHED
        u = arena[path.pop()].source
        cursor[u] += 1


def dinic(network: ResidualNetwork, source: VertexID, sink: VertexID) -> Number:
    """Saturate ``network`` from ``source`` to ``sink`` with Dinic's algorithm.

    Args:
        network: Residual network, modified in place.
        source: Source vertex.
        sink: Sink vertex.

    Returns:
        Flow added by this call. Zero when ``source == sink``.

    Raises:
        OutOfRange: If ``source`` or ``sink`` is not a vertex of ``network``.
        ArithmeticOverflow: If the accumulated flow exceeds the value limit.
    """
    network.validate_vertex(source, "source")
    network.validate_vertex(sink, "sink")
    if source == sink:
        return 0

    total: Number = 0
    phases = 0
    while True:
        level = build_levels(network, source)
        if level[sink] == UNREACHED:
            break
        phase_flow = blocking_flow(network, source, sink, level)
        total = check_limit(total + phase_flow, "Accumulated flow")
        phases += 1
        logger.debug(
            "Dinic phase %d: sink level %d, pushed %s", phases, level[sink], phase_flow
        )

    network.mark_saturated(source, sink)
    logger.debug("Dinic %d -> %d: %d phases, flow %s", source, sink, phases, total)
    return total
