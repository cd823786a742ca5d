"""Maximum flow by repeated augmenting paths.

Each round searches the residual graph for a source-to-sink path made only of
live edges (positive residual capacity), then pushes the path's bottleneck
along it. Breadth-first search yields shortest paths and bounds the number of
rounds by O(V * E) (Edmonds-Karp); depth-first search finds any path and has
no polynomial bound on rounds (Ford-Fulkerson). Running out of paths proves
the flow is maximum.

Both searches are iterative and work on the network in place: the value
returned is the flow added by this call, so a second call on an already
saturated network returns 0.
"""

from __future__ import annotations

from collections import deque
from typing import List, Optional

from flowgraph.graph.residual import ResidualNetwork
from flowgraph.logging import get_logger
from flowgraph.types import Number, SearchOrder, VertexID, check_limit

logger = get_logger(__name__)


def find_augmenting_path(
    network: ResidualNetwork,
    source: VertexID,
    sink: VertexID,
    order: SearchOrder = SearchOrder.BFS,
) -> Optional[List[int]]:
    """Find a path of live edges from ``source`` to ``sink``.

    Args:
        network: Residual network to search.
        source: Start vertex.
        sink: Target vertex.
        order: BFS for a fewest-edge path, DFS for any path.

    Returns:
        Arena indices of the path edges in source-to-sink order, or None when
        the sink is unreachable.
    """
    arena = network.arena
    adj = network.adjacency
    # pred_edge[v] is the arena index used to reach v; -1 means unvisited.
    pred_edge = [-1] * network.vertex_count
    visited = [False] * network.vertex_count
    visited[source] = True

    frontier = deque([source])
    take = frontier.popleft if order == SearchOrder.BFS else frontier.pop

    while frontier:
        u = take()
        for idx in adj[u]:
            edge = arena[idx]
            v = edge.target
            if visited[v] or edge.capacity - edge.flow <= 0:
                continue
            visited[v] = True
            pred_edge[v] = idx
            if v == sink:
                return _trace(arena, pred_edge, source, sink)
            frontier.append(v)
    return None


def _trace(arena, pred_edge: List[int], source: VertexID, sink: VertexID) -> List[int]:
    path: List[int] = []
    v = sink
    while v != source:
        idx = pred_edge[v]
        path.append(idx)
        v = arena[idx].source
    path.reverse()
    return path


def path_bottleneck(network: ResidualNetwork, path: List[int]) -> Number:
    """Smallest residual capacity along ``path``."""
    arena = network.arena
    return min(arena[idx].capacity - arena[idx].flow for idx in path)


def push_path(network: ResidualNetwork, path: List[int], amount: Number) -> None:
    """Augment every edge of ``path`` by ``amount``."""
    for idx in path:
        network.augment(idx, amount)


def augmenting_path_max_flow(
    network: ResidualNetwork,
    source: VertexID,
    sink: VertexID,
    *,
    search: SearchOrder = SearchOrder.BFS,
) -> Number:
    """Saturate ``network`` from ``source`` to ``sink`` by augmenting paths.

    Args:
        network: Residual network, modified in place.
        source: Source vertex.
        sink: Sink vertex.
        search: Path search order (BFS gives Edmonds-Karp).

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
    rounds = 0
    while True:
        path = find_augmenting_path(network, source, sink, search)
        if path is None:
            break
        bottleneck = path_bottleneck(network, path)
        push_path(network, path, bottleneck)
        total = check_limit(total + bottleneck, "Accumulated flow")
        rounds += 1

    network.mark_saturated(source, sink)
    logger.debug(
        "%s augmenting paths %d -> %d: %d rounds, flow %s",
        search.name,
        source,
        sink,
        rounds,
        total,
    )
    return total


def edmonds_karp(network: ResidualNetwork, source: VertexID, sink: VertexID) -> Number:
    """Max flow with shortest augmenting paths (BFS), O(V * E^2)."""
    return augmenting_path_max_flow(network, source, sink, search=SearchOrder.BFS)


def ford_fulkerson(network: ResidualNetwork, source: VertexID, sink: VertexID) -> Number:
    """Max flow with depth-first augmenting paths."""
    return augmenting_path_max_flow(network, source, sink, search=SearchOrder.DFS)
