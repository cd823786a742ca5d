"""Minimum-cost flow.

Successive shortest paths
-------------------------
``min_cost_flow`` sends up to ``target`` units from source to sink, always
along a cheapest residual path. Edge costs may be negative, so potentials are
first initialised by Bellman-Ford from the source; afterwards every live edge
has a non-negative reduced cost ``cost(u, v) + p(u) - p(v)`` and each round
can use Dijkstra on reduced costs instead of Bellman-Ford. After a round each
reached vertex adds its shortest reduced distance to its potential, which
keeps reduced costs non-negative on every live edge, including the reverse
edges opened by the augmentation.

Vertices that the source cannot reach keep potential ``None``; they can never
carry source flow. A vertex that drops out of reach in some round gets the
largest distance of that round added instead, which preserves the invariant
on edges leaving it.

Cycle canceling
---------------
``cycle_canceling`` computes a maximum flow first and then removes negative
residual cycles until none remain. It is slower but independent of the
potential machinery, which makes it a useful cross-check.
"""

from __future__ import annotations

from heapq import heappop, heappush
from typing import List, Optional, Tuple

from flowgraph.algorithms.dinic import dinic
from flowgraph.algorithms.types import MinCostFlowResult
from flowgraph.config import FLOW_CONFIG
from flowgraph.errors import InfeasibleNetwork, PreconditionViolated
from flowgraph.graph.residual import ResidualNetwork
from flowgraph.logging import get_logger
from flowgraph.types import (
    EdgeHandle,
    Number,
    VertexID,
    check_limit,
    require_number,
)

logger = get_logger(__name__)

Potentials = List[Optional[Number]]


def bellman_ford_potentials(network: ResidualNetwork, source: VertexID) -> Potentials:
    """Shortest residual-path costs from ``source``, tolerating negative costs.

    Returns:
        Distance per vertex; ``None`` for vertices the source cannot reach.

    Raises:
        InfeasibleNetwork: If a negative-cost cycle of live edges is reachable
            from ``source`` (the cost of a flow would be unbounded below).
    """
    arena = network.arena
    live = [e for e in arena if e.capacity - e.flow > 0]
    dist: Potentials = [None] * network.vertex_count
    dist[source] = 0

    for _ in range(network.vertex_count - 1):
        changed = False
        for edge in live:
            du = dist[edge.source]
            if du is None:
                continue
            candidate = du + edge.cost
            dv = dist[edge.target]
            if dv is None or candidate < dv:
                dist[edge.target] = candidate
                changed = True
        if not changed:
            break
    else:
        for edge in live:
            du = dist[edge.source]
            if du is not None and (
                dist[edge.target] is None or du + edge.cost < dist[edge.target]
            ):
                raise InfeasibleNetwork(
                    f"Negative-cost cycle reachable from vertex {source}"
                )
    return dist


def reduced_cost(
    network: ResidualNetwork, handle: EdgeHandle, potentials: Potentials
) -> Optional[Number]:
    """``cost + p(u) - p(v)`` for the record ``handle``; None if undefined."""
    edge = network.edge(handle)
    pu, pv = potentials[edge.source], potentials[edge.target]
    if pu is None or pv is None:
        return None
    return edge.cost + pu - pv


def check_reduced_costs(network: ResidualNetwork, potentials: Potentials) -> bool:
    """True if every live edge between labelled vertices has reduced cost >= 0."""
    for handle, edge in enumerate(network.arena):
        if edge.capacity - edge.flow <= 0:
            continue
        rc = reduced_cost(network, handle, potentials)
        if rc is not None and rc < 0:
            return False
    return True


def _dijkstra(
    network: ResidualNetwork, source: VertexID, potentials: Potentials
) -> Tuple[List[Optional[Number]], List[int]]:
    """Shortest reduced-cost distances from ``source`` over live edges."""
    arena = network.arena
    adj = network.adjacency
    dist: List[Optional[Number]] = [None] * network.vertex_count
    pred_edge = [-1] * network.vertex_count
    dist[source] = 0
    # The counter keeps heap entries comparable when distances tie.
    heap: List[Tuple[Number, int, VertexID]] = [(0, 0, source)]
    pushes = 1
    done = [False] * network.vertex_count

    while heap:
        d, _, u = heappop(heap)
        if done[u]:
            continue
        done[u] = True
        pu = potentials[u]
        for idx in adj[u]:
            edge = arena[idx]
            if edge.capacity - edge.flow <= 0:
                continue
            v = edge.target
            pv = potentials[v]
            if done[v] or pv is None:
                continue
            candidate = d + edge.cost + pu - pv
            if dist[v] is None or candidate < dist[v]:
                dist[v] = candidate
                pred_edge[v] = idx
                heappush(heap, (candidate, pushes, v))
                pushes += 1
    return dist, pred_edge


def _update_potentials(potentials: Potentials, dist: List[Optional[Number]]) -> None:
    reached = [d for d in dist if d is not None]
    furthest = max(reached) if reached else 0
    for v, p in enumerate(potentials):
        if p is None:
            continue
        potentials[v] = p + (dist[v] if dist[v] is not None else furthest)


def min_cost_flow(
    network: ResidualNetwork,
    source: VertexID,
    sink: VertexID,
    target: Optional[Number] = None,
) -> MinCostFlowResult:
    """Send up to ``target`` units from ``source`` to ``sink`` at minimum cost.

    Args:
        network: Residual network, modified in place. Any flow already present
            must itself be of minimum cost for its value, otherwise a negative
            residual cycle exists and InfeasibleNetwork is raised; call
            ``reset_flow`` first when in doubt.
        source: Source vertex.
        sink: Sink vertex.
        target: Units to send; None sends as much as the network carries.

    Returns:
        MinCostFlowResult ``(flow, cost)`` with ``complete=False`` if less than
        ``target`` could be sent, plus the final potentials.

    Raises:
        OutOfRange: If ``source`` or ``sink`` is not a vertex.
        InfeasibleNetwork: If ``target`` is negative, or a negative-cost cycle
            is reachable from ``source``.
        InvalidArgument: If ``target`` is not a number.
        ArithmeticOverflow: If flow or cost exceeds the value limit.
        PreconditionViolated: If ``FLOW_CONFIG.verify_potentials`` is set and a
            potential update leaves a negative reduced cost.
    """
    network.validate_vertex(source, "source")
    network.validate_vertex(sink, "sink")
    if target is not None:
        require_number(target, "target")
        if target < 0:
            raise InfeasibleNetwork(f"Flow target must be non-negative, got {target}")

    if source == sink or target == 0:
        return MinCostFlowResult(flow=0, cost=0, complete=True)

    potentials = bellman_ford_potentials(network, source)
    arena = network.arena
    sent: Number = 0
    total_cost: Number = 0
    rounds = 0
    exhausted = False

    while target is None or sent < target:
        dist, pred_edge = _dijkstra(network, source, potentials)
        if dist[sink] is None:
            exhausted = True
            break

        path: List[int] = []
        v = sink
        while v != source:
            idx = pred_edge[v]
            path.append(idx)
            v = arena[idx].source
        path.reverse()

        amount = min(arena[idx].capacity - arena[idx].flow for idx in path)
        if target is not None:
            amount = min(amount, target - sent)
        path_cost = sum(arena[idx].cost for idx in path)
        for idx in path:
            network.augment(idx, amount)

        sent = check_limit(sent + amount, "Accumulated flow")
        total_cost = check_limit(total_cost + amount * path_cost, "Accumulated cost")
        _update_potentials(potentials, dist)
        rounds += 1
        logger.debug(
            "Min-cost round %d: %d edges, sent %s at unit cost %s",
            rounds,
            len(path),
            amount,
            path_cost,
        )

        if FLOW_CONFIG.verify_potentials and not check_reduced_costs(network, potentials):
            raise PreconditionViolated(
                f"Negative reduced cost after potential update in round {rounds}"
            )

    if exhausted:
        network.mark_saturated(source, sink)
    else:
        network.clear_saturated()

    complete = target is None or sent >= target
    if not complete:
        logger.debug("Min-cost flow %d -> %d partial: %s of %s", source, sink, sent, target)
    return MinCostFlowResult(
        flow=sent,
        cost=total_cost,
        complete=complete,
        potentials=tuple(potentials),
    )


def _find_negative_cycle(network: ResidualNetwork) -> Optional[List[int]]:
    """Arena indices of some negative-cost cycle of live edges, or None."""
    arena = network.arena
    n = network.vertex_count
    live = [i for i, e in enumerate(arena) if e.capacity - e.flow > 0]
    # All-zero start acts like a virtual source joined to every vertex.
    dist: List[Number] = [0] * n
    pred_edge = [-1] * n

    last_relaxed = -1
    for _ in range(n):
        last_relaxed = -1
        for idx in live:
            edge = arena[idx]
            candidate = dist[edge.source] + edge.cost
            if candidate < dist[edge.target]:
                dist[edge.target] = candidate
                pred_edge[edge.target] = idx
                last_relaxed = edge.target
        if last_relaxed == -1:
            return None

    # Walking back n steps from a vertex relaxed in round n lands on the cycle.
    v = last_relaxed
    for _ in range(n):
        v = arena[pred_edge[v]].source

    cycle: List[int] = []
    u = v
    while True:
        idx = pred_edge[u]
        cycle.append(idx)
        u = arena[idx].source
        if u == v:
            break
    cycle.reverse()
    return cycle


def cycle_canceling(
    network: ResidualNetwork, source: VertexID, sink: VertexID
) -> MinCostFlowResult:
    """Minimum-cost maximum flow by canceling negative residual cycles.

    Computes a maximum flow with Dinic, then repeatedly pushes flow around
    negative-cost residual cycles. The flow value never changes while the
    total cost strictly decreases, so the loop ends at a min-cost max flow.

    Returns:
        MinCostFlowResult with the total flow leaving ``source`` and the cost
        summed over all forward edges (``potentials`` is empty).
    """
    network.validate_vertex(source, "source")
    network.validate_vertex(sink, "sink")
    if source == sink:
        return MinCostFlowResult(flow=0, cost=0, complete=True)

    dinic(network, source, sink)
    arena = network.arena
    canceled = 0
    while True:
        cycle = _find_negative_cycle(network)
        if cycle is None:
            break
        amount = min(arena[idx].capacity - arena[idx].flow for idx in cycle)
        for idx in cycle:
            network.augment(idx, amount)
        canceled += 1

    total_cost: Number = 0
    for handle in network.edges():
        edge = arena[handle]
        total_cost = check_limit(total_cost + edge.flow * edge.cost, "Accumulated cost")

    network.mark_saturated(source, sink)
    flow = network.flow_value(source)
    logger.debug(
        "Cycle canceling %d -> %d: %d cycles, flow %s, cost %s",
        source,
        sink,
        canceled,
        flow,
        total_cost,
    )
    return MinCostFlowResult(flow=flow, cost=total_cost, complete=True)
