"""Max-flow variants reduced to a single-source single-sink network.

The residual network never grows, so each reduction builds a new network with
the extra vertices it needs and returns it alongside the flow value.
"""

from __future__ import annotations

from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple, Union

from flowgraph.algorithms.max_flow import calc_max_flow
from flowgraph.errors import InfeasibleNetwork, InvalidArgument, OutOfRange
from flowgraph.graph.residual import ResidualNetwork
from flowgraph.types import MaxFlowAlgorithm, Number, VertexID, require_number

#: Directed edge ``(u, v, capacity)`` or ``(u, v, capacity, cost)``.
DirectedEdge = Tuple


def _check_vertex(v: object, vertex_count: int, name: str) -> None:
    if isinstance(v, bool) or not isinstance(v, int) or not 0 <= v < vertex_count:
        raise OutOfRange(f"{name} {v!r} is outside [0, {vertex_count})")


def _check_count(vertex_count: int) -> None:
    if isinstance(vertex_count, bool) or not isinstance(vertex_count, int) or vertex_count <= 0:
        raise InvalidArgument(f"vertex_count must be a positive integer, got {vertex_count!r}")


def _add_all(
    network: ResidualNetwork,
    edges: Iterable[DirectedEdge],
    vertex_count: int,
    remap: Optional[Callable[[int, int], Tuple[int, int]]] = None,
) -> Number:
    """Add ``edges`` (optionally remapping endpoints); return the capacity total."""
    total: Number = 0
    for edge in edges:
        u, v, capacity = edge[0], edge[1], edge[2]
        cost = edge[3] if len(edge) > 3 else 0
        _check_vertex(u, vertex_count, "edge endpoint")
        _check_vertex(v, vertex_count, "edge endpoint")
        if remap is not None:
            u, v = remap(u, v)
        network.add_edge(u, v, capacity, cost)
        total += capacity
    return total


def multi_terminal_max_flow(
    vertex_count: int,
    edges: Iterable[DirectedEdge],
    sources: Sequence[VertexID],
    sinks: Sequence[VertexID],
    *,
    algorithm: Union[MaxFlowAlgorithm, str, None] = None,
) -> Tuple[Number, ResidualNetwork]:
    """Max flow from any of ``sources`` to any of ``sinks``.

    A super source (vertex ``vertex_count``) feeds each source and each sink
    drains into a super sink (vertex ``vertex_count + 1``). The super edges
    carry the total edge capacity, which no flow can exceed.

    Returns:
        ``(flow_value, network)``; the network holds the final flow.

    Raises:
        InvalidArgument: If ``sources`` or ``sinks`` is empty or they overlap.
        OutOfRange: If an edge or terminal is not a vertex in ``[0, vertex_count)``.
    """
    _check_count(vertex_count)
    if not sources or not sinks:
        raise InvalidArgument("At least one source and one sink are required")
    for v in (*sources, *sinks):
        _check_vertex(v, vertex_count, "terminal")
    if set(sources) & set(sinks):
        raise InvalidArgument("A vertex cannot be both a source and a sink")

    network = ResidualNetwork(vertex_count + 2)
    super_source, super_sink = vertex_count, vertex_count + 1
    unbounded = _add_all(network, edges, vertex_count)
    for s in sources:
        network.add_edge(super_source, s, unbounded)
    for t in sinks:
        network.add_edge(t, super_sink, unbounded)

    value = calc_max_flow(network, super_source, super_sink, algorithm=algorithm)
    return value, network


def vertex_capacity_max_flow(
    vertex_count: int,
    edges: Iterable[DirectedEdge],
    vertex_capacities: Dict[VertexID, Number],
    source: VertexID,
    sink: VertexID,
    *,
    algorithm: Union[MaxFlowAlgorithm, str, None] = None,
) -> Tuple[Number, ResidualNetwork]:
    """Max flow where some vertices also limit the flow passing through them.

    Vertex ``v`` becomes an entry ``2v`` and an exit ``2v + 1`` joined by an
    edge carrying its capacity; vertices without a limit get the total edge
    capacity. Edges ``u -> v`` run from ``2u + 1`` to ``2v``. Source and sink
    limits apply as well.

    Returns:
        ``(flow_value, split_network)``.

    Raises:
        InvalidArgument: On a negative or non-numeric vertex capacity.
        OutOfRange: If an edge, terminal or capacity key is not a vertex.
    """
    _check_count(vertex_count)
    _check_vertex(source, vertex_count, "source")
    _check_vertex(sink, vertex_count, "sink")
    for v, limit in vertex_capacities.items():
        _check_vertex(v, vertex_count, "capacity key")
        require_number(limit, f"capacity of vertex {v}")
        if limit < 0:
            raise InvalidArgument(f"Vertex {v} capacity must be non-negative, got {limit}")

    network = ResidualNetwork(2 * vertex_count)
    unbounded = _add_all(
        network, edges, vertex_count, remap=lambda u, v: (2 * u + 1, 2 * v)
    )
    for v in range(vertex_count):
        network.add_edge(2 * v, 2 * v + 1, vertex_capacities.get(v, unbounded))

    if source == sink:
        return 0, network
    value = calc_max_flow(network, 2 * source, 2 * sink + 1, algorithm=algorithm)
    return value, network


def lower_bound_max_flow(
    vertex_count: int,
    edges: Iterable[DirectedEdge],
    source: VertexID,
    sink: VertexID,
    *,
    algorithm: Union[MaxFlowAlgorithm, str, None] = None,
) -> Tuple[Number, ResidualNetwork]:
    """Max flow where edges may demand a minimum amount of flow.

    Edges are ``(u, v, capacity)`` or ``(u, v, capacity, demand)``. Each edge
    keeps ``capacity - demand`` and the demand becomes an excess at ``v`` and a
    deficit at ``u``. A super source (vertex ``vertex_count``) feeds the
    excesses, deficits drain into a super sink (vertex ``vertex_count + 1``)
    and ``sink -> source`` is opened with the total capacity so the flow may
    circulate. The demands can be met only if every super edge is saturated.
    The feasible flow is then copied into a network on the original vertices
    and grown along ``source -> sink`` augmenting paths.

    Returns:
        ``(flow_value, network)``. Edge ``k`` of the input is the forward
        handle ``2k`` of the network and carries its flow minus its demand.

    Raises:
        InvalidArgument: If a demand is negative, non-numeric or exceeds the
            edge capacity.
        OutOfRange: If an edge or terminal is not a vertex in ``[0, vertex_count)``.
        InfeasibleNetwork: If no flow meets every demand.
    """
    _check_count(vertex_count)
    _check_vertex(source, vertex_count, "source")
    _check_vertex(sink, vertex_count, "sink")

    bounded = []
    for edge in edges:
        u, v, capacity = edge[0], edge[1], edge[2]
        demand = edge[3] if len(edge) > 3 else 0
        _check_vertex(u, vertex_count, "edge endpoint")
        _check_vertex(v, vertex_count, "edge endpoint")
        require_number(capacity, "capacity")
        require_number(demand, "demand")
        if demand < 0 or demand > capacity:
            raise InvalidArgument(
                f"Demand of edge {u}->{v} must lie in [0, {capacity}], got {demand}"
            )
        bounded.append((u, v, capacity, demand))

    balance: List[Number] = [0] * vertex_count
    circulation = ResidualNetwork(vertex_count + 2)
    unbounded: Number = 0
    for u, v, capacity, demand in bounded:
        circulation.add_edge(u, v, capacity - demand)
        balance[u] -= demand
        balance[v] += demand
        unbounded += capacity

    super_source, super_sink = vertex_count, vertex_count + 1
    required: Number = 0
    for v, excess in enumerate(balance):
        if excess > 0:
            circulation.add_edge(super_source, v, excess)
            required += excess
        elif excess < 0:
            circulation.add_edge(v, super_sink, -excess)
    if source != sink:
        circulation.add_edge(sink, source, unbounded)

    if required > 0:
        routed = calc_max_flow(circulation, super_source, super_sink, algorithm=algorithm)
        if routed < required:
            raise InfeasibleNetwork(
                f"Edge demands cannot be met: routed {routed} of {required} required units"
            )

    network = ResidualNetwork(vertex_count)
    for k, (u, v, capacity, demand) in enumerate(bounded):
        handle = network.add_edge(u, v, capacity - demand)
        network.augment(handle, circulation.flow(2 * k))

    if source != sink:
        calc_max_flow(network, source, sink, algorithm=algorithm)

    value: Number = 0
    for k, (u, v, _, demand) in enumerate(bounded):
        carried = network.flow(2 * k) + demand
        if u == source:
            value += carried
        if v == source:
            value -= carried
    return value, network
