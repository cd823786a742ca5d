"""Maximum-flow entry point.

``calc_max_flow`` validates its inputs, optionally works on a copy, and hands
the residual network to one of the augmenting-path or blocking-flow
procedures. All procedures return the same value on the same network; only
their running time differs.
"""

from __future__ import annotations

from typing import Callable, Dict, Literal, Tuple, Union, overload

from flowgraph.algorithms.augmenting_path import edmonds_karp, ford_fulkerson
from flowgraph.algorithms.dinic import dinic
from flowgraph.config import FLOW_CONFIG
from flowgraph.graph.residual import ResidualNetwork
from flowgraph.types import MaxFlowAlgorithm, Number, VertexID

MaxFlowFunc = Callable[[ResidualNetwork, VertexID, VertexID], Number]

_ALGORITHMS: Dict[MaxFlowAlgorithm, MaxFlowFunc] = {
    MaxFlowAlgorithm.EDMONDS_KARP: edmonds_karp,
    MaxFlowAlgorithm.FORD_FULKERSON: ford_fulkerson,
    MaxFlowAlgorithm.DINIC: dinic,
}


def resolve_algorithm(
    algorithm: Union[MaxFlowAlgorithm, str, None],
) -> MaxFlowAlgorithm:
    """Turn a member, a member name, or None (configured default) into a member."""
    if algorithm is None:
        algorithm = FLOW_CONFIG.default_max_flow_algorithm
    if isinstance(algorithm, str):
        return MaxFlowAlgorithm.from_string(algorithm)
    return MaxFlowAlgorithm(algorithm)


@overload
def calc_max_flow(
    network: ResidualNetwork,
    source: VertexID,
    sink: VertexID,
    *,
    algorithm: Union[MaxFlowAlgorithm, str, None] = None,
    copy_network: bool = False,
    reset_flow: bool = False,
    return_network: Literal[False] = False,
) -> Number: ...


@overload
def calc_max_flow(
    network: ResidualNetwork,
    source: VertexID,
    sink: VertexID,
    *,
    algorithm: Union[MaxFlowAlgorithm, str, None] = None,
    copy_network: bool = False,
    reset_flow: bool = False,
    return_network: Literal[True],
) -> Tuple[Number, ResidualNetwork]: ...


def calc_max_flow(
    network: ResidualNetwork,
    source: VertexID,
    sink: VertexID,
    *,
    algorithm: Union[MaxFlowAlgorithm, str, None] = None,
    copy_network: bool = False,
    reset_flow: bool = False,
    return_network: bool = False,
) -> Union[Number, Tuple[Number, ResidualNetwork]]:
    """Compute the maximum flow from ``source`` to ``sink``.

    Args:
        network: Residual network. Mutated in place unless ``copy_network``.
        source: Source vertex.
        sink: Sink vertex.
        algorithm: Procedure to use; defaults to
            ``FLOW_CONFIG.default_max_flow_algorithm`` (Dinic).
        copy_network: Work on a copy so ``network`` keeps its current flow.
        reset_flow: Zero existing flow before computing.
        return_network: Also return the network that holds the final flow,
            which is the input unless ``copy_network`` is set.

    Returns:
        The flow added by this call, which is the maximum flow value on a
        network that started without flow. With ``return_network`` a tuple
        ``(value, network)``.

    Raises:
        OutOfRange: If ``source`` or ``sink`` is not a vertex.
        InvalidArgument: If ``algorithm`` names no known procedure.
        ArithmeticOverflow: If the accumulated flow exceeds the value limit.

    Examples:
        >>> net = ResidualNetwork(3)
        >>> _ = net.add_edge(0, 1, 10)
        >>> _ = net.add_edge(1, 2, 5)
        >>> calc_max_flow(net, 0, 2)
        5
    """
    chosen = resolve_algorithm(algorithm)
    work = network.copy() if copy_network else network
    if reset_flow:
        work.reset_flow()

    value = _ALGORITHMS[chosen](work, source, sink)
    if return_network:
        return value, work
    return value
