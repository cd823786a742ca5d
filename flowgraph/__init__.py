"""flowgraph: flow-network algorithms.

Max flow, min cut and min-cost flow on an append-only residual network, plus
global minimum cuts of undirected weighted graphs.

Primary API:
    ResidualNetwork - vertices, capacitated edges and their residual pairs
    calc_max_flow() - maximum flow (Dinic, Edmonds-Karp or Ford-Fulkerson)
    min_cut() - minimum s-t cut after a max-flow run
    min_cost_flow() - successive shortest paths with potentials
    global_min_cut() - Stoer-Wagner global minimum cut
    randomized_min_cut() - Karger randomized minimum cut

Example:
    from flowgraph import ResidualNetwork, calc_max_flow, min_cut

    net = ResidualNetwork(4)
    net.add_edge(0, 1, 3)
    net.add_edge(1, 3, 2)
    net.add_edge(0, 2, 2)
    net.add_edge(2, 3, 3)

    flow = calc_max_flow(net, 0, 3)      # 4
    value, edges = min_cut(net, 0, 3)    # 4, (2, 4)
"""

from __future__ import annotations

from flowgraph import logging
from flowgraph._version import __version__
from flowgraph.algorithms.augmenting_path import (
    augmenting_path_max_flow,
    edmonds_karp,
    ford_fulkerson,
)
from flowgraph.algorithms.dinic import dinic
from flowgraph.algorithms.global_min_cut import global_min_cut
from flowgraph.algorithms.karger import karger_min_cut, randomized_min_cut
from flowgraph.algorithms.matching import max_bipartite_matching
from flowgraph.algorithms.max_flow import calc_max_flow
from flowgraph.algorithms.min_cost_flow import cycle_canceling, min_cost_flow
from flowgraph.algorithms.min_cut import min_cut, saturated_edges
from flowgraph.algorithms.reductions import (
    lower_bound_max_flow,
    multi_terminal_max_flow,
    vertex_capacity_max_flow,
)
from flowgraph.algorithms.types import (
    GlobalMinCutResult,
    MatchingResult,
    MinCostFlowResult,
    MinCutResult,
    RandomizedMinCutResult,
)
from flowgraph.config import FLOW_CONFIG, FlowConfig
from flowgraph.errors import (
    ArithmeticOverflow,
    FlowGraphError,
    InfeasibleNetwork,
    InvalidArgument,
    OutOfRange,
    PreconditionViolated,
)
from flowgraph.graph.residual import Edge, ResidualNetwork
from flowgraph.lib.nx import (
    EdgeMap,
    NodeMap,
    from_networkx,
    to_networkx,
    undirected_edges_from_networkx,
)
from flowgraph.types import MaxFlowAlgorithm, SearchOrder

__all__ = [
    # Version
    "__version__",
    # Model
    "Edge",
    "ResidualNetwork",
    # Max flow / min cut
    "calc_max_flow",
    "augmenting_path_max_flow",
    "edmonds_karp",
    "ford_fulkerson",
    "dinic",
    "min_cut",
    "saturated_edges",
    # Costs
    "min_cost_flow",
    "cycle_canceling",
    # Global cuts
    "global_min_cut",
    "karger_min_cut",
    "randomized_min_cut",
    # Applications
    "max_bipartite_matching",
    "lower_bound_max_flow",
    "multi_terminal_max_flow",
    "vertex_capacity_max_flow",
    # Types
    "MaxFlowAlgorithm",
    "SearchOrder",
    "MinCutResult",
    "MinCostFlowResult",
    "GlobalMinCutResult",
    "RandomizedMinCutResult",
    "MatchingResult",
    # Errors
    "FlowGraphError",
    "InvalidArgument",
    "OutOfRange",
    "PreconditionViolated",
    "ArithmeticOverflow",
    "InfeasibleNetwork",
    # Configuration
    "FlowConfig",
    "FLOW_CONFIG",
    # Library integrations (NetworkX)
    "EdgeMap",
    "NodeMap",
    "from_networkx",
    "to_networkx",
    "undirected_edges_from_networkx",
    # Utilities
    "logging",
]
