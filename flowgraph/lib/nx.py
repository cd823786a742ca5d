"""NetworkX graph conversion utilities.

Flow algorithms work on integer vertices. These helpers translate NetworkX
graphs with arbitrary hashable node names into a `ResidualNetwork` (or an
undirected edge list for the global cut algorithms) and carry the mapping
needed to read results back.

Example:
    >>> import networkx as nx
    >>> from flowgraph.lib.nx import from_networkx, to_networkx
    >>> from flowgraph import calc_max_flow
    >>>
    >>> G = nx.DiGraph()
    >>> G.add_edge("A", "B", capacity=10, cost=2)
    >>> G.add_edge("B", "C", capacity=5, cost=1)
    >>>
    >>> network, node_map, edge_map = from_networkx(G)
    >>> calc_max_flow(network, node_map.to_index["A"], node_map.to_index["C"])
    5
    >>> G_out = to_networkx(network, node_map)  # edges carry a "flow" attribute
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, Hashable, List, Optional, Tuple, Union

from flowgraph.graph.contraction import UndirectedEdge
from flowgraph.graph.residual import ResidualNetwork

if TYPE_CHECKING:
    import networkx as nx

    NxGraph = Union[nx.DiGraph, nx.MultiDiGraph, nx.Graph, nx.MultiGraph]
else:
    NxGraph = Any


@dataclass
class NodeMap:
    """Bidirectional mapping between node names and vertex ids.

    Attributes:
        to_index: Original node name -> vertex id.
        to_name: Vertex id -> original node name.

    Example:
        >>> node_map = NodeMap.from_names(["A", "B", "C"])
        >>> node_map.to_index["A"]
        0
        >>> node_map.to_name[1]
        'B'
    """

    to_index: Dict[Hashable, int] = field(default_factory=dict)
    to_name: Dict[int, Hashable] = field(default_factory=dict)

    @classmethod
    def from_names(cls, names: List[Hashable]) -> "NodeMap":
        """Create a NodeMap assigning ids in list order."""
        to_index = {name: i for i, name in enumerate(names)}
        to_name = {i: name for i, name in enumerate(names)}
        return cls(to_index=to_index, to_name=to_name)

    def names(self, vertices) -> List[Hashable]:
        """Translate an iterable of vertex ids back to node names."""
        return [self.to_name[v] for v in vertices]

    def __len__(self) -> int:
        return len(self.to_index)


# Original edge reference: (source_node, target_node, edge_key)
EdgeRef = Tuple[Hashable, Hashable, Any]


@dataclass
class EdgeMap:
    """Mapping between edge handles and original NetworkX edges.

    Attributes:
        to_ref: Edge handle -> ``(u, v, key)`` of the original edge.
        from_ref: ``(u, v, key)`` -> handles created for it (two when the
            edge was added in both directions).
    """

    to_ref: Dict[int, EdgeRef] = field(default_factory=dict)
    from_ref: Dict[EdgeRef, List[int]] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.to_ref)


def _sorted_nodes(G: NxGraph) -> List[Hashable]:
    # Sorted by string form for a deterministic id assignment.
    return sorted(G.nodes(), key=str)


def _edge_iter(G: NxGraph):
    import networkx as nx

    if isinstance(G, (nx.MultiDiGraph, nx.MultiGraph)):
        return G.edges(keys=True, data=True)
    return ((u, v, 0, d) for u, v, d in G.edges(data=True))


def _require_graph(G: Any) -> None:
    import networkx as nx

    if not isinstance(G, (nx.DiGraph, nx.MultiDiGraph, nx.Graph, nx.MultiGraph)):
        raise TypeError(
            f"Expected NetworkX graph (DiGraph, MultiDiGraph, Graph, MultiGraph), "
            f"got {type(G).__name__}"
        )
    if G.number_of_nodes() == 0:
        raise ValueError("Graph has no nodes")


def from_networkx(
    G: NxGraph,
    *,
    capacity_attr: str = "capacity",
    cost_attr: str = "cost",
    default_capacity: Any = 1,
    default_cost: Any = 0,
    bidirectional: Optional[bool] = None,
) -> Tuple[ResidualNetwork, NodeMap, EdgeMap]:
    """Build a `ResidualNetwork` from a NetworkX graph.

    Args:
        G: NetworkX graph (DiGraph, MultiDiGraph, Graph, or MultiGraph).
        capacity_attr: Edge attribute holding capacity.
        cost_attr: Edge attribute holding cost per unit.
        default_capacity: Capacity when the attribute is missing.
        default_cost: Cost when the attribute is missing.
        bidirectional: Add each edge in both directions. Defaults to True for
            undirected graphs and False for directed ones.

    Returns:
        ``(network, node_map, edge_map)``.

    Raises:
        TypeError: If ``G`` is not a NetworkX graph.
        ValueError: If ``G`` has no nodes.
        InvalidArgument: If a capacity is negative or not numeric.
    """
    _require_graph(G)
    if bidirectional is None:
        bidirectional = not G.is_directed()

    node_map = NodeMap.from_names(_sorted_nodes(G))
    network = ResidualNetwork(len(node_map))
    edge_map = EdgeMap()

    for u, v, key, data in _edge_iter(G):
        ref: EdgeRef = (u, v, key)
        cap = data.get(capacity_attr, default_capacity)
        cost = data.get(cost_attr, default_cost)
        ends = [(node_map.to_index[u], node_map.to_index[v])]
        if bidirectional:
            ends.append((node_map.to_index[v], node_map.to_index[u]))
        for a, b in ends:
            handle = network.add_edge(a, b, cap, cost)
            edge_map.to_ref[handle] = ref
            edge_map.from_ref.setdefault(ref, []).append(handle)

    return network, node_map, edge_map


def to_networkx(
    network: ResidualNetwork,
    node_map: Optional[NodeMap] = None,
    *,
    capacity_attr: str = "capacity",
    cost_attr: str = "cost",
    flow_attr: str = "flow",
) -> "nx.MultiDiGraph":
    """Export forward edges, with their current flow, as a MultiDiGraph.

    Edge keys are the edge handles. Without a NodeMap nodes are labelled by
    vertex id.
    """
    import networkx as nx

    def name(v: int) -> Hashable:
        return node_map.to_name.get(v, v) if node_map is not None else v

    G = nx.MultiDiGraph()
    G.add_nodes_from(name(v) for v in range(network.vertex_count))
    for handle in network.edges():
        edge = network.edge(handle)
        G.add_edge(
            name(edge.source),
            name(edge.target),
            key=handle,
            **{
                capacity_attr: edge.capacity,
                cost_attr: edge.cost,
                flow_attr: edge.flow,
            },
        )
    return G


def undirected_edges_from_networkx(
    G: NxGraph,
    *,
    weight_attr: str = "weight",
    default_weight: Any = 1,
) -> Tuple[List[UndirectedEdge], NodeMap]:
    """Undirected edge list for ``global_min_cut`` / ``randomized_min_cut``.

    Direction is ignored for directed inputs.

    Returns:
        ``(edges, node_map)``; pass ``vertex_count=len(node_map)`` to the cut
        functions so isolated nodes are kept.
    """
    _require_graph(G)
    node_map = NodeMap.from_names(_sorted_nodes(G))
    edges: List[UndirectedEdge] = [
        (
            node_map.to_index[u],
            node_map.to_index[v],
            data.get(weight_attr, default_weight),
        )
        for u, v, _, data in _edge_iter(G)
    ]
    return edges, node_map
