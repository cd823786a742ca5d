"""Tests for flowgraph.lib.nx NetworkX conversion utilities."""

import networkx as nx
import pytest

from flowgraph.algorithms.global_min_cut import global_min_cut
from flowgraph.algorithms.max_flow import calc_max_flow
from flowgraph.algorithms.min_cost_flow import min_cost_flow
from flowgraph.errors import InvalidArgument
from flowgraph.lib.nx import (
    EdgeMap,
    NodeMap,
    from_networkx,
    to_networkx,
    undirected_edges_from_networkx,
)


class TestNodeMap:
    """Tests for NodeMap class."""

    def test_from_names_creates_bidirectional_mapping(self):
        node_map = NodeMap.from_names(["A", "B", "C"])
        assert node_map.to_index == {"A": 0, "B": 1, "C": 2}
        assert node_map.to_name == {0: "A", 1: "B", 2: "C"}
        assert len(node_map) == 3

    def test_names(self):
        node_map = NodeMap.from_names(["s", "x", "t"])
        assert node_map.names([2, 0]) == ["t", "s"]

    def test_empty(self):
        assert len(NodeMap.from_names([])) == 0


class TestFromNetworkx:
    def test_directed_graph(self):
        G = nx.DiGraph()
        G.add_edge("A", "B", capacity=10, cost=2)
        G.add_edge("B", "C", capacity=5, cost=1)

        network, node_map, edge_map = from_networkx(G)
        assert network.vertex_count == 3
        assert network.num_edges == 2
        assert len(edge_map) == 2

        handle = edge_map.from_ref[("A", "B", 0)][0]
        edge = network.edge(handle)
        assert node_map.to_name[edge.source] == "A"
        assert (edge.capacity, edge.cost) == (10, 2)
        assert calc_max_flow(network, node_map.to_index["A"], node_map.to_index["C"]) == 5

    def test_defaults_for_missing_attributes(self):
        G = nx.DiGraph()
        G.add_edge("u", "v")
        network, _, _ = from_networkx(G, default_capacity=7, default_cost=3)
        assert (network.edge(0).capacity, network.edge(0).cost) == (7, 3)

    def test_custom_attribute_names(self):
        G = nx.DiGraph()
        G.add_edge(0, 1, bw=4, price=9)
        network, _, _ = from_networkx(G, capacity_attr="bw", cost_attr="price")
        assert (network.edge(0).capacity, network.edge(0).cost) == (4, 9)

    def test_undirected_graph_adds_both_directions(self):
        G = nx.Graph()
        G.add_edge("a", "b", capacity=3)
        network, node_map, edge_map = from_networkx(G)

        assert network.num_edges == 2
        assert sorted(edge_map.to_ref) == [0, 2]
        assert len(edge_map.from_ref[("a", "b", 0)]) == 2
        assert calc_max_flow(network, node_map.to_index["b"], node_map.to_index["a"]) == 3

    def test_multidigraph_keys(self):
        G = nx.MultiDiGraph()
        G.add_edge("s", "t", key="x", capacity=1)
        G.add_edge("s", "t", key="y", capacity=2)
        network, node_map, edge_map = from_networkx(G)

        assert set(edge_map.from_ref) == {("s", "t", "x"), ("s", "t", "y")}
        assert calc_max_flow(network, node_map.to_index["s"], node_map.to_index["t"]) == 3

    def test_node_ids_are_sorted_by_name(self):
        G = nx.DiGraph()
        G.add_edge("c", "a", capacity=1)
        G.add_node("b")
        _, node_map, _ = from_networkx(G)
        assert node_map.to_index == {"a": 0, "b": 1, "c": 2}

    def test_min_cost_flow_matches_networkx(self):
        G = nx.DiGraph()
        G.add_edge("s", "a", capacity=4, weight=1)
        G.add_edge("s", "b", capacity=2, weight=4)
        G.add_edge("a", "b", capacity=2, weight=1)
        G.add_edge("a", "t", capacity=3, weight=5)
        G.add_edge("b", "t", capacity=4, weight=1)

        network, node_map, _ = from_networkx(G, cost_attr="weight")
        result = min_cost_flow(network, node_map.to_index["s"], node_map.to_index["t"])

        flow_dict = nx.max_flow_min_cost(G, "s", "t")
        assert result.flow == sum(flow_dict["s"].values())
        assert result.cost == nx.cost_of_flow(G, flow_dict)

    def test_rejects_non_graph(self):
        with pytest.raises(TypeError):
            from_networkx({"A": ["B"]})

    def test_rejects_empty_graph(self):
        with pytest.raises(ValueError):
            from_networkx(nx.DiGraph())

    def test_rejects_negative_capacity(self):
        G = nx.DiGraph()
        G.add_edge(0, 1, capacity=-1)
        with pytest.raises(InvalidArgument):
            from_networkx(G)


class TestToNetworkx:
    def test_exports_flow_with_names(self):
        G = nx.DiGraph()
        G.add_edge("A", "B", capacity=10, cost=2)
        G.add_edge("B", "C", capacity=5, cost=1)
        network, node_map, _ = from_networkx(G)
        calc_max_flow(network, node_map.to_index["A"], node_map.to_index["C"])

        out = to_networkx(network, node_map)
        assert isinstance(out, nx.MultiDiGraph)
        assert set(out.nodes) == {"A", "B", "C"}
        data = out.get_edge_data("A", "B")
        assert list(data) == [0]
        assert data[0] == {"capacity": 10, "cost": 2, "flow": 5}

    def test_integer_labels_without_node_map(self, clrs6):
        calc_max_flow(clrs6, 0, 5)
        out = to_networkx(clrs6, flow_attr="f")
        assert set(out.nodes) == set(range(6))
        assert out.number_of_edges() == clrs6.num_edges
        assert sum(d["f"] for _, _, d in out.out_edges(0, data=True)) == 23

    def test_isolated_vertices_kept(self):
        network, _, _ = from_networkx(nx.empty_graph(3, create_using=nx.DiGraph))
        assert to_networkx(network).number_of_nodes() == 3


class TestUndirectedEdges:
    def test_global_cut_on_named_graph(self):
        G = nx.Graph()
        G.add_weighted_edges_from(
            [("p", "q", 2), ("p", "r", 3), ("q", "r", 2), ("q", "s", 2), ("r", "s", 1)]
        )
        edges, node_map = undirected_edges_from_networkx(G)
        result = global_min_cut(edges, vertex_count=len(node_map))

        expected, _ = nx.stoer_wagner(G)
        assert result.value == expected == 3
        assert set(node_map.names(result.partition[1])) == {"s"}

    def test_default_weight(self):
        G = nx.path_graph(3)
        edges, _ = undirected_edges_from_networkx(G)
        assert edges == [(0, 1, 1), (1, 2, 1)]


class TestEdgeMap:
    def test_direct_construction(self):
        edge_map = EdgeMap(
            to_ref={0: ("A", "B", 0)},
            from_ref={("A", "B", 0): [0]},
        )
        assert len(edge_map) == 1
