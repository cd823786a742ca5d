"""Shared fixtures: small reference networks and flow-validity checks."""

from __future__ import annotations

import random
from typing import Callable, List, Tuple

import pytest

from flowgraph.graph.residual import ResidualNetwork


@pytest.fixture
def clrs6():
    # Six-vertex textbook network; max flow 0 -> 5 is 23 and the minimum cut
    # is {1->3, 4->3, 4->5} with capacity 12 + 7 + 4.
    net = ResidualNetwork(6)
    for u, v, cap in [
        (0, 1, 16),
        (0, 2, 13),
        (1, 2, 10),
        (1, 3, 12),
        (2, 1, 4),
        (2, 4, 14),
        (3, 2, 9),
        (3, 5, 20),
        (4, 3, 7),
        (4, 5, 4),
    ]:
        net.add_edge(u, v, cap)
    return net


@pytest.fixture
def diamond_costs():
    # [capacity, cost]:
    #        [10,2]
    #   0 ──────────► 1
    #   │             │
    #   │[10,1]  [5,3]│
    #   ▼             ▼
    #   2 ──────────► 3
    #        [10,1]
    net = ResidualNetwork(4)
    net.add_edge(0, 1, 10, cost=2)
    net.add_edge(0, 2, 10, cost=1)
    net.add_edge(1, 3, 5, cost=3)
    net.add_edge(2, 3, 10, cost=1)
    return net


@pytest.fixture
def bipartite3():
    # Left {0, 1, 2}, right {3, 4, 5}, super source 6, super sink 7.
    net = ResidualNetwork(8)
    for v in (0, 1, 2):
        net.add_edge(6, v, 1)
    for u, v in [(0, 3), (0, 4), (1, 4), (1, 5), (2, 5)]:
        net.add_edge(u, v, 1)
    for v in (3, 4, 5):
        net.add_edge(v, 7, 1)
    return net


@pytest.fixture
def square_undirected():
    #      2
    #  0 ───── 1
    #  │ ╲3    │
    # 3│  ╲  2 │2
    #  │   ╲   │
    #  2 ───── 3
    #      1
    # Global min cut 3: {3} against the rest.
    return [(0, 1, 2), (0, 2, 3), (1, 2, 2), (1, 3, 2), (2, 3, 1)]


def _random_digraph_edges(
    rng: random.Random, n: int, density: float, max_cap: int, max_cost: int
) -> List[Tuple[int, int, int, int]]:
    edges = []
    for u in range(n):
        for v in range(n):
            if u != v and rng.random() < density:
                edges.append((u, v, rng.randint(0, max_cap), rng.randint(0, max_cost)))
    return edges


@pytest.fixture
def random_digraphs() -> List[Tuple[int, List[Tuple[int, int, int, int]]]]:
    """Deterministic batch of small random directed graphs without parallel edges."""
    rng = random.Random(20240517)
    batch = []
    for i in range(25):
        n = rng.randint(2, 9)
        batch.append((n, _random_digraph_edges(rng, n, 0.35, 12, 6)))
    return batch


@pytest.fixture
def random_negative_cost_dags() -> List[Tuple[int, List[Tuple[int, int, int, int]]]]:
    """Deterministic batch of random DAGs (edges only run u < v) with costs in [-5, 5]."""
    rng = random.Random(20240601)
    batch = []
    for i in range(25):
        n = rng.randint(2, 9)
        edges = [
            (u, v, rng.randint(0, 12), rng.randint(-5, 5))
            for u in range(n)
            for v in range(u + 1, n)
            if rng.random() < 0.45
        ]
        batch.append((n, edges))
    return batch


@pytest.fixture
def build_network() -> Callable[[int, list], ResidualNetwork]:
    """Build a ResidualNetwork from ``(u, v, cap[, cost])`` tuples."""

    def _build(n: int, edges: list) -> ResidualNetwork:
        net = ResidualNetwork(n)
        for edge in edges:
            net.add_edge(*edge)
        return net

    return _build


@pytest.fixture
def assert_valid_flow() -> Callable[[ResidualNetwork, int, int], None]:
    """Check capacity bounds, pairing and conservation on a network's flow."""

    def _check(net: ResidualNetwork, source: int, sink: int) -> None:
        for handle in net.edges():
            edge = net.edge(handle)
            assert 0 <= edge.flow <= edge.capacity
            partner = net.edge(edge.rev)
            assert partner.rev == handle
            assert partner.flow == -edge.flow
            assert net.residual_capacity(edge.rev) == edge.flow
        for v in range(net.vertex_count):
            if v not in (source, sink):
                assert net.net_outflow(v) == 0
        assert net.net_outflow(source) == -net.net_outflow(sink)

    return _check
