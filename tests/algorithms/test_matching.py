"""Tests for maximum bipartite matching via unit-capacity max flow."""

import networkx as nx
import pytest

from flowgraph.algorithms.matching import max_bipartite_matching
from flowgraph.errors import InvalidArgument
from flowgraph.types import MaxFlowAlgorithm


class TestMaxBipartiteMatching:
    @pytest.mark.parametrize("algorithm", list(MaxFlowAlgorithm))
    def test_perfect_matching(self, algorithm):
        pairs = [(0, 3), (0, 4), (1, 4), (1, 5), (2, 5)]
        result = max_bipartite_matching([0, 1, 2], [3, 4, 5], pairs, algorithm=algorithm)
        assert result.size == 3
        assert result.pairs == ((0, 3), (1, 4), (2, 5))

    def test_contended_right_vertex(self):
        """Three workers all qualified only for task 10."""
        result = max_bipartite_matching([1, 2, 3], [10, 11], [(1, 10), (2, 10), (3, 10)])
        assert result.size == 1
        assert len(result.pairs) == 1

    def test_pairs_respect_left_order(self):
        result = max_bipartite_matching([7, 2], [0, 1], [(2, 0), (7, 1)])
        assert result.pairs == ((7, 1), (2, 0))

    def test_no_pairs(self):
        result = max_bipartite_matching([0], [1], [])
        assert result.size == 0
        assert result.pairs == ()

    def test_duplicate_pairs_count_once(self):
        result = max_bipartite_matching([0], [1], [(0, 1), (0, 1)])
        assert result.size == 1

    def test_matches_networkx(self):
        left = list(range(6))
        right = list(range(6, 13))
        pairs = [(u, v) for u in left for v in right if (u * 7 + v * 3) % 5 < 2]

        G = nx.Graph()
        G.add_nodes_from(left, bipartite=0)
        G.add_nodes_from(right, bipartite=1)
        G.add_edges_from(pairs)
        expected = len(nx.bipartite.maximum_matching(G, top_nodes=left)) // 2

        result = max_bipartite_matching(left, right, pairs)
        assert result.size == expected
        assert len({a for a, _ in result.pairs}) == result.size
        assert len({b for _, b in result.pairs}) == result.size
        assert set(result.pairs) <= set(pairs)


class TestMatchingValidation:
    def test_overlapping_sides(self):
        with pytest.raises(InvalidArgument):
            max_bipartite_matching([0, 1], [1, 2], [])

    def test_duplicate_vertex(self):
        with pytest.raises(InvalidArgument):
            max_bipartite_matching([0, 0], [1], [])

    @pytest.mark.parametrize("pair", [(1, 0), (0, 9), (5, 1)])
    def test_pair_outside_sides(self, pair):
        with pytest.raises(InvalidArgument):
            max_bipartite_matching([0], [1], [pair])
