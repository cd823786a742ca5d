"""Tests for ResidualNetwork construction, pairing and augmentation."""

import math
from fractions import Fraction

import pytest

from flowgraph.errors import InvalidArgument, OutOfRange
from flowgraph.graph.residual import ResidualNetwork


class TestConstruction:
    @pytest.mark.parametrize("count", [0, -3])
    def test_non_positive_vertex_count(self, count):
        with pytest.raises(InvalidArgument):
            ResidualNetwork(count)

    @pytest.mark.parametrize("count", [2.0, "3", True])
    def test_non_integer_vertex_count(self, count):
        with pytest.raises(InvalidArgument):
            ResidualNetwork(count)

    def test_empty_network(self):
        net = ResidualNetwork(3)
        assert net.vertex_count == 3
        assert net.num_edges == 0
        assert list(net.edges()) == []
        assert "vertex_count=3" in repr(net)


class TestAddEdge:
    def test_forward_and_reverse_records_are_paired(self):
        """Each add_edge appends a forward record and its reverse partner."""
        net = ResidualNetwork(3)
        e = net.add_edge(0, 2, 7, cost=4)

        fwd = net.edge(e)
        rev = net.edge(net.reverse_of(e))
        assert (fwd.source, fwd.target, fwd.capacity, fwd.cost) == (0, 2, 7, 4)
        assert (rev.source, rev.target, rev.capacity, rev.cost) == (2, 0, 0, -4)
        assert fwd.rev == e + 1 and rev.rev == e
        assert not fwd.is_reverse and rev.is_reverse

    def test_handles_are_even_arena_indices(self):
        net = ResidualNetwork(4)
        handles = [net.add_edge(0, 1, 1), net.add_edge(1, 2, 1), net.add_edge(2, 3, 1)]
        assert handles == [0, 2, 4]
        assert list(net.edges()) == handles
        assert net.num_edges == 3
        assert len(net.arena) == 6

    def test_adjacency_includes_reverse_records(self):
        net = ResidualNetwork(3)
        e = net.add_edge(0, 1, 5)
        assert net.out_edges(0) == [e]
        assert net.out_edges(1) == [net.reverse_of(e)]
        assert net.out_edges(2) == []

    def test_parallel_edges_and_self_loops_are_kept(self):
        net = ResidualNetwork(2)
        net.add_edge(0, 1, 1)
        net.add_edge(0, 1, 2)
        net.add_edge(1, 1, 3)
        assert net.num_edges == 3

    @pytest.mark.parametrize("u,v", [(-1, 0), (0, 3), (3, 0), (0, 1.0)])
    def test_out_of_range_vertex(self, u, v):
        net = ResidualNetwork(3)
        with pytest.raises(OutOfRange):
            net.add_edge(u, v, 1)

    def test_negative_capacity(self):
        net = ResidualNetwork(2)
        with pytest.raises(InvalidArgument):
            net.add_edge(0, 1, -1)

    @pytest.mark.parametrize("capacity", ["5", None, True])
    def test_non_numeric_capacity(self, capacity):
        net = ResidualNetwork(2)
        with pytest.raises(InvalidArgument):
            net.add_edge(0, 1, capacity)

    @pytest.mark.parametrize("value", [math.nan, math.inf, -math.inf])
    def test_non_finite_capacity_or_cost(self, value):
        net = ResidualNetwork(2)
        with pytest.raises(InvalidArgument):
            net.add_edge(0, 1, value)
        with pytest.raises(InvalidArgument):
            net.add_edge(0, 1, 1, value)
        assert net.num_edges == 0

    def test_negative_cost_allowed(self):
        net = ResidualNetwork(2)
        e = net.add_edge(0, 1, 3, cost=-2)
        assert net.edge(e).cost == -2
        assert net.edge(net.reverse_of(e)).cost == 2

    def test_zero_capacity_edge_is_saturated(self):
        net = ResidualNetwork(2)
        e = net.add_edge(0, 1, 0)
        assert net.residual_capacity(e) == 0


class TestAugment:
    def test_augment_updates_both_records(self):
        net = ResidualNetwork(2)
        e = net.add_edge(0, 1, 10)
        net.augment(e, 4)

        assert net.flow(e) == 4
        assert net.residual_capacity(e) == 6
        assert net.residual_capacity(net.reverse_of(e)) == 4

    def test_augment_reverse_cancels_flow(self):
        net = ResidualNetwork(2)
        e = net.add_edge(0, 1, 10)
        net.augment(e, 4)
        net.augment(net.reverse_of(e), 3)

        assert net.flow(e) == 1
        assert net.residual_capacity(net.reverse_of(e)) == 1

    def test_augment_beyond_residual(self):
        net = ResidualNetwork(2)
        e = net.add_edge(0, 1, 2)
        with pytest.raises(InvalidArgument):
            net.augment(e, 3)
        with pytest.raises(InvalidArgument):
            net.augment(net.reverse_of(e), 1)

    def test_negative_amount(self):
        net = ResidualNetwork(2)
        e = net.add_edge(0, 1, 2)
        with pytest.raises(InvalidArgument):
            net.augment(e, -1)

    def test_nan_amount(self):
        net = ResidualNetwork(2)
        e = net.add_edge(0, 1, 2.0)
        with pytest.raises(InvalidArgument):
            net.augment(e, math.nan)
        assert net.flow(e) == 0

    @pytest.mark.parametrize("handle", [-1, 2, "0"])
    def test_unknown_handle(self, handle):
        net = ResidualNetwork(2)
        net.add_edge(0, 1, 2)
        with pytest.raises(OutOfRange):
            net.augment(handle, 1)

    def test_fraction_capacities_stay_exact(self):
        net = ResidualNetwork(2)
        e = net.add_edge(0, 1, Fraction(1, 3))
        net.augment(e, Fraction(1, 6))
        assert net.residual_capacity(e) == Fraction(1, 6)


class TestFlowState:
    def test_net_outflow_and_flow_value(self):
        net = ResidualNetwork(3)
        a = net.add_edge(0, 1, 5)
        b = net.add_edge(1, 2, 5)
        net.augment(a, 3)
        net.augment(b, 3)

        assert net.flow_value(0) == 3
        assert net.net_outflow(1) == 0
        assert net.net_outflow(2) == -3

    def test_reset_flow(self):
        net = ResidualNetwork(2)
        e = net.add_edge(0, 1, 5)
        net.augment(e, 5)
        net.mark_saturated(0, 1)

        net.reset_flow()
        assert net.flow(e) == 0
        assert net.flow(net.reverse_of(e)) == 0
        assert not net.is_saturated(0, 1)

    def test_add_edge_clears_saturation_marker(self):
        net = ResidualNetwork(3)
        net.add_edge(0, 1, 5)
        net.mark_saturated(0, 1)
        assert net.is_saturated(0, 1)
        assert not net.is_saturated(1, 0)

        net.add_edge(0, 2, 1)
        assert not net.is_saturated(0, 1)

    def test_copy_is_independent(self):
        net = ResidualNetwork(2)
        e = net.add_edge(0, 1, 5)
        net.augment(e, 2)
        net.mark_saturated(0, 1)

        clone = net.copy()
        clone.augment(e, 3)
        clone.add_edge(1, 0, 1)

        assert net.flow(e) == 2
        assert net.num_edges == 1
        assert net.is_saturated(0, 1)
        assert clone.flow(e) == 5
        assert clone.num_edges == 2

    def test_out_edges_validates_vertex(self):
        net = ResidualNetwork(2)
        with pytest.raises(OutOfRange):
            net.out_edges(2)
