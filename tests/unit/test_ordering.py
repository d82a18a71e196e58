"""Unit tests for crossing counting and barycenter ordering."""

import pytest

from glyphflow.ir.graph import FlowGraph
from glyphflow.ir.model import Edge, GraphModel
from glyphflow.layout.ordering import (
    compute_barycenters,
    cross_count,
    order_layer_by_barycenter,
    order_layers_barycenter,
)
from glyphflow.types import SweepDirection


def make_graph(*edges: tuple[str, str]) -> FlowGraph:
    return FlowGraph.from_model(GraphModel.build(edges=[Edge(a, b) for a, b in edges]))


class TestCrossCount:
    def test_parallel_edges_do_not_cross(self):
        g = make_graph(("A", "C"), ("B", "D"))
        assert cross_count([["A", "B"], ["C", "D"]], g) == 0

    def test_swapped_targets_cross_once(self):
        g = make_graph(("A", "D"), ("B", "C"))
        assert cross_count([["A", "B"], ["C", "D"]], g) == 1

    def test_sums_over_adjacent_layer_pairs(self):
        g = make_graph(("A", "D"), ("B", "C"), ("C", "F"), ("D", "E"))
        assert cross_count([["A", "B"], ["C", "D"], ["E", "F"]], g) == 2

    def test_shared_endpoint_is_not_a_crossing(self):
        g = make_graph(("A", "C"), ("B", "C"))
        assert cross_count([["A", "B"], ["C"]], g) == 0

    def test_non_adjacent_edges_ignored(self):
        g = make_graph(("A", "E"), ("B", "C"))
        assert cross_count([["A", "B"], ["C", "D"], ["E"]], g) == 0

    def test_single_layer(self):
        assert cross_count([["A", "B"]], make_graph()) == 0


class TestBarycenters:
    def test_downward_uses_predecessors(self):
        g = make_graph(("A", "D"), ("B", "C"))
        assert compute_barycenters(["C", "D"], ["A", "B"], g, SweepDirection.Downward) == [1.0, 0.0]

    def test_upward_uses_successors(self):
        g = make_graph(("A", "D"), ("B", "C"))
        assert compute_barycenters(["A", "B"], ["C", "D"], g, SweepDirection.Upward) == [1.0, 0.0]

    def test_mean_of_neighbours(self):
        g = make_graph(("A", "X"), ("C", "X"))
        assert compute_barycenters(["X"], ["A", "B", "C"], g, SweepDirection.Downward) == [1.0]

    def test_no_neighbour_is_none(self):
        g = make_graph(("A", "C"))
        assert compute_barycenters(["C", "Z"], ["A"], g, SweepDirection.Downward) == [0.0, None]


class TestOrderLayerByBarycenter:
    def test_sorts_ascending(self):
        assert order_layer_by_barycenter(["C", "D"], [1.0, 0.0]) == ["D", "C"]

    def test_none_goes_last(self):
        assert order_layer_by_barycenter(["X", "Y", "Z"], [None, 2.0, 1.0]) == ["Z", "Y", "X"]

    def test_ties_keep_original_order(self):
        assert order_layer_by_barycenter(["P", "Q", "R"], [1.0, 1.0, 0.5]) == ["R", "P", "Q"]

    def test_returns_new_list(self):
        layer = ["B", "A"]
        result = order_layer_by_barycenter(layer, [1.0, 0.0])
        assert result == ["A", "B"]
        assert layer == ["B", "A"]


class TestOrderLayers:
    def test_removes_single_crossing(self):
        g = make_graph(("A", "C"), ("B", "D"))
        layers = [["A", "B"], ["D", "C"]]
        assert order_layers_barycenter(g, layers) == 0
        assert layers == [["A", "B"], ["C", "D"]]

    def test_never_worse_than_input(self):
        g = make_graph(
            ("A", "F"), ("A", "D"), ("B", "E"), ("C", "D"),
            ("C", "F"), ("D", "H"), ("E", "G"), ("F", "G"),
        )
        layers = [["A", "B", "C"], ["D", "E", "F"], ["G", "H"]]
        before = cross_count(layers, g)
        after = order_layers_barycenter(g, layers)
        assert after <= before
        assert after == cross_count(layers, g)

    def test_layers_keep_their_members(self):
        g = make_graph(("A", "D"), ("B", "C"), ("A", "C"))
        layers = [["A", "B"], ["C", "D"]]
        order_layers_barycenter(g, layers)
        assert sorted(layers[0]) == ["A", "B"]
        assert sorted(layers[1]) == ["C", "D"]

    @pytest.mark.parametrize("layers", [[], [["A", "B"]]])
    def test_fewer_than_two_layers(self, layers):
        assert order_layers_barycenter(make_graph(), layers) == 0

    def test_zero_iterations_keeps_input(self):
        g = make_graph(("A", "D"), ("B", "C"))
        layers = [["A", "B"], ["C", "D"]]
        assert order_layers_barycenter(g, layers, iterations=0) == 1
        assert layers == [["A", "B"], ["C", "D"]]

    def test_deterministic(self):
        edges = [("A", "E"), ("B", "D"), ("C", "D"), ("A", "F"), ("C", "E")]
        first = [["A", "B", "C"], ["D", "E", "F"]]
        second = [["A", "B", "C"], ["D", "E", "F"]]
        order_layers_barycenter(make_graph(*edges), first)
        order_layers_barycenter(make_graph(*edges), second)
        assert first == second
