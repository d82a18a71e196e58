"""Unit tests for rank assignment and layer grouping."""

from glyphflow.ir.graph import FlowGraph
from glyphflow.ir.model import Edge, GraphModel, Node
from glyphflow.layout.ranking import assign_ranks, group_layers


def make_graph(*edges: tuple[str, str], nodes: list[str] | None = None) -> FlowGraph:
    model = GraphModel.build(
        nodes=[Node.bare(n) for n in nodes or []],
        edges=[Edge(a, b) for a, b in edges],
    )
    return FlowGraph.from_model(model)


class TestAssignRanks:
    def test_chain(self):
        ranks = assign_ranks(make_graph(("A", "B"), ("B", "C")))
        assert ranks == {"A": 0, "B": 1, "C": 2}

    def test_diamond(self):
        ranks = assign_ranks(make_graph(("A", "B"), ("A", "C"), ("B", "D"), ("C", "D")))
        assert ranks == {"A": 0, "B": 1, "C": 1, "D": 2}

    def test_longest_path_wins(self):
        ranks = assign_ranks(make_graph(("A", "B"), ("B", "C"), ("A", "C")))
        assert ranks["C"] == 2

    def test_isolated_nodes_rank_zero(self):
        ranks = assign_ranks(make_graph(nodes=["X", "Y"]))
        assert ranks == {"X": 0, "Y": 0}

    def test_self_loop_ignored(self):
        ranks = assign_ranks(make_graph(("A", "A"), ("A", "B")))
        assert ranks == {"A": 0, "B": 1}

    def test_every_forward_edge_descends(self):
        g = make_graph(
            ("start", "parse"),
            ("parse", "check"),
            ("check", "emit"),
            ("check", "fail"),
            ("start", "emit"),
            ("fail", "done"),
            ("emit", "done"),
        )
        ranks = assign_ranks(g)
        for edge in g.edges():
            assert ranks[edge.to_id] > ranks[edge.from_id]

    def test_two_cycle(self):
        ranks = assign_ranks(make_graph(("A", "B"), ("B", "A")))
        assert ranks == {"A": 0, "B": 1}

    def test_cycle_entered_from_outside(self):
        ranks = assign_ranks(make_graph(("S", "A"), ("A", "B"), ("B", "A")))
        assert ranks["S"] == 0
        assert ranks["A"] == 1
        assert ranks["B"] == 2

    def test_node_downstream_of_cycle_stays_below_it(self):
        """A node fed only from a cycle must not be placed above the cycle."""
        g = make_graph(("A", "B"), ("B", "A"), ("B", "D"), nodes=["D", "A", "B"])
        ranks = assign_ranks(g)
        assert ranks["D"] > ranks["B"]
        assert ranks["D"] > ranks["A"]

    def test_deterministic(self):
        edges = [("A", "C"), ("B", "C"), ("C", "D"), ("D", "B")]
        assert assign_ranks(make_graph(*edges)) == assign_ranks(make_graph(*edges))


class TestGroupLayers:
    def test_groups_and_sorts(self):
        assert group_layers({"B": 1, "A": 0, "D": 1, "C": 1}) == [["A"], ["B", "C", "D"]]

    def test_drops_empty_ranks(self):
        assert group_layers({"A": 0, "B": 2}) == [["A"], ["B"]]

    def test_empty(self):
        assert group_layers({}) == []
