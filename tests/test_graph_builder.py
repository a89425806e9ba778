import unittest

from linker.core.dto import TransactionRecord
from linker.core.models import Graph
from linker.services.graph_builder import build_transaction_graph


def _tx(*keys, sig=None) -> TransactionRecord:
    return TransactionRecord(signature=sig, account_keys=tuple(keys))


class GraphBuilderTests(unittest.TestCase):
    def test_anchor_links_to_every_associate_but_associates_stay_apart(self) -> None:
        graph = build_transaction_graph([_tx("A", "B", "C")])

        self.assertTrue(graph.has_edge("A", "B"))
        self.assertTrue(graph.has_edge("A", "C"))
        self.assertFalse(graph.has_edge("B", "C"))
        self.assertFalse(graph.has_edge("C", "B"))
        self.assertEqual(graph.edge_count(), 2)

    def test_edges_are_symmetric(self) -> None:
        graph = build_transaction_graph([
            _tx("A", "B", "C"),
            _tx("C", "D"),
            _tx("E", "A", "D"),
        ])

        for a in graph:
            for b in graph.neighbors(a):
                self.assertIn(a, graph.neighbors(b), f"{b} -> {a} missing")

    def test_degenerate_and_malformed_records_add_nothing(self) -> None:
        graph = build_transaction_graph([
            _tx("A"),
            _tx(),
            TransactionRecord(signature="x", account_keys=None),
        ])

        self.assertEqual(len(graph), 0)
        self.assertEqual(graph.edge_count(), 0)

    def test_repeated_co_occurrence_is_a_single_edge(self) -> None:
        graph = build_transaction_graph([_tx("A", "B"), _tx("A", "B"), _tx("B", "A")])

        self.assertEqual(graph.neighbors("A"), frozenset({"B"}))
        self.assertEqual(graph.neighbors("B"), frozenset({"A"}))
        self.assertEqual(graph.edge_count(), 1)

    def test_record_order_does_not_change_graph(self) -> None:
        txs = [_tx("A", "B"), _tx("B", "C", "D"), _tx("D", "A")]

        forward = build_transaction_graph(txs)
        backward = build_transaction_graph(list(reversed(txs)))

        self.assertEqual(dict(forward.adjacency), dict(backward.adjacency))

    def test_anchor_repeated_in_keys_makes_self_loop(self) -> None:
        graph = build_transaction_graph([_tx("A", "A", "B")])

        self.assertTrue(graph.has_edge("A", "A"))
        self.assertEqual(graph.edge_count(), 2)

    def test_built_graph_is_read_only(self) -> None:
        graph = build_transaction_graph([_tx("A", "B")])

        with self.assertRaises(TypeError):
            graph.adjacency["Z"] = frozenset({"A"})
        with self.assertRaises(AttributeError):
            graph.neighbors("A").add("Z")
        with self.assertRaises(AttributeError):
            graph.adjacency = {}
        self.assertEqual(dict(graph.adjacency), {"A": frozenset({"B"}), "B": frozenset({"A"})})

    def test_graph_freezes_plain_dict_input(self) -> None:
        source = {"A": {"B"}, "B": {"A"}}
        graph = Graph(adjacency=source)
        source["A"].add("C")
        source["C"] = {"A"}

        self.assertNotIn("C", graph)
        self.assertEqual(graph.neighbors("A"), frozenset({"B"}))
        with self.assertRaises(TypeError):
            graph.adjacency["C"] = frozenset()

    def test_unknown_address_has_no_neighbors(self) -> None:
        graph = build_transaction_graph([_tx("A", "B")])

        self.assertNotIn("Z", graph)
        self.assertEqual(graph.neighbors("Z"), frozenset())


if __name__ == "__main__":
    unittest.main()
