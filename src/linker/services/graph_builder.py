from __future__ import annotations

from types import MappingProxyType
from typing import Dict, Iterable, Set

from linker.core.dto import TransactionRecord
from linker.core.models import Graph


def build_transaction_graph(transactions: Iterable[TransactionRecord]) -> Graph:
    """
    Undirected co-occurrence graph from transaction participant lists.

    The first account key of each transaction is its anchor; every other key
    is linked to the anchor in both directions. Associates are not linked to
    each other. Records without account keys add nothing.
    """
    adj: Dict[str, Set[str]] = {}

    for tx in transactions:
        keys = tx.account_keys
        if not keys:
            continue

        anchor = keys[0]
        for associate in keys[1:]:
            adj.setdefault(anchor, set()).add(associate)
            adj.setdefault(associate, set()).add(anchor)

    return Graph(adjacency=MappingProxyType({addr: frozenset(ns) for addr, ns in adj.items()}))
