from __future__ import annotations

from typing import Any, Dict

from linker.core.models import LinkResult


def result_to_dict(r: LinkResult) -> Dict[str, Any]:
    return {
        "address1": r.address1,
        "address2": r.address2,
        "signatures": {
            "address1": r.signatures1,
            "address2": r.signatures2,
            "unique": r.unique_signatures,
        },
        "transactions": {
            "fetched": r.transactions_fetched,
            "failed": r.transactions_failed,
            "earliest_block_time": r.earliest_block_time,
            "latest_block_time": r.latest_block_time,
        },
        "graph": {
            "nodes": len(r.graph),
            "edges": r.graph.edge_count(),
        },
        "paths": [list(p) for p in r.paths],
    }
