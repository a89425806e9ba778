from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional

from linker.config import settings
from linker.core.dto import TransactionRecord
from linker.core.errors import DataSourceError
from linker.core.models import LinkConfig, LinkResult
from linker.ports.chain_data_port import ChainDataPort
from linker.services.graph_builder import build_transaction_graph
from linker.services.path_finder import find_paths


ProgressFn = Callable[[str, Dict[str, Any]], None]


def _noop(event: str, data: Dict[str, Any]) -> None:
    return None


class LinkerService:
    """
    Looks for a connection between two addresses.

    - Data: every signature in both addresses' histories, resolved to
      transaction records one at a time
    - Graph: anchor <-> associate co-occurrence
    - Output: breadth-first path(s) up to cfg.max_depth nodes
    """

    def __init__(self, chain: ChainDataPort, progress_every: int = settings.PROGRESS_EVERY) -> None:
        self.chain = chain
        self.progress_every = max(1, int(progress_every))

    def link(self, cfg: LinkConfig, on_progress: Optional[ProgressFn] = None) -> LinkResult:
        progress = on_progress or _noop
        progress("start", {"address1": cfg.address1, "address2": cfg.address2})

        # Histories; a failure here aborts the run
        sigs1 = self._history(cfg.address1, progress)
        sigs2 = self._history(cfg.address2, progress)

        unique = sorted(set(sigs1) | set(sigs2))
        progress("details", {"count": len(unique)})

        result = LinkResult(
            address1=cfg.address1,
            address2=cfg.address2,
            signatures1=len(sigs1),
            signatures2=len(sigs2),
            unique_signatures=len(unique),
        )

        records = self._details(unique, result, progress)

        times = [r.block_time for r in records if r.block_time is not None]
        if times:
            result.earliest_block_time = min(times)
            result.latest_block_time = max(times)

        graph = build_transaction_graph(records)
        result.graph = graph
        progress("graph", {"nodes": len(graph), "edges": graph.edge_count()})

        result.paths = find_paths(graph, cfg.address1, cfg.address2, cfg.max_depth, ordered=cfg.ordered)
        progress("done", {"paths": len(result.paths), "nodes": len(graph)})
        return result

    # -------------------------
    # Retrieval
    # -------------------------

    def _history(self, address: str, progress: ProgressFn) -> List[str]:
        progress("fetch", {"address": address})
        sigs = self.chain.get_signatures(address)
        progress("fetch_done", {"address": address, "count": len(sigs)})
        return sigs

    def _details(self, signatures: List[str], result: LinkResult, progress: ProgressFn) -> List[TransactionRecord]:
        records: List[TransactionRecord] = []
        for i, sig in enumerate(signatures):
            if i % self.progress_every == 0:
                progress("detail_progress", {
                    "processed": i,
                    "total": len(signatures),
                    "failed": result.transactions_failed,
                })
            try:
                records.append(self.chain.get_transaction(sig))
            except DataSourceError:
                # one missing record only loses its edges
                result.transactions_failed += 1
                continue
            result.transactions_fetched += 1
        return records
