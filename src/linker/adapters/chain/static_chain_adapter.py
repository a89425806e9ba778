import json
from linker.ports.chain_data_port import ChainDataPort
from linker.core.dto import TransactionRecord
from linker.core.errors import DataSourceError
from typing import Any, Dict, Iterable, List, Optional

class StaticChainAdapter(ChainDataPort):
    def __init__(self,
                 signatures: Optional[Dict[str, List[str]]] = None,
                 transactions: Optional[Dict[str, TransactionRecord]] = None,
                 failing: Optional[Iterable[str]] = None,
                 failing_addresses: Optional[Iterable[str]] = None,
                 ):
        self._signatures = signatures or {}
        self._transactions = transactions or {}
        self._failing = set(failing or ())
        self._failing_addresses = set(failing_addresses or ())
        self.calls: List[str] = []

    @classmethod
    def from_json_file(cls, path: str) -> "StaticChainAdapter":
        """
        Fixture layout:
          {"signatures": {address: [sig, ...]},
           "transactions": {sig: <getTransaction result>}}
        """
        with open(path, "r", encoding="utf-8") as f:
            data: Dict[str, Any] = json.load(f)
        sigs = {a: [s for s in v if isinstance(s, str)]
                for a, v in (data.get("signatures") or {}).items() if isinstance(v, list)}
        txs = {s: TransactionRecord.from_rpc_result(r, signature=s)
               for s, r in (data.get("transactions") or {}).items()}
        return cls(signatures=sigs, transactions=txs)

    def get_signatures(self, address):
        self.calls.append(f"signatures:{address}")
        if address in self._failing_addresses:
            raise DataSourceError(f"history unavailable for {address}")
        return list(self._signatures.get(address, []))

    def get_transaction(self, signature):
        self.calls.append(f"transaction:{signature}")
        if signature in self._failing or signature not in self._transactions:
            raise DataSourceError(f"Failed to fetch transaction details for {signature}")
        return self._transactions[signature]
