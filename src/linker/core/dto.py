from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional, Tuple


@dataclass(frozen=True)
class TransactionRecord:
    """
    A retrieved transaction, reduced to what graph building and the
    report need.

    `account_keys` is None when the payload had no usable
    transaction.message.accountKeys list.
    """

    signature: Optional[str]
    account_keys: Optional[Tuple[str, ...]]
    block_time: Optional[int] = None    # unix seconds, when the node knows it

    @classmethod
    def from_rpc_result(cls, result: Any, signature: Optional[str] = None) -> "TransactionRecord":
        """
        Tolerant parser for a getTransaction result. Never raises.
        """
        if not isinstance(result, dict):
            return cls(signature=signature, account_keys=None)

        tx = result.get("transaction")
        message = tx.get("message") if isinstance(tx, dict) else None
        raw_keys = message.get("accountKeys") if isinstance(message, dict) else None

        keys: Optional[Tuple[str, ...]] = None
        if isinstance(raw_keys, list):
            out: List[str] = []
            for k in raw_keys:
                # jsonParsed encoding wraps each key: {"pubkey": ..., "signer": ..., "writable": ...}
                if isinstance(k, dict):
                    k = k.get("pubkey")
                if isinstance(k, str):
                    out.append(k)
            keys = tuple(out)

        if signature is None and isinstance(tx, dict):
            sigs = tx.get("signatures")
            if isinstance(sigs, list) and sigs and isinstance(sigs[0], str):
                signature = sigs[0]

        block_time = result.get("blockTime")
        if isinstance(block_time, bool) or not isinstance(block_time, int):
            block_time = None

        return cls(signature=signature, account_keys=keys, block_time=block_time)
