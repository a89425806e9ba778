from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List
from linker.core.dto import TransactionRecord

class ChainDataPort(ABC):
    """
    Abstract Class for fetching the ledger facts needed for linking.
    """

    # --- Signature history (newest first) ---

    @abstractmethod
    def get_signatures(self, address: str) -> List[str]:
        """Raises DataSourceError if the history cannot be retrieved."""
        raise NotImplementedError

    # --- Transaction detail ---

    @abstractmethod
    def get_transaction(self, signature: str) -> TransactionRecord:
        """Raises DataSourceError if this one record cannot be retrieved."""
        raise NotImplementedError
