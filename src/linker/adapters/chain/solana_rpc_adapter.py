from typing import Any, Dict, Iterable, List, Optional
import requests

from linker.config.settings import (
    SOLANA_RPC_ENDPOINT,
    SOLANA_REQUESTS_PER_SEC,
    SOLANA_TIMEOUT_SEC,
    SOLANA_MAX_RETRIES,
    SOLANA_SIGNATURE_PAGE_SIZE,
    SOLANA_MAX_SIGNATURE_PAGES,
)

from linker.adapters.chain.rate_limiter import SimpleRateLimiter, backoff_sleep, retry_after_seconds
from linker.core.errors import DataSourceError, RateLimitError
from linker.ports.chain_data_port import ChainDataPort
from linker.core.dto import TransactionRecord


class SolanaRpcChainAdapter(ChainDataPort):

    def __init__(
        self,
        endpoint: str = SOLANA_RPC_ENDPOINT,
        requests_per_sec: float = SOLANA_REQUESTS_PER_SEC,
        timeout_sec: int = SOLANA_TIMEOUT_SEC,
        max_retries: int = SOLANA_MAX_RETRIES,
        page_size: int = SOLANA_SIGNATURE_PAGE_SIZE,
        max_pages: int = SOLANA_MAX_SIGNATURE_PAGES,
        session: Optional[requests.Session] = None,
    ) -> None:
        self._endpoint = endpoint
        self._timeout = timeout_sec
        self._max_retries = max_retries
        self._page_size = page_size
        self._max_pages = max_pages

        self._rl = SimpleRateLimiter(requests_per_sec)
        self._session = session or requests.Session()
        self._next_id = 1

    # ---------- internal ----------

    def _call(self, method: str, params: List[Any]) -> Dict[str, Any]:
        body = {
            "jsonrpc": "2.0",
            "id": self._next_id,
            "method": method,
            "params": params,
        }
        self._next_id += 1

        last_err: Optional[Exception] = None

        for attempt in range(self._max_retries):
            try:
                self._rl.wait()
                resp = self._session.post(
                    self._endpoint,
                    json=body,
                    timeout=self._timeout,
                )
                if resp.status_code == 429:
                    last_err = RateLimitError(f"{method}: HTTP 429")
                    backoff_sleep(attempt, hint=retry_after_seconds(resp.headers))
                    continue
                resp.raise_for_status()
                data = resp.json()

                if not isinstance(data, dict):
                    last_err = DataSourceError(f"{method}: unexpected response {data!r}")
                    backoff_sleep(attempt)
                    continue

                err = data.get("error")
                if isinstance(err, dict) and self._is_rate_limited(err):
                    last_err = RateLimitError(f"{method}: {err.get('message')}")
                    backoff_sleep(attempt)
                    continue

                return data

            except (requests.RequestException, ValueError) as e:
                last_err = e
                backoff_sleep(attempt)

        raise DataSourceError(f"Solana RPC {method} failed after retries: {last_err}")

    @staticmethod
    def _is_rate_limited(err: Dict[str, Any]) -> bool:
        code = err.get("code")
        message = str(err.get("message", "")).lower()
        return code == 429 or "rate limit" in message or "too many requests" in message

    @staticmethod
    def _raise_for_rpc_error(method: str, data: Dict[str, Any]) -> None:
        err = data.get("error")
        if err is None:
            return
        if isinstance(err, dict):
            raise DataSourceError(f"{method} error {err.get('code')}: {err.get('message')}")
        raise DataSourceError(f"{method} error: {err}")

    @staticmethod
    def _row_signature(row: Any) -> Optional[str]:
        if not isinstance(row, dict):
            return None
        sig = row.get("signature")
        return sig if isinstance(sig, str) and sig else None

    # ---------- port methods ----------

    def iter_signatures(self, address: str) -> Iterable[str]:
        """
        Walks getSignaturesForAddress backwards in time, newest first,
        one `before` cursor per page, until an empty page or max_pages pages.
        """
        before: Optional[str] = None
        for _ in range(self._max_pages):
            opts: Dict[str, Any] = {"limit": self._page_size}
            if before is not None:
                opts["before"] = before

            data = self._call("getSignaturesForAddress", [address, opts])
            self._raise_for_rpc_error("getSignaturesForAddress", data)

            rows = data.get("result")
            if not isinstance(rows, list) or not rows:
                break

            for r in rows:
                sig = self._row_signature(r)
                if sig is not None:
                    yield sig

            # a short page is not the end of the history, only an empty one is
            before = self._row_signature(rows[-1])
            if before is None:
                break

    def get_signatures(self, address: str) -> List[str]:
        return list(self.iter_signatures(address))

    def get_transaction(self, signature: str) -> TransactionRecord:
        data = self._call("getTransaction", [
            signature,
            {"encoding": "json", "maxSupportedTransactionVersion": 0},
        ])
        self._raise_for_rpc_error("getTransaction", data)
        if "result" not in data:
            raise DataSourceError(f"Failed to fetch transaction details for {signature}")
        return TransactionRecord.from_rpc_result(data["result"], signature=signature)
