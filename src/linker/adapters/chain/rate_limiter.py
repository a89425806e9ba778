import time
import random
from typing import Mapping, Optional


class SimpleRateLimiter:
    """Spaces calls at least 1/requests_per_sec apart."""

    def __init__(self, requests_per_sec: float) -> None:
        if requests_per_sec <= 0:
            raise ValueError("requests_per_sec must be > 0")
        self._min_interval = 1.0 / requests_per_sec
        self._next_ts = 0.0

    def wait(self) -> None:
        now = time.monotonic()
        if now < self._next_ts:
            time.sleep(self._next_ts - now)
            now = time.monotonic()
        self._next_ts = now + self._min_interval


def backoff_sleep(attempt: int, base: float = 0.5, cap: float = 8.0, hint: Optional[float] = None) -> None:
    if hint is not None and hint > 0:
        time.sleep(min(cap, hint))
        return
    t = min(cap, base * (2 ** attempt))
    t *= 0.7 + random.random() * 0.6
    time.sleep(t)


def retry_after_seconds(headers: Mapping[str, str]) -> Optional[float]:
    # only the delta-seconds form; RPC providers don't send HTTP dates here
    raw = headers.get("Retry-After")
    if raw is None:
        return None
    try:
        return max(0.0, float(raw))
    except (TypeError, ValueError):
        return None
