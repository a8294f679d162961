import logging
import threading
import time
from datetime import timedelta
from typing import Any, Callable, Dict, Optional, Tuple

logger = logging.getLogger(__name__)

DEFAULT_SLIDING_EXPIRATION = timedelta(minutes=10)
PRUNE_THRESHOLD = 512


class PostCache:
    """
    In-memory store for rendered posts with sliding expiration.

    Every hit pushes the entry's expiry forward by the full window.
    Concurrent misses for one key are not coalesced; callers may render twice.
    """

    def __init__(
        self,
        sliding_expiration: timedelta = DEFAULT_SLIDING_EXPIRATION,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.window = sliding_expiration.total_seconds()
        self.clock = clock
        self._entries: Dict[str, Tuple[Any, float]] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[Any]:
        now = self.clock()
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None

            value, last_seen = entry
            if now - last_seen >= self.window:
                del self._entries[key]
                logger.debug(f"Cache entry expired: {key}")
                return None

            self._entries[key] = (value, now)
            return value

    def set(self, key: str, value: Any) -> None:
        now = self.clock()
        with self._lock:
            self._entries[key] = (value, now)
            if len(self._entries) > PRUNE_THRESHOLD:
                self._prune(now)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def _prune(self, now: float) -> None:
        stale_keys = [
            key
            for key, (_value, last_seen) in self._entries.items()
            if now - last_seen >= self.window
        ]
        for key in stale_keys:
            self._entries.pop(key, None)
