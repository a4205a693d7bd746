"""CounterCache: volatile read-through/write-through cache owned by one CounterService."""

import threading

from freebase.models import CounterEntry


class CounterCache:
    """Counter key -> int. Thread-safe: reload() may arrive from the host thread."""

    def __init__(self) -> None:
        self._values: dict[str, int] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> int | None:
        with self._lock:
            return self._values.get(key)

    def entry(self, key: str) -> CounterEntry | None:
        """Cached value as a CounterEntry, or None on a miss."""
        with self._lock:
            if key not in self._values:
                return None
            return CounterEntry(key=key, value=self._values[key], cached=True)

    def put(self, key: str, value: int) -> None:
        with self._lock:
            self._values[key] = value

    def clear(self) -> None:
        with self._lock:
            self._values.clear()

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._values

    def __len__(self) -> int:
        with self._lock:
            return len(self._values)
