import threading
import time
from collections import OrderedDict
from typing import Any, Callable


class SlotCache:
    """Short-lived slot snapshots keyed by slot id.

    Holds at most ``max_entries`` slots; the oldest write is evicted first.
    Entries older than ``ttl_seconds`` read as missing.
    """

    def __init__(
        self,
        max_entries: int = 256,
        ttl_seconds: float = 5.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_entries <= 0:
            raise ValueError("max_entries must be positive")
        self.max_entries = max_entries
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: OrderedDict[int, tuple[float, dict[str, Any]]] = OrderedDict()
        self._lock = threading.Lock()

    def put(self, slot: dict[str, Any]) -> None:
        slot_id = int(slot["id"])
        with self._lock:
            self._entries.pop(slot_id, None)
            self._entries[slot_id] = (self._clock(), dict(slot))
            while len(self._entries) > self.max_entries:
                self._entries.popitem(last=False)

    def put_many(self, slots) -> None:
        for slot in slots:
            self.put(slot)

    def get(self, slot_id: int) -> dict[str, Any] | None:
        with self._lock:
            entry = self._entries.get(int(slot_id))
            if entry is None:
                return None
            stored_at, slot = entry
            if self._clock() - stored_at > self.ttl_seconds:
                del self._entries[int(slot_id)]
                return None
            return dict(slot)

    def invalidate(self, slot_id: int) -> None:
        with self._lock:
            self._entries.pop(int(slot_id), None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
