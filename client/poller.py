import logging
import threading

import requests

from client.api import ApiError, GymSlotClient
from client.cache import SlotCache

logger = logging.getLogger(__name__)

REFRESH_INTERVAL_SECONDS = 5.0


class SlotPoller:
    """Refetch slot availability on a fixed interval into a SlotCache."""

    def __init__(
        self,
        client: GymSlotClient,
        cache: SlotCache | None = None,
        interval: float = REFRESH_INTERVAL_SECONDS,
        day: str | None = None,
    ) -> None:
        self.client = client
        # entries outlive one interval so a slow poll does not empty the cache
        self.cache = cache if cache is not None else SlotCache(ttl_seconds=interval * 2)
        self.interval = interval
        self.day = day

    def poll_once(self) -> int:
        slots = self.client.list_slots(self.day, upcoming=True)
        self.cache.put_many(slots)
        return len(slots)

    def run(self, stop_event: threading.Event) -> None:
        while not stop_event.is_set():
            try:
                count = self.poll_once()
                logger.debug("Polled %d slot(s)", count)
            except (ApiError, requests.RequestException) as exc:
                logger.warning("Slot poll failed: %s", exc)
            stop_event.wait(self.interval)
