"""Queue tracking and discovery-set publishing."""

import logging
import threading

from .errors import StoreError
from .store import RedisStore

logger = logging.getLogger(__name__)

QUEUES_KEY = "queues"


class QueueTracker:
    """Set of queue names known to this process.

    Once the store is connected, every newly seen queue is added to the
    ``<namespace>:queues`` set so consumers can discover it.
    """

    def __init__(self, store: RedisStore) -> None:
        """Initialize empty tracker."""
        self._store = store
        self._queues: set[str] = set()
        self._lock = threading.Lock()

    def track(self, queue: str) -> bool:
        """
        Track a queue name.

        Args:
            queue: Queue name (unnamespaced)

        Returns:
            True if the queue was not known before
        """
        with self._lock:
            if queue in self._queues:
                return False
            self._queues.add(queue)

        if self._store.connected:
            self._publish(queue)
        return True

    def publish_all(self) -> None:
        """Publish every known queue to the discovery set in one command."""
        queues = sorted(self.queues())
        if not queues:
            return
        self._publish(*queues)

    def queues(self) -> set[str]:
        """Snapshot of known queue names."""
        with self._lock:
            return set(self._queues)

    def _publish(self, *queues: str) -> None:
        # Discovery is best effort; failures never reach the caller.
        try:
            self._store.query("SADD", self._store.namespaced_key(QUEUES_KEY), *queues)
        except StoreError as e:
            logger.warning(f"Failed to publish queues {list(queues)}: {e}")

    def __contains__(self, queue: object) -> bool:
        with self._lock:
            return queue in self._queues

    def __len__(self) -> int:
        with self._lock:
            return len(self._queues)
