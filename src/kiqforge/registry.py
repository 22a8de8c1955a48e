"""Job registry mapping worker types to their job config."""

import logging
import threading
from typing import Any

from .errors import UnregisteredWorkerError
from .models import JobConfig
from .tracker import QueueTracker
from .worker import worker_type

logger = logging.getLogger(__name__)


class JobRegistry:
    """Registry for worker types.

    Entries are added by register() and never removed.
    """

    def __init__(self, tracker: QueueTracker) -> None:
        """Initialize empty registry."""
        self._tracker = tracker
        self._configs: dict[type, JobConfig] = {}
        self._lock = threading.RLock()

    def register(
        self,
        worker: Any,
        name: str,
        queue: str,
        max_retries: int,
    ) -> JobConfig:
        """
        Register job config for a worker type.

        Re-registering a type replaces its config.

        Args:
            worker: Worker class or instance (its class is the key)
            name: Display name stamped into each job's Type
            queue: Destination queue (unnamespaced)
            max_retries: Retry budget stamped into each job's Retry

        Returns:
            The stored job config
        """
        key = worker_type(worker)
        config = JobConfig(queue=queue, max_retries=max_retries, name=name)

        with self._lock:
            previous = self._configs.get(key)
            self._configs[key] = config

        if previous is not None and previous != config:
            logger.debug(f"Replaced job config for {key.__qualname__}: {previous} -> {config}")
        else:
            logger.debug(f"Registered {key.__qualname__} as {name!r} on queue {queue!r}")

        self._tracker.track(queue)
        return config

    def lookup(self, worker: Any) -> JobConfig | None:
        """Get job config for a worker type, or None."""
        with self._lock:
            return self._configs.get(worker_type(worker))

    def get(self, worker: Any) -> JobConfig:
        """Get job config for a worker type; raise if it was never registered."""
        config = self.lookup(worker)
        if config is None:
            raise UnregisteredWorkerError(worker_type(worker))
        return config

    def has(self, worker: Any) -> bool:
        """Check if worker type is registered."""
        return self.lookup(worker) is not None

    def list_names(self) -> list[str]:
        """List display names of all registered worker types."""
        with self._lock:
            return [config.name for config in self._configs.values()]

    def __len__(self) -> int:
        with self._lock:
            return len(self._configs)
