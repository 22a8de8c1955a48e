"""kiqforge producer client."""

import logging
import threading
from collections.abc import Sequence
from typing import Any, TypeVar

from pydantic import ValidationError
from pydantic_core import PydanticSerializationError

from .config import ClientSettings, get_settings
from .errors import JobSerializationError, JobValidationError
from .ids import generate_job_id
from .models import Job, JobConfig
from .registry import JobRegistry
from .store import RedisStore
from .tracker import QueueTracker
from .worker import Worker, worker_type

logger = logging.getLogger(__name__)

W = TypeVar("W", bound=type)


class Client:
    """
    Producer client for Redis-backed job queues.

    Registers worker types, then publishes jobs for them with RPUSH onto
    ``<namespace>:queue:<name>`` lists. Queues in use are advertised in the
    ``<namespace>:queues`` set.
    """

    def __init__(
        self,
        settings: ClientSettings | None = None,
        *,
        store: RedisStore | None = None,
    ) -> None:
        """
        Initialize client.

        Args:
            settings: Client settings (defaults to environment settings)
            store: Pre-built store (defaults to one built from settings)
        """
        self.settings = settings or get_settings()
        self.store = store or RedisStore(self.settings)
        self.tracker = QueueTracker(self.store)
        self.registry = JobRegistry(self.tracker)

    def __enter__(self) -> "Client":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def connect(self, server: str | None = None, max_idle: int | None = None) -> None:
        """
        Connect to Redis and publish all queues registered so far.

        Safe to call again to rotate the connection pool.

        Args:
            server: Redis address as host:port (defaults to settings)
            max_idle: Maximum pooled connections (defaults to settings)
        """
        self.store.connect(server, max_idle)
        self.tracker.publish_all()

    def close(self) -> None:
        """Close the Redis connection pool."""
        self.store.close()

    def register(
        self,
        worker: Any,
        name: str | None = None,
        queue: str | None = None,
        max_retries: int | None = None,
    ) -> JobConfig:
        """
        Register a worker type.

        Omitted values come from the worker's class attributes when it is a
        Worker subclass, then from settings defaults.

        Args:
            worker: Worker class or instance
            name: Display name for Job.Type (defaults to the class name)
            queue: Destination queue
            max_retries: Retry budget

        Returns:
            The registered job config
        """
        cls = worker_type(worker)
        if issubclass(cls, Worker):
            name = name or cls.display_name()
            queue = queue or cls.queue
            if max_retries is None:
                max_retries = cls.max_retries

        if max_retries is None:
            max_retries = self.settings.default_max_retries

        return self.registry.register(
            cls,
            name or cls.__name__,
            queue or self.settings.default_queue,
            max_retries,
        )

    def register_worker(self, worker_cls: W) -> W:
        """Register a worker class from its attributes; usable as a decorator."""
        self.register(worker_cls)
        return worker_cls

    def enqueue(self, worker: Any, *args: Any) -> str:
        """
        Enqueue a job for a registered worker type.

        Args:
            worker: Worker class or instance
            *args: Job arguments (must be JSON-serializable)

        Returns:
            Job ID

        Raises:
            UnregisteredWorkerError: If the worker type was never registered
            JobSerializationError: If args cannot be encoded
            StoreError: If the RPUSH fails
        """
        config = self.registry.get(worker)
        return self._enqueue(config.name, config, args)

    def enqueue_with_config(self, name: str, config: JobConfig, *args: Any) -> str:
        """
        Enqueue a job without registry lookup.

        The queue is tracked first, since it may never have been registered.

        Args:
            name: Display name for Job.Type
            config: Job config (its name is ignored)
            *args: Job arguments (must be JSON-serializable)

        Returns:
            Job ID

        Raises:
            JobValidationError: If name is empty (nothing is tracked or published)
            JobSerializationError: If args cannot be encoded
            StoreError: If the RPUSH fails
        """
        if not name:
            raise JobValidationError("Job name must not be empty", details={"queue": config.queue})

        self.tracker.track(config.queue)
        return self._enqueue(name, config, args)

    def _enqueue(self, name: str, config: JobConfig, args: Sequence[Any] | None) -> str:
        """Build, serialize and publish one job."""
        # Consumers expect a list, never null.
        try:
            job = Job(
                type=name,
                args=list(args or ()),
                retry=config.max_retries,
                id=generate_job_id(),
            )
        except ValidationError as e:
            raise JobValidationError(f"Invalid job {name!r}: {e}", details={"job_type": name}) from e

        try:
            payload = job.to_json()
        except (PydanticSerializationError, ValueError) as e:
            raise JobSerializationError(name, str(e)) from e

        key = self.store.namespaced_key(f"queue:{config.queue}")
        self.store.query("RPUSH", key, payload)

        logger.debug(f"Enqueued job {job.id} ({name}) on {key}")
        return job.id


_default_client: Client | None = None
_default_lock = threading.Lock()


def init_default_client(settings: ClientSettings | None = None) -> Client:
    """
    Create the process-wide default client.

    Call once at startup; a second call raises until reset_default_client().

    Raises:
        RuntimeError: If the default client already exists
    """
    global _default_client
    with _default_lock:
        if _default_client is not None:
            raise RuntimeError("Default client is already initialized")
        _default_client = Client(settings)
        return _default_client


def get_default_client() -> Client:
    """Get the process-wide default client."""
    with _default_lock:
        if _default_client is None:
            raise RuntimeError("Default client is not initialized; call init_default_client()")
        return _default_client


def reset_default_client() -> None:
    """Close and drop the process-wide default client."""
    global _default_client
    with _default_lock:
        client, _default_client = _default_client, None
    if client is not None:
        client.close()
