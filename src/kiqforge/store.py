"""Pooled Redis connection and command execution."""

import logging
import threading
from typing import Any

import redis

from .config import ClientSettings, parse_redis_server
from .errors import KiqError, NotConnectedError, StoreError

logger = logging.getLogger(__name__)


class RedisStore:
    """Redis access for the enqueue path.

    Owns at most one connection pool at a time. Every command goes through
    query(), which borrows one pooled connection and always returns it.
    """

    def __init__(self, settings: ClientSettings) -> None:
        """Initialize an unconnected store."""
        self.settings = settings
        self.namespace = settings.redis_namespace
        self._pool: "redis.BlockingConnectionPool | None" = None
        self._client: "redis.Redis | None" = None
        self._lock = threading.Lock()

    @property
    def connected(self) -> bool:
        """Check if a connection pool is live."""
        with self._lock:
            return self._client is not None

    def connect(self, server: str | None = None, max_idle: int | None = None) -> None:
        """
        Create a fresh connection pool, closing any previous one.

        Args:
            server: Redis address as host:port (defaults to settings)
            max_idle: Maximum pooled connections (defaults to settings)

        Raises:
            ValueError: If server is not in host:port form
        """
        server = server or self.settings.redis_server
        max_idle = max_idle or self.settings.redis_max_idle
        host, port = parse_redis_server(server)

        pool = redis.BlockingConnectionPool(
            host=host,
            port=port,
            db=self.settings.redis_db,
            password=self.settings.redis_password,
            socket_timeout=self.settings.socket_timeout_seconds,
            max_connections=max_idle,
            timeout=self.settings.pool_timeout_seconds,
        )
        client = redis.Redis(connection_pool=pool)

        with self._lock:
            old_pool = self._pool
            self._pool = pool
            self._client = client

        if old_pool is not None:
            old_pool.disconnect()
            logger.info("Closed previous Redis connection pool")

        logger.info(f"Connected to Redis at {server} (max_idle={max_idle}, namespace={self.namespace!r})")

    def query(self, command: str, *args: Any) -> Any:
        """
        Run one Redis command on a pooled connection.

        Args:
            command: Redis command name (e.g. "RPUSH")
            *args: Command arguments

        Returns:
            Raw Redis reply

        Raises:
            NotConnectedError: If connect() was never called
            StoreError: If the command or the transport fails
        """
        with self._lock:
            client = self._client
        if client is None:
            raise NotConnectedError()

        try:
            return client.execute_command(command, *args)
        except redis.RedisError as e:
            raise StoreError(f"Redis {command} failed: {e}", command) from e

    def namespaced_key(self, key: str) -> str:
        """Prefix key with the configured namespace, if any."""
        if self.namespace:
            return f"{self.namespace}:{key}"
        return key

    def health_check(self) -> bool:
        """Check Redis reachability with PING."""
        try:
            return bool(self.query("PING"))
        except KiqError:
            return False

    def close(self) -> None:
        """Close the connection pool."""
        with self._lock:
            pool = self._pool
            self._pool = None
            self._client = None
        if pool is not None:
            pool.disconnect()
            logger.info("Redis connection pool closed")
