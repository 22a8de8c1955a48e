"""Error taxonomy for the enqueue path."""

from typing import Any


class KiqError(Exception):
    """Base exception for kiqforge.

    Attributes:
        message: Human-readable error message
        details: Additional error context
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize error."""
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """String representation of error."""
        if self.details:
            return f"{self.message} (details: {self.details})"
        return self.message


class EnqueueError(KiqError):
    """Recoverable enqueue failure; the job was not published."""


class JobSerializationError(EnqueueError):
    """Job arguments could not be encoded as JSON."""

    def __init__(self, job_type: str, reason: str) -> None:
        """Initialize serialization error."""
        super().__init__(
            f"Cannot serialize arguments for job {job_type}: {reason}",
            details={"job_type": job_type},
        )


class JobValidationError(EnqueueError):
    """Job fields are invalid (e.g. an empty display name)."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize validation error."""
        super().__init__(message, details=details)


class StoreError(EnqueueError):
    """Redis command failed (connection, timeout or server error)."""

    def __init__(self, message: str, command: str | None = None) -> None:
        """Initialize store error."""
        super().__init__(message, details={"command": command} if command else {})


class UnregisteredWorkerError(KiqError, LookupError):
    """Enqueue was called for a worker type that was never registered.

    This is a wiring bug, not a runtime condition. It does not derive from
    EnqueueError, so handlers for recoverable failures let it through.
    """

    def __init__(self, worker_type: type) -> None:
        """Initialize unregistered worker error."""
        super().__init__(
            f"Unregistered worker type {worker_type.__module__}.{worker_type.__qualname__}",
            details={"worker_type": worker_type.__qualname__},
        )
        self.worker_type = worker_type


class NotConnectedError(KiqError, RuntimeError):
    """A store command was issued before connect()."""

    def __init__(self) -> None:
        """Initialize not-connected error."""
        super().__init__("Redis store is not connected; call connect() first")
