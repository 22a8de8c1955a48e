"""Worker declarations on the producer side."""

from typing import Any, ClassVar


class Worker:
    """Base class for worker types that describe their own job config.

    The producer never runs a worker; subclasses only declare where their
    jobs go. Any class (or instance) can still be registered explicitly
    without subclassing.

    Example:
        class EmailSender(Worker):
            queue = "mailers"
            max_retries = 3
    """

    job_name: ClassVar[str | None] = None
    queue: ClassVar[str | None] = None
    max_retries: ClassVar[int | None] = None

    @classmethod
    def display_name(cls) -> str:
        """Name stamped into Job.Type (defaults to class name)."""
        return cls.job_name or cls.__name__


def worker_type(worker: Any) -> type:
    """Return the registry key for a worker class or instance."""
    if isinstance(worker, type):
        return worker
    return type(worker)
