"""kiqforge - producer client for Redis-backed job queues."""

from .client import Client, get_default_client, init_default_client, reset_default_client
from .config import ClientSettings, get_settings
from .errors import (
    EnqueueError,
    JobSerializationError,
    JobValidationError,
    KiqError,
    NotConnectedError,
    StoreError,
    UnregisteredWorkerError,
)
from .ids import generate_job_id
from .models import Job, JobConfig
from .worker import Worker

__version__ = "0.1.0"

__all__ = [
    "Client",
    "ClientSettings",
    "get_settings",
    "init_default_client",
    "get_default_client",
    "reset_default_client",
    "Job",
    "JobConfig",
    "Worker",
    "generate_job_id",
    "KiqError",
    "EnqueueError",
    "JobSerializationError",
    "JobValidationError",
    "StoreError",
    "UnregisteredWorkerError",
    "NotConnectedError",
]
