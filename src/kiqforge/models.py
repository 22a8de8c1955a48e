"""Pydantic models for kiqforge."""

import math
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class JobConfig(BaseModel):
    """Static configuration bound to a worker type."""

    model_config = ConfigDict(frozen=True)

    queue: str = Field(min_length=1)
    max_retries: int = Field(ge=0)
    name: str = ""


class Job(BaseModel):
    """Job record as published to a queue.

    Wire keys are fixed (``Type``, ``Args``, ``Retry``, ``ID``) and must
    stay in that order for compatible consumers.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    type: str = Field(alias="Type", min_length=1)
    args: list[Any] = Field(alias="Args", default_factory=list)
    retry: int = Field(alias="Retry")
    id: str = Field(alias="ID", pattern=r"^[0-9a-f]{16}$")

    def to_json(self) -> str:
        """Serialize using wire key names.

        Raises:
            ValueError: If args hold a NaN or infinite float
        """
        _check_finite(self.args)
        return self.model_dump_json(by_alias=True)


def _check_finite(value: Any, _seen: set[int] | None = None) -> None:
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ValueError(f"Out of range float value {value!r} is not JSON compliant")
        return
    if not isinstance(value, (dict, list, tuple, set, frozenset)):
        return

    # Cyclic containers are left for the serializer to reject.
    seen = _seen if _seen is not None else set()
    if id(value) in seen:
        return
    seen.add(id(value))

    items = value.values() if isinstance(value, dict) else value
    for item in items:
        _check_finite(item, seen)
