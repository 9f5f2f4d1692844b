"""Pydantic models for gcsbench configuration."""

from pydantic import BaseModel, Field

from gcsbench.core.const import DEFAULT_OBJECT_NAME, DEFAULT_REPEAT, STORAGE_HOST


class BenchConfig(BaseModel):
    """Settings shared by all benchmark commands.

    Attributes:
        storage_host: host serving the JSON and XML storage APIs.
        timeout: per-request timeout in seconds; ``None`` waits forever.
        object_name: name of the object written by every repetition.
        repeat: number of timed repetitions.
    """

    storage_host: str = STORAGE_HOST
    timeout: float | None = Field(default=None, gt=0)
    object_name: str = Field(default=DEFAULT_OBJECT_NAME, min_length=1)
    repeat: int = Field(default=DEFAULT_REPEAT, ge=1)
