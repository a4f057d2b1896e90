"""
Terminal result of one sampling run.
"""

from enum import Enum
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T", bound=BaseModel)


class SampleStatus(str, Enum):
    """How a sampling run ended."""

    FOUND = "found"
    NOT_FOUND = "not_found"  # the filters match nothing
    EXHAUSTED = "exhausted"  # every attempt was rejected


class SampleOutcome(BaseModel, Generic[T]):
    """
    Result of a sampler invocation. Never mutated after creation.

    ``item`` is set only when ``status`` is FOUND.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    status: SampleStatus
    item: T | None = None
    attempts: int = Field(default=0, ge=0, description="Sampling attempts used")
    total_candidates: int = Field(default=0, ge=0, description="Count reported by the probe")

    @classmethod
    def found(cls, item: T, *, attempts: int, total_candidates: int) -> "SampleOutcome[T]":
        return cls(
            status=SampleStatus.FOUND,
            item=item,
            attempts=attempts,
            total_candidates=total_candidates,
        )

    @classmethod
    def not_found(cls) -> "SampleOutcome[T]":
        return cls(status=SampleStatus.NOT_FOUND)

    @classmethod
    def exhausted(cls, *, attempts: int, total_candidates: int) -> "SampleOutcome[T]":
        return cls(
            status=SampleStatus.EXHAUSTED,
            attempts=attempts,
            total_candidates=total_candidates,
        )

    @property
    def is_found(self) -> bool:
        """True when a valid item was picked."""
        return self.status == SampleStatus.FOUND
