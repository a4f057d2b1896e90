"""
Request-side contracts shared by every catalog client.

A FilterSpec is built once from the inbound query string and is
immutable for the rest of the request; PageQuery addresses one window
of a filtered listing; ItemSummary is the light record a listing returns.
"""

from collections.abc import Iterable, Mapping
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

FILTER_SEPARATOR = ","


class SamplingMode(str, Enum):
    """How a catalog lets callers address a position in a listing."""

    PAGED = "paged"  # page number only, capped depth (RAWG)
    OFFSET = "offset"  # limit/offset over the whole collection (Giant Bomb)


def split_identifiers(raw: str | None) -> tuple[str, ...]:
    """Split a comma-joined identifier list, trimming and dropping blanks."""
    if not raw:
        return ()
    return tuple(part.strip() for part in raw.split(FILTER_SEPARATOR) if part.strip())


class FilterSpec(BaseModel):
    """
    Ordered set of filter dimensions for one sampling request.

    Dimensions with no identifiers are dropped, so an empty FilterSpec
    means "the whole catalog".
    """

    model_config = ConfigDict(frozen=True)

    dimensions: dict[str, tuple[str, ...]] = Field(default_factory=dict)

    @field_validator("dimensions")
    @classmethod
    def drop_empty_dimensions(
        cls, v: dict[str, tuple[str, ...]]
    ) -> dict[str, tuple[str, ...]]:
        """Remove dimensions that carry no identifiers."""
        return {name: ids for name, ids in v.items() if ids}

    @classmethod
    def from_query(
        cls,
        params: Mapping[str, Any],
        dimensions: Iterable[str],
    ) -> "FilterSpec":
        """
        Build a FilterSpec from query-string parameters.

        Args:
            params: Inbound query parameters (dimension -> "1,2,3")
            dimensions: Dimension names the target catalog understands,
                in the order they should be sent upstream

        Returns:
            FilterSpec: Parsed filters; unknown parameters are ignored
        """
        parsed = {}
        for name in dimensions:
            value = params.get(name)
            parsed[name] = split_identifiers(str(value) if value is not None else None)
        return cls(dimensions=parsed)

    def get(self, name: str) -> tuple[str, ...]:
        """Identifiers for a dimension (empty tuple when unconstrained)."""
        return self.dimensions.get(name, ())

    def joined(self, name: str, separator: str = FILTER_SEPARATOR) -> str:
        """Identifiers for a dimension joined with ``separator``."""
        return separator.join(self.get(name))

    @property
    def is_empty(self) -> bool:
        """True when no dimension constrains the listing."""
        return not self.dimensions


class PageQuery(BaseModel):
    """One page (or one offset window) of a filtered listing."""

    model_config = ConfigDict(frozen=True)

    filters: FilterSpec = Field(default_factory=FilterSpec)
    page_size: int = Field(..., gt=0, description="Results per page / limit")
    page: int | None = Field(default=None, ge=1, description="1-based page number")
    offset: int | None = Field(default=None, ge=0, description="0-based offset")
    fields: tuple[str, ...] = Field(default=(), description="Field projection")

    @model_validator(mode="after")
    def check_addressing(self) -> "PageQuery":
        """Exactly one of page / offset must be given."""
        if (self.page is None) == (self.offset is None):
            raise ValueError("PageQuery needs exactly one of 'page' or 'offset'")
        return self


class ItemSummary(BaseModel):
    """Minimal listing record. Not guaranteed to carry display fields."""

    model_config = ConfigDict(frozen=True)

    id: str | int
    name: str | None = None
