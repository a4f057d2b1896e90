"""
Contracts for the filter catalog returned to the client app.
"""

from pydantic import BaseModel, ConfigDict, Field


class FilterOption(BaseModel):
    """One selectable filter value (id understood by the upstream + label)."""

    model_config = ConfigDict(frozen=True)

    id: int | str
    name: str


class PlatformOption(FilterOption):
    """Platform filter value, with the year used for grouping."""

    abbreviation: str | None = None
    release_year: str | None = None


class PlatformGroups(BaseModel):
    """Platforms split into the curated primary list and the rest by year."""

    primary: list[PlatformOption] = Field(default_factory=list)
    others: dict[str, list[PlatformOption]] = Field(default_factory=dict)


class FilterCatalog(BaseModel):
    """
    Filter dimensions offered to the client app.

    Dimensions a catalog does not support are left as None and
    dropped when serialized.
    """

    genres: list[FilterOption] | None = None
    concepts: list[FilterOption] | None = None
    platforms: PlatformGroups | None = None
