"""
Data contracts for RAWG API responses.

Only the fields the service reads are typed. Detail records keep every
other upstream field (extra="allow") so the client app receives the
full game record.
"""

from pydantic import BaseModel, ConfigDict, Field


class RawgGameSummary(BaseModel):
    """Game entry inside a /games listing."""

    model_config = ConfigDict(extra="ignore")

    id: int = Field(..., gt=0, description="RAWG game ID")
    name: str = Field(default="")
    slug: str = Field(default="")


class RawgGamesPage(BaseModel):
    """
    One page of the /games listing.

    Endpoint: /games?genres=...&page=...&page_size=...
    """

    model_config = ConfigDict(extra="ignore")

    count: int = Field(..., ge=0, description="Total results for the filters")
    next: str | None = None
    previous: str | None = None
    results: list[RawgGameSummary] = Field(default_factory=list)


class RawgNamedRef(BaseModel):
    """Genre/platform/developer reference embedded in a game record."""

    model_config = ConfigDict(extra="allow")

    id: int
    name: str = Field(default="")
    slug: str = Field(default="")


class RawgGameDetail(BaseModel):
    """
    Full game record.

    Endpoint: /games/{id}
    """

    model_config = ConfigDict(extra="allow")

    id: int = Field(..., gt=0)
    name: str = Field(default="")
    slug: str = Field(default="")
    description_raw: str = Field(default="", description="Plain-text description")
    released: str | None = Field(default=None, description="YYYY-MM-DD")
    background_image: str | None = Field(default=None, description="Cover image URL")
    rating: float | None = None
    metacritic: int | None = None
    genres: list[RawgNamedRef] = Field(default_factory=list)

    @property
    def identifier(self) -> int:
        """Identifier used to fetch this record again."""
        return self.id

    @property
    def genre_names(self) -> list[str]:
        """Extract genre names as simple list."""
        return [g.name for g in self.genres]


def has_image_and_name(detail: RawgGameDetail) -> bool:
    """A RAWG record is displayable when it has a name and a cover image."""
    return bool(detail.name.strip()) and bool((detail.background_image or "").strip())
