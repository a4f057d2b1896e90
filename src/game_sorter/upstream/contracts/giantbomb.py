"""
Data contracts for Giant Bomb API responses.

Every Giant Bomb response shares one envelope:
{"error": "OK", "status_code": 1, "number_of_total_results": N, "results": ...}
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# Giant Bomb's own envelope status for a successful call
STATUS_OK = 1


class GiantBombEnvelope(BaseModel):
    """Common response wrapper."""

    model_config = ConfigDict(extra="ignore")

    error: str = Field(default="OK")
    status_code: int = Field(..., description="1 = OK, anything else is an error")
    limit: int = Field(default=0)
    offset: int = Field(default=0)
    number_of_page_results: int = Field(default=0)
    number_of_total_results: int = Field(default=0, ge=0)
    results: Any = None

    @property
    def is_successful(self) -> bool:
        """Check if the API reported success."""
        return self.status_code == STATUS_OK


class GiantBombGameSummary(BaseModel):
    """Game entry inside a /games listing (field_list=guid,name)."""

    model_config = ConfigDict(extra="ignore")

    guid: str = Field(..., min_length=1, description="Resource GUID, e.g. 3030-4725")
    name: str | None = None


class GiantBombImage(BaseModel):
    """Image URLs attached to a record."""

    model_config = ConfigDict(extra="allow")

    icon_url: str | None = None
    medium_url: str | None = None
    original_url: str | None = None
    super_url: str | None = None


class GiantBombGameDetail(BaseModel):
    """
    Full game record.

    Endpoint: /game/{guid}/
    """

    model_config = ConfigDict(extra="allow")

    guid: str = Field(..., min_length=1)
    id: int | None = None
    name: str | None = None
    deck: str | None = Field(default=None, description="One-line summary")
    description: str | None = Field(default=None, description="HTML body")
    image: GiantBombImage | None = None
    original_release_date: str | None = None
    site_detail_url: str | None = None

    @property
    def identifier(self) -> str:
        """Identifier used to fetch this record again."""
        return self.guid


class GiantBombPlatform(BaseModel):
    """Entry of the /platforms listing."""

    model_config = ConfigDict(extra="ignore")

    id: int
    name: str = Field(default="")
    abbreviation: str | None = None
    release_date: str | None = Field(default=None, description="'YYYY-MM-DD HH:MM:SS'")


class GiantBombGenre(BaseModel):
    """Entry of the /genres listing."""

    model_config = ConfigDict(extra="ignore")

    id: int
    name: str = Field(default="")


def has_description(detail: GiantBombGameDetail) -> bool:
    """A Giant Bomb record is displayable when it has a name and some description."""
    if not (detail.name or "").strip():
        return False
    return bool((detail.deck or "").strip() or (detail.description or "").strip())
