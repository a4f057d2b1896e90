"""
Data contracts for catalog requests and responses.

Pydantic models describing what is sent to and expected back from
the upstream game catalogs, plus the filter catalog served to clients.
"""

from game_sorter.upstream.contracts.filters import (
    FilterCatalog,
    FilterOption,
    PlatformGroups,
    PlatformOption,
)
from game_sorter.upstream.contracts.giantbomb import (
    GiantBombEnvelope,
    GiantBombGameDetail,
    GiantBombGameSummary,
    GiantBombGenre,
    GiantBombImage,
    GiantBombPlatform,
    has_description,
)
from game_sorter.upstream.contracts.query import (
    FilterSpec,
    ItemSummary,
    PageQuery,
    SamplingMode,
    split_identifiers,
)
from game_sorter.upstream.contracts.rawg import (
    RawgGameDetail,
    RawgGameSummary,
    RawgGamesPage,
    RawgNamedRef,
    has_image_and_name,
)

__all__ = [
    "FilterCatalog",
    "FilterOption",
    "FilterSpec",
    "GiantBombEnvelope",
    "GiantBombGameDetail",
    "GiantBombGameSummary",
    "GiantBombGenre",
    "GiantBombImage",
    "GiantBombPlatform",
    "ItemSummary",
    "PageQuery",
    "PlatformGroups",
    "PlatformOption",
    "RawgGameDetail",
    "RawgGameSummary",
    "RawgGamesPage",
    "RawgNamedRef",
    "SamplingMode",
    "has_description",
    "has_image_and_name",
    "split_identifiers",
]
