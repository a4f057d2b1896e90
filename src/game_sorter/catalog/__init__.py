"""
Filter catalog served to the client app.

Curated static tables plus live platform grouping.
"""

from game_sorter.catalog.data import (
    CURATED_GIANTBOMB_CONCEPTS,
    CURATED_GIANTBOMB_GENRES,
    CURATED_RAWG_GENRES,
    PRIMARY_GIANTBOMB_PLATFORM_IDS,
)
from game_sorter.catalog.provider import FilterCatalogProvider, release_year

__all__ = [
    "CURATED_GIANTBOMB_CONCEPTS",
    "CURATED_GIANTBOMB_GENRES",
    "CURATED_RAWG_GENRES",
    "FilterCatalogProvider",
    "PRIMARY_GIANTBOMB_PLATFORM_IDS",
    "release_year",
]
