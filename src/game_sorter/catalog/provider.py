"""
Filter Catalog Provider.

Shapes the filter dimensions offered to the client app from curated
static tables, optionally merged with the live platform listing of
the upstream catalog.
"""

from collections.abc import Iterable, Sequence
from typing import ClassVar

import structlog

from game_sorter.upstream.contracts import (
    FilterCatalog,
    FilterOption,
    GiantBombGenre,
    GiantBombPlatform,
    PlatformGroups,
    PlatformOption,
)

logger = structlog.get_logger(__name__)


def release_year(release_date: str | None) -> str | None:
    """
    Year part of an upstream release date.

    Args:
        release_date: Date string such as "2006-11-17 00:00:00"

    Returns:
        The four-digit year, or None when the date is missing or unreadable
    """
    if not release_date:
        return None
    year = release_date.strip()[:4]
    return year if len(year) == 4 and year.isdigit() else None


class FilterCatalogProvider:
    """
    Builds FilterCatalog payloads.

    Platforms are split into two buckets:
    - primary: platforms on the allow-list, in allow-list order
    - others:  everything else, keyed by release year (newest first),
               names sorted within a year; undated platforms go
               under UNKNOWN_YEAR
    """

    UNKNOWN_YEAR: ClassVar[str] = "unknown"

    def __init__(
        self,
        *,
        genres: Sequence[FilterOption] = (),
        concepts: Sequence[FilterOption] | None = None,
        primary_platform_ids: Iterable[int] = (),
    ) -> None:
        """
        Initialize the provider.

        Args:
            genres: Curated genre table
            concepts: Curated concept table (None when unsupported)
            primary_platform_ids: Platform allow-list, in display order
        """
        self._genres = tuple(genres)
        self._concepts = tuple(concepts) if concepts is not None else None
        self._primary_order = tuple(primary_platform_ids)
        self._primary_ids = frozenset(self._primary_order)

    def build(self, platforms: Iterable[GiantBombPlatform] | None = None) -> FilterCatalog:
        """
        Build the catalog.

        Args:
            platforms: Live platform listing, or None to omit platforms

        Returns:
            FilterCatalog with the curated tables and grouped platforms
        """
        return FilterCatalog(
            genres=list(self._genres),
            concepts=list(self._concepts) if self._concepts is not None else None,
            platforms=self.partition_platforms(platforms) if platforms is not None else None,
        )

    def partition_platforms(self, platforms: Iterable[GiantBombPlatform]) -> PlatformGroups:
        """
        Split platforms into the primary list and year buckets.

        Args:
            platforms: Live platform listing

        Returns:
            PlatformGroups
        """
        primary: dict[int, PlatformOption] = {}
        by_year: dict[str, list[PlatformOption]] = {}

        for platform in platforms:
            option = PlatformOption(
                id=platform.id,
                name=platform.name,
                abbreviation=platform.abbreviation,
                release_year=release_year(platform.release_date),
            )
            if platform.id in self._primary_ids:
                primary[platform.id] = option
            else:
                year = option.release_year or self.UNKNOWN_YEAR
                by_year.setdefault(year, []).append(option)

        # Dated buckets newest first, the undated bucket last
        ordered_years = sorted(
            (year for year in by_year if year != self.UNKNOWN_YEAR),
            reverse=True,
        )
        if self.UNKNOWN_YEAR in by_year:
            ordered_years.append(self.UNKNOWN_YEAR)

        groups = PlatformGroups(
            primary=[primary[pid] for pid in self._primary_order if pid in primary],
            others={
                year: sorted(by_year[year], key=lambda option: option.name.lower())
                for year in ordered_years
            },
        )

        logger.debug(
            "Partitioned platforms",
            primary=len(groups.primary),
            year_buckets=len(groups.others),
        )
        return groups

    @staticmethod
    def genre_options(genres: Iterable[GiantBombGenre]) -> list[FilterOption]:
        """Turn a live genre listing into filter options sorted by name."""
        return sorted(
            (FilterOption(id=genre.id, name=genre.name) for genre in genres),
            key=lambda option: option.name.lower(),
        )
