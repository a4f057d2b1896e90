"""
RAWG catalog client (through the RapidAPI gateway).

RAWG only paginates by page number, serves at most 40 results per page
and refuses pages beyond 250, which makes roughly the first 10,000
results of any filtered listing reachable.
"""

from typing import Any, ClassVar

from game_sorter.config import RawgAPIConfig, get_settings
from game_sorter.upstream.clients.base import CatalogClient
from game_sorter.upstream.contracts import (
    FilterSpec,
    ItemSummary,
    PageQuery,
    RawgGameDetail,
    RawgGamesPage,
    SamplingMode,
)
from game_sorter.upstream.utils.throttle import RequestThrottle

# Query parameters RAWG accepts as comma-joined id lists
RAWG_FILTER_DIMENSIONS = ("genres", "platforms")

# Status RAWG answers with for a page beyond the end of a listing
PAGE_OUT_OF_RANGE = 404


class RawgClient(CatalogClient[RawgGameDetail]):
    """
    Client for the RAWG games database.

    Example:
        >>> async with RawgClient() as client:
        ...     total = await client.count(FilterSpec(dimensions={"genres": ("4",)}))
    """

    sampling_mode: ClassVar[SamplingMode] = SamplingMode.PAGED

    PAGE_SIZE: ClassVar[int] = 40
    PAGE_CAP: ClassVar[int] = 250

    def __init__(
        self,
        *,
        config: RawgAPIConfig | None = None,
        throttle: RequestThrottle | None = None,
    ) -> None:
        """
        Initialize RAWG client.

        Args:
            config: RAWG gateway configuration (uses settings if None)
            throttle: Request spacing (none by default)

        Raises:
            ConfigMissingError: If the gateway key or host is missing
        """
        self._config = config or get_settings().rawg
        self._api_key, self._api_host = self._config.require_credentials()
        super().__init__(
            base_url=self._config.base_url,
            timeout=self._config.timeout_seconds,
            throttle=throttle,
        )

    @property
    def source_name(self) -> str:
        """Return source identifier."""
        return "rawg"

    def _default_headers(self) -> dict[str, str]:
        return {
            **super()._default_headers(),
            "x-rapidapi-key": self._api_key,
            "x-rapidapi-host": self._api_host,
        }

    def _filter_params(self, filters: FilterSpec) -> dict[str, Any]:
        params: dict[str, Any] = {}
        for name in RAWG_FILTER_DIMENSIONS:
            if filters.get(name):
                params[name] = filters.joined(name)
        return params

    async def count(self, filters: FilterSpec) -> int:
        """Total games matching the filters."""
        params = {**self._filter_params(filters), "page_size": 1}
        raw_data = await self._get_json("/games", params)
        listing = self._parse(RawgGamesPage, raw_data, endpoint="/games")
        self._logger.info("Counted games", total=listing.count, filters=filters.dimensions)
        return listing.count

    async def fetch_page(self, query: PageQuery) -> list[ItemSummary]:
        """
        Fetch one page of the /games listing.

        A page past the end of the listing is answered with HTTP 404 by
        RAWG; it is reported as an empty page.
        """
        if query.page is None:
            raise ValueError("RAWG listings are addressed by page number")

        params = {
            **self._filter_params(query.filters),
            "page": query.page,
            "page_size": query.page_size,
        }
        response = await self._send("/games", params)
        if response.status_code == PAGE_OUT_OF_RANGE:
            self._logger.warning("Page out of range", page=query.page)
            return []
        self._raise_for_status(response)

        listing = self._parse(RawgGamesPage, self._decode(response), endpoint="/games")
        return [ItemSummary(id=game.id, name=game.name) for game in listing.results]

    async def fetch_detail(self, item_id: str | int) -> RawgGameDetail:
        """Fetch the full record of one game."""
        path = f"/games/{item_id}"
        raw_data = await self._get_json(path)
        return self._parse(RawgGameDetail, raw_data, endpoint=path)
