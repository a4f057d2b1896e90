"""
Giant Bomb catalog client.

Giant Bomb supports limit/offset addressing over a whole filtered
listing, wraps every response in a status envelope and requires a
User-Agent header. It also applies velocity detection, so requests
are spaced by a RequestThrottle.
"""

from typing import Any, ClassVar

from game_sorter.config import GiantBombAPIConfig, get_settings
from game_sorter.upstream.clients.base import CatalogClient, UpstreamError
from game_sorter.upstream.contracts import (
    FilterSpec,
    GiantBombEnvelope,
    GiantBombGameDetail,
    GiantBombGameSummary,
    GiantBombGenre,
    GiantBombPlatform,
    ItemSummary,
    PageQuery,
    SamplingMode,
)
from game_sorter.upstream.utils.throttle import RequestThrottle

GIANTBOMB_FILTER_DIMENSIONS = ("genres", "platforms", "concepts")

# Several values of one filter field are OR-ed with "|"
VALUE_SEPARATOR = "|"

LISTING_LIMIT = 100


class GiantBombClient(CatalogClient[GiantBombGameDetail]):
    """
    Client for the Giant Bomb API.

    Example:
        >>> async with GiantBombClient() as client:
        ...     platforms = await client.list_platforms()
    """

    sampling_mode: ClassVar[SamplingMode] = SamplingMode.OFFSET

    SUMMARY_FIELDS: ClassVar[tuple[str, ...]] = ("guid", "name")

    def __init__(
        self,
        *,
        config: GiantBombAPIConfig | None = None,
        throttle: RequestThrottle | None = None,
    ) -> None:
        """
        Initialize Giant Bomb client.

        Args:
            config: Giant Bomb configuration (uses settings if None)
            throttle: Request spacing (defaults to the configured interval)

        Raises:
            ConfigMissingError: If the API key is missing
        """
        self._config = config or get_settings().giantbomb
        self._api_key = self._config.require_credentials()
        super().__init__(
            base_url=self._config.base_url,
            timeout=self._config.timeout_seconds,
            throttle=throttle or RequestThrottle(self._config.min_request_interval_seconds),
        )

    @property
    def source_name(self) -> str:
        """Return source identifier."""
        return "giantbomb"

    def _filter_param(self, filters: FilterSpec) -> str:
        """Build the ``filter=field:v1|v2,field:v`` expression."""
        clauses = [
            f"{name}:{filters.joined(name, VALUE_SEPARATOR)}"
            for name in GIANTBOMB_FILTER_DIMENSIONS
            if filters.get(name)
        ]
        return ",".join(clauses)

    async def _get_envelope(self, path: str, params: dict[str, Any]) -> GiantBombEnvelope:
        """
        Call an endpoint and unwrap the status envelope.

        Raises:
            UpstreamError: If the envelope reports an error
        """
        raw_data = await self._get_json(
            path,
            {**params, "api_key": self._api_key, "format": "json"},
        )
        envelope = self._parse(GiantBombEnvelope, raw_data, endpoint=path)
        if not envelope.is_successful:
            self._logger.error(
                "Giant Bomb reported an error",
                endpoint=path,
                status_code=envelope.status_code,
                error=envelope.error,
            )
            raise UpstreamError(
                "Error communicating with the game API",
                source=self.source_name,
                endpoint=path,
                status_code=envelope.status_code,
                body=envelope.error,
            )
        return envelope

    def _listing_params(self, filters: FilterSpec) -> dict[str, Any]:
        params: dict[str, Any] = {}
        expression = self._filter_param(filters)
        if expression:
            params["filter"] = expression
        return params

    async def count(self, filters: FilterSpec) -> int:
        """Total games matching the filters."""
        params = {**self._listing_params(filters), "limit": 1, "field_list": "guid"}
        envelope = await self._get_envelope("/games", params)
        total = envelope.number_of_total_results
        self._logger.info("Counted games", total=total, filters=filters.dimensions)
        return total

    async def fetch_page(self, query: PageQuery) -> list[ItemSummary]:
        """Fetch one limit/offset window of the /games listing."""
        offset = query.offset
        if offset is None:
            # Page numbers are translated into the equivalent offset
            offset = (query.page - 1) * query.page_size  # type: ignore[operator]

        fields = query.fields or self.SUMMARY_FIELDS
        params = {
            **self._listing_params(query.filters),
            "limit": query.page_size,
            "offset": offset,
            "field_list": ",".join(fields),
        }
        envelope = await self._get_envelope("/games", params)
        results = envelope.results or []
        if not isinstance(results, list):
            results = []
        summaries = [self._parse(GiantBombGameSummary, item, endpoint="/games") for item in results]
        return [ItemSummary(id=game.guid, name=game.name) for game in summaries]

    async def fetch_detail(self, item_id: str | int) -> GiantBombGameDetail:
        """Fetch the full record of one game by GUID."""
        path = f"/game/{item_id}/"
        envelope = await self._get_envelope(path, {})
        return self._parse(GiantBombGameDetail, envelope.results, endpoint=path)

    async def list_genres(self) -> list[GiantBombGenre]:
        """Fetch the /genres listing (one page covers every genre)."""
        envelope = await self._get_envelope(
            "/genres", {"field_list": "id,name", "limit": LISTING_LIMIT}
        )
        return [
            self._parse(GiantBombGenre, item, endpoint="/genres")
            for item in envelope.results or []
        ]

    async def list_platforms(self) -> list[GiantBombPlatform]:
        """Fetch the /platforms listing with release dates for grouping."""
        envelope = await self._get_envelope(
            "/platforms",
            {
                "field_list": "id,name,abbreviation,release_date",
                "limit": LISTING_LIMIT,
            },
        )
        return [
            self._parse(GiantBombPlatform, item, endpoint="/platforms")
            for item in envelope.results or []
        ]
