"""
Request façade for the two catalog endpoints.

Maps an inbound ``resource`` selector and filter parameters onto the
Filter Catalog Provider or the sampler, and turns every outcome into
an ApiResponse. This is the only layer where exceptions become HTTP
statuses.
"""

import random
from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from enum import Enum
from typing import Any, ClassVar, Generic, TypeVar

from game_sorter.api.responses import (
    CATALOG_CACHE_CONTROL,
    NO_STORE_CACHE_CONTROL,
    ApiResponse,
)
from game_sorter.catalog import (
    CURATED_GIANTBOMB_CONCEPTS,
    CURATED_GIANTBOMB_GENRES,
    CURATED_RAWG_GENRES,
    PRIMARY_GIANTBOMB_PLATFORM_IDS,
    FilterCatalogProvider,
)
from game_sorter.config import ConfigMissingError, Settings, get_settings
from game_sorter.logger import get_logger, setup_logging
from game_sorter.sampling import create_sampler
from game_sorter.upstream.clients import (
    GIANTBOMB_FILTER_DIMENSIONS,
    RAWG_FILTER_DIMENSIONS,
    CatalogClient,
    CatalogClientError,
    GiantBombClient,
    RawgClient,
)
from game_sorter.upstream.contracts import (
    FilterSpec,
    GiantBombGameDetail,
    RawgGameDetail,
    has_description,
    has_image_and_name,
)

C = TypeVar("C", bound=CatalogClient[Any])

MESSAGE_INVALID_RESOURCE = "Invalid resource."
MESSAGE_NOT_FOUND = "No results found."
MESSAGE_UPSTREAM_FAILURE = "Error communicating with the game API."
MESSAGE_INTERNAL_ERROR = "Internal server error."


class Resource(str, Enum):
    """Operations selectable through the ``resource`` query parameter."""

    FILTERS = "filters"
    GAME = "game"
    RANDOM_GAME = "random-game"
    GENRES = "genres"
    PLATFORMS = "platforms"


GAME_RESOURCES = frozenset({Resource.GAME, Resource.RANDOM_GAME})


class InvalidResourceError(Exception):
    """Raised when the caller asks for an operation the endpoint does not offer."""

    def __init__(self, resource: str | None) -> None:
        super().__init__(f"Unsupported resource: {resource!r}")
        self.resource = resource


class CatalogEndpoint(ABC, Generic[C]):
    """
    Base class for one serverless endpoint bound to one catalog.

    Subclasses declare the resources and filter dimensions they accept,
    how to build their client, the validity rule for sampled games and
    how to serve their catalog resources.
    """

    source: ClassVar[str]
    resources: ClassVar[frozenset[Resource]]
    filter_dimensions: ClassVar[tuple[str, ...]]

    def __init__(
        self,
        *,
        settings: Settings | None = None,
        client_factory: Callable[[], C] | None = None,
        rng: random.Random | None = None,
    ) -> None:
        """
        Initialize the endpoint.

        Args:
            settings: Application settings (cached settings if None)
            client_factory: Builds the catalog client (default client if None)
            rng: Random source handed to the sampler
        """
        self._settings = settings or get_settings()
        # Configure before binding any logger
        setup_logging()
        self._client_factory = client_factory or self._create_client
        self._rng = rng
        self._logger = get_logger(__name__, component="endpoint", source=self.source)

    @abstractmethod
    def _create_client(self) -> C:
        """
        Build the catalog client.

        Raises:
            ConfigMissingError: If credentials are not configured
        """
        ...

    @abstractmethod
    def is_valid(self, detail: Any) -> bool:
        """Whether a sampled record can be shown to the user."""
        ...

    @abstractmethod
    async def _serve_catalog(self, resource: Resource, client: C) -> ApiResponse:
        """Serve a non-game resource."""
        ...

    def resolve_resource(self, raw: str | None) -> Resource:
        """
        Map the ``resource`` parameter onto a supported Resource.

        Raises:
            InvalidResourceError: If the value is unknown or unsupported here
        """
        try:
            resource = Resource((raw or "").strip().lower())
        except ValueError as e:
            raise InvalidResourceError(raw) from e
        if resource not in self.resources:
            raise InvalidResourceError(raw)
        return resource

    async def handle(self, params: Mapping[str, Any]) -> ApiResponse:
        """
        Handle one inbound request.

        Args:
            params: Query parameters (``resource`` plus filter dimensions)

        Returns:
            ApiResponse: 200 payload, 400 bad resource, 404 no result,
            500 configuration/upstream/unexpected failure
        """
        raw_resource = params.get("resource")
        log = self._logger.bind(resource=raw_resource)

        # Credentials first: nothing reaches the upstream without them
        try:
            client = self._client_factory()
        except ConfigMissingError as e:
            log.error("Critical: missing configuration", variables=list(e.variables))
            return ApiResponse.error(500, str(e))

        try:
            resource = self.resolve_resource(raw_resource)
        except InvalidResourceError:
            log.warning("Invalid resource requested")
            await client.close()
            return ApiResponse.error(400, MESSAGE_INVALID_RESOURCE)

        try:
            async with client:
                if resource in GAME_RESOURCES:
                    return await self._serve_random_game(params, client, log)
                return await self._serve_catalog(resource, client)
        except CatalogClientError as e:
            log.error(
                "Upstream failure",
                error_type=type(e).__name__,
                status_code=e.status_code,
                endpoint=e.endpoint,
                error=str(e),
            )
            return ApiResponse.error(500, MESSAGE_UPSTREAM_FAILURE)
        except Exception:
            log.exception("Unhandled error while serving request")
            return ApiResponse.error(500, MESSAGE_INTERNAL_ERROR)

    async def _serve_random_game(
        self, params: Mapping[str, Any], client: C, log: Any
    ) -> ApiResponse:
        filters = FilterSpec.from_query(params, self.filter_dimensions)
        sampler = create_sampler(
            client,
            self.is_valid,
            retry_budget=self._settings.sampler.retry_budget,
            attempt_timeout=self._settings.sampler.attempt_timeout_seconds,
            rng=self._rng,
        )
        outcome = await sampler.sample(filters)

        if not outcome.is_found or outcome.item is None:
            log.info(
                "No game to return",
                status=outcome.status.value,
                attempts=outcome.attempts,
            )
            return ApiResponse.error(404, MESSAGE_NOT_FOUND)

        return ApiResponse.ok(
            outcome.item.model_dump(mode="json"),
            cache_control=NO_STORE_CACHE_CONTROL,
        )


class RawgEndpoint(CatalogEndpoint[RawgClient]):
    """RAWG endpoint: curated genre filters and random games."""

    source: ClassVar[str] = "rawg"
    resources: ClassVar[frozenset[Resource]] = frozenset(
        {Resource.FILTERS, Resource.GAME, Resource.RANDOM_GAME}
    )
    filter_dimensions: ClassVar[tuple[str, ...]] = RAWG_FILTER_DIMENSIONS

    provider = FilterCatalogProvider(genres=CURATED_RAWG_GENRES)

    def _create_client(self) -> RawgClient:
        return RawgClient(config=self._settings.rawg)

    def is_valid(self, detail: RawgGameDetail) -> bool:
        return has_image_and_name(detail)

    async def _serve_catalog(self, resource: Resource, client: RawgClient) -> ApiResponse:
        catalog = self.provider.build()
        return ApiResponse.ok(
            catalog.model_dump(mode="json", exclude_none=True),
            cache_control=CATALOG_CACHE_CONTROL,
        )


class GiantBombEndpoint(CatalogEndpoint[GiantBombClient]):
    """Giant Bomb endpoint: filters, live genre/platform listings and random games."""

    source: ClassVar[str] = "giantbomb"
    resources: ClassVar[frozenset[Resource]] = frozenset(Resource)
    filter_dimensions: ClassVar[tuple[str, ...]] = GIANTBOMB_FILTER_DIMENSIONS

    provider = FilterCatalogProvider(
        genres=CURATED_GIANTBOMB_GENRES,
        concepts=CURATED_GIANTBOMB_CONCEPTS,
        primary_platform_ids=PRIMARY_GIANTBOMB_PLATFORM_IDS,
    )

    def _create_client(self) -> GiantBombClient:
        return GiantBombClient(config=self._settings.giantbomb)

    def is_valid(self, detail: GiantBombGameDetail) -> bool:
        return has_description(detail)

    async def _serve_catalog(self, resource: Resource, client: GiantBombClient) -> ApiResponse:
        body: Any
        if resource == Resource.GENRES:
            genres = await client.list_genres()
            body = [option.model_dump(mode="json") for option in self.provider.genre_options(genres)]
        elif resource == Resource.PLATFORMS:
            platforms = await client.list_platforms()
            body = self.provider.partition_platforms(platforms).model_dump(mode="json")
        else:
            platforms = await client.list_platforms()
            body = self.provider.build(platforms).model_dump(mode="json", exclude_none=True)

        return ApiResponse.ok(body, cache_control=CATALOG_CACHE_CONTROL)
