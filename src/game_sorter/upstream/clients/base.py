"""
Base catalog client with transport handling and typed errors.

Every upstream game catalog is exposed through the same three calls
(count, fetch_page, fetch_detail). Clients never retry: the retry
policy belongs to the sampler.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any, ClassVar, Generic, TypeVar

import httpx
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from game_sorter.logger import get_logger
from game_sorter.upstream.contracts import FilterSpec, ItemSummary, PageQuery, SamplingMode
from game_sorter.upstream.utils.throttle import RequestThrottle

# Type variable for detail records
D = TypeVar("D", bound=BaseModel)
M = TypeVar("M", bound=BaseModel)

# Raw upstream bodies are logged, truncated to keep log lines bounded
MAX_LOGGED_BODY = 2000


class CatalogClientError(Exception):
    """Base exception for catalog client errors."""

    def __init__(
        self,
        message: str,
        *,
        source: str | None = None,
        endpoint: str | None = None,
        status_code: int | None = None,
        body: str | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.source = source
        self.endpoint = endpoint
        self.status_code = status_code
        self.body = body
        self.original_error = original_error
        self.timestamp = datetime.now(timezone.utc)


class UpstreamError(CatalogClientError):
    """Raised when the upstream answers with a non-success status or is unreachable."""

    pass


class UpstreamMalformedError(CatalogClientError):
    """Raised when an upstream body is not JSON or misses expected fields."""

    pass


class CatalogClient(ABC, Generic[D]):
    """
    Abstract base class for upstream game catalogs.

    Provides common functionality including:
    - HTTP client management (one httpx.AsyncClient per instance)
    - Request spacing through a RequestThrottle
    - Translation of transport failures into UpstreamError
    - Contract validation into UpstreamMalformedError

    Subclasses must implement:
    - source_name: Identifier for the catalog
    - sampling_mode: How listings can be addressed
    - count(), fetch_page(), fetch_detail()
    """

    sampling_mode: ClassVar[SamplingMode]

    def __init__(
        self,
        *,
        base_url: str,
        timeout: float,
        throttle: RequestThrottle | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            base_url: Catalog base URL without trailing slash
            timeout: HTTP request timeout in seconds
            throttle: Request spacing (no spacing if None)
        """
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._throttle = throttle or RequestThrottle()
        self._logger = get_logger(
            self.__class__.__name__,
            component="client",
            source=self.source_name,
        )
        self._client: httpx.AsyncClient | None = None

    @property
    @abstractmethod
    def source_name(self) -> str:
        """Return identifier for this catalog."""
        ...

    def _default_headers(self) -> dict[str, str]:
        """Headers sent with every request."""
        return {
            "User-Agent": "GameSorterApp/1.0",
            "Accept": "application/json",
        }

    @property
    def client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self._timeout),
                follow_redirects=True,
                headers=self._default_headers(),
            )
        return self._client

    async def close(self) -> None:
        """Close HTTP client and release resources."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "CatalogClient[D]":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    def _url(self, path: str) -> str:
        return f"{self._base_url}{path}"

    async def _send(self, path: str, params: Mapping[str, Any] | None = None) -> httpx.Response:
        """
        Issue one GET request, spaced by the throttle.

        Raises:
            UpstreamError: On transport failure (status_code is None)
        """
        url = self._url(path)
        await self._throttle.acquire()
        self._logger.debug("Making request", url=url)
        try:
            return await self.client.get(url, params=dict(params or {}))
        except httpx.HTTPError as e:
            self._logger.error("Transport failure", url=url, error=str(e))
            raise UpstreamError(
                f"Could not reach {self.source_name}",
                source=self.source_name,
                endpoint=url,
                original_error=e,
            ) from e

    def _raise_for_status(self, response: httpx.Response) -> None:
        """
        Raise UpstreamError for non-success statuses, logging the raw body.
        """
        if response.is_success:
            return
        body = response.text
        self._logger.error(
            "Upstream returned an error",
            url=str(response.request.url),
            status_code=response.status_code,
            body=body[:MAX_LOGGED_BODY],
        )
        raise UpstreamError(
            f"Error communicating with the game API (status {response.status_code})",
            source=self.source_name,
            endpoint=str(response.request.url),
            status_code=response.status_code,
            body=body,
        )

    def _decode(self, response: httpx.Response) -> Any:
        """
        Decode a JSON body.

        Raises:
            UpstreamMalformedError: If the body is not JSON
        """
        try:
            return response.json()
        except ValueError as e:
            self._logger.error(
                "Response is not JSON",
                url=str(response.request.url),
                body=response.text[:MAX_LOGGED_BODY],
            )
            raise UpstreamMalformedError(
                "The game API returned an unreadable response",
                source=self.source_name,
                endpoint=str(response.request.url),
                status_code=response.status_code,
                body=response.text,
                original_error=e,
            ) from e

    async def _get_json(self, path: str, params: Mapping[str, Any] | None = None) -> Any:
        """GET a path and return the decoded JSON body."""
        response = await self._send(path, params)
        self._raise_for_status(response)
        return self._decode(response)

    def _parse(self, model: type[M], raw_data: Any, *, endpoint: str | None = None) -> M:
        """
        Validate raw JSON against a contract.

        Raises:
            UpstreamMalformedError: If the data doesn't match the contract
        """
        try:
            return model.model_validate(raw_data)
        except PydanticValidationError as e:
            self._logger.warning(
                "Response validation failed",
                model=model.__name__,
                endpoint=endpoint,
                errors=e.error_count(),
            )
            raise UpstreamMalformedError(
                f"Response validation failed for {model.__name__}",
                source=self.source_name,
                endpoint=endpoint,
                original_error=e,
            ) from e

    @abstractmethod
    async def count(self, filters: FilterSpec) -> int:
        """
        Total number of games matching the filters (size-1 probe).

        Raises:
            UpstreamError: On non-success transport status
            UpstreamMalformedError: If the probe body is unreadable
        """
        ...

    @abstractmethod
    async def fetch_page(self, query: PageQuery) -> list[ItemSummary]:
        """
        Return the summaries of one page/window; may be empty.

        Raises:
            UpstreamError: On non-success transport status
            UpstreamMalformedError: If the page body is unreadable
        """
        ...

    @abstractmethod
    async def fetch_detail(self, item_id: str | int) -> D:
        """
        Return the full record for one game.

        Raises:
            UpstreamError: On non-success transport status
            UpstreamMalformedError: If the record is unreadable
        """
        ...
