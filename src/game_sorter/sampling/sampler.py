"""
Random valid item sampler.

Picks one displayable game out of a large, paginated and partially
invalid upstream listing. Validity is only known after fetching the
full record, so each attempt costs one listing call plus one detail
call, and attempts are bounded by a retry budget:

    external calls per run <= 1 count probe + 2 * retry_budget

Two addressing strategies are available, chosen by the catalog's
SamplingMode:

- PagedSampler: random page in the reachable window, random game on it
- OffsetSampler: random offset over the whole listing, one game window

Randomness is uniform within the reachable window, not over the set of
valid games; the upstreams offer no random-item primitive.
"""

import asyncio
import math
import random
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any, ClassVar, Generic, TypeVar

from pydantic import BaseModel
from tenacity import AsyncRetrying, RetryError, retry_if_exception_type, stop_after_attempt

from game_sorter.config import get_settings
from game_sorter.logger import get_logger
from game_sorter.sampling.outcome import SampleOutcome
from game_sorter.upstream.clients.base import (
    CatalogClient,
    UpstreamError,
    UpstreamMalformedError,
)
from game_sorter.upstream.contracts import FilterSpec, ItemSummary, PageQuery, SamplingMode

D = TypeVar("D", bound=BaseModel)

Validator = Callable[[Any], bool]


class RejectedCandidateError(Exception):
    """An attempt produced no usable game (empty window or invalid record)."""

    def __init__(self, reason: str, *, item_id: str | int | None = None) -> None:
        super().__init__(reason)
        self.reason = reason
        self.item_id = item_id


# Failures that consume one attempt instead of aborting the run
ATTEMPT_FAILURES: tuple[type[BaseException], ...] = (
    RejectedCandidateError,
    UpstreamError,
    UpstreamMalformedError,
    asyncio.TimeoutError,
)


def compute_max_page(total: int, page_size: int, page_cap: int) -> int:
    """
    Highest page number worth drawing from.

    Args:
        total: Result count reported by the probe
        page_size: Results per page
        page_cap: Deepest page the upstream will serve

    Returns:
        int: min(page_cap, ceil(total / page_size)), or 0 for no results
    """
    if total <= 0:
        return 0
    return min(page_cap, math.ceil(total / page_size))


class Sampler(ABC, Generic[D]):
    """
    Base class for retry-bounded random sampling.

    The count probe runs once. Each attempt then draws a candidate
    summary, fetches its detail record and checks it with ``is_valid``.
    Rejected candidates, empty windows, upstream errors and attempt
    timeouts consume one attempt; any other exception aborts the run.
    A failing count probe is not an attempt and propagates.
    """

    mode: ClassVar[SamplingMode]

    def __init__(
        self,
        client: CatalogClient[D],
        is_valid: Validator,
        *,
        retry_budget: int | None = None,
        attempt_timeout: float | None = None,
        rng: random.Random | None = None,
    ) -> None:
        """
        Initialize the sampler.

        Args:
            client: Catalog client to sample from
            is_valid: Predicate deciding whether a detail record is displayable
            retry_budget: Maximum attempts (uses settings if None)
            attempt_timeout: Seconds allowed per attempt (uses settings if None)
            rng: Random source (a fresh random.Random if None)
        """
        if retry_budget is None:
            retry_budget = get_settings().sampler.retry_budget
        if attempt_timeout is None:
            attempt_timeout = get_settings().sampler.attempt_timeout_seconds
        if retry_budget < 1:
            raise ValueError("retry_budget must be >= 1")

        self._client = client
        self._is_valid = is_valid
        self._retry_budget = retry_budget
        self._attempt_timeout = attempt_timeout
        self._rng = rng or random.Random()
        self._logger = get_logger(
            __name__,
            component="sampler",
            source=client.source_name,
            mode=self.mode.value,
        )

    @property
    def retry_budget(self) -> int:
        return self._retry_budget

    async def sample(self, filters: FilterSpec) -> SampleOutcome[D]:
        """
        Pick one valid game matching the filters.

        Args:
            filters: Filter dimensions for the listing

        Returns:
            SampleOutcome: FOUND with the record, NOT_FOUND when nothing
            matches the filters, EXHAUSTED when every attempt was rejected

        Raises:
            UpstreamError: If the count probe fails
            UpstreamMalformedError: If the count probe is unreadable
        """
        total = await self._client.count(filters)
        if total <= 0:
            self._logger.info("No games match filters", filters=filters.dimensions)
            return SampleOutcome.not_found()

        self._logger.info(
            "Sampling started",
            total=total,
            retry_budget=self._retry_budget,
            filters=filters.dimensions,
        )

        retrying = AsyncRetrying(
            stop=stop_after_attempt(self._retry_budget),
            retry=retry_if_exception_type(ATTEMPT_FAILURES),
            after=self._log_rejected_attempt,
        )
        try:
            async for attempt in retrying:
                with attempt:
                    detail = await asyncio.wait_for(
                        self._attempt(filters, total),
                        timeout=self._attempt_timeout,
                    )
        except RetryError:
            self._logger.warning(
                "Retry budget exhausted",
                attempts=self._retry_budget,
                total=total,
            )
            return SampleOutcome.exhausted(attempts=self._retry_budget, total_candidates=total)

        attempts = attempt.retry_state.attempt_number
        self._logger.info("Sampling succeeded", attempts=attempts, total=total)
        return SampleOutcome.found(detail, attempts=attempts, total_candidates=total)

    async def _attempt(self, filters: FilterSpec, total: int) -> D:
        """Run one draw -> detail -> validate cycle."""
        summary = await self._draw_summary(filters, total)
        if summary is None:
            raise RejectedCandidateError("empty window")

        detail = await self._client.fetch_detail(summary.id)
        if not self._is_valid(detail):
            raise RejectedCandidateError("record failed validity check", item_id=summary.id)
        return detail

    def _log_rejected_attempt(self, retry_state: Any) -> None:
        """Log each failed attempt for observability."""
        error = retry_state.outcome.exception() if retry_state.outcome else None
        self._logger.warning(
            "Sampling attempt rejected",
            attempt=retry_state.attempt_number,
            retry_budget=self._retry_budget,
            error_type=type(error).__name__ if error else None,
            error=str(error) if error else None,
            item_id=getattr(error, "item_id", None),
        )

    @abstractmethod
    async def _draw_summary(self, filters: FilterSpec, total: int) -> ItemSummary | None:
        """Draw one candidate summary, or None if the drawn window is empty."""
        ...


class PagedSampler(Sampler[D]):
    """
    Random page inside the reachable window, then a random game on it.

    For catalogs that only paginate by page number and cap how deep
    pagination may go (RAWG: 250 pages of 40).
    """

    mode: ClassVar[SamplingMode] = SamplingMode.PAGED

    def __init__(
        self,
        client: CatalogClient[D],
        is_valid: Validator,
        *,
        page_size: int = 40,
        page_cap: int = 250,
        **kwargs: Any,
    ) -> None:
        super().__init__(client, is_valid, **kwargs)
        if page_size < 1 or page_cap < 1:
            raise ValueError("page_size and page_cap must be >= 1")
        self._page_size = page_size
        self._page_cap = page_cap

    async def _draw_summary(self, filters: FilterSpec, total: int) -> ItemSummary | None:
        max_page = compute_max_page(total, self._page_size, self._page_cap)
        page = self._rng.randint(1, max_page)
        self._logger.debug("Drawing page", page=page, max_page=max_page)

        summaries = await self._client.fetch_page(
            PageQuery(filters=filters, page_size=self._page_size, page=page)
        )
        if not summaries:
            return None
        return self._rng.choice(summaries)


class OffsetSampler(Sampler[D]):
    """
    Random offset over the whole listing, fetched as a one-game window.

    For catalogs that support direct offset addressing (Giant Bomb).
    """

    mode: ClassVar[SamplingMode] = SamplingMode.OFFSET

    async def _draw_summary(self, filters: FilterSpec, total: int) -> ItemSummary | None:
        offset = self._rng.randrange(total)
        self._logger.debug("Drawing offset", offset=offset, total=total)

        summaries = await self._client.fetch_page(
            PageQuery(filters=filters, page_size=1, offset=offset)
        )
        if not summaries:
            return None
        return summaries[0]


def create_sampler(
    client: CatalogClient[D],
    is_valid: Validator,
    **kwargs: Any,
) -> Sampler[D]:
    """
    Build the sampler matching the client's addressing mode.

    Paged catalogs get their page size and depth cap from the client
    class (PAGE_SIZE / PAGE_CAP) when it declares them.
    """
    if client.sampling_mode == SamplingMode.PAGED:
        for option, attribute in (("page_size", "PAGE_SIZE"), ("page_cap", "PAGE_CAP")):
            if option not in kwargs and hasattr(client, attribute):
                kwargs[option] = getattr(client, attribute)
        return PagedSampler(client, is_valid, **kwargs)
    return OffsetSampler(client, is_valid, **kwargs)
