"""Integration tests for catalog clients with mocked HTTP responses."""

from typing import Any

import httpx
import pytest
import respx
from game_sorter.config import ConfigMissingError, GiantBombAPIConfig, RawgAPIConfig, Settings
from game_sorter.upstream.clients import (
    GiantBombClient,
    RawgClient,
    UpstreamError,
    UpstreamMalformedError,
)
from game_sorter.upstream.contracts import FilterSpec, PageQuery

RAWG_GAMES = "https://rawg-video-games-database.p.rapidapi.com/games"
GIANTBOMB = "https://www.giantbomb.com/api"


def rawg_client(settings: Settings) -> RawgClient:
    return RawgClient(config=settings.rawg)


def giantbomb_client(settings: Settings) -> GiantBombClient:
    return GiantBombClient(config=settings.giantbomb)


class TestRawgClient:
    """Integration tests for the RAWG client."""

    def test_missing_credentials(self) -> None:
        """Test the client refuses to start without key and host."""
        with pytest.raises(ConfigMissingError):
            RawgClient(config=RawgAPIConfig(key=None, host=None))

    @respx.mock
    @pytest.mark.asyncio
    async def test_count_sends_gateway_headers(
        self,
        settings: Settings,
        rawg_count_response: dict[str, Any],
    ) -> None:
        """Test the size-1 probe and RapidAPI headers."""
        route = respx.get(RAWG_GAMES).mock(
            return_value=httpx.Response(200, json=rawg_count_response)
        )

        async with rawg_client(settings) as client:
            total = await client.count(FilterSpec(dimensions={"genres": ("4", "5")}))

        assert total == 9001
        request = route.calls.last.request
        assert request.headers["x-rapidapi-key"] == "test_rapidapi_key"
        assert request.headers["x-rapidapi-host"] == "rawg-video-games-database.p.rapidapi.com"
        assert request.headers["User-Agent"] == "GameSorterApp/1.0"
        assert request.url.params["page_size"] == "1"
        assert request.url.params["genres"] == "4,5"
        assert "platforms" not in request.url.params

    @respx.mock
    @pytest.mark.asyncio
    async def test_fetch_page(
        self,
        settings: Settings,
        rawg_games_page: dict[str, Any],
    ) -> None:
        """Test a listing page maps to summaries."""
        route = respx.get(RAWG_GAMES).mock(return_value=httpx.Response(200, json=rawg_games_page))

        async with rawg_client(settings) as client:
            summaries = await client.fetch_page(
                PageQuery(
                    filters=FilterSpec(dimensions={"platforms": ("4",)}),
                    page_size=40,
                    page=2,
                )
            )

        assert [summary.id for summary in summaries] == [4200, 3328]
        params = route.calls.last.request.url.params
        assert params["page"] == "2"
        assert params["page_size"] == "40"
        assert params["platforms"] == "4"

    @respx.mock
    @pytest.mark.asyncio
    async def test_page_out_of_range_is_empty(self, settings: Settings) -> None:
        """Test a 404 past the end of the listing reads as an empty page."""
        respx.get(RAWG_GAMES).mock(
            return_value=httpx.Response(404, json={"detail": "Invalid page."})
        )

        async with rawg_client(settings) as client:
            summaries = await client.fetch_page(PageQuery(page_size=40, page=250))

        assert summaries == []

    @pytest.mark.asyncio
    async def test_fetch_page_requires_page_number(self, settings: Settings) -> None:
        """Test offset windows are refused by the paged catalog."""
        async with rawg_client(settings) as client:
            with pytest.raises(ValueError):
                await client.fetch_page(PageQuery(page_size=1, offset=10))

    @respx.mock
    @pytest.mark.asyncio
    async def test_fetch_detail(
        self,
        settings: Settings,
        rawg_game_detail: dict[str, Any],
    ) -> None:
        """Test the full record keeps every upstream field."""
        respx.get(f"{RAWG_GAMES}/4200").mock(
            return_value=httpx.Response(200, json=rawg_game_detail)
        )

        async with rawg_client(settings) as client:
            detail = await client.fetch_detail(4200)

        assert detail.name == "Portal 2"
        assert detail.background_image
        assert "developers" in detail.model_dump()

    @respx.mock
    @pytest.mark.asyncio
    async def test_server_error(self, settings: Settings) -> None:
        """Test non-success statuses carry status and body."""
        respx.get(RAWG_GAMES).mock(return_value=httpx.Response(503, text="gateway down"))

        async with rawg_client(settings) as client:
            with pytest.raises(UpstreamError) as exc_info:
                await client.count(FilterSpec())

        assert exc_info.value.status_code == 503
        assert exc_info.value.body == "gateway down"
        assert exc_info.value.source == "rawg"

    @respx.mock
    @pytest.mark.asyncio
    async def test_not_json(self, settings: Settings) -> None:
        """Test an unreadable body raises UpstreamMalformedError."""
        respx.get(RAWG_GAMES).mock(return_value=httpx.Response(200, text="<html>oops</html>"))

        async with rawg_client(settings) as client:
            with pytest.raises(UpstreamMalformedError):
                await client.count(FilterSpec())

    @respx.mock
    @pytest.mark.asyncio
    async def test_contract_mismatch(self, settings: Settings) -> None:
        """Test a body without the expected fields raises UpstreamMalformedError."""
        respx.get(RAWG_GAMES).mock(return_value=httpx.Response(200, json={"results": []}))

        async with rawg_client(settings) as client:
            with pytest.raises(UpstreamMalformedError):
                await client.count(FilterSpec())

    @respx.mock
    @pytest.mark.asyncio
    async def test_transport_failure(self, settings: Settings) -> None:
        """Test connection errors become UpstreamError without status."""
        respx.get(RAWG_GAMES).mock(side_effect=httpx.ConnectError("refused"))

        async with rawg_client(settings) as client:
            with pytest.raises(UpstreamError) as exc_info:
                await client.count(FilterSpec())

        assert exc_info.value.status_code is None
        assert isinstance(exc_info.value.original_error, httpx.ConnectError)


class TestGiantBombClient:
    """Integration tests for the Giant Bomb client."""

    def test_missing_credentials(self) -> None:
        """Test the client refuses to start without an API key."""
        with pytest.raises(ConfigMissingError):
            GiantBombClient(config=GiantBombAPIConfig(api_key=None))

    @respx.mock
    @pytest.mark.asyncio
    async def test_count_with_filter_expression(
        self,
        settings: Settings,
        giantbomb_count_response: dict[str, Any],
    ) -> None:
        """Test the filter expression and authentication parameters."""
        route = respx.get(f"{GIANTBOMB}/games").mock(
            return_value=httpx.Response(200, json=giantbomb_count_response)
        )
        filters = FilterSpec(
            dimensions={"genres": ("1", "4"), "platforms": ("94",)},
        )

        async with giantbomb_client(settings) as client:
            total = await client.count(filters)

        assert total == 2750
        request = route.calls.last.request
        assert request.url.params["filter"] == "genres:1|4,platforms:94"
        assert request.url.params["api_key"] == "test_giantbomb_key"
        assert request.url.params["format"] == "json"
        assert request.url.params["limit"] == "1"
        assert request.headers["User-Agent"] == "GameSorterApp/1.0"

    @respx.mock
    @pytest.mark.asyncio
    async def test_no_filters_omits_expression(
        self,
        settings: Settings,
        giantbomb_count_response: dict[str, Any],
    ) -> None:
        """Test an unfiltered listing sends no filter parameter."""
        route = respx.get(f"{GIANTBOMB}/games").mock(
            return_value=httpx.Response(200, json=giantbomb_count_response)
        )

        async with giantbomb_client(settings) as client:
            await client.count(FilterSpec())

        assert "filter" not in route.calls.last.request.url.params

    @respx.mock
    @pytest.mark.asyncio
    async def test_fetch_offset_window(
        self,
        settings: Settings,
        giantbomb_games_window: dict[str, Any],
    ) -> None:
        """Test offset addressing and the summary projection."""
        route = respx.get(f"{GIANTBOMB}/games").mock(
            return_value=httpx.Response(200, json=giantbomb_games_window)
        )

        async with giantbomb_client(settings) as client:
            summaries = await client.fetch_page(PageQuery(page_size=1, offset=1234))

        assert [summary.id for summary in summaries] == ["3030-20654"]
        params = route.calls.last.request.url.params
        assert params["offset"] == "1234"
        assert params["limit"] == "1"
        assert params["field_list"] == "guid,name"

    @respx.mock
    @pytest.mark.asyncio
    async def test_page_translated_to_offset(
        self,
        settings: Settings,
        giantbomb_games_window: dict[str, Any],
    ) -> None:
        """Test page numbers are accepted as offsets."""
        route = respx.get(f"{GIANTBOMB}/games").mock(
            return_value=httpx.Response(200, json=giantbomb_games_window)
        )

        async with giantbomb_client(settings) as client:
            await client.fetch_page(PageQuery(page_size=10, page=3))

        assert route.calls.last.request.url.params["offset"] == "20"

    @respx.mock
    @pytest.mark.asyncio
    async def test_fetch_detail(
        self,
        settings: Settings,
        giantbomb_game_detail: dict[str, Any],
    ) -> None:
        """Test the full record is unwrapped from the envelope."""
        respx.get(f"{GIANTBOMB}/game/3030-20654/").mock(
            return_value=httpx.Response(200, json=giantbomb_game_detail)
        )

        async with giantbomb_client(settings) as client:
            detail = await client.fetch_detail("3030-20654")

        assert detail.name == "Dark Souls"
        assert detail.deck
        assert detail.image is not None

    @respx.mock
    @pytest.mark.asyncio
    async def test_envelope_error(self, settings: Settings) -> None:
        """Test a non-OK envelope status raises UpstreamError."""
        respx.get(f"{GIANTBOMB}/games").mock(
            return_value=httpx.Response(
                200,
                json={"error": "Invalid API Key", "status_code": 100, "results": []},
            )
        )

        async with giantbomb_client(settings) as client:
            with pytest.raises(UpstreamError) as exc_info:
                await client.count(FilterSpec())

        assert exc_info.value.status_code == 100
        assert exc_info.value.body == "Invalid API Key"

    @respx.mock
    @pytest.mark.asyncio
    async def test_http_error_status(self, settings: Settings) -> None:
        """Test HTTP-level failures raise UpstreamError with the body."""
        respx.get(f"{GIANTBOMB}/games").mock(
            return_value=httpx.Response(420, text="Slow down")
        )

        async with giantbomb_client(settings) as client:
            with pytest.raises(UpstreamError) as exc_info:
                await client.count(FilterSpec())

        assert exc_info.value.status_code == 420
        assert exc_info.value.body == "Slow down"

    @respx.mock
    @pytest.mark.asyncio
    async def test_list_platforms(
        self,
        settings: Settings,
        giantbomb_platforms: dict[str, Any],
    ) -> None:
        """Test the platform listing with release dates."""
        route = respx.get(f"{GIANTBOMB}/platforms").mock(
            return_value=httpx.Response(200, json=giantbomb_platforms)
        )

        async with giantbomb_client(settings) as client:
            platforms = await client.list_platforms()

        assert len(platforms) == 6
        assert platforms[0].release_date == "2006-11-17 00:00:00"
        assert "release_date" in route.calls.last.request.url.params["field_list"]

    @respx.mock
    @pytest.mark.asyncio
    async def test_list_genres(
        self,
        settings: Settings,
        giantbomb_genres: dict[str, Any],
    ) -> None:
        """Test the genre listing."""
        respx.get(f"{GIANTBOMB}/genres").mock(
            return_value=httpx.Response(200, json=giantbomb_genres)
        )

        async with giantbomb_client(settings) as client:
            genres = await client.list_genres()

        assert [genre.id for genre in genres] == [5, 1, 4]
