"""Shared fixtures: JSON payloads, environment and settings."""

import io
import json
import os
from collections.abc import Iterator
from pathlib import Path
from typing import Any, cast
from unittest.mock import patch

import pytest
import structlog
from game_sorter import logger as logger_module
from game_sorter.config import (
    GiantBombAPIConfig,
    RawgAPIConfig,
    SamplerConfig,
    Settings,
    get_settings,
)

FIXTURES_DIR = Path(__file__).parent / "fixtures"

RAWG_BASE_URL = "https://rawg-video-games-database.p.rapidapi.com"
GIANTBOMB_BASE_URL = "https://www.giantbomb.com/api"


def load_fixture(name: str) -> dict[str, Any]:
    """Load a JSON fixture file."""
    with (FIXTURES_DIR / name).open(encoding="utf-8") as f:
        return cast(dict[str, Any], json.load(f))


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Iterator[None]:
    """Settings are cached per process; every test starts from a fresh load."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def mock_env() -> Iterator[None]:
    """Credentials for both catalogs, no request spacing."""
    with patch.dict(
        os.environ,
        {
            "RAPIDAPI_KEY": "test_rapidapi_key",
            "RAPIDAPI_HOST": "rawg-video-games-database.p.rapidapi.com",
            "GIANTBOMB_API_KEY": "test_giantbomb_key",
            "GIANTBOMB_MIN_REQUEST_INTERVAL_SECONDS": "0",
            "SAMPLER_RETRY_BUDGET": "3",
        },
    ):
        yield


@pytest.fixture
def settings() -> Settings:
    """Explicit settings independent of the process environment."""
    return Settings(
        rawg=RawgAPIConfig(key="test_rapidapi_key", host="rawg-video-games-database.p.rapidapi.com"),
        giantbomb=GiantBombAPIConfig(api_key="test_giantbomb_key", min_request_interval_seconds=0),
        sampler=SamplerConfig(retry_budget=3, attempt_timeout_seconds=5),
    )


@pytest.fixture
def rawg_count_response() -> dict[str, Any]:
    return load_fixture("rawg_count_response.json")


@pytest.fixture
def rawg_games_page() -> dict[str, Any]:
    return load_fixture("rawg_games_page.json")


@pytest.fixture
def rawg_game_detail() -> dict[str, Any]:
    return load_fixture("rawg_game_detail.json")


@pytest.fixture
def giantbomb_count_response() -> dict[str, Any]:
    return load_fixture("giantbomb_count_response.json")


@pytest.fixture
def giantbomb_games_window() -> dict[str, Any]:
    return load_fixture("giantbomb_games_window.json")


@pytest.fixture
def giantbomb_game_detail() -> dict[str, Any]:
    return load_fixture("giantbomb_game_detail.json")


@pytest.fixture
def giantbomb_platforms() -> dict[str, Any]:
    return load_fixture("giantbomb_platforms.json")


@pytest.fixture
def giantbomb_genres() -> dict[str, Any]:
    return load_fixture("giantbomb_genres.json")


class _CapturedStderr(io.StringIO):
    """StringIO view over pytest's stderr capture, accumulated across reads."""

    def __init__(self, capsys: pytest.CaptureFixture[str]) -> None:
        super().__init__()
        self._capsys = capsys

    def getvalue(self) -> str:
        self.write(self._capsys.readouterr().err)
        return super().getvalue()


@pytest.fixture
def fresh_logging(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> Iterator[io.StringIO]:
    """
    Start from an unconfigured process, as on a cold start, with JSON logs.

    Yields a buffer over the captured stderr. pytest re-installs its own
    sys.stderr for the test call, so setup_logging() picks up capsys'
    stream; patching sys.stderr here would be overridden. structlog is
    reset on teardown so later tests configure against their own streams.
    """
    monkeypatch.setenv("LOG_FORMAT", "json")
    logger_module._configured = False
    structlog.reset_defaults()
    yield _CapturedStderr(capsys)
    structlog.reset_defaults()
    logger_module._configured = False
