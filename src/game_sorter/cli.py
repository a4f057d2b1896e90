"""
Command-line interface for the Game Sorter API.

Runs the same endpoint code as the serverless handlers so the
catalogs can be exercised from a terminal.
"""

import asyncio
import json
import sys
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field

from game_sorter.config import get_settings
from game_sorter.logger import get_logger, setup_logging

SOURCES = ("rawg", "giantbomb")
FILTER_OPTIONS = ("--genres", "--platforms", "--concepts")


class CLIOutput(BaseModel):
    """Structured output for CLI commands."""

    success: bool
    command: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    status_code: int | None = None
    data: dict[str, Any] | list[Any] | None = None
    error: str | None = None


def print_json(output: CLIOutput) -> None:
    """Print output as formatted JSON."""
    print(json.dumps(output.model_dump(), indent=2, default=str, ensure_ascii=False))


def _endpoint(source: str) -> Any:
    from game_sorter.api import GiantBombEndpoint, RawgEndpoint

    if source == "rawg":
        return RawgEndpoint()
    return GiantBombEndpoint()


async def cmd_resource(command: str, source: str, params: dict[str, str]) -> int:
    """Run one endpoint resource and print the response."""
    logger = get_logger(__name__, component="cli")
    logger.info("Running endpoint", source=source, params=params)

    response = await _endpoint(source).handle(params)
    success = response.status_code == 200
    output = CLIOutput(
        success=success,
        command=command,
        status_code=response.status_code,
        data=response.body if success else None,
        error=response.message,
    )
    print_json(output)
    return 0 if success else 1


async def cmd_test_config() -> int:
    """Test configuration loading."""
    settings = get_settings()

    output = CLIOutput(
        success=True,
        command="test-config",
        data={
            "environment": settings.environment,
            "rawg_base_url": settings.rawg.base_url,
            "rawg_host": settings.rawg.host,
            "rawg_key_configured": bool(settings.rawg.key and settings.rawg.key.get_secret_value()),
            "giantbomb_base_url": settings.giantbomb.base_url,
            "giantbomb_key_configured": bool(
                settings.giantbomb.api_key and settings.giantbomb.api_key.get_secret_value()
            ),
            "sampler_retry_budget": settings.sampler.retry_budget,
            "sampler_attempt_timeout_seconds": settings.sampler.attempt_timeout_seconds,
        },
    )
    print_json(output)
    return 0


def parse_filter_options(args: list[str]) -> dict[str, str]:
    """
    Parse ``--genres 4,5 --platforms 94`` style options.

    Raises:
        ValueError: On unknown options or a missing value
    """
    params: dict[str, str] = {}
    i = 0
    while i < len(args):
        option = args[i]
        if option not in FILTER_OPTIONS:
            raise ValueError(f"Unknown option: {option}")
        if i + 1 >= len(args):
            raise ValueError(f"Missing value for {option}")
        params[option.removeprefix("--")] = args[i + 1]
        i += 2
    return params


def print_usage() -> None:
    """Print CLI usage information."""
    usage = """
Game Sorter CLI
===============

Usage: game-sorter <command> [arguments]

Commands:
  test-config                       Test configuration loading
  filters <rawg|giantbomb>          Show the filter catalog
  genres                            List Giant Bomb genres
  platforms                         List Giant Bomb platforms grouped by year
  random-game <rawg|giantbomb>      Pick a random game

Options (random-game):
  --genres <ids>                    Comma-separated genre ids
  --platforms <ids>                 Comma-separated platform ids
  --concepts <ids>                  Comma-separated concept ids (Giant Bomb)

Examples:
  game-sorter random-game rawg --genres 4,5
  game-sorter filters giantbomb
"""
    print(usage)


def _require_source(args: list[str]) -> str:
    if not args or args[0] not in SOURCES:
        print(f"Error: source required ({' or '.join(SOURCES)})")
        sys.exit(1)
    return args[0]


def main() -> None:
    """Main CLI entry point."""
    if len(sys.argv) < 2:
        print_usage()
        sys.exit(1)

    setup_logging()
    command = sys.argv[1]
    args = sys.argv[2:]

    try:
        if command == "test-config":
            exit_code = asyncio.run(cmd_test_config())

        elif command == "filters":
            source = _require_source(args)
            exit_code = asyncio.run(cmd_resource(command, source, {"resource": "filters"}))

        elif command in ("genres", "platforms"):
            exit_code = asyncio.run(cmd_resource(command, "giantbomb", {"resource": command}))

        elif command == "random-game":
            source = _require_source(args)
            params = parse_filter_options(args[1:])
            params["resource"] = "game"
            exit_code = asyncio.run(cmd_resource(command, source, params))

        elif command in ("help", "--help", "-h"):
            print_usage()
            exit_code = 0

        else:
            print(f"Unknown command: {command}")
            print_usage()
            exit_code = 1

    except KeyboardInterrupt:
        print("\nInterrupted by user")
        sys.exit(130)
    except Exception as e:
        get_logger(__name__, component="cli").exception("CLI error", error=str(e))
        output = CLIOutput(
            success=False,
            command=command,
            error=str(e),
        )
        print_json(output)
        sys.exit(1)

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
