"""
Serverless entry points.

Each handler accepts an API Gateway proxy event, runs the matching
endpoint and returns a proxy integration response.
"""

import asyncio
from typing import Any

from game_sorter.api.endpoints import CatalogEndpoint, GiantBombEndpoint, RawgEndpoint


def query_parameters(event: dict[str, Any] | None) -> dict[str, str]:
    """Extract single-value query parameters from a proxy event."""
    params = (event or {}).get("queryStringParameters") or {}
    return {str(key): str(value) for key, value in params.items() if value is not None}


def _run(endpoint: CatalogEndpoint[Any], event: dict[str, Any] | None) -> dict[str, Any]:
    response = asyncio.run(endpoint.handle(query_parameters(event)))
    return response.to_lambda()


def rawg_handler(event: dict[str, Any], context: Any = None) -> dict[str, Any]:
    """Entry point for the RAWG endpoint."""
    return _run(RawgEndpoint(), event)


def giantbomb_handler(event: dict[str, Any], context: Any = None) -> dict[str, Any]:
    """Entry point for the Giant Bomb endpoint."""
    return _run(GiantBombEndpoint(), event)
