"""
Clients for the upstream game catalogs.

All clients share one base with transport handling, request spacing
and typed errors.
"""

from game_sorter.upstream.clients.base import (
    CatalogClient,
    CatalogClientError,
    UpstreamError,
    UpstreamMalformedError,
)
from game_sorter.upstream.clients.giantbomb import GIANTBOMB_FILTER_DIMENSIONS, GiantBombClient
from game_sorter.upstream.clients.rawg import RAWG_FILTER_DIMENSIONS, RawgClient

__all__ = [
    # Base classes and errors
    "CatalogClient",
    "CatalogClientError",
    "UpstreamError",
    "UpstreamMalformedError",
    # Clients
    "GIANTBOMB_FILTER_DIMENSIONS",
    "GiantBombClient",
    "RAWG_FILTER_DIMENSIONS",
    "RawgClient",
]
