"""
Serverless request façade.
"""

from game_sorter.api.endpoints import (
    CatalogEndpoint,
    GiantBombEndpoint,
    InvalidResourceError,
    RawgEndpoint,
    Resource,
)
from game_sorter.api.handlers import giantbomb_handler, rawg_handler
from game_sorter.api.responses import (
    CATALOG_CACHE_CONTROL,
    NO_STORE_CACHE_CONTROL,
    ApiResponse,
)

__all__ = [
    "ApiResponse",
    "CATALOG_CACHE_CONTROL",
    "CatalogEndpoint",
    "GiantBombEndpoint",
    "InvalidResourceError",
    "NO_STORE_CACHE_CONTROL",
    "RawgEndpoint",
    "Resource",
    "giantbomb_handler",
    "rawg_handler",
]
