"""
Game Sorter API.

Serverless proxy in front of third-party video-game catalogs:
curated filter listings and one random, displayable game per request.
"""

from game_sorter.config import ConfigMissingError, Settings, get_settings
from game_sorter.logger import get_logger, setup_logging

__version__ = "0.1.0"

__all__ = [
    "ConfigMissingError",
    "Settings",
    "get_settings",
    "get_logger",
    "setup_logging",
    "__version__",
]
