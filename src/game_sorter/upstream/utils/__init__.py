"""
Utility modules for upstream access.
"""

from game_sorter.upstream.utils.throttle import RequestThrottle

__all__ = [
    "RequestThrottle",
]
