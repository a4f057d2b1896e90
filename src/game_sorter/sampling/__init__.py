"""
Retry-bounded random sampling of valid games.
"""

from game_sorter.sampling.outcome import SampleOutcome, SampleStatus
from game_sorter.sampling.sampler import (
    OffsetSampler,
    PagedSampler,
    RejectedCandidateError,
    Sampler,
    compute_max_page,
    create_sampler,
)

__all__ = [
    "OffsetSampler",
    "PagedSampler",
    "RejectedCandidateError",
    "SampleOutcome",
    "SampleStatus",
    "Sampler",
    "compute_max_page",
    "create_sampler",
]
