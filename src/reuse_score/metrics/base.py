"""Shared pieces of the metric fetchers."""

from __future__ import annotations

import time
from typing import Protocol

from reuse_score.models import MetricResult, RepositoryIdentity


class MetricFetcher(Protocol):
    """One metric: fetch its data for a repository and score it.

    Implementations never raise for data or network problems; they return
    their fail-closed MetricResult instead.
    """

    async def __call__(self, identity: RepositoryIdentity) -> MetricResult: ...


def start_clock() -> float:
    return time.perf_counter()


def elapsed_since(start: float) -> float:
    """Seconds since ``start``, rounded to milliseconds."""
    return round(max(0.0, time.perf_counter() - start), 3)


def clamp_unit(value: float) -> float:
    return max(0.0, min(1.0, value))
