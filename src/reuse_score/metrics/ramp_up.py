"""Ramp-up metric: shorter recent history reads as easier to get into."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from reuse_score.errors import CloneError
from reuse_score.git.base import CommitHistoryPort
from reuse_score.metrics.base import elapsed_since, start_clock
from reuse_score.models import MetricResult, RepositoryIdentity

logger = logging.getLogger(__name__)

_SECONDS_PER_DAY = 86_400
_EASY_SPAN_DAYS = 30


def score_ramp_up(timestamps: list[int]) -> float:
    """Score the span between the earliest and latest commit.

    Under 30 days scores 1; longer spans decay as ``1 - log10(days / 30)``,
    floored at 0. An empty history scores 0.
    """
    if not timestamps:
        return 0.0
    span_days = (max(timestamps) - min(timestamps)) / _SECONDS_PER_DAY
    if span_days < _EASY_SPAN_DAYS:
        return 1.0
    return round(max(0.0, 1.0 - math.log10(span_days / _EASY_SPAN_DAYS)), 3)


@dataclass(frozen=True, slots=True)
class RampUpMetric:
    """Fetcher for the RampUp metric."""

    history: CommitHistoryPort

    async def __call__(self, identity: RepositoryIdentity) -> MetricResult:
        if not identity.is_resolved:
            return MetricResult.failed()

        start = start_clock()
        try:
            timestamps = await self.history.commit_timestamps(identity.owner, identity.name)
        except (CloneError, OSError) as exc:
            # OSError: git itself could not be started.
            logger.warning("Ramp-up clone of %s/%s failed: %s", identity.owner, identity.name, exc)
            return MetricResult.of(0.0, elapsed_since(start))

        if not timestamps:
            logger.info("No commits found for %s/%s", identity.owner, identity.name)
        return MetricResult.of(score_ramp_up(timestamps), elapsed_since(start))
