"""Responsiveness metric: how fast maintainers close pull requests and issues."""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import timedelta

from reuse_score.errors import GitHubQueryError, SchemaError
from reuse_score.github.base import GraphQLPort
from reuse_score.github.schemas import (
    RESPONSIVENESS_QUERY,
    ResolvableItem,
    ResponsivenessResponse,
    parse_responsiveness_response,
)
from reuse_score.metrics.base import elapsed_since, start_clock
from reuse_score.models import MetricResult, RepositoryIdentity

logger = logging.getLogger(__name__)

RESPONSIVE_THRESHOLD = timedelta(days=7).total_seconds()

_BOTH_FAST = 1.0
_ONE_FAST = 0.7
_NEITHER_FAST = 0.3


def average_resolution_seconds(items: Iterable[ResolvableItem]) -> float:
    """Mean (resolved - created) over resolved items; ``inf`` when none are resolved."""
    durations = [
        (item.resolved_at - item.created_at).total_seconds()
        for item in items
        if item.resolved_at is not None
    ]
    if not durations:
        return math.inf
    return sum(durations) / len(durations)


def score_responsiveness(response: ResponsivenessResponse) -> float:
    """1.0 when both averages beat a week, 0.7 when one does, else 0.3."""
    averages = (
        average_resolution_seconds(response.pull_requests),
        average_resolution_seconds(response.issues),
    )
    fast = sum(1 for avg in averages if avg < RESPONSIVE_THRESHOLD)
    if fast == 2:
        return _BOTH_FAST
    if fast == 1:
        return _ONE_FAST
    return _NEITHER_FAST


@dataclass(frozen=True, slots=True)
class ResponsivenessMetric:
    """Fetcher for the ResponsiveMaintainer metric."""

    github: GraphQLPort

    async def __call__(self, identity: RepositoryIdentity) -> MetricResult:
        if not identity.is_resolved:
            return MetricResult.failed()

        start = start_clock()
        try:
            data = await self.github.execute(
                RESPONSIVENESS_QUERY,
                {"owner": identity.owner, "name": identity.name},
            )
            response = parse_responsiveness_response(data)
        except (GitHubQueryError, SchemaError) as exc:
            logger.warning(
                "Responsiveness query for %s/%s failed: %s", identity.owner, identity.name, exc
            )
            return MetricResult.of(0.0, elapsed_since(start))

        return MetricResult.of(score_responsiveness(response), elapsed_since(start))
