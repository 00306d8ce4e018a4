"""Correctness metric: issue closure, release cadence and recent activity."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from reuse_score.errors import GitHubQueryError, SchemaError
from reuse_score.github.base import GraphQLPort
from reuse_score.github.schemas import (
    CORRECTNESS_QUERY,
    CorrectnessResponse,
    parse_correctness_response,
)
from reuse_score.metrics.base import clamp_unit, elapsed_since, start_clock
from reuse_score.models import MetricResult, RepositoryIdentity

logger = logging.getLogger(__name__)

_RECENT_WINDOW_DAYS = 30


def _ratio(numerator: int, denominator: int) -> float:
    if denominator == 0:
        return 0.0
    return numerator / denominator


def score_correctness(counts: CorrectnessResponse) -> float:
    """Average of three ratios, each 0 when its denominator is 0.

    - closed issues / all issues
    - releases / (open pull requests + releases)
    - commits in the last 30 days / 30, capped at 1
    """
    issue_ratio = _ratio(counts.closed_issues, counts.open_issues + counts.closed_issues)
    release_ratio = _ratio(counts.releases, counts.open_pull_requests + counts.releases)
    recent_commit_ratio = min(counts.recent_commits / _RECENT_WINDOW_DAYS, 1.0)
    mean = (issue_ratio + release_ratio + recent_commit_ratio) / 3
    return round(clamp_unit(mean), 3)


@dataclass(frozen=True, slots=True)
class CorrectnessMetric:
    """Fetcher for the Correctness metric."""

    github: GraphQLPort

    async def __call__(self, identity: RepositoryIdentity) -> MetricResult:
        if not identity.is_resolved:
            return MetricResult.failed()

        start = start_clock()
        since = datetime.now(tz=UTC) - timedelta(days=_RECENT_WINDOW_DAYS)
        try:
            data = await self.github.execute(
                CORRECTNESS_QUERY,
                {
                    "owner": identity.owner,
                    "name": identity.name,
                    "since": since.strftime("%Y-%m-%dT%H:%M:%SZ"),
                },
            )
            counts = parse_correctness_response(data)
        except (GitHubQueryError, SchemaError) as exc:
            logger.warning(
                "Correctness query for %s/%s failed: %s", identity.owner, identity.name, exc
            )
            return MetricResult.of(0.0, elapsed_since(start))

        return MetricResult.of(score_correctness(counts), elapsed_since(start))
