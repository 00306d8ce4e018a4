"""Score a batch of URLs: resolve, fan out the four metrics, aggregate, emit."""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import AsyncIterator, Iterable, Sequence
from pathlib import Path

from reuse_score.context import ScoringContext
from reuse_score.locator import resolve_identity
from reuse_score.metrics.base import elapsed_since, start_clock
from reuse_score.metrics.net_score import calculate_net_score
from reuse_score.models import Metric, MetricResult, RepositoryIdentity, ScoredRecord

logger = logging.getLogger(__name__)


def load_urls(path: str | Path) -> list[str]:
    """Read one URL per line, skipping blank lines.

    Raises OSError if the file cannot be read.
    """
    text = Path(path).read_text(encoding="utf-8")
    return [line.strip() for line in text.splitlines() if line.strip()]


def _settle(metric: Metric, url: str, outcome: MetricResult | BaseException) -> MetricResult:
    """Map a fetcher's outcome to a MetricResult without disturbing its siblings."""
    if isinstance(outcome, MetricResult):
        return outcome
    if not isinstance(outcome, Exception):
        raise outcome
    logger.warning("%s failed for %s: %r", metric, url, outcome)
    return MetricResult.failed()


async def run_metrics(
    identity: RepositoryIdentity,
    ctx: ScoringContext,
    url: str = "",
) -> dict[Metric, MetricResult]:
    """Run the four metric fetchers concurrently and wait for all of them."""
    fetchers = {
        Metric.LICENSE: ctx.license,
        Metric.RAMP_UP: ctx.ramp_up,
        Metric.CORRECTNESS: ctx.correctness,
        Metric.RESPONSIVE_MAINTAINER: ctx.responsiveness,
    }
    outcomes = await asyncio.gather(
        *(fetcher(identity) for fetcher in fetchers.values()),
        return_exceptions=True,
    )
    return {
        metric: _settle(metric, url, outcome)
        for metric, outcome in zip(fetchers, outcomes, strict=True)
    }


async def score_url(url: str, ctx: ScoringContext) -> ScoredRecord:
    """Produce the scored record for a single URL."""
    start = start_clock()
    identity = await resolve_identity(url, ctx.registry)
    results = await run_metrics(identity, ctx, url)

    net_score = calculate_net_score(
        results[Metric.LICENSE].score,
        results[Metric.RAMP_UP].score,
        results[Metric.CORRECTNESS].score,
        results[Metric.RESPONSIVE_MAINTAINER].score,
        weights=ctx.weights,
    )
    record = ScoredRecord(
        url=url,
        net_score=MetricResult.of(net_score, elapsed_since(start)),
        ramp_up=results[Metric.RAMP_UP],
        correctness=results[Metric.CORRECTNESS],
        responsive_maintainer=results[Metric.RESPONSIVE_MAINTAINER],
        license=results[Metric.LICENSE],
    )
    logger.info("Scored %s: net score %.3f", url, net_score)
    return record


async def iter_scored(urls: Sequence[str], ctx: ScoringContext) -> AsyncIterator[ScoredRecord]:
    """Score URLs one after another, yielding each record as soon as it is ready."""
    for url in urls:
        yield await score_url(url, ctx)


async def score_batch(urls: Sequence[str], ctx: ScoringContext) -> list[ScoredRecord]:
    """Score URLs one after another; records come back in input order."""
    return [record async for record in iter_scored(urls, ctx)]


def format_record(record: ScoredRecord) -> str:
    return json.dumps(record.to_dict())


def format_ndjson(records: Iterable[ScoredRecord]) -> str:
    return "\n".join(format_record(record) for record in records)
