"""Composition root: wire the adapters every batch run shares."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass

import httpx

from reuse_score.config import ScorerConfig
from reuse_score.git.history import GitCommitHistory
from reuse_score.github.client import GitHubGraphQLClient
from reuse_score.metrics.base import MetricFetcher
from reuse_score.metrics.correctness import CorrectnessMetric
from reuse_score.metrics.license import LicenseMetric
from reuse_score.metrics.ramp_up import RampUpMetric
from reuse_score.metrics.responsiveness import ResponsivenessMetric
from reuse_score.models import NetScoreWeights
from reuse_score.registry.base import RegistryPort
from reuse_score.registry.client import NpmRegistryClient


@dataclass(frozen=True, slots=True)
class ScoringContext:
    """Shared state for one batch run.

    The registry is used both by the URL locator and by the license
    fallback; the fetchers are the four metrics run per URL.
    """

    registry: RegistryPort
    license: MetricFetcher
    ramp_up: MetricFetcher
    correctness: MetricFetcher
    responsiveness: MetricFetcher
    weights: NetScoreWeights = NetScoreWeights()


def build_context(config: ScorerConfig, http_client: httpx.AsyncClient) -> ScoringContext:
    github = GitHubGraphQLClient(
        http_client,
        token=config.github_token,
        endpoint=config.graphql_url,
    )
    registry = NpmRegistryClient(http_client, base_url=config.registry_url)
    history = GitCommitHistory(
        base_url=config.clone_base_url,
        depth=config.clone_depth,
        timeout=config.clone_timeout,
    )
    return ScoringContext(
        registry=registry,
        license=LicenseMetric(github=github, registry=registry),
        ramp_up=RampUpMetric(history=history),
        correctness=CorrectnessMetric(github=github),
        responsiveness=ResponsivenessMetric(github=github),
        weights=config.weights,
    )


@asynccontextmanager
async def open_context(config: ScorerConfig) -> AsyncIterator[ScoringContext]:
    """Open the shared HTTP client and yield a fully wired ScoringContext."""
    async with httpx.AsyncClient(
        timeout=httpx.Timeout(config.http_timeout, connect=config.http_connect_timeout),
        follow_redirects=True,
        limits=httpx.Limits(max_connections=10, max_keepalive_connections=5),
    ) as http_client:
        yield build_context(config, http_client)
