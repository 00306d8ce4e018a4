"""Domain models for reuse-score. All frozen dataclasses -- no mutation after creation."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

# ─── Enumerations ─────────────────────────────────────────────


class Metric(StrEnum):
    """Metric names as they appear in output records."""

    NET_SCORE = "NetScore"
    RAMP_UP = "RampUp"
    CORRECTNESS = "Correctness"
    BUS_FACTOR = "BusFactor"
    RESPONSIVE_MAINTAINER = "ResponsiveMaintainer"
    LICENSE = "License"


# Output field order after "URL".
RECORD_METRIC_ORDER: tuple[Metric, ...] = (
    Metric.NET_SCORE,
    Metric.RAMP_UP,
    Metric.CORRECTNESS,
    Metric.BUS_FACTOR,
    Metric.RESPONSIVE_MAINTAINER,
    Metric.LICENSE,
)

_UNIMPLEMENTED_WIRE_VALUE = -1

# ─── Identity ─────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class RepositoryIdentity:
    """Canonical (owner, name) of a GitHub repository.

    Both fields are None when the input URL could not be resolved.
    """

    owner: str | None = None
    name: str | None = None

    @property
    def is_resolved(self) -> bool:
        return bool(self.owner) and bool(self.name)

    @classmethod
    def unresolved(cls) -> RepositoryIdentity:
        return cls(owner=None, name=None)


# ─── Metric values ────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class Computed:
    """A metric value that was actually computed."""

    value: float


@dataclass(frozen=True, slots=True)
class Unimplemented:
    """Placeholder for a metric the scorer reserves but does not compute."""


MetricValue = Computed | Unimplemented

UNIMPLEMENTED = Unimplemented()


@dataclass(frozen=True, slots=True)
class MetricResult:
    """Outcome of one metric for one URL."""

    value: MetricValue
    latency_seconds: float = 0.0

    @classmethod
    def of(cls, score: float, latency_seconds: float) -> MetricResult:
        return cls(value=Computed(score), latency_seconds=latency_seconds)

    @classmethod
    def failed(cls) -> MetricResult:
        """Fail-closed default: score 0, no latency sampled."""
        return cls(value=Computed(0.0), latency_seconds=0.0)

    @classmethod
    def unimplemented(cls) -> MetricResult:
        return cls(value=UNIMPLEMENTED)

    @property
    def score(self) -> float:
        if isinstance(self.value, Computed):
            return self.value.value
        msg = "Metric has no computed score"
        raise ValueError(msg)

    def wire_score(self) -> float | int:
        if isinstance(self.value, Unimplemented):
            return _UNIMPLEMENTED_WIRE_VALUE
        return self.value.value

    def wire_latency(self) -> float | int:
        if isinstance(self.value, Unimplemented):
            return _UNIMPLEMENTED_WIRE_VALUE
        return self.latency_seconds


# ─── Scoring parameters ───────────────────────────────────────


@dataclass(frozen=True, slots=True)
class NetScoreWeights:
    """Weights applied to each metric when computing the net score."""

    license: float = 0.30
    ramp_up: float = 0.20
    correctness: float = 0.25
    responsive_maintainer: float = 0.20


# ─── Output record ────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class ScoredRecord:
    """One scored output record per input URL."""

    url: str
    net_score: MetricResult
    ramp_up: MetricResult
    correctness: MetricResult
    responsive_maintainer: MetricResult
    license: MetricResult
    bus_factor: MetricResult = MetricResult(value=UNIMPLEMENTED)

    def _result_for(self, metric: Metric) -> MetricResult:
        return {
            Metric.NET_SCORE: self.net_score,
            Metric.RAMP_UP: self.ramp_up,
            Metric.CORRECTNESS: self.correctness,
            Metric.BUS_FACTOR: self.bus_factor,
            Metric.RESPONSIVE_MAINTAINER: self.responsive_maintainer,
            Metric.LICENSE: self.license,
        }[metric]

    def to_dict(self) -> dict[str, object]:
        result: dict[str, object] = {"URL": self.url}
        for metric in RECORD_METRIC_ORDER:
            metric_result = self._result_for(metric)
            result[str(metric)] = metric_result.wire_score()
            result[f"{metric}_Latency"] = metric_result.wire_latency()
        return result
