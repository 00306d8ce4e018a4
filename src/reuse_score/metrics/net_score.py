"""Combine the four metric scores into one weighted net score."""

from __future__ import annotations

from reuse_score.models import NetScoreWeights

DEFAULT_WEIGHTS = NetScoreWeights()


def calculate_net_score(
    license_score: float,
    ramp_up: float,
    correctness: float,
    responsive_maintainer: float,
    weights: NetScoreWeights = DEFAULT_WEIGHTS,
) -> float:
    """Weighted sum of the four metric scores, rounded to 3 decimals."""
    total = (
        weights.license * license_score
        + weights.ramp_up * ramp_up
        + weights.correctness * correctness
        + weights.responsive_maintainer * responsive_maintainer
    )
    return round(total, 3)
