"""Tests for the net score aggregator."""

from __future__ import annotations

import pytest

from reuse_score.metrics.net_score import DEFAULT_WEIGHTS, calculate_net_score
from reuse_score.models import NetScoreWeights


class TestCalculateNetScore:
    def test_default_weights(self):
        assert DEFAULT_WEIGHTS == NetScoreWeights(
            license=0.30, ramp_up=0.20, correctness=0.25, responsive_maintainer=0.20
        )

    def test_all_ones(self):
        # Default weights sum to 0.95.
        assert calculate_net_score(1, 1, 1, 1) == pytest.approx(0.95)

    def test_all_ones_equal_weights(self):
        weights = NetScoreWeights(0.25, 0.25, 0.25, 0.25)
        assert calculate_net_score(1, 1, 1, 1, weights=weights) == 1.0

    def test_all_zeros(self):
        assert calculate_net_score(0, 0, 0, 0) == 0.0

    def test_mixed(self):
        # 0.30 + 0.10 + 0.1875 + 0.05
        assert calculate_net_score(1, 0.5, 0.75, 0.25) == pytest.approx(0.6375, abs=1e-3)

    def test_rounded_to_three_decimals(self):
        score = calculate_net_score(0.333, 0.777, 0.111, 0.999)
        assert score == round(score, 3)

    def test_equal_weights(self):
        weights = NetScoreWeights(0.25, 0.25, 0.25, 0.25)
        assert calculate_net_score(1, 0, 1, 0, weights=weights) == 0.5

    def test_deterministic(self):
        args = (0.4, 0.6, 0.2, 0.9)
        assert len({calculate_net_score(*args) for _ in range(10)}) == 1

    @pytest.mark.parametrize(
        "scores",
        [(0, 0, 0, 1), (1, 0, 0, 0), (0.5, 0.5, 0.5, 0.5), (1, 1, 1, 0)],
    )
    def test_bounded(self, scores):
        assert 0.0 <= calculate_net_score(*scores) <= 1.0
