"""Process configuration, built once at startup and passed to every component."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field

from reuse_score.errors import ConfigError
from reuse_score.models import NetScoreWeights

_DEFAULT_GRAPHQL_URL = "https://api.github.com/graphql"
_DEFAULT_REGISTRY_URL = "https://registry.npmjs.org"
_DEFAULT_CLONE_BASE_URL = "https://github.com"

# LOG_LEVEL values: 0 silent, 1 informational, 2 debug.
_LOG_LEVELS = {
    0: logging.CRITICAL + 10,
    1: logging.INFO,
    2: logging.DEBUG,
}


@dataclass(frozen=True, slots=True)
class ScorerConfig:
    """Everything the scorer reads from the environment."""

    github_token: str = field(default="", repr=False)
    log_file: str | None = None
    log_level: int = _LOG_LEVELS[0]
    weights: NetScoreWeights = field(default_factory=NetScoreWeights)
    graphql_url: str = _DEFAULT_GRAPHQL_URL
    registry_url: str = _DEFAULT_REGISTRY_URL
    clone_base_url: str = _DEFAULT_CLONE_BASE_URL
    clone_depth: int = 100
    clone_timeout: float | None = None
    http_timeout: float = 30.0
    http_connect_timeout: float = 10.0

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ScorerConfig:
        """Build a config from environment variables.

        Raises ConfigError for values that are present but malformed.
        """
        env = os.environ if environ is None else environ
        log_file = env.get("LOG_FILE", "").strip() or None
        return cls(
            github_token=env.get("GITHUB_TOKEN", "").strip(),
            log_file=log_file,
            log_level=_parse_log_level(env.get("LOG_LEVEL", "")),
            weights=_parse_weights(env.get("NET_SCORE_WEIGHTS", "")),
        )


def _parse_log_level(raw: str) -> int:
    raw = raw.strip()
    if not raw:
        return _LOG_LEVELS[0]
    try:
        return _LOG_LEVELS[int(raw)]
    except (ValueError, KeyError) as exc:
        msg = f"LOG_LEVEL must be 0, 1 or 2, got '{raw}'"
        raise ConfigError(msg) from exc


def _parse_weights(raw: str) -> NetScoreWeights:
    """Parse 'license,ramp_up,correctness,responsive' into NetScoreWeights."""
    raw = raw.strip()
    if not raw:
        return NetScoreWeights()
    parts = [p.strip() for p in raw.split(",")]
    if len(parts) != 4:
        msg = f"NET_SCORE_WEIGHTS needs 4 comma-separated values, got {len(parts)}"
        raise ConfigError(msg)
    try:
        values = [float(p) for p in parts]
    except ValueError as exc:
        msg = f"NET_SCORE_WEIGHTS must be numeric, got '{raw}'"
        raise ConfigError(msg) from exc
    if any(v < 0 for v in values) or sum(values) > 1.0 + 1e-9:
        msg = f"NET_SCORE_WEIGHTS must be non-negative and sum to at most 1, got '{raw}'"
        raise ConfigError(msg)
    license_w, ramp_up_w, correctness_w, responsive_w = values
    return NetScoreWeights(
        license=license_w,
        ramp_up=ramp_up_w,
        correctness=correctness_w,
        responsive_maintainer=responsive_w,
    )
