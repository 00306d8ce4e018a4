"""Exception hierarchy for reuse-score.

All exceptions inherit from ReuseScoreError (single catch point).
Metric fetchers catch these at their own boundary and fail closed.
"""

from __future__ import annotations


class ReuseScoreError(Exception):
    """Base exception for all reuse-score errors."""


class ConfigError(ReuseScoreError):
    """Invalid value in the process configuration."""


class GitHubQueryError(ReuseScoreError):
    """Error executing a query against the GitHub GraphQL API."""


class SchemaError(ReuseScoreError):
    """A GitHub response did not match the shape the query asked for."""


class RegistryError(ReuseScoreError):
    """Error communicating with the npm registry."""


class CloneError(ReuseScoreError):
    """Shallow clone or commit-log read failed."""
