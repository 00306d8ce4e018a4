"""GraphQL queries and the response shapes they produce.

Each ``parse_*`` function translates the raw ``data`` object into frozen
dataclasses and raises SchemaError if the payload does not have the
expected shape. Scoring code only ever sees the parsed types.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from typing import Any, TypeVar

from reuse_score.errors import SchemaError

_T = TypeVar("_T")

# ─── Queries ──────────────────────────────────────────────────

LICENSE_QUERY = """
query License($owner: String!, $name: String!) {
  repository(owner: $owner, name: $name) {
    licenseInfo {
      name
      spdxId
    }
    headManifest: object(expression: "HEAD:package.json") {
      ... on Blob { text }
    }
    masterManifest: object(expression: "master:package.json") {
      ... on Blob { text }
    }
  }
}
"""

CORRECTNESS_QUERY = """
query Correctness($owner: String!, $name: String!, $since: GitTimestamp!) {
  repository(owner: $owner, name: $name) {
    openIssues: issues(states: OPEN) { totalCount }
    closedIssues: issues(states: CLOSED) { totalCount }
    openPullRequests: pullRequests(states: OPEN) { totalCount }
    releases { totalCount }
    defaultBranchRef {
      target {
        ... on Commit {
          history(since: $since) { totalCount }
        }
      }
    }
  }
}
"""

RESPONSIVENESS_QUERY = """
query Responsiveness($owner: String!, $name: String!) {
  repository(owner: $owner, name: $name) {
    pullRequests(first: 100, orderBy: {field: CREATED_AT, direction: DESC}) {
      edges { node { createdAt closedAt mergedAt } }
    }
    issues(
      first: 100
      states: [OPEN, CLOSED]
      orderBy: {field: CREATED_AT, direction: DESC}
    ) {
      edges { node { createdAt closedAt } }
    }
  }
}
"""

# ─── Response models ──────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class LicenseInfo:
    name: str | None
    spdx_id: str | None


@dataclass(frozen=True, slots=True)
class LicenseResponse:
    license_info: LicenseInfo | None
    manifest_text: str | None

    @property
    def manifest_package_name(self) -> str | None:
        """The ``name`` field of the repository's package.json, if any."""
        if not self.manifest_text:
            return None
        try:
            manifest = json.loads(self.manifest_text)
        except ValueError:
            return None
        if not isinstance(manifest, dict):
            return None
        name = manifest.get("name")
        return name if isinstance(name, str) and name else None


@dataclass(frozen=True, slots=True)
class CorrectnessResponse:
    open_issues: int
    closed_issues: int
    open_pull_requests: int
    releases: int
    recent_commits: int


@dataclass(frozen=True, slots=True)
class ResolvableItem:
    """A pull request or issue with the timestamps needed for resolution time."""

    created_at: datetime
    closed_at: datetime | None = None
    merged_at: datetime | None = None

    @property
    def resolved_at(self) -> datetime | None:
        return self.closed_at or self.merged_at


@dataclass(frozen=True, slots=True)
class ResponsivenessResponse:
    pull_requests: tuple[ResolvableItem, ...]
    issues: tuple[ResolvableItem, ...]


# ─── Parsing helpers ──────────────────────────────────────────


def _repository(data: dict[str, Any]) -> dict[str, Any]:
    repo = data.get("repository")
    if not isinstance(repo, dict):
        raise SchemaError("Response has no repository object (repository not found?)")
    return repo


def _total_count(container: Any, label: str) -> int:
    if not isinstance(container, dict):
        raise SchemaError(f"Missing connection '{label}'")
    count = container.get("totalCount")
    if not isinstance(count, int) or isinstance(count, bool) or count < 0:
        raise SchemaError(f"Invalid totalCount for '{label}': {count!r}")
    return count


def _parse_datetime(value: Any, label: str) -> datetime | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise SchemaError(f"Expected ISO timestamp for '{label}', got {value!r}")
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError as exc:
        raise SchemaError(f"Invalid timestamp for '{label}': {value!r}") from exc


def _optional_str(value: Any) -> str | None:
    return value if isinstance(value, str) and value else None


def _blob_text(obj: Any) -> str | None:
    if isinstance(obj, dict):
        return _optional_str(obj.get("text"))
    return None


def _edges(repo: dict[str, Any], key: str, node_parser: Callable[[dict], _T]) -> tuple[_T, ...]:
    connection = repo.get(key)
    if not isinstance(connection, dict) or not isinstance(connection.get("edges"), list):
        raise SchemaError(f"Missing edge list '{key}'")
    items = []
    for edge in connection["edges"]:
        node = edge.get("node") if isinstance(edge, dict) else None
        if not isinstance(node, dict):
            raise SchemaError(f"Malformed edge in '{key}'")
        items.append(node_parser(node))
    return tuple(items)


def _parse_item(node: dict[str, Any]) -> ResolvableItem:
    created_at = _parse_datetime(node.get("createdAt"), "createdAt")
    if created_at is None:
        raise SchemaError("Item is missing createdAt")
    return ResolvableItem(
        created_at=created_at,
        closed_at=_parse_datetime(node.get("closedAt"), "closedAt"),
        merged_at=_parse_datetime(node.get("mergedAt"), "mergedAt"),
    )


# ─── Public parsers ───────────────────────────────────────────


def parse_license_response(data: dict[str, Any]) -> LicenseResponse:
    repo = _repository(data)
    raw_info = repo.get("licenseInfo")
    license_info = None
    if isinstance(raw_info, dict):
        license_info = LicenseInfo(
            name=_optional_str(raw_info.get("name")),
            spdx_id=_optional_str(raw_info.get("spdxId")),
        )
    elif raw_info is not None:
        raise SchemaError(f"Invalid licenseInfo: {raw_info!r}")

    manifest_text = _blob_text(repo.get("headManifest")) or _blob_text(
        repo.get("masterManifest")
    )
    return LicenseResponse(license_info=license_info, manifest_text=manifest_text)


def parse_correctness_response(data: dict[str, Any]) -> CorrectnessResponse:
    repo = _repository(data)

    # Empty repositories have no default branch.
    recent_commits = 0
    branch = repo.get("defaultBranchRef")
    if isinstance(branch, dict):
        target = branch.get("target")
        if isinstance(target, dict) and "history" in target:
            recent_commits = _total_count(target["history"], "history")

    return CorrectnessResponse(
        open_issues=_total_count(repo.get("openIssues"), "openIssues"),
        closed_issues=_total_count(repo.get("closedIssues"), "closedIssues"),
        open_pull_requests=_total_count(repo.get("openPullRequests"), "openPullRequests"),
        releases=_total_count(repo.get("releases"), "releases"),
        recent_commits=recent_commits,
    )


def parse_responsiveness_response(data: dict[str, Any]) -> ResponsivenessResponse:
    repo = _repository(data)
    return ResponsivenessResponse(
        pull_requests=_edges(repo, "pullRequests", _parse_item),
        issues=_edges(repo, "issues", _parse_item),
    )
