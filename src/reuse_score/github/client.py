"""HTTP client for the GitHub GraphQL API.

API docs: https://docs.github.com/en/graphql
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import httpx

from reuse_score.errors import GitHubQueryError

logger = logging.getLogger(__name__)


@dataclass
class GitHubGraphQLClient:
    """Async client for GitHub's GraphQL endpoint, authenticated with a bearer token."""

    http: httpx.AsyncClient
    token: str = field(default="", repr=False)
    endpoint: str = "https://api.github.com/graphql"

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def execute(
        self,
        query: str,
        variables: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Run a query and return its ``data`` object.

        Raises:
            GitHubQueryError: on HTTP failure, non-JSON body, or when the
                response carries a GraphQL ``errors`` array.
        """
        payload: dict[str, Any] = {"query": query}
        if variables:
            payload["variables"] = dict(variables)

        try:
            response = await self.http.post(
                self.endpoint,
                json=payload,
                headers=self._headers(),
            )
            response.raise_for_status()
            body = response.json()
        except httpx.HTTPError as exc:
            raise GitHubQueryError(f"GitHub GraphQL request failed: {exc}") from exc
        except ValueError as exc:
            raise GitHubQueryError(f"GitHub GraphQL returned invalid JSON: {exc}") from exc

        if not isinstance(body, dict):
            raise GitHubQueryError("GitHub GraphQL returned a non-object body")

        errors = body.get("errors")
        if errors:
            messages = "; ".join(
                str(err.get("message", err)) if isinstance(err, dict) else str(err)
                for err in errors
            )
            logger.debug("GraphQL errors for variables %s: %s", variables, messages)
            raise GitHubQueryError(f"GitHub GraphQL query failed: {messages}")

        data = body.get("data")
        if not isinstance(data, dict):
            raise GitHubQueryError("GitHub GraphQL response has no data")
        return data
