"""Port: GitHub GraphQL query execution."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol


class GraphQLPort(Protocol):
    """Port for running a GraphQL query against the GitHub API."""

    async def execute(
        self,
        query: str,
        variables: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Run a query and return its ``data`` object.

        Raises GitHubQueryError on transport failures or GraphQL errors.
        """
        ...
