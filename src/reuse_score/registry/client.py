"""HTTP client for the npm registry.

API docs: https://github.com/npm/registry/blob/main/docs/REGISTRY-API.md
Base URL: https://registry.npmjs.org
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
from urllib.parse import quote as urlquote

import httpx

from reuse_score.errors import RegistryError


@dataclass
class NpmRegistryClient:
    """Async client for the npm registry."""

    http: httpx.AsyncClient
    base_url: str = "https://registry.npmjs.org"

    async def get_package(self, name: str) -> dict[str, Any] | None:
        """Fetch the packument for ``name``.

        Scoped names (``@scope/pkg``) are URL-encoded, keeping the leading ``@``.

        Returns:
            The decoded JSON document, or None when the registry answers 404.

        Raises:
            RegistryError: on transport failure or a non-JSON body.
        """
        encoded = urlquote(name, safe="@")
        try:
            response = await self.http.get(f"{self.base_url}/{encoded}")
            if response.status_code == 404:
                return None
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as exc:
            raise RegistryError(f"Failed to fetch package '{name}': {exc}") from exc
        except ValueError as exc:
            raise RegistryError(f"Registry returned invalid JSON for '{name}': {exc}") from exc

        if not isinstance(data, dict):
            raise RegistryError(f"Registry returned a non-object document for '{name}'")
        return data


def declared_repository_url(package: dict[str, Any]) -> str | None:
    """Extract the source repository URL a packument declares.

    Handles both ``{"repository": {"url": ...}}`` and the shorthand
    ``{"repository": "github:owner/repo"}`` string form.
    """
    repo = package.get("repository")
    if isinstance(repo, dict):
        url = repo.get("url")
        return url if isinstance(url, str) and url else None
    if isinstance(repo, str) and repo:
        return repo
    return None


def declared_license(package: dict[str, Any]) -> str | None:
    """Return the packument's ``license`` field when it is a plain string."""
    value = package.get("license")
    return value if isinstance(value, str) else None
