"""Port: npm registry metadata lookup."""

from __future__ import annotations

from typing import Any, Protocol


class RegistryPort(Protocol):
    """Port for querying package metadata from the npm registry."""

    async def get_package(self, name: str) -> dict[str, Any] | None:
        """Fetch the registry document for a package, or None if it does not exist."""
        ...
