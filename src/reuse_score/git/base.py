"""Port: commit history of a remote repository."""

from __future__ import annotations

from typing import Protocol


class CommitHistoryPort(Protocol):
    """Port for reading commit timestamps from a shallow clone."""

    async def commit_timestamps(self, owner: str, name: str) -> list[int]:
        """Return commit times (Unix seconds) of the recent default-branch history.

        Raises CloneError if the repository cannot be cloned or read.
        """
        ...
