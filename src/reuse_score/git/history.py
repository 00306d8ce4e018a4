"""Read recent commit timestamps from a shallow, bare clone."""

from __future__ import annotations

import asyncio
import logging
import shutil
import tempfile
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass
from pathlib import Path

from reuse_score.errors import CloneError
from reuse_score.git.subprocess import run_git

logger = logging.getLogger(__name__)

_CLONE_DIR_PREFIX = "reuse-score-"


@asynccontextmanager
async def scoped_clone_dir(name: str) -> AsyncIterator[Path]:
    """Create a private temporary directory for one clone and always remove it.

    The directory is unique per call, so concurrent clones of repositories
    that share a name never collide. A removal failure is logged and
    swallowed so it cannot mask the caller's result or exception.
    """
    path = Path(await asyncio.to_thread(tempfile.mkdtemp, prefix=f"{_CLONE_DIR_PREFIX}{name}-"))
    try:
        yield path
    finally:
        try:
            await asyncio.to_thread(shutil.rmtree, path)
        except OSError as exc:
            logger.warning("Could not remove temporary clone %s: %s", path, exc)


def _parse_timestamps(log_output: str) -> list[int]:
    timestamps = []
    for line in log_output.splitlines():
        line = line.strip()
        if not line:
            continue
        try:
            timestamps.append(int(line))
        except ValueError as exc:
            raise CloneError(f"Unexpected git log line: {line!r}") from exc
    return timestamps


@dataclass(frozen=True, slots=True)
class GitCommitHistory:
    """Adapter for CommitHistoryPort -- shells out to the git CLI."""

    base_url: str = "https://github.com"
    depth: int = 100
    timeout: float | None = None

    async def commit_timestamps(self, owner: str, name: str) -> list[int]:
        """Clone ``owner/name`` (bare, single branch, bounded depth) and read commit times."""
        remote = f"{self.base_url}/{owner}/{name}.git"
        async with scoped_clone_dir(name) as clone_dir:
            # git refuses to clone into a non-empty directory; mkdtemp gives an empty one.
            code, _, stderr = await run_git(
                [
                    "clone",
                    "--bare",
                    "--single-branch",
                    f"--depth={self.depth}",
                    "--filter=blob:none",
                    "--quiet",
                    remote,
                    str(clone_dir),
                ],
                timeout=self.timeout,
            )
            if code != 0:
                raise CloneError(f"git clone {remote} failed: {stderr.strip()}")

            logger.debug("Cloned %s into %s", remote, clone_dir)
            code, stdout, stderr = await run_git(
                ["--git-dir", str(clone_dir), "log", "--format=%ct"],
                timeout=self.timeout,
                output_limit=None,
            )
            if code != 0:
                raise CloneError(f"git log for {owner}/{name} failed: {stderr.strip()}")
            return _parse_timestamps(stdout)
