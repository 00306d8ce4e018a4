"""Async execution of git commands."""

from __future__ import annotations

import asyncio
import contextlib
import os
import signal

_OUTPUT_LIMIT = 2000

# Never block on a credential prompt for a missing or private repository.
_GIT_ENV_OVERRIDES = {"GIT_TERMINAL_PROMPT": "0"}


async def run_git(
    args: list[str],
    timeout: float | None = None,
    output_limit: int | None = _OUTPUT_LIMIT,
) -> tuple[int, str, str]:
    """Run ``git <args>``, return (returncode, stdout, stderr).

    Uses asyncio.create_subprocess_exec -- never shell=True.
    stdout is truncated to ``output_limit`` characters (None keeps all of it);
    stderr is always truncated.
    Uses start_new_session=True so child processes can be killed as a group.
    A ``timeout`` of None waits for the command to finish.
    """
    env = {**os.environ, **_GIT_ENV_OVERRIDES}
    proc = await asyncio.create_subprocess_exec(
        "git",
        *args,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
        env=env,
        start_new_session=True,
    )
    try:
        stdout_bytes, stderr_bytes = await asyncio.wait_for(proc.communicate(), timeout=timeout)
    except TimeoutError:
        try:
            os.killpg(os.getpgid(proc.pid), signal.SIGKILL)
        except (ProcessLookupError, OSError):
            with contextlib.suppress(ProcessLookupError):
                proc.kill()
        await proc.wait()
        return (-1, "", f"git {args[0] if args else ''} timed out after {timeout}s")

    stdout = stdout_bytes.decode(errors="replace")
    if output_limit is not None:
        stdout = stdout[:output_limit]
    return (
        proc.returncode or 0,
        stdout,
        stderr_bytes.decode(errors="replace")[:_OUTPUT_LIMIT],
    )
