"""External process invocation for backends."""

from __future__ import annotations

import logging
import os
import shlex
import subprocess
from pathlib import Path
from typing import Protocol

from lingo_orchestrator.errors import ProcessError
from lingo_orchestrator.types import CommandLine, EnvMap

logger = logging.getLogger(__name__)


class CommandRunner(Protocol):
    """Callable running one external command to completion."""

    def __call__(
        self,
        args: CommandLine,
        *,
        cwd: Path | None = None,
        env: EnvMap | None = None,
        timeout: float | None = None,
    ) -> subprocess.CompletedProcess[str]:
        """Run ``args`` and raise ``ProcessError`` on failure."""


def _last_line(text: str) -> str:
    lines = [line.strip() for line in text.splitlines() if line.strip()]
    return lines[-1] if lines else ""


def run_and_capture(
    args: CommandLine,
    *,
    cwd: Path | None = None,
    env: EnvMap | None = None,
    timeout: float | None = None,
) -> subprocess.CompletedProcess[str]:
    """Run an external command and capture its output.

    Parameters
    ----------
    args : Sequence[str | PathLike]
        Executable followed by its arguments.
    cwd : Path | None, optional
        Working directory for the process.
    env : Mapping[str, str] | None, optional
        Variables added to the inherited environment.
    timeout : float | None, optional
        Seconds before the process is killed.

    Returns
    -------
    subprocess.CompletedProcess[str]
        Completed process with captured stdout/stderr.

    Raises
    ------
    ProcessError
        If the process cannot start, times out, or exits non-zero.
    """
    argv = [os.fspath(arg) for arg in args]
    if not argv:
        raise ProcessError("Cannot run an empty command line.")
    program = argv[0]
    logger.info("running %s", shlex.join(argv))

    process_env = {**os.environ, **env} if env else None
    try:
        completed = subprocess.run(
            argv,
            cwd=cwd,
            env=process_env,
            capture_output=True,
            text=True,
            check=False,
            timeout=timeout,
        )
    except FileNotFoundError as exc:
        raise ProcessError(f"{program}: executable not found") from exc
    except subprocess.TimeoutExpired as exc:
        raise ProcessError(f"{program} timed out after {timeout}s") from exc
    except OSError as exc:
        raise ProcessError(f"{program} failed to start: {exc}") from exc

    if completed.returncode != 0:
        detail = _last_line(completed.stderr) or _last_line(completed.stdout)
        message = f"{program} exited with status {completed.returncode}"
        if detail:
            message = f"{message}: {detail}"
        raise ProcessError(
            message,
            returncode=completed.returncode,
            stderr=completed.stderr,
        )
    return completed
