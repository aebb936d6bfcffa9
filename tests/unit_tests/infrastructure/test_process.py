"""Unit tests for the external process runner."""

from __future__ import annotations

import subprocess
import sys
from pathlib import Path

import pytest

from lingo_orchestrator.errors import BuildError, ProcessError
from lingo_orchestrator.infrastructure.process import run_and_capture


def test_run_and_capture_returns_output(tmp_path: Path) -> None:
    """Capture stdout of a successful command run in ``cwd``."""
    completed = run_and_capture(
        [sys.executable, "-c", "import os; print(os.getcwd())"], cwd=tmp_path
    )
    assert completed.returncode == 0
    assert Path(completed.stdout.strip()).resolve() == tmp_path.resolve()


def test_run_and_capture_merges_environment() -> None:
    """Expose extra variables on top of the inherited environment."""
    completed = run_and_capture(
        [sys.executable, "-c", "import os; print(os.environ['LINGO_TEST_VAR'])"],
        env={"LINGO_TEST_VAR": "hello"},
    )
    assert completed.stdout.strip() == "hello"


def test_run_and_capture_nonzero_exit_raises_with_stderr_tail() -> None:
    """Raise ProcessError carrying return code and last stderr line."""
    script = "import sys; sys.stderr.write('warming up\\nmissing source\\n'); sys.exit(3)"
    with pytest.raises(ProcessError, match="exited with status 3: missing source") as excinfo:
        run_and_capture([sys.executable, "-c", script])
    assert excinfo.value.returncode == 3
    assert "warming up" in excinfo.value.stderr
    assert isinstance(excinfo.value, BuildError)


def test_run_and_capture_missing_executable() -> None:
    """Report a missing executable as a process failure."""
    with pytest.raises(ProcessError, match="executable not found"):
        run_and_capture(["definitely-not-a-real-lfc-binary"])


def test_run_and_capture_timeout(monkeypatch: pytest.MonkeyPatch) -> None:
    """Convert a timeout into a process failure."""

    def fake_run(*_args: object, **_kwargs: object) -> None:
        raise subprocess.TimeoutExpired(cmd="lfc", timeout=1.0)

    monkeypatch.setattr(
        "lingo_orchestrator.infrastructure.process.subprocess.run", fake_run
    )
    with pytest.raises(ProcessError, match="timed out after 1.0s"):
        run_and_capture(["lfc"], timeout=1.0)


def test_run_and_capture_rejects_empty_command() -> None:
    """Refuse to run an empty argument list."""
    with pytest.raises(ProcessError, match="empty command"):
        run_and_capture([])
