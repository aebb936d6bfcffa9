"""Shared fixtures for backend tests."""

from __future__ import annotations

import os
import subprocess
import threading
from collections.abc import Callable
from pathlib import Path

import pytest

from lingo_orchestrator.errors import ProcessError
from lingo_orchestrator.package import App, BuildSystem


class FakeRunner:
    """Process runner double recording argv lists."""

    def __init__(self, fail_when: Callable[[list[str]], str | None] | None = None) -> None:
        self.fail_when = fail_when or (lambda _argv: None)
        self.calls: list[tuple[list[str], Path | None]] = []
        self._lock = threading.Lock()

    def __call__(
        self,
        args: object,
        *,
        cwd: Path | None = None,
        env: object = None,
        timeout: float | None = None,
    ) -> subprocess.CompletedProcess[str]:
        del env, timeout
        argv = [os.fspath(arg) for arg in args]  # type: ignore[attr-defined]
        with self._lock:
            self.calls.append((argv, cwd))
        message = self.fail_when(argv)
        if message:
            raise ProcessError(message, returncode=1)
        return subprocess.CompletedProcess(argv, 0, stdout="", stderr="")


@pytest.fixture
def make_project(tmp_path: Path) -> Callable[..., App]:
    """Create an app project directory with a main reactor source."""

    def _make(
        name: str,
        kind: BuildSystem = BuildSystem.LFC,
        *,
        with_source: bool = True,
    ) -> App:
        root = tmp_path / name
        (root / "src").mkdir(parents=True)
        main = name.capitalize()
        if with_source:
            (root / "src" / f"{main}.lf").write_text("target C;\nmain reactor {}\n")
        return App(name=name, main_reactor=main, build_system=kind, root=root)

    return _make


@pytest.fixture
def fake_runner() -> type[FakeRunner]:
    """Return the process runner double class."""
    return FakeRunner
