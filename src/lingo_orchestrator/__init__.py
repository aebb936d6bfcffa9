"""Batch build orchestration for multi-app Lingua Franca packages."""

from __future__ import annotations

from pathlib import Path

from lingo_orchestrator.application.commands import BatchCommand, Build, Clean, Update
from lingo_orchestrator.application.options import BuildCommandOptions, BuildProfile
from lingo_orchestrator.application.results import BatchBuildResults, Outcome
from lingo_orchestrator.package import App, BuildSystem, Package, load_package

__version__ = "0.1.0"


def run_manifest_command(
    task: Build | Update | Clean,
    manifest_path: Path | None = None,
    app_names: list[str] | None = None,
    *,
    max_workers: int | None = None,
    sequential: bool = False,
    backend_modules: list[str] | None = None,
) -> BatchBuildResults:
    """Run ``task`` over the apps declared in a ``Lingo.toml`` manifest.

    Parameters
    ----------
    task : Build | Update | Clean
        Action applied to every selected app.
    manifest_path : Path | None, optional
        Manifest file; searched upwards from the working directory if omitted.
    app_names : list[str] | None, optional
        Apps to process. All declared apps when omitted.
    max_workers : int | None, optional
        Thread-pool size for parallel stages.
    sequential : bool, default=False
        Run every stage and backend in order on the calling thread.
    backend_modules : list[str] | None, optional
        Extra backend modules loaded into the default registry.

    Returns
    -------
    BatchBuildResults
        Ledger sorted by app name.
    """
    from lingo_orchestrator.application.use_cases import (
        build_batch_command,
        execute_command,
    )
    from lingo_orchestrator.backends.registry import create_default_registry

    package = load_package(manifest_path)
    command = build_batch_command(
        package.select(app_names),
        task,
        max_workers=max_workers,
        sequential=sequential,
    )
    registry = create_default_registry(extra_modules=backend_modules)
    return execute_command(command, registry=registry)


__all__ = [
    "App",
    "BatchBuildResults",
    "BatchCommand",
    "Build",
    "BuildCommandOptions",
    "BuildProfile",
    "BuildSystem",
    "Clean",
    "Outcome",
    "Package",
    "Update",
    "load_package",
    "run_manifest_command",
]
