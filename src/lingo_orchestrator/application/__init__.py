"""Application-layer use-cases, command model and result ledger."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from lingo_orchestrator.application.commands import (
    BatchCommand,
    Build,
    Clean,
    CommandSpec,
    Update,
)
from lingo_orchestrator.application.options import (
    BuildCommandOptions,
    BuildProfile,
    ExecutionOptions,
)
from lingo_orchestrator.application.ports import Backend, BackendLookup, BatchBackend
from lingo_orchestrator.application.results import BatchBuildResults, Outcome
from lingo_orchestrator.package import App, BuildSystem


def partition_by_build_system(apps: Iterable[App]) -> dict[BuildSystem, list[App]]:
    """Group apps by build system via lazy use-case import."""
    from lingo_orchestrator.application.use_cases import (
        partition_by_build_system as _impl,
    )

    return _impl(apps)


def execute_command(
    command: BatchCommand,
    *,
    registry: BackendLookup | None = None,
) -> BatchBuildResults:
    """Dispatch a batch command via lazy use-case import."""
    from lingo_orchestrator.application.use_cases import execute_command as _impl

    return _impl(command, registry=registry)


def build_command_options(
    *,
    release: bool = False,
    compile_target_code: bool = True,
    lfc_exec_path: Path = Path("lfc"),
) -> BuildCommandOptions:
    """Build typed build options via lazy use-case import."""
    from lingo_orchestrator.application.use_cases import build_command_options as _impl

    return _impl(
        release=release,
        compile_target_code=compile_target_code,
        lfc_exec_path=lfc_exec_path,
    )


def build_batch_command(
    apps: Iterable[App],
    task: CommandSpec | None = None,
    *,
    max_workers: int | None = None,
    sequential: bool = False,
) -> BatchCommand:
    """Build a batch command via lazy use-case import."""
    from lingo_orchestrator.application.use_cases import build_batch_command as _impl

    return _impl(apps, task, max_workers=max_workers, sequential=sequential)


__all__ = [
    "Backend",
    "BackendLookup",
    "BatchBackend",
    "BatchBuildResults",
    "BatchCommand",
    "Build",
    "BuildCommandOptions",
    "BuildProfile",
    "Clean",
    "CommandSpec",
    "ExecutionOptions",
    "Outcome",
    "Update",
    "build_batch_command",
    "build_command_options",
    "execute_command",
    "partition_by_build_system",
]
