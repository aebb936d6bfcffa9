"""Application use-cases orchestrating batch commands across backends."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from pydantic import ValidationError

from lingo_orchestrator.application.commands import BatchCommand, Build, CommandSpec
from lingo_orchestrator.application.options import (
    BuildCommandOptions,
    BuildProfile,
    ExecutionOptions,
)
from lingo_orchestrator.application.ports import BackendLookup, BatchBackend
from lingo_orchestrator.application.results import BatchBuildResults
from lingo_orchestrator.backends.registry import create_default_registry
from lingo_orchestrator.errors import (
    BackendNotImplementedError,
    ConfigurationError,
    UnknownBuildSystemError,
)
from lingo_orchestrator.package import App, BuildSystem
from lingo_orchestrator.schemas import BuildCommandConfig, ExecutionConfig

logger = logging.getLogger(__name__)


def partition_by_build_system(apps: Iterable[App]) -> dict[BuildSystem, list[App]]:
    """Group apps by build-system kind, keeping their relative order.

    Raises
    ------
    UnknownBuildSystemError
        If an app does not resolve to a known ``BuildSystem``.
    """
    partitions: dict[BuildSystem, list[App]] = {}
    for app in apps:
        try:
            kind = BuildSystem(app.build_system)
        except ValueError as exc:
            raise UnknownBuildSystemError(
                f"App '{app.name}' has unknown build system {app.build_system!r}."
            ) from exc
        partitions.setdefault(kind, []).append(app)
    return partitions


def _ensure_backends(
    partitions: dict[BuildSystem, list[App]],
    registry: BackendLookup,
) -> None:
    missing = [kind for kind in partitions if not registry.is_registered(kind)]
    if not missing:
        return
    affected = sorted(app.name for kind in missing for app in partitions[kind])
    kinds = ", ".join(kind.value for kind in missing)
    raise BackendNotImplementedError(
        f"Build system(s) not implemented: {kinds}. "
        f"Cannot process app(s): {', '.join(affected)}"
    )


def execute_command(
    command: BatchCommand,
    *,
    registry: BackendLookup | None = None,
) -> BatchBuildResults:
    """Use-case: dispatch a batch command to one backend per build system.

    Every partition's backend is resolved before any backend runs, so a
    missing backend aborts the batch without partial results.

    Parameters
    ----------
    command : BatchCommand
        Apps and task to run.
    registry : BackendLookup | None, optional
        Backend lookup; defaults to :func:`create_default_registry`.

    Returns
    -------
    BatchBuildResults
        One entry per app of ``command``, sorted by app name.

    Raises
    ------
    BackendNotImplementedError
        If any requested build system has no backend.
    """
    if registry is None:
        registry = create_default_registry()
    partitions = partition_by_build_system(command.apps)
    _ensure_backends(partitions, registry)

    jobs: list[tuple[BatchBackend, BatchCommand]] = []
    for kind, apps in partitions.items():
        logger.debug("dispatching %d app(s) to %s backend", len(apps), kind.value)
        jobs.append((registry.get(kind), command.with_apps(apps)))

    if command.execution.sequential or len(jobs) < 2:
        ledgers = [backend.execute_command(sub) for backend, sub in jobs]
    else:
        with ThreadPoolExecutor(
            max_workers=len(jobs), thread_name_prefix="lingo-backend"
        ) as executor:
            ledgers = list(
                executor.map(lambda job: job[0].execute_command(job[1]), jobs)
            )

    results = BatchBuildResults()
    for ledger in ledgers:
        results.append(ledger)
    return results


def build_command_options(
    *,
    release: bool = False,
    compile_target_code: bool = True,
    lfc_exec_path: Path = Path("lfc"),
) -> BuildCommandOptions:
    """Build typed build options from command/API params."""
    try:
        config = BuildCommandConfig(
            profile="release" if release else "debug",
            compile_target_code=compile_target_code,
            lfc_exec_path=lfc_exec_path,
        )
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid build options: {exc}") from exc
    profile = BuildProfile.RELEASE if config.profile == "release" else BuildProfile.DEBUG
    return BuildCommandOptions(
        profile=profile,
        compile_target_code=config.compile_target_code,
        lfc_exec_path=config.lfc_exec_path,
    )


def build_batch_command(
    apps: Iterable[App],
    task: CommandSpec | None = None,
    *,
    max_workers: int | None = None,
    sequential: bool = False,
) -> BatchCommand:
    """Build a batch command, validating execution settings."""
    try:
        config = ExecutionConfig(max_workers=max_workers, sequential=sequential)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid execution options: {exc}") from exc
    return BatchCommand.create(
        apps,
        task if task is not None else Build(),
        ExecutionOptions(max_workers=config.max_workers, sequential=config.sequential),
    )
