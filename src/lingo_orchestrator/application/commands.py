"""Batch command model: an action applied to a set of applications."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from lingo_orchestrator.application.options import BuildCommandOptions, ExecutionOptions
from lingo_orchestrator.application.results import BatchBuildResults
from lingo_orchestrator.package import App


@dataclass(frozen=True)
class Build:
    """Generate and compile code for each app."""

    options: BuildCommandOptions = BuildCommandOptions()


@dataclass(frozen=True)
class Update:
    """Refresh dependencies for each app."""


@dataclass(frozen=True)
class Clean:
    """Remove build artifacts for each app."""


type CommandSpec = Build | Update | Clean


@dataclass(frozen=True)
class BatchCommand:
    """Apps to process, possibly in parallel, and the action to take."""

    apps: tuple[App, ...]
    task: CommandSpec
    execution: ExecutionOptions = field(default_factory=ExecutionOptions)

    @classmethod
    def create(
        cls,
        apps: Iterable[App],
        task: CommandSpec,
        execution: ExecutionOptions | None = None,
    ) -> BatchCommand:
        return cls(
            apps=tuple(apps),
            task=task,
            execution=execution or ExecutionOptions(),
        )

    def with_apps(self, apps: Iterable[App]) -> BatchCommand:
        """Re-scope this command to ``apps``, sharing task and execution settings."""
        return BatchCommand(apps=tuple(apps), task=self.task, execution=self.execution)

    def new_results(self) -> BatchBuildResults:
        """Return a ledger recording success for every app of this command."""
        return BatchBuildResults.for_apps(self.apps)
