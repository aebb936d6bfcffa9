"""Shared batch execution for per-application backends."""

from __future__ import annotations

from abc import ABC, abstractmethod

from lingo_orchestrator.application.commands import BatchCommand, Build, Clean, Update
from lingo_orchestrator.application.options import BuildCommandOptions, ExecutionOptions
from lingo_orchestrator.application.ports import Backend
from lingo_orchestrator.application.results import AppTransform, BatchBuildResults, Outcome
from lingo_orchestrator.package import App, BuildSystem


def apply_stage(
    results: BatchBuildResults,
    transform: AppTransform,
    execution: ExecutionOptions,
) -> BatchBuildResults:
    """Run one stage over ``results`` honoring the batch execution settings."""
    if execution.sequential:
        return results.map(transform)
    return results.par_map(transform, max_workers=execution.max_workers)


class BackendBase(Backend, ABC):
    """Base class for backends implementing the :class:`Backend` contract.

    Subclasses override :meth:`run_build` when building takes several stages
    that must be chained on the ledger.
    """

    name: str = ""
    kind: BuildSystem

    @abstractmethod
    def build(self, app: App, options: BuildCommandOptions) -> Outcome:
        """Build one app."""

    @abstractmethod
    def update(self, app: App) -> Outcome:
        """Update dependencies of one app."""

    @abstractmethod
    def clean(self, app: App) -> Outcome:
        """Clean artifacts of one app."""

    def run_build(
        self,
        results: BatchBuildResults,
        options: BuildCommandOptions,
        execution: ExecutionOptions,
    ) -> BatchBuildResults:
        return apply_stage(results, lambda app: self.build(app, options), execution)

    def execute_command(self, command: BatchCommand) -> BatchBuildResults:
        """Run ``command.task`` over every app of ``command``."""
        results = command.new_results()
        task = command.task
        if isinstance(task, Build):
            return self.run_build(results, task.options, command.execution)
        if isinstance(task, Update):
            return apply_stage(results, self.update, command.execution)
        if isinstance(task, Clean):
            return apply_stage(results, self.clean, command.execution)
        raise TypeError(f"Unsupported command: {task!r}")
