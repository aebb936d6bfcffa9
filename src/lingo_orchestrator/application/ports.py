"""Application ports between the dispatcher and build-system backends."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from lingo_orchestrator.application.commands import BatchCommand
from lingo_orchestrator.application.options import BuildCommandOptions
from lingo_orchestrator.application.results import BatchBuildResults, Outcome
from lingo_orchestrator.package import App, BuildSystem


class Backend(Protocol):
    """Per-application operations of one build system."""

    name: str

    def build(self, app: App, options: BuildCommandOptions) -> Outcome:
        """Generate and compile ``app``; failures are returned, not raised."""

    def update(self, app: App) -> Outcome:
        """Refresh dependencies of ``app``."""

    def clean(self, app: App) -> Outcome:
        """Remove build artifacts of ``app``; missing artifacts are success."""


@runtime_checkable
class BatchBackend(Protocol):
    """Run a batch command over apps that all share this backend's kind."""

    def execute_command(self, command: BatchCommand) -> BatchBuildResults:
        """Return a ledger covering exactly ``command.apps``."""


class BackendLookup(Protocol):
    """Resolve the backend registered for a build-system kind."""

    def is_registered(self, kind: BuildSystem) -> bool:
        """Check whether ``kind`` has a backend."""

    def get(self, kind: BuildSystem) -> BatchBackend:
        """Return the backend for ``kind`` or raise if none is registered."""
