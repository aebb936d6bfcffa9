"""Backend driving the Lingua Franca compiler (``lfc``)."""

from __future__ import annotations

import logging
from pathlib import Path

from lingo_orchestrator.application.options import BuildCommandOptions
from lingo_orchestrator.application.results import Outcome
from lingo_orchestrator.backends.base import BackendBase
from lingo_orchestrator.errors import BuildError
from lingo_orchestrator.infrastructure.filesystem import remove_artifacts
from lingo_orchestrator.infrastructure.process import CommandRunner, run_and_capture
from lingo_orchestrator.package import App, BuildSystem

logger = logging.getLogger(__name__)

LFC_ARTIFACT_DIRS = ("bin", "include", "src-gen", "lib64", "share", "build")


def lfc_command_line(
    app: App,
    options: BuildCommandOptions,
    *,
    compile_target_code: bool,
) -> list[str | Path]:
    """Build the ``lfc`` argument list for ``app``."""
    args: list[str | Path] = [
        options.lfc_exec_path,
        "--output",
        app.output_dir,
        "--build-type",
        options.profile.value,
    ]
    if not compile_target_code:
        args.append("--no-compile")
    args.append(app.source_file)
    return args


class LfcBackend(BackendBase):
    """Generate and compile code by invoking ``lfc`` once per app."""

    name = "lfc"
    kind = BuildSystem.LFC

    def __init__(self, runner: CommandRunner | None = None) -> None:
        self._runner = runner or run_and_capture

    def generate(
        self,
        app: App,
        options: BuildCommandOptions,
        *,
        compile_target_code: bool,
    ) -> Outcome:
        """Run ``lfc`` for one app, optionally skipping target compilation."""
        if not app.source_file.is_file():
            return Outcome.failure(f"main reactor source not found: {app.source_file}")
        logger.info("building main reactor %s of %s", app.main_reactor, app.name)
        try:
            self._runner(
                lfc_command_line(app, options, compile_target_code=compile_target_code),
                cwd=app.root,
            )
        except BuildError as exc:
            return Outcome.failure(str(exc))
        return Outcome.success()

    def build(self, app: App, options: BuildCommandOptions) -> Outcome:
        return self.generate(
            app, options, compile_target_code=options.compile_target_code
        )

    def update(self, app: App) -> Outcome:
        # lfc projects carry no external dependencies to fetch.
        logger.debug("nothing to update for %s", app.name)
        return Outcome.success()

    def clean(self, app: App) -> Outcome:
        try:
            remove_artifacts(app.output_dir, LFC_ARTIFACT_DIRS)
        except BuildError as exc:
            return Outcome.failure(str(exc))
        return Outcome.success()
