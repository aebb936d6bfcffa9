"""Backend generating C++ code with ``lfc`` and compiling it with CMake."""

from __future__ import annotations

import logging
from pathlib import Path

from lingo_orchestrator.application.options import BuildCommandOptions, ExecutionOptions
from lingo_orchestrator.application.results import BatchBuildResults, Outcome
from lingo_orchestrator.backends.base import BackendBase, apply_stage
from lingo_orchestrator.backends.lfc import LfcBackend
from lingo_orchestrator.errors import BuildError
from lingo_orchestrator.infrastructure.filesystem import remove_artifacts
from lingo_orchestrator.infrastructure.process import CommandRunner, run_and_capture
from lingo_orchestrator.package import App, BuildSystem

logger = logging.getLogger(__name__)

CMAKE_ARTIFACT_DIRS = ("bin", "build", "src-gen")


def cmake_build_dir(app: App) -> Path:
    return app.output_dir / "build" / app.main_reactor


def cmake_source_dir(app: App) -> Path:
    return app.output_dir / "src-gen" / app.main_reactor


class CmakeBackend(BackendBase):
    """Three-stage build: code generation, CMake configure, CMake build.

    Code generation runs in parallel. Configure and build run one app at a
    time since CMake parallelizes compilation itself.
    """

    name = "cmake"
    kind = BuildSystem.CMAKE

    def __init__(
        self,
        runner: CommandRunner | None = None,
        codegen: LfcBackend | None = None,
        cmake_exec: str = "cmake",
    ) -> None:
        self._runner = runner or run_and_capture
        self._codegen = codegen or LfcBackend(runner=self._runner)
        self._cmake_exec = cmake_exec

    def _run(self, app: App, args: list[str | Path]) -> Outcome:
        try:
            self._runner(args, cwd=app.root)
        except BuildError as exc:
            return Outcome.failure(str(exc))
        return Outcome.success()

    def generate(self, app: App, options: BuildCommandOptions) -> Outcome:
        return self._codegen.generate(app, options, compile_target_code=False)

    def configure(self, app: App, options: BuildCommandOptions) -> Outcome:
        build_dir = cmake_build_dir(app)
        try:
            build_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            return Outcome.failure(f"could not create {build_dir}: {exc}")
        logger.info("configuring %s in %s", app.name, build_dir)
        return self._run(
            app,
            [
                self._cmake_exec,
                "-S",
                cmake_source_dir(app),
                "-B",
                build_dir,
                f"-DCMAKE_BUILD_TYPE={options.profile.value}",
                f"-DCMAKE_INSTALL_PREFIX={app.output_dir}",
                "-DCMAKE_INSTALL_BINDIR=bin",
            ],
        )

    def compile(self, app: App, options: BuildCommandOptions) -> Outcome:
        logger.info("compiling %s", app.name)
        return self._run(
            app,
            [
                self._cmake_exec,
                "--build",
                cmake_build_dir(app),
                "--target",
                "install",
                "--config",
                options.profile.value,
            ],
        )

    def build(self, app: App, options: BuildCommandOptions) -> Outcome:
        outcome = self.generate(app, options)
        if not outcome.ok or not options.compile_target_code:
            return outcome
        outcome = self.configure(app, options)
        if not outcome.ok:
            return outcome
        return self.compile(app, options)

    def run_build(
        self,
        results: BatchBuildResults,
        options: BuildCommandOptions,
        execution: ExecutionOptions,
    ) -> BatchBuildResults:
        results = apply_stage(results, lambda app: self.generate(app, options), execution)
        if not options.compile_target_code:
            return results
        return results.map(lambda app: self.configure(app, options)).map(
            lambda app: self.compile(app, options)
        )

    def update(self, app: App) -> Outcome:
        logger.debug("nothing to update for %s", app.name)
        return Outcome.success()

    def clean(self, app: App) -> Outcome:
        try:
            remove_artifacts(app.output_dir, CMAKE_ARTIFACT_DIRS)
        except BuildError as exc:
            return Outcome.failure(str(exc))
        return Outcome.success()
