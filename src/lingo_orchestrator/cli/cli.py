#!/usr/bin/env python3
"""
lingo_orchestrator.cli.cli

Typer-based CLI running build, update and clean over the apps of a
``Lingo.toml`` manifest.

Examples
--------
Build every app in debug mode:

    lingo build

Build two apps with optimizations, one at a time:

    lingo build hello pong --release --sequential
"""

from __future__ import annotations

import logging
import sys
import traceback
from pathlib import Path

import typer

from lingo_orchestrator.application.commands import Build, Clean, CommandSpec, Update
from lingo_orchestrator.errors import OrchestratorError

app = typer.Typer(
    name="lingo",
    help="Build, update and clean Lingua Franca apps across build systems.",
    no_args_is_help=True,
)

APPS_HELP = "Apps to process (default: every app in the manifest)."
MANIFEST_HELP = "Path to Lingo.toml (default: searched upwards from cwd)."
JOBS_HELP = "Worker threads for parallel stages."
SEQUENTIAL_HELP = "Process apps and backends one at a time."
BACKEND_MODULE_HELP = "Backend module import path or file path (repeatable)."


def _print_error(exc: Exception, debug: bool) -> int:
    """Print a user-friendly error.

    Parameters
    ----------
    exc : Exception
        Exception raised while running the batch.
    debug : bool
        Whether to include traceback details.

    Returns
    -------
    int
        Process exit code.
    """
    typer.secho(f"✗ {type(exc).__name__}: {exc}", fg=typer.colors.RED, err=True)
    if debug:
        typer.echo("\nTraceback:", err=True)
        typer.echo(
            "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)),
            err=True,
        )
    code = getattr(exc, "exit_code", None)
    if isinstance(code, int) and code > 0:
        return code
    return 1


def _run_batch(
    ctx: typer.Context,
    task: CommandSpec,
    app_names: list[str] | None,
    manifest: Path | None,
    jobs: int | None,
    sequential: bool,
    backend_module: list[str] | None,
) -> None:
    """Run ``task``, print the report and exit non-zero if any app failed."""
    debug: bool = bool(ctx.obj.get("debug", False))

    try:
        from lingo_orchestrator import run_manifest_command

        results = run_manifest_command(
            task,
            manifest,
            app_names,
            max_workers=jobs,
            sequential=sequential,
            backend_modules=backend_module,
        )
    except OrchestratorError as exc:
        raise typer.Exit(code=_print_error(exc, debug))
    except Exception as exc:
        # Unexpected crash: still show a clean message; debug prints traceback.
        raise typer.Exit(code=_print_error(exc, debug))

    report = results.format_results()
    if report:
        typer.echo(report)
    if not results.all_ok:
        raise typer.Exit(code=1)


# -----------------------------
# Global options
# -----------------------------
@app.callback()
def _main(
    ctx: typer.Context,
    debug: bool = typer.Option(False, "--debug", help="Show full tracebacks on error."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log external commands."),
) -> None:
    """Initialize shared CLI state and logging."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    ctx.obj = {"debug": debug}


# -----------------------------
# Commands
# -----------------------------
@app.command("build")
def build_cmd(
    ctx: typer.Context,
    apps: list[str] | None = typer.Argument(None, help=APPS_HELP),
    release: bool = typer.Option(False, "--release", help="Compile with optimizations."),
    no_compile: bool = typer.Option(
        False, "--no-compile", help="Only generate code; skip target compilation."
    ),
    lfc: Path = typer.Option(
        Path("lfc"), "--lfc", envvar="LFC", help="Path to the lfc executable."
    ),
    manifest: Path | None = typer.Option(None, "--manifest", help=MANIFEST_HELP),
    jobs: int | None = typer.Option(
        None, "--jobs", "-j", min=1, envvar="LINGO_JOBS", help=JOBS_HELP
    ),
    sequential: bool = typer.Option(False, "--sequential", help=SEQUENTIAL_HELP),
    backend_module: list[str] | None = typer.Option(
        None, "--backend-module", help=BACKEND_MODULE_HELP
    ),
) -> None:
    """Generate and compile code for the selected apps."""
    debug: bool = bool(ctx.obj.get("debug", False))
    try:
        from lingo_orchestrator.application import build_command_options

        options = build_command_options(
            release=release,
            compile_target_code=not no_compile,
            lfc_exec_path=lfc,
        )
    except OrchestratorError as exc:
        raise typer.Exit(code=_print_error(exc, debug))

    _run_batch(ctx, Build(options), apps, manifest, jobs, sequential, backend_module)


@app.command("update")
def update_cmd(
    ctx: typer.Context,
    apps: list[str] | None = typer.Argument(None, help=APPS_HELP),
    manifest: Path | None = typer.Option(None, "--manifest", help=MANIFEST_HELP),
    jobs: int | None = typer.Option(
        None, "--jobs", "-j", min=1, envvar="LINGO_JOBS", help=JOBS_HELP
    ),
    sequential: bool = typer.Option(False, "--sequential", help=SEQUENTIAL_HELP),
    backend_module: list[str] | None = typer.Option(
        None, "--backend-module", help=BACKEND_MODULE_HELP
    ),
) -> None:
    """Refresh dependencies of the selected apps."""
    _run_batch(ctx, Update(), apps, manifest, jobs, sequential, backend_module)


@app.command("clean")
def clean_cmd(
    ctx: typer.Context,
    apps: list[str] | None = typer.Argument(None, help=APPS_HELP),
    manifest: Path | None = typer.Option(None, "--manifest", help=MANIFEST_HELP),
    jobs: int | None = typer.Option(
        None, "--jobs", "-j", min=1, envvar="LINGO_JOBS", help=JOBS_HELP
    ),
    sequential: bool = typer.Option(False, "--sequential", help=SEQUENTIAL_HELP),
    backend_module: list[str] | None = typer.Option(
        None, "--backend-module", help=BACKEND_MODULE_HELP
    ),
) -> None:
    """Remove build artifacts of the selected apps."""
    _run_batch(ctx, Clean(), apps, manifest, jobs, sequential, backend_module)


@app.command("backends")
def backends_cmd(
    ctx: typer.Context,
    backend_module: list[str] | None = typer.Option(
        None, "--backend-module", help=BACKEND_MODULE_HELP
    ),
) -> None:
    """List build systems and whether a backend is available for each."""
    debug: bool = bool(ctx.obj.get("debug", False))
    from lingo_orchestrator.backends.registry import create_default_registry
    from lingo_orchestrator.package import BuildSystem

    try:
        registry = create_default_registry(extra_modules=backend_module)
    except OrchestratorError as exc:
        raise typer.Exit(code=_print_error(exc, debug))

    for kind in BuildSystem:
        status = "available" if registry.is_registered(kind) else "not implemented"
        typer.echo(f"{kind.value}: {status}")


if __name__ == "__main__":
    app()
