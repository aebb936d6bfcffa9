"""Exception hierarchy for batch orchestration."""

from __future__ import annotations


class OrchestratorError(Exception):
    """Base error for all orchestrator failures."""

    exit_code: int = 1


class BuildError(OrchestratorError):
    """A build, update or clean step failed for a single application."""


class ProcessError(BuildError):
    """External tool failed to start, timed out, or exited non-zero."""

    def __init__(
        self,
        message: str,
        *,
        returncode: int | None = None,
        stderr: str = "",
    ) -> None:
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr


class BackendError(OrchestratorError):
    """Backend registry was misused or a backend module is invalid."""

    exit_code = 2


class BackendNotImplementedError(OrchestratorError):
    """A build-system kind was requested that has no registered backend."""

    exit_code = 3


class UnknownBuildSystemError(OrchestratorError):
    """An application does not resolve to a known build-system kind."""

    exit_code = 3


class ManifestError(OrchestratorError):
    """Project manifest is missing or invalid."""

    exit_code = 2


class ConfigurationError(OrchestratorError):
    """Command options failed validation."""

    exit_code = 2
