"""Typed option objects shared across batch commands."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class BuildProfile(str, Enum):
    """Build profile, mostly relevant for target compilation."""

    RELEASE = "Release"
    DEBUG = "Debug"


@dataclass(frozen=True)
class BuildCommandOptions:
    """Build configuration shared by every app of a batch."""

    profile: BuildProfile = BuildProfile.DEBUG
    compile_target_code: bool = True
    lfc_exec_path: Path = Path("lfc")


@dataclass(frozen=True)
class ExecutionOptions:
    """Worker-pool settings for a batch.

    ``sequential`` forces every stage and every partition to run in order on
    the calling thread. Reports are identical either way.
    """

    max_workers: int | None = None
    sequential: bool = False
