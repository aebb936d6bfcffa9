"""Shared type aliases for orchestration modules."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from os import PathLike
from typing import Literal

type BuildSystemName = Literal["lfc", "cmake", "cargo"]
type TargetName = Literal["C", "Cpp", "Rust", "TypeScript", "Python"]
type ProfileName = Literal["release", "debug"]

type CommandArg = str | PathLike[str]
type CommandLine = Sequence[CommandArg]
type EnvMap = Mapping[str, str]
