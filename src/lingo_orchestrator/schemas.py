"""Pydantic schemas for runtime validation of manifests and command inputs."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from lingo_orchestrator.types import BuildSystemName, ProfileName, TargetName


class PackageInfo(BaseModel):
    """Validated ``[package]`` table of a ``Lingo.toml`` manifest."""

    model_config = ConfigDict(extra="ignore")

    name: str = Field(min_length=1)
    version: str = "0.1.0"


class AppManifest(BaseModel):
    """Validated ``[[app]]`` entry of a ``Lingo.toml`` manifest."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    name: str
    target: TargetName
    main: Path
    build_system: BuildSystemName | None = Field(default=None, alias="build-system")
    output: Path = Path(".")

    @field_validator("name")
    @classmethod
    def _validate_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("app name cannot be empty.")
        return value

    @field_validator("main")
    @classmethod
    def _validate_main(cls, value: Path) -> Path:
        if value.suffix != ".lf":
            raise ValueError(f"main reactor must be a .lf file, got '{value}'.")
        return value


class PackageManifest(BaseModel):
    """Validated ``Lingo.toml`` document."""

    model_config = ConfigDict(extra="ignore")

    package: PackageInfo
    app: list[AppManifest] = Field(default_factory=list)

    @model_validator(mode="after")
    def _unique_app_names(self) -> PackageManifest:
        seen: set[str] = set()
        for entry in self.app:
            if entry.name in seen:
                raise ValueError(f"duplicate app name '{entry.name}'.")
            seen.add(entry.name)
        return self


class BuildCommandConfig(BaseModel):
    """Validated input for a build command."""

    model_config = ConfigDict(extra="forbid")

    profile: ProfileName = "debug"
    compile_target_code: bool = True
    lfc_exec_path: Path = Path("lfc")

    @field_validator("lfc_exec_path")
    @classmethod
    def _validate_exec_path(cls, value: Path) -> Path:
        if not str(value).strip() or str(value) == ".":
            raise ValueError("lfc executable path cannot be empty.")
        return value


class ExecutionConfig(BaseModel):
    """Validated worker-pool settings."""

    model_config = ConfigDict(extra="forbid")

    max_workers: int | None = Field(default=None, ge=1)
    sequential: bool = False
