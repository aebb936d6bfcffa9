"""Application model and ``Lingo.toml`` manifest loading."""

from __future__ import annotations

import tomllib
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from pydantic import ValidationError

from lingo_orchestrator.errors import ManifestError
from lingo_orchestrator.schemas import AppManifest, PackageManifest

MANIFEST_NAME = "Lingo.toml"


class BuildSystem(str, Enum):
    """Build-system kinds an application can be processed by."""

    LFC = "lfc"
    CMAKE = "cmake"
    CARGO = "cargo"


class TargetLanguage(str, Enum):
    """Target language of the generated code."""

    C = "C"
    CPP = "Cpp"
    RUST = "Rust"
    TYPESCRIPT = "TypeScript"
    PYTHON = "Python"


_DEFAULT_BUILD_SYSTEMS: dict[TargetLanguage, BuildSystem] = {
    TargetLanguage.C: BuildSystem.LFC,
    TargetLanguage.CPP: BuildSystem.CMAKE,
    TargetLanguage.RUST: BuildSystem.CARGO,
    TargetLanguage.TYPESCRIPT: BuildSystem.LFC,
    TargetLanguage.PYTHON: BuildSystem.LFC,
}


def default_build_system(target: TargetLanguage) -> BuildSystem:
    """Return the build system used for ``target`` when none is configured."""
    return _DEFAULT_BUILD_SYSTEMS[target]


@dataclass(frozen=True)
class App:
    """One buildable unit.

    Parameters
    ----------
    name : str
        Unique application name, used as the report sort key.
    main_reactor : str
        Name of the entry reactor; its source is ``src/<main_reactor>.lf``.
    build_system : BuildSystem
        Kind of backend that processes this application.
    root : Path, default=Path(".")
        Project directory containing ``src/``.
    output_root : Path | None, default=None
        Directory receiving build artifacts. Defaults to ``root``.
    target : TargetLanguage | None, default=None
        Target language declared in the manifest, if any.
    """

    name: str
    main_reactor: str
    build_system: BuildSystem
    root: Path = Path(".")
    output_root: Path | None = None
    target: TargetLanguage | None = None

    @property
    def output_dir(self) -> Path:
        return self.output_root if self.output_root is not None else self.root

    @property
    def source_file(self) -> Path:
        return self.root / "src" / f"{self.main_reactor}.lf"


@dataclass(frozen=True)
class Package:
    """Applications declared by one manifest."""

    name: str
    version: str
    root: Path
    apps: tuple[App, ...]

    def select(self, names: Iterable[str] | None = None) -> list[App]:
        """Return the named applications in manifest order.

        Parameters
        ----------
        names : Iterable[str] | None, optional
            Application names to keep. ``None`` or empty selects all.

        Returns
        -------
        list[App]
            Selected applications.

        Raises
        ------
        ManifestError
            If a requested name is not declared in the manifest.
        """
        wanted = set(names or ())
        if not wanted:
            return list(self.apps)
        known = {app.name for app in self.apps}
        unknown = sorted(wanted - known)
        if unknown:
            raise ManifestError(
                f"Unknown app(s): {', '.join(unknown)}. "
                f"Declared apps: {', '.join(sorted(known)) or '<none>'}"
            )
        return [app for app in self.apps if app.name in wanted]


def find_manifest(start: Path) -> Path:
    """Walk up from ``start`` to the first directory holding ``Lingo.toml``."""
    start = start.resolve()
    for directory in (start, *start.parents):
        candidate = directory / MANIFEST_NAME
        if candidate.is_file():
            return candidate
    raise ManifestError(f"No {MANIFEST_NAME} found in {start} or any parent directory.")


def _app_from_manifest(entry: AppManifest, root: Path) -> App:
    target = TargetLanguage(entry.target)
    if entry.build_system is not None:
        build_system = BuildSystem(entry.build_system)
    else:
        build_system = default_build_system(target)
    return App(
        name=entry.name,
        main_reactor=entry.main.stem,
        build_system=build_system,
        root=root,
        output_root=root / entry.output,
        target=target,
    )


def load_package(manifest_path: Path | None = None) -> Package:
    """Load and validate a ``Lingo.toml`` manifest.

    Parameters
    ----------
    manifest_path : Path | None, optional
        Manifest file. When omitted, it is searched from the working directory.

    Returns
    -------
    Package
        Package with one ``App`` per ``[[app]]`` entry.

    Raises
    ------
    ManifestError
        If the manifest cannot be found, parsed or validated.
    """
    path = (manifest_path or find_manifest(Path.cwd())).resolve()
    try:
        raw = tomllib.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise ManifestError(f"Manifest not found: {path}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ManifestError(f"Invalid TOML in {path}: {exc}") from exc

    try:
        manifest = PackageManifest.model_validate(raw)
    except ValidationError as exc:
        raise ManifestError(f"Invalid manifest {path}: {exc}") from exc

    root = path.parent
    return Package(
        name=manifest.package.name,
        version=manifest.package.version,
        root=root,
        apps=tuple(_app_from_manifest(entry, root) for entry in manifest.app),
    )
