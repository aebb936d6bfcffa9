"""Unit tests for backend registry resolution and module loading helpers."""

from __future__ import annotations

import types
from pathlib import Path

import pytest

from lingo_orchestrator.application.commands import BatchCommand
from lingo_orchestrator.application.ports import Backend
from lingo_orchestrator.application.results import BatchBuildResults
from lingo_orchestrator.backends.base import BackendBase
from lingo_orchestrator.backends.cmake import CmakeBackend
from lingo_orchestrator.backends.lfc import LfcBackend
from lingo_orchestrator.backends.registry import (
    BackendRegistry,
    _import_module_or_path,
    _register_from_module,
    create_default_registry,
)
from lingo_orchestrator.errors import BackendError, BackendNotImplementedError
from lingo_orchestrator.package import BuildSystem


class _Backend:
    """Simple batch backend test double."""

    def __init__(self, kind: BuildSystem = BuildSystem.CARGO) -> None:
        self.kind = kind

    def execute_command(self, command: BatchCommand) -> BatchBuildResults:
        return command.new_results()


def test_register_rejects_unknown_kind() -> None:
    """Reject kinds outside the BuildSystem enumeration."""
    registry = BackendRegistry()
    with pytest.raises(BackendError, match="Unknown build system 'bazel'"):
        registry.register("bazel", _Backend())


def test_register_requires_execute_command() -> None:
    """Reject objects that cannot run batch commands."""
    registry = BackendRegistry()
    with pytest.raises(BackendError, match="execute_command"):
        registry.register(BuildSystem.LFC, object())  # type: ignore[arg-type]


def test_get_unregistered_kind_raises() -> None:
    """Raise a capability-missing error for kinds without backend."""
    registry = BackendRegistry()
    registry.register("lfc", _Backend())
    with pytest.raises(BackendNotImplementedError, match="'cargo'.*Available backends: lfc"):
        registry.get(BuildSystem.CARGO)


def test_register_replaces_previous_backend() -> None:
    """Let later registrations override built-ins."""
    registry = BackendRegistry()
    first, second = _Backend(), _Backend()
    registry.register(BuildSystem.LFC, first)
    registry.register("lfc", second)
    assert registry.get(BuildSystem.LFC) is second
    assert registry.kinds() == [BuildSystem.LFC]


def test_default_registry_leaves_cargo_unimplemented() -> None:
    """Register lfc and cmake backends only."""
    registry = create_default_registry()
    assert registry.kinds() == [BuildSystem.CMAKE, BuildSystem.LFC]
    assert isinstance(registry.get(BuildSystem.LFC), LfcBackend)
    assert isinstance(registry.get(BuildSystem.CMAKE), CmakeBackend)
    assert not registry.is_registered(BuildSystem.CARGO)


def test_builtin_backends_implement_backend_contract() -> None:
    """Derive the built-in backends from the per-app Backend protocol."""
    for backend_cls in (LfcBackend, CmakeBackend):
        assert Backend in backend_cls.__mro__
        assert issubclass(backend_cls, BackendBase)


def test_import_module_by_path_and_register_backend(tmp_path: Path) -> None:
    """Load a backend module from file path and register its BACKEND."""
    backend_file = tmp_path / "cargo_backend.py"
    backend_file.write_text(
        "from lingo_orchestrator.package import BuildSystem\n"
        "class B:\n"
        "    kind = BuildSystem.CARGO\n"
        "    def execute_command(self, command):\n"
        "        return command.new_results()\n"
        "BACKEND = B()\n",
        encoding="utf-8",
    )
    module = _import_module_or_path(str(backend_file))
    registry = BackendRegistry()
    _register_from_module(module, registry)
    assert registry.is_registered(BuildSystem.CARGO)


def test_import_module_invalid_path_spec_raises(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    """Raise BackendError when file path exists but import spec is invalid."""
    backend_file = tmp_path / "backend_mod.py"
    backend_file.write_text("x = 1\n", encoding="utf-8")
    monkeypatch.setattr(
        "lingo_orchestrator.backends.registry.importlib.util.spec_from_file_location",
        lambda *_args, **_kwargs: None,
    )
    with pytest.raises(BackendError, match="Unable to load backend module"):
        _import_module_or_path(str(backend_file))


def test_import_module_by_name_failure_raises() -> None:
    """Raise BackendError when import path cannot be imported."""
    with pytest.raises(BackendError, match="Unable to import backend module"):
        _import_module_or_path("module.that.does.not.exist")


def test_register_from_module_uses_register_backends() -> None:
    """Prefer register_backends(registry) hook when available."""
    registry = BackendRegistry()
    module = types.SimpleNamespace(
        register_backends=lambda r: r.register(BuildSystem.CARGO, _Backend())
    )
    _register_from_module(module, registry)  # type: ignore[arg-type]
    assert registry.is_registered(BuildSystem.CARGO)


def test_register_from_module_with_backends_mapping() -> None:
    """Register every entry of a BACKENDS mapping."""
    registry = BackendRegistry()
    module = types.SimpleNamespace(BACKENDS={"lfc": _Backend(), "cargo": _Backend()})
    _register_from_module(module, registry)  # type: ignore[arg-type]
    assert registry.kinds() == [BuildSystem.CARGO, BuildSystem.LFC]


def test_register_from_module_backend_requires_kind() -> None:
    """Reject a BACKEND object that does not declare its kind."""
    backend = _Backend()
    del backend.kind
    with pytest.raises(BackendError, match="'kind' attribute"):
        _register_from_module(types.SimpleNamespace(BACKEND=backend), BackendRegistry())  # type: ignore[arg-type]


def test_register_from_module_requires_contract() -> None:
    """Raise when a module exposes no supported registration contract."""
    with pytest.raises(BackendError, match="must expose"):
        _register_from_module(types.SimpleNamespace(), BackendRegistry())  # type: ignore[arg-type]


def test_create_default_registry_loads_extra_modules(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """Load extra backend modules passed into create_default_registry."""
    loaded: list[str] = []

    def fake_load_module(self: BackendRegistry, module: str) -> None:
        loaded.append(module)

    monkeypatch.setattr(BackendRegistry, "load_module", fake_load_module)
    registry = create_default_registry(extra_modules=["a.b", "c.d"])
    assert registry.is_registered(BuildSystem.LFC)
    assert loaded == ["a.b", "c.d"]
