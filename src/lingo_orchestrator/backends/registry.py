"""Backend registry and discovery helpers."""

from __future__ import annotations

import importlib
import importlib.util
from collections.abc import Iterable
from pathlib import Path
from types import ModuleType

from lingo_orchestrator.application.ports import BatchBackend
from lingo_orchestrator.backends.cmake import CmakeBackend
from lingo_orchestrator.backends.lfc import LfcBackend
from lingo_orchestrator.errors import BackendError, BackendNotImplementedError
from lingo_orchestrator.infrastructure.process import CommandRunner
from lingo_orchestrator.package import BuildSystem


def _as_kind(kind: BuildSystem | str) -> BuildSystem:
    try:
        return BuildSystem(kind)
    except ValueError as exc:
        known = ", ".join(member.value for member in BuildSystem)
        raise BackendError(f"Unknown build system '{kind}'. Known: {known}") from exc


class BackendRegistry:
    """Static mapping from build-system kind to backend."""

    def __init__(self) -> None:
        self._backends: dict[BuildSystem, BatchBackend] = {}

    def register(self, kind: BuildSystem | str, backend: BatchBackend) -> None:
        """Register ``backend`` for ``kind``, replacing any previous one.

        Parameters
        ----------
        kind : BuildSystem | str
            Build-system kind handled by the backend.
        backend : BatchBackend
            Object exposing ``execute_command(command)``.

        Raises
        ------
        BackendError
            If ``kind`` is unknown or ``backend`` lacks ``execute_command``.
        """
        resolved = _as_kind(kind)
        if not isinstance(backend, BatchBackend):
            raise BackendError(
                f"Backend for '{resolved.value}' must define execute_command(command)."
            )
        self._backends[resolved] = backend

    def kinds(self) -> list[BuildSystem]:
        """Return registered kinds sorted by name."""
        return sorted(self._backends, key=lambda kind: kind.value)

    def is_registered(self, kind: BuildSystem) -> bool:
        return kind in self._backends

    def get(self, kind: BuildSystem) -> BatchBackend:
        """Get backend by kind.

        Raises
        ------
        BackendNotImplementedError
            If no backend is registered for ``kind``.
        """
        try:
            return self._backends[kind]
        except KeyError as exc:
            available = ", ".join(k.value for k in self.kinds()) or "<none>"
            raise BackendNotImplementedError(
                f"No backend is implemented for build system '{kind.value}'. "
                f"Available backends: {available}"
            ) from exc

    def load_module(self, module_or_path: str) -> None:
        """Load backend providers from module name or file path.

        .. warning::
            This executes code from the specified module. Only load backends
            from trusted sources.
        """
        module = _import_module_or_path(module_or_path)
        _register_from_module(module, self)


def _import_module_or_path(module_or_path: str) -> ModuleType:
    """Import module by import path or filesystem path.

    Parameters
    ----------
    module_or_path : str
        Python module path or local file path.

    Returns
    -------
    ModuleType
        Imported module object.

    Raises
    ------
    BackendError
        If import cannot be completed.
    """
    candidate = Path(module_or_path)
    if candidate.exists():
        spec = importlib.util.spec_from_file_location(candidate.stem, candidate)
        if spec is None or spec.loader is None:
            raise BackendError(f"Unable to load backend module from {candidate}.")
        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)
        return module

    try:
        return importlib.import_module(module_or_path)
    except Exception as exc:
        raise BackendError(
            f"Unable to import backend module '{module_or_path}': {exc}"
        ) from exc


def _register_from_module(module: ModuleType, registry: BackendRegistry) -> None:
    """Register backends exposed by ``module``.

    Supported contracts, in order: ``register_backends(registry)``, a
    ``BACKENDS`` mapping of kind to backend, or a ``BACKEND`` object carrying
    a ``kind`` attribute.
    """
    if hasattr(module, "register_backends"):
        module.register_backends(registry)
        return

    backends_obj = getattr(module, "BACKENDS", None)
    if backends_obj is not None:
        for kind, backend in dict(backends_obj).items():
            registry.register(kind, backend)
        return

    backend_obj = getattr(module, "BACKEND", None)
    if backend_obj is not None:
        kind = getattr(backend_obj, "kind", None)
        if kind is None:
            raise BackendError("BACKEND object must define a 'kind' attribute.")
        registry.register(kind, backend_obj)
        return

    raise BackendError(
        "Backend module must expose register_backends(registry), BACKENDS, or BACKEND."
    )


def create_default_registry(
    extra_modules: Iterable[str] | None = None,
    *,
    runner: CommandRunner | None = None,
) -> BackendRegistry:
    """Create the default backend registry.

    ``cargo`` is left unregistered; dispatching it fails the whole batch.

    Parameters
    ----------
    extra_modules : Iterable[str] | None, optional
        Additional backend modules to load after the built-ins.
    runner : CommandRunner | None, optional
        Process runner handed to the built-in backends.

    Returns
    -------
    BackendRegistry
        Registry with built-in and external backends.
    """
    registry = BackendRegistry()
    registry.register(BuildSystem.LFC, LfcBackend(runner=runner))
    registry.register(BuildSystem.CMAKE, CmakeBackend(runner=runner))
    for module in extra_modules or []:
        registry.load_module(module)
    return registry
