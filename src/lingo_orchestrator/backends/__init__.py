"""Build-system backends and their registry."""

from .base import BackendBase
from .cmake import CmakeBackend
from .lfc import LfcBackend
from .registry import BackendRegistry, create_default_registry

__all__ = [
    "BackendBase",
    "BackendRegistry",
    "CmakeBackend",
    "LfcBackend",
    "create_default_registry",
]
