"""Artifact removal helpers."""

from __future__ import annotations

import logging
import shutil
from collections.abc import Iterable
from pathlib import Path

from lingo_orchestrator.errors import BuildError

logger = logging.getLogger(__name__)


def remove_artifacts(root: Path, names: Iterable[str]) -> list[Path]:
    """Delete artifact directories under ``root``.

    Missing entries are skipped. Returns the paths actually removed.

    Raises
    ------
    BuildError
        If an existing entry cannot be removed.
    """
    removed: list[Path] = []
    for name in names:
        target = root / name
        if not target.exists() and not target.is_symlink():
            continue
        try:
            if target.is_dir() and not target.is_symlink():
                shutil.rmtree(target)
            else:
                target.unlink()
        except OSError as exc:
            raise BuildError(f"could not remove {target}: {exc}") from exc
        removed.append(target)
    logger.info("removed %d artifact path(s) in %s", len(removed), root)
    return removed
