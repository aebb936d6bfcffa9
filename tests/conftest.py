"""Shared pytest configuration and marker assignment."""

from __future__ import annotations

import shutil
from pathlib import Path

import pytest

CLI_ENTRYPOINT = "lingo"


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Attach suite markers based on test file path.

    End-to-end tests drive the installed ``lingo`` script and are skipped
    when it is not on ``PATH``.
    """
    del config
    missing_cli = shutil.which(CLI_ENTRYPOINT) is None
    for item in items:
        parts = set(Path(str(item.fspath)).parts)
        if "e2e_tests" in parts:
            item.add_marker(pytest.mark.e2e)
            if missing_cli:
                item.add_marker(
                    pytest.mark.skip(reason=f"'{CLI_ENTRYPOINT}' is not installed")
                )
        elif "integration_tests" in parts:
            item.add_marker(pytest.mark.integration)
        elif "unit_tests" in parts:
            item.add_marker(pytest.mark.unit)
