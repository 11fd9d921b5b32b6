"""Pytest marker auto-assignment by folder."""

from __future__ import annotations

from pathlib import Path

import pytest

from schemadesigner import logger

_FOLDER_MARKERS = ("unit", "integration", "end2end")


def _item_path(item: pytest.Item) -> Path | None:
    try:
        return Path(str(item.path)).resolve()
    except OSError:
        logger.warning("Could not resolve test path", extra={"test_name": item.name})
        return None


def pytest_collection_modifyitems(
    config: pytest.Config,
    items: list[pytest.Item],
) -> None:
    """Mark every test with the name of its top-level folder under tests/."""
    tests_root = (Path(config.rootpath) / "tests").resolve()

    for item in items:
        path = _item_path(item)
        if path is None or tests_root not in path.parents:
            continue
        folder = path.relative_to(tests_root).parts[0]
        if folder in _FOLDER_MARKERS:
            item.add_marker(getattr(pytest.mark, folder))
