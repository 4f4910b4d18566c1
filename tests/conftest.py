# tests/conftest.py
import pytest


MARKERS_BY_DIR = {
    "/unit/": "unit",
    "/integration/": "integration",
    "/e2e/": "e2e",
}


def pytest_collection_modifyitems(items):
    """Mark tests by the directory they live in."""
    for item in items:
        path = str(item.fspath)
        for directory, marker in MARKERS_BY_DIR.items():
            if directory in path:
                item.add_marker(getattr(pytest.mark, marker))
