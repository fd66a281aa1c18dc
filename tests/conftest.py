"""Shared fixtures for tests."""

from collections.abc import Callable
from pathlib import Path

import pytest

from ngstrip.core.ast import ParsedSource, parse_source

_REPO_ROOT = Path(__file__).parent.parent


# ---------------------------------------------------------------------------
# Auto-marker: tag tests as "unit" or "integration" based on directory
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        test_path = Path(str(item.fspath))
        rel = test_path.relative_to(_REPO_ROOT / "tests")
        parts = rel.parts
        if parts and parts[0] == "integration":
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)


# ---------------------------------------------------------------------------
# Shared unit-test fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the directory holding sample compiled scripts."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def parse_js() -> Callable[[str], ParsedSource]:
    """Return a callable that parses JavaScript text."""

    def _parse(text: str) -> ParsedSource:
        return parse_source(text, "javascript")

    return _parse
