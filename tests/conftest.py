"""Shared test fixtures."""

from collections.abc import Callable
from pathlib import Path

import pytest

FIXTURE_DIR = Path(__file__).parent / "scrapers" / "fixtures" / "showtimes"


@pytest.fixture
def load_page() -> Callable[[str], str]:
    """Load a saved showtimes results page by name."""

    def _load(name: str) -> str:
        return (FIXTURE_DIR / f"{name}.html").read_text()

    return _load
