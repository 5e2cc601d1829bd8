"""Shared fixtures for the reading-progress test suite."""

import pytest

from reading_progress.config import ProgressConfig
from reading_progress.ingestion.loader import BookLoader


@pytest.fixture
def loader() -> BookLoader:
    return BookLoader()


@pytest.fixture
def small_pages() -> ProgressConfig:
    """Four characters per page, two per minute: easy to count by hand."""
    return ProgressConfig(chars_per_page=4, chars_per_minute=2)
