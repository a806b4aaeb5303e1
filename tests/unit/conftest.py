"""Shared fixtures for unit tests.

These fixtures provide:
- Tables built from literal rows
- The storefront fixture classes on a classpath
- Central configuration isolated from the developer's environment
"""

from collections.abc import Iterator
from pathlib import Path

import pytest

from slim_autocomplete.core.app_config import AppConfig, clear_config_cache
from slim_autocomplete.core.config import get_settings
from slim_autocomplete.grid.table import Table

FIXTURES_DIR = Path(__file__).resolve().parent.parent / "fixtures"

# ---------------------------------------------------------------------------
# Tables
# ---------------------------------------------------------------------------


@pytest.fixture
def positional_scenario() -> Table:
    """Scenario with alternating words and parameters."""
    return Table.from_rows([
        ["scenario", "login as", "user", "with password", "password"],
        ["open", "login page"],
        ["enter", "@user", "as", "username"],
    ])


@pytest.fixture
def inline_scenario() -> Table:
    """Scenario using ``_`` markers with a parameter list."""
    return Table.from_rows([
        ["scenario", "login as _ with password _", "user, password"],
        ["enter", "@user", "as", "username"],
    ])


# ---------------------------------------------------------------------------
# Fixture classes
# ---------------------------------------------------------------------------


@pytest.fixture
def fixtures_dir() -> Path:
    """Directory holding the ``storefront`` fixture package."""
    return FIXTURES_DIR


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


@pytest.fixture
def app_config(fixtures_dir: Path) -> AppConfig:
    """Configuration with the fixture classes on the classpath and no documentation."""
    return AppConfig.model_validate({
        "classpath": [str(fixtures_dir)],
        "documentation": {"enabled": False},
    })


@pytest.fixture
def clean_config() -> Iterator[None]:
    """Drop cached settings and configuration before and after a test."""
    get_settings.cache_clear()
    clear_config_cache()
    yield
    get_settings.cache_clear()
    clear_config_cache()
