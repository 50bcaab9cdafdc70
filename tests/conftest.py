"""
NeighborGood - Pytest Configuration and Fixtures

Shared fixtures for all tests:
- Configuration fixtures
- Record and location factories
"""

import os
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import pytest

# Set test environment
os.environ["NG_ENVIRONMENT"] = "dev"

# =============================================================================
# Path Fixtures
# =============================================================================


@pytest.fixture
def project_root() -> Path:
    """Get the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def configs_dir(project_root: Path) -> Path:
    """Get the configs directory."""
    return project_root / "configs"


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture
def test_config() -> Any:
    """Get test configuration."""
    from neighborgood.shared.config import get_config, reload_config

    # Ensure fresh config for tests
    reload_config("dev")
    return get_config("dev")


# =============================================================================
# Data Factories
# =============================================================================


@pytest.fixture
def make_record() -> Callable[..., Any]:
    """Factory for IncidentRecord instances with sensible defaults."""
    from neighborgood.records.models import IncidentRecord

    def _make(
        year: str = "2024",
        location: str = "100 MAIN ST",
        offense: str = "Simple Assault",
        date_reported: str = "2024-03-01T10:15:00.000Z",
        location_type: str = "Residence/Home",
    ) -> IncidentRecord:
        return IncidentRecord(
            year=year,
            location=location,
            date_reported=date_reported,
            location_type_description=location_type,
            highest_nibrs_description=offense,
        )

    return _make


@pytest.fixture
def records_for_counts(make_record: Callable[..., Any]) -> Callable[[dict[str, int]], list]:
    """Build a record list from a {year: count} mapping."""

    def _build(counts: dict[str, int]) -> list:
        return [make_record(year=year) for year, n in counts.items() for _ in range(n)]

    return _build


@pytest.fixture
def sample_features() -> list[dict[str, Any]]:
    """Sample GeoJSON features from the reference location dataset."""
    return [
        {"properties": {"LOCATION": "100 MAIN ST", "CITY": "CHARLOTTE", "STATE": "NC"}},
        {"properties": {"LOCATION": "200 MAIN ST", "CITY": "CHARLOTTE", "STATE": "NC"}},
        {"properties": {"LOCATION": "100 MAIN ST", "CITY": "CHARLOTTE", "STATE": "NC"}},
        {"properties": {"LOCATION": "15 N TRYON ST", "CITY": "CHARLOTTE", "STATE": "NC"}},
        {"properties": {"LOCATION": "MAIN ST / ELM ST", "CITY": "CHARLOTTE", "STATE": "NC"}},
        {"properties": {"LOCATION": "300 ELM ST", "CITY": "CHARLOTTE"}},
        {"properties": None},
        {"geometry": {"type": "Point", "coordinates": [-80.84, 35.22]}},
    ]


# =============================================================================
# Cleanup Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def cleanup_env() -> Generator[None, None, None]:
    """Clean up environment variables after each test."""
    original_env = os.environ.copy()
    yield
    # Restore original environment
    os.environ.clear()
    os.environ.update(original_env)
