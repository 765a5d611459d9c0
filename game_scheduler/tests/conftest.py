"""Shared fixtures for scheduler tests."""

import pytest

from game_scheduler.schemas import RunConfig


@pytest.fixture
def run_config() -> RunConfig:
    """Local-mode run config for a fixed date."""
    return RunConfig(date="2025-01-15", teams=[25], local_mode=True)


@pytest.fixture
def host_config() -> RunConfig:
    return RunConfig(date="2025-01-15", teams=[], all_teams=True, host_url="https://tracker.example.com/track")


@pytest.fixture
def test_mode_config() -> RunConfig:
    return RunConfig(date="2025-01-15", teams=[25], local_mode=True, test_mode=True)
