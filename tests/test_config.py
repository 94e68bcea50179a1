"""Tests for application settings."""

import pytest
from pydantic import ValidationError

from pathrace.config import Settings


def test_defaults():
    """Test the built-in race defaults."""
    settings = Settings(_env_file=None)
    assert settings.default_grid_size == 75
    assert settings.default_obstacle_probability == 0.2
    assert settings.steps_per_tick == 3


def test_reads_prefixed_environment(monkeypatch):
    """Test that settings come from PATHRACE_ variables."""
    monkeypatch.setenv("PATHRACE_DEFAULT_OBSTACLE_PROBABILITY", "0.35")
    settings = Settings(_env_file=None)
    assert settings.default_obstacle_probability == 0.35


def test_invalid_probability_names_the_environment_variable(monkeypatch):
    """The error message names the variable a user would actually set."""
    monkeypatch.setenv("PATHRACE_DEFAULT_OBSTACLE_PROBABILITY", "1.5")
    with pytest.raises(ValidationError, match="PATHRACE_DEFAULT_OBSTACLE_PROBABILITY"):
        Settings(_env_file=None)
