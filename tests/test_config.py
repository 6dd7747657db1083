"""Tests for Settings loading."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from cellsim.config import Settings


def test_settings_defaults(monkeypatch: pytest.MonkeyPatch):
    """Defaults match the classic simulation parameters."""
    monkeypatch.chdir("/")
    settings = Settings()

    assert settings.metabolic_rate == 1.2
    assert settings.footprint_size == 5
    assert settings.random_schedules is False
    assert settings.seed is None


def test_settings_env_override(monkeypatch: pytest.MonkeyPatch):
    """CELLSIM_ environment variables override defaults."""
    monkeypatch.setenv("CELLSIM_INITIAL_POPULATION", "42")
    monkeypatch.setenv("CELLSIM_SEED", "7")
    monkeypatch.setenv("CELLSIM_RANDOM_SCHEDULES", "true")

    settings = Settings()

    assert settings.initial_population == 42
    assert settings.seed == 7
    assert settings.random_schedules is True


def test_settings_validation():
    """Non-positive metabolic rates are rejected."""
    with pytest.raises(ValidationError):
        Settings(metabolic_rate=0)
    with pytest.raises(ValidationError):
        Settings(footprint_size=0)
