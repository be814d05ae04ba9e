"""Unit tests for AccessPolicy and settings."""

from datetime import timedelta

from agrigov.application.policy import AccessPolicy
from agrigov.config import Settings
from agrigov.domain.value_objects import GrantWindowMode


def test_defaults_match_settings_defaults() -> None:
    assert AccessPolicy.from_settings(Settings(_env_file=None)) == AccessPolicy()


def test_from_settings() -> None:
    settings = Settings(
        _env_file=None,
        standard_review_hours=48,
        emergency_review_hours=1,
        grant_window_mode="fixed",
        grant_window_hours=8,
        stale_after_days=30,
        excessive_factor=2.0,
    )
    policy = AccessPolicy.from_settings(settings)
    assert policy.review_period(emergency=False) == timedelta(hours=48)
    assert policy.review_period(emergency=True) == timedelta(hours=1)
    assert policy.grant_window_mode is GrantWindowMode.FIXED
    assert policy.grant_window == timedelta(hours=8)
    assert policy.stale_after == timedelta(days=30)
    assert policy.excessive_factor == 2.0


def test_settings_from_environment(monkeypatch) -> None:
    monkeypatch.setenv("EMERGENCY_REVIEW_HOURS", "2")
    monkeypatch.setenv("GRANT_WINDOW_MODE", "fixed")
    settings = Settings(_env_file=None)
    assert settings.emergency_review_hours == 2
    assert settings.grant_window_mode == "fixed"
