"""Tests for Settings configuration helpers."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from mediaingest.config.settings import (
    DEFAULT_STATE_FILE,
    Environment,
    LogLevel,
    Settings,
    build_settings,
)


@pytest.fixture
def default_settings():
    """Provide default Settings for comparison."""
    return Settings()


class TestDefaults:
    """Default values match the documented retry and rate limit budgets."""

    def test_retry_defaults(self, default_settings):
        assert default_settings.local_max_retries == 3
        assert default_settings.network_max_retries == 5
        assert default_settings.transient_base_delay_ms == 1000
        assert default_settings.network_base_delay_ms == 2000

    def test_rate_limit_defaults(self, default_settings):
        assert default_settings.rate_limit_capacity == 100
        assert default_settings.rate_limit_per_second == pytest.approx(100 / 60)

    def test_environment_and_paths(self, default_settings):
        assert default_settings.environment == Environment.PRODUCTION
        assert default_settings.log_level == LogLevel.INFO
        assert default_settings.state_file == DEFAULT_STATE_FILE
        assert default_settings.network_mount_prefixes == ()

    def test_settings_are_frozen(self, default_settings):
        with pytest.raises(ValidationError):
            default_settings.local_max_retries = 10

    def test_negative_retries_rejected(self):
        with pytest.raises(ValidationError):
            Settings(local_max_retries=-1)


class TestBuildSettings:
    """Test our build_settings helper logic."""

    def test_filters_none_values(self, default_settings):
        """build_settings ignores None overrides."""
        settings = build_settings(
            state_file=None,
            log_level=LogLevel.DEBUG,
        )

        assert settings.state_file == default_settings.state_file
        assert settings.log_level == LogLevel.DEBUG

    def test_applies_all_overrides(self):
        """build_settings applies all non-None overrides."""
        settings = build_settings(
            state_file=Path("/tmp/queue.json"),
            log_level=LogLevel.ERROR,
            network_mount_prefixes=("/mnt/nas",),
        )

        assert settings.state_file == Path("/tmp/queue.json")
        assert settings.log_level == LogLevel.ERROR
        assert settings.network_mount_prefixes == ("/mnt/nas",)
