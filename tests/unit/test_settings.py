"""Unit tests for configuration and logging setup."""

import pytest
from loguru import logger
from pydantic import ValidationError

from config.settings import Settings
from lineup_advisor.logging_config import configure_logging


class TestSettings:
    def test_defaults(self, settings):
        assert settings.recent_window_weeks == 3
        assert settings.volatility_clip == 2.0
        assert settings.waiver_grace_week == 2
        assert settings.upsert_batch_size == 100
        assert settings.score_precision == 3

    def test_environment_override(self, settings, monkeypatch):
        monkeypatch.setenv("RECENT_WINDOW_WEEKS", "4")
        monkeypatch.setenv("WAIVER_GRACE_WEEK", "3")

        overridden = Settings(_env_file=None)

        assert overridden.recent_window_weeks == 4
        assert overridden.waiver_grace_week == 3

    def test_non_positive_clip_rejected(self, settings, monkeypatch):
        monkeypatch.setenv("VOLATILITY_CLIP", "0")
        with pytest.raises(ValidationError):
            Settings(_env_file=None)


class TestConfigureLogging:
    def test_file_sink_added(self, settings):
        handler_id = configure_logging(settings)
        try:
            assert isinstance(handler_id, int)
            assert settings.log_file.parent.exists()
        finally:
            logger.remove(handler_id)
