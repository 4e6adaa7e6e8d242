"""
Tests for settings loading.
"""

from pathlib import Path

import pytest

from talentmatch.config import Settings, load_settings


class TestLoadSettings:
    """Test environment-driven configuration."""

    def test_defaults(self):
        """An empty environment gives the defaults."""
        assert load_settings({}) == Settings()

    def test_overrides(self):
        settings = load_settings({
            "TALENTMATCH_DB": "/tmp/x.db",
            "TALENTMATCH_MIN_THRESHOLD": "0.5",
            "TALENTMATCH_LIMIT": "25",
            "TALENTMATCH_MAX_WORKERS": "2",
            "TALENTMATCH_ORG_KEY_WORDS": "2",
            "TALENTMATCH_SIMILARITY_FLOOR": "70",
            "TALENTMATCH_LOG_LEVEL": "debug",
            "TALENTMATCH_LOG_DIR": "/tmp/logs",
        })
        assert settings.db_path == Path("/tmp/x.db")
        assert settings.min_threshold == 0.5
        assert settings.limit == 25
        assert settings.max_workers == 2
        assert settings.org_key_words == 2
        assert settings.similarity_floor == 70
        assert settings.log_level == "DEBUG"
        assert settings.log_dir == Path("/tmp/logs")

    def test_blank_values_use_defaults(self):
        assert load_settings({"TALENTMATCH_LIMIT": "  "}).limit == 10

    @pytest.mark.parametrize("key,value", [
        ("TALENTMATCH_MIN_THRESHOLD", "1.5"),
        ("TALENTMATCH_MIN_THRESHOLD", "high"),
        ("TALENTMATCH_LIMIT", "0"),
        ("TALENTMATCH_LIMIT", "ten"),
        ("TALENTMATCH_MAX_WORKERS", "-1"),
        ("TALENTMATCH_ORG_KEY_WORDS", "0"),
        ("TALENTMATCH_SIMILARITY_FLOOR", "101"),
        ("TALENTMATCH_LOG_LEVEL", "LOUD"),
    ])
    def test_invalid_values(self, key, value):
        with pytest.raises(ValueError):
            load_settings({key: value})

    def test_settings_are_frozen(self):
        settings = Settings()
        with pytest.raises(AttributeError):
            settings.limit = 3
