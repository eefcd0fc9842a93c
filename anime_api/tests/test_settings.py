"""Tests for settings validation."""
from datetime import timedelta

import pytest

from anime_api.config import TOP_AIRING_CACHE_KEY
from anime_api.settings import Settings


def make_settings(**overrides) -> Settings:
    """Settings built only from explicit values, ignoring any .env file."""
    return Settings(_env_file=None, **overrides)


class TestSettings:
    """Tests for Pydantic settings validation."""

    def test_pipeline_defaults(self):
        """Defaults match the documented pipeline constants."""
        s = make_settings()
        assert s.top_airing_cache_ttl_seconds == 7200
        assert s.trailer_lookup_delay == 0.2
        assert s.trailer_lookup_timeout == 5.0
        assert s.top_airing_limit == 5

    def test_youtube_key_unset_disables_search(self):
        s = make_settings(youtube_api_key=None)
        assert s.youtube_search_enabled is False

    def test_blank_youtube_key_is_unset(self):
        """An empty key from the environment does not enable search."""
        s = make_settings(youtube_api_key="   ")
        assert s.youtube_api_key is None
        assert s.youtube_search_enabled is False

    def test_youtube_key_enables_search(self):
        s = make_settings(youtube_api_key="abc123")
        assert s.youtube_search_enabled is True

    def test_allowed_origins_from_string(self):
        """Parses comma-separated origins string."""
        s = make_settings(allowed_origins="http://localhost:3000, http://localhost:8080")
        origins = s.get_allowed_origins()
        assert origins == ["http://localhost:3000", "http://localhost:8080"]

    def test_allowed_origins_from_json_string(self):
        """Parses JSON array string for origins."""
        s = make_settings(allowed_origins='["http://localhost:3000", "https://example.com"]')
        origins = s.get_allowed_origins()
        assert "http://localhost:3000" in origins
        assert "https://example.com" in origins

    def test_log_level_validation(self):
        """Log level must be valid."""
        with pytest.raises(Exception):
            make_settings(log_level="INVALID")

    def test_log_level_case_insensitive(self):
        """Log level is case-insensitive."""
        s = make_settings(log_level="debug")
        assert s.log_level == "DEBUG"

    def test_ttl_must_be_positive(self):
        with pytest.raises(Exception):
            make_settings(top_airing_cache_ttl_seconds=0)

    def test_pipeline_log_dir_resolved(self):
        """Log dir is resolved to absolute path."""
        s = make_settings(pipeline_log_dir="./logs")
        assert s.pipeline_log_dir.is_absolute()

    def test_empty_pipeline_log_dir_disables_logging(self):
        s = make_settings(pipeline_log_dir="")
        assert s.pipeline_log_dir is None

    def test_pipeline_config(self):
        """Pipeline config carries the tunables as an immutable value."""
        s = make_settings(
            top_airing_cache_ttl_seconds=60,
            trailer_lookup_delay=0.5,
            top_airing_limit=3,
            seasonal_page_size=10,
        )
        config = s.pipeline_config()
        assert config.cache_ttl == timedelta(seconds=60)
        assert config.trailer_lookup_delay == 0.5
        assert config.top_n == 3
        assert config.seasonal_page_size == 10
        assert config.cache_key == TOP_AIRING_CACHE_KEY

        with pytest.raises(Exception):
            config.top_n = 10
