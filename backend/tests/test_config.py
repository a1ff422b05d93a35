"""
Postboard Backend — Settings Tests
====================================

What:  Tests for Settings validation and derived properties.
"""

import pytest
from pydantic import ValidationError as SettingsValidationError

from app.config import Settings


class TestSettings:

    def test_log_level_normalized(self):
        assert Settings(log_level="debug").log_level == "DEBUG"

    def test_log_level_rejected(self):
        with pytest.raises(SettingsValidationError):
            Settings(log_level="chatty")

    def test_cors_origins_split(self):
        config = Settings(cors_origins="http://a.test, http://b.test")
        assert config.cors_origins_list == ["http://a.test", "http://b.test"]

    def test_async_database_url_accepted(self):
        Settings(database_url="postgresql+asyncpg://u:p@db:5432/postboard").validate_required_for_production()
        Settings(database_url="sqlite+aiosqlite:///./dev.db").validate_required_for_production()

    def test_sync_database_url_rejected(self):
        config = Settings(database_url="postgresql://u:p@db:5432/postboard")
        with pytest.raises(ValueError, match="async driver"):
            config.validate_required_for_production()

    def test_is_sqlite(self):
        assert Settings(database_url="sqlite+aiosqlite:///x.db").is_sqlite
        assert not Settings(database_url="postgresql+asyncpg://h/db").is_sqlite
