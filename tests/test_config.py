"""
Tests for seeder configuration.

These tests verify that:
1. Default values are set correctly
2. Environment variables override defaults
"""

from pathlib import Path


class TestSettings:
    """Test the Settings configuration class."""

    def test_default_values(self, monkeypatch):
        """Settings should have sensible defaults when no env vars are set."""
        for name in ("ROOT_PATH", "FIXTURES_SUBDIR", "TABLES_SUBDIR", "STRICT", "DEBUG", "LOG_LEVEL"):
            monkeypatch.delenv(name, raising=False)

        from sqlseed.core.config import Settings

        settings = Settings(_env_file=None)

        assert settings.fixtures_dir == Path("test/fixtures")
        assert settings.tables_dir == Path("examples/sql")
        assert settings.file_encoding == "utf-8"
        assert settings.strict is True
        assert settings.debug is False
        assert settings.log_level == "INFO"

    def test_env_override(self, monkeypatch, tmp_path):
        """Environment variables should override default values."""
        monkeypatch.setenv("ROOT_PATH", str(tmp_path))
        monkeypatch.setenv("STRICT", "false")

        from sqlseed.core.config import Settings

        settings = Settings(_env_file=None)

        assert settings.fixtures_dir == tmp_path / "test" / "fixtures"
        assert settings.tables_dir == tmp_path / "examples" / "sql"
        assert settings.strict is False

    def test_seed_uses_settings(self, monkeypatch, tmp_path):
        """A Seed without explicit directories follows the configured root."""
        from sqlseed.core import config
        from sqlseed.seed import Seed

        monkeypatch.setattr(config.settings, "root_path", tmp_path)

        seed = Seed(engine=None, model="user")

        assert seed.fixtures_dir == tmp_path / "test" / "fixtures"
        assert seed.tables_dir == tmp_path / "examples" / "sql"


class TestCreateEngine:
    """Test the engine factory."""

    def test_explicit_url(self):
        from sqlalchemy.ext.asyncio import AsyncEngine

        from sqlseed.core.db import create_engine

        engine = create_engine("sqlite+aiosqlite:///seed.db")

        assert isinstance(engine, AsyncEngine)
        assert engine.url.drivername == "sqlite+aiosqlite"
        assert engine.echo is False

    def test_default_url_uses_settings(self, monkeypatch):
        from sqlseed.core import config
        from sqlseed.core.db import create_engine

        monkeypatch.setattr(config.settings, "database_url", "sqlite+aiosqlite:///other.db")

        assert create_engine().url.database == "other.db"
