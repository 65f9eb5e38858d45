"""
Filadex configuration: environment loading

Run:
    pytest tests/test_config.py -v --tb=short
"""

import pytest

from core.config import Settings


class TestSettings:

    def test_environment_overrides_defaults(self, monkeypatch):
        monkeypatch.setenv("SESSION_MAX_AGE_HOURS", "12")
        monkeypatch.setenv("COOKIE_SAMESITE", "strict")
        s = Settings(_env_file=None)
        assert s.session_max_age_hours == 12
        assert s.cookie_samesite == "strict"

    def test_unknown_variables_are_ignored(self, monkeypatch):
        monkeypatch.setenv("FILADEX_SOMETHING_ELSE", "1")
        assert Settings(_env_file=None, unrelated="x").port == 8000

    def test_settings_config(self):
        assert Settings.model_config["env_file"] == ".env"
        assert Settings.model_config["extra"] == "ignore"

    def test_bcrypt_rounds_below_ten_rejected(self, monkeypatch):
        monkeypatch.setenv("BCRYPT_ROUNDS", "4")
        with pytest.raises(ValueError):
            Settings(_env_file=None)

    def test_database_url_from_postgres_parts(self, monkeypatch):
        monkeypatch.delenv("DATABASE_URL", raising=False)
        monkeypatch.setenv("POSTGRES_HOST", "db")
        s = Settings(_env_file=None)
        assert s.sqlalchemy_url == "postgresql+psycopg2://filadex:@db:5432/filadex"
