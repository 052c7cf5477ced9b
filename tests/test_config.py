# tests/test_config.py
import pytest

from storefront_api.config import AppEnv, ConfigurationError, load_settings, parse_duration


class TestParseDuration:

    @pytest.mark.parametrize("raw, seconds", [("7d", 604800), ("12h", 43200), ("30m", 1800), ("3600", 3600)])
    def test_units(self, raw, seconds):
        assert parse_duration(raw) == seconds

    @pytest.mark.parametrize("raw", ["", "soon", "0d", "-1h"])
    def test_invalid(self, raw):
        with pytest.raises(ValueError):
            parse_duration(raw)


class TestLoadSettings:

    def test_missing_secret_fails_closed(self, monkeypatch):
        monkeypatch.delenv("JWT_SECRET", raising=False)

        with pytest.raises(ConfigurationError, match="JWT_SECRET"):
            load_settings(DATABASE_URL="sqlite://", _env_file=None)

    def test_database_parts_required_without_url(self, monkeypatch):
        for name in ("DATABASE_URL", "DATABASE_HOST", "DATABASE_USER", "DATABASE_NAME"):
            monkeypatch.delenv(name, raising=False)

        with pytest.raises(ConfigurationError, match="DATABASE_HOST"):
            load_settings(JWT_SECRET="s", _env_file=None)

    def test_url_assembled_from_parts(self):
        settings = load_settings(
            JWT_SECRET="s",
            DATABASE_URL=None,
            DATABASE_HOST="db",
            DATABASE_USER="shop",
            DATABASE_PASSWORD="pw",
            DATABASE_NAME="store",
            _env_file=None,
        )

        url = settings.database_url
        assert url.drivername == "mysql+pymysql"
        assert (url.host, url.port, url.database) == ("db", 3306, "store")

    def test_derived_values(self):
        settings = load_settings(
            JWT_SECRET="s",
            DATABASE_URL="sqlite://",
            APP_ENV="production",
            API_PREFIX="api/",
            JWT_EXPIRES_IN="1h",
            CORS_ORIGIN="https://a.example, https://b.example",
            _env_file=None,
        )

        assert settings.APP_ENV == AppEnv.PRODUCTION
        assert settings.is_production
        assert settings.API_PREFIX == "/api"
        assert settings.token_ttl_seconds == 3600
        assert settings.cors_origins == ["https://a.example", "https://b.example"]
        assert settings.notifier_enabled is False

    def test_notifier_enabled_needs_key_and_url(self):
        settings = load_settings(
            JWT_SECRET="s",
            DATABASE_URL="sqlite://",
            EMMISOR_API_KEY="key",
            EMMISOR_URL="https://mail.example",
            _env_file=None,
        )

        assert settings.notifier_enabled is True
