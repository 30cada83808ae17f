"""Tests for environment configuration"""
from deskpet.load_secrets import DEFAULT_SECRET, load_config


def test_defaults(monkeypatch):
    for name in ("DATABASE_URL", "SECRET", "PEPPER_DATA", "TOKEN_EXPIRE_MINUTES",
                 "REWARD_TIER_COUNT", "CORS_ORIGINS", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)

    config = load_config()

    assert config.database_url.startswith("sqlite+aiosqlite://")
    assert config.secret == DEFAULT_SECRET
    assert config.token_expire_minutes == 60
    assert config.reward_tier_count == 10
    assert config.cors_origins == ["http://localhost:3000"]


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "postgresql+asyncpg://deskpet:pw@db:5432/deskpet")
    monkeypatch.setenv("SECRET", "a-real-secret")
    monkeypatch.setenv("TOKEN_EXPIRE_MINUTES", "15")
    monkeypatch.setenv("REWARD_TIER_COUNT", "5")
    monkeypatch.setenv("CORS_ORIGINS", "http://localhost:3000, https://deskpet.example")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    config = load_config()

    assert config.database_url == "postgresql+asyncpg://deskpet:pw@db:5432/deskpet"
    assert config.secret == "a-real-secret"
    assert config.token_expire_minutes == 15
    assert config.reward_tier_count == 5
    assert config.cors_origins == ["http://localhost:3000", "https://deskpet.example"]
    assert config.log_level == "DEBUG"
