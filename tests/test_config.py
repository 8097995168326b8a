"""Tests for configuration helpers."""

import pytest

from slack_deploy_approval import config


def test_get_settings_parses_expected_fields(monkeypatch, settings_env):
    monkeypatch.setenv("DEPLOY_VERSIONS", " v2.0.0, v2.1.0 ,")
    monkeypatch.setenv("DEPLOY_DURATION_SECONDS", "0.5")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    config.get_settings.cache_clear()

    settings = config.get_settings()

    assert settings.bot_token == "token"
    assert settings.signing_secret == "secret"
    assert settings.deploy_versions == ["v2.0.0", "v2.1.0"]
    assert settings.deploy_duration_seconds == 0.5
    assert settings.log_level == "DEBUG"


def test_defaults_match_builtin_catalog(settings_env):
    settings = config.get_settings()

    assert settings.deploy_versions == ["v1.0.0", "v1.1.0", "v1.1.1"]
    assert settings.deploy_duration_seconds == 10.0
    assert settings.port == 8080


def test_missing_environment_variables_raise_runtime_error(monkeypatch):
    for var in ("SLACK_BOT_TOKEN", "SLACK_SIGNING_SECRET"):
        monkeypatch.delenv(var, raising=False)
    config.get_settings.cache_clear()

    with pytest.raises(RuntimeError) as err:
        config.get_settings()

    message = str(err.value)
    assert "SLACK_BOT_TOKEN" in message
    assert "SLACK_SIGNING_SECRET" in message
    config.get_settings.cache_clear()


@pytest.mark.parametrize(
    "versions",
    ["1.0.0", "v1.0.0,v1.0.0", " , "],
)
def test_invalid_versions_rejected(monkeypatch, settings_env, versions):
    monkeypatch.setenv("DEPLOY_VERSIONS", versions)
    config.get_settings.cache_clear()

    with pytest.raises(RuntimeError):
        config.get_settings()


def test_non_positive_duration_rejected(monkeypatch, settings_env):
    monkeypatch.setenv("DEPLOY_DURATION_SECONDS", "0")
    config.get_settings.cache_clear()

    with pytest.raises(RuntimeError):
        config.get_settings()


def test_load_settings_reads_current_environment(monkeypatch, settings_env):
    assert config.get_settings().bot_token == "token"

    monkeypatch.setenv("SLACK_BOT_TOKEN", "rotated")

    assert config.get_settings().bot_token == "token"
    assert config.load_settings().bot_token == "rotated"
