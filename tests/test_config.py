"""Tests for environment-driven settings."""

from __future__ import annotations

import pytest

from toolchat.config import DEFAULT_MODEL, get_settings
from toolchat.orchestrator.errors import ConfigError


def test_missing_api_key_is_a_config_error(clean_settings) -> None:
    with pytest.raises(ConfigError):
        get_settings()


def test_defaults(clean_settings, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-test")
    settings = get_settings()
    assert settings.anthropic_api_key == "sk-test"
    assert settings.model == DEFAULT_MODEL
    assert settings.max_tokens == 1000
    assert settings.forwarded_env == ["METEOSTAT_RAPID_API_KEY"]
    assert settings.llm_provider == "anthropic"


def test_overrides(clean_settings, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-test")
    monkeypatch.setenv("TOOLCHAT_MODEL", "claude-other")
    monkeypatch.setenv("TOOLCHAT_MAX_TOKENS", "2048")
    monkeypatch.setenv("TOOLCHAT_FORWARD_ENV", "FOO, BAR")
    monkeypatch.setenv("TOOLCHAT_LOG_LEVEL", "debug")
    monkeypatch.setenv("TOOLCHAT_LOG_FILE", "")
    settings = get_settings()
    assert settings.model == "claude-other"
    assert settings.max_tokens == 2048
    assert settings.forwarded_env == ["FOO", "BAR"]
    assert settings.log_level == "DEBUG"
    assert settings.log_file == ""


@pytest.mark.parametrize("value", ["lots", "0", "-5"])
def test_invalid_max_tokens(clean_settings, monkeypatch: pytest.MonkeyPatch, value: str) -> None:
    monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-test")
    monkeypatch.setenv("TOOLCHAT_MAX_TOKENS", value)
    with pytest.raises(ConfigError):
        get_settings()


def test_server_env_forwards_optional_credential(clean_settings, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-test")
    assert get_settings().server_env() == {"METEOSTAT_RAPID_API_KEY": ""}

    monkeypatch.setenv("METEOSTAT_RAPID_API_KEY", "rapid")
    assert get_settings().server_env() == {"METEOSTAT_RAPID_API_KEY": "rapid"}
