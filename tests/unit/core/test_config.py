"""Tests for configuration helpers."""

import pytest

from config.environment import get_node_env
from core.config import Settings, load_settings
from core.exceptions import ConfigurationError
from core.utils.env import get_bool_env, get_env


@pytest.fixture
def credentials(monkeypatch):
    monkeypatch.setenv("IBM_TTS_API_KEY", "secret-key")
    monkeypatch.setenv("IBM_TTS_URL", "https://api.example.watson.cloud.ibm.com/instances/abc/")
    for name in ("TTS_ALLOWED_ORIGINS", "PORT", "HOST", "IBM_TTS_TIMEOUT", "IBM_TTS_DISABLE_SSL_VERIFICATION"):
        monkeypatch.delenv(name, raising=False)


def test_get_env_returns_default(monkeypatch):
    """get_env should return provided default when variable missing."""

    monkeypatch.delenv("NON_EXISTENT", raising=False)
    assert get_env("NON_EXISTENT", default="value") == "value"


def test_get_env_required(monkeypatch):
    """get_env should raise when required env missing or empty."""

    monkeypatch.setenv("REQUIRED_KEY", "")
    with pytest.raises(ConfigurationError) as excinfo:
        get_env("REQUIRED_KEY", required=True)
    assert excinfo.value.key == "REQUIRED_KEY"


def test_get_bool_env(monkeypatch):
    monkeypatch.setenv("FLAG", "Yes")
    assert get_bool_env("FLAG") is True
    monkeypatch.setenv("FLAG", "off")
    assert get_bool_env("FLAG", default=True) is False
    monkeypatch.delenv("FLAG")
    assert get_bool_env("FLAG", default=True) is True


def test_environment_helpers(monkeypatch):
    """Environment helpers should respect NODE_ENV."""

    monkeypatch.setenv("NODE_ENV", "production")
    assert get_node_env() == "production"

    monkeypatch.setenv("NODE_ENV", "Test")
    assert get_node_env() == "test"

    monkeypatch.setenv("NODE_ENV", "staging")
    assert get_node_env() == "development"


def test_load_settings_reads_environment(credentials, monkeypatch):
    monkeypatch.setenv("TTS_ALLOWED_ORIGINS", "https://a.example, https://b.example/")
    monkeypatch.setenv("PORT", "8080")

    settings = load_settings()

    assert settings.ibm_tts_api_key == "secret-key"
    assert settings.service_url == "https://api.example.watson.cloud.ibm.com/instances/abc"
    assert settings.allowed_origins == ("https://a.example", "https://b.example")
    assert settings.allowed_methods == ("GET", "POST")
    assert settings.port == 8080
    assert settings.default_voice == "en-US_AllisonV3Voice"
    assert settings.verify_ssl is True


def test_allowed_origins_are_normalised(credentials, monkeypatch):
    monkeypatch.setenv("TTS_ALLOWED_ORIGINS", " HTTPS://TextToSpeech3.Netlify.app/ ,https://Other.example")

    settings = load_settings()

    assert settings.allowed_origins == ("https://texttospeech3.netlify.app", "https://other.example")


def test_settings_normalise_explicit_origins():
    settings = Settings(
        ibm_tts_api_key="key",
        ibm_tts_url="https://example.test",
        allowed_origins=("https://App.Example/", "*"),
    )

    assert settings.allowed_origins == ("https://app.example", "*")


def test_load_settings_defaults(credentials):
    settings = load_settings()

    assert settings.allowed_origins == ("https://texttospeech3.netlify.app",)
    assert settings.port == 5000
    assert settings.provider_timeout == 60.0


@pytest.mark.parametrize("missing", ["IBM_TTS_API_KEY", "IBM_TTS_URL"])
def test_load_settings_missing_credentials_is_fatal(credentials, monkeypatch, missing):
    monkeypatch.delenv(missing)

    with pytest.raises(ConfigurationError) as excinfo:
        load_settings()

    assert excinfo.value.key == missing


def test_settings_rejects_empty_credentials():
    with pytest.raises(ConfigurationError):
        Settings(ibm_tts_api_key="", ibm_tts_url="https://example")


def test_load_settings_rejects_bad_port(credentials, monkeypatch):
    monkeypatch.setenv("PORT", "eighty")

    with pytest.raises(ConfigurationError) as excinfo:
        load_settings()

    assert excinfo.value.key == "PORT"


def test_load_settings_ssl_toggle(credentials, monkeypatch):
    monkeypatch.setenv("IBM_TTS_DISABLE_SSL_VERIFICATION", "true")

    assert load_settings().verify_ssl is False


def test_create_app_refuses_to_start_without_credentials(monkeypatch):
    from main import create_app

    monkeypatch.delenv("IBM_TTS_API_KEY", raising=False)
    monkeypatch.delenv("IBM_TTS_URL", raising=False)

    with pytest.raises(ConfigurationError):
        create_app()
