"""Settings.from_env"""
import pytest

from knowyourfood.config import Settings

ENV_VARS = (
    "OPENAI_API_KEY",
    "VISION_MODEL",
    "VISION_MAX_TOKENS",
    "LOG_LEVEL",
    "ALLOWED_ORIGINS",
    "ANALYZE_URL",
    "CAMERA_DEVICE",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.setattr("knowyourfood.config.load_dotenv", lambda **_: None)
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    settings = Settings.from_env()

    assert settings.openai_api_key is None
    assert settings.vision_model == "gpt-4o"
    assert settings.max_tokens == 500
    assert settings.log_level == "INFO"
    assert settings.allowed_origins == ("http://localhost:3000",)
    assert settings.analyze_url == "http://localhost:8000/api/analyze"
    assert settings.camera_device == 0


def test_missing_key_is_not_an_error():
    """Absent key is reported by the provider on first use, not here."""
    assert Settings.from_env().openai_api_key is None


def test_values_from_env(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test123")
    monkeypatch.setenv("VISION_MODEL", "gpt-4o-mini")
    monkeypatch.setenv("VISION_MAX_TOKENS", "800")
    monkeypatch.setenv("ALLOWED_ORIGINS", "http://a.test, http://b.test,,")
    monkeypatch.setenv("ANALYZE_URL", "http://api.test/api/analyze")
    monkeypatch.setenv("CAMERA_DEVICE", "1")

    settings = Settings.from_env()

    assert settings.openai_api_key == "sk-test123"
    assert settings.vision_model == "gpt-4o-mini"
    assert settings.max_tokens == 800
    assert settings.allowed_origins == ("http://a.test", "http://b.test")
    assert settings.analyze_url == "http://api.test/api/analyze"
    assert settings.camera_device == 1


def test_bad_integer_names_variable(monkeypatch):
    monkeypatch.setenv("VISION_MAX_TOKENS", "lots")

    with pytest.raises(ValueError, match="VISION_MAX_TOKENS"):
        Settings.from_env()


def test_non_positive_budget_rejected(monkeypatch):
    monkeypatch.setenv("VISION_MAX_TOKENS", "0")

    with pytest.raises(ValueError, match="greater than 0"):
        Settings.from_env()


def test_settings_immutable():
    settings = Settings(openai_api_key="k")

    with pytest.raises(Exception):
        settings.openai_api_key = "other"
