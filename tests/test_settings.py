"""
Tests for environment-driven engine settings.
"""

import pytest
from pydantic import ValidationError

from domino_engine.settings import EngineSettings, get_settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (
        "DOMINO_LOG_LEVEL",
        "DOMINO_SEED",
        "DOMINO_STRICT_PASS",
        "DOMINO_LAYOUT_MAX_WIDTH",
        "DOMINO_LAYOUT_MAX_NUDGE_ATTEMPTS",
        "DOMINO_LOG_DIR",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_defaults():
    settings = EngineSettings(_env_file=None)

    assert settings.log_level == "INFO"
    assert settings.seed is None
    assert not settings.strict_pass
    assert settings.layout_config().max_width == 800


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("DOMINO_LOG_LEVEL", "debug")
    monkeypatch.setenv("DOMINO_SEED", "7")
    monkeypatch.setenv("DOMINO_STRICT_PASS", "true")
    monkeypatch.setenv("DOMINO_LAYOUT_MAX_WIDTH", "600")

    settings = EngineSettings(_env_file=None)

    assert settings.log_level == "DEBUG"
    assert settings.game_config().seed == 7
    assert settings.game_config().strict_pass
    assert settings.layout_config().max_width == 600


def test_unknown_log_level(monkeypatch):
    monkeypatch.setenv("DOMINO_LOG_LEVEL", "chatty")
    with pytest.raises(ValidationError):
        EngineSettings(_env_file=None)


def test_width_must_be_positive(monkeypatch):
    monkeypatch.setenv("DOMINO_LAYOUT_MAX_WIDTH", "0")
    with pytest.raises(ValidationError):
        EngineSettings(_env_file=None)


def test_get_settings_is_cached():
    assert get_settings() is get_settings()
