# ============================================================================
# FILE: tests/unit/test_settings_service.py
# ============================================================================
"""
Unit tests for environment-backed settings
"""

from core.service.settings_service import EnvSettingsService


def test_typed_getters():
    settings = EnvSettingsService({"LLM_ENABLED": "yes", "PORT": "9000", "LLM_TIMEOUT_S": "2.5"})
    assert settings.get_bool("LLM_ENABLED") is True
    assert settings.get_int("PORT", 8080) == 9000
    assert settings.get_float("LLM_TIMEOUT_S", 30.0) == 2.5


def test_defaults_and_bad_values():
    settings = EnvSettingsService({"PORT": "eighty", "LLM_ENABLED": "nope"})
    assert settings.get_int("PORT", 8080) == 8080
    assert settings.get_bool("LLM_ENABLED", True) is False
    assert settings.get_bool("MISSING", True) is True
    assert settings.get("MISSING", "x") == "x"


def test_public_settings_hide_api_key():
    settings = EnvSettingsService({"OLLAMA_API_KEY": "secret", "OLLAMA_MODEL": "m"})
    data = settings.public()
    assert "OLLAMA_API_KEY" not in data
    assert "secret" not in data.values()
    assert data["OLLAMA_MODEL"] == "m"


def test_process_environment(monkeypatch):
    monkeypatch.setenv("DEFAULT_SPECIALTY", "Pediatrics")
    assert EnvSettingsService().get("DEFAULT_SPECIALTY") == "Pediatrics"
