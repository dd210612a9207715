"""
Runtime Configuration Tests

Settings come from an explicit mapping; nothing touches os.environ here.
"""

import logging

import pytest

from adapter.providers import GeminiProvider, MockProvider, OpenAIProvider
from backend.config import (
    ProviderSettings,
    build_provider,
    configure_logging,
    env_bool,
)
from backend.contracts import ConfigurationError
from backend.engine import EngineConfig


class TestProviderSettings:

    def test_defaults(self):
        settings = ProviderSettings.from_env({})
        assert settings.provider == "auto"
        assert settings.gemini_api_key is None
        assert settings.timeout_seconds == 60.0
        assert settings.temperature == 0.7

    def test_reads_environment(self):
        settings = ProviderSettings.from_env({
            "GANTT_PROVIDER": " OpenAI ",
            "OPENAI_API_KEY": "sk-test",
            "GANTT_MODEL": "gpt-4o-mini",
            "GANTT_TIMEOUT_SECONDS": "12.5",
            "GANTT_TEMPERATURE": "0",
        })
        assert settings.provider == "openai"
        assert settings.openai_api_key == "sk-test"
        assert settings.model == "gpt-4o-mini"
        assert settings.invocation_params().timeout_seconds == 12.5
        assert settings.invocation_params().temperature == 0.0

    def test_blank_values_are_unset(self):
        settings = ProviderSettings.from_env({"GEMINI_API_KEY": "   ", "GANTT_PROVIDER": ""})
        assert settings.gemini_api_key is None
        assert settings.provider == "auto"

    @pytest.mark.parametrize("env", [
        {"GANTT_PROVIDER": "claude"},
        {"GANTT_TIMEOUT_SECONDS": "soon"},
        {"GANTT_TIMEOUT_SECONDS": "0.5"},
        {"GANTT_TEMPERATURE": "-1"},
    ])
    def test_invalid_values(self, env):
        with pytest.raises(ConfigurationError):
            ProviderSettings.from_env(env)


class TestBuildProvider:

    def test_mock(self):
        assert isinstance(build_provider(ProviderSettings(provider="mock")), MockProvider)

    def test_auto_prefers_gemini(self):
        settings = ProviderSettings(gemini_api_key="g", openai_api_key="o")
        assert isinstance(build_provider(settings), GeminiProvider)

    def test_auto_falls_back_to_openai(self):
        assert isinstance(build_provider(ProviderSettings(openai_api_key="o")), OpenAIProvider)

    def test_named_provider_wins_over_auto_order(self):
        settings = ProviderSettings(provider="openai", gemini_api_key="g", openai_api_key="o")
        assert isinstance(build_provider(settings), OpenAIProvider)

    def test_model_override(self):
        provider = build_provider(ProviderSettings(gemini_api_key="g", model="gemini-pro"))
        assert provider.get_version().model_id == "gemini-pro"

    def test_no_key(self):
        with pytest.raises(ConfigurationError) as info:
            build_provider(ProviderSettings())
        assert "GEMINI_API_KEY" in str(info.value)
        assert info.value.to_dict()["kind"] == "configuration"

    @pytest.mark.parametrize("provider", ["gemini", "openai"])
    def test_named_provider_without_its_key(self, provider):
        other = {"openai_api_key": "o"} if provider == "gemini" else {"gemini_api_key": "g"}
        with pytest.raises(ConfigurationError):
            build_provider(ProviderSettings(provider=provider, **other))


class TestEngineConfig:

    def test_defaults(self):
        config = EngineConfig.from_env({})
        assert config.reconcile is True
        assert config.params.timeout_seconds == 60.0

    @pytest.mark.parametrize("raw,expected", [("false", False), ("0", False), ("YES", True), ("on", True)])
    def test_reconcile_flag(self, raw, expected):
        assert EngineConfig.from_env({"GANTT_RECONCILE": raw}).reconcile is expected

    def test_bad_flag(self):
        with pytest.raises(ConfigurationError):
            env_bool({"FLAG": "maybe"}, "FLAG", True)


class TestLogging:

    def test_explicit_level(self):
        assert configure_logging("debug") == logging.DEBUG
        assert logging.getLogger("httpx").level == logging.WARNING
        configure_logging("INFO")

    def test_unknown_level(self):
        with pytest.raises(ConfigurationError):
            configure_logging("chatty")
