# tests/unit/ai/test_models.py
# Unit tests for the model catalog, aliases & runtime provider validation

import pytest

from src.ai.cache import AICache
from src.ai.models import (
    get_default_model,
    get_model_description,
    get_provider_for_model,
    list_models,
    resolve_model_alias,
    supports_temperature,
)
from src.ai.provider_validator import get_model_error_message, validate_model


class TestCatalog:

    @pytest.mark.parametrize(
        "alias,resolved",
        [
            ("claude-sonnet-4.5", "claude-sonnet-4-5-20250929"),
            ("gpt5", "gpt-5"),
            ("gpt-4o", "gpt-4o"),
            ("llama3.2", "llama3.2"),
        ],
    )
    def test_resolve_model_alias(self, alias, resolved):
        assert resolve_model_alias(alias) == resolved

    def test_provider_lookup(self):
        assert get_provider_for_model("gpt-5-mini") == "openai"
        assert get_provider_for_model("claude-haiku-4.5") == "anthropic"
        assert get_provider_for_model("llama3.2") is None

    def test_defaults_and_descriptions(self):
        assert get_default_model() == "gpt-5-mini"
        assert get_default_model("ollama") == "llama3.2"
        assert get_default_model("unknown") == "gpt-5-mini"
        assert "Sonnet" in get_model_description("claude-sonnet-4.5")
        assert get_model_description("qwen3") == "qwen3"

    def test_temperature_support(self):
        assert supports_temperature("gpt-4o")
        assert not supports_temperature("gpt-5-nano")

    def test_list_models(self):
        assert "gpt-4o" in list_models("openai")
        assert all(m.startswith("claude") for m in list_models("anthropic"))
        assert list_models("ollama") == []
        assert len(list_models()) == len(list_models("openai")) + len(list_models("anthropic"))


class TestValidateModel:

    def test_hosted_model_needs_key(self):
        assert validate_model("gpt-4o") == (False, "openai_key_missing")

    def test_hosted_model_with_key(self, mock_env_vars):
        assert validate_model("gpt-4o") == (True, "openai")
        assert validate_model("claude-sonnet-4.5") == (True, "anthropic")

    def test_local_model_from_cached_ollama_list(self):
        AICache.set_ollama_status(["llama3.2"])

        assert validate_model("llama3.2") == (True, "ollama")
        assert validate_model("mistral") == (False, "ollama_model_missing")

    def test_no_ollama_means_not_found(self):
        AICache.set_ollama_status(None, "not running")
        assert validate_model("mistral") == (False, "model_not_found")

    def test_error_messages(self):
        AICache.set_ollama_status(["llama3.2"])

        assert "ANTHROPIC_API_KEY" in get_model_error_message("claude-sonnet-4.5", "anthropic_key_missing")
        assert "llama3.2" in get_model_error_message("mistral", "ollama_model_missing")
        assert "Hosted models" in get_model_error_message("mystery", "model_not_found")
