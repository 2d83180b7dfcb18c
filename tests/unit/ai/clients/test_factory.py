# tests/unit/ai/clients/test_factory.py
# Unit tests for chat client routing & SDK error translation

from types import SimpleNamespace
from unittest.mock import Mock, patch

import pytest

from src.ai.clients.base import raise_provider_error
from src.ai.clients.factory import CLIENT_REGISTRY, run_chat
from src.ai.types import ChatResult
from src.ai.clients.openai_client import OpenAIClient
from src.core.exceptions import AIError, MissingAPIKeyError, ProviderError, RateLimitError

MESSAGES = [{"role": "user", "content": "hello"}]


# * Test chat routing & provider selection
class TestChatRouting:

    def test_alias_is_resolved_before_the_call(self):
        mock_client_instance = Mock()
        mock_client_instance.run_chat.return_value = ChatResult(success=True, text="hi")
        mock_client_class = Mock(return_value=mock_client_instance)

        with (
            patch.dict(CLIENT_REGISTRY, {"anthropic": lambda: mock_client_class}),
            patch("src.ai.clients.factory.validate_model", return_value=(True, "anthropic")),
        ):
            result = run_chat(MESSAGES, "claude-sonnet-4.5", 0.2)

        assert result.success
        mock_client_instance.run_chat.assert_called_once_with(MESSAGES, "claude-sonnet-4-5-20250929", 0.2, None)

    # * Missing key short-circuits before any client is built
    def test_missing_key_returns_error_result(self):
        result = run_chat(MESSAGES, "gpt-4o", 0.2)

        assert result.success is False
        assert "OPENAI_API_KEY" in result.error

    def test_unknown_provider(self):
        with patch("src.ai.clients.factory.validate_model", return_value=(True, "mystery")):
            result = run_chat(MESSAGES, "whatever", 0.2)

        assert result.success is False
        assert "Unknown provider" in result.error


# * Credential checks raise a typed error carrying the missing variable
def test_missing_key_names_env_var():
    with pytest.raises(MissingAPIKeyError) as exc_info:
        OpenAIClient().validate_credentials()

    assert exc_info.value.provider == "openai"
    assert exc_info.value.env_var == "OPENAI_API_KEY"


class _RateLimit(Exception):
    retry_after = 30


class _Status(Exception):
    status_code = 503
    message = "overloaded"


class _Connection(Exception):
    pass


FAKE_SDK = SimpleNamespace(
    RateLimitError=_RateLimit,
    APIStatusError=_Status,
    APIConnectionError=_Connection,
)


class TestRaiseProviderError:

    def test_rate_limit(self):
        with pytest.raises(RateLimitError) as exc_info:
            raise_provider_error(FAKE_SDK, _RateLimit("slow down"), "openai", "OpenAI")
        assert exc_info.value.retry_after == 30
        assert exc_info.value.provider == "openai"

    def test_status_error(self):
        with pytest.raises(ProviderError, match=r"OpenAI API error \(503\): overloaded"):
            raise_provider_error(FAKE_SDK, _Status(), "openai", "OpenAI")

    def test_connection_error(self):
        with pytest.raises(ProviderError, match="connection error"):
            raise_provider_error(FAKE_SDK, _Connection("reset"), "anthropic", "Anthropic")

    # * SDKs without the error classes still get a Quill error
    def test_unknown_error_falls_back_to_ai_error(self):
        with pytest.raises(AIError, match="Anthropic API error: nope"):
            raise_provider_error(SimpleNamespace(), RuntimeError("nope"), "anthropic", "Anthropic")
