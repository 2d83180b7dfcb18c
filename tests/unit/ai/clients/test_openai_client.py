# tests/unit/ai/clients/test_openai_client.py
# Unit tests for OpenAI client request shaping & error handling

import os
from unittest.mock import Mock, patch

from src.ai.clients.openai_client import OpenAIClient
from src.core.session import CancelToken

MESSAGES = [
    {"role": "system", "content": "You edit resumes."},
    {"role": "user", "content": "tighten my summary"},
]


def _mock_response(mock_openai_class, text: str) -> Mock:
    mock_client = Mock()
    mock_openai_class.return_value = mock_client
    mock_response = Mock()
    mock_response.output_text = text
    mock_client.responses.create.return_value = mock_response
    return mock_client


class TestOpenAIClient:

    # * System prompt travels as instructions; turns as input
    @patch("openai.OpenAI")
    @patch.dict(os.environ, {"OPENAI_API_KEY": "test-key"})
    def test_run_chat_success(self, mock_openai_class):
        mock_client = _mock_response(mock_openai_class, "Here is a tighter summary.")

        result = OpenAIClient().run_chat(MESSAGES, "gpt-4o", 0.3)

        assert result.success is True
        assert result.text == "Here is a tighter summary."
        assert result.provider == "openai"
        mock_client.responses.create.assert_called_once_with(
            model="gpt-4o",
            input=[{"role": "user", "content": "tighten my summary"}],
            instructions="You edit resumes.",
            temperature=0.3,
        )

    # * GPT-5 models reject temperature
    @patch("openai.OpenAI")
    @patch.dict(os.environ, {"OPENAI_API_KEY": "test-key"})
    def test_gpt5_omits_temperature(self, mock_openai_class):
        mock_client = _mock_response(mock_openai_class, "ok")

        OpenAIClient().run_chat(MESSAGES, "gpt-5-mini", 0.3)

        kwargs = mock_client.responses.create.call_args.kwargs
        assert "temperature" not in kwargs
        assert kwargs["model"] == "gpt-5-mini"

    @patch("openai.OpenAI")
    @patch.dict(os.environ, {"OPENAI_API_KEY": "test-key"})
    def test_thinking_tokens_are_stripped(self, mock_openai_class):
        _mock_response(mock_openai_class, "<think>plan the edit</think>\nDone.")

        result = OpenAIClient().run_chat(MESSAGES, "gpt-4o", 0.3)

        assert result.text == "Done."

    @patch("openai.OpenAI")
    @patch.dict(os.environ, {"OPENAI_API_KEY": "test-key"})
    def test_empty_reply_is_failure(self, mock_openai_class):
        _mock_response(mock_openai_class, "   ")

        result = OpenAIClient().run_chat(MESSAGES, "gpt-4o", 0.3)

        assert result.success is False
        assert "Empty response" in result.error

    # * Missing key is reported, never raised
    @patch.dict(os.environ, {}, clear=True)
    def test_missing_api_key(self):
        result = OpenAIClient().run_chat(MESSAGES, "gpt-4o", 0.3)

        assert result.success is False
        assert "OPENAI_API_KEY" in result.error

    @patch("openai.OpenAI")
    @patch.dict(os.environ, {"OPENAI_API_KEY": "test-key"})
    def test_sdk_exception_becomes_error_result(self, mock_openai_class):
        mock_client = Mock()
        mock_openai_class.return_value = mock_client
        mock_client.responses.create.side_effect = ValueError("bad request body")

        result = OpenAIClient().run_chat(MESSAGES, "gpt-4o", 0.3)

        assert result.success is False
        assert "OpenAI API error" in result.error
        assert "bad request body" in result.error

    # * Cancelling closes the SDK client & reports the abort
    @patch("openai.OpenAI")
    @patch.dict(os.environ, {"OPENAI_API_KEY": "test-key"})
    def test_cancel_closes_client(self, mock_openai_class):
        mock_client = Mock()
        mock_openai_class.return_value = mock_client
        token = CancelToken()

        def cancelled_mid_request(**kwargs):
            token.cancel()
            raise ConnectionError("connection closed")

        mock_client.responses.create.side_effect = cancelled_mid_request

        result = OpenAIClient().run_chat(MESSAGES, "gpt-4o", 0.3, token)

        assert result.success is False
        assert result.error == "OpenAI request cancelled"
        mock_client.close.assert_called_once()

    @patch("openai.OpenAI")
    @patch.dict(os.environ, {"OPENAI_API_KEY": "test-key"})
    def test_already_cancelled_skips_request(self, mock_openai_class):
        mock_client = Mock()
        mock_openai_class.return_value = mock_client
        token = CancelToken()
        token.cancel()

        result = OpenAIClient().run_chat(MESSAGES, "gpt-4o", 0.3, token)

        assert result.success is False
        mock_client.responses.create.assert_not_called()
