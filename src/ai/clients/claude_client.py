# src/ai/clients/claude_client.py
# Claude (Anthropic) chat client using the Messages API

from __future__ import annotations

from typing import TYPE_CHECKING

from .base import BaseClient, abort_on_cancel, raise_if_cancelled, raise_provider_error
from ..utils import APICallContext, split_system_message

if TYPE_CHECKING:
    from ...core.session import CancelToken

# room for a full résumé document in the reply
MAX_OUTPUT_TOKENS = 8000


# * Anthropic Claude API client
class ClaudeClient(BaseClient):

    provider_name = "anthropic"
    required_env_vars = ["ANTHROPIC_API_KEY"]

    def make_call(
        self,
        messages: list[dict[str, str]],
        model: str,
        temperature: float,
        cancel: CancelToken | None = None,
    ) -> APICallContext:
        import anthropic
        from anthropic import Anthropic

        client = Anthropic()
        abort_on_cancel(client, cancel, "Anthropic")
        system, turns = split_system_message(messages)
        request: dict = {
            "model": model,
            "max_tokens": MAX_OUTPUT_TOKENS,
            "temperature": temperature,
            "messages": turns,
        }
        if system:
            request["system"] = system

        try:
            response = client.messages.create(**request)
        except Exception as e:
            raise_if_cancelled(cancel, "Anthropic", e)
            raise_provider_error(anthropic, e, "anthropic", "Anthropic")
        raise_if_cancelled(cancel, "Anthropic")

        # process text blocks only & skip tool blocks
        raw_text = ""
        for content_block in response.content:
            if content_block.type == "text":
                raw_text += content_block.text

        return APICallContext(raw_text=raw_text, provider_name="anthropic", model=model)
