# src/ai/clients/openai_client.py
# OpenAI chat client using the Responses API

from __future__ import annotations

from typing import TYPE_CHECKING

from .base import BaseClient, abort_on_cancel, raise_if_cancelled, raise_provider_error
from ..models import supports_temperature
from ..utils import APICallContext, split_system_message

if TYPE_CHECKING:
    from ...core.session import CancelToken


# * OpenAI API client using the Responses API
class OpenAIClient(BaseClient):

    provider_name = "openai"
    required_env_vars = ["OPENAI_API_KEY"]

    # * System prompt goes in `instructions`, prior turns in `input`
    def make_call(
        self,
        messages: list[dict[str, str]],
        model: str,
        temperature: float,
        cancel: CancelToken | None = None,
    ) -> APICallContext:
        import openai
        from openai import OpenAI

        client = OpenAI()
        # cancelling closes the HTTP connection under the in-flight request
        abort_on_cancel(client, cancel, "OpenAI")
        system, turns = split_system_message(messages)
        request: dict = {"model": model, "input": turns}
        if system:
            request["instructions"] = system
        # GPT-5 models don't support temperature parameter
        if supports_temperature(model):
            request["temperature"] = temperature

        try:
            resp = client.responses.create(**request)
        except Exception as e:
            raise_if_cancelled(cancel, "OpenAI", e)
            raise_provider_error(openai, e, "openai", "OpenAI")
        raise_if_cancelled(cancel, "OpenAI")

        return APICallContext(raw_text=resp.output_text, provider_name="openai", model=model)
