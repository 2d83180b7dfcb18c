# src/ai/clients/factory.py
# Chat client factory routing a model to its provider

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Type

from ..provider_validator import validate_model, get_model_error_message
from ..models import resolve_model_alias
from ..types import ChatResult
from .base import BaseClient

if TYPE_CHECKING:
    from ...core.session import CancelToken


# lazy client factory for OpenAI (tests can monkeypatch this)
def _get_openai_client_class() -> Type[BaseClient]:
    from .openai_client import OpenAIClient

    return OpenAIClient


# lazy client factory for Anthropic (tests can monkeypatch this)
def _get_anthropic_client_class() -> Type[BaseClient]:
    from .claude_client import ClaudeClient

    return ClaudeClient


# lazy client factory for Ollama (tests can monkeypatch this)
def _get_ollama_client_class() -> Type[BaseClient]:
    from .ollama_client import OllamaClient

    return OllamaClient


# * Registry mapping provider IDs to client factory functions
CLIENT_REGISTRY: dict[str, Callable[[], Type[BaseClient]]] = {
    "openai": _get_openai_client_class,
    "anthropic": _get_anthropic_client_class,
    "ollama": _get_ollama_client_class,
}


# * Run one chat round trip w/ the client for the model's provider
def run_chat(
    messages: list[dict[str, str]],
    model: str,
    temperature: float | None = None,
    cancel: CancelToken | None = None,
) -> ChatResult:
    valid, provider = validate_model(model)
    if not valid:
        return ChatResult(success=False, error=get_model_error_message(model, provider), model=model)

    client_factory = CLIENT_REGISTRY.get(provider)
    if client_factory is None:
        return ChatResult(success=False, error=f"Unknown provider: {provider}", model=model)

    client = client_factory()()
    return client.run_chat(messages, resolve_model_alias(model), temperature, cancel)
