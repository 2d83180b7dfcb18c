# src/ai/clients/ollama_client.py
# Ollama chat client for local models

from __future__ import annotations

from functools import lru_cache
from typing import TYPE_CHECKING, Any

from .base import BaseClient
from ..cache import AICache
from ..types import OllamaStatus
from ..utils import APICallContext
from ...core.exceptions import AIError, ChatCancelledError, ModelNotFoundError, ProviderError
from ...core.output import get_output_manager

if TYPE_CHECKING:
    from ...core.session import CancelToken


# * Ollama API client for local model inference
class OllamaClient(BaseClient):

    provider_name = "ollama"

    # * Check Ollama server status before making API call
    def preflight(self) -> None:
        status = self._check_ollama_status(with_debug=True)
        if not status.available:
            raise AIError(f"Ollama server error: {status.error}")

    # Ollama doesn't require API key - validation handled by preflight
    def validate_credentials(self) -> None:
        pass

    # * Validate model exists in Ollama's local model list
    def validate_model(self, model: str) -> str:
        status = self._check_ollama_status()

        if model not in status.models:
            if not status.models:
                error_msg = f"Model '{model}' not found & no local models available."
            else:
                error_msg = f"Model '{model}' not found locally. Available models: {', '.join(status.models)}."
            raise ModelNotFoundError(f"Ollama model error: {error_msg} Run 'ollama pull {model}' to install it.")

        return model

    def make_call(
        self,
        messages: list[dict[str, str]],
        model: str,
        temperature: float,
        cancel: CancelToken | None = None,
    ) -> APICallContext:
        import ollama  # type: ignore

        output = get_output_manager()
        output.debug(
            f"Ollama chat - Model: {model}, Messages: {len(messages)}, temperature: {temperature}",
            "AI",
        )

        try:
            if cancel is None:
                response = ollama.chat(
                    model=model,
                    messages=messages,
                    options={"temperature": temperature},
                )
                raw_text = response.get("message", {}).get("content", "")
            else:
                raw_text = self._stream_until_cancelled(ollama, messages, model, temperature, cancel)
        except ChatCancelledError:
            raise
        except Exception as e:
            output.debug(f"Ollama chat - Exception: {type(e).__name__}: {e}", "ERROR")
            if hasattr(ollama, "ResponseError") and isinstance(e, ollama.ResponseError):
                raise ProviderError(f"Ollama API error: {e}", provider="ollama") from e
            if isinstance(e, (ConnectionError, OSError)):
                raise ProviderError(
                    f"Ollama connection failed: {e}. Check if Ollama is running.",
                    provider="ollama",
                ) from e
            raise AIError(f"Ollama API error: {e}. Model: {model}.") from e

        output.debug(f"Received response from Ollama: {len(raw_text)} characters", "AI")
        return APICallContext(raw_text=raw_text, provider_name="ollama", model=model)

    # stream the reply so a cancel stops generation between chunks
    def _stream_until_cancelled(
        self,
        ollama: Any,
        messages: list[dict[str, str]],
        model: str,
        temperature: float,
        cancel: CancelToken,
    ) -> str:
        if cancel.cancelled:
            raise ChatCancelledError("Ollama request cancelled")
        stream = ollama.chat(
            model=model,
            messages=messages,
            options={"temperature": temperature},
            stream=True,
        )
        parts: list[str] = []
        try:
            for chunk in stream:
                if cancel.cancelled:
                    raise ChatCancelledError("Ollama request cancelled")
                parts.append(chunk.get("message", {}).get("content", ""))
        finally:
            # closing the generator drops the HTTP stream
            close = getattr(stream, "close", None)
            if close is not None:
                close()
        return "".join(parts)

    # check & cache Ollama server status (returns available models & error)
    def _check_ollama_status(self, *, with_debug: bool = False) -> OllamaStatus:
        if AICache.is_ollama_cached():
            cached_models = AICache.get_ollama_models()
            if cached_models is not None:
                return OllamaStatus(available=True, models=cached_models, error="")
            return OllamaStatus(available=False, models=[], error=AICache.get_ollama_error())

        output = get_output_manager()
        try:
            import ollama  # type: ignore

            if with_debug:
                output.debug("Checking Ollama server availability...", "AI")

            response = ollama.list()
            models = [m.model for m in response.models if m.model]

            if with_debug:
                output.debug(f"Ollama server available - found {len(models)} models", "AI")

            AICache.set_ollama_status(models)
            return OllamaStatus(available=True, models=models, error="")

        except Exception as e:
            if with_debug:
                output.debug(f"Ollama server check - Exception: {type(e).__name__}: {e}", "ERROR")
            error_msg = f"Ollama server connection failed: {e}. Please ensure Ollama is running locally."
            AICache.set_ollama_status(None, error_msg)
            return OllamaStatus(available=False, models=[], error=error_msg)


# get lazily-initialized singleton client
@lru_cache(maxsize=1)
def _get_client() -> OllamaClient:
    return OllamaClient()


# check Ollama server status (cached)
def check_ollama_status(*, with_debug: bool = False) -> OllamaStatus:
    return _get_client()._check_ollama_status(with_debug=with_debug)
