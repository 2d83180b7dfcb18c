# src/ai/clients/base.py
# Template-method base client for chat providers w/ credential checks & verbose logging

from __future__ import annotations

import time
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, ClassVar, NoReturn

from ..types import ChatResult
from ..utils import APICallContext, strip_thinking_tokens
from ...config.settings import settings_manager
from ...config.env_validator import get_missing_env_message, get_required_env_var, validate_provider_env
from ...core.exceptions import AIError, ChatCancelledError, ConfigurationError, MissingAPIKeyError
from ...core.verbose import vlog_ai_request, vlog_ai_response, vlog_think

if TYPE_CHECKING:
    from ...core.session import CancelToken


# * Abstract base class for chat provider clients using template-method pattern
# Orchestrates: preflight -> validate_model -> make_call -> process
# Always returns ChatResult, never raises exceptions to callers
class BaseClient(ABC):

    # * Subclasses must set this to their canonical provider ID
    provider_name: str = ""

    # * Required environment variables for this provider (empty for Ollama)
    required_env_vars: ClassVar[list[str]] = []

    # * Template method - run one chat round trip w/ error handling
    def run_chat(
        self,
        messages: list[dict[str, str]],
        model: str,
        temperature: float | None = None,
        cancel: CancelToken | None = None,
    ) -> ChatResult:
        if temperature is None:
            temperature = settings_manager.load().temperature

        try:
            self.preflight()
            validated_model = self.validate_model(model)

            vlog_ai_request(
                provider=self.provider_name,
                model=validated_model,
                message_count=len(messages),
                prompt_length=sum(len(m.get("content", "")) for m in messages),
                temperature=temperature,
            )

            start_time = time.time()
            ctx = self.make_call(messages, validated_model, temperature, cancel)
            duration_ms = (time.time() - start_time) * 1000

            result = self._process_response(ctx)

            vlog_ai_response(
                provider=self.provider_name,
                model=validated_model,
                response_length=len(ctx.raw_text) if ctx.raw_text else 0,
                success=result.success,
                duration_ms=duration_ms,
                error=result.error if not result.success else None,
            )
            return result
        except ChatCancelledError as e:
            vlog_think(f"{self.provider_name} request aborted")
            return ChatResult(success=False, error=str(e), provider=self.provider_name, model=model)
        except ConfigurationError as e:
            vlog_think(f"Configuration error for {self.provider_name}: {e}")
            return ChatResult(success=False, error=str(e), provider=self.provider_name, model=model)
        except AIError as e:
            vlog_ai_response(
                provider=self.provider_name,
                model=model,
                response_length=0,
                success=False,
                error=str(e),
            )
            return ChatResult(success=False, error=str(e), provider=self.provider_name, model=model)
        except Exception as e:
            vlog_ai_response(
                provider=self.provider_name,
                model=model,
                response_length=0,
                success=False,
                error=f"Unexpected: {e}",
            )
            return ChatResult(
                success=False,
                error=f"Unexpected error in {self.provider_name}: {e}",
                provider=self.provider_name,
                model=model,
            )

    # pre-call setup hook (default: validate credentials, override for additional setup)
    def preflight(self) -> None:
        self.validate_credentials()

    # validate API credentials using required_env_vars
    def validate_credentials(self) -> None:
        if self.required_env_vars and self.provider_name:
            if not validate_provider_env(self.provider_name):
                raise MissingAPIKeyError(
                    get_missing_env_message(self.provider_name),
                    provider=self.provider_name,
                    env_var=get_required_env_var(self.provider_name) or "",
                )

    # validate & resolve model name (override in subclasses for custom validation)
    def validate_model(self, model: str) -> str:
        return model

    # * Make provider-specific API call (subclasses must implement)
    @abstractmethod
    def make_call(
        self,
        messages: list[dict[str, str]],
        model: str,
        temperature: float,
        cancel: CancelToken | None = None,
    ) -> APICallContext:
        pass

    # convert raw provider text to ChatResult; an empty reply is a failure
    def _process_response(self, ctx: APICallContext) -> ChatResult:
        text = strip_thinking_tokens(ctx.raw_text or "")
        if not text:
            return ChatResult(
                success=False,
                error=f"Empty response from {ctx.provider_name} ({ctx.model})",
                provider=ctx.provider_name,
                model=ctx.model,
            )
        return ChatResult(success=True, text=text, provider=ctx.provider_name, model=ctx.model)


# * Translate an SDK exception into the Quill hierarchy (always raises)
# SDK error classes are looked up lazily since mocked modules may not define them
def raise_provider_error(sdk: object, error: Exception, provider: str, label: str) -> NoReturn:
    from ...core.exceptions import ProviderError, RateLimitError

    rate_limit_error = getattr(sdk, "RateLimitError", None)
    api_status_error = getattr(sdk, "APIStatusError", None)
    api_connection_error = getattr(sdk, "APIConnectionError", None)

    if isinstance(rate_limit_error, type) and isinstance(error, rate_limit_error):
        raise RateLimitError(
            f"{label} rate limit exceeded: {error}",
            provider=provider,
            retry_after=getattr(error, "retry_after", None),
        ) from error
    if isinstance(api_status_error, type) and isinstance(error, api_status_error):
        status_code = getattr(error, "status_code", "unknown")
        message = getattr(error, "message", str(error))
        raise ProviderError(f"{label} API error ({status_code}): {message}", provider=provider) from error
    if isinstance(api_connection_error, type) and isinstance(error, api_connection_error):
        raise ProviderError(f"{label} connection error: {error}", provider=provider) from error
    raise AIError(f"{label} API error: {error}") from error


# * Close an SDK client when the request is cancelled; raises if already cancelled
def abort_on_cancel(client: Any, cancel: CancelToken | None, provider: str) -> None:
    if cancel is None:
        return
    if cancel.cancelled:
        raise ChatCancelledError(f"{provider} request cancelled")
    cancel.on_cancel(client.close)


# * A failure after cancellation is the abort itself, not a provider error
def raise_if_cancelled(cancel: CancelToken | None, provider: str, error: Exception | None = None) -> None:
    if cancel is not None and cancel.cancelled:
        raise ChatCancelledError(f"{provider} request cancelled") from error
