# src/ai/provider_validator.py
# Runtime provider checks: API key presence, Ollama availability & readable error messages
#
# * models.py answers "is this a known model string?"; this module answers "can we call it now?"

from __future__ import annotations

from .cache import AICache
from .models import CLAUDE_MODELS, OPENAI_MODELS, resolve_model_alias
from ..config.env_validator import get_required_env_var, validate_provider_env


# check a hosted provider's API key w/ caching
def check_api_key(provider: str) -> bool:
    cached = AICache.get_provider_available(provider)
    if cached is not None:
        return cached

    available = validate_provider_env(provider)
    AICache.set_provider_available(provider, available)
    return available


# cached Ollama models (empty until the Ollama client has listed them)
def get_ollama_models() -> list[str]:
    return AICache.get_ollama_models() or []


def _refresh_ollama_models() -> list[str]:
    from .clients.ollama_client import check_ollama_status

    return check_ollama_status().models


# * Validate model & determine its provider; second item is a provider ID or a failure code
def validate_model(model: str) -> tuple[bool, str]:
    resolved = resolve_model_alias(model)

    if resolved in OPENAI_MODELS:
        return (True, "openai") if check_api_key("openai") else (False, "openai_key_missing")

    if resolved in CLAUDE_MODELS:
        return (True, "anthropic") if check_api_key("anthropic") else (False, "anthropic_key_missing")

    # anything else must be a locally pulled Ollama model
    models = get_ollama_models() if AICache.is_ollama_cached() else _refresh_ollama_models()
    if resolved in models:
        return True, "ollama"
    if models:
        return False, "ollama_model_missing"
    return False, "model_not_found"


# * Readable message for a model that cannot be used right now
def get_model_error_message(model: str, status: str) -> str:
    if status in ("openai_key_missing", "anthropic_key_missing"):
        provider = status.removesuffix("_key_missing")
        var_name = get_required_env_var(provider)
        return f"Model '{model}' requires {var_name} to be set in the environment or .env"

    if status == "ollama_model_missing":
        available = ", ".join(get_ollama_models())
        return f"Model '{model}' not found in Ollama. Available local models: {available}"

    hosted = ", ".join(OPENAI_MODELS + CLAUDE_MODELS)
    return (
        f"Model '{model}' is not available. Hosted models: {hosted}. "
        "Local models need a running Ollama server."
    )
