# src/ai/models.py
# Chat model catalog, aliases & provider lookup for OpenAI, Anthropic & Ollama

from __future__ import annotations

# * Supported OpenAI models
OPENAI_MODELS: list[str] = [
    "gpt-5",
    "gpt-5-mini",
    "gpt-5-nano",
    "gpt-4.1",
    "gpt-4o",
    "gpt-4o-mini",
]

# * Supported Claude models (Anthropic)
CLAUDE_MODELS: list[str] = [
    "claude-opus-4-1-20250805",
    "claude-sonnet-4-5-20250929",
    "claude-sonnet-4-20250514",
    "claude-haiku-4-5-20251001",
    "claude-3-5-haiku-20241022",
]

# * Hosted models (Ollama models are discovered at runtime)
SUPPORTED_MODELS: list[str] = OPENAI_MODELS + CLAUDE_MODELS

# * Short names accepted on the command line & in config
MODEL_ALIASES: dict[str, str] = {
    "claude-opus-4.1": "claude-opus-4-1-20250805",
    "claude-sonnet-4.5": "claude-sonnet-4-5-20250929",
    "claude-sonnet-4": "claude-sonnet-4-20250514",
    "claude-haiku-4.5": "claude-haiku-4-5-20251001",
    "claude-haiku-3.5": "claude-3-5-haiku-20241022",
    "gpt5": "gpt-5",
    "gpt-5m": "gpt-5-mini",
    "gpt-5n": "gpt-5-nano",
    "gpt4o": "gpt-4o",
}

# * Default models by provider
DEFAULT_MODELS_BY_PROVIDER: dict[str, str] = {
    "openai": "gpt-5-mini",
    "anthropic": "claude-sonnet-4-5-20250929",
    "ollama": "llama3.2",
}

# Models that reject a temperature parameter
FIXED_TEMPERATURE_PREFIXES: tuple[str, ...] = ("gpt-5",)

# * Model descriptions for `quill models` style listings
MODEL_DESCRIPTIONS: dict[str, str] = {
    "gpt-5": "GPT-5 (most capable)",
    "gpt-5-mini": "GPT-5 Mini (cost-efficient default)",
    "gpt-5-nano": "GPT-5 Nano (fastest)",
    "gpt-4.1": "GPT-4.1 (long context)",
    "gpt-4o": "GPT-4o (multimodal)",
    "gpt-4o-mini": "GPT-4o Mini (fast, cheap)",
    "claude-opus-4-1-20250805": "Claude Opus 4.1 (most capable)",
    "claude-sonnet-4-5-20250929": "Claude Sonnet 4.5 (balanced)",
    "claude-sonnet-4-20250514": "Claude Sonnet 4",
    "claude-haiku-4-5-20251001": "Claude Haiku 4.5 (fast)",
    "claude-3-5-haiku-20241022": "Claude 3.5 Haiku (economical)",
}


def resolve_model_alias(model: str) -> str:
    if model in SUPPORTED_MODELS:
        return model
    # unknown names pass through (may be an Ollama model)
    return MODEL_ALIASES.get(model, model)


def get_default_model(provider: str | None = None) -> str:
    if provider is None:
        return DEFAULT_MODELS_BY_PROVIDER["openai"]
    return DEFAULT_MODELS_BY_PROVIDER.get(provider, DEFAULT_MODELS_BY_PROVIDER["openai"])


# * Provider for a hosted model (None for unknown / local models)
def get_provider_for_model(model: str) -> str | None:
    resolved = resolve_model_alias(model)
    if resolved in OPENAI_MODELS:
        return "openai"
    if resolved in CLAUDE_MODELS:
        return "anthropic"
    return None


def get_model_description(model: str) -> str:
    return MODEL_DESCRIPTIONS.get(resolve_model_alias(model), model)


def supports_temperature(model: str) -> bool:
    return not model.startswith(FIXED_TEMPERATURE_PREFIXES)


# list hosted models for a provider (all hosted models when provider is None)
def list_models(provider: str | None = None) -> list[str]:
    if provider == "openai":
        return OPENAI_MODELS.copy()
    if provider == "anthropic":
        return CLAUDE_MODELS.copy()
    if provider is None:
        return SUPPORTED_MODELS.copy()
    return []
