# src/ai/types.py
# Shared result types for chat providers

from __future__ import annotations

from dataclasses import dataclass


# * Result of one chat round trip; clients return this instead of raising
@dataclass(slots=True)
class ChatResult:
    success: bool
    text: str = ""  # assistant reply (thinking tokens removed)
    error: str = ""  # error message on failure
    provider: str = ""  # "openai", "anthropic", "ollama"
    model: str = ""  # resolved model name
    cached: bool = False  # served from a session response cache


# * Status object for Ollama server availability & model discovery
@dataclass(slots=True)
class OllamaStatus:
    available: bool  # whether Ollama server is accessible
    models: list[str]  # list of available model names
    error: str  # error message if unavailable (empty if success)


# * Text of an uploaded file passed to the model as extra context
@dataclass(slots=True)
class Attachment:
    name: str
    content: str
