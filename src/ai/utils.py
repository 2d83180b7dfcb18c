# src/ai/utils.py
# Helpers for chat message lists & raw provider text

from __future__ import annotations

import re
from dataclasses import dataclass

_THINKING_RE = re.compile(r"^\s*<think>.*?</think>\s*", re.DOTALL)


# * Context object for API call results (used by BaseClient._process_response)
@dataclass(slots=True)
class APICallContext:
    raw_text: str  # raw response text from provider
    provider_name: str  # provider ID: "openai", "anthropic", "ollama"
    model: str  # model used for the call


# strip leading <think>...</think> block emitted by reasoning models
def strip_thinking_tokens(text: str) -> str:
    return _THINKING_RE.sub("", text, count=1).strip()


# * Split a message list into (system prompt, remaining turns)
def split_system_message(
    messages: list[dict[str, str]],
) -> tuple[str, list[dict[str, str]]]:
    system_parts = [m["content"] for m in messages if m.get("role") == "system"]
    rest = [m for m in messages if m.get("role") != "system"]
    return "\n\n".join(system_parts), rest


# * Keep the system prompt plus the most recent max_turns messages
def trim_messages(
    messages: list[dict[str, str]], max_turns: int
) -> list[dict[str, str]]:
    system, rest = split_system_message(messages)
    recent = rest[-max_turns:] if max_turns > 0 else []
    if not system:
        return recent
    return [{"role": "system", "content": system}] + recent


# * Reply has a code fence of any kind (used to flag unextractable code)
def has_code_fence(text: str) -> bool:
    return "```" in text
