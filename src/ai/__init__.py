# src/ai/__init__.py
# Chat model clients, prompts & caches

from typing import Any

from .prompts import build_system_prompt, build_chat_messages
from .types import Attachment, ChatResult


# * Lazy proxy to avoid importing provider SDKs at package import time
def run_chat(
    messages: list[dict[str, str]],
    model: str,
    temperature: float | None = None,
    cancel: Any = None,
) -> ChatResult:
    from .clients.factory import run_chat as _run_chat

    return _run_chat(messages, model, temperature, cancel)


__all__ = [
    "build_system_prompt",
    "build_chat_messages",
    "run_chat",
    "Attachment",
    "ChatResult",
]
