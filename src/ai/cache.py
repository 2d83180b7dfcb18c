# src/ai/cache.py
# Provider status cache & per-session chat response cache w/ TTL & LRU eviction

from __future__ import annotations

import hashlib
import json
import threading
import time
from collections import OrderedDict
from dataclasses import replace
from typing import Callable

from .types import ChatResult


# in-memory provider availability cache (static class)
class AICache:
    _provider_available: dict[str, bool] = {}
    _ollama_models: list[str] | None = None
    _ollama_error: str = ""

    # * Clear all caches (call when settings change to ensure coherence)
    @classmethod
    def invalidate_all(cls) -> None:
        cls._provider_available.clear()
        cls._ollama_models = None
        cls._ollama_error = ""

    @classmethod
    def get_provider_available(cls, provider: str) -> bool | None:
        return cls._provider_available.get(provider)

    @classmethod
    def set_provider_available(cls, provider: str, available: bool) -> None:
        cls._provider_available[provider] = available

    @classmethod
    def get_ollama_models(cls) -> list[str] | None:
        return cls._ollama_models

    @classmethod
    def get_ollama_error(cls) -> str:
        return cls._ollama_error

    # set Ollama status & update provider availability
    @classmethod
    def set_ollama_status(cls, models: list[str] | None, error: str = "") -> None:
        cls._ollama_models = models
        cls._ollama_error = error
        cls._provider_available["ollama"] = models is not None

    @classmethod
    def is_ollama_cached(cls) -> bool:
        return cls._ollama_models is not None or cls._ollama_error != ""


# * In-memory reply cache owned by one editor session
# Entries expire after ttl_seconds; the least recently used entry is evicted past max_entries
class ResponseCache:
    def __init__(
        self,
        ttl_seconds: float = 300.0,
        max_entries: int = 50,
        enabled: bool = True,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._ttl = ttl_seconds
        self._max_entries = max_entries
        self._enabled = enabled
        self._clock = clock
        self._entries: OrderedDict[str, tuple[float, ChatResult]] = OrderedDict()
        self._lock = threading.Lock()
        # runtime stats
        self._hits = 0
        self._misses = 0

    @property
    def enabled(self) -> bool:
        return self._enabled

    @enabled.setter
    def enabled(self, value: bool) -> None:
        self._enabled = value

    def __len__(self) -> int:
        return len(self._entries)

    # key covers the full message list (system prompt embeds the document), model & temperature
    @staticmethod
    def make_key(
        messages: list[dict[str, str]], model: str, temperature: float | None
    ) -> str:
        payload = json.dumps(
            {"messages": messages, "model": model, "temperature": temperature},
            sort_keys=True,
            ensure_ascii=False,
        )
        return hashlib.sha256(payload.encode("utf-8")).hexdigest()

    # * Cached result or None when missing / expired / disabled
    def get(self, key: str) -> ChatResult | None:
        if not self._enabled:
            return None

        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self._misses += 1
                return None

            stored_at, result = entry
            if self._clock() - stored_at > self._ttl:
                del self._entries[key]
                self._misses += 1
                return None

            self._entries.move_to_end(key)
            self._hits += 1
            return replace(result, cached=True)

    # * Store a successful result; failures are never cached
    def set(self, key: str, result: ChatResult) -> None:
        if not self._enabled or not result.success:
            return

        with self._lock:
            self._entries[key] = (self._clock(), result)
            self._entries.move_to_end(key)
            while self._max_entries > 0 and len(self._entries) > self._max_entries:
                self._entries.popitem(last=False)

    def clear(self) -> int:
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
            return count

    # drop expired entries & return how many were removed
    def clear_expired(self) -> int:
        now = self._clock()
        with self._lock:
            expired = [k for k, (at, _) in self._entries.items() if now - at > self._ttl]
            for key in expired:
                del self._entries[key]
            return len(expired)

    def stats(self) -> dict:
        total = self._hits + self._misses
        hit_rate = (self._hits / total * 100) if total > 0 else 0.0
        return {
            "enabled": self._enabled,
            "entries": len(self._entries),
            "max_entries": self._max_entries,
            "ttl_seconds": self._ttl,
            "hits": self._hits,
            "misses": self._misses,
            "hit_rate": f"{hit_rate:.1f}%",
        }
