# src/quill_io/history.py
# Append-only conversation history & feedback store (JSON lines)
#
# * Every write appends one event; ratings are folded onto their turn at read time,
# * so a rating is never lost to a concurrent rewrite of the file.

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator

from .generics import append_jsonl, iter_jsonl
from ..core.exceptions import HistoryError
from ..core.output import LogCategory
from ..core.verbose import vlog

TURN_EVENT = "turn"
RATING_EVENT = "rating"

MIN_RATING = 0
MAX_RATING = 5
# turns rated at least this high (or marked helpful) are reused as prompt examples
HIGH_RATING = 4


# * One stored exchange w/ its latest feedback
@dataclass(slots=True)
class HistoryRecord:
    conversation_id: str
    session_id: str
    user_message: str
    ai_response: str
    timestamp: str
    rating: int = 0
    was_helpful: bool | None = None

    @property
    def is_high_rated(self) -> bool:
        return self.rating >= HIGH_RATING or self.was_helpful is True


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class HistoryStore:
    def __init__(self, path: Path):
        self.path = Path(path)

    # * Record one exchange & return its opaque conversation id
    def append_turn(self, session_id: str, user_message: str, ai_response: str) -> str:
        conversation_id = uuid.uuid4().hex[:12]
        append_jsonl(
            {
                "type": TURN_EVENT,
                "id": conversation_id,
                "session_id": session_id,
                "user_message": user_message,
                "ai_response": ai_response,
                "timestamp": _now(),
            },
            self.path,
        )
        vlog(LogCategory.SESSION, f"Saved conversation {conversation_id}")
        return conversation_id

    # * Append a rating event; the latest rating for a conversation wins
    def rate(self, conversation_id: str, rating: int, was_helpful: bool | None = None) -> None:
        if not MIN_RATING <= rating <= MAX_RATING:
            raise HistoryError(f"Rating must be {MIN_RATING}-{MAX_RATING}, got {rating}")
        if conversation_id not in self._fold():
            raise HistoryError(f"Unknown conversation id: {conversation_id}")

        append_jsonl(
            {
                "type": RATING_EVENT,
                "id": conversation_id,
                "rating": rating,
                "was_helpful": was_helpful,
                "timestamp": _now(),
            },
            self.path,
        )

    def _events(self) -> Iterator[dict]:
        return iter_jsonl(self.path)

    # turns keyed by id (insertion order = chronological) w/ ratings applied
    def _fold(self) -> dict[str, HistoryRecord]:
        records: dict[str, HistoryRecord] = {}
        for event in self._events():
            kind = event.get("type")
            if kind == TURN_EVENT:
                records[event["id"]] = HistoryRecord(
                    conversation_id=event["id"],
                    session_id=event.get("session_id", ""),
                    user_message=event.get("user_message", ""),
                    ai_response=event.get("ai_response", ""),
                    timestamp=event.get("timestamp", ""),
                )
            elif kind == RATING_EVENT and event.get("id") in records:
                record = records[event["id"]]
                record.rating = int(event.get("rating", 0))
                record.was_helpful = event.get("was_helpful")
        return records

    def get(self, conversation_id: str) -> HistoryRecord | None:
        return self._fold().get(conversation_id)

    # most recent turns of a session, newest first
    def recent(self, session_id: str, limit: int = 10) -> list[HistoryRecord]:
        matching = [r for r in self._fold().values() if r.session_id == session_id]
        return list(reversed(matching))[:limit]

    # newest turns across all sessions
    def latest(self, limit: int = 10) -> list[HistoryRecord]:
        return list(reversed(self._fold().values()))[:limit]

    # * Rated-good turns, best rating first then newest first
    def high_rated(self, limit: int = 3) -> list[HistoryRecord]:
        good = [r for r in self._fold().values() if r.is_high_rated]
        good.sort(key=lambda r: (r.rating, r.timestamp), reverse=True)
        return good[:limit]

    # case-insensitive substring search over both sides of the exchange
    def search(self, query: str, limit: int = 10) -> list[HistoryRecord]:
        needle = query.lower()
        hits = [
            r
            for r in self._fold().values()
            if needle in r.user_message.lower() or needle in r.ai_response.lower()
        ]
        return list(reversed(hits))[:limit]

    def stats(self) -> dict:
        records = list(self._fold().values())
        rated = [r.rating for r in records if r.rating > 0]
        return {
            "total_conversations": len(records),
            "sessions": len({r.session_id for r in records}),
            "avg_rating": round(sum(rated) / len(rated), 2) if rated else 0.0,
            "helpful_responses": sum(1 for r in records if r.was_helpful is True),
        }
