# src/core/session.py
# Per-editor chat session: field fast path, cancellable LLM round trip, patch resolution & history
#
# * A session owns its response cache, its edit executor (busy flag) & its chat turns.
# * Cancelling a request never touches the document; a late reply from an abandoned call is dropped.

from __future__ import annotations

import threading
import uuid
from typing import Any, Callable, Sequence

from ..ai.cache import ResponseCache
from ..ai.prompts import build_chat_messages, build_system_prompt
from ..ai.types import Attachment, ChatResult
from ..ai.utils import has_code_fence
from .constants import EDITOR_BUSY_ERROR, OutcomeKind
from .debug import debug_error
from .edit_executor import AnimationOptions, EditExecutor, TextBuffer
from .exceptions import QuillError
from .field_locator import detect_edit_command
from .output import LogCategory
from .patch_resolver import resolve_patch
from .response_classifier import extract_code_block
from .types import ChatTurn, SessionOutcome, UpdateResult
from .verbose import vlog

ChatFn = Callable[
    [list[dict[str, str]], str, "float | None", "CancelToken | None"], ChatResult
]

# seconds between cancellation checks while a chat call is in flight
CANCEL_POLL_INTERVAL = 0.05
# seconds to wait for an aborted chat call to unwind
CANCEL_JOIN_TIMEOUT = 5.0

CODE_EXTRACTION_WARNING = "Failed to extract code from AI response"
CANCELLED_MESSAGE = "Request cancelled"
EDIT_CONFIRMATION = 'I\'ve updated your {field} from "{old}" to "{new}"'


# * Cancellation signal shared between the caller & an in-flight chat request
# clients register abort hooks (closing the SDK connection) w/ on_cancel
class CancelToken:
    def __init__(self) -> None:
        self._event = threading.Event()
        self._lock = threading.Lock()
        self._callbacks: list[Callable[[], Any]] = []

    def cancel(self) -> None:
        with self._lock:
            if self._event.is_set():
                return
            self._event.set()
            callbacks, self._callbacks = self._callbacks, []
        for callback in callbacks:
            try:
                callback()
            except Exception as e:
                debug_error(e, "Aborting chat request")

    # run callback on cancel; immediately when already cancelled
    def on_cancel(self, callback: Callable[[], Any]) -> None:
        with self._lock:
            if not self._event.is_set():
                self._callbacks.append(callback)
                return
        callback()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def wait(self, timeout: float | None = None) -> bool:
        return self._event.wait(timeout)


def _default_chat(
    messages: list[dict[str, str]],
    model: str,
    temperature: float | None,
    cancel: CancelToken | None = None,
) -> ChatResult:
    from ..ai import run_chat

    return run_chat(messages, model, temperature, cancel)


class EditorSession:
    def __init__(
        self,
        document: str,
        model: str | None = None,
        settings: Any = None,
        chat: ChatFn | None = None,
        history: Any = None,
        executor: EditExecutor | None = None,
        animation: AnimationOptions | None = None,
        session_id: str | None = None,
    ):
        if settings is None:
            from ..config.settings import settings_manager

            settings = settings_manager.load()

        self.settings = settings
        self.model = model or settings.model
        self.session_id = session_id or uuid.uuid4().hex[:12]
        self.turns: list[ChatTurn] = []
        self.history = history
        self.cache = ResponseCache(
            ttl_seconds=settings.cache_ttl_seconds,
            max_entries=settings.cache_max_entries,
            enabled=settings.cache_enabled,
        )
        self.executor = executor or EditExecutor(TextBuffer(document))
        self.animation = animation or AnimationOptions.instant()
        self._chat = chat or _default_chat
        self._document = document
        self._apply_lock = threading.Lock()

    def __enter__(self) -> "EditorSession":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    # * Current document revision
    @property
    def document(self) -> str:
        return self._document

    # * Replace the document w/ a resolved update (single writer)
    def apply(self, update: UpdateResult | str) -> None:
        text = update if isinstance(update, str) else update.document
        with self._apply_lock:
            self._document = text

    # end of session lifecycle: drop cached replies & chat context
    def close(self) -> None:
        cleared = self.cache.clear()
        self.turns.clear()
        vlog(LogCategory.SESSION, f"Session {self.session_id} closed", f"{cleared} cached replies dropped")

    # * Handle one user instruction: fast path first, then the LLM
    def handle(
        self,
        instruction: str,
        cancel: CancelToken | None = None,
        attachments: Sequence[Attachment] = (),
        apply: bool = True,
    ) -> SessionOutcome:
        cancel = cancel or CancelToken()
        if cancel.cancelled:
            return SessionOutcome(kind=OutcomeKind.CANCELLED, message=CANCELLED_MESSAGE)

        if detect_edit_command(instruction):
            outcome = self._try_fast_path(instruction, apply)
            if outcome is not None:
                return outcome

        return self._chat_turn(instruction, cancel, attachments, apply)

    # rate a previous reply in the history store
    def rate(self, conversation_id: str, rating: int, was_helpful: bool | None = None) -> None:
        if self.history is None:
            raise QuillError("History is disabled for this session")
        self.history.rate(conversation_id, rating, was_helpful)

    # keep the executor's in-memory buffer in step w/ the current revision
    def _sync_buffer(self) -> None:
        buffer = self.executor.buffer
        current = buffer.text()
        if current != self._document:
            buffer.delete(0, len(current))
            buffer.insert(0, self._document)

    # None means "not handled here, ask the LLM"
    def _try_fast_path(self, instruction: str, apply: bool) -> SessionOutcome | None:
        if self.executor.is_busy:
            return SessionOutcome(kind=OutcomeKind.ERROR, error=EDITOR_BUSY_ERROR)

        self._sync_buffer()
        lookup = self.executor.parse_edit_command(instruction)
        if not lookup.found or lookup.match is None or not lookup.match.new_value:
            reason = lookup.reason or "no new value in instruction"
            vlog(LogCategory.SESSION, "Fast path skipped, asking the model", reason)
            return None

        if not apply:
            match = lookup.match
            return SessionOutcome(
                kind=OutcomeKind.EDIT,
                message=EDIT_CONFIRMATION.format(field=match.field, old=match.old_value, new=match.new_value),
            )

        edit = self.executor.execute_edit_command(instruction, self.animation)
        if not edit.success:
            if edit.error == EDITOR_BUSY_ERROR:
                return SessionOutcome(kind=OutcomeKind.ERROR, edit=edit, error=edit.error)
            return None

        self.apply(self.executor.buffer.text())
        message = EDIT_CONFIRMATION.format(field=edit.field, old=edit.old_value, new=edit.new_value)
        vlog(LogCategory.SESSION, "Fast path edit applied", message)
        return SessionOutcome(kind=OutcomeKind.EDIT, message=message, edit=edit)

    def _build_messages(self, attachments: Sequence[Attachment]) -> list[dict[str, str]]:
        examples = self._high_rated_examples()
        system_prompt = build_system_prompt(self._document, attachments, examples)
        return build_chat_messages(system_prompt, self.turns, self.settings.max_context_turns)

    def _high_rated_examples(self) -> list[Any]:
        if self.history is None:
            return []
        try:
            return self.history.high_rated(3)
        except QuillError as e:
            debug_error(e, "Loading rated examples")
            return []

    def _chat_turn(
        self,
        instruction: str,
        cancel: CancelToken,
        attachments: Sequence[Attachment],
        apply: bool,
    ) -> SessionOutcome:
        self.turns.append(ChatTurn(role="user", content=instruction))
        messages = self._build_messages(attachments)
        temperature = self.settings.temperature
        key = ResponseCache.make_key(messages, self.model, temperature)

        result = self.cache.get(key)
        if result is not None:
            vlog(LogCategory.CACHE, f"Cache hit for {self.model}")
        else:
            try:
                result = self._call_cancellable(messages, temperature, cancel)
            except Exception as e:
                self.turns.pop()
                return SessionOutcome(kind=OutcomeKind.ERROR, error=str(e))

            if result is None:
                self.turns.pop()
                vlog(LogCategory.SESSION, "Chat request cancelled")
                return SessionOutcome(kind=OutcomeKind.CANCELLED, message=CANCELLED_MESSAGE)
            self.cache.set(key, result)

        if not result.success:
            self.turns.pop()
            return SessionOutcome(kind=OutcomeKind.ERROR, error=result.error)

        self.turns.append(ChatTurn(role="assistant", content=result.text))
        conversation_id = self._record(instruction, result.text)

        code = extract_code_block(result.text)
        if code is None:
            warning = CODE_EXTRACTION_WARNING if has_code_fence(result.text) else None
            return SessionOutcome(
                kind=OutcomeKind.REPLY,
                message=result.text,
                warning=warning,
                conversation_id=conversation_id,
            )

        update = resolve_patch(self._document, code, instruction)
        if apply:
            self.apply(update)
        return SessionOutcome(
            kind=OutcomeKind.PATCH,
            message=result.text,
            update=update,
            warning=update.warning,
            conversation_id=conversation_id,
        )

    # run the chat call on a worker thread; None when cancelled first
    def _call_cancellable(
        self,
        messages: list[dict[str, str]],
        temperature: float,
        cancel: CancelToken,
    ) -> ChatResult | None:
        done = threading.Event()
        box: dict[str, Any] = {}

        def worker() -> None:
            try:
                box["result"] = self._chat(messages, self.model, temperature, cancel)
            except Exception as e:
                box["error"] = e
            finally:
                done.set()

        thread = threading.Thread(target=worker, name=f"quill-chat-{self.session_id}", daemon=True)
        thread.start()

        while not done.wait(CANCEL_POLL_INTERVAL):
            if cancel.cancelled:
                break

        if cancel.cancelled:
            # abort hooks already fired; let the worker unwind before returning
            thread.join(CANCEL_JOIN_TIMEOUT)
            if thread.is_alive():
                vlog(LogCategory.SESSION, "Chat worker still running after cancel", thread.name)
            return None

        if "error" in box:
            raise box["error"]
        return box["result"]

    # history is fire-and-forget: a failed write never fails the turn
    def _record(self, instruction: str, reply: str) -> str | None:
        if self.history is None:
            return None
        try:
            return self.history.append_turn(self.session_id, instruction, reply)
        except QuillError as e:
            debug_error(e, "Saving conversation history")
            return None
