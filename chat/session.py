"""
Chat session. Owns the transcript and the currently loaded playlist.

Transcript rules:
- Append-only; cleared (and re-seeded with a greeting) only by load().
- The user turn is appended before the backend is called, so it always
  precedes the reply, even when the reply is an error.
- Backend failures become an assistant turn. submit() never raises them.

load() and submit() hold one lock for their whole duration, so callers on
different threads are served one at a time in lock-acquisition order.
"""

import logging
import threading

from chat.context import build_context
from chat.prompts import EMPTY_REPLY_FALLBACK, ERROR_REPLY, LOADED_GREETING
from llm.provider import LLMError, LLMProvider
from models import ConversationTurn, EnrichedItem, Playlist, Role

log = logging.getLogger(__name__)


class ChatSession:
    def __init__(
        self,
        backend: LLMProvider,
        context_max_items: int | None = None,
        max_tokens: int = 1000,
        temperature: float = 0.5,
    ):
        self._backend = backend
        self._context_max_items = context_max_items if context_max_items and context_max_items > 0 else None
        self._max_tokens = max_tokens
        self._temperature = temperature
        self._lock = threading.Lock()
        self._turns: list[ConversationTurn] = []
        self._playlist: Playlist | None = None

    @property
    def transcript(self) -> tuple[ConversationTurn, ...]:
        return tuple(self._turns)

    @property
    def playlist(self) -> Playlist | None:
        return self._playlist

    @property
    def title(self) -> str:
        return self._playlist.title if self._playlist else ""

    @property
    def items(self) -> list[EnrichedItem]:
        return self._playlist.items if self._playlist else []

    def load(self, playlist: Playlist) -> None:
        """Replace the playlist wholesale and start a fresh transcript."""
        with self._lock:
            self._playlist = playlist
            self._turns = []
            self._append(Role.ASSISTANT, LOADED_GREETING.format(
                count=playlist.video_count, title=playlist.title,
            ))

    def system_prompt(self) -> str:
        return build_context(self.title, self.items, max_items=self._context_max_items)

    def submit(self, user_text: str) -> ConversationTurn | None:
        """
        Ask one question. Returns the assistant turn, or None for blank input.
        """
        text = (user_text or "").strip()
        if not text:
            return None

        with self._lock:
            self._append(Role.USER, text)
            system_prompt = self.system_prompt()

            try:
                response = self._backend.complete(
                    system_prompt=system_prompt,
                    user_prompt=text,
                    temperature=self._temperature,
                    max_tokens=self._max_tokens,
                )
                reply = response.text or EMPTY_REPLY_FALLBACK
            except LLMError as e:
                log.error(f"Chat backend {self._backend.name()} failed: {e}")
                reply = ERROR_REPLY.format(message=e)

            return self._append(Role.ASSISTANT, reply)

    def _append(self, role: Role, content: str) -> ConversationTurn:
        turn = ConversationTurn(role=role, content=content)
        self._turns.append(turn)
        return turn
