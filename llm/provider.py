"""
LLMProvider interface. Every call to a conversational backend goes through it.

Two kinds of implementation:
- Vendor providers (OpenAI, Gemini, Claude, OpenRouter). Hold API keys and
  run only inside the proxy server.
- ProxyBackend. Holds no secrets; forwards to the proxy's /api/ai route.
  This is what the chat session talks to.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass
class LLMResponse:
    """What comes back from any LLM call."""
    text: str
    input_tokens: int = 0
    output_tokens: int = 0
    model: str = ""


class LLMProvider(ABC):
    """
    Single interface for all conversational backends.

    One method: `complete`. System prompt + one user message; the playlist
    context is rebuilt into the system prompt on every turn, so no history
    is sent.
    """

    @abstractmethod
    def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float = 0.5,
        max_tokens: int = 1000,
    ) -> LLMResponse:
        """
        Send a prompt to the backend and get a response.

        Args:
            system_prompt: Playlist context and instructions.
            user_prompt: The user's question.
            temperature: 0.0-1.0, lower = more deterministic.
            max_tokens: Upper bound on response length.

        Returns:
            LLMResponse. `text` may be empty.

        Raises:
            LLMError: On any backend failure.
        """
        ...

    @abstractmethod
    def name(self) -> str:
        """Return provider name for logging."""
        ...


class LLMError(Exception):
    """Raised when an LLM call fails."""
    pass


class ConversationError(LLMError):
    """The conversational backend answered with an error or an unreadable body."""
    pass
