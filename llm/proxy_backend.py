"""
Conversational backend reached through the proxy's /api/ai route.

Request:  {"systemPrompt": ..., "userMessage": ...}
Response: {"text": ...} on 200, {"error": ...} otherwise.
"""

import logging

import requests

from llm.provider import ConversationError, LLMProvider, LLMResponse

log = logging.getLogger(__name__)


class ProxyBackend(LLMProvider):
    def __init__(self, base_url: str, timeout: float = 60, session: requests.Session | None = None):
        self._url = f"{base_url.rstrip('/')}/api/ai"
        self._timeout = timeout
        self._session = session or requests.Session()
        self._session.headers["User-Agent"] = "playlist-chat/0.1"

    def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float = 0.5,
        max_tokens: int = 1000,
    ) -> LLMResponse:
        # temperature/max_tokens are decided by the proxy's provider config
        try:
            resp = self._session.post(
                self._url,
                json={"systemPrompt": system_prompt, "userMessage": user_prompt},
                timeout=self._timeout,
            )
        except requests.RequestException as e:
            raise ConversationError(f"AI backend unreachable: {e}") from e

        try:
            data = resp.json()
        except ValueError:
            data = None

        if resp.status_code != 200:
            message = data.get("error") if isinstance(data, dict) else None
            log.warning(f"AI backend HTTP {resp.status_code}: {message}")
            raise ConversationError(message or "AI backend error")

        if not isinstance(data, dict):
            raise ConversationError("AI backend returned a malformed response")

        text = data.get("text") or ""
        if not isinstance(text, str):
            raise ConversationError("AI backend returned a malformed response")
        return LLMResponse(text=text, model=self.name())

    def name(self) -> str:
        return f"proxy/{self._url}"
