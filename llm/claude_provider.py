"""
Anthropic provider for /api/ai.

The system prompt (the rendered playlist) goes in the Messages API's
`system` field and the question is the single user message. A reply can
come back as several content blocks; only text blocks are kept, joined in
order. Tool-use or thinking blocks never reach the chat transcript.
"""

from llm.provider import LLMProvider, LLMResponse, LLMError


def _reply_text(content) -> str:
    return "".join(
        getattr(block, "text", "") or ""
        for block in content or []
        if getattr(block, "type", "") == "text"
    )


class ClaudeProvider(LLMProvider):
    def __init__(self, api_key: str, model: str = "claude-sonnet-4-20250514", client=None):
        if not api_key:
            raise LLMError("Server missing ANTHROPIC_API_KEY")
        if client is None:
            try:
                import anthropic
            except ImportError:
                raise LLMError("anthropic package not installed: pip install anthropic")
            client = anthropic.Anthropic(api_key=api_key)
        self._client = client
        self._model = model

    def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float = 0.5,
        max_tokens: int = 1000,
    ) -> LLMResponse:
        request = {
            "model": self._model,
            "max_tokens": max_tokens,
            "temperature": temperature,
            "messages": [{"role": "user", "content": user_prompt}],
        }
        # Question-only requests go out without a system field
        if system_prompt:
            request["system"] = system_prompt

        try:
            response = self._client.messages.create(**request)
        except Exception as e:
            raise LLMError(f"Claude API error: {e}") from e

        usage = getattr(response, "usage", None)
        return LLMResponse(
            text=_reply_text(response.content),
            input_tokens=getattr(usage, "input_tokens", 0) or 0,
            output_tokens=getattr(usage, "output_tokens", 0) or 0,
            model=getattr(response, "model", "") or self._model,
        )

    def name(self) -> str:
        return f"claude/{self._model}"
