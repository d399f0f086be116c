"""
OpenRouter LLM provider implementation.

OpenRouter speaks the OpenAI chat-completions API, so this is the OpenAI
provider pointed at a different base_url.
"""

from llm.openai_provider import OpenAIProvider
from llm.provider import LLMError

OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"


class OpenRouterProvider(OpenAIProvider):
    def __init__(self, api_key: str, model: str = "anthropic/claude-sonnet-4", client=None):
        if not api_key:
            raise LLMError("Server missing OPENROUTER_API_KEY")
        super().__init__(api_key=api_key, model=model, base_url=OPENROUTER_BASE_URL, client=client)

    def _label(self) -> str:
        return "OpenRouter"

    def name(self) -> str:
        return f"openrouter/{self._model}"
