"""
OpenAI LLM provider implementation. The default behind /api/ai.
"""

from llm.provider import LLMProvider, LLMResponse, LLMError


class OpenAIProvider(LLMProvider):
    def __init__(self, api_key: str, model: str = "gpt-3.5-turbo", base_url: str | None = None, client=None):
        if not api_key:
            raise LLMError("Server missing OPENAI_API_KEY")
        if client is None:
            try:
                import openai
            except ImportError:
                raise LLMError("openai package not installed: pip install openai")
            client = openai.OpenAI(api_key=api_key, base_url=base_url)
        self._client = client
        self._model = model
        self._base_url = base_url

    def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float = 0.5,
        max_tokens: int = 1000,
    ) -> LLMResponse:
        try:
            response = self._client.chat.completions.create(
                model=self._model,
                max_tokens=max_tokens,
                temperature=temperature,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
            )
        except Exception as e:
            raise LLMError(f"{self._label()} API error: {e}") from e

        if not response.choices:
            return LLMResponse(text="", model=self._model)
        usage = response.usage
        return LLMResponse(
            text=response.choices[0].message.content or "",
            input_tokens=usage.prompt_tokens if usage else 0,
            output_tokens=usage.completion_tokens if usage else 0,
            model=self._model,
        )

    def _label(self) -> str:
        return "OpenAI"

    def name(self) -> str:
        return f"openai/{self._model}"
