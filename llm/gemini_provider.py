"""
Gemini LLM provider implementation.

Calls the generateContent REST endpoint directly with requests; no SDK.
Gemini has no separate system role here, so the system prompt and the
question are sent as one text part.
"""

import requests

from llm.provider import LLMProvider, LLMResponse, LLMError

GEMINI_API = "https://generativelanguage.googleapis.com/v1beta/models"


class GeminiProvider(LLMProvider):
    def __init__(self, api_key: str, model: str = "gemini-1.5-flash", timeout: float = 60):
        if not api_key:
            raise LLMError("Server missing GEMINI_API_KEY")
        self._api_key = api_key
        self._model = model
        self._timeout = timeout
        self._session = requests.Session()

    def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float = 0.5,
        max_tokens: int = 1000,
    ) -> LLMResponse:
        url = f"{GEMINI_API}/{self._model}:generateContent"
        body = {
            "contents": [{
                "parts": [{"text": f"{system_prompt}\n\nUser question: {user_prompt}"}],
            }],
            "generationConfig": {"temperature": temperature, "maxOutputTokens": max_tokens},
        }
        try:
            resp = self._session.post(
                url, params={"key": self._api_key}, json=body, timeout=self._timeout
            )
            data = resp.json()
        except (requests.RequestException, ValueError) as e:
            raise LLMError(f"Gemini API error: {e}") from e

        if resp.status_code != 200:
            error = data.get("error") if isinstance(data, dict) else None
            message = error.get("message") if isinstance(error, dict) else error
            raise LLMError(message or f"Gemini error {resp.status_code}")
        if not isinstance(data, dict):
            raise LLMError(f"Gemini API error: unexpected response body ({type(data).__name__})")

        try:
            text = data["candidates"][0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError):
            text = ""
        usage = data.get("usageMetadata") or {}
        return LLMResponse(
            text=text,
            input_tokens=usage.get("promptTokenCount", 0),
            output_tokens=usage.get("candidatesTokenCount", 0),
            model=self._model,
        )

    def name(self) -> str:
        return f"gemini/{self._model}"
