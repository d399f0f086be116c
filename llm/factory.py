"""
Factories. Reads config, returns the right LLMProvider.

- create_provider: the vendor provider the proxy server uses for /api/ai.
- create_backend: what the chat session talks to for a connection mode.
"""

from config.settings import Config
from llm.provider import LLMProvider, LLMError
from models import ConnectionMode


def create_provider(config: Config) -> LLMProvider:
    """Create vendor provider based on config. Provider selected at runtime."""
    provider = config.llm_provider.lower()

    if provider == "openai":
        from llm.openai_provider import OpenAIProvider
        return OpenAIProvider(
            api_key=config.openai_api_key,
            model=config.openai_model,
        )
    elif provider == "gemini":
        from llm.gemini_provider import GeminiProvider
        return GeminiProvider(
            api_key=config.gemini_api_key,
            model=config.gemini_model,
            timeout=config.request_timeout,
        )
    elif provider == "claude":
        from llm.claude_provider import ClaudeProvider
        return ClaudeProvider(
            api_key=config.anthropic_api_key,
            model=config.anthropic_model,
        )
    elif provider == "openrouter":
        from llm.openrouter_provider import OpenRouterProvider
        return OpenRouterProvider(
            api_key=config.openrouter_api_key,
            model=config.openrouter_model,
        )
    else:
        raise LLMError(
            f"Unknown LLM provider: '{provider}'. "
            f"Set PLAYLIST_LLM_PROVIDER to 'openai', 'gemini', 'claude', or 'openrouter'."
        )


def create_backend(mode: ConnectionMode, config: Config) -> LLMProvider:
    """
    Conversational backend for a resolved connection mode.

    Always the proxy: the client never holds provider keys. In direct mode
    the local proxy URL is used anyway, and chat calls fail with a readable
    error turn.
    """
    from llm.proxy_backend import ProxyBackend

    if mode == ConnectionMode.CHECKING:
        raise ValueError("Connection mode not resolved yet. Run the probe first.")
    if mode == ConnectionMode.PROXY_REMOTE:
        return ProxyBackend(config.remote_base_url, timeout=config.request_timeout)
    return ProxyBackend(config.proxy_url, timeout=config.request_timeout)
