"""
Configuration. All settings from env vars (or a .env file next to the process).

Secrets are only read by the proxy server. The client side (probe, loader,
chat) never touches the key fields.
"""

import os
from dataclasses import dataclass

# Auto-load .env file so you don't need `export $(grep ...)` every time
from dotenv import load_dotenv
load_dotenv()


@dataclass
class Config:
    # ── Proxy-side secrets. Read from env only, never sent by the client. ──
    youtube_api_key: str = os.environ.get("YOUTUBE_API_KEY", "")

    # LLM provider behind /api/ai: "openai" | "gemini" | "claude" | "openrouter"
    llm_provider: str = os.environ.get("PLAYLIST_LLM_PROVIDER", "openai")

    openai_api_key: str = os.environ.get("OPENAI_API_KEY", "")
    gemini_api_key: str = os.environ.get("GEMINI_API_KEY", "")
    anthropic_api_key: str = os.environ.get("ANTHROPIC_API_KEY", "")
    openrouter_api_key: str = os.environ.get("OPENROUTER_API_KEY", "")

    # Models
    openai_model: str = os.environ.get("PLAYLIST_OPENAI_MODEL", "gpt-3.5-turbo")
    gemini_model: str = os.environ.get("PLAYLIST_GEMINI_MODEL", "gemini-1.5-flash")
    anthropic_model: str = os.environ.get("PLAYLIST_ANTHROPIC_MODEL", "claude-sonnet-4-20250514")
    openrouter_model: str = os.environ.get("PLAYLIST_OPENROUTER_MODEL", "anthropic/claude-sonnet-4")

    # ── Connection ──
    # In-process proxy (python main.py serve)
    proxy_url: str = os.environ.get("PLAYLIST_PROXY_URL", "http://127.0.0.1:5002")
    # Remote-deployed proxy. Empty means "same as proxy_url".
    remote_proxy_url: str = os.environ.get("PLAYLIST_REMOTE_PROXY_URL", "")
    # "local" | "remote". Decides the probe's fallback when the local proxy is down.
    deployment: str = os.environ.get("PLAYLIST_DEPLOYMENT", "local")

    request_timeout: float = float(os.environ.get("PLAYLIST_REQUEST_TIMEOUT", "30"))
    probe_timeout: float = float(os.environ.get("PLAYLIST_PROBE_TIMEOUT", "3"))

    # ── Loading ──
    # Max keys per videos lookup. The YouTube API caps this at 50.
    batch_size: int = int(os.environ.get("PLAYLIST_BATCH_SIZE", "50"))

    # ── Chat ──
    # Videos rendered into the system prompt. 0 or negative = no cap.
    context_max_items: int = int(os.environ.get("PLAYLIST_CONTEXT_MAX_ITEMS", "500"))
    max_tokens: int = int(os.environ.get("PLAYLIST_MAX_TOKENS", "1000"))

    @property
    def remote_base_url(self) -> str:
        return self.remote_proxy_url or self.proxy_url


def load_config() -> Config:
    return Config()
