"""
Proxy server. The only component that holds upstream credentials.

- POST /api/youtube-proxy  attaches YOUTUBE_API_KEY and forwards to the
                           YouTube Data API (actions: ping, getPlaylistInfo,
                           getPlaylistItems, getVideos).
- POST /api/ai             runs one completion on the configured LLM provider.

Run: python main.py serve
"""

import logging

import requests
from flask import Flask, jsonify, request

from config.settings import Config
from llm.factory import create_provider
from llm.provider import LLMError

log = logging.getLogger(__name__)

YOUTUBE_API = "https://www.googleapis.com/youtube/v3"


def _youtube_request(action: str, body: dict) -> tuple[str, dict] | None:
    """Map an action to (resource, query params). None for unknown actions."""
    if action == "getPlaylistInfo":
        return "playlists", {"part": "snippet", "id": body.get("playlistId", "")}
    elif action == "getPlaylistItems":
        params = {
            "part": "snippet",
            "maxResults": 50,
            "playlistId": body.get("playlistId", ""),
        }
        if body.get("pageToken"):
            params["pageToken"] = body["pageToken"]
        return "playlistItems", params
    elif action == "getVideos":
        return "videos", {"part": "statistics,contentDetails", "id": body.get("ids", "")}
    return None


def create_app(config: Config, session: requests.Session | None = None, provider_factory=create_provider):
    app = Flask(__name__)
    http = session or requests.Session()

    # ── CORS: the proxy may be called from another origin ──
    @app.after_request
    def add_cors(response):
        response.headers["Access-Control-Allow-Origin"] = "*"
        response.headers["Access-Control-Allow-Headers"] = "Content-Type"
        response.headers["Access-Control-Allow-Methods"] = "POST, OPTIONS"
        return response

    @app.route("/api/youtube-proxy", methods=["POST"])
    def youtube_proxy():
        body = request.get_json(silent=True) or {}
        action = body.get("action")

        # connection probe
        if action == "ping":
            return jsonify({"ok": True})

        if not config.youtube_api_key:
            return jsonify({"error": "Server missing YOUTUBE_API_KEY"}), 500

        target = _youtube_request(action, body)
        if target is None:
            return jsonify({"error": "Unknown action"}), 400
        resource, params = target
        params["key"] = config.youtube_api_key

        try:
            upstream = http.get(
                f"{YOUTUBE_API}/{resource}",
                params=params,
                headers={"User-Agent": "Mozilla/5.0"},
                timeout=config.request_timeout,
            )
            data = upstream.json()
        except (requests.RequestException, ValueError) as e:
            log.error(f"youtube-proxy error ({action}): {e}")
            return jsonify({"error": str(e)}), 500

        if not upstream.ok:
            log.warning(f"youtube-proxy {action}: upstream HTTP {upstream.status_code}")
            return jsonify({"error": "Upstream error", "details": data}), upstream.status_code

        return jsonify(data)

    @app.route("/api/ai", methods=["POST"])
    def ai():
        body = request.get_json(silent=True) or {}
        system_prompt = body.get("systemPrompt") or ""
        user_message = body.get("userMessage") or ""

        if not system_prompt and not user_message:
            return jsonify({"error": "Missing prompt"}), 400

        try:
            provider = provider_factory(config)
            response = provider.complete(
                system_prompt=system_prompt,
                user_prompt=user_message,
                max_tokens=config.max_tokens,
            )
        except LLMError as e:
            log.error(f"AI proxy error: {e}")
            return jsonify({"error": str(e)}), 500
        except Exception as e:
            log.exception(f"AI proxy failure in {type(e).__name__}")
            return jsonify({"error": str(e) or type(e).__name__}), 500

        log.info(
            f"AI reply from {response.model or provider.name()}: "
            f"{response.input_tokens} in / {response.output_tokens} out"
        )
        return jsonify({"text": response.text})

    @app.route("/")
    def index():
        return jsonify({
            "message": "playlist-chat proxy",
            "endpoints": ["/api/youtube-proxy", "/api/ai"],
        })

    return app
