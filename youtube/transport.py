"""
Transports for YouTube Data API calls.

Two ways to reach the API:
- ProxyTransport: POST to our own proxy (api/server.py), which attaches the
  API key. Used for both the local and the remote-deployed proxy.
- DirectTransport: GET googleapis.com with no credentials. Expected to fail;
  exists so the caller gets a concrete upstream error to show the user.

Every call returns the decoded JSON dict or raises UpstreamError. No retries.
"""

import logging
from abc import ABC, abstractmethod

import requests

from config.settings import Config
from models import ConnectionMode
from youtube.errors import UpstreamError

log = logging.getLogger(__name__)

YOUTUBE_API = "https://www.googleapis.com/youtube/v3"
USER_AGENT = "playlist-chat/0.1"


def _error_message(resp: requests.Response) -> str:
    """
    Best human-readable message from a failed response.

    Proxy shape:  {"error": "Upstream error", "details": {"error": {"message": ...}}}
    Google shape: {"error": {"code": 403, "message": ...}}
    """
    fallback = f"YouTube API returned {resp.status_code}"
    try:
        body = resp.json()
    except ValueError:
        return fallback
    if not isinstance(body, dict):
        return fallback

    error = body.get("error")
    details = body.get("details")
    if isinstance(details, dict) and isinstance(details.get("error"), dict):
        message = details["error"].get("message")
        if message:
            return message
    if isinstance(error, dict) and error.get("message"):
        return error["message"]
    if isinstance(error, str) and error and error != "Upstream error":
        return error
    return fallback


def _decode(resp: requests.Response) -> dict:
    if resp.status_code != 200:
        message = _error_message(resp)
        log.warning(f"YouTube call failed: HTTP {resp.status_code}: {message}")
        raise UpstreamError(message, status_code=resp.status_code)
    try:
        data = resp.json()
    except ValueError as e:
        raise UpstreamError(f"Malformed response body: {e}", status_code=resp.status_code) from e
    if not isinstance(data, dict):
        raise UpstreamError(
            f"Malformed response body: expected object, got {type(data).__name__}",
            status_code=resp.status_code,
        )
    return data


class Transport(ABC):
    """
    How upstream calls are routed. One instance per loaded connection mode.

    Subclasses implement `_call`; the public methods pin down the payloads.
    """

    def __init__(self, timeout: float = 30, session: requests.Session | None = None):
        self._timeout = timeout
        self._session = session or requests.Session()
        self._session.headers["User-Agent"] = USER_AGENT

    @abstractmethod
    def _call(self, action: str, params: dict) -> dict:
        ...

    @abstractmethod
    def name(self) -> str:
        """Transport name, for logging."""
        ...

    def get_playlist_info(self, playlist_id: str) -> dict:
        return self._call("getPlaylistInfo", {"playlistId": playlist_id})

    def list_items(self, playlist_id: str, page_token: str = "") -> dict:
        return self._call("getPlaylistItems", {"playlistId": playlist_id, "pageToken": page_token})

    def get_videos(self, video_ids: list[str]) -> dict:
        return self._call("getVideos", {"ids": ",".join(video_ids)})


class ProxyTransport(Transport):
    def __init__(self, base_url: str, timeout: float = 30, session: requests.Session | None = None):
        super().__init__(timeout, session)
        self._url = f"{base_url.rstrip('/')}/api/youtube-proxy"

    def name(self) -> str:
        return f"proxy({self._url})"

    def _call(self, action: str, params: dict) -> dict:
        payload = {"action": action, **params}
        try:
            resp = self._session.post(self._url, json=payload, timeout=self._timeout)
        except requests.RequestException as e:
            raise UpstreamError(f"Proxy request failed: {e}") from e
        return _decode(resp)


class DirectTransport(Transport):
    _ENDPOINTS = {
        "getPlaylistInfo": ("playlists", lambda p: {"part": "snippet", "id": p["playlistId"]}),
        "getPlaylistItems": ("playlistItems", lambda p: {
            "part": "snippet",
            "maxResults": 50,
            "playlistId": p["playlistId"],
            **({"pageToken": p["pageToken"]} if p.get("pageToken") else {}),
        }),
        "getVideos": ("videos", lambda p: {"part": "statistics,contentDetails", "id": p["ids"]}),
    }

    def name(self) -> str:
        return "direct"

    def _call(self, action: str, params: dict) -> dict:
        resource, build_params = self._ENDPOINTS[action]
        try:
            resp = self._session.get(
                f"{YOUTUBE_API}/{resource}", params=build_params(params), timeout=self._timeout
            )
        except requests.RequestException as e:
            raise UpstreamError(f"Direct YouTube request failed: {e}") from e
        return _decode(resp)


def create_transport(mode: ConnectionMode, config: Config) -> Transport:
    """Pick the transport for a resolved connection mode."""
    if mode == ConnectionMode.PROXY_LOCAL:
        return ProxyTransport(config.proxy_url, timeout=config.request_timeout)
    elif mode == ConnectionMode.PROXY_REMOTE:
        return ProxyTransport(config.remote_base_url, timeout=config.request_timeout)
    elif mode == ConnectionMode.DIRECT_UNSUPPORTED:
        return DirectTransport(timeout=config.request_timeout)
    else:
        raise ValueError(f"Connection mode not resolved yet: {mode.value}. Run the probe first.")
