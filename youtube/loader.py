"""
Playlist loader: URL -> id -> title -> all pages -> enriched items.

Calls are strictly sequential. Title lookup is best-effort; everything
else aborts the load with a PlaylistError.
"""

import logging

from models import ConnectionMode, Playlist
from youtube.aggregator import PaginationAggregator
from youtube.enricher import MAX_BATCH_SIZE, BatchEnricher
from youtube.errors import InvalidIdentifier, UpstreamError
from youtube.identifier import extract_playlist_id
from youtube.transport import Transport

log = logging.getLogger(__name__)

DIRECT_MODE_HINT = (
    "Direct mode: calls to the YouTube API are made without the proxy and "
    "are expected to fail. Start the proxy with `python main.py serve`, or set "
    "PLAYLIST_DEPLOYMENT=remote and PLAYLIST_REMOTE_PROXY_URL."
)


class PlaylistLoader:
    def __init__(self, transport: Transport, mode: ConnectionMode, batch_size: int = MAX_BATCH_SIZE):
        self._transport = transport
        self._mode = mode
        self._aggregator = PaginationAggregator(transport)
        self._enricher = BatchEnricher(transport, batch_size=batch_size)

    def load(self, url: str) -> Playlist:
        playlist_id = extract_playlist_id(url)
        if not playlist_id:
            raise InvalidIdentifier(
                "Invalid YouTube playlist URL. Please enter a valid playlist URL."
            )

        log.info(f"Loading playlist {playlist_id} via {self._transport.name()}")
        title = self._fetch_title(playlist_id)

        try:
            raw_items = self._aggregator.aggregate(playlist_id)
        except UpstreamError as e:
            if self._mode == ConnectionMode.DIRECT_UNSUPPORTED:
                raise UpstreamError(f"{e}\n{DIRECT_MODE_HINT}", status_code=e.status_code) from e
            raise

        items = self._enricher.enrich(raw_items)
        return Playlist(
            playlist_id=playlist_id,
            title=title,
            items=items,
            degraded_batches=list(self._enricher.degraded_batches),
        )

    def _fetch_title(self, playlist_id: str) -> str:
        placeholder = f"Playlist {playlist_id}"
        try:
            data = self._transport.get_playlist_info(playlist_id)
        except UpstreamError as e:
            log.info(f"Could not fetch playlist title: {e}")
            return placeholder

        entries = data.get("items")
        if isinstance(entries, list) and entries:
            snippet = entries[0].get("snippet") if isinstance(entries[0], dict) else None
            if isinstance(snippet, dict) and snippet.get("title"):
                return snippet["title"]
        return placeholder
