"""
Batch enrichment. Joins playlist entries (keyed by entry id) with video
statistics (keyed by video id), one videos lookup per chunk of <=50 keys.

A failed chunk never fails the whole run: its items keep their primary
fields, get the sentinel for every secondary field, and the next chunk
is fetched as usual.
"""

import logging

from models import EnrichedItem, RawItem, SecondaryAttributes
from youtube.errors import UpstreamError
from youtube.transport import Transport

log = logging.getLogger(__name__)

# Hard cap on ids per videos.list call.
MAX_BATCH_SIZE = 50


class BatchEnricher:
    def __init__(self, transport: Transport, batch_size: int = MAX_BATCH_SIZE):
        self._transport = transport
        self._batch_size = max(1, min(batch_size, MAX_BATCH_SIZE))
        self.degraded_batches: list[int] = []

    def enrich(self, items: list[RawItem]) -> list[EnrichedItem]:
        """
        Same length and order as `items`. Positions are 1..len(items).

        Batch indices that fell back to sentinels are left in
        `self.degraded_batches` after the call.
        """
        self.degraded_batches = []
        enriched: list[EnrichedItem] = []

        for batch_index, start in enumerate(range(0, len(items), self._batch_size)):
            chunk = items[start:start + self._batch_size]
            attributes = self._fetch_attributes(chunk, batch_index)

            for offset, item in enumerate(chunk):
                enriched.append(EnrichedItem.join(
                    item,
                    attributes.get(item.video_id),
                    position=start + offset + 1,
                ))

        if self.degraded_batches:
            log.warning(
                f"{len(self.degraded_batches)} of {self._batch_count(len(items))} batches "
                f"degraded to N/A: {self.degraded_batches}"
            )
        return enriched

    def _fetch_attributes(self, chunk: list[RawItem], batch_index: int) -> dict[str, SecondaryAttributes]:
        """One lookup for the chunk. Empty dict if the call or its body is bad."""
        video_ids = [item.video_id for item in chunk]
        try:
            data = self._transport.get_videos(video_ids)
            return self._parse_videos(data)
        except UpstreamError as e:
            log.warning(f"Batch {batch_index} ({len(chunk)} videos) failed: {e}")
            self.degraded_batches.append(batch_index)
            return {}

    @staticmethod
    def _parse_videos(data: dict) -> dict[str, SecondaryAttributes]:
        videos = data.get("items", [])
        if not isinstance(videos, list):
            raise UpstreamError("Malformed videos response: 'items' is not a list")

        by_id = {}
        for video in videos:
            try:
                attrs = SecondaryAttributes.from_api(video)
            except (KeyError, TypeError, AttributeError) as e:
                raise UpstreamError(f"Malformed video entry: {e!r}") from e
            by_id[attrs.video_id] = attrs
        return by_id

    def _batch_count(self, n: int) -> int:
        return (n + self._batch_size - 1) // self._batch_size
