"""
Cursor pagination over playlistItems.

The whole playlist is materialized before anything downstream runs.
Any failed page abandons the aggregation; nothing partial is returned.
"""

import logging

from models import RawItem
from youtube.errors import EmptyCollectionError, UpstreamError
from youtube.transport import Transport

log = logging.getLogger(__name__)


class PaginationAggregator:
    def __init__(self, transport: Transport):
        self._transport = transport

    def aggregate(self, playlist_id: str) -> list[RawItem]:
        """
        Fetch every page for `playlist_id`, in delivery order.

        Raises:
            UpstreamError: a page failed or had a malformed body.
            EmptyCollectionError: pagination finished with zero items.
        """
        items: list[RawItem] = []
        page_token = ""
        pages = 0

        while True:
            data = self._transport.list_items(playlist_id, page_token)
            pages += 1

            page_items = self._parse_page(data, pages)
            items.extend(page_items)
            log.debug(f"Page {pages}: {len(page_items)} items (total {len(items)})")

            page_token = data.get("nextPageToken")
            if not page_token:
                break

        if not items:
            raise EmptyCollectionError("No videos found in playlist. It might be private or empty.")

        log.info(f"Aggregated {len(items)} items from {pages} page(s) of playlist {playlist_id}")
        return items

    @staticmethod
    def _parse_page(data: dict, page_number: int) -> list[RawItem]:
        entries = data.get("items", [])
        if not isinstance(entries, list):
            raise UpstreamError(f"Malformed page {page_number}: 'items' is not a list")

        parsed = []
        for i, entry in enumerate(entries):
            try:
                parsed.append(RawItem.from_api(entry))
            except (KeyError, TypeError, AttributeError) as e:
                raise UpstreamError(f"Malformed entry {i} on page {page_number}: {e!r}") from e
        return parsed
