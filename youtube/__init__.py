from youtube.aggregator import PaginationAggregator
from youtube.enricher import BatchEnricher
from youtube.errors import EmptyCollectionError, InvalidIdentifier, PlaylistError, UpstreamError
from youtube.identifier import extract_playlist_id
from youtube.loader import PlaylistLoader
from youtube.probe import ConnectionProbe
from youtube.transport import DirectTransport, ProxyTransport, Transport, create_transport

__all__ = [
    "PaginationAggregator",
    "BatchEnricher",
    "PlaylistError",
    "InvalidIdentifier",
    "EmptyCollectionError",
    "UpstreamError",
    "extract_playlist_id",
    "PlaylistLoader",
    "ConnectionProbe",
    "Transport",
    "ProxyTransport",
    "DirectTransport",
    "create_transport",
]
